import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

os.environ.setdefault("RHACK_SUPPRESS_ROUTE_MAP", "1")

from rhack import create_app  # noqa: E402
from rhack.dungeon import GenerationContext, LevelConfig  # noqa: E402
from rhack.routes.level_api import clear_level_cache  # noqa: E402


@pytest.fixture(scope="session")
def test_app():
    app = create_app()
    app.config.update({"TESTING": True})
    return app


@pytest.fixture()
def client(test_app):
    clear_level_cache()
    yield test_app.test_client()
    clear_level_cache()


@pytest.fixture(autouse=True)
def _isolate_generation_env(monkeypatch):
    # Generation reads these; a developer's shell must not leak into tests
    for key in ("DUNGEON_SEED", "DUNGEON_ENABLE_GENERATION_METRICS", "DUNGEON_MAKE_VAULT"):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture()
def make_ctx():
    """Build a fresh generation context; keyword args go to LevelConfig."""

    def _make(seed=7, **overrides):
        return GenerationContext(LevelConfig(**overrides), seed=seed)

    return _make
