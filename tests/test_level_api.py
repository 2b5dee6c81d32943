import pytest

from rhack.dungeon import LevelConfig
from rhack.routes.level_api import _coerce_seed, get_cached_level


def test_level_endpoint_payload(client):
    r = client.get('/api/level?seed=42')
    assert r.status_code == 200
    data = r.get_json()
    assert set(data) == {'seed', 'width', 'height', 'rows', 'rooms', 'doors', 'stairs', 'vault'}
    assert data['seed'] == 42
    assert (data['width'], data['height']) == (80, 21)
    assert len(data['rows']) == 21
    assert 1 <= len(data['rooms']) <= 40
    assert 'down' in data['stairs']
    x, y = data['stairs']['down']
    assert data['rows'][y][x] == '>'


def test_level_endpoint_is_deterministic(client):
    first = client.get('/api/level?seed=1234').get_json()
    second = client.get('/api/level?seed=1234').get_json()
    assert first == second


def test_string_seed_is_hashed(client):
    data = client.get('/api/level?seed=hello').get_json()
    assert data['seed'] == _coerce_seed('hello')
    assert isinstance(data['seed'], int)


def test_missing_seed_picks_one(client):
    data = client.get('/api/level').get_json()
    assert isinstance(data['seed'], int)


def test_metrics_endpoint(client):
    r = client.get('/api/level/metrics?seed=42')
    assert r.status_code == 200
    data = r.get_json()
    assert data['seed'] == 42
    for key in ('rooms', 'room_attempts', 'corridors_dug', 'doors_created', 'components', 'runtime_ms', 'phase_ms'):
        assert key in data['metrics']


def test_cache_returns_same_level(test_app, client):
    with test_app.app_context():
        assert get_cached_level(77) is get_cached_level(77)


def test_cache_can_be_disabled(test_app, client, monkeypatch):
    monkeypatch.setitem(test_app.config, 'DUNGEON_DISABLE_CACHE', True)
    with test_app.app_context():
        assert get_cached_level(77) is not get_cached_level(77)


def test_cache_honours_vault_override(test_app, client, monkeypatch):
    seed = next(
        (s for s in range(1, 80) if client.get(f'/api/level?seed={s}').get_json()['vault'] is not None),
        None,
    )
    assert seed is not None
    monkeypatch.setenv('DUNGEON_MAKE_VAULT', '0')
    assert client.get(f'/api/level?seed={seed}').get_json()['vault'] is None
    monkeypatch.delenv('DUNGEON_MAKE_VAULT')
    assert client.get(f'/api/level?seed={seed}').get_json()['vault'] is not None


def test_cache_keys_on_config_and_metrics_flag(test_app, client, monkeypatch):
    with test_app.app_context():
        default = get_cached_level(77)
        assert get_cached_level(77, LevelConfig()) is default
        small = get_cached_level(77, LevelConfig(max_rooms=3))
        assert small is not default
        assert len(small.rooms) <= 3
        monkeypatch.setenv('DUNGEON_ENABLE_GENERATION_METRICS', '0')
        quiet = get_cached_level(77)
        assert quiet is not default
        assert quiet.metrics == {}
        assert quiet.render() == default.render()


@pytest.mark.parametrize(
    "raw, expected",
    [
        (42, 42),
        ("42", 42),
        ("  7 ", 7),
        (0, 0),
    ],
)
def test_coerce_seed_numeric(raw, expected):
    assert _coerce_seed(raw) == expected


def test_coerce_seed_string_is_stable():
    assert _coerce_seed("dungeon") == _coerce_seed("dungeon")
    assert _coerce_seed("dungeon") != _coerce_seed("Dungeon")
    assert 0 <= _coerce_seed("dungeon") < 2**63
