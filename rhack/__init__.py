"""
project: rhack levels
module: __init__.py
License: MIT

Flask application setup for the level service.

The generation core lives in ``rhack.dungeon`` and has no Flask dependency;
this module only wires the JSON API around it. Configuration is sourced from
environment variables (optionally via a ``.env`` file) with development
defaults. A local ``instance/`` directory holds runtime files such as logs.
"""

import logging
import os
import uuid

from dotenv import load_dotenv
from flask import Flask, jsonify

from rhack.logging_utils import get_logger

# Load .env if present so cache and logging knobs can be supplied without
# exporting shell variables during development.
load_dotenv()

app = Flask(__name__, instance_relative_config=True)

try:
    os.makedirs(app.instance_path, exist_ok=True)
except OSError:
    # Read-only checkouts; logging falls back to the console only
    pass

app.config.update(
    LEVEL_CACHE_MAX=int(os.getenv("LEVEL_CACHE_MAX", "8")),
    DUNGEON_DISABLE_CACHE=os.getenv("DUNGEON_DISABLE_CACHE") in ("1", "true", "yes"),
)

from rhack.routes.level_api import bp_level  # noqa: E402

app.register_blueprint(bp_level)

# Route map debug output (development aid). Suppress with RHACK_SUPPRESS_ROUTE_MAP=1
# or app.config['SUPPRESS_ROUTE_MAP']=True.
if not (os.getenv("RHACK_SUPPRESS_ROUTE_MAP") in ("1", "true", "yes") or app.config.get("SUPPRESS_ROUTE_MAP")):
    logging.getLogger(__name__).debug("Registered routes:\n%s", app.url_map)


def create_app():
    """Return the Flask app instance."""
    return app


@app.errorhandler(500)
def internal_error(e):
    error_id = uuid.uuid4().hex[:8]
    get_logger("rhack.api").exception(event="unhandled_exception", error_id=error_id)
    return jsonify({"error": "internal server error", "error_id": error_id}), 500
