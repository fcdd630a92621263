# pvp_arena/app.py
from typing import Any, Mapping, Optional

from flask import Flask
from flask_socketio import SocketIO

from . import init_pvp
from .profiles import InMemoryProfileStore

DEFAULT_CONFIG = {
    "SECRET_KEY": "dev",
    "SOCKETIO_ASYNC_MODE": "threading",
    "CORS_ALLOWED_ORIGINS": "*",
    "ASYNC_TROPHIES": True,
    "LOG_LEVEL": "INFO",
    "HOST": "0.0.0.0",
    "PORT": 3000,
}


def create_app(config: Optional[Mapping[str, Any]] = None, profiles=None, seed_source=None):
    app = Flask(__name__)
    app.config.from_mapping(DEFAULT_CONFIG)
    # PVP_PORT=8080 -> app.config["PORT"] == 8080
    app.config.from_prefixed_env("PVP")
    if config:
        app.config.update(config)

    socketio = SocketIO(
        app,
        async_mode=app.config["SOCKETIO_ASYNC_MODE"],
        cors_allowed_origins=app.config["CORS_ALLOWED_ORIGINS"],
    )
    if profiles is None:
        profiles = InMemoryProfileStore()
    init_pvp(app, socketio, profiles=profiles, seed_source=seed_source)
    return app, socketio
