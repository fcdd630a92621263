# pvp_arena/__init__.py
from typing import Optional

from .routes import pvp_bp
from .sockets import register_pvp_socket_handlers
from .publisher import ResultPublisher
from .state import SessionRegistry, new_seed
from .profiles import ProfileStore


def init_pvp(app, socketio, profiles: Optional[ProfileStore] = None, seed_source=None):
    publisher = ResultPublisher(socketio, profiles, run_async=app.config.get("ASYNC_TROPHIES", True))
    registry = SessionRegistry(publisher, profiles, seed_source=seed_source or new_seed)
    app.extensions["pvp"] = registry
    app.register_blueprint(pvp_bp)
    register_pvp_socket_handlers(socketio, registry)
    return registry
