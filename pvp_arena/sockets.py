# pvp_arena/sockets.py
import logging

from flask import request

logger = logging.getLogger(__name__)


def register_pvp_socket_handlers(socketio, registry):
    @socketio.on("connect")
    def pvp_connect(auth=None):
        logger.debug("connection %s opened", request.sid)

    @socketio.on("join-queue")
    def pvp_join_queue(payload=None):
        registry.join_queue(request.sid, payload)

    @socketio.on("leave-queue")
    def pvp_leave_queue(payload=None):
        registry.leave_queue(request.sid)

    @socketio.on("submit-action")
    def pvp_submit_action(payload=None):
        registry.submit_action(request.sid, payload)

    @socketio.on("disconnect")
    def pvp_disconnect(reason=None):
        sid = request.sid
        logger.debug("connection %s closed", sid)
        registry.disconnect(sid)
