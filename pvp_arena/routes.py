# pvp_arena/routes.py
from flask import Blueprint, current_app, jsonify, request

pvp_bp = Blueprint("pvp", __name__, url_prefix="/pvp")


def _registry():
    return current_app.extensions["pvp"]


@pvp_bp.route("/status")
def pvp_status():
    return jsonify(_registry().snapshot())


@pvp_bp.route("/players/<player_id>/matches")
def player_matches(player_id):
    profiles = _registry().profiles
    if profiles is None:
        return jsonify({"error": "Match history not available"}), 503
    limit = request.args.get("limit", default=10, type=int)
    history = profiles.match_history(player_id, limit=limit)
    return jsonify([
        {
            "matchId": record.match_id,
            "opponent": next((name for pid, name in record.usernames.items() if pid != player_id), None),
            "won": record.winner_id == player_id,
            "trophyChange": record.trophy_changes.get(player_id, 0),
            "turns": record.turns,
            "date": record.finished_at,
        }
        for record in history
    ])
