import pytest

from pvp_arena.app import create_app
from pvp_arena.profiles import InMemoryProfileStore


@pytest.fixture
def server():
    profiles = InMemoryProfileStore()
    profiles.add_player("alice", "Alice", 120)
    profiles.add_player("bob", "Bob", 80)
    app, socketio = create_app({"TESTING": True, "ASYNC_TROPHIES": False}, profiles=profiles, seed_source=lambda: 3)
    return app, socketio, profiles


def received(client, name):
    return [msg["args"] for msg in client.get_received() if msg["name"] == name]


def by_name(messages):
    out = {}
    for msg in messages:
        out.setdefault(msg["name"], []).append(msg["args"][0] if msg["args"] else None)
    return out


def test_full_battle_over_socketio(server):
    app, socketio, profiles = server
    alice = socketio.test_client(app)
    bob = socketio.test_client(app)

    alice.emit("join-queue", {"playerId": "alice", "username": "Alice", "trophies": 120})
    bob.emit("join-queue", {"playerId": "bob"})

    a_msgs = by_name(alice.get_received())
    b_msgs = by_name(bob.get_received())
    assert a_msgs["queued"] == [{"position": 1}]
    assert b_msgs["queued"] == [{"position": 2}]
    match_id = a_msgs["match-found"][0]["matchId"]
    assert b_msgs["match-found"][0]["opponent"] == {"id": "alice", "username": "Alice", "trophies": 120}

    for _ in range(20):
        alice.emit("submit-action", {"matchId": match_id, "action": "attack"})
        bob.emit("submit-action", {"matchId": match_id, "action": "defend"})
        a_msgs = by_name(alice.get_received())
        bob.get_received()
        assert len(a_msgs["turn-result"]) == 1
        if "battle-end" in a_msgs:
            break

    assert a_msgs["battle-end"] == [{"winner": "alice", "won": True, "trophyChange": 20}]
    assert profiles.get_player_summary("alice").trophies == 140
    assert profiles.get_player_summary("bob").trophies == 70

    with app.test_client() as http:
        assert http.get("/pvp/status").get_json() == {"queued": 0, "activeMatches": 0}
        history = http.get("/pvp/players/bob/matches").get_json()
        assert history[0]["matchId"] == match_id
        assert history[0]["opponent"] == "Alice"
        assert history[0]["won"] is False
        assert history[0]["trophyChange"] == -10


def test_disconnect_mid_battle_over_socketio(server):
    app, socketio, profiles = server
    alice = socketio.test_client(app)
    bob = socketio.test_client(app)
    alice.emit("join-queue", {"playerId": "alice"})
    bob.emit("join-queue", {"playerId": "bob"})
    alice.get_received()
    bob.get_received()

    alice.emit("submit-action", "attack")
    assert len(received(bob, "opponent-ready")) == 1

    alice.disconnect()
    msgs = bob.get_received()
    assert [m["name"] for m in msgs] == ["opponent-disconnect"]
    assert profiles.get_player_summary("bob").trophies == 80

    with app.test_client() as http:
        assert http.get("/pvp/status").get_json() == {"queued": 0, "activeMatches": 0}


def test_leave_queue_over_socketio(server):
    app, socketio, _ = server
    alice = socketio.test_client(app)
    alice.emit("join-queue", {"playerId": "alice"})
    alice.emit("leave-queue")
    with app.test_client() as http:
        assert http.get("/pvp/status").get_json()["queued"] == 0
