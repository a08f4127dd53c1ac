import asyncio
import json

from websockets.exceptions import ConnectionClosedOK

from splode import server as server_module
from splode.server import GameServer, parse_players
from splode.session import GameSession


class FakeConnection:
    remote_address = ("127.0.0.1", 0)

    def __init__(self):
        self.sent = []

    async def send(self, message):
        self.sent.append(json.loads(message))


class ClosedConnection(FakeConnection):
    async def send(self, message):
        raise ConnectionClosedOK(None, None)


def _server(players):
    server = GameServer(GameSession.new("square", players, 2))
    client = FakeConnection()
    server.connections.add(client)
    return server, client


def _send(server, client, message):
    payload = message if isinstance(message, str) else json.dumps(message)
    asyncio.run(server.handle_message(client, payload))
    return client.sent[-1]


def test_default_players():
    players = parse_players(None)
    assert [p.name for p in players] == ["Red", "Blue"]
    assert parse_players([{"name": "Ann"}])[0].color == "#000000"


def test_place_broadcasts_result_and_state(players):
    server, client = _server(players)
    state = _send(server, client, {"type": "place", "node": 0})

    assert client.sent[0]["type"] == "move_result"
    assert client.sent[0]["status"] == "applied"
    assert client.sent[0]["step_delay"] > 0
    assert state["type"] == "game_state"
    assert state["current_player"]["name"] == "Bob"


def test_invalid_place_only_answers_sender(players):
    server, client = _server(players)
    _send(server, client, {"type": "place", "node": 0})
    client.sent.clear()

    reply = _send(server, client, {"type": "place", "node": 0})
    assert len(client.sent) == 1
    assert reply["status"] == "invalid"


def test_click_and_undo(players):
    server, client = _server(players)
    _send(server, client, {"type": "click", "x": 0, "y": 0})
    assert server.session.graph.nodes[0].count == 1

    state = _send(server, client, {"type": "undo"})
    assert state["history_depth"] == 0

    reply = _send(server, client, {"type": "undo"})
    assert reply == {"type": "error", "message": "Nothing to undo"}


def test_new_game(players):
    server, client = _server(players)
    state = _send(server, client, {
        "type": "new_game",
        "topology": "wheel",
        "size": 5,
        "players": [{"name": "Ann", "color": "red"}, {"name": "Ben", "color": "blue"}],
    })
    assert len(state["nodes"]) == 6
    assert state["current_player"] == {"name": "Ann", "color": "red"}


def test_bad_messages(players):
    server, client = _server(players)
    assert _send(server, client, "not json")["message"] == "Invalid JSON format"
    assert _send(server, client, {"type": "dance"})["type"] == "error"
    assert _send(server, client, {"type": "place", "node": "x"})["type"] == "error"
    assert _send(server, client, {"type": "new_game", "topology": "torus"})["type"] == "error"
    assert _send(server, client, {"type": "get_state"})["type"] == "game_state"


def test_broadcast_drops_closed_connections(players):
    server, client = _server(players)
    gone = ClosedConnection()
    server.connections.add(gone)

    _send(server, client, {"type": "place", "node": 0})

    assert gone not in server.connections
    assert client in server.connections
    assert client.sent[-1]["type"] == "game_state"


def test_main_runs_server(monkeypatch):
    calls = []

    async def fake_run_server():
        calls.append("run")

    monkeypatch.setattr(server_module, "run_server", fake_run_server)
    server_module.main()
    assert calls == ["run"]
