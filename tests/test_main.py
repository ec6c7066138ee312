import asyncio
import logging

import pytest
from fastapi import WebSocketDisconnect
from fastapi.testclient import TestClient

import main
from engine import PredictionEngine


@pytest.fixture
def client(sample_model, monkeypatch):
    monkeypatch.setattr(main, "engine", PredictionEngine(sample_model))
    return TestClient(main.app)


def test_health(client, monkeypatch):
    assert client.get("/health").json() == {"ready": True}
    monkeypatch.setattr(main, "engine", PredictionEngine())
    assert client.get("/health").json() == {"ready": False}


def test_suggestions_endpoint(client):
    response = client.get("/suggestions", params={"text": "Ez diçim "})
    assert response.status_code == 200
    assert response.json() == {"suggestions": ["bazarê", "malê", "dibistanê"]}


def test_correct_endpoint(client):
    assert client.get("/correct", params={"word": "Pirtuk"}).json() == {
        "word": "Pirtuk",
        "correction": "Pirtûk",
    }
    assert client.get("/correct", params={"word": "diçim"}).json()["correction"] is None


def test_ws_suggest(client):
    with client.websocket_connect("/ws") as ws:
        ws.send_json({"type": "suggest", "text": "Ez diçim bazarê", "cursor": 9, "seq": 1})
        assert ws.receive_json() == {
            "type": "suggestions",
            "seq": 1,
            "suggestions": ["bazarê", "malê", "dibistanê"],
        }
        ws.send_json({"type": "suggest", "text": "Ez diçim b", "seq": 2})
        assert ws.receive_json()["suggestions"] == ["bazarê"]


def test_ws_plain_text(client):
    with client.websocket_connect("/ws") as ws:
        ws.send_text("Ez diçim ")
        reply = ws.receive_json()
        assert reply["type"] == "suggestions"
        assert reply["suggestions"] == ["bazarê", "malê", "dibistanê"]


def test_ws_autocorrect(client):
    with client.websocket_connect("/ws") as ws:
        ws.send_json({"type": "autocorrect", "text": "Min pirtuk", "cursor": 10, "seq": 3})
        assert ws.receive_json() == {
            "type": "correction",
            "seq": 3,
            "word": "pirtuk",
            "correction": "pirtûk",
        }
        ws.send_json({"type": "autocorrect", "text": "Ez diçim", "seq": 4})
        assert ws.receive_json() == {
            "type": "correction",
            "seq": 4,
            "word": None,
            "correction": None,
        }


def test_sequencer_drops_stale_queries():
    sequencer = main._Sequencer()
    sequencer.observe(3)
    assert sequencer.is_current(3)
    sequencer.observe(5)
    assert not sequencer.is_current(3)
    # out-of-order arrival never moves the counter back
    sequencer.observe(4)
    assert sequencer.is_current(5)


def test_left_of_cursor():
    assert main._left_of_cursor({"text": "Ez diçim bazarê", "cursor": 8}) == "Ez diçim"
    assert main._left_of_cursor({"text": "Ez"}) == "Ez"
    assert main._left_of_cursor({"text": "Ez", "cursor": "x"}) == "Ez"


@pytest.mark.parametrize(
    "payload, expected",
    [
        ({"text": None}, ""),
        ({"text": None, "cursor": 0}, ""),
        ({"text": "Ez diçim", "cursor": True}, "Ez diçim"),
        ({"text": "Ez diçim", "cursor": -1}, "Ez diçim"),
        ({"text": "Ez diçim", "cursor": 99}, "Ez diçim"),
        ({"text": "Ez diçim", "cursor": 0}, ""),
    ],
)
def test_left_of_cursor_rejects_bad_values(payload, expected):
    assert main._left_of_cursor(payload) == expected


class _ClosedWebSocket:
    def __init__(self, error):
        self.error = error

    async def send_json(self, message):
        raise self.error


@pytest.mark.parametrize("error", [RuntimeError("closed"), WebSocketDisconnect(1000)])
def test_send_to_closed_socket_is_dropped(error):
    assert asyncio.run(main._send(_ClosedWebSocket(error), {"type": "correction"})) is False


def test_configure_logging_enables_info():
    root = logging.getLogger()
    previous = root.level
    try:
        main.configure_logging()
        assert logging.getLogger("engine").isEnabledFor(logging.INFO)
    finally:
        root.setLevel(previous)
