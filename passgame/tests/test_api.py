"""
Tests for API layer.

Tests:
- API service methods
- REST endpoints via the FastAPI test client
- WebSocket messages
- Error handling
"""

import asyncio

import pytest
from fastapi import WebSocketDisconnect
from fastapi.testclient import TestClient

from ..api import app as app_module
from ..api.app import create_app, run_glitch_timer
from ..api.models import CreateSessionRequest, UpdateTextRequest, ErrorResponse
from ..api.service import APIService
from ..engine_core.narration import MSG_SURPRISE
from ..engine_core.state import RuleCatalog
from ..games.password.rules import DELETE_PASSWORD
from ..session import GLITCH_MESSAGES, KONAMI_CODE, SessionManager


@pytest.fixture
def service(manager):
    return APIService(session_manager=manager)


@pytest.fixture
def basic_service(basic_manager):
    return APIService(session_manager=basic_manager)


@pytest.fixture
def terminal_service(play_context):
    return APIService(session_manager=SessionManager(
        context_provider=lambda: play_context,
        catalog=RuleCatalog.of([DELETE_PASSWORD]),
    ))


@pytest.fixture
def client(service, monkeypatch):
    monkeypatch.setattr(app_module, "GLITCH_CHANCE", 0.0)
    return TestClient(create_app(service))


def _new_session(client) -> str:
    response = client.post("/api/v1/sessions")
    assert response.status_code == 200
    return response.json()["session_id"]


class TestAPIService:
    """Tests for APIService."""

    def test_create_session(self, service):
        snapshot = service.create_session(CreateSessionRequest(seed=4))

        assert snapshot.session_id
        assert snapshot.status == "active"
        assert snapshot.view.total_count == 3

    def test_get_nonexistent_session(self, service):
        response = service.get_session("nonexistent-id")

        assert isinstance(response, ErrorResponse)
        assert response.error_code == "SESSION_NOT_FOUND"

    def test_update_text(self, service):
        snapshot = service.create_session(CreateSessionRequest())
        result = service.update_text(UpdateTextRequest(snapshot.session_id, "Password1!"))

        assert result.success
        assert result.view.satisfied_count == 5
        assert service.get_session(snapshot.session_id).view.text == "Password1!"

    def test_update_text_unknown_session(self, service):
        result = service.update_text(UpdateTextRequest("missing", "x"))
        assert result.error_code == "SESSION_NOT_FOUND"

    def test_end_session(self, service):
        snapshot = service.create_session(CreateSessionRequest())

        assert service.end_session(snapshot.session_id)
        assert service.get_loop(snapshot.session_id) is None
        assert not service.end_session(snapshot.session_id)

    def test_list_sessions(self, service):
        a = service.create_session(CreateSessionRequest())
        b = service.create_session(CreateSessionRequest())
        assert set(service.list_sessions()) == {a.session_id, b.session_id}

    def test_cleanup_drops_loops(self, service):
        snapshot = service.create_session(CreateSessionRequest())
        service.session_manager.get_session(snapshot.session_id).last_active -= 10_000

        assert service.cleanup_stale_sessions(60) == 1
        assert service.get_loop(snapshot.session_id) is None

    def test_surprise_then_disabled(self, basic_service):
        snapshot = basic_service.create_session(CreateSessionRequest(seed=2))
        basic_service.update_text(UpdateTextRequest(snapshot.session_id, "Abcdefgh"))

        first = basic_service.submit(snapshot.session_id)
        second = basic_service.submit(snapshot.session_id)

        assert first.success
        assert first.view.status_message == MSG_SURPRISE
        assert not second.success
        assert second.error_code == "SUBMIT_DISABLED"

    def test_list_rules(self, service):
        rules, surprises = service.list_rules()
        assert len(rules) == 26
        assert rules[-1].rule_id == "delete-password"
        assert {r.rule_id for r in surprises} == {
            "password-length-pi", "include-user-ip", "no-keyboard-letters",
        }


class TestRestEndpoints:
    """Tests for the HTTP surface."""

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_root(self, client):
        body = client.get("/").json()
        assert body["name"] == "Passgame API"
        assert body["docs"] == "/api/docs"

    def test_rules(self, client):
        body = client.get("/api/v1/rules").json()
        assert len(body["rules"]) == 26
        assert len(body["surprise_rules"]) == 3
        assert body["impossibility_levels"][0] == "Beginner"
        assert body["impossibility_levels"][-1] == "Cosmic Horror"

    def test_create_session(self, client):
        response = client.post("/api/v1/sessions", data={"seed": "42"})

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "active"
        assert body["view"]["text"] == ""
        assert body["view"]["status_message"].startswith("Start typing")
        assert [r["status"] for r in body["view"]["rules"]] == ["pending"] * 3

    def test_get_and_list(self, client):
        session_id = _new_session(client)

        assert client.get(f"/api/v1/sessions/{session_id}").status_code == 200
        listing = client.get("/api/v1/sessions").json()
        assert session_id in listing["sessions"]
        assert listing["count"] == 1

    def test_unknown_session(self, client):
        response = client.get("/api/v1/sessions/nope")

        assert response.status_code == 404
        assert response.json()["error_code"] == "SESSION_NOT_FOUND"

        response = client.post("/api/v1/sessions/nope/submit")
        assert response.status_code == 404

    def test_update_text(self, client):
        session_id = _new_session(client)

        response = client.put(f"/api/v1/sessions/{session_id}/text", json={"text": "Password1!"})

        assert response.status_code == 200
        view = response.json()["view"]
        assert view["satisfied_count"] == 5
        assert view["total_count"] == 8
        assert view["difficulty"] == "Normal"
        assert view["progress"] == pytest.approx(62.5)

    def test_update_text_requires_text(self, client):
        session_id = _new_session(client)
        response = client.put(f"/api/v1/sessions/{session_id}/text", json={})
        assert response.status_code == 422

    def test_submit_disabled(self, client):
        session_id = _new_session(client)

        response = client.post(f"/api/v1/sessions/{session_id}/submit")

        assert response.status_code == 409
        body = response.json()
        assert body["error_code"] == "SUBMIT_DISABLED"
        assert body["details"]["view"]["submit_enabled"] is False

    def test_submit_adds_surprise_rule(self, basic_service, monkeypatch):
        monkeypatch.setattr(app_module, "GLITCH_CHANCE", 0.0)
        client = TestClient(create_app(basic_service))
        session_id = _new_session(client)
        client.put(f"/api/v1/sessions/{session_id}/text", json={"text": "Abcdefgh"})

        response = client.post(f"/api/v1/sessions/{session_id}/submit")

        assert response.status_code == 200
        body = response.json()
        assert body["outcome"] == "surprise_rule"
        assert body["added_rule"]["level"] == 10
        assert body["view"]["catalog_size"] == 4
        assert body["view"]["status_message"] == MSG_SURPRISE

    def test_victory(self, terminal_service):
        client = TestClient(create_app(terminal_service))
        session_id = _new_session(client)

        response = client.post(f"/api/v1/sessions/{session_id}/submit")

        assert response.status_code == 200
        assert response.json()["outcome"] == "victory"
        assert client.get(f"/api/v1/sessions/{session_id}").json()["status"] == "won"

        response = client.put(f"/api/v1/sessions/{session_id}/text", json={"text": "more"})
        assert response.status_code == 409
        assert response.json()["error_code"] == "INVALID_ACTION"

    def test_restart(self, client):
        session_id = _new_session(client)
        client.put(f"/api/v1/sessions/{session_id}/text", json={"text": "x" * 60})

        response = client.post(f"/api/v1/sessions/{session_id}/restart")

        assert response.status_code == 200
        view = response.json()["view"]
        assert view["text"] == ""
        assert view["easter_egg"] is False

    def test_end_session(self, client):
        session_id = _new_session(client)

        response = client.delete(f"/api/v1/sessions/{session_id}")

        assert response.json() == {"success": True, "session_id": session_id}
        assert client.get(f"/api/v1/sessions/{session_id}").status_code == 404


class TestWebSocket:
    """Tests for the real-time channel."""

    def test_unknown_session_is_rejected(self, client):
        with pytest.raises(WebSocketDisconnect) as exc:
            with client.websocket_connect("/api/v1/sessions/nope/ws") as ws:
                ws.receive_json()
        assert exc.value.code == 4404

    def test_initial_state_and_ping(self, client):
        session_id = _new_session(client)

        with client.websocket_connect(f"/api/v1/sessions/{session_id}/ws") as ws:
            first = ws.receive_json()
            assert first["type"] == "state_update"
            assert first["payload"]["total_count"] == 3

            ws.send_json({"type": "ping"})
            assert ws.receive_json() == {"type": "pong"}

    def test_input(self, client):
        session_id = _new_session(client)

        with client.websocket_connect(f"/api/v1/sessions/{session_id}/ws") as ws:
            ws.receive_json()
            ws.send_json({"type": "input", "text": "Hello"})
            message = ws.receive_json()

        assert message["type"] == "state_update"
        assert message["payload"]["view"]["text"] == "Hello"

    def test_konami_flips(self, client):
        session_id = _new_session(client)

        with client.websocket_connect(f"/api/v1/sessions/{session_id}/ws") as ws:
            ws.receive_json()
            for code in KONAMI_CODE:
                ws.send_json({"type": "key", "code": code})
            message = ws.receive_json()

        assert message["type"] == "flip"
        assert message["payload"]["seconds"] == 3.0

    def test_bad_messages(self, client):
        session_id = _new_session(client)

        with client.websocket_connect(f"/api/v1/sessions/{session_id}/ws") as ws:
            ws.receive_json()
            ws.send_text("not json")
            assert ws.receive_json()["type"] == "error"
            ws.send_json({"type": "dance"})
            assert ws.receive_json()["type"] == "error"

    def test_json_that_is_not_an_object(self, client):
        session_id = _new_session(client)

        with client.websocket_connect(f"/api/v1/sessions/{session_id}/ws") as ws:
            ws.receive_json()
            for raw in ("[1, 2]", '"hi"', "3", "null"):
                ws.send_text(raw)
                assert ws.receive_json()["type"] == "error"
            # The connection survives
            ws.send_json({"type": "ping"})
            assert ws.receive_json() == {"type": "pong"}

    def test_input_text_must_be_a_string(self, client):
        session_id = _new_session(client)

        with client.websocket_connect(f"/api/v1/sessions/{session_id}/ws") as ws:
            ws.receive_json()
            for message in ({"type": "input", "text": None}, {"type": "input"}, {"type": "input", "text": 7}):
                ws.send_json(message)
                assert ws.receive_json()["type"] == "error"

        assert client.get(f"/api/v1/sessions/{session_id}").json()["view"]["text"] == ""

    def test_glitch_is_sent(self, client, monkeypatch):
        monkeypatch.setattr(app_module, "GLITCH_CHANCE", 1.0)
        monkeypatch.setattr(app_module, "GLITCH_INTERVAL_SECONDS", 0.01)
        session_id = _new_session(client)

        with client.websocket_connect(f"/api/v1/sessions/{session_id}/ws") as ws:
            ws.receive_json()
            message = ws.receive_json()

        assert message["type"] == "glitch"
        assert message["payload"]["message"] in GLITCH_MESSAGES


class TestGlitchTimer:
    """Tests for the glitch timer task."""

    def test_stops_when_client_is_gone(self):
        sent = []

        async def send(message):
            sent.append(message)
            raise RuntimeError("Cannot call send once a close message has been sent")

        # Returns instead of raising into an unwatched task
        asyncio.run(run_glitch_timer(send, lambda chance: "boo", 0, 1.0))
        assert len(sent) == 1
        assert sent[0]["type"] == "glitch"

    def test_misses_send_nothing(self):
        sent = []
        rolls = iter([None, None, "boo"])

        async def send(message):
            sent.append(message)
            raise OSError("gone")

        asyncio.run(run_glitch_timer(send, lambda chance: next(rolls), 0, 0.5))
        assert [m["payload"]["message"] for m in sent] == ["boo"]
