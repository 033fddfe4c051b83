"""Tests for main.py — POST /api/chat end to end with faked collaborators."""
import pytest
from fastapi.testclient import TestClient

from conftest import RecordingTransport, fake_openai_client, ok_json, text_chunk, tool_call_chunk
from seattle_guide.main import app, get_http_transport, get_llm_client, get_settings


@pytest.fixture
def wire(settings):
    """Install overrides; returns a function that sets up one request's fakes."""
    def _wire(*rounds, handler=None, s=None):
        transport = RecordingTransport(handler or ok_json())
        client = fake_openai_client(*rounds)
        app.dependency_overrides[get_settings] = lambda: s or settings
        app.dependency_overrides[get_llm_client] = lambda: client
        app.dependency_overrides[get_http_transport] = lambda: transport
        return transport, client

    yield _wire
    app.dependency_overrides.clear()


class TestHealth:
    def test_health(self):
        with TestClient(app) as c:
            assert c.get("/health").json() == {"ok": True}


class TestChatEndpoint:
    def test_streams_plain_text(self, wire):
        wire([text_chunk("Seattle "), text_chunk("is great.")])
        with TestClient(app) as c:
            resp = c.post("/api/chat", json={"messages": [{"role": "user", "content": "hi"}]})
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/plain")
        assert resp.text == "Seattle is great."

    def test_unrelated_message_makes_no_outbound_calls(self, wire):
        transport, _ = wire([text_chunk("Sorry, I can only help with planning activities in Seattle.")])
        with TestClient(app) as c:
            resp = c.post("/api/chat", json={"messages": [
                {"role": "user", "content": "Write me a haiku about the ocean"},
            ]})
        assert resp.status_code == 200
        assert transport.requests == []
        assert "Chunk from source" not in resp.text

    def test_tool_call_end_to_end(self, wire):
        transport, client = wire(
            [tool_call_chunk(0, call_id="c1", name="searchForPlaces", arguments='{"query": "brunch"}')],
            [text_chunk("Try Portage Bay Cafe.")],
            handler=ok_json({"results": [{"name": "Portage Bay Cafe"}]}),
        )
        with TestClient(app) as c:
            resp = c.post("/api/chat", json={"messages": [{"role": "user", "content": "brunch downtown?"}]})
        assert resp.text == "Try Portage Bay Cafe."
        params = transport.requests[0].url.params
        assert params["location"] == "47.6062,-122.3321"
        assert params["radius"] == "1000"

    def test_missing_credential_is_500(self, wire, settings):
        wire([text_chunk("unused")], s=settings.model_copy(update={"google_maps_api_key": ""}))
        with TestClient(app) as c:
            resp = c.post("/api/chat", json={"messages": [{"role": "user", "content": "hi"}]})
        assert resp.status_code == 500
        assert "GOOGLE_MAPS_API_KEY" in resp.json()["detail"]

    def test_empty_messages_rejected(self, wire):
        wire()
        with TestClient(app) as c:
            resp = c.post("/api/chat", json={"messages": []})
        assert resp.status_code == 422

    def test_bad_role_rejected(self, wire):
        wire()
        with TestClient(app) as c:
            resp = c.post("/api/chat", json={"messages": [{"role": "robot", "content": "x"}]})
        assert resp.status_code == 422
