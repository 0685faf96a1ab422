import types

from fastapi.testclient import TestClient

from grammar_corrector.app import app
from grammar_corrector.providers.gemini import GeminiProvider


def test_health_and_actions():
    c = TestClient(app)
    assert c.get("/health").json() == {"status": "ok"}
    body = c.get("/actions").json()
    assert "Fix Grammar" in body["actions"]
    assert body["default"] == "Fix Grammar"


def test_version_reports_enabled_providers(monkeypatch):
    monkeypatch.setenv("GOOGLE_API_KEY", "g")
    v = TestClient(app).get("/version").json()
    assert v["gemini_enabled"] is True
    assert v["openai_enabled"] is False


def test_correct_with_fallback_and_copy(monkeypatch):
    monkeypatch.setenv("GOOGLE_API_KEY", "g")

    async def fake_chat(self, req):
        return types.SimpleNamespace(ok=True, content="Fixed.", latency_ms=1, provider_meta={}, error=None)

    monkeypatch.setattr(GeminiProvider, "chat", fake_chat, raising=True)
    r = TestClient(app).post("/correct", json={"text": "fixd", "copy": True})
    assert r.status_code == 200
    body = r.json()
    assert body["delivered"] is True
    assert body["provider"] == "Gemini"
    assert body["clipboard"] == "Fixed."
    assert body["notices"] == ["OpenAI API key not found, using Gemini instead", "Response copied to clipboard"]


def test_correct_without_keys():
    r = TestClient(app).post("/correct", json={"text": "hello"})
    body = r.json()
    assert body["delivered"] is False
    assert body["notices"] == ["Please configure either OpenAI or Gemini API key"]


def test_correct_with_invalid_options():
    r = TestClient(app).post("/correct", json={"text": "hi", "options": {"timeout_s": "abc"}})
    assert r.status_code == 200
    body = r.json()
    assert body["delivered"] is False
    assert body["notices"] == ["Invalid configuration: timeout_s"]


def test_version_with_invalid_environment(monkeypatch):
    monkeypatch.setenv("CORRECTOR_TIMEOUT_S", "abc")
    r = TestClient(app).get("/version")
    assert r.status_code == 422
    assert r.json()["detail"] == "Invalid configuration: timeout_s"
