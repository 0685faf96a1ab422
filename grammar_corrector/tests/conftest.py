import json

import httpx
import pytest

from grammar_corrector.settings import CorrectorOptions

KEY_VARS = (
    "OPENAI_API_KEY", "OPENAI_MODEL", "GOOGLE_API_KEY", "GEMINI_API_KEY", "GEMINI_MODEL",
    "DEFAULT_PROVIDER", "SYSTEM_PROMPT", "OPENAI_BASE_URL", "GEMINI_BASE_URL", "CORRECTOR_TIMEOUT_S",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    # setenv first so teardown also drops values a test loads from a .env file
    for k in KEY_VARS:
        monkeypatch.setenv(k, "")
        monkeypatch.delenv(k)


def openai_body(content):
    return {"model": "gpt-4o-mini", "choices": [{"message": {"role": "assistant", "content": content}}]}


def gemini_body(text, finish="STOP"):
    cand = {"content": {"parts": [{"text": text}]}}
    if finish is not None:
        cand["finishReason"] = finish
    return {"candidates": [cand]}


class Recorder:
    """MockTransport handler that replays one canned response and keeps the requests."""

    def __init__(self, status=200, body=None, exc=None):
        self.status = status
        self.body = body
        self.exc = exc
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        return httpx.Response(self.status, json=self.body)

    @property
    def transport(self):
        return httpx.MockTransport(self)

    def sent_json(self, i=0):
        return json.loads(self.requests[i].content)


@pytest.fixture
def options():
    return CorrectorOptions(openai_apikey="sk-test", gemini_apikey="g-test")
