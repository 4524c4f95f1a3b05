"""
Unit Tests for the risk analyst assistant
"""

import pytest
import requests

import assistant.service as assistant_service
from assistant.service import FALLBACK_ANSWER, ask, build_prompt


class FakeResponse:
    def __init__(self, payload, status_code=200):
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return self.payload


def gemini_payload(text):
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


@pytest.fixture
def api_key(monkeypatch):
    monkeypatch.setattr(assistant_service.settings, "GEMINI_API_KEY", "test-key")


@pytest.fixture
def captured(monkeypatch, api_key):
    calls = []

    def fake_post(url, json=None, headers=None, timeout=None):
        calls.append({"url": url, "json": json, "headers": headers})
        return FakeResponse(gemini_payload("Risk 1% per trade."))

    monkeypatch.setattr(assistant_service.requests, "post", fake_post)
    return calls


class TestPrompt:

    def test_prompt_carries_formula_and_question(self):
        prompt = build_prompt("How big for SOL?")

        assert "Lots = Risk / Distance" in prompt
        assert "Lot Size Calculator" in prompt
        assert prompt.endswith("User question: How big for SOL?")


class TestAsk:

    def test_returns_model_text(self, captured):
        assert ask("What lot size for BTC?") == "Risk 1% per trade."

        call = captured[0]
        assert call["url"].endswith("gemini-2.5-flash:generateContent")
        assert call["headers"] == {"x-goog-api-key": "test-key"}
        assert "What lot size for BTC?" in call["json"]["contents"][0]["parts"][0]["text"]

    def test_blank_question(self, captured):
        with pytest.raises(ValueError):
            ask("   ")
        assert captured == []

    def test_missing_api_key(self, monkeypatch):
        monkeypatch.setattr(assistant_service.settings, "GEMINI_API_KEY", None)
        with pytest.raises(RuntimeError, match="GEMINI_API_KEY"):
            ask("hello")

    def test_connection_error_falls_back(self, monkeypatch, api_key):
        def broken(*args, **kwargs):
            raise requests.ConnectionError("offline")

        monkeypatch.setattr(assistant_service.requests, "post", broken)
        assert ask("hello") == FALLBACK_ANSWER

    def test_http_error_falls_back(self, monkeypatch, api_key):
        monkeypatch.setattr(
            assistant_service.requests, "post",
            lambda *a, **k: FakeResponse({}, status_code=500),
        )
        assert ask("hello") == FALLBACK_ANSWER

    def test_malformed_payload_falls_back(self, monkeypatch, api_key):
        monkeypatch.setattr(
            assistant_service.requests, "post",
            lambda *a, **k: FakeResponse({"candidates": []}),
        )
        assert ask("hello") == FALLBACK_ANSWER
