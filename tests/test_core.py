import json
from typing import Any, Dict, List, Optional

import pytest
import requests

from turtle_dojo import core
from turtle_dojo.core import AppConfig, build_hint_prompt, process_attempt, request_hint
from turtle_dojo.levels import get_level


class FakeStream:
    def __init__(self, chunks: List[bytes], error: Optional[Exception] = None) -> None:
        self.chunks = chunks
        self.error = error

    def raise_for_status(self) -> None:
        if self.error:
            raise self.error

    def iter_lines(self):
        return iter(self.chunks)


def _chunks(*parts: str) -> List[bytes]:
    return [json.dumps({"response": part}).encode() for part in parts] + [b""]


@pytest.fixture
def calls(monkeypatch) -> List[Dict[str, Any]]:
    recorded: List[Dict[str, Any]] = []

    def fake_post(url, json=None, stream=False, timeout=None):
        recorded.append({"url": url, "json": json, "stream": stream, "timeout": timeout})
        return FakeStream(_chunks("Check ", "your angle."))

    monkeypatch.setattr(core.requests, "post", fake_post)
    return recorded


class TestHintPrompt:
    def test_prompt_with_error(self) -> None:
        prompt = build_hint_prompt(get_level(3), "forward(x)", "Line 1: bad")
        assert get_level(3).description in prompt
        assert "forward(x)" in prompt
        assert "Line 1: bad" in prompt

    def test_prompt_without_error(self) -> None:
        prompt = build_hint_prompt(get_level(3), "forward(10)", None)
        assert "does not match the target shape" in prompt


class TestRequestHint:
    def test_streamed_reply_is_joined(self, calls) -> None:
        hint = request_hint(get_level(2), "forward(100)", None, model_name="tiny")
        assert hint == "Check your angle."
        assert calls[0]["url"] == AppConfig.LLM_API_URL
        assert calls[0]["json"]["model"] == "tiny"
        assert calls[0]["json"]["stream"] is True
        assert calls[0]["stream"] is True

    def test_connection_failure(self, monkeypatch) -> None:
        def fake_post(*args, **kwargs):
            raise requests.exceptions.ConnectionError("refused")

        monkeypatch.setattr(core.requests, "post", fake_post)
        assert request_hint(get_level(1), "", None) == AppConfig.OFFLINE_HINT

    def test_http_error(self, monkeypatch) -> None:
        monkeypatch.setattr(
            core.requests, "post",
            lambda *a, **k: FakeStream([], requests.exceptions.HTTPError("500 Server Error")),
        )
        assert request_hint(get_level(1), "", None) == AppConfig.OFFLINE_HINT

    def test_empty_reply(self, monkeypatch) -> None:
        monkeypatch.setattr(core.requests, "post", lambda *a, **k: FakeStream(_chunks("", "  ")))
        assert request_hint(get_level(1), "", None) == AppConfig.FALLBACK_HINT

    def test_garbled_reply(self, monkeypatch) -> None:
        monkeypatch.setattr(core.requests, "post", lambda *a, **k: FakeStream([b"not json"]))
        assert request_hint(get_level(1), "", None) == AppConfig.FALLBACK_HINT

    @pytest.mark.parametrize("chunk", [b'"just text"', b"[1, 2]", b'{"response": 5}'])
    def test_wrong_shape_reply(self, monkeypatch, chunk: bytes) -> None:
        monkeypatch.setattr(core.requests, "post", lambda *a, **k: FakeStream([chunk]))
        assert request_hint(get_level(1), "forward(1)", None) == AppConfig.FALLBACK_HINT


class TestProcessAttemptHints:
    def test_hint_on_failure(self, calls) -> None:
        response = process_attempt(3, "forward(100)", with_hint=True)
        assert response["status"] == "failure"
        assert response["hint"] == "Check your angle."
        assert len(calls) == 1

    def test_no_hint_on_success(self, calls) -> None:
        response = process_attempt(1, "forward(100)", with_hint=True)
        assert response["status"] == "success"
        assert "hint" not in response
        assert calls == []
