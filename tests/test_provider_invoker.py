"""
Tests for ProviderInvoker:
- unknown providers fail before any network call
- endpoint / header / payload wiring per provider
- HTTP errors carry the upstream body verbatim
- transport errors and malformed responses map to distinct failure kinds

All HTTP traffic goes through a fake session; nothing touches the network.
"""

import json
from typing import Any, Dict, List, Optional

import requests

from prautomator.core.ai.base import ChatMessage, Content, Failure, FailureKind, InvocationRequest
from prautomator.core.ai.invoker import DEFAULT_TIMEOUT, ProviderInvoker


MESSAGES = [
    ChatMessage(role="system", content="SYSTEM"),
    ChatMessage(role="user", content="USER"),
]


# ---------------------------------------------------------------------------
# Helpers / Fakes
# ---------------------------------------------------------------------------

class FakeResponse:
    """Just enough of requests.Response for the invoker."""

    def __init__(self, status_code: int = 200, json_data: Any = None, text: Optional[str] = None):
        self.status_code = status_code
        self._json_data = json_data
        if text is None:
            text = json.dumps(json_data) if json_data is not None else ""
        self.text = text
        self.reason = "Error" if status_code >= 400 else "OK"

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self) -> Any:
        if self._json_data is None:
            raise ValueError("Expecting value")
        return self._json_data


class FakeSession:
    """Records POST calls and returns a canned response or raises."""

    def __init__(self, response: Optional[FakeResponse] = None, error: Optional[Exception] = None):
        self.response = response
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    def post(self, url, json=None, headers=None, timeout=None):
        self.calls.append({"url": url, "json": json, "headers": headers, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response


def chat_response(content: str) -> FakeResponse:
    return FakeResponse(200, {"choices": [{"message": {"content": content}}]})


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------

def test_unknown_provider_fails_without_network_call():
    session = FakeSession(response=chat_response("never"))
    invoker = ProviderInvoker(session=session)

    result = invoker.invoke("nonexistent", "key", "model", MESSAGES)

    assert isinstance(result, Failure)
    assert result.kind is FailureKind.UNKNOWN_PROVIDER
    assert "nonexistent" in result.reason
    assert session.calls == []


def test_openai_style_request_wiring():
    session = FakeSession(response=chat_response("**Title:** test"))
    invoker = ProviderInvoker(session=session, timeout=12)

    result = invoker.invoke("deepseek", "sk-abc", "deepseek-chat", MESSAGES)

    assert result == Content("**Title:** test")
    call = session.calls[0]
    assert call["url"] == "https://api.deepseek.com/v1/chat/completions"
    assert call["headers"]["Authorization"] == "Bearer sk-abc"
    assert call["json"]["model"] == "deepseek-chat"
    assert call["json"]["messages"] == [
        {"role": "system", "content": "SYSTEM"},
        {"role": "user", "content": "USER"},
    ]
    assert call["json"]["stream"] is False
    assert call["timeout"] == 12


def test_gemini_request_wiring():
    response = FakeResponse(200, {"candidates": [{"content": {"parts": [{"text": "gem"}]}}]})
    session = FakeSession(response=response)
    invoker = ProviderInvoker(session=session)

    result = invoker.invoke("gemini", "g-key", "gemini-pro", MESSAGES)

    assert result == Content("gem")
    call = session.calls[0]
    assert call["url"].endswith("/models/gemini-pro:generateContent?key=g-key")
    assert "Authorization" not in call["headers"]
    assert call["json"]["contents"][0]["parts"][0]["text"] == "SYSTEM\n\nUSER"


def test_blank_model_falls_back_to_provider_default():
    session = FakeSession(response=chat_response("x"))
    ProviderInvoker(session=session).invoke("openai", "k", "", MESSAGES)
    assert session.calls[0]["json"]["model"] == "gpt-4-turbo"


def test_default_timeout_is_bounded():
    session = FakeSession(response=chat_response("x"))
    ProviderInvoker(session=session).invoke("openai", "k", "gpt-4o", MESSAGES)
    assert session.calls[0]["timeout"] == DEFAULT_TIMEOUT


def test_http_error_carries_upstream_json_body():
    upstream = {"error": {"message": "Invalid API key", "type": "invalid_request_error"}}
    session = FakeSession(response=FakeResponse(401, upstream))

    result = ProviderInvoker(session=session).invoke("openai", "bad", "gpt-4o", MESSAGES)

    assert isinstance(result, Failure)
    assert result.kind is FailureKind.REQUEST_FAILED
    assert result.status_code == 401
    assert json.loads(result.reason) == upstream
    assert "Invalid API key" in result.describe()


def test_http_error_with_plain_text_body_is_kept_verbatim():
    session = FakeSession(response=FakeResponse(429, None, text="rate limited, slow down"))

    result = ProviderInvoker(session=session).invoke("openrouter", "k", "m", MESSAGES)

    assert result.kind is FailureKind.REQUEST_FAILED
    assert result.reason == "rate limited, slow down"
    assert result.status_code == 429


def test_redirect_status_with_completion_body_is_request_failed():
    body = {"choices": [{"message": {"content": "moved"}}]}
    session = FakeSession(response=FakeResponse(300, body))

    result = ProviderInvoker(session=session).invoke("openai", "k", "gpt-4o", MESSAGES)

    assert isinstance(result, Failure)
    assert result.kind is FailureKind.REQUEST_FAILED
    assert result.status_code == 300


def test_not_modified_with_empty_body_is_request_failed():
    session = FakeSession(response=FakeResponse(304, None, text=""))

    result = ProviderInvoker(session=session).invoke("openai", "k", "gpt-4o", MESSAGES)

    assert result.kind is FailureKind.REQUEST_FAILED
    assert result.status_code == 304


def test_transport_error_redaction_accepts_non_string_credential():
    error = requests.exceptions.ConnectionError("refused for key 12345")
    session = FakeSession(error=error)

    result = ProviderInvoker(session=session).invoke("deepseek", 12345, "m", MESSAGES)

    assert result.kind is FailureKind.REQUEST_FAILED
    assert "12345" not in result.reason


def test_transport_error_maps_to_request_failed_and_redacts_key():
    error = requests.exceptions.ConnectionError("cannot reach https://x/?key=secret-key")
    session = FakeSession(error=error)

    result = ProviderInvoker(session=session).invoke("gemini", "secret-key", "gemini-pro", MESSAGES)

    assert isinstance(result, Failure)
    assert result.kind is FailureKind.REQUEST_FAILED
    assert "secret-key" not in result.reason
    assert "[REDACTED]" in result.reason


def test_timeout_maps_to_request_failed():
    session = FakeSession(error=requests.exceptions.Timeout("read timed out"))
    result = ProviderInvoker(session=session).invoke("deepseek", "k", "m", MESSAGES)
    assert result.kind is FailureKind.REQUEST_FAILED
    assert "timed out" in result.reason


def test_success_with_missing_path_is_malformed_not_request_failed():
    session = FakeSession(response=FakeResponse(200, {"choices": []}))

    result = ProviderInvoker(session=session).invoke("openai", "k", "m", MESSAGES)

    assert isinstance(result, Failure)
    assert result.kind is FailureKind.MALFORMED_RESPONSE
    assert "OpenAI" in result.reason


def test_success_with_non_json_body_is_malformed():
    session = FakeSession(response=FakeResponse(200, None, text="<html>oops</html>"))
    result = ProviderInvoker(session=session).invoke("openai", "k", "m", MESSAGES)
    assert result.kind is FailureKind.MALFORMED_RESPONSE


def test_invoke_request_delegates_to_invoke():
    session = FakeSession(response=chat_response("via request"))
    request = InvocationRequest.create("deepseek", "deepseek-chat", "sk-zzz-secret", MESSAGES)

    result = ProviderInvoker(session=session).invoke_request(request)

    assert result == Content("via request")
    assert "sk-zzz-secret" not in repr(request)
