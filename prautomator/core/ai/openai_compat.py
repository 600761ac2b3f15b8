"""
OpenAI-compatible chat completion rules.

Shared by every provider that speaks the ``/v1/chat/completions`` dialect
(DeepSeek, OpenAI, OpenRouter).
"""

from typing import Any, Dict, Optional, Sequence

from prautomator.core.ai.base import (
    ChatMessage,
    MalformedResponseError,
    MAX_OUTPUT_TOKENS,
    TEMPERATURE,
)


def bearer_headers(api_key: str, extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
    """Bearer authentication plus JSON content type and any static extras."""
    headers = {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }
    if extra:
        headers.update(extra)
    return headers


def chat_completion_payload(
    model: str,
    messages: Sequence[ChatMessage],
    include_stream: bool = True,
) -> Dict[str, Any]:
    """
    Build an OpenAI-style request body.

    Args:
        model: Model name
        messages: Ordered chat messages
        include_stream: Send an explicit ``stream: false``

    Returns:
        JSON-serialisable payload
    """
    payload: Dict[str, Any] = {
        "model": model,
        "messages": [m.to_dict() for m in messages],
        "temperature": TEMPERATURE,
        "max_tokens": MAX_OUTPUT_TOKENS,
    }
    if include_stream:
        payload["stream"] = False
    return payload


def extract_chat_completion(data: Any) -> str:
    """Return ``choices[0].message.content`` or raise MalformedResponseError."""
    if not isinstance(data, dict):
        raise MalformedResponseError("response body is not a JSON object")

    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        raise MalformedResponseError("response did not contain choices")

    first = choices[0]
    message = first.get("message") if isinstance(first, dict) else None
    if not isinstance(message, dict):
        raise MalformedResponseError("choices[0] did not contain a message")

    content = message.get("content")
    if not isinstance(content, str):
        raise MalformedResponseError("choices[0].message.content is missing")
    return content
