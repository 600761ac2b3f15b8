"""
Google Gemini (generateContent) rules.

Gemini has no system/user separation in this endpoint, so the first
system and user messages are collapsed into one text part. The API key
travels in the query string instead of an Authorization header.
"""

from typing import Any, Dict, Sequence

from prautomator.core.ai.base import (
    ChatMessage,
    MalformedResponseError,
    MAX_OUTPUT_TOKENS,
    SYSTEM_ROLE,
    TEMPERATURE,
    USER_ROLE,
    first_content,
)

GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"


def gemini_endpoint(model: str, api_key: str) -> str:
    return f"{GEMINI_BASE_URL}/{model}:generateContent?key={api_key}"


def gemini_headers(api_key: str) -> Dict[str, str]:
    # Credential is already embedded in the URL.
    return {"Content-Type": "application/json"}


def combine_prompt(messages: Sequence[ChatMessage]) -> str:
    system_prompt = first_content(messages, SYSTEM_ROLE)
    user_prompt = first_content(messages, USER_ROLE)
    return f"{system_prompt}\n\n{user_prompt}"


def gemini_payload(model: str, messages: Sequence[ChatMessage]) -> Dict[str, Any]:
    return {
        "contents": [
            {"parts": [{"text": combine_prompt(messages)}]},
        ],
        "generationConfig": {
            "temperature": TEMPERATURE,
            "maxOutputTokens": MAX_OUTPUT_TOKENS,
        },
    }


def extract_gemini_text(data: Any) -> str:
    """Return ``candidates[0].content.parts[0].text`` or raise MalformedResponseError."""
    if not isinstance(data, dict):
        raise MalformedResponseError("response body is not a JSON object")

    candidates = data.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        # Blocked prompts come back without candidates but with feedback.
        feedback = data.get("promptFeedback") or {}
        reason = feedback.get("blockReason") if isinstance(feedback, dict) else None
        if reason:
            raise MalformedResponseError(f"response did not contain candidates (blocked: {reason})")
        raise MalformedResponseError("response did not contain candidates")

    content = candidates[0].get("content") if isinstance(candidates[0], dict) else None
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list) or not parts:
        raise MalformedResponseError("candidates[0].content.parts is missing")

    text = parts[0].get("text") if isinstance(parts[0], dict) else None
    if not isinstance(text, str):
        raise MalformedResponseError("candidates[0].content.parts[0].text is missing")
    return text
