"""
Provider Invocation

Issues exactly one HTTP POST against a provider described in the
registry and normalizes the outcome into an InvocationResult.
No retries are attempted; failures are returned to the caller.
"""

import json
import logging
from typing import Any, Optional, Sequence

import requests

from prautomator.core.ai.base import (
    ChatMessage,
    Content,
    Failure,
    FailureKind,
    InvocationRequest,
    InvocationResult,
)
from prautomator.core.ai.registry import DEFAULT_REGISTRY, ProviderRegistry

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 60


class ProviderInvoker:
    """
    Uniform call contract over heterogeneous AI HTTP APIs.

    All outcomes are reported as ``Content`` or ``Failure``:
    - UNKNOWN_PROVIDER: identifier not registered (no network call)
    - REQUEST_FAILED: transport error or non-2xx status
    - MALFORMED_RESPONSE: 2xx but the extraction path is absent
    """

    def __init__(
        self,
        registry: Optional[ProviderRegistry] = None,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.registry = registry or DEFAULT_REGISTRY
        self.session = session or requests.Session()
        self.timeout = timeout

    def invoke_request(self, request: InvocationRequest) -> InvocationResult:
        return self.invoke(request.provider, request.credential, request.model, request.messages)

    def invoke(
        self,
        identifier: str,
        credential: str,
        model: str,
        messages: Sequence[ChatMessage],
    ) -> InvocationResult:
        """
        Send ``messages`` to the provider and extract the reply text.

        Args:
            identifier: Registry key of the provider
            credential: API key
            model: Model name (blank falls back to the provider default)
            messages: Ordered chat messages

        Returns:
            Content with the generated text, or a typed Failure
        """
        descriptor = self.registry.lookup(identifier)
        if descriptor is None:
            supported = ", ".join(self.registry.names())
            logger.error("Unknown AI provider '%s' (supported: %s)", identifier, supported)
            return Failure(
                FailureKind.UNKNOWN_PROVIDER,
                f"AI provider '{identifier}' is not configured. Supported providers: {supported}",
            )

        model = model or descriptor.default_model
        url = descriptor.resolve_endpoint(model, credential)
        headers = descriptor.build_headers(credential)
        payload = descriptor.build_payload(model, messages)

        logger.info("Contacting %s with model %s", descriptor.name, model)
        try:
            response = self.session.post(url, json=payload, headers=headers, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            # Never log the URL: Gemini carries the key in the query string.
            logger.error("%s request failed: %s", descriptor.name, type(e).__name__)
            return Failure(FailureKind.REQUEST_FAILED, self._transport_message(e, credential))

        # requests treats 1xx/3xx as ok; only 2xx carries a completion.
        if not 200 <= response.status_code < 300:
            reason = self._error_body(response)
            logger.error(
                "%s returned HTTP %d: %s", descriptor.name, response.status_code, reason
            )
            return Failure(FailureKind.REQUEST_FAILED, reason, status_code=response.status_code)

        try:
            data = response.json()
        except ValueError:
            logger.error("%s returned a non-JSON body", descriptor.name)
            return Failure(
                FailureKind.MALFORMED_RESPONSE,
                f"{descriptor.name}: response body is not valid JSON",
                status_code=response.status_code,
            )

        result = descriptor.extract(data)
        if isinstance(result, Content):
            logger.debug("%s returned %d characters", descriptor.name, len(result.text))
        else:
            logger.error("%s", result.reason)
        return result

    @staticmethod
    def _error_body(response: requests.Response) -> str:
        """Upstream error payload verbatim (pretty JSON when possible)."""
        try:
            content: Any = response.json()
        except ValueError:
            text = response.text or ""
            return text or (response.reason or f"HTTP {response.status_code}")
        return json.dumps(content, indent=2, ensure_ascii=False)

    @staticmethod
    def _transport_message(error: Exception, credential: str) -> str:
        message = str(error) or type(error).__name__
        if credential:
            message = message.replace(str(credential), "[REDACTED]")
        return message
