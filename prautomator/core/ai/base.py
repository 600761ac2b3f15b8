"""
AI Provider Data Model

Value types shared by every provider adapter:
chat messages, provider descriptors and invocation results.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union


SYSTEM_ROLE = "system"
USER_ROLE = "user"
VALID_ROLES = (SYSTEM_ROLE, USER_ROLE)

# Generation parameters shared by all providers.
TEMPERATURE = 0.7
MAX_OUTPUT_TOKENS = 2048


class MalformedResponseError(ValueError):
    """Raised when a provider response lacks the expected extraction path."""
    pass


class FailureKind(Enum):
    """Why an invocation did not produce content."""
    UNKNOWN_PROVIDER = "unknown_provider"
    REQUEST_FAILED = "request_failed"
    MALFORMED_RESPONSE = "malformed_response"


@dataclass(frozen=True)
class ChatMessage:
    """One role-tagged turn sent to the provider."""
    role: str
    content: str

    def __post_init__(self):
        if self.role not in VALID_ROLES:
            raise ValueError(
                f"Unsupported chat role '{self.role}' (expected one of: {', '.join(VALID_ROLES)})"
            )

    def to_dict(self) -> Dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass(frozen=True)
class Content:
    """Successful invocation: the extracted text."""
    text: str

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    """Failed invocation with a typed reason."""
    kind: FailureKind
    reason: str
    status_code: Optional[int] = None

    @property
    def ok(self) -> bool:
        return False

    def describe(self) -> str:
        labels = {
            FailureKind.UNKNOWN_PROVIDER: "Unknown AI provider",
            FailureKind.REQUEST_FAILED: "AI request failed",
            FailureKind.MALFORMED_RESPONSE: "Malformed AI response",
        }
        prefix = labels[self.kind]
        if self.status_code is not None:
            prefix = f"{prefix} (HTTP {self.status_code})"
        return f"{prefix}: {self.reason}"


InvocationResult = Union[Content, Failure]

Endpoint = Union[str, Callable[[str, str], str]]
HeaderBuilder = Callable[[str], Dict[str, str]]
PayloadBuilder = Callable[[str, Sequence[ChatMessage]], Dict[str, Any]]
ContentExtractor = Callable[[Any], str]


@dataclass(frozen=True)
class ProviderDescriptor:
    """
    Fixed bundle of rules adapting one AI vendor's HTTP API.

    ``endpoint`` is either a URL or a callable ``(model, credential) -> url``
    for vendors that take the credential as a query parameter.
    """
    identifier: str
    name: str
    endpoint: Endpoint
    build_headers: HeaderBuilder = field(repr=False)
    build_payload: PayloadBuilder = field(repr=False)
    extract_content: ContentExtractor = field(repr=False)
    default_model: str
    description: str = ""

    def resolve_endpoint(self, model: str, credential: str) -> str:
        if callable(self.endpoint):
            return self.endpoint(model, credential)
        return self.endpoint

    def extract(self, response_json: Any) -> InvocationResult:
        """Apply the extraction rule, reporting a missing path as a Failure."""
        try:
            return Content(self.extract_content(response_json))
        except MalformedResponseError as e:
            return Failure(FailureKind.MALFORMED_RESPONSE, f"{self.name}: {e}")


@dataclass(frozen=True)
class InvocationRequest:
    """Everything needed for a single provider call."""
    provider: str
    model: str
    credential: str = field(repr=False)
    messages: Tuple[ChatMessage, ...] = ()

    @classmethod
    def create(
        cls,
        provider: str,
        model: str,
        credential: str,
        messages: List[ChatMessage],
    ) -> "InvocationRequest":
        return cls(provider=provider, model=model, credential=credential, messages=tuple(messages))


def first_content(messages: Sequence[ChatMessage], role: str) -> str:
    """Content of the first message with ``role``, or an empty string."""
    for message in messages:
        if message.role == role:
            return message.content
    return ""
