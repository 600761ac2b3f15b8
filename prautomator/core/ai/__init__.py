"""
AI Provider Abstraction Layer

Provides a uniform call contract for all AI providers (DeepSeek, OpenAI,
OpenRouter, Gemini). Providers are descriptor values in a registry.
"""

from prautomator.core.ai.base import (
    ChatMessage,
    Content,
    Failure,
    FailureKind,
    InvocationRequest,
    InvocationResult,
    MalformedResponseError,
    ProviderDescriptor,
)
from prautomator.core.ai.registry import (
    DEFAULT_REGISTRY,
    ProviderRegistry,
    get_available_providers,
    get_provider_config,
    get_provider_names,
    is_valid_provider,
)
from prautomator.core.ai.invoker import DEFAULT_TIMEOUT, ProviderInvoker

__all__ = [
    "ChatMessage",
    "Content",
    "Failure",
    "FailureKind",
    "InvocationRequest",
    "InvocationResult",
    "MalformedResponseError",
    "ProviderDescriptor",
    "DEFAULT_REGISTRY",
    "ProviderRegistry",
    "get_available_providers",
    "get_provider_config",
    "get_provider_names",
    "is_valid_provider",
    "DEFAULT_TIMEOUT",
    "ProviderInvoker",
]
