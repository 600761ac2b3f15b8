"""
AI Provider Registry

Immutable lookup table from provider identifier to ProviderDescriptor.
Adding a provider means adding one descriptor; nothing else changes.
"""

import logging
from functools import partial
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional

from prautomator.core.ai.base import ProviderDescriptor
from prautomator.core.ai.gemini import (
    extract_gemini_text,
    gemini_endpoint,
    gemini_headers,
    gemini_payload,
)
from prautomator.core.ai.openai_compat import (
    bearer_headers,
    chat_completion_payload,
    extract_chat_completion,
)

logger = logging.getLogger(__name__)

OPENROUTER_EXTRA_HEADERS = {
    "HTTP-Referer": "https://github.com/your-repo/pr-automator",
    "X-Title": "PR Automator",
}


def _builtin_descriptors() -> List[ProviderDescriptor]:
    return [
        ProviderDescriptor(
            identifier="deepseek",
            name="DeepSeek",
            endpoint="https://api.deepseek.com/v1/chat/completions",
            build_headers=bearer_headers,
            build_payload=chat_completion_payload,
            extract_content=extract_chat_completion,
            default_model="deepseek-chat",
            description="DeepSeek AI - Fast and reliable AI service",
        ),
        ProviderDescriptor(
            identifier="openai",
            name="OpenAI",
            endpoint="https://api.openai.com/v1/chat/completions",
            build_headers=bearer_headers,
            build_payload=chat_completion_payload,
            extract_content=extract_chat_completion,
            default_model="gpt-4-turbo",
            description="OpenAI GPT - Industry leading AI models",
        ),
        ProviderDescriptor(
            identifier="openrouter",
            name="OpenRouter",
            endpoint="https://openrouter.ai/api/v1/chat/completions",
            build_headers=partial(bearer_headers, extra=OPENROUTER_EXTRA_HEADERS),
            build_payload=partial(chat_completion_payload, include_stream=False),
            extract_content=extract_chat_completion,
            default_model="google/gemini-pro",
            description="OpenRouter - Access to multiple AI providers",
        ),
        ProviderDescriptor(
            identifier="gemini",
            name="Google Gemini",
            endpoint=gemini_endpoint,
            build_headers=gemini_headers,
            build_payload=gemini_payload,
            extract_content=extract_gemini_text,
            default_model="gemini-pro",
            description="Google Gemini - Advanced AI from Google",
        ),
    ]


class ProviderRegistry:
    """
    Read-only provider table.

    Lookups never mutate state; ``with_provider`` returns a new registry
    instead of registering in place.
    """

    def __init__(self, descriptors: Iterable[ProviderDescriptor]):
        table: Dict[str, ProviderDescriptor] = {}
        for descriptor in descriptors:
            if descriptor.identifier in table:
                raise ValueError(f"Duplicate provider identifier: {descriptor.identifier}")
            table[descriptor.identifier] = descriptor
        self._providers: Mapping[str, ProviderDescriptor] = MappingProxyType(table)

    @classmethod
    def default(cls) -> "ProviderRegistry":
        return cls(_builtin_descriptors())

    def lookup(self, identifier: str) -> Optional[ProviderDescriptor]:
        return self._providers.get(identifier)

    def is_valid(self, identifier: str) -> bool:
        return identifier in self._providers

    def names(self) -> List[str]:
        """Provider identifiers in registration order."""
        return list(self._providers.keys())

    def descriptors(self) -> List[ProviderDescriptor]:
        return list(self._providers.values())

    def with_provider(self, descriptor: ProviderDescriptor) -> "ProviderRegistry":
        """Return a copy of this registry extended with ``descriptor``."""
        logger.debug("Extending provider registry with: %s", descriptor.identifier)
        return ProviderRegistry([*self._providers.values(), descriptor])

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._providers

    def __len__(self) -> int:
        return len(self._providers)


DEFAULT_REGISTRY = ProviderRegistry.default()


def get_available_providers() -> Mapping[str, ProviderDescriptor]:
    return MappingProxyType({d.identifier: d for d in DEFAULT_REGISTRY.descriptors()})


def get_provider_config(provider: str) -> Optional[ProviderDescriptor]:
    return DEFAULT_REGISTRY.lookup(provider)


def is_valid_provider(provider: str) -> bool:
    return DEFAULT_REGISTRY.is_valid(provider)


def get_provider_names() -> List[str]:
    return DEFAULT_REGISTRY.names()
