"""
PR generation pipeline.

changed files -> per-file diffs -> prompt -> provider call -> ParsedPR
"""

import logging
from typing import Dict, List, Optional, Sequence

from prautomator.core.ai.base import Failure
from prautomator.core.ai.invoker import ProviderInvoker
from prautomator.core.prompt_builder import build_messages
from prautomator.core.response_parser import ParsedPR, ResponseParser
from prautomator.services.git_service import DEFAULT_BASE_REF, GitCommandError, GitService

logger = logging.getLogger(__name__)

DIFF_UNAVAILABLE = "File changed but diff not available"


class PRGenerationError(RuntimeError):
    """Raised when the AI provider did not return usable content."""

    def __init__(self, failure: Failure):
        super().__init__(failure.describe())
        self.failure = failure


class PRGenerator:
    """
    Connects:
      - GitService (diff collection)
      - Prompt builder
      - ProviderInvoker (single HTTP call)
      - ResponseParser
    """

    def __init__(
        self,
        git_service: Optional[GitService] = None,
        invoker: Optional[ProviderInvoker] = None,
        parser: Optional[ResponseParser] = None,
    ):
        self.git = git_service or GitService()
        self.invoker = invoker or ProviderInvoker()
        self.parser = parser or ResponseParser()

    def collect_changes(
        self,
        files: Sequence[str],
        base_ref: str = DEFAULT_BASE_REF,
    ) -> Dict[str, str]:
        """Diff text per file; unreadable diffs get a placeholder."""
        changes: Dict[str, str] = {}
        for path in files:
            try:
                changes[path] = self.git.get_file_diff(path, base_ref)
                logger.info("Analyzed %s", path)
            except GitCommandError as e:
                logger.warning("Could not analyze %s: %s", path, e)
                changes[path] = DIFF_UNAVAILABLE
        return changes

    def generate(
        self,
        files: List[str],
        provider: str,
        api_key: str,
        model: str,
        base_ref: str = DEFAULT_BASE_REF,
    ) -> ParsedPR:
        """
        Produce a PR title and body for ``files``.

        Raises:
            PRGenerationError: If the provider call fails
        """
        changes = self.collect_changes(files, base_ref)
        return self.generate_from_changes(files, changes, provider, api_key, model)

    def generate_from_changes(
        self,
        files: Sequence[str],
        changes: Dict[str, str],
        provider: str,
        api_key: str,
        model: str,
    ) -> ParsedPR:
        messages = build_messages(files, changes)
        result = self.invoker.invoke(provider, api_key, model, messages)
        if isinstance(result, Failure):
            raise PRGenerationError(result)

        parsed = self.parser.parse(result.text)
        logger.info("AI analysis successful: %s", parsed.title)
        return parsed
