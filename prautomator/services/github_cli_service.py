"""
GitHub CLI Service

Creates pull requests through the ``gh`` binary. The body is passed via
a temporary file so long markdown never hits argument length limits.
"""

import logging
import os
import subprocess
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger("PRAutomator.GitHubCLIService")


@dataclass
class PRCreationResult:
    """Outcome of a create-PR attempt."""
    created: bool
    url: Optional[str] = None
    existing: bool = False
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.created or self.existing


class GitHubCLIService:
    """
    Service class wrapping the GitHub CLI.

    Provides:
    - gh availability check
    - PR creation with a body file
    - Lookup of an existing PR for the current branch
    """

    def __init__(self, cwd: Optional[Path] = None, timeout: int = 120):
        self.cwd = Path(cwd).resolve() if cwd else None
        self.timeout = timeout

    def gh_installed(self) -> bool:
        """
        Check if the GitHub CLI is installed.

        Returns:
            True if ``gh --version`` succeeds
        """
        result = self._run(["--version"])
        return result is not None and result.returncode == 0

    def create_pull_request(
        self,
        title: str,
        body: str,
        base: Optional[str] = None,
    ) -> PRCreationResult:
        """
        Create a PR for the current branch.

        Args:
            title: PR title
            body: PR body (markdown)
            base: Optional base branch passed to ``gh pr create --base``

        Returns:
            PRCreationResult; when creation fails but a PR already exists
            for the branch, ``existing`` is set with its URL
        """
        fd, body_path = tempfile.mkstemp(prefix="pr_body_", suffix=".md")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(body)

            args = ["pr", "create", "--title", title, "--body-file", body_path]
            if base:
                args.extend(["--base", base])

            logger.info("Creating PR on GitHub: %s", title)
            result = self._run(args)
        finally:
            try:
                os.unlink(body_path)
            except OSError as e:
                logger.warning("Could not clean up temporary PR body file %s: %s", body_path, e)

        if result is not None and result.returncode == 0:
            url = self._last_url(result.stdout)
            return PRCreationResult(created=True, url=url)

        stderr = (result.stderr or "").strip() if result is not None else "gh could not be executed"
        logger.warning("PR creation failed, checking for an existing PR: %s", stderr)

        existing_url = self.find_existing_pr_url()
        if existing_url:
            return PRCreationResult(created=False, url=existing_url, existing=True)

        return PRCreationResult(
            created=False,
            error=stderr or "Failed to create or find an existing PR.",
        )

    def find_existing_pr_url(self) -> Optional[str]:
        """URL of the open PR for the current branch, if any."""
        result = self._run(["pr", "view", "--json", "url", "--jq", ".url"])
        if result is None or result.returncode != 0:
            return None
        url = (result.stdout or "").strip()
        return url or None

    @staticmethod
    def _last_url(output: str) -> Optional[str]:
        # gh prints the new PR URL as the last line of stdout.
        for line in reversed((output or "").strip().split("\n")):
            if line.startswith("http"):
                return line.strip()
        return None

    def _run(self, args: List[str]) -> Optional[subprocess.CompletedProcess]:
        """
        Run a gh command.

        Returns:
            Completed process, or None when gh cannot be started
        """
        cmd = ["gh", *args]
        logger.debug("Running gh command: %s", " ".join(cmd[:3]))
        try:
            return subprocess.run(
                cmd,
                cwd=str(self.cwd) if self.cwd else None,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                encoding="utf-8",
                errors="replace",
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.error("gh command error (%s): %s", " ".join(cmd[:3]), e)
            return None
