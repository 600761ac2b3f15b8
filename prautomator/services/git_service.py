"""
Git Service

Service class for the git operations the PR workflow needs:
listing changed files and collecting per-file diffs against a base ref.
"""

import subprocess
import logging
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger("PRAutomator.GitService")

DEFAULT_BASE_REF = "origin/main"


class GitCommandError(RuntimeError):
    """Raised when a git command exits non-zero or cannot be started."""
    pass


class GitService:
    """
    Service class for Git operations.

    Provides utilities for:
    - Detecting Git repositories
    - Listing files changed relative to a base ref
    - Reading per-file diffs
    - Checking Git installation
    """

    def __init__(self, base_dir: Optional[Path] = None, timeout: int = 30):
        """
        Initialize Git service.

        Args:
            base_dir: Repository directory (defaults to the process cwd)
            timeout: Per-command timeout in seconds
        """
        self.base_dir = Path(base_dir).resolve() if base_dir else None
        self.timeout = timeout
        logger.debug("GitService initialized (base_dir: %s)", self.base_dir)

    def is_git_repo(self) -> bool:
        """True when the working directory is inside a git work tree."""
        try:
            return self._run(["rev-parse", "--is-inside-work-tree"]) == "true"
        except GitCommandError:
            return False

    def current_branch(self) -> Optional[str]:
        """
        Get current Git branch.

        Returns:
            Branch name or None
        """
        try:
            return self._run(["rev-parse", "--abbrev-ref", "HEAD"]) or None
        except GitCommandError:
            return None

    def get_changed_files(self, base_ref: str = DEFAULT_BASE_REF) -> List[str]:
        """
        List files that differ between ``base_ref`` and HEAD.

        Args:
            base_ref: Ref to compare against

        Returns:
            Repository-relative paths (empty on error)
        """
        try:
            output = self._run(["diff", "--name-only", base_ref, "HEAD"])
        except GitCommandError as e:
            logger.error("Error getting changed files: %s", e)
            return []
        return [line for line in output.split("\n") if line.strip()]

    def get_file_diff(self, path: str, base_ref: str = DEFAULT_BASE_REF) -> str:
        """
        Unified diff of one file against ``base_ref``.

        Raises:
            GitCommandError: If git fails
        """
        return self._run(["diff", base_ref, "--", path], strip=False)

    def git_installed(self) -> bool:
        """
        Check if Git is installed.

        Returns:
            True if Git is available
        """
        try:
            self._run(["--version"])
            return True
        except GitCommandError:
            return False

    def _run(self, args: List[str], strip: bool = True) -> str:
        """
        Run a git command and return its stdout.

        Args:
            args: Arguments after ``git``
            strip: Strip surrounding whitespace from the output

        Returns:
            Command output

        Raises:
            GitCommandError: On non-zero exit, timeout or missing binary
        """
        cmd = ["git", *args]
        logger.debug("Running git command: %s", " ".join(cmd))
        try:
            result = subprocess.run(
                cmd,
                cwd=str(self.base_dir) if self.base_dir else None,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                encoding="utf-8",
                errors="replace",
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            raise GitCommandError(f"failed to execute {' '.join(cmd)}: {e}") from e

        if result.returncode != 0:
            stderr = (result.stderr or "").strip()
            logger.debug("git stderr (%s): %s", " ".join(cmd), stderr)
            raise GitCommandError(stderr or f"git command failed: {' '.join(cmd)}")

        output = result.stdout or ""
        return output.strip() if strip else output
