"""
Service Layer

Service classes wrapping external collaborators:
configuration file, git and the GitHub CLI.
"""

from prautomator.services.config_service import ConfigService
from prautomator.services.git_service import GitService, GitCommandError
from prautomator.services.github_cli_service import GitHubCLIService, PRCreationResult

__all__ = [
    "ConfigService",
    "GitService",
    "GitCommandError",
    "GitHubCLIService",
    "PRCreationResult",
]
