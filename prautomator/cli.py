"""
PR Automator — Entry Point
AI-powered Pull Request description generator.
"""

import argparse
import getpass
import logging
import sys
from typing import List, Optional

from prautomator.config.settings import (
    AI_PROVIDER,
    API_KEY,
    MODEL,
    REQUEST_TIMEOUT,
    resolve_config_path,
)
from prautomator.core.ai.invoker import DEFAULT_TIMEOUT, ProviderInvoker
from prautomator.core.ai.registry import DEFAULT_REGISTRY
from prautomator.core.pr_generator import PRGenerationError, PRGenerator
from prautomator.services.config_service import ConfigService
from prautomator.services.git_service import DEFAULT_BASE_REF, GitService
from prautomator.services.github_cli_service import GitHubCLIService
from prautomator.ui.console import (
    accent,
    muted,
    print_error,
    print_field,
    print_heading,
    print_muted,
    print_success,
    print_warning,
)
from prautomator.utils.logging_utils import configure_logging

logger = logging.getLogger(__name__)

VERSION = "1.0.0"
BODY_PREVIEW_CHARS = 100


def _load_config(args) -> ConfigService:
    return ConfigService(config_path=resolve_config_path(getattr(args, "config", None)))


def _request_timeout(config: ConfigService) -> float:
    raw = config.get(REQUEST_TIMEOUT, None)
    if raw is None:
        return DEFAULT_TIMEOUT
    try:
        timeout = float(raw)
    except (TypeError, ValueError):
        logger.warning("Ignoring invalid %s value: %r", REQUEST_TIMEOUT, raw)
        return DEFAULT_TIMEOUT
    if timeout <= 0:
        logger.warning("Ignoring non-positive %s value: %r", REQUEST_TIMEOUT, raw)
        return DEFAULT_TIMEOUT
    return timeout


# =====================================================================
#  CONFIG
# =====================================================================

def _prompt(message: str, default: str = "") -> str:
    suffix = f" ({default})" if default else ""
    answer = input(f"{message}{suffix}: ").strip()
    return answer or default


def _choose_provider(current: str) -> str:
    names = DEFAULT_REGISTRY.names()
    print("Select AI Provider:")
    for index, name in enumerate(names, 1):
        descriptor = DEFAULT_REGISTRY.lookup(name)
        marker = "*" if name == current else " "
        print(f" {marker} {index}. {name} - {descriptor.description}")

    while True:
        answer = _prompt("Provider (number or name)", current)
        if answer.isdigit() and 1 <= int(answer) <= len(names):
            return names[int(answer) - 1]
        if DEFAULT_REGISTRY.is_valid(answer):
            return answer
        print_error(f"Invalid AI provider: {answer}")


def _prompt_api_key(current: str) -> str:
    while True:
        hint = " (leave empty to keep current)" if current else ""
        answer = getpass.getpass(f"Enter API Key{hint}: ").strip()
        if answer:
            return answer
        if current:
            return current
        print_error("API Key is required")


def interactive_config(config: ConfigService) -> int:
    """Prompt for provider, API key and model, saving each answer."""
    print_heading("🤖 PR Automator Configuration\n")
    try:
        provider = _choose_provider(config.get(AI_PROVIDER))
        api_key = _prompt_api_key(config.get(API_KEY))

        default_model = DEFAULT_REGISTRY.lookup(provider).default_model
        current_model = config.get(MODEL) if provider == config.get(AI_PROVIDER) else ""
        model = input(
            f"Enter Model Name (leave empty for {current_model or default_model}): "
        ).strip() or current_model or default_model
    except (EOFError, KeyboardInterrupt):
        print()
        print_error("❌ Configuration cancelled.")
        return 1

    saved = all(
        config.set(key, value)
        for key, value in ((AI_PROVIDER, provider), (API_KEY, api_key), (MODEL, model))
    )
    if not saved:
        print_error(f"❌ Could not save configuration to {config.config_path}")
        return 1

    print_success("\n✅ Configuration saved successfully!")
    print_muted(f"Configuration file: {config.config_path}")
    return 0


def cmd_config(args) -> int:
    """Show, set or interactively edit configuration values."""
    config = _load_config(args)

    if not args.key:
        return interactive_config(config)

    if args.value is None:
        value = config.get(args.key)
        if value:
            print_success(f"{args.key}: {value}")
            return 0
        print_error(f'Configuration key "{args.key}" not found.')
        return 1

    if args.key == AI_PROVIDER and not DEFAULT_REGISTRY.is_valid(args.value):
        print_error(f"Invalid AI provider: {args.value}")
        print_warning(f"Available providers: {', '.join(DEFAULT_REGISTRY.names())}")
        return 1

    if not config.set(args.key, args.value):
        print_error(f"❌ Could not save configuration to {config.config_path}")
        return 1

    shown = "********" if args.key == API_KEY else args.value
    print_success(f"✅ {args.key} set to: {shown}")
    return 0


# =====================================================================
#  INFO COMMANDS
# =====================================================================

def cmd_list_providers(args) -> int:
    """List available AI providers."""
    print_heading("🤖 Available AI Providers:\n")
    for descriptor in DEFAULT_REGISTRY.descriptors():
        print(accent(f"{descriptor.identifier}:"))
        print(f"  Name: {descriptor.name}")
        print(f"  Description: {descriptor.description}")
        print(f"  Default Model: {descriptor.default_model}\n")
    return 0


def cmd_status(args) -> int:
    """Show current configuration status."""
    config = _load_config(args)
    settings = config.get_all()

    print_heading("📋 Configuration Status:\n")
    print_field("AI Provider", settings[AI_PROVIDER])
    print_field("Model", settings[MODEL])
    print(f"API Key: {'✅ Set' if settings[API_KEY] else '❌ Not set'}")

    descriptor = DEFAULT_REGISTRY.lookup(settings[AI_PROVIDER])
    if descriptor is not None:
        print_field("Provider Name", descriptor.name)
        print(f"Provider Description: {muted(descriptor.description)}")
    elif settings[AI_PROVIDER]:
        print_warning(f"Unknown provider: {settings[AI_PROVIDER]}")

    print(f"\nConfiguration file: {muted(str(config.config_path))}")

    if config.is_complete():
        print_success("\n✅ Configuration is complete and ready to use!")
    else:
        print_error('\n❌ Configuration is incomplete. Please run "prc config" to set up.', stream=sys.stdout)
    return 0


def cmd_welcome(args) -> int:
    """Default action when no subcommand is given."""
    config = _load_config(args)
    print_heading("🚀 PR Automator - AI-powered Pull Request generator\n")
    print_muted("Use --help to see available commands")
    if config.is_complete():
        print_success('\n✅ Ready to create PRs! Run "prc create" to get started.')
    else:
        print_warning('\n⚠️  Configuration incomplete. Run "prc config" to set up.')
    return 0


# =====================================================================
#  CREATE
# =====================================================================

def cmd_create(args) -> int:
    """Create a Pull Request with an AI-generated description."""
    config = _load_config(args)
    git = GitService()
    gh = GitHubCLIService()

    if not git.git_installed() or (not args.dry_run and not gh.gh_installed()):
        print_error(
            "❌ Missing critical dependencies. Please ensure Git and GitHub CLI (gh) are installed."
        )
        return 1

    if not git.is_git_repo():
        print_error("❌ Not a git repository. Run prc create inside the repository you want to open a PR for.")
        return 1

    if not config.is_complete():
        print_error('❌ Configuration is incomplete. Please run "prc config" to set up.')
        return 1

    settings = config.get_all()
    if not DEFAULT_REGISTRY.is_valid(settings[AI_PROVIDER]):
        print_error(f"❌ Error: AI provider \"{settings[AI_PROVIDER]}\" is not configured.")
        print_warning(f"Available providers: {', '.join(DEFAULT_REGISTRY.names())}")
        return 1

    print_heading("🔍 Detecting changed files...")
    branch = git.current_branch()
    if branch:
        print_field("Branch", branch)
    files = git.get_changed_files(args.base)
    if not files:
        print_success(f"✅ No changes detected compared to {args.base}. Nothing to do.")
        return 0

    print(accent(f"Detected {len(files)} changed file(s):"))
    for path in files:
        print_muted(f"  - {path}")

    generator = PRGenerator(
        git_service=git,
        invoker=ProviderInvoker(timeout=_request_timeout(config)),
    )

    print_heading("🔄 Analyzing changes and generating PR details...")
    try:
        details = generator.generate(
            files,
            settings[AI_PROVIDER],
            settings[API_KEY],
            settings[MODEL],
            base_ref=args.base,
        )
    except PRGenerationError as e:
        print_error(f"❌ {e}")
        print_error("❌ Failed to get PR content from AI. PR creation aborted.")
        return 1

    print_success("\n📝 Generated PR Details:")
    print_field("Title", details.title)
    preview = details.body[:BODY_PREVIEW_CHARS]
    if len(details.body) > BODY_PREVIEW_CHARS:
        preview += "..."
    print_field("Body Preview", preview)

    if args.dry_run:
        print_warning("\n🔍 Dry run mode - PR not created")
        print(accent("Full PR Body:"))
        print(details.body)
        return 0

    print_heading("🚀 Creating PR on GitHub...")
    result = gh.create_pull_request(details.title, details.body)
    if result.created:
        print_success("✅ PR created successfully!")
        if result.url:
            print_muted(result.url)
        return 0
    if result.existing:
        print_success(f"✅ An existing PR was found for this branch: {result.url}")
        return 0

    print_error(
        "❌ Failed to create or find an existing PR. Please check your permissions and branch status."
    )
    if result.error:
        print_muted(result.error, stream=sys.stderr)
    return 1


# =====================================================================
#  CLI ENTRY WITH SUBCOMMANDS
# =====================================================================

def _create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="prc",
        description="AI-powered Pull Request description generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  prc config                       # Interactive configuration
  prc config AI_PROVIDER gemini    # Set a single value
  prc list-providers               # Show supported AI providers
  prc status                       # Show configuration status
  prc create --dry-run             # Generate the description only
  prc create                       # Generate and open the PR
        """
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"prc {VERSION}"
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (can be specified multiple times)"
    )
    parser.add_argument(
        "--config",
        type=str,
        help="Path to the configuration file (default: ~/.pr-automator/config.json)"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        help="Available commands"
    )

    parser_config = subparsers.add_parser(
        "config",
        help="Configure AI provider settings"
    )
    parser_config.add_argument(
        "key",
        nargs="?",
        help="Configuration key (AI_PROVIDER, API_KEY, MODEL)"
    )
    parser_config.add_argument(
        "value",
        nargs="?",
        help="Configuration value"
    )

    subparsers.add_parser(
        "list-providers",
        help="List available AI providers"
    )

    subparsers.add_parser(
        "status",
        help="Show current configuration status"
    )

    parser_create = subparsers.add_parser(
        "create",
        help="Create a Pull Request with AI-generated description"
    )
    parser_create.add_argument(
        "-d",
        "--dry-run",
        action="store_true",
        help="Generate PR description without creating the PR"
    )
    parser_create.add_argument(
        "--base",
        default=DEFAULT_BASE_REF,
        help=f"Ref to diff against (default: {DEFAULT_BASE_REF})"
    )

    return parser


COMMANDS = {
    "config": cmd_config,
    "list-providers": cmd_list_providers,
    "status": cmd_status,
    "create": cmd_create,
    None: cmd_welcome,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point with subcommand routing."""
    parser = _create_parser()
    args = parser.parse_args(argv)

    configure_logging(verbosity=args.verbose)

    handler = COMMANDS.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    try:
        return handler(args)
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main() or 0)
