# Core modules
from .prompt_builder import build_messages, build_pr_prompt
from .response_parser import ParsedPR, ResponseParser, parse_pr_response
from .pr_generator import PRGenerator, PRGenerationError

__all__ = [
    "build_messages",
    "build_pr_prompt",
    "ParsedPR",
    "ResponseParser",
    "parse_pr_response",
    "PRGenerator",
    "PRGenerationError",
]
