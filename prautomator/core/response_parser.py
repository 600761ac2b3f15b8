"""
Response parsing for AI-generated PR descriptions.

Splits free-form markdown into a title and a body. Parsing never fails:
when no title marker is recognised a generic title is used so that PR
creation is not blocked by format drift.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

DEFAULT_TITLE = "feat: Default AI Generated Title"

# Checked in order: current template first, then the legacy format.
TITLE_MARKERS = ("**title:**", "title:")

FENCE_LINE = "---"


@dataclass(frozen=True)
class ParsedPR:
    """Title and body ready for PR creation."""

    title: str
    body: str


class ResponseParser:
    """
    Stateless parser turning raw AI markdown into a ParsedPR.
    """

    def __init__(self, default_title: str = DEFAULT_TITLE):
        if not default_title.strip():
            raise ValueError("default_title must not be empty")
        self.default_title = default_title

    def parse(self, raw_text: str) -> ParsedPR:
        lines = (raw_text or "").split("\n")

        found = self._find_title(lines)
        if found is None:
            title = self.default_title
            body_start = 0
        else:
            title, body_start = found
            # A bare marker line still counts as the title line.
            title = title or self.default_title

        body = self._clean_body(lines[body_start:])
        return ParsedPR(title=title, body=body)

    def _find_title(self, lines: List[str]) -> Optional[Tuple[str, int]]:
        """
        Locate the first line starting with a title marker.

        Each marker is searched across all lines before falling back to
        the next one.
        """
        for marker in TITLE_MARKERS:
            for index, line in enumerate(lines):
                if line.lower().startswith(marker):
                    return line[len(marker):].strip(), index + 1
        return None

    def _clean_body(self, lines: List[str]) -> str:
        body_lines = "\n".join(lines).strip().split("\n")

        if body_lines and body_lines[0].strip() == FENCE_LINE:
            body_lines = body_lines[1:]
        if body_lines and body_lines[-1].strip() == FENCE_LINE:
            body_lines = body_lines[:-1]

        return "\n".join(body_lines).strip()


def parse_pr_response(raw_text: str) -> ParsedPR:
    """Parse with the default title fallback."""
    return ResponseParser().parse(raw_text)
