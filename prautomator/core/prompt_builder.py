"""
Prompt construction for PR descriptions.

Provider-agnostic: produces a system prompt plus a short user trigger.
The section labels (notably ``**Title:**``) are what the response parser
looks for, so they must stay in sync with core/response_parser.py.
"""

import json
from typing import List, Mapping, Sequence

from prautomator.core.ai.base import ChatMessage, SYSTEM_ROLE, USER_ROLE

USER_TRIGGER = "Please generate the PR description based on the provided context."


def serialize_changes(changes: Mapping[str, str]) -> str:
    """Diff mapping as pretty JSON, keeping insertion order and non-ASCII text."""
    return json.dumps(dict(changes), indent=2, ensure_ascii=False)


def build_pr_prompt(files: Sequence[str], changes: Mapping[str, str]) -> str:
    """Build the system prompt describing the required PR format and the diff."""
    files_changed = ", ".join(files)
    diff_block = serialize_changes(changes)

    return f"""
You are an expert software developer and a master at writing clear, concise, and professional Pull Request descriptions.
Your task is to analyze the provided code changes (git diff) and generate a comprehensive PR description.

**Output Format Requirements:**
Please generate the content in Markdown format, strictly following this structure:

---
**Title:** A conventional commit style title (e.g., "feat:", "fix:", "docs:", "style:", "refactor:", "perf:", "test:"). Start with a relevant emoji.
**Overview:** A brief, high-level summary of what this PR accomplishes.
**Key Features Implemented:**
- 🌟 [Emoji] A bullet point list describing each major feature or change.
- 🐛 [Emoji] Highlight bug fixes.
- 🛠️ [Emoji] Detail refactoring or technical improvements.
**Technical Details:**
- Explain the "how" behind the changes. Mention specific files, functions, algorithms, or architectural decisions.
- If there are important dependencies or configuration changes, note them here.
**Future Enhancements:**
- (Optional) Suggest potential future improvements, next steps, or open questions related to these changes.
---

**Code Changes to Analyze:**
- **Files Changed:** {files_changed}
- **Detailed Diff:**
```diff
{diff_block}
```

Now, generate the PR description based on the changes provided.
"""


def build_messages(files: Sequence[str], changes: Mapping[str, str]) -> List[ChatMessage]:
    """System instructions followed by the user trigger phrase."""
    return [
        ChatMessage(role=SYSTEM_ROLE, content=build_pr_prompt(files, changes)),
        ChatMessage(role=USER_ROLE, content=USER_TRIGGER),
    ]
