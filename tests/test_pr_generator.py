"""
Tests for PRGenerator, the diffs -> prompt -> provider -> parser pipeline.

Git and HTTP are replaced by fakes.
"""

from typing import Any, Dict, List

import pytest

from prautomator.core.ai.base import Failure, FailureKind
from prautomator.core.ai.invoker import ProviderInvoker
from prautomator.core.pr_generator import DIFF_UNAVAILABLE, PRGenerationError, PRGenerator
from prautomator.core.response_parser import ParsedPR
from prautomator.services.git_service import GitCommandError


# ---------------------------------------------------------------------------
# Helpers / Fakes
# ---------------------------------------------------------------------------

class FakeGit:
    """GitService stand-in serving canned diffs."""

    def __init__(self, diffs: Dict[str, str], failing: tuple = ()):
        self.diffs = diffs
        self.failing = set(failing)
        self.calls: List[tuple] = []

    def get_file_diff(self, path: str, base_ref: str = "origin/main") -> str:
        self.calls.append((path, base_ref))
        if path in self.failing:
            raise GitCommandError(f"unknown revision for {path}")
        return self.diffs[path]


class FakeResponse:
    status_code = 200
    ok = True

    def __init__(self, data: Any):
        self._data = data
        self.text = ""

    def json(self) -> Any:
        return self._data


class FakeSession:
    def __init__(self, data: Any):
        self.data = data
        self.payloads: List[Dict[str, Any]] = []

    def post(self, url, json=None, headers=None, timeout=None):
        self.payloads.append(json)
        return FakeResponse(self.data)


class FailingInvoker:
    def __init__(self, failure: Failure):
        self.failure = failure

    def invoke(self, identifier, credential, model, messages):
        return self.failure


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------

def test_end_to_end_deepseek_scenario():
    git = FakeGit({"a.js": "+console.log(1)"})
    session = FakeSession({"choices": [{"message": {"content": "**Title:** test\n\nbody"}}]})
    generator = PRGenerator(git_service=git, invoker=ProviderInvoker(session=session))

    parsed = generator.generate(["a.js"], "deepseek", "sk-test", "deepseek-chat")

    assert parsed == ParsedPR(title="test", body="body")
    system_prompt = session.payloads[0]["messages"][0]["content"]
    assert "a.js" in system_prompt
    assert "+console.log(1)" in system_prompt
    assert git.calls == [("a.js", "origin/main")]


def test_collect_changes_uses_placeholder_for_failed_diffs():
    git = FakeGit({"ok.py": "+1"}, failing=("gone.py",))
    generator = PRGenerator(git_service=git, invoker=FailingInvoker(None))

    changes = generator.collect_changes(["ok.py", "gone.py"], base_ref="origin/develop")

    assert changes == {"ok.py": "+1", "gone.py": DIFF_UNAVAILABLE}
    assert list(changes) == ["ok.py", "gone.py"]
    assert git.calls == [("ok.py", "origin/develop"), ("gone.py", "origin/develop")]


def test_provider_failure_raises_with_typed_failure():
    failure = Failure(FailureKind.REQUEST_FAILED, '{"error": "quota"}', status_code=429)
    generator = PRGenerator(git_service=FakeGit({"a": "+a"}), invoker=FailingInvoker(failure))

    with pytest.raises(PRGenerationError) as exc:
        generator.generate(["a"], "openai", "k", "gpt-4o")

    assert exc.value.failure is failure
    assert "quota" in str(exc.value)
    assert "HTTP 429" in str(exc.value)


def test_unknown_provider_surfaces_as_generation_error():
    session = FakeSession({})
    generator = PRGenerator(git_service=FakeGit({"a": "+a"}), invoker=ProviderInvoker(session=session))

    with pytest.raises(PRGenerationError) as exc:
        generator.generate(["a"], "nonexistent", "k", "m")

    assert exc.value.failure.kind is FailureKind.UNKNOWN_PROVIDER
    assert session.payloads == []


def test_gemini_pipeline_combines_prompt_and_trigger():
    session = FakeSession({"candidates": [{"content": {"parts": [{"text": "Title: fix: y\nDetails"}]}}]})
    generator = PRGenerator(git_service=FakeGit({"y.py": "+y"}), invoker=ProviderInvoker(session=session))

    parsed = generator.generate(["y.py"], "gemini", "g", "gemini-pro")

    assert parsed == ParsedPR(title="fix: y", body="Details")
    text = session.payloads[0]["contents"][0]["parts"][0]["text"]
    assert text.endswith("\n\nPlease generate the PR description based on the provided context.")
