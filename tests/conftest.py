"""Shared fakes for the git server tests."""

from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

import pytest


class FakeGitRunner:
    """GitRunnerProtocol double keyed by (directory name, git subcommand)."""

    def __init__(self, outputs: Optional[Dict[Tuple[str, str], Union[str, Exception]]] = None):
        self.outputs = outputs or {}
        self.calls: List[Tuple[str, Tuple[str, ...]]] = []

    def run(self, cwd, args):
        self.calls.append((Path(cwd).name, tuple(args)))
        result = self.outputs.get((Path(cwd).name, args[0]), "")
        if isinstance(result, Exception):
            raise result
        return result

    async def run_async(self, cwd, args):
        return self.run(cwd, args)


class StubAssistantRunner:
    """AssistantRunnerProtocol double returning a canned output."""

    def __init__(self, output: str = "", error: Optional[Exception] = None):
        self.output = output
        self.error = error
        self.prompts: List[str] = []

    async def run(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.output


@pytest.fixture
def make_git_runner():
    return FakeGitRunner


@pytest.fixture
def make_assistant():
    return StubAssistantRunner


@pytest.fixture
def workspace(tmp_path):
    """Workspace root with a packages directory."""
    (tmp_path / "packages").mkdir()
    return tmp_path


