"""Protocols for swappable service implementations."""

from .assistant_runner_protocol import AssistantRunnerProtocol
from .git_runner_protocol import GitRunnerProtocol

__all__ = ["AssistantRunnerProtocol", "GitRunnerProtocol"]
