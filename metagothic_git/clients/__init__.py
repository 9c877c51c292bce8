"""HTTP clients for the git server API."""

from .tools_client import ToolsClient, heuristic_commit_messages

__all__ = ["ToolsClient", "heuristic_commit_messages"]
