"""Schemas for the application."""

from .app_schemas import (
    GitExecRequest,
    GitStatusRequest,
    GitStatusResponse,
    HealthResponse,
)
from .commit import (
    CommitSuggestion,
    GenerateCommitMessagesRequest,
    GenerateCommitMessagesResponse,
    SynthesisResult,
)
from .git import ChangeRecord, FileChange, FileStatus

__all__ = [
    "ChangeRecord",
    "CommitSuggestion",
    "FileChange",
    "FileStatus",
    "GenerateCommitMessagesRequest",
    "GenerateCommitMessagesResponse",
    "GitExecRequest",
    "GitStatusRequest",
    "GitStatusResponse",
    "HealthResponse",
    "SynthesisResult",
]
