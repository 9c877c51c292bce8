from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from .git import ChangeRecord


class CommitSuggestion(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    project: str = Field(validation_alias=AliasChoices("project", "package"))
    message: str
    description: str = ""


class SynthesisResult(BaseModel):
    """Suggestions plus a truncated copy of the assistant output for debugging."""

    messages: List[CommitSuggestion]
    raw_output: str = ""


class GenerateCommitMessagesRequest(BaseModel):
    changes: List[ChangeRecord]
    timestamp: Optional[str] = None


class GenerateCommitMessagesResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    messages: List[CommitSuggestion]
    claude_output: str = Field(default="", alias="claudeOutput")
    timestamp: str
