"""Request and response bodies for the git endpoints."""

from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class GitExecRequest(BaseModel):
    cwd: str = Field(min_length=1)
    args: List[str]


class GitStatusRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    workspace_path: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("workspacePath", "workspace_path"),
    )


class GitStatusResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    output: str
    workspace_path: str = Field(alias="workspacePath")
    timestamp: str


class HealthResponse(BaseModel):
    status: str
    version: str
