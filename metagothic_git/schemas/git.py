from enum import Enum
from typing import List, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    model_serializer,
)


class FileStatus(str, Enum):
    """Porcelain status codes the pipeline knows how to describe."""

    MODIFIED = "M"
    ADDED = "A"
    DELETED = "D"
    RENAMED = "R"
    UNTRACKED = "??"


class FileChange(BaseModel):
    """One line of `git status --porcelain=v1` output."""

    model_config = ConfigDict(populate_by_name=True)

    path: str = Field(validation_alias=AliasChoices("path", "file"))
    status_code: str = Field(
        validation_alias=AliasChoices("statusCode", "status_code", "status"),
        serialization_alias="statusCode",
    )
    staged: bool = False


class ChangeRecord(BaseModel):
    """Scan result for a single package."""

    model_config = ConfigDict(populate_by_name=True)

    project: str = Field(validation_alias=AliasChoices("project", "package"))
    directory: str = Field(validation_alias=AliasChoices("directory", "path"))
    branch: Optional[str] = None
    files: List[FileChange] = Field(
        default_factory=list, validation_alias=AliasChoices("files", "changes")
    )
    error: Optional[str] = None

    @computed_field(alias="hasChanges")
    @property
    def has_changes(self) -> bool:
        return self.error is None and len(self.files) > 0

    @model_serializer(mode="wrap")
    def _drop_files_on_error(self, handler):
        # a failed scan carries the error in place of its file list
        data = handler(self)
        if self.error is not None:
            data.pop("files", None)
        return data
