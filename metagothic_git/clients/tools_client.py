"""
Async client for the git server, as used by the dashboard's Tools page.

Failures never propagate to the caller: scanning degrades to an empty list
and message generation degrades to messages derived from the file list.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import httpx
from pydantic import TypeAdapter, ValidationError

from ..config.settings import Settings, get_settings
from ..schemas import ChangeRecord, CommitSuggestion, FileStatus

logger = logging.getLogger(__name__)

_records = TypeAdapter(List[ChangeRecord])
_suggestions = TypeAdapter(List[CommitSuggestion])


def _count(record: ChangeRecord, status: FileStatus) -> int:
    return sum(1 for change in record.files if change.status_code == status.value)


def heuristic_commit_messages(changes: List[ChangeRecord]) -> List[CommitSuggestion]:
    """Commit messages built from status codes alone, used when the server is unreachable."""
    suggestions = []
    for record in changes:
        name = record.project
        file_count = len(record.files)
        file_list = ", ".join(change.path for change in record.files)
        added = _count(record, FileStatus.ADDED)
        modified = _count(record, FileStatus.MODIFIED)
        deleted = _count(record, FileStatus.DELETED)
        untracked = _count(record, FileStatus.UNTRACKED)

        if added and modified:
            message = f"feat: enhance {name} with new features and improvements"
            description = f"Added {added} new files and modified {modified} existing files"
        elif added or untracked:
            message = f"feat: add new components to {name}"
            description = f"Introduced {file_count} new files: {file_list}"
        elif modified:
            message = f"refactor: update {name} implementation"
            description = f"Modified {file_count} files: {file_list}"
        elif deleted:
            message = f"refactor: remove unused files from {name}"
            description = f"Deleted {file_count} files: {file_list}"
        else:
            message = f"chore: update {name}"
            description = f"Updated {file_count} files in {name}"

        suggestions.append(
            CommitSuggestion(project=name, message=message, description=description)
        )
    return suggestions


class ToolsClient:
    """Thin wrapper over the scan and commit-message endpoints."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        settings: Optional[Settings] = None,
    ):
        settings = settings or get_settings()
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url, timeout=self.timeout, transport=self._transport
        )

    async def health(self) -> Dict[str, Any]:
        async with self._client() as client:
            response = await client.get("/api/git/health")
            response.raise_for_status()
            return response.json()

    async def scan_uncommitted_changes(self) -> List[ChangeRecord]:
        logger.info("Scanning for uncommitted changes in metaGOTHIC packages")
        try:
            async with self._client() as client:
                response = await client.get("/api/git/scan-all")
                response.raise_for_status()
                return _records.validate_python(response.json())
        except (httpx.HTTPError, ValidationError, ValueError) as e:
            logger.warning("Git scanning failed, returning empty list: %s", e)
            return []

    async def generate_commit_messages(
        self, changes: List[ChangeRecord]
    ) -> List[CommitSuggestion]:
        payload = {
            "changes": [record.model_dump(by_alias=True) for record in changes],
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        try:
            async with self._client() as client:
                response = await client.post(
                    "/api/claude/generate-commit-messages", json=payload
                )
                response.raise_for_status()
                return _suggestions.validate_python(response.json().get("messages", []))
        except (httpx.HTTPError, ValidationError, ValueError) as e:
            logger.error("Failed to generate commit messages: %s", e)
            return heuristic_commit_messages(changes)
