import logging
from itertools import islice
from pathlib import Path
from typing import List

from ..errors import AssistantInvocationError
from ..protocols.assistant_runner_protocol import AssistantRunnerProtocol
from ..protocols.git_runner_protocol import GitRunnerProtocol
from ..schemas import ChangeRecord, FileChange, FileStatus, SynthesisResult
from .prompt_builder import build_prompt
from .response_parser import parse_assistant_output
from .workspace import resolve_within

logger = logging.getLogger(__name__)

BACKLOG_PLACEHOLDER = "Backlog not available"
DIAGNOSTIC_OUTPUT_CHARS = 500


def _head(text: str, max_lines: int) -> str:
    return "".join(text.splitlines(keepends=True)[:max_lines])


def _read_head(path: Path, max_lines: int) -> str:
    with path.open(encoding="utf-8", errors="replace") as handle:
        return "".join(islice(handle, max_lines))


class CommitMessageSynthesizer:
    """Drafts one commit message per package by asking the external assistant."""

    def __init__(
        self,
        git_runner: GitRunnerProtocol,
        assistant_runner: AssistantRunnerProtocol,
        workspace_root: Path,
        backlog_path: Path,
        backlog_max_lines: int = 50,
        diff_max_lines: int = 20,
        preview_max_lines: int = 10,
    ):
        self.git_runner = git_runner
        self.assistant_runner = assistant_runner
        self.workspace_root = Path(workspace_root).resolve()
        self.backlog_path = Path(backlog_path)
        self.backlog_max_lines = backlog_max_lines
        self.diff_max_lines = diff_max_lines
        self.preview_max_lines = preview_max_lines

    async def synthesize(self, changes: List[ChangeRecord]) -> SynthesisResult:
        logger.info("Generating commit messages for %d packages", len(changes))
        backlog = self.read_backlog()
        file_details = await self.gather_file_details(changes)
        prompt = build_prompt(backlog, file_details, changes)

        try:
            raw_output = await self.assistant_runner.run(prompt)
        except AssistantInvocationError as e:
            logger.warning("Assistant invocation failed, using fallback messages: %s", e)
            raw_output = ""

        messages = parse_assistant_output(raw_output, changes)
        return SynthesisResult(
            messages=messages, raw_output=raw_output[:DIAGNOSTIC_OUTPUT_CHARS]
        )

    def read_backlog(self) -> str:
        try:
            excerpt = _read_head(self.backlog_path, self.backlog_max_lines)
        except OSError as e:
            logger.debug("Backlog unavailable at %s: %s", self.backlog_path, e)
            return BACKLOG_PLACEHOLDER
        return excerpt or BACKLOG_PLACEHOLDER

    async def gather_file_details(self, changes: List[ChangeRecord]) -> str:
        """Describe every changed file, in package and listing order."""
        sections = []
        for record in changes:
            sections.append(f"\n=== Package: {record.project} ===\n")
            for change in record.files:
                try:
                    sections.append(await self.describe_file(record, change))
                except Exception as e:
                    logger.debug("No analysis for %s in %s: %s", change.path, record.project, e)
                    sections.append(
                        f"\nFile: {change.path} ({change.status_code}) - Analysis not available\n"
                    )
        return "".join(sections)

    async def describe_file(self, record: ChangeRecord, change: FileChange) -> str:
        directory = resolve_within(record.directory, self.workspace_root)
        file_path = resolve_within(directory / change.path, self.workspace_root)

        if change.status_code == FileStatus.MODIFIED.value:
            diff = await self.git_runner.run_async(
                directory, ["diff", "HEAD", "--", change.path]
            )
            diff = _head(diff, self.diff_max_lines)
            return f"\nFile: {change.path} (Modified)\nRecent changes:\n{diff or 'No diff available'}\n"

        if change.status_code in (FileStatus.ADDED.value, FileStatus.UNTRACKED.value):
            try:
                preview = _read_head(file_path, self.preview_max_lines)
            except OSError:
                preview = ""
            return f"\nFile: {change.path} (New)\nContent preview:\n{preview or 'Content not available'}\n"

        if change.status_code == FileStatus.DELETED.value:
            return f"\nFile: {change.path} (Deleted)\n"

        return f"\nFile: {change.path} ({change.status_code}) - Analysis not available\n"
