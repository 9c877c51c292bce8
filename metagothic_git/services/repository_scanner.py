import asyncio
import logging
from pathlib import Path
from typing import Iterable, List

from ..protocols.git_runner_protocol import GitRunnerProtocol
from ..schemas import ChangeRecord, FileChange, FileStatus

logger = logging.getLogger(__name__)


def parse_porcelain_status(output: str) -> List[FileChange]:
    """
    Parse `git status --porcelain=v1` output into FileChange entries.

    The status code is the first two characters and the path starts after
    the separating space. A blank code is reported as untracked.
    """
    changes = []
    for line in output.splitlines():
        if not line.strip():
            continue
        status = line[:2]
        changes.append(
            FileChange(
                path=line[3:],
                status_code=status.strip() or FileStatus.UNTRACKED.value,
                staged=status[:1] not in ("", " ", "?"),
            )
        )
    return changes


def filter_reportable(records: Iterable[ChangeRecord]) -> List[ChangeRecord]:
    """Drop packages that are clean and scanned without error."""
    return [record for record in records if record.has_changes or record.error]


class RepositoryScanner:
    """Scans a fixed list of packages for uncommitted changes."""

    def __init__(
        self,
        git_runner: GitRunnerProtocol,
        packages_root: Path,
        packages: List[str],
    ):
        self.git_runner = git_runner
        self.packages_root = Path(packages_root)
        self.packages = list(packages)

    async def scan_all(self) -> List[ChangeRecord]:
        """Scan every package concurrently, keeping the configured order."""
        return list(
            await asyncio.gather(*(self.scan_package(name) for name in self.packages))
        )

    async def scan_package(self, name: str) -> ChangeRecord:
        directory = self.packages_root / name
        try:
            status_output = await self.git_runner.run_async(
                directory, ["status", "--porcelain=v1"]
            )
            files = parse_porcelain_status(status_output)
            branch = await self.git_runner.run_async(
                directory, ["branch", "--show-current"]
            )
        except Exception as e:
            logger.error("Error scanning %s: %s", name, e)
            return ChangeRecord(project=name, directory=str(directory), error=str(e))

        return ChangeRecord(
            project=name,
            directory=str(directory),
            branch=branch.strip(),
            files=files,
        )
