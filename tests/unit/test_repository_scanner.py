"""Unit tests for porcelain parsing and RepositoryScanner."""

from pathlib import Path

import pytest

from metagothic_git.errors import GitCommandFailedError
from metagothic_git.schemas import ChangeRecord, FileChange
from metagothic_git.services import (
    RepositoryScanner,
    filter_reportable,
    parse_porcelain_status,
)


class TestParsePorcelainStatus:
    """Test cases for parse_porcelain_status."""

    def test_worktree_modification_is_not_staged(self):
        changes = parse_porcelain_status(" M src/a.ts\n")

        assert changes == [FileChange(path="src/a.ts", status_code="M", staged=False)]

    def test_index_changes_are_staged(self):
        changes = parse_porcelain_status("M  src/a.ts\nA  src/b.ts\nD  old.ts\n")

        assert [(c.status_code, c.staged) for c in changes] == [
            ("M", True),
            ("A", True),
            ("D", True),
        ]

    def test_untracked_is_never_staged(self):
        changes = parse_porcelain_status("?? notes.md\n")

        assert changes[0].status_code == "??"
        assert changes[0].staged is False

    def test_blank_status_becomes_untracked(self):
        changes = parse_porcelain_status("   weird.txt\n")

        assert changes[0].status_code == "??"
        assert changes[0].staged is False
        assert changes[0].path == "weird.txt"

    def test_rename_keeps_arrow_in_path(self):
        changes = parse_porcelain_status("R  old.ts -> new.ts\n")

        assert changes[0].status_code == "R"
        assert changes[0].path == "old.ts -> new.ts"

    def test_blank_lines_are_skipped(self):
        assert parse_porcelain_status("") == []
        assert parse_porcelain_status("\n  \n") == []

    def test_listing_order_is_preserved(self):
        changes = parse_porcelain_status(" M b.ts\n?? a.ts\n M c.ts\n")

        assert [c.path for c in changes] == ["b.ts", "a.ts", "c.ts"]


class TestRepositoryScanner:
    """Test cases for RepositoryScanner."""

    @pytest.fixture(autouse=True)
    def setup(self, make_git_runner):
        self.packages_root = Path("/workspace/packages")
        self.git_runner = make_git_runner(
            {
                ("alpha", "status"): " M src/a.ts\n",
                ("alpha", "branch"): "main\n",
                ("beta", "status"): "",
                ("beta", "branch"): "develop\n",
                ("gamma", "status"): GitCommandFailedError("Git command failed: boom"),
            }
        )

    @pytest.mark.asyncio
    async def test_scan_all_keeps_configured_order(self):
        scanner = RepositoryScanner(
            self.git_runner, self.packages_root, ["gamma", "beta", "alpha"]
        )

        records = await scanner.scan_all()

        assert [r.project for r in records] == ["gamma", "beta", "alpha"]

    @pytest.mark.asyncio
    async def test_modified_file_and_clean_package(self):
        scanner = RepositoryScanner(self.git_runner, self.packages_root, ["alpha", "beta"])

        records = filter_reportable(await scanner.scan_all())

        assert len(records) == 1
        alpha = records[0]
        assert alpha.project == "alpha"
        assert alpha.directory == str(self.packages_root / "alpha")
        assert alpha.branch == "main"
        assert alpha.has_changes is True
        assert alpha.files == [FileChange(path="src/a.ts", status_code="M", staged=False)]

    @pytest.mark.asyncio
    async def test_failure_is_isolated_to_one_package(self):
        scanner = RepositoryScanner(
            self.git_runner, self.packages_root, ["alpha", "gamma", "beta"]
        )

        records = await scanner.scan_all()

        gamma = records[1]
        assert gamma.error == "Git command failed: boom"
        assert gamma.has_changes is False
        assert gamma.files == []
        assert gamma.branch is None
        assert records[0].has_changes is True
        assert records[2].branch == "develop"

    @pytest.mark.asyncio
    async def test_branch_is_queried_after_status(self):
        scanner = RepositoryScanner(self.git_runner, self.packages_root, ["alpha"])

        await scanner.scan_all()

        assert self.git_runner.calls == [
            ("alpha", ("status", "--porcelain=v1")),
            ("alpha", ("branch", "--show-current")),
        ]

    @pytest.mark.asyncio
    async def test_branch_not_queried_when_status_fails(self):
        scanner = RepositoryScanner(self.git_runner, self.packages_root, ["gamma"])

        await scanner.scan_all()

        assert self.git_runner.calls == [("gamma", ("status", "--porcelain=v1"))]


class TestFilterReportable:
    def test_keeps_dirty_and_failed_packages_only(self):
        records = [
            ChangeRecord(project="clean", directory="/p/clean", branch="main"),
            ChangeRecord(project="broken", directory="/p/broken", error="boom"),
            ChangeRecord(
                project="dirty",
                directory="/p/dirty",
                branch="main",
                files=[FileChange(path="a", status_code="??")],
            ),
        ]

        assert [r.project for r in filter_reportable(records)] == ["broken", "dirty"]


class TestChangeRecordSerialization:
    def test_failed_record_carries_error_instead_of_files(self):
        record = ChangeRecord(project="broken", directory="/p/broken", error="boom")

        data = record.model_dump(by_alias=True, exclude_none=True)

        assert data == {
            "project": "broken",
            "directory": "/p/broken",
            "error": "boom",
            "hasChanges": False,
        }

    def test_clean_record_keeps_empty_file_list(self):
        record = ChangeRecord(project="clean", directory="/p/clean", branch="main")

        data = record.model_dump(by_alias=True)

        assert data["files"] == []
        assert data["hasChanges"] is False
