"""Unit tests for workspace path containment."""

import pytest

from metagothic_git.errors import ForbiddenGitOptionError, PathOutsideWorkspaceError
from metagothic_git.services import check_git_args, resolve_within


class TestResolveWithin:
    def test_root_itself_is_allowed(self, tmp_path):
        assert resolve_within(tmp_path, tmp_path) == tmp_path.resolve()

    def test_nested_path_is_allowed(self, tmp_path):
        nested = tmp_path / "packages" / "alpha"

        assert resolve_within(nested, tmp_path) == nested.resolve()

    def test_relative_path_is_taken_from_root(self, tmp_path):
        assert resolve_within("packages/alpha", tmp_path) == (
            tmp_path / "packages" / "alpha"
        ).resolve()

    @pytest.mark.parametrize("path", ["..", "../other", "packages/../../etc", "/etc"])
    def test_escaping_paths_are_rejected(self, tmp_path, path):
        with pytest.raises(PathOutsideWorkspaceError, match="Access denied"):
            resolve_within(path, tmp_path / "root")

    def test_sibling_with_common_prefix_is_rejected(self, tmp_path):
        root = tmp_path / "workspace"
        sibling = tmp_path / "workspace-evil"

        with pytest.raises(PathOutsideWorkspaceError):
            resolve_within(sibling, root)

    def test_symlink_out_of_root_is_rejected(self, tmp_path):
        root = tmp_path / "workspace"
        root.mkdir()
        outside = tmp_path / "outside"
        outside.mkdir()
        (root / "link").symlink_to(outside)

        with pytest.raises(PathOutsideWorkspaceError):
            resolve_within("link", root)


class TestCheckGitArgs:
    @pytest.mark.parametrize(
        "args",
        [
            ["-C", "/elsewhere", "status"],
            ["-C/elsewhere", "status"],
            ["--git-dir=/elsewhere/.git", "log"],
            ["--git-dir", "/elsewhere/.git", "log"],
            ["--work-tree=/elsewhere", "status"],
            ["-c", "core.worktree=/elsewhere", "status"],
            ["--no-pager", "-c", "alias.x=!sh", "x"],
            ["--exec-path=/tmp/bin", "status"],
        ],
    )
    def test_redirecting_global_options_are_rejected(self, args):
        with pytest.raises(ForbiddenGitOptionError, match="Access denied"):
            check_git_args(args)

    @pytest.mark.parametrize(
        "args",
        [
            ["status", "--porcelain=v1"],
            ["--no-pager", "log", "--oneline"],
            ["log", "-C", "--stat"],
            ["commit", "-c", "HEAD"],
            [],
        ],
    )
    def test_subcommand_options_are_allowed(self, args):
        check_git_args(args)
