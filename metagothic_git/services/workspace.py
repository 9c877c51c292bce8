from pathlib import Path
from typing import List, Union

from ..errors import ForbiddenGitOptionError, PathOutsideWorkspaceError

# Global options that change the repository, work tree, config or helper
# binaries git uses. Each takes a value, either attached with `=` or as the
# next argument.
REDIRECTING_GIT_OPTIONS = (
    "-C",
    "-c",
    "--git-dir",
    "--work-tree",
    "--namespace",
    "--exec-path",
    "--config-env",
    "--super-prefix",
)


def resolve_within(path: Union[str, Path], workspace_root: Path) -> Path:
    """
    Resolve path and ensure it is the workspace root or nested under it.

    Relative paths are taken relative to the workspace root. Symlinks are
    resolved before the check, so a link pointing outside is rejected too.

    Raises:
        PathOutsideWorkspaceError: the resolved path escapes the root.
    """
    root = Path(workspace_root).resolve()
    candidate = Path(path)
    if not candidate.is_absolute():
        candidate = root / candidate
    resolved = candidate.resolve()

    if resolved != root and root not in resolved.parents:
        raise PathOutsideWorkspaceError(str(path), str(root))
    return resolved


def check_git_args(args: List[str]) -> None:
    """
    Reject global options placed before the git subcommand that would make
    git read or run something outside the working directory.

    Raises:
        ForbiddenGitOptionError: a redirecting global option was found.
    """
    for arg in args:
        if not arg.startswith("-"):
            # first non-option is the subcommand; later args belong to it
            return
        for option in REDIRECTING_GIT_OPTIONS:
            if arg == option or arg.startswith(option + "=") or (
                len(option) == 2 and arg.startswith(option)
            ):
                raise ForbiddenGitOptionError(option)
