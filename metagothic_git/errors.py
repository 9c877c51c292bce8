"""Exceptions raised by the git server services."""


class GitServerError(Exception):
    """Base class for all errors raised by this package."""


class PathOutsideWorkspaceError(GitServerError):
    """A caller supplied a path that resolves outside the workspace root."""

    def __init__(self, path: str, workspace_root: str):
        self.path = path
        self.workspace_root = workspace_root
        super().__init__(
            f"Access denied: {path} is outside of workspace {workspace_root}"
        )


class GitCommandFailedError(GitServerError):
    """A git invocation exited non-zero, timed out or produced too much output."""


class AssistantInvocationError(GitServerError):
    """The external assistant process could not produce output."""


class ForbiddenGitOptionError(GitServerError):
    """A caller passed a git global option that points git outside the workspace."""

    def __init__(self, option: str):
        self.option = option
        super().__init__(f"Access denied: git option {option} is not allowed")
