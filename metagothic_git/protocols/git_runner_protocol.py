"""Git runner protocol interface."""

from pathlib import Path
from typing import List, Protocol, Union, runtime_checkable


@runtime_checkable
class GitRunnerProtocol(Protocol):
    """Protocol for running git commands inside a working directory."""

    def run(self, cwd: Union[str, Path], args: List[str]) -> str:
        """Run `git <args>` in cwd and return stdout. Raises GitCommandFailedError."""
        ...

    async def run_async(self, cwd: Union[str, Path], args: List[str]) -> str:
        """Same as run() without blocking the event loop."""
        ...
