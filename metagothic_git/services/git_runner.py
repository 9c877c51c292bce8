import asyncio
import functools
import logging
from pathlib import Path
from typing import List, Optional, Union

from git import Git
from git.exc import GitError

from ..errors import GitCommandFailedError

logger = logging.getLogger(__name__)


class GitRunner:
    """Runs git commands through GitPython in a given working directory."""

    def __init__(
        self,
        max_output_bytes: int = 10 * 1024 * 1024,
        timeout: Optional[float] = None,
    ):
        self.max_output_bytes = max_output_bytes
        self.timeout = timeout

    def run(self, cwd: Union[str, Path], args: List[str]) -> str:
        """Run `git <args>` in cwd and return its stdout."""
        directory = Path(cwd)
        command = f"git {' '.join(args)}"
        # GitPython silently falls back to the process cwd for missing directories
        if not directory.is_dir():
            raise GitCommandFailedError(
                f"Git command failed: {command}: working directory {directory} does not exist"
            )

        logger.debug("Executing: %s in %s", command, directory)
        try:
            _, stdout, stderr = Git(str(directory)).execute(
                ["git", *args],
                with_extended_output=True,
                strip_newline_in_stdout=False,
                kill_after_timeout=self.timeout,
            )
        except GitError as e:
            logger.error("Git command failed: %s: %s", command, e)
            raise GitCommandFailedError(f"Git command failed: {e}") from e

        if stderr and "warning:" not in stderr:
            logger.warning("Git stderr: %s", stderr)

        # GitPython has already buffered stdout; this rejects oversized output
        # after the fact rather than bounding memory while reading.
        if len(stdout.encode("utf-8")) > self.max_output_bytes:
            raise GitCommandFailedError(
                f"Git command failed: {command}: output exceeded {self.max_output_bytes} bytes"
            )
        return stdout

    async def run_async(self, cwd: Union[str, Path], args: List[str]) -> str:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, functools.partial(self.run, cwd, args))
