import asyncio
import contextlib
import logging
import os
import tempfile
from pathlib import Path
from typing import Iterator, List, Optional

from ..errors import AssistantInvocationError

logger = logging.getLogger(__name__)

TEMP_SUBDIR = "metagothic-git"


class AssistantRunner:
    """
    Runs the external assistant CLI non-interactively.

    The prompt is written to a uniquely named file in a managed temp
    directory and fed to the process on stdin. The file is removed on every
    exit path, including timeouts. Colour output is disabled so stdout stays
    parseable.
    """

    def __init__(
        self,
        command: str = "claude",
        args: Optional[List[str]] = None,
        timeout: float = 30.0,
        max_output_bytes: int = 5 * 1024 * 1024,
        temp_dir: Optional[str] = None,
    ):
        self.command = command
        self.args = list(args) if args is not None else ["--print", "--output-format", "json"]
        self.timeout = timeout
        self.max_output_bytes = max_output_bytes
        self.temp_dir = Path(temp_dir or tempfile.gettempdir()) / TEMP_SUBDIR

    @contextlib.contextmanager
    def prompt_file(self, prompt: str) -> Iterator[Path]:
        self.temp_dir.mkdir(parents=True, exist_ok=True)
        fd, name = tempfile.mkstemp(
            prefix="claude-input-", suffix=".txt", dir=self.temp_dir
        )
        path = Path(name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(prompt)
            yield path
        finally:
            try:
                path.unlink(missing_ok=True)
            except OSError as e:
                logger.warning("Failed to cleanup temp file %s: %s", path, e)

    async def run(self, prompt: str) -> str:
        with self.prompt_file(prompt) as prompt_path:
            return await self._invoke(prompt_path)

    async def _invoke(self, prompt_path: Path) -> str:
        env = {**os.environ, "FORCE_COLOR": "0", "NO_COLOR": "1"}
        logger.info("Spawning %s subprocess", self.command)
        try:
            with prompt_path.open("rb") as stdin:
                process = await asyncio.create_subprocess_exec(
                    self.command,
                    *self.args,
                    stdin=stdin,
                    stdout=asyncio.subprocess.PIPE,
                    stderr=asyncio.subprocess.PIPE,
                    env=env,
                )
        except OSError as e:
            raise AssistantInvocationError(f"Failed to start {self.command}: {e}") from e

        try:
            returncode, stdout, stderr = await asyncio.wait_for(
                self._communicate(process), timeout=self.timeout
            )
        except asyncio.TimeoutError as e:
            raise AssistantInvocationError(
                f"{self.command} timed out after {self.timeout} seconds"
            ) from e
        finally:
            if process.returncode is None:
                with contextlib.suppress(ProcessLookupError):
                    process.kill()
                await process.wait()

        if returncode != 0:
            raise AssistantInvocationError(
                f"{self.command} exited with status {returncode}: "
                f"{stderr.decode('utf-8', errors='replace').strip()[:500]}"
            )
        output = stdout.decode("utf-8", errors="replace")
        logger.debug("Raw assistant output: %s", output)
        return output

    async def _communicate(self, process: asyncio.subprocess.Process):
        stderr_task = asyncio.ensure_future(process.stderr.read())
        try:
            stdout = await self._read_capped(process.stdout)
            stderr = await stderr_task
        finally:
            if not stderr_task.done():
                stderr_task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await stderr_task
        return await process.wait(), stdout, stderr

    async def _read_capped(self, stream: asyncio.StreamReader) -> bytes:
        chunks = []
        size = 0
        while True:
            chunk = await stream.read(64 * 1024)
            if not chunk:
                break
            size += len(chunk)
            if size > self.max_output_bytes:
                raise AssistantInvocationError(
                    f"{self.command} output exceeded {self.max_output_bytes} bytes"
                )
            chunks.append(chunk)
        return b"".join(chunks)
