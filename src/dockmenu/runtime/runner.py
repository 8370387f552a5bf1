"""External command execution.

Every interaction dockmenu has with the outside world goes through
:class:`CommandRunner`. Commands are argument vectors and are never
handed to a shell, so container names are passed through verbatim.

Completion of asynchronous commands is delivered on the running asyncio
event loop: ``on_complete`` is called exactly once from inside the task
that ran the command, and the task itself resolves to the same
:class:`CommandResult`.
"""

from __future__ import annotations

import asyncio
import logging
import shlex
import subprocess
from dataclasses import dataclass
from typing import Awaitable, Callable, Iterator, Sequence

from .exceptions import SpawnError

logger = logging.getLogger(__name__)

OnComplete = Callable[["CommandResult"], None]


@dataclass(frozen=True)
class CommandResult:
    """Outcome of a single command execution."""

    succeeded: bool
    command_line: str
    stdout: bytes = b""
    stderr: bytes = b""
    returncode: int | None = None

    @classmethod
    def spawn_failure(cls, command_line: str, exc: Exception) -> CommandResult:
        """Build the result for a command that could not be started."""
        reason = getattr(exc, "strerror", None) or str(exc)
        return cls(
            succeeded=False,
            command_line=command_line,
            stderr=f"failed to spawn `{command_line}`: {reason}".encode(),
        )

    @property
    def error_text(self) -> str:
        return self.stderr.decode(errors="replace").strip()


class CommandRunner:
    """Runs external commands synchronously, asynchronously or detached."""

    def run(self, argv: Sequence[str]) -> CommandResult:
        """Run a command to completion and capture its output."""
        command_line = shlex.join(argv)
        logger.debug("Running %s", command_line)
        try:
            proc = subprocess.run(
                list(argv),
                stdin=subprocess.DEVNULL,
                capture_output=True,
            )
        except (OSError, ValueError) as e:
            logger.warning("Failed to spawn %s: %s", command_line, e)
            return CommandResult.spawn_failure(command_line, e)
        return self._finish(command_line, proc.returncode, proc.stdout, proc.stderr)

    def run_async(
        self,
        argv: Sequence[str],
        on_complete: OnComplete | None = None,
    ) -> asyncio.Task[CommandResult]:
        """Schedule a command on the running loop and return immediately.

        Must be called from inside a running event loop.
        """
        return asyncio.get_running_loop().create_task(
            self._deliver(self._run(list(argv)), on_complete)
        )

    def launch(self, argv: Sequence[str]) -> CommandResult:
        """Start a command in its own session without waiting for it.

        The result only reflects whether the process was started.
        """
        command_line = shlex.join(argv)
        logger.debug("Launching %s", command_line)
        try:
            subprocess.Popen(
                list(argv),
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except (OSError, ValueError) as e:
            logger.warning("Failed to spawn %s: %s", command_line, e)
            return CommandResult.spawn_failure(command_line, e)
        return CommandResult(succeeded=True, command_line=command_line)

    def launch_async(
        self,
        argv: Sequence[str],
        on_complete: OnComplete | None = None,
    ) -> asyncio.Task[CommandResult]:
        """Task-based variant of :meth:`launch`."""
        async def _launch() -> CommandResult:
            return self.launch(argv)

        return asyncio.get_running_loop().create_task(
            self._deliver(_launch(), on_complete)
        )

    def stream_lines(self, argv: Sequence[str]) -> Iterator[str]:
        """Yield the command's stdout line by line.

        Closing the generator early terminates the child process.

        Raises:
            SpawnError: If the command could not be started.
        """
        command_line = shlex.join(argv)
        logger.debug("Streaming %s", command_line)
        try:
            proc = subprocess.Popen(
                list(argv),
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
                text=True,
                errors="replace",
            )
        except (OSError, ValueError) as e:
            raise SpawnError(command_line, getattr(e, "strerror", None) or str(e)) from e

        try:
            for line in proc.stdout:
                yield line.rstrip("\n")
        finally:
            proc.stdout.close()
            if proc.poll() is None:
                proc.terminate()
            proc.wait()

    async def _run(self, argv: list[str]) -> CommandResult:
        command_line = shlex.join(argv)
        logger.debug("Running %s", command_line)
        try:
            proc = await asyncio.create_subprocess_exec(
                *argv,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except (OSError, ValueError) as e:
            logger.warning("Failed to spawn %s: %s", command_line, e)
            return CommandResult.spawn_failure(command_line, e)

        stdout, stderr = await proc.communicate()
        return self._finish(command_line, proc.returncode, stdout, stderr)

    @staticmethod
    async def _deliver(
        work: Awaitable[CommandResult],
        on_complete: OnComplete | None,
    ) -> CommandResult:
        result = await work
        if on_complete is not None:
            on_complete(result)
        return result

    @staticmethod
    def _finish(
        command_line: str, returncode: int, stdout: bytes, stderr: bytes
    ) -> CommandResult:
        if returncode != 0:
            logger.warning("%s exited with status %d", command_line, returncode)
        return CommandResult(
            succeeded=returncode == 0,
            command_line=command_line,
            stdout=stdout or b"",
            stderr=stderr or b"",
            returncode=returncode,
        )
