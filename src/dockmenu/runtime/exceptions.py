"""dockmenu runtime exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .runner import CommandResult


class DockMenuError(Exception):
    """Base exception for dockmenu errors."""


class SpawnError(DockMenuError):
    """An external command could not be started."""

    def __init__(self, command_line: str, reason: str):
        self.command_line = command_line
        self.reason = reason
        super().__init__(f"failed to spawn `{command_line}`: {reason}")


class ListingError(DockMenuError):
    """The container listing command failed."""

    def __init__(self, result: CommandResult):
        self.result = result
        detail = result.stderr.decode(errors="replace").strip()
        message = f"Error occurred when fetching containers (`{result.command_line}`)"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class RuntimeNotInstalled(DockMenuError):
    """The container runtime binary is not on PATH."""

    def __init__(self, runtime: str):
        self.runtime = runtime
        super().__init__(f"{runtime} is not installed or not on PATH")


class DaemonNotRunning(DockMenuError):
    """The container runtime daemon is not running."""

    def __init__(self, service: str):
        self.service = service
        super().__init__(
            f"{service} is not running. "
            "Start it with: dockmenu daemon start"
        )
