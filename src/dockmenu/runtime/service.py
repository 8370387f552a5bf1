"""Daemon service control through systemd.

Starting and stopping the daemon is wrapped in privilege elevation
(``pkexec`` by default), which may prompt the user. A completed toggle
only means the elevated ``systemctl`` call returned; query the state
again to learn what the daemon is actually doing.
"""

from __future__ import annotations

import asyncio
import logging
import os
import shutil
from enum import Enum
from typing import Callable, Sequence

from .runner import CommandResult, CommandRunner

logger = logging.getLogger(__name__)

DEFAULT_SERVICE = "docker.service"
DEFAULT_ELEVATION = ("pkexec", "--user", "root")

ToggleCallback = Callable[[bool, str], None]
Notifier = Callable[[str], None]


class DaemonState(Enum):
    """Daemon state as reported by the service manager."""

    RUNNING = "running"
    STOPPED = "stopped"
    UNKNOWN = "unknown"


class DaemonServiceController:
    """Queries and toggles the runtime daemon's system service."""

    def __init__(
        self,
        service: str = DEFAULT_SERVICE,
        *,
        elevation: Sequence[str] = DEFAULT_ELEVATION,
        notify: Notifier | None = None,
        runner: CommandRunner | None = None,
    ):
        self.service = service
        self.elevation = list(elevation)
        self._notify = notify
        self._runner = runner or CommandRunner()

    def is_available(self) -> bool:
        """Check that systemctl and the elevation helper are installed."""
        if shutil.which("systemctl") is None:
            return False
        if self._elevation_prefix() and shutil.which(self.elevation[0]) is None:
            return False
        return True

    def query_status(self) -> DaemonState:
        """Ask systemd whether the daemon service is active."""
        result = self._runner.run(["systemctl", "is-active", self.service, "--system"])
        if result.returncode is None:
            return DaemonState.UNKNOWN
        if result.stdout.decode(errors="replace").strip() == "active":
            return DaemonState.RUNNING
        return DaemonState.STOPPED

    def action_argv(self, service_action: str) -> list[str]:
        return [
            *self._elevation_prefix(),
            "systemctl",
            service_action,
            self.service,
            "--system",
        ]

    def toggle(
        self,
        current_state: DaemonState,
        on_complete: ToggleCallback | None = None,
    ) -> asyncio.Task[bool]:
        """Stop a running daemon, otherwise start it.

        An UNKNOWN state is treated as stopped.
        """
        service_action = "stop" if current_state is DaemonState.RUNNING else "start"
        return self._dispatch(service_action, on_complete)

    def start(self, on_complete: ToggleCallback | None = None) -> asyncio.Task[bool]:
        return self._dispatch("start", on_complete)

    def stop(self, on_complete: ToggleCallback | None = None) -> asyncio.Task[bool]:
        return self._dispatch("stop", on_complete)

    def _elevation_prefix(self) -> list[str]:
        if os.geteuid() == 0:
            return []
        return self.elevation

    def _dispatch(
        self, service_action: str, on_complete: ToggleCallback | None
    ) -> asyncio.Task[bool]:
        logger.info("Let's %s %s...", service_action, self.service)

        async def _run() -> bool:
            result = await self._runner.run_async(self.action_argv(service_action))
            self._report(result)
            if on_complete is not None:
                on_complete(result.succeeded, result.command_line)
            return result.succeeded

        return asyncio.get_running_loop().create_task(_run())

    def _report(self, result: CommandResult) -> None:
        if result.succeeded:
            logger.info("`%s` terminated successfully", result.command_line)
            return

        message = f"Error occurred when running `{result.command_line}`"
        logger.error("%s", message)
        if result.error_text:
            logger.debug("%s", result.error_text)
        if self._notify is not None:
            self._notify(message)
