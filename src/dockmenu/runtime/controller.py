"""Facade wiring the runtime components from configuration."""

from __future__ import annotations

import logging
import shlex
from dataclasses import dataclass, field

from ..config import DockMenuConfig, load_config
from .containers import ContainerLister, ContainerRecord
from .lifecycle import LifecycleController
from .probe import RuntimeProbe
from .runner import CommandRunner
from .service import DEFAULT_ELEVATION, DaemonServiceController, DaemonState, Notifier

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuntimeStatus:
    """Point-in-time view of the runtime, for front ends to render."""

    installed: bool
    daemon_running: bool = False
    service_state: DaemonState = DaemonState.UNKNOWN
    containers: list[ContainerRecord] = field(default_factory=list)


class RuntimeController:
    """Entry point for front ends.

    Usage:
        controller = RuntimeController()
        if controller.probe.is_installed():
            for record in controller.lister.list():
                ...
            await controller.lifecycle.apply(LifecycleAction.STOP, "web1")
    """

    def __init__(
        self,
        config: DockMenuConfig | None = None,
        *,
        notify: Notifier | None = None,
        runner: CommandRunner | None = None,
    ):
        self.config = config or load_config()
        self._runner = runner or CommandRunner()
        self.probe = RuntimeProbe(
            self.config.runtime, self.config.daemon_process, runner=self._runner
        )
        self.lister = ContainerLister(self.config.runtime, runner=self._runner)
        self.service = DaemonServiceController(
            self.config.service,
            elevation=self._elevation(),
            notify=notify,
            runner=self._runner,
        )
        # The terminal is only discovered when a shell is first opened.
        self.lifecycle = LifecycleController(
            self.config.runtime,
            shell=self.config.shell,
            terminal_command=self.config.terminal,
            runner=self._runner,
        )

    def _elevation(self) -> list[str]:
        try:
            return shlex.split(self.config.elevation)
        except ValueError as e:
            logger.warning(
                "Ignoring malformed elevation setting %r: %s", self.config.elevation, e
            )
            return list(DEFAULT_ELEVATION)

    def snapshot(self) -> RuntimeStatus:
        """Probe everything once.

        Nothing beyond the install check runs when the runtime is missing.
        Containers are only listed while the daemon is running.

        Raises:
            ListingError: If the daemon is running but listing fails.
        """
        if not self.probe.is_installed():
            logger.info("%s is not installed", self.config.runtime)
            return RuntimeStatus(installed=False)

        daemon_running = self.probe.is_running()
        containers = self.lister.list() if daemon_running else []
        return RuntimeStatus(
            installed=True,
            daemon_running=daemon_running,
            service_state=self.service.query_status(),
            containers=containers,
        )
