"""Runtime installation and daemon liveness checks."""

from __future__ import annotations

import logging
import shutil

from .exceptions import SpawnError
from .runner import CommandRunner

logger = logging.getLogger(__name__)

PS_COMMAND = ["ps", "cax"]


class RuntimeProbe:
    """Answers "is the runtime usable?" with plain booleans.

    Probes never raise: a probe that cannot run reports the runtime as
    unavailable.
    """

    def __init__(
        self,
        runtime: str = "docker",
        daemon_process: str = "docker",
        runner: CommandRunner | None = None,
    ):
        self.runtime = runtime
        self.daemon_process = daemon_process
        self._runner = runner or CommandRunner()

    def is_installed(self) -> bool:
        """Check whether the runtime binary resolves on PATH."""
        return shutil.which(self.runtime) is not None

    def is_running(self, exact: bool = False) -> bool:
        """Scan the process table for the daemon.

        By default a line matches when it contains the daemon process
        name anywhere, so ``dockerd`` and ``docker-proxy`` both count.
        With ``exact=True`` only the command column is compared.
        """
        try:
            for line in self._runner.stream_lines(PS_COMMAND):
                if self._matches(line, exact):
                    logger.debug("Daemon process found: %s", line.strip())
                    return True
        except SpawnError as e:
            logger.warning("Could not scan process table: %s", e)
            return False
        return False

    def _matches(self, line: str, exact: bool) -> bool:
        if not exact:
            return self.daemon_process in line
        fields = line.split()
        return bool(fields) and fields[-1] == self.daemon_process
