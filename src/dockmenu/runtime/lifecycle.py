"""Container lifecycle actions."""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Sequence

from .runner import CommandResult, CommandRunner, OnComplete
from .terminal import default_terminal

logger = logging.getLogger(__name__)

DEFAULT_SHELL = "/bin/bash"


class LifecycleAction(Enum):
    """Container state transitions, with their runtime subcommand and label."""

    START = ("start", "start", "Start")
    STOP = ("stop", "stop", "Stop")
    RESTART = ("restart", "restart", "Restart")
    PAUSE = ("pause", "pause", "Pause")
    UNPAUSE = ("unpause", "unpause", "Unpause")
    REMOVE = ("remove", "rm", "Remove")
    OPEN_SHELL = ("open-shell", "exec", "Open Terminal")

    def __init__(self, key: str, subcommand: str, label: str):
        self.key = key
        self.subcommand = subcommand
        self.label = label

    @classmethod
    def parse(cls, text: str) -> LifecycleAction:
        """Look up an action by key or runtime subcommand."""
        for action in cls:
            if text in (action.key, action.subcommand):
                return action
        raise ValueError(f"unknown lifecycle action: {text}")

    def argv(
        self,
        runtime: str,
        container_name: str,
        *,
        shell: str = DEFAULT_SHELL,
        terminal: Sequence[str] = (),
    ) -> list[str]:
        """Build the command line for this action on a container."""
        if self is LifecycleAction.OPEN_SHELL:
            # The shell has to exist in the image; /bin/bash often does not
            # on alpine or distroless images.
            return [*terminal, runtime, "exec", "-it", container_name, shell]
        return [runtime, self.subcommand, container_name]


def describe(action: LifecycleAction, container_name: str, result: CommandResult) -> str:
    """Describe the outcome of an action on a container for the user."""
    if result.succeeded and result.returncode is None:
        return f"{action.label} '{container_name}': `{result.command_line}` launched"
    if result.succeeded:
        return f"{action.label} '{container_name}': `{result.command_line}` terminated successfully"
    message = f"{action.label} '{container_name}' failed: `{result.command_line}`"
    if result.error_text:
        message = f"{message}: {result.error_text}"
    return message


class LifecycleController:
    """Dispatches lifecycle actions against named containers.

    Results only tell whether the runtime command succeeded. Re-list the
    containers to see the state they actually converged to.
    """

    def __init__(
        self,
        runtime: str = "docker",
        *,
        shell: str = DEFAULT_SHELL,
        terminal: Sequence[str] | None = None,
        terminal_command: str = "",
        runner: CommandRunner | None = None,
    ):
        self.runtime = runtime
        self.shell = shell
        self.terminal_command = terminal_command
        self._terminal = list(terminal) if terminal is not None else None
        self._runner = runner or CommandRunner()

    @property
    def terminal(self) -> list[str]:
        """Terminal command prefix, discovered on first use."""
        if self._terminal is None:
            self._terminal = default_terminal(self.terminal_command, runner=self._runner)
        return self._terminal

    def argv(self, action: LifecycleAction, container_name: str) -> list[str]:
        if action is not LifecycleAction.OPEN_SHELL:
            return action.argv(self.runtime, container_name)
        return action.argv(
            self.runtime, container_name, shell=self.shell, terminal=self.terminal
        )

    def apply(
        self,
        action: LifecycleAction,
        container_name: str,
        on_complete: OnComplete | None = None,
    ) -> asyncio.Task[CommandResult]:
        """Run an action without blocking and return the pending task.

        ``on_complete`` is called once with the result. For
        :attr:`LifecycleAction.OPEN_SHELL` the terminal is launched detached
        and the result only reflects that it started.
        """
        argv = self.argv(action, container_name)
        logger.info("%s container %s", action.label, container_name)

        def _complete(result: CommandResult) -> None:
            if result.succeeded:
                logger.info("%s", describe(action, container_name, result))
            else:
                logger.error("%s", describe(action, container_name, result))
            if on_complete is not None:
                on_complete(result)

        if action is LifecycleAction.OPEN_SHELL:
            return self._runner.launch_async(argv, _complete)
        return self._runner.run_async(argv, _complete)
