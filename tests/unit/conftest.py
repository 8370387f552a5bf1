# SPDX-License-Identifier: GPL-3.0-or-later

"""Shared fixtures for dockmenu unit tests."""

import shlex

import pytest

from dockmenu.runtime.runner import CommandResult, CommandRunner


class FakeRunner(CommandRunner):
    """CommandRunner that records argv instead of spawning processes."""

    def __init__(self):
        self.calls: list[list[str]] = []
        self.launched: list[list[str]] = []
        self.results: dict[str, CommandResult] = {}

    def result_for(self, argv, **kwargs) -> None:
        """Script the result returned for an exact command line."""
        command_line = shlex.join(argv)
        kwargs.setdefault("succeeded", True)
        kwargs.setdefault("returncode", 0 if kwargs["succeeded"] else 1)
        self.results[command_line] = CommandResult(command_line=command_line, **kwargs)

    def _result(self, argv) -> CommandResult:
        command_line = shlex.join(argv)
        default = CommandResult(succeeded=True, command_line=command_line, returncode=0)
        return self.results.get(command_line, default)

    def run(self, argv):
        self.calls.append(list(argv))
        return self._result(argv)

    async def _run(self, argv):
        self.calls.append(list(argv))
        return self._result(argv)

    def launch(self, argv):
        self.launched.append(list(argv))
        return CommandResult(succeeded=True, command_line=shlex.join(argv))


@pytest.fixture
def runner():
    return FakeRunner()
