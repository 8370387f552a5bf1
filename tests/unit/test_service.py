"""Tests for daemon service control."""

from unittest.mock import MagicMock, patch

import pytest

from dockmenu.runtime.runner import CommandResult
from dockmenu.runtime.service import DaemonServiceController, DaemonState

STATUS_ARGV = ["systemctl", "is-active", "docker.service", "--system"]
ELEVATED = ["pkexec", "--user", "root", "systemctl"]


@pytest.fixture(autouse=True)
def non_root():
    with patch("dockmenu.runtime.service.os.geteuid", return_value=1000):
        yield


@pytest.fixture
def notify():
    return MagicMock()


@pytest.fixture
def service(runner, notify):
    return DaemonServiceController("docker.service", notify=notify, runner=runner)


def test_query_status_running(service, runner):
    runner.result_for(STATUS_ARGV, stdout=b"active\n")
    assert service.query_status() is DaemonState.RUNNING
    assert runner.calls == [STATUS_ARGV]


@pytest.mark.parametrize("stdout", [b"inactive\n", b"failed\n", b"activating\n"])
def test_query_status_stopped(service, runner, stdout):
    runner.result_for(STATUS_ARGV, succeeded=False, returncode=3, stdout=stdout)
    assert service.query_status() is DaemonState.STOPPED


def test_query_status_spawn_failure_is_unknown(service, runner):
    runner.results["systemctl is-active docker.service --system"] = CommandResult(
        succeeded=False,
        command_line="systemctl is-active docker.service --system",
        stderr=b"failed to spawn",
    )
    assert service.query_status() is DaemonState.UNKNOWN


def test_query_status_is_idempotent(service, runner):
    runner.result_for(STATUS_ARGV, stdout=b"active\n")
    assert service.query_status() is service.query_status()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "state, action",
    [
        (DaemonState.RUNNING, "stop"),
        (DaemonState.STOPPED, "start"),
        (DaemonState.UNKNOWN, "start"),
    ],
)
async def test_toggle_issues_inverse_action(service, runner, state, action):
    calls = []
    succeeded = await service.toggle(state, lambda ok, cmd: calls.append((ok, cmd)))

    expected = [*ELEVATED, action, "docker.service", "--system"]
    assert runner.calls == [expected]
    assert succeeded
    assert calls == [(True, " ".join(expected))]


@pytest.mark.asyncio
async def test_toggle_failure_notifies(service, runner, notify):
    argv = [*ELEVATED, "start", "docker.service", "--system"]
    runner.result_for(argv, succeeded=False, returncode=126, stderr=b"Not authorized")
    calls = []

    succeeded = await service.toggle(DaemonState.STOPPED, lambda ok, cmd: calls.append((ok, cmd)))

    assert not succeeded
    assert calls == [(False, " ".join(argv))]
    notify.assert_called_once_with(f"Error occurred when running `{' '.join(argv)}`")


@pytest.mark.asyncio
async def test_toggle_success_does_not_notify(service, notify):
    await service.toggle(DaemonState.RUNNING)
    notify.assert_not_called()


@pytest.mark.asyncio
async def test_explicit_start_and_stop(service, runner):
    await service.start()
    await service.stop()
    assert [argv[4] for argv in runner.calls] == ["start", "stop"]


@pytest.mark.asyncio
async def test_root_skips_elevation(service, runner):
    with patch("dockmenu.runtime.service.os.geteuid", return_value=0):
        await service.stop()
    assert runner.calls == [["systemctl", "stop", "docker.service", "--system"]]


def test_is_available(service):
    with patch("dockmenu.runtime.service.shutil.which", return_value="/usr/bin/x"):
        assert service.is_available()
    with patch("dockmenu.runtime.service.shutil.which", side_effect=lambda b: None if b == "pkexec" else "/usr/bin/" + b):
        assert not service.is_available()
