"""Tests for external command execution."""

import asyncio
import sys

import pytest

from dockmenu.runtime.exceptions import SpawnError
from dockmenu.runtime.runner import CommandResult, CommandRunner

MISSING = "/nonexistent/dockmenu-missing-binary"


def py(code: str) -> list[str]:
    return [sys.executable, "-c", code]


def test_run_captures_output():
    result = CommandRunner().run(py("import sys; print('out'); print('err', file=sys.stderr)"))
    assert result.succeeded
    assert result.returncode == 0
    assert result.stdout.strip() == b"out"
    assert result.stderr.strip() == b"err"


def test_run_nonzero_exit_does_not_raise():
    result = CommandRunner().run(py("import sys; sys.stderr.write('boom'); sys.exit(3)"))
    assert not result.succeeded
    assert result.returncode == 3
    assert result.error_text == "boom"


def test_run_spawn_failure_is_a_result():
    result = CommandRunner().run([MISSING, "arg"])
    assert not result.succeeded
    assert result.returncode is None
    assert result.command_line == f"{MISSING} arg"
    assert b"failed to spawn" in result.stderr


def test_command_line_is_quoted():
    result = CommandRunner().run(py("pass"))
    assert result.command_line.endswith("-c pass")

    result = CommandRunner().run([MISSING, "web 1; rm -rf /"])
    assert result.command_line == f"{MISSING} 'web 1; rm -rf /'"


def test_result_is_immutable():
    result = CommandResult(succeeded=True, command_line="true")
    with pytest.raises(AttributeError):
        result.succeeded = False


@pytest.mark.asyncio
async def test_run_async_calls_back_once():
    calls = []
    task = CommandRunner().run_async(py("print('hi')"), calls.append)
    assert isinstance(task, asyncio.Task)

    result = await task
    assert calls == [result]
    assert result.succeeded
    assert result.stdout.strip() == b"hi"


@pytest.mark.asyncio
async def test_run_async_returns_before_completion():
    calls = []
    task = CommandRunner().run_async(py("import time; time.sleep(0.2)"), calls.append)
    assert calls == []
    assert not task.done()
    await task
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_run_async_spawn_failure_calls_back():
    calls = []
    result = await CommandRunner().run_async([MISSING], calls.append)
    assert calls == [result]
    assert not result.succeeded
    assert b"failed to spawn" in result.stderr


@pytest.mark.asyncio
async def test_launch_async_reports_launch():
    calls = []
    result = await CommandRunner().launch_async(py("pass"), calls.append)
    assert calls == [result]
    assert result.succeeded
    assert result.returncode is None


def test_launch_spawn_failure():
    result = CommandRunner().launch([MISSING])
    assert not result.succeeded


def test_stream_lines():
    lines = list(CommandRunner().stream_lines(py("print('a'); print('b')")))
    assert lines == ["a", "b"]


def test_stream_lines_stops_early():
    stream = CommandRunner().stream_lines(py("import time\nfor i in range(3): print(i, flush=True)\ntime.sleep(30)"))
    assert next(stream) == "0"
    stream.close()


def test_stream_lines_spawn_failure():
    with pytest.raises(SpawnError):
        list(CommandRunner().stream_lines([MISSING]))


def test_run_rejected_argument_is_a_result():
    result = CommandRunner().run(py("pass") + ["a\x00b"])
    assert not result.succeeded
    assert result.returncode is None
    assert b"null byte" in result.stderr


@pytest.mark.asyncio
async def test_run_async_rejected_argument_calls_back_once():
    calls = []
    result = await CommandRunner().run_async(py("pass") + ["a\x00b"], calls.append)
    assert calls == [result]
    assert not result.succeeded
    assert b"failed to spawn" in result.stderr


def test_launch_rejected_argument():
    assert not CommandRunner().launch(py("pass") + ["a\x00b"]).succeeded


def test_stream_lines_rejected_argument():
    with pytest.raises(SpawnError):
        list(CommandRunner().stream_lines(py("pass") + ["a\x00b"]))
