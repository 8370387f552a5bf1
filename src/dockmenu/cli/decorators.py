"""Decorators for CLI commands."""

import inspect
from functools import wraps
from typing import Any, Callable

import typer

from ..runtime import DaemonNotRunning, DockMenuError, RuntimeNotInstalled
from .output import out


def _report(e: DockMenuError) -> None:
    out.error(str(e))
    if isinstance(e, RuntimeNotInstalled):
        out.hint(f"Install {e.runtime} or set DOCKMENU_RUNTIME")
    elif isinstance(e, DaemonNotRunning):
        out.hint("Run: [bold]dockmenu daemon start[/bold]")


def handle_errors(func: Callable[..., Any]) -> Callable[..., Any]:
    """Turn DockMenuError into an error message and exit status 1."""
    if inspect.iscoroutinefunction(func):
        @wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await func(*args, **kwargs)
            except DockMenuError as e:
                _report(e)
                raise typer.Exit(1)
        return async_wrapper

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except DockMenuError as e:
            _report(e)
            raise typer.Exit(1)
    return wrapper
