"""Async support for Typer.

Workaround for https://github.com/fastapi/typer/issues/950
"""

import asyncio
import inspect
from functools import partial, wraps
from typing import Any, Callable

import typer


class AsyncTyper(typer.Typer):
    """Typer subclass whose commands may be coroutine functions."""

    @staticmethod
    def maybe_run_async(decorator: Callable, func: Callable) -> Any:
        """Register ``func``, driving it with asyncio.run() if it is async."""
        if inspect.iscoroutinefunction(func):

            @wraps(func)
            def runner(*args: Any, **kwargs: Any) -> Any:
                return asyncio.run(func(*args, **kwargs))

            decorator(runner)
        else:
            decorator(func)
        return func

    def command(self, *args: Any, **kwargs: Any) -> Any:
        decorator = super().command(*args, **kwargs)
        return partial(self.maybe_run_async, decorator)
