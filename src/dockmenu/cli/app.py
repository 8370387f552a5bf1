"""dockmenu CLI application."""

from __future__ import annotations

import logging
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from .. import __version__
from ..config import get_config_paths, load_config
from ..runtime import (
    DaemonNotRunning,
    DaemonState,
    LifecycleAction,
    RuntimeController,
    RuntimeNotInstalled,
    describe,
)
from .async_typer import AsyncTyper
from .decorators import handle_errors
from .output import out

app = AsyncTyper(
    name="dockmenu",
    help="Control the container runtime, its containers and its daemon.",
    no_args_is_help=True,
)
daemon_app = AsyncTyper(
    name="daemon",
    help="Query and toggle the runtime daemon service.",
    no_args_is_help=True,
)
app.add_typer(daemon_app, name="daemon")


def get_controller(require_daemon: bool = True) -> RuntimeController:
    """Build a controller after checking the runtime is usable."""
    controller = RuntimeController(notify=out.error)
    if not controller.probe.is_installed():
        raise RuntimeNotInstalled(controller.config.runtime)
    if require_daemon and not controller.probe.is_running():
        raise DaemonNotRunning(controller.config.service)
    return controller


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        out.info(f"dockmenu version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging."),
) -> None:
    """dockmenu - a lightweight controller for a container runtime."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.command()
@handle_errors
def status() -> None:
    """Show whether the runtime is installed and its daemon running."""
    controller = RuntimeController(notify=out.error)
    snapshot = controller.snapshot()
    runtime = controller.config.runtime

    out.section(runtime)
    with out.indent():
        if not snapshot.installed:
            out.failure("not installed")
            return
        out.success("installed")
        if snapshot.daemon_running:
            out.success("daemon running")
        else:
            out.failure("daemon not running")

        out.daemon_state(controller.config.service, snapshot.service_state)
        if snapshot.daemon_running:
            running = sum(1 for c in snapshot.containers if c.running)
            out.dim(f"{len(snapshot.containers)} containers, {running} running")


@app.command("list")
@handle_errors
def list_containers(
    all_: bool = typer.Option(False, "--all", "-a", help="Show stopped containers too"),
) -> None:
    """List containers."""
    controller = get_controller()
    out.containers(controller.lister.list(), show_all=all_)


@app.command("ls", hidden=True)
@handle_errors
def list_containers_alias(
    all_: bool = typer.Option(False, "--all", "-a", help="Show stopped containers too"),
) -> None:
    """List containers (alias)."""
    list_containers(all_=all_)


async def _apply(action: LifecycleAction, name: str) -> None:
    controller = get_controller()
    result = await controller.lifecycle.apply(action, name)
    message = describe(action, name, result)
    if not result.succeeded:
        out.failure(message)
        raise typer.Exit(1)
    out.success(message)


@app.command()
@handle_errors
async def start(name: str = typer.Argument(..., help="Container name")) -> None:
    """Start a container."""
    await _apply(LifecycleAction.START, name)


@app.command()
@handle_errors
async def stop(name: str = typer.Argument(..., help="Container name")) -> None:
    """Stop a container."""
    await _apply(LifecycleAction.STOP, name)


@app.command()
@handle_errors
async def restart(name: str = typer.Argument(..., help="Container name")) -> None:
    """Restart a container."""
    await _apply(LifecycleAction.RESTART, name)


@app.command()
@handle_errors
async def pause(name: str = typer.Argument(..., help="Container name")) -> None:
    """Pause a container."""
    await _apply(LifecycleAction.PAUSE, name)


@app.command()
@handle_errors
async def unpause(name: str = typer.Argument(..., help="Container name")) -> None:
    """Unpause a container."""
    await _apply(LifecycleAction.UNPAUSE, name)


@app.command()
@handle_errors
async def rm(name: str = typer.Argument(..., help="Container name")) -> None:
    """Remove a container."""
    await _apply(LifecycleAction.REMOVE, name)


@app.command("remove", hidden=True)
@handle_errors
async def remove_alias(name: str = typer.Argument(..., help="Container name")) -> None:
    """Remove a container (alias)."""
    await _apply(LifecycleAction.REMOVE, name)


@app.command()
@handle_errors
async def shell(name: str = typer.Argument(..., help="Container name")) -> None:
    """Open a shell inside a container in a new terminal window."""
    await _apply(LifecycleAction.OPEN_SHELL, name)


@app.command()
def config() -> None:
    """Show configuration."""
    cfg = load_config()
    for k, v in cfg._asdict().items():
        out.info(f"[bold]{k}[/bold] = {v}")
    out.dim("Read from: " + ", ".join(str(p) for p in get_config_paths()))


@daemon_app.command("status")
def daemon_status() -> None:
    """Show the daemon service state."""
    controller = RuntimeController(notify=out.error)
    state = controller.service.query_status()
    out.daemon_state(controller.config.service, state)


async def _toggle_service(target: Optional[str]) -> None:
    controller = RuntimeController(notify=out.error)
    service = controller.service
    if not service.is_available():
        out.error("systemctl or the privilege elevation helper is not installed.")
        raise typer.Exit(1)

    if target == "start":
        succeeded = await service.start()
    elif target == "stop":
        succeeded = await service.stop()
    else:
        succeeded = await service.toggle(service.query_status())
    if not succeeded:
        raise typer.Exit(1)

    state = service.query_status()
    out.daemon_state(service.service, state)
    if state is DaemonState.UNKNOWN:
        out.hint("Could not confirm the new state with systemctl")


@daemon_app.command("toggle")
async def daemon_toggle() -> None:
    """Stop the daemon if it is running, otherwise start it."""
    await _toggle_service(None)


@daemon_app.command("start")
async def daemon_start() -> None:
    """Start the daemon service."""
    await _toggle_service("start")


@daemon_app.command("stop")
async def daemon_stop() -> None:
    """Stop the daemon service."""
    await _toggle_service("stop")


def run() -> None:
    """Console script entry point."""
    app()
