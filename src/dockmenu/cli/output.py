"""Console output helpers using rich."""

from contextlib import contextmanager
from typing import Iterator

from rich.console import Console
from rich.table import Table

from ..runtime import ContainerRecord, DaemonState

STATE_COLORS = {
    DaemonState.RUNNING: "green",
    DaemonState.STOPPED: "red",
    DaemonState.UNKNOWN: "yellow",
}


def status_color(record: ContainerRecord) -> str:
    if record.paused:
        return "yellow"
    if record.running:
        return "green"
    return "red"


class Output:
    """Rich console output for runtime, container and daemon state.

    Usage:
        out = Output()
        out.section("docker")
        with out.indent():
            out.daemon_state("docker.service", DaemonState.RUNNING)
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()
        self._indent_level = 0

    @property
    def _prefix(self) -> str:
        return " " * self._indent_level

    @contextmanager
    def indent(self, spaces: int = 2) -> Iterator[None]:
        """Context manager for scoped indentation."""
        self._indent_level += spaces
        try:
            yield
        finally:
            self._indent_level -= spaces

    def error(self, msg: str) -> None:
        self.console.print(f"{self._prefix}[red]Error:[/red] {msg}")

    def hint(self, msg: str) -> None:
        self.console.print(f"{self._prefix}[yellow]Hint:[/yellow] {msg}")

    def success(self, msg: str) -> None:
        self.console.print(f"{self._prefix}[green]✓[/green] {msg}")

    def failure(self, msg: str) -> None:
        self.console.print(f"{self._prefix}[red]✗[/red] {msg}")

    def section(self, title: str) -> None:
        self.console.print(f"{self._prefix}[bold blue]{title}[/bold blue]")

    def dim(self, msg: str) -> None:
        self.console.print(f"{self._prefix}[dim]{msg}[/dim]")

    def info(self, msg: str) -> None:
        self.console.print(f"{self._prefix}{msg}")

    def daemon_state(self, service: str, state: DaemonState) -> None:
        """Print a service name with its colour-coded state."""
        color = STATE_COLORS[state]
        self.info(f"{service}: [{color}]{state.value}[/{color}]")

    def containers(self, records: list[ContainerRecord], show_all: bool = False) -> None:
        """Print containers as a table, only running ones unless ``show_all``."""
        if not show_all:
            records = [r for r in records if r.running]

        if not records:
            self.dim("No containers running.")
            return

        table = Table(show_header=True, header_style="bold")
        table.add_column("Name")
        table.add_column("Status")

        for r in records:
            color = status_color(r)
            table.add_row(r.name, f"[{color}]{r.status}[/{color}]")

        self.console.print(table)


# Module-level instance for convenience
out = Output()
