"""Container listing.

The runtime is asked for one ``name,status`` line per container. The
comma is not escaped by the runtime, so everything after the first comma
is taken as the status.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .exceptions import ListingError
from .runner import CommandResult, CommandRunner

logger = logging.getLogger(__name__)

LISTING_DELIMITER = ","
LISTING_FORMAT = LISTING_DELIMITER.join(["{{.Names}}", "{{.Status}}"])


@dataclass(frozen=True)
class ContainerRecord:
    """A container as reported by one listing call."""

    name: str
    status: str

    @property
    def running(self) -> bool:
        return self.status.startswith("Up")

    @property
    def paused(self) -> bool:
        return "(Paused)" in self.status


def parse_listing(text: str) -> list[ContainerRecord]:
    """Parse ``name,status`` lines into records, keeping runtime order.

    Blank lines are ignored. Lines without a delimiter or with an empty
    name are skipped with a warning.
    """
    records: list[ContainerRecord] = []
    for line in text.splitlines():
        if not line.strip():
            continue
        name, sep, status = line.partition(LISTING_DELIMITER)
        if not sep or not name:
            logger.warning("Skipping malformed listing line: %r", line)
            continue
        records.append(ContainerRecord(name=name, status=status))
    return records


class ContainerLister:
    """Lists all containers known to the runtime."""

    def __init__(self, runtime: str = "docker", runner: CommandRunner | None = None):
        self.runtime = runtime
        self._runner = runner or CommandRunner()

    @property
    def argv(self) -> list[str]:
        return [self.runtime, "ps", "-a", "--format", LISTING_FORMAT]

    def list(self) -> list[ContainerRecord]:
        """List containers.

        Raises:
            ListingError: If the listing command fails or cannot be spawned.
        """
        return self._parse(self._runner.run(self.argv))

    async def list_async(self) -> list[ContainerRecord]:
        """Same as :meth:`list`, without blocking the event loop."""
        result = await self._runner.run_async(self.argv)
        return self._parse(result)

    @staticmethod
    def _parse(result: CommandResult) -> list[ContainerRecord]:
        if not result.succeeded:
            raise ListingError(result)
        return parse_listing(result.stdout.decode(errors="replace"))
