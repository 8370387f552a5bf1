# SPDX-License-Identifier: GPL-3.0-or-later

"""Container runtime control: probing, listing and lifecycle commands."""

from .containers import ContainerLister, ContainerRecord, parse_listing
from .controller import RuntimeController, RuntimeStatus
from .exceptions import (
    DaemonNotRunning,
    DockMenuError,
    ListingError,
    RuntimeNotInstalled,
    SpawnError,
)
from .lifecycle import LifecycleAction, LifecycleController, describe
from .probe import RuntimeProbe
from .runner import CommandResult, CommandRunner
from .service import DaemonServiceController, DaemonState

__all__ = [
    "CommandResult",
    "CommandRunner",
    "ContainerLister",
    "ContainerRecord",
    "DaemonNotRunning",
    "DaemonServiceController",
    "DaemonState",
    "DockMenuError",
    "LifecycleAction",
    "LifecycleController",
    "ListingError",
    "RuntimeController",
    "RuntimeNotInstalled",
    "RuntimeProbe",
    "RuntimeStatus",
    "SpawnError",
    "describe",
    "parse_listing",
]
