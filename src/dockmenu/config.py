# SPDX-License-Identifier: GPL-3.0-or-later

"""dockmenu configuration.

This module handles configuration with systemd-style layered precedence:

1. ~/.config/dockmenu/dockmenu.conf  (user overrides - highest priority)
2. /etc/dockmenu/dockmenu.conf       (admin/system overrides)
3. /usr/lib/dockmenu/dockmenu.conf   (package defaults - lowest priority)

Configuration options, all in the [dockmenu] section:
- runtime: Container runtime binary (DOCKMENU_RUNTIME overrides it)
- daemon_process: Process name that marks the daemon as running
- service: systemd unit of the daemon
- shell: Shell started inside containers by the open-shell action
- terminal: Terminal command prefix; empty means use the desktop default
- elevation: Privilege elevation command for starting/stopping the daemon
"""

import configparser
import os
from pathlib import Path
from typing import NamedTuple

SECTION = "dockmenu"


class DockMenuConfig(NamedTuple):
    """Configuration for dockmenu."""

    runtime: str = "docker"
    daemon_process: str = "docker"
    service: str = "docker.service"
    shell: str = "/bin/bash"
    terminal: str = ""
    elevation: str = "pkexec --user root"


def get_config_path() -> Path:
    """Get the user config file path (for writing)."""
    config_home = os.environ.get("XDG_CONFIG_HOME", "")
    if not config_home:
        config_home = os.path.expanduser("~/.config")
    return Path(config_home) / "dockmenu" / "dockmenu.conf"


def get_config_paths() -> list[Path]:
    """Get all config file paths in priority order (highest first)."""
    return [
        get_config_path(),
        Path("/etc/dockmenu/dockmenu.conf"),
        Path("/usr/lib/dockmenu/dockmenu.conf"),
    ]


def load_config(paths: list[Path] | None = None) -> DockMenuConfig:
    """Load configuration from all config paths, merging with precedence.

    Args:
        paths: Config files, highest priority first. Defaults to
            :func:`get_config_paths`.

    Returns:
        DockMenuConfig with merged settings.
    """
    values = DockMenuConfig()._asdict()

    # Read in reverse priority order (lowest first, so higher overrides)
    for config_path in reversed(paths if paths is not None else get_config_paths()):
        if not config_path.exists():
            continue

        parser = configparser.ConfigParser(interpolation=None)
        try:
            parser.read(config_path)
        except configparser.Error:
            # Skip malformed config files
            continue

        if not parser.has_section(SECTION):
            continue
        for key in DockMenuConfig._fields:
            if parser.has_option(SECTION, key):
                values[key] = parser.get(SECTION, key)

    runtime = os.environ.get("DOCKMENU_RUNTIME", "")
    if runtime:
        values["runtime"] = runtime

    return DockMenuConfig(**values)


def save_config(config: DockMenuConfig) -> Path:
    """Save configuration to the user config path and return that path."""
    config_path = get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    parser = configparser.ConfigParser(interpolation=None)
    parser[SECTION] = config._asdict()

    with open(config_path, "w") as f:
        parser.write(f)
    return config_path
