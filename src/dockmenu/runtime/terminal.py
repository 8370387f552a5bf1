"""Terminal emulator discovery for opening container shells.

Reads the GNOME default terminal setting. When gi is not installed the
``gsettings`` command is used instead, and when neither yields a value
the fallback terminal is returned.
"""

from __future__ import annotations

import logging
import shlex

from .runner import CommandRunner

logger = logging.getLogger(__name__)

try:
    import gi
    gi.require_version("Gio", "2.0")
    from gi.repository import Gio
    GIO_AVAILABLE = True
except (ImportError, ValueError):
    GIO_AVAILABLE = False


TERMINAL_SCHEMA = "org.gnome.desktop.default-applications.terminal"
FALLBACK_TERMINAL = ["gnome-terminal", "--"]


def _from_gio() -> tuple[str, str] | None:
    if not GIO_AVAILABLE:
        return None

    try:
        source = Gio.SettingsSchemaSource.get_default()
        if source is None or source.lookup(TERMINAL_SCHEMA, True) is None:
            return None
        settings = Gio.Settings.new(TERMINAL_SCHEMA)
        return settings.get_string("exec"), settings.get_string("exec-arg")
    except Exception:
        logger.debug("Failed to read %s through Gio", TERMINAL_SCHEMA, exc_info=True)
        return None


def _from_gsettings(runner: CommandRunner) -> tuple[str, str] | None:
    values = []
    for key in ("exec", "exec-arg"):
        result = runner.run(["gsettings", "get", TERMINAL_SCHEMA, key])
        if not result.succeeded:
            return None
        # gsettings prints GVariant text, e.g. 'gnome-terminal'
        text = result.stdout.decode(errors="replace").split("\n")[0]
        values.append(text.strip().strip("'"))
    return values[0], values[1]


def default_terminal(
    configured: str = "",
    runner: CommandRunner | None = None,
) -> list[str]:
    """Return the command prefix that runs a program in a new terminal.

    Args:
        configured: Explicit terminal command line from configuration.
            Takes precedence over the desktop setting when non-empty.
        runner: Runner used for the ``gsettings`` fallback.
    """
    if configured.strip():
        try:
            return shlex.split(configured)
        except ValueError as e:
            logger.warning("Ignoring malformed terminal setting %r: %s", configured, e)

    setting = _from_gio() or _from_gsettings(runner or CommandRunner())
    if setting and setting[0]:
        terminal, exec_arg = setting
        logger.debug("Using desktop terminal %s %s", terminal, exec_arg)
        return [terminal, exec_arg] if exec_arg else [terminal]

    return list(FALLBACK_TERMINAL)
