"""Logging configuration for the ``bltc`` command.

Diagnostics from every layer go through :mod:`logging` and are rendered
on stderr by a :class:`rich.logging.RichHandler`, so they never mix
with compiled output on stdout.
"""

from __future__ import annotations

import logging
import sys

from bltc.cli.console import get_rich_console
from bltc.exceptions import EnvironmentError

VERBOSITY_LEVELS: dict[str, int] = {
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "verbose": logging.DEBUG,
}
"""``--verbosity`` choices mapped to logging levels."""

DEFAULT_VERBOSITY = "info"


def _build_handler() -> logging.Handler:
    try:
        rich_console = get_rich_console()
    except EnvironmentError:
        handler: logging.Handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        return handler

    from rich.logging import RichHandler

    return RichHandler(
        console=rich_console,
        show_time=False,
        show_path=False,
        markup=False,
    )


def configure_logging(verbosity: str = DEFAULT_VERBOSITY) -> None:
    """Install the stderr handler on the ``bltc`` logger tree."""
    level = VERBOSITY_LEVELS[verbosity]
    root = logging.getLogger("bltc")
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(_build_handler())
    root.setLevel(level)
