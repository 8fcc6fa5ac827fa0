"""Stderr console for diagnostics and user-facing errors.

Rich is imported lazily so bootstrap paths (``--help``, ``--version``)
keep working even when it is not installed; in that case output falls
back to plain stderr text.  Stdout is reserved for compiled output and
is never written through this module.
"""

from __future__ import annotations

import sys
from typing import Any

from bltc.exceptions import BltcError, EnvironmentError


def _load_rich_console_class() -> type[Any]:
    """Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
    try:
        from rich.console import Console
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Console


def get_rich_console() -> Any:
    """Create a Rich console bound to the current ``sys.stderr``."""
    console_class = _load_rich_console_class()
    return console_class(file=sys.stderr)


class _ConsoleProxy:
    """``print``-compatible proxy that resolves stderr at call time."""

    def print(self, *objects: object) -> None:
        try:
            rich_console = get_rich_console()
        except EnvironmentError:
            print(*objects, file=sys.stderr)
            return
        rich_console.print(*objects)

    def print_error(self, exc: BltcError) -> None:
        """Render *exc* and its hint, if any."""
        self.print(f"[bold red]Error:[/bold red] {exc}")
        if exc.hint:
            self.print(f"[yellow]Hint:[/yellow] {exc.hint}")


console = _ConsoleProxy()
