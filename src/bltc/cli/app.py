"""CLI application entry point for bltc.

This module is the **sole error boundary** for the entire application.
It catches :class:`~bltc.exceptions.BltcError`, ``KeyboardInterrupt``,
and any unexpected ``Exception``, rendering user-friendly messages via Rich
and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — all work is delegated to the core and
  infrastructure layers.
* Diagnostics go to stderr through :mod:`logging`; stdout carries only
  compiled output (plus help/version text).
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import sys

from bltc.cli import exit_codes
from bltc.cli.args import (
    CommandLine,
    build_parser,
    format_help,
    format_version,
    parse_command_line,
)
from bltc.cli.console import console
from bltc.cli.logging_setup import configure_logging
from bltc.core.driver import CompileRun
from bltc.core.stdin_cache import StdinCache
from bltc.exceptions import BltcError
from bltc.infra.blt_compiler import BltCompiler
from bltc.infra.filesystem import LocalFileSystem
from bltc.infra.streams import OutputSinks, read_stdin


def _handle_compile(command_line: CommandLine) -> int:
    """Wire the infrastructure adapters into a run and execute it."""
    filesystem = LocalFileSystem()
    run = CompileRun(
        compiler=BltCompiler(),
        finder=filesystem,
        workspace=filesystem,
        sinks=OutputSinks(),
        stdin=StdinCache(read_stdin),
    )
    status = run.execute(command_line.jobs, command_line.config)
    return status.code


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the bltc CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code: the most severe failure of the run.
    """
    parser = build_parser()
    command_line = parse_command_line(sys.argv[1:] if argv is None else argv, parser)
    configure_logging(command_line.verbosity)

    help_query = command_line.help_query
    show_version = command_line.show_version
    status = exit_codes.SUCCESS
    if not command_line.jobs and help_query is None and not show_version:
        # Nothing to compile: show help and version, and report it.
        help_query = ""
        show_version = True
        status = exit_codes.UNKNOWN_ERROR

    if help_query is not None:
        sys.stdout.write(format_help(parser, help_query))
    if show_version:
        if help_query is not None:
            sys.stdout.write("\n")
        sys.stdout.write(format_version(parser))

    if not command_line.jobs:
        return status
    return _handle_compile(command_line)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except BltcError as exc:
        console.print_error(exc)
        sys.exit(exit_codes.UNKNOWN_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNKNOWN_ERROR)
