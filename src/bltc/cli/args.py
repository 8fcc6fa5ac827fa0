"""Command-line parsing for ``bltc``.

Several options are **position-sensitive**: ``-o``/``--stdout`` affect
only the next input, and ``-I``/``--stdin``/positional inputs become
jobs in the order they are written.  argparse does not preserve the
order of positionals relative to options, so the argument list is fed
to :meth:`argparse.ArgumentParser.parse_known_args` one option at a
time; the positionals that follow each option come back as extras, in
order, and are turned into path jobs.
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from bltc.cli import exit_codes
from bltc.cli.logging_setup import DEFAULT_VERBOSITY, VERBOSITY_LEVELS
from bltc.core.models import DestKind, Job, RunConfig, SourceKind
from bltc.infra.filesystem import parse_multi_path
from bltc.version import __version__

_DESCRIPTION = """\
BLTC compiles Backtick Lua Template (BLT) files to Lua source code.

By default file inputs will be compiled to a file of the same name with
extension '.lua'.  When processing non-file inputs, the output will be
sent to stdout by default.
"""

_EXAMPLES = """\
examples:
  bltc foo.blt
      Compiles 'foo.blt' in the working directory and saves the output to 'foo.lua'.
  bltc -d out/ bar.blt
      Compiles 'bar.blt' in the working directory and saves the output to 'out/bar.lua'.
  bltc --output asdf --stdin -o bar_out bar.blt
      Compiles a template read from stdin and saves it to 'asdf', then compiles
      'bar.blt' and saves the output to 'bar_out'.
"""


@dataclass(frozen=True, slots=True)
class CommandLine:
    """Everything the driver needs from the command line."""

    jobs: tuple[Job, ...]
    config: RunConfig
    verbosity: str = DEFAULT_VERBOSITY
    show_version: bool = False
    help_query: str | None = None
    """``None`` when help was not requested; ``""`` for the full help."""


class _PendingJobs:
    """Accumulates jobs and the destination waiting for the next input."""

    def __init__(self) -> None:
        self.jobs: list[Job] = []
        self._dest = ""
        self._dest_kind = DestKind.PATH

    def set_output(self, path: str) -> None:
        self._dest = path
        self._dest_kind = DestKind.PATH

    def set_stdout(self) -> None:
        self._dest_kind = DestKind.CONSOLE

    def add(self, source: str, kind: SourceKind) -> None:
        dest_kind = self._dest_kind
        if kind is not SourceKind.PATH and not self._dest:
            dest_kind = DestKind.CONSOLE
        self.jobs.append(Job(source, self._dest, kind, dest_kind))
        self._dest = ""
        self._dest_kind = DestKind.PATH


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------

class _OutputAction(argparse.Action):
    def __call__(self, parser: argparse.ArgumentParser, namespace: argparse.Namespace,
                 values: Any, option_string: str | None = None) -> None:
        namespace.pending.set_output(values)


class _StdoutAction(argparse.Action):
    def __call__(self, parser: argparse.ArgumentParser, namespace: argparse.Namespace,
                 values: Any, option_string: str | None = None) -> None:
        namespace.pending.set_stdout()


class _RawInputAction(argparse.Action):
    def __call__(self, parser: argparse.ArgumentParser, namespace: argparse.Namespace,
                 values: Any, option_string: str | None = None) -> None:
        namespace.pending.add(values, SourceKind.RAW)


class _StdinAction(argparse.Action):
    def __call__(self, parser: argparse.ArgumentParser, namespace: argparse.Namespace,
                 values: Any, option_string: str | None = None) -> None:
        namespace.pending.add("", SourceKind.CONSOLE)


class _SearchPathAction(argparse.Action):
    def __call__(self, parser: argparse.ArgumentParser, namespace: argparse.Namespace,
                 values: Any, option_string: str | None = None) -> None:
        paths = list(getattr(namespace, self.dest, None) or [])
        paths.extend(parse_multi_path(values))
        setattr(namespace, self.dest, paths)


class _OutputDirAction(argparse.Action):
    def __call__(self, parser: argparse.ArgumentParser, namespace: argparse.Namespace,
                 values: Any, option_string: str | None = None) -> None:
        if getattr(namespace, self.dest, None) is not None:
            raise argparse.ArgumentError(self, "an output directory has already been specified")
        setattr(namespace, self.dest, Path(values))


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------

def _epilog() -> str:
    codes = "\n".join(
        f"  {code}  {text}" for code, text in exit_codes.DESCRIPTIONS.items()
    )
    return f"{_EXAMPLES}\nexit codes:\n{codes}\n"


def build_parser() -> argparse.ArgumentParser:
    """Construct the ``bltc`` argument parser.

    Positional inputs are not declared; see :func:`parse_command_line`.
    """
    parser = argparse.ArgumentParser(
        prog="bltc",
        usage="%(prog)s [OPTIONS] [INPUT [INPUT ...]]",
        description=_DESCRIPTION,
        epilog=_epilog(),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
        allow_abbrev=False,
    )
    parser.add_argument(
        "-o", "--output",
        metavar="PATH",
        action=_OutputAction,
        help="Output path for the next input only.  Relative paths are resolved "
             "against --output-dir or the working directory.",
    )
    parser.add_argument(
        "--stdout",
        nargs=0,
        action=_StdoutAction,
        help="Output the next compiled input to standard output.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Output parse traces instead of compiled output (all inputs).",
    )
    parser.add_argument(
        "-I", "--input",
        metavar="STRING",
        action=_RawInputAction,
        help="Treat STRING as a raw BLT template instead of a filename.  "
             "Output goes to stdout unless -o is given.",
    )
    parser.add_argument(
        "--stdin",
        nargs=0,
        action=_StdinAction,
        help="Read a template from standard input.  Output goes to stdout unless "
             "-o is given; repeated --stdin reuses the same input.",
    )
    parser.add_argument(
        "-D", "--input-dir",
        dest="search_paths",
        metavar="PATH",
        action=_SearchPathAction,
        help="Search path for input files.  Separate several with ';' or the OS path "
             "separator, or repeat the option.  Defaults to the working directory.",
    )
    parser.add_argument(
        "-d", "--output-dir",
        dest="output_root",
        metavar="PATH",
        action=_OutputDirAction,
        help="Directory used to resolve relative and default output paths "
             "(may be given once).",
    )
    parser.add_argument(
        "-v", "--verbosity",
        metavar="LEVEL",
        choices=sorted(VERBOSITY_LEVELS),
        default=DEFAULT_VERBOSITY,
        help="Diagnostic detail: %(choices)s (default: %(default)s).",
    )
    parser.add_argument(
        "-V", "--version",
        dest="show_version",
        action="store_true",
        help="Print version information to standard output.  Inputs are still compiled.",
    )
    parser.add_argument(
        "-?",
        dest="help_query",
        metavar="OPTION",
        nargs="?",
        const="",
        help="Show this help message.  With OPTION, list only the options that "
             "contain that string.",
    )
    parser.add_argument(
        "-h", "--help",
        dest="help_query",
        action="store_const",
        const="",
        help="Show this help message.",
    )
    return parser


def format_help(parser: argparse.ArgumentParser, query: str = "") -> str:
    """Return the help text, limited to options mentioning *query* if given."""
    if not query:
        return parser.format_help()

    needle = query.lower()
    matching = [
        action for action in parser._actions
        if any(needle in option.lower() for option in action.option_strings)
        or needle in (action.help or "").lower()
    ]
    formatter = parser.formatter_class(prog=parser.prog)
    formatter.add_usage(parser.usage, parser._actions, [])
    formatter.start_section(f"options matching {query!r}")
    if matching:
        formatter.add_arguments(matching)
    else:
        formatter.add_text("No options match.")
    formatter.end_section()
    return formatter.format_help()


def format_version(parser: argparse.ArgumentParser) -> str:
    return f"{parser.prog} {__version__}\n"


_VALUE_OPTIONS = frozenset({
    "-o", "--output",
    "-I", "--input",
    "-D", "--input-dir",
    "-d", "--output-dir",
    "-v", "--verbosity",
    "-?",
})
"""Options that consume the next argument whatever it looks like."""


def _is_option(token: str) -> bool:
    return token.startswith("-") and token != "-" and " " not in token


def _split_segments(tokens: Sequence[str]) -> list[list[str]]:
    """Group *tokens* so each segment holds at most one leading option.

    A value that looks like an option is attached to the option that
    takes it (``-o -x`` becomes ``-o=-x``) so argparse does not read it
    as an option of its own.
    """
    segments: list[list[str]] = [[]]
    for token in tokens:
        if _is_option(token) and len(segments[-1]) == 1 and segments[-1][0] in _VALUE_OPTIONS:
            segments[-1][0] = f"{segments[-1][0]}={token}"
            continue
        if _is_option(token) and segments[-1]:
            segments.append([])
        segments[-1].append(token)
    return segments


def parse_command_line(
    argv: Sequence[str],
    parser: argparse.ArgumentParser | None = None,
) -> CommandLine:
    """Parse *argv* into ordered jobs and run configuration.

    Exits with status 2 (via :meth:`argparse.ArgumentParser.error`) on
    any argument problem.
    """
    parser = parser or build_parser()
    namespace = argparse.Namespace(pending=_PendingJobs())

    tokens = list(argv)
    trailing: list[str] = []
    if "--" in tokens:
        split = tokens.index("--")
        tokens, trailing = tokens[:split], tokens[split + 1:]

    for segment in _split_segments(tokens):
        _, extras = parser.parse_known_args(segment, namespace)
        for token in extras:
            if _is_option(token):
                parser.error(f"unrecognized arguments: {token}")
            namespace.pending.add(token, SourceKind.PATH)

    for token in trailing:
        namespace.pending.add(token, SourceKind.PATH)

    config = RunConfig(
        search_paths=tuple(namespace.search_paths or ()),
        output_root=namespace.output_root,
        debug=namespace.debug,
    )
    return CommandLine(
        jobs=tuple(namespace.pending.jobs),
        config=config,
        verbosity=namespace.verbosity,
        show_version=namespace.show_version,
        help_query=namespace.help_query,
    )
