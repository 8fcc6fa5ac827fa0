"""Infrastructure: standard streams and output sinks.

This module is the only place that touches ``sys.stdin`` and
``sys.stdout`` for template data.  Diagnostics never go through here;
they are logged to stderr by the CLI layer.
"""

from __future__ import annotations

import sys
from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager
from pathlib import Path
from typing import TextIO

from bltc.core.models import Destination
from bltc.exceptions import StdinReadError


def read_stdin() -> str:
    """Read standard input to end-of-stream.

    Raises
    ------
    StdinReadError
        When the stream is missing, fails, or is not valid text.
    """
    stream = sys.stdin
    if stream is None:
        raise StdinReadError("Standard input is not available!")
    try:
        return stream.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise StdinReadError(f"Error while reading from stdin! {exc}") from exc


class OutputSinks:
    """Concrete :class:`~bltc.core.protocols.SinkFactory`.

    File sinks create missing parent directories and truncate existing
    files.  The console sink is flushed on release but never closed.
    """

    def open(self, destination: Destination) -> AbstractContextManager[TextIO]:
        if destination.is_console or destination.path is None:
            return _console_sink()
        return _file_sink(destination.path)


@contextmanager
def _console_sink() -> Iterator[TextIO]:
    stream = sys.stdout
    try:
        yield stream
    finally:
        stream.flush()


@contextmanager
def _file_sink(path: Path) -> Iterator[TextIO]:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="") as handle:
        yield handle
