"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — so tests can drive it with in-memory fakes.
"""

from __future__ import annotations

from collections.abc import Sequence
from contextlib import AbstractContextManager
from pathlib import Path
from typing import Protocol, TextIO

from bltc.core.models import Destination, SourceFile


class TemplateCompiler(Protocol):
    """Contract for template compiler backends."""

    output_extension: str
    """Extension (with leading dot) given to default destinations."""

    def compile(self, source: str) -> str:
        """Compile template *source* and return the generated code.

        Raises
        ------
        CompileError
            When the template cannot be lexed or parsed.
        """
        ...  # pragma: no cover

    def debug(self, source: str) -> str:
        """Return a parse trace of *source* instead of compiled output.

        Raises
        ------
        CompileError
            When the template cannot be lexed.
        """
        ...  # pragma: no cover


class SourceFinder(Protocol):
    """Contract for locating and loading input files."""

    def exists(self, path: Path) -> bool:
        ...  # pragma: no cover

    def is_dir(self, path: Path) -> bool:
        ...  # pragma: no cover

    def glob(self, pattern: str, search_paths: Sequence[Path]) -> list[SourceFile]:
        """Expand *pattern* against *search_paths*.

        Only files and other non-directory entries are returned, ordered
        by search path first and directory enumeration order second.
        """
        ...  # pragma: no cover

    def read_text(self, path: Path) -> str:
        """Return the content of *path*.

        Raises
        ------
        OSError
            When the file cannot be read.
        UnicodeDecodeError
            When the file is not valid UTF-8.
        """
        ...  # pragma: no cover


class SinkFactory(Protocol):
    """Contract for opening output sinks."""

    def open(self, destination: Destination) -> AbstractContextManager[TextIO]:
        """Return a context manager yielding a writable text stream.

        Opening happens on ``__enter__``; leaving the context releases the
        sink.  Raises ``OSError`` when the destination cannot be opened.
        """
        ...  # pragma: no cover


class Workspace(Protocol):
    """Contract for run-wide path configuration."""

    def cwd(self) -> Path:
        ...  # pragma: no cover

    def prepare_output_root(self, path: Path) -> Path:
        """Make *path* absolute, create it if missing and return it.

        Raises
        ------
        OutputRootError
            When the path is not a directory or cannot be created.
        """
        ...  # pragma: no cover
