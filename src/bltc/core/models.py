"""Domain models for bltc.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access.  Glob fan-out produces fresh
:class:`ResolvedSource` values instead of copying and mutating a job, so
expansions of the same job never alias each other.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class SourceKind(Enum):
    """Where a job's template text comes from."""

    PATH = "path"
    RAW = "raw"
    CONSOLE = "console"


class DestKind(Enum):
    """Where a job's compiled output goes."""

    PATH = "path"
    CONSOLE = "console"


# ---------------------------------------------------------------------------
# Requested work
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Job:
    """One requested compilation unit, as declared on the command line."""

    source: str
    """Path/glob pattern, raw template text, or ``""`` for stdin."""

    dest: str = ""
    """Explicit destination path, or ``""`` to compute a default."""

    source_kind: SourceKind = SourceKind.PATH

    dest_kind: DestKind = DestKind.PATH


@dataclass(frozen=True, slots=True)
class RunConfig:
    """Run-wide settings produced by the argument processor."""

    search_paths: tuple[Path, ...] = ()
    """Directories searched for input globs, in declaration order."""

    output_root: Path | None = None
    """Base directory for relative and default destinations."""

    debug: bool = False
    """Emit parse traces instead of compiled output."""


# ---------------------------------------------------------------------------
# Resolution products
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class SourceFile:
    """A concrete file matched for a path job."""

    path: Path
    """Location the file is read from."""

    relative_path: Path
    """Location relative to the search directory it was found in, or the
    absolute path itself for absolute inputs.

    Anchors the default destination beneath an output root; joining an
    absolute path onto the root yields the absolute path unchanged.
    """


@dataclass(frozen=True, slots=True)
class ResolvedSource:
    """Template text paired with the job (and file) it was produced for."""

    content: str
    job: Job
    source_file: SourceFile | None = None


@dataclass(frozen=True, slots=True)
class Destination:
    """Final output location of one resolved job."""

    kind: DestKind
    path: Path | None = None

    @property
    def is_console(self) -> bool:
        return self.kind is DestKind.CONSOLE

    def describe(self) -> str:
        """Human-readable form used in diagnostics."""
        if self.is_console or self.path is None:
            return "<stdout>"
        return str(self.path)


CONSOLE_DESTINATION = Destination(DestKind.CONSOLE)
