"""Custom exception hierarchy for bltc.

Exceptions that cross layer boundaries inherit from :class:`BltcError`.
Raw ``OSError`` instances raised while configuring the run are caught in
the infrastructure layer and re-raised as a typed subclass defined here.
Per-job failures are not exceptions once they leave the core: they are
returned as :class:`~bltc.core.results.Failure` values.

Hierarchy
---------
BltcError
├── OutputRootError
├── CompileError
│   └── TemplateSyntaxError
├── FatalError
│   └── StdinReadError
└── EnvironmentError
"""

from __future__ import annotations


class BltcError(Exception):
    """Base exception for all bltc errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Configuration ---------------------------------------------------------

class OutputRootError(BltcError):
    """Raised when the output directory cannot be established."""

    def __init__(self, message: str, *, path: str, hint: str | None = None) -> None:
        super().__init__(message, hint=hint)
        self.path: str = path


# --- Compilation -----------------------------------------------------------

class CompileError(BltcError):
    """Recoverable template compiler failure.

    Only the job that triggered it fails; the run goes on.
    """


class TemplateSyntaxError(CompileError):
    """Raised by the BLT lexer/parser for malformed templates."""

    def __init__(self, message: str, *, line: int, column: int) -> None:
        super().__init__(f"{message} (line {line}, column {column})")
        self.line: int = line
        self.column: int = column


# --- Unrecoverable ---------------------------------------------------------

class FatalError(BltcError):
    """Unrecoverable condition; aborts every remaining job of the run."""


class StdinReadError(FatalError):
    """Raised when standard input cannot be read to end-of-stream."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(BltcError):
    """Raised when a required runtime dependency is not available."""
