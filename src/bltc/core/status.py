"""Failure taxonomy and run-status aggregation.

:class:`RunStatus` is a value, not a global: the driver threads it
through every fallible step and keeps whatever :meth:`RunStatus.record`
returns.  The code can only go up.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorKind(Enum):
    """Classification of a failed step.

    Several kinds share an exit code, so the code is an attribute rather
    than the enum value.
    """

    CONFIG = "config"
    OUTPUT_ROOT = "output_root"
    NO_INPUT_FOUND = "no_input_found"
    IO_READ = "io_read"
    IO_WRITE = "io_write"
    COMPILE = "compile"
    FATAL = "fatal"
    UNKNOWN = "unknown"

    @property
    def exit_code(self) -> int:
        return _EXIT_CODES[self]


_EXIT_CODES: dict[ErrorKind, int] = {
    ErrorKind.CONFIG: 2,
    ErrorKind.OUTPUT_ROOT: 5,
    ErrorKind.NO_INPUT_FOUND: 3,
    ErrorKind.IO_READ: 4,
    ErrorKind.IO_WRITE: 5,
    ErrorKind.COMPILE: 6,
    ErrorKind.FATAL: 1,
    ErrorKind.UNKNOWN: 1,
}


@dataclass(frozen=True, slots=True)
class RunStatus:
    """Worst outcome seen so far; ``0`` means success."""

    code: int = 0

    def __post_init__(self) -> None:
        if self.code < 0:
            raise ValueError(f"status code must be non-negative, got {self.code}")

    @property
    def ok(self) -> bool:
        return self.code == 0

    def escalate(self, code: int) -> RunStatus:
        """Return a status holding ``max(self.code, code)``."""
        if code <= self.code:
            return self
        return RunStatus(code)

    def record(self, kind: ErrorKind) -> RunStatus:
        return self.escalate(kind.exit_code)
