"""Step results returned by the fallible stages of a run.

Each stage hands back either a :class:`Success` wrapping its product or a
:class:`Failure` tagged with an :class:`~bltc.core.status.ErrorKind`.
The driver decides from the tag whether to continue, skip or abort.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from bltc.core.status import ErrorKind

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Success(Generic[T]):
    value: T


@dataclass(frozen=True, slots=True)
class Failure:
    """A classified failure local to one job."""

    kind: ErrorKind
    message: str
    path: str | None = None
    """Offending input or output path, when there is one."""

    def describe(self) -> str:
        if self.path:
            return f"{self.message} [{self.path}]"
        return self.message


StepResult = Union[Success[T], Failure]
