"""Core / service layer — job resolution, destination rules and dispatch.

Rules
-----
* No ``print()`` calls.
* Filesystem and stream access only through the protocols in
  :mod:`bltc.core.protocols`.
* No imports from ``cli`` or ``infra``.
"""

from bltc.core.destination import resolve_destination
from bltc.core.dispatcher import JobDispatcher
from bltc.core.driver import CompileRun
from bltc.core.models import (
    Destination,
    DestKind,
    Job,
    ResolvedSource,
    RunConfig,
    SourceFile,
    SourceKind,
)
from bltc.core.results import Failure, StepResult, Success
from bltc.core.source_resolver import SourceResolver
from bltc.core.stdin_cache import StdinCache
from bltc.core.status import ErrorKind, RunStatus

__all__: list[str] = [
    "CompileRun",
    "DestKind",
    "Destination",
    "ErrorKind",
    "Failure",
    "Job",
    "JobDispatcher",
    "ResolvedSource",
    "RunConfig",
    "RunStatus",
    "SourceFile",
    "SourceKind",
    "SourceResolver",
    "StdinCache",
    "StepResult",
    "Success",
    "resolve_destination",
]
