"""Top-level run driver.

A run has two phases:

1. **Configuration** — default the search path, establish the output
   root.  A failure here ends the run immediately with its code.
2. **Jobs** — every job is resolved, given a destination and dispatched,
   in declaration order.  Failures are recorded and the next job runs;
   only a :class:`~bltc.exceptions.FatalError` stops the loop.

The :class:`~bltc.core.status.RunStatus` is threaded through both phases
as a plain value and returned to the caller as the exit status.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import replace

from bltc.core.destination import resolve_destination
from bltc.core.dispatcher import JobDispatcher
from bltc.core.models import Job, ResolvedSource, RunConfig
from bltc.core.protocols import SinkFactory, SourceFinder, TemplateCompiler, Workspace
from bltc.core.results import Failure, StepResult, Success
from bltc.core.source_resolver import SourceResolver
from bltc.core.stdin_cache import StdinCache
from bltc.core.status import ErrorKind, RunStatus
from bltc.exceptions import FatalError, OutputRootError

logger = logging.getLogger(__name__)


class CompileRun:
    """Orchestrates one invocation of the compiler over a job list.

    Parameters
    ----------
    compiler:
        Template compiler backend.
    finder:
        Filesystem adapter for locating and reading inputs.
    workspace:
        Adapter for working-directory lookup and output-root setup.
    sinks:
        Factory opening output sinks.
    stdin:
        Capture of standard input, shared by all console jobs of the run.
    """

    def __init__(
        self,
        *,
        compiler: TemplateCompiler,
        finder: SourceFinder,
        workspace: Workspace,
        sinks: SinkFactory,
        stdin: StdinCache,
    ) -> None:
        self._compiler: TemplateCompiler = compiler
        self._workspace: Workspace = workspace
        self._sinks: SinkFactory = sinks
        self._sources = SourceResolver(finder, stdin)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def execute(self, jobs: Iterable[Job], config: RunConfig) -> RunStatus:
        """Configure, then process *jobs*; return the aggregated status."""
        configured = self.configure(config)
        if isinstance(configured, Failure):
            _report(configured)
            return RunStatus().record(configured.kind)
        return self.run_jobs(jobs, configured.value)

    def configure(self, config: RunConfig) -> StepResult[RunConfig]:
        """Return *config* with defaulted search paths and an absolute output root."""
        search_paths = config.search_paths or (self._workspace.cwd(),)
        for path in search_paths:
            logger.debug("Search path: %s", path)

        output_root = config.output_root
        if output_root is not None:
            try:
                output_root = self._workspace.prepare_output_root(output_root)
            except OutputRootError as exc:
                return Failure(ErrorKind.OUTPUT_ROOT, str(exc), path=exc.path)
            logger.debug("Output path: %s", output_root)

        return Success(replace(config, search_paths=search_paths, output_root=output_root))

    def run_jobs(
        self,
        jobs: Iterable[Job],
        config: RunConfig,
        status: RunStatus = RunStatus(),
    ) -> RunStatus:
        """Process *jobs* in order against an already configured *config*."""
        dispatcher = JobDispatcher(self._compiler, self._sinks, debug=config.debug)
        for job in jobs:
            try:
                status = self._process(job, config, dispatcher, status)
            except FatalError as exc:
                logger.error("Unexpected fatal error! %s", exc)
                return status.record(ErrorKind.FATAL)
        return status

    # ------------------------------------------------------------------
    # Per-job pipeline
    # ------------------------------------------------------------------

    def _process(
        self,
        job: Job,
        config: RunConfig,
        dispatcher: JobDispatcher,
        status: RunStatus,
    ) -> RunStatus:
        try:
            results = self._sources.resolve(job, config.search_paths)
        except FatalError:
            raise
        except Exception as exc:  # noqa: BLE001
            logger.error("Unexpected exception while processing job! %s: %s", type(exc).__name__, exc)
            return status.record(ErrorKind.UNKNOWN)

        for result in results:
            if isinstance(result, Failure):
                status = status.record(result.kind)
                _report(result)
                continue
            status = self._compile(result.value, config, dispatcher, status)
        return status

    def _compile(
        self,
        resolved: ResolvedSource,
        config: RunConfig,
        dispatcher: JobDispatcher,
        status: RunStatus,
    ) -> RunStatus:
        destination = resolve_destination(
            resolved.job,
            resolved.source_file,
            config.output_root,
            self._compiler.output_extension,
        )
        try:
            outcome = dispatcher.dispatch(resolved, destination)
        except FatalError:
            raise
        except Exception as exc:  # noqa: BLE001
            logger.error("Unexpected exception while compiling! %s: %s", type(exc).__name__, exc)
            return status.record(ErrorKind.UNKNOWN)

        if isinstance(outcome, Failure):
            _report(outcome)
            return status.record(outcome.kind)

        logger.debug("Compiled to %s", outcome.value.describe())
        return status


def _report(failure: Failure) -> None:
    if failure.kind is ErrorKind.NO_INPUT_FOUND:
        logger.warning("%s", failure.describe())
    else:
        logger.error("%s", failure.describe())
