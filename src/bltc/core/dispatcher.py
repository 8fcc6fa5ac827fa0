"""Compile one resolved job into its destination sink.

Per-job pipeline: open sink → compile (or trace) → write → release sink.
The sink is always released before :meth:`JobDispatcher.dispatch`
returns, whatever happened in between.
"""

from __future__ import annotations

import logging
from contextlib import ExitStack

from bltc.core.models import Destination, ResolvedSource
from bltc.core.protocols import SinkFactory, TemplateCompiler
from bltc.core.results import Failure, StepResult, Success
from bltc.core.status import ErrorKind
from bltc.exceptions import CompileError

logger = logging.getLogger(__name__)


class JobDispatcher:
    """Drive the compiler for resolved jobs.

    Parameters
    ----------
    compiler:
        Template compiler backend.
    sinks:
        Factory opening file or console sinks.
    debug:
        When ``True`` the compiler's trace variant is used.
    """

    def __init__(
        self,
        compiler: TemplateCompiler,
        sinks: SinkFactory,
        *,
        debug: bool = False,
    ) -> None:
        self._compiler: TemplateCompiler = compiler
        self._sinks: SinkFactory = sinks
        self._debug = debug

    def dispatch(
        self,
        resolved: ResolvedSource,
        destination: Destination,
    ) -> StepResult[Destination]:
        """Compile *resolved* into *destination*.

        Returns
        -------
        StepResult
            ``Success(destination)`` once output has been written;
            ``IO_WRITE`` when the sink cannot be opened or written
            (compilation is skipped if opening fails); ``COMPILE`` when the
            compiler rejects the template.

        Raises
        ------
        FatalError
            Propagated unchanged; the driver aborts the run.
        """
        if destination.is_console:
            logger.debug("Outputting to stdout")
        else:
            logger.debug("Opening output file: %s", destination.describe())

        try:
            with ExitStack() as stack:
                try:
                    sink = stack.enter_context(self._sinks.open(destination))
                except OSError as exc:
                    return Failure(
                        ErrorKind.IO_WRITE,
                        f"Error while opening file: {exc}",
                        path=destination.describe(),
                    )

                try:
                    output = self._run_compiler(resolved.content)
                except CompileError as exc:
                    return Failure(
                        ErrorKind.COMPILE,
                        f"BLT error: {exc}",
                        path=_label(resolved),
                    )

                sink.write(output)
        except OSError as exc:
            # write() or the flush on close
            return Failure(
                ErrorKind.IO_WRITE,
                f"Error while writing output: {exc}",
                path=destination.describe(),
            )
        return Success(destination)

    def _run_compiler(self, content: str) -> str:
        if self._debug:
            return self._compiler.debug(content)
        return self._compiler.compile(content)


def _label(resolved: ResolvedSource) -> str:
    if resolved.source_file is not None:
        return str(resolved.source_file.path)
    return f"<{resolved.job.source_kind.value}>"
