"""Resolve a job's declared source into concrete template text.

A path job is a one-to-many expansion: a single pattern may match zero,
one or many files, and every match becomes its own
:class:`~bltc.core.models.ResolvedSource`.  Raw and console jobs always
resolve to exactly one value.

Guarantees
----------
* Filesystem access goes through the injected
  :class:`~bltc.core.protocols.SourceFinder`.
* Read failures are reported per match and never hide sibling matches.
* Only :class:`~bltc.exceptions.FatalError` (from the stdin cache)
  escapes as an exception.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from bltc.core.models import Job, ResolvedSource, SourceFile, SourceKind
from bltc.core.protocols import SourceFinder
from bltc.core.results import Failure, StepResult, Success
from bltc.core.stdin_cache import StdinCache
from bltc.core.status import ErrorKind

logger = logging.getLogger(__name__)


class SourceResolver:
    """Turn jobs into ``(content, job)`` pairs.

    Parameters
    ----------
    finder:
        Filesystem adapter used for globbing and reading.
    stdin:
        Shared capture of standard input for console jobs.
    """

    def __init__(self, finder: SourceFinder, stdin: StdinCache) -> None:
        self._finder: SourceFinder = finder
        self._stdin: StdinCache = stdin

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def resolve(
        self,
        job: Job,
        search_paths: Sequence[Path],
    ) -> list[StepResult[ResolvedSource]]:
        """Resolve *job* against *search_paths*.

        Returns one result per match for path jobs (a single
        ``NO_INPUT_FOUND`` failure when nothing matched) and a single
        success for raw and console jobs.

        Raises
        ------
        StdinReadError
            When a console job needs standard input and it cannot be read.
        """
        if job.source_kind is SourceKind.CONSOLE:
            logger.debug("Processing stdin")
            return [Success(ResolvedSource(self._stdin.get(), job))]

        if job.source_kind is SourceKind.RAW:
            logger.debug("Processing template from command line")
            return [Success(ResolvedSource(job.source, job))]

        logger.debug("Processing input path: %s", job.source)
        matches = self.find_matches(job.source, search_paths)
        if isinstance(matches, Failure):
            return [matches]

        if len(matches) > 1:
            for match in matches:
                logger.debug("Expanded input path match: %s", match.path)

        return [self._load(match, job) for match in matches]

    def find_matches(
        self,
        pattern: str,
        search_paths: Sequence[Path],
    ) -> list[SourceFile] | Failure:
        """Return the files *pattern* refers to.

        A ``NO_INPUT_FOUND`` failure is returned when nothing matched and
        an ``IO_READ`` failure when the filesystem could not be searched.
        """
        try:
            return self._search(pattern, search_paths)
        except OSError as exc:
            return Failure(
                ErrorKind.IO_READ,
                f"Error while searching for input: {exc}",
                path=pattern,
            )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _search(
        self,
        pattern: str,
        search_paths: Sequence[Path],
    ) -> list[SourceFile] | Failure:
        source = Path(pattern)
        if source.is_absolute() and self._finder.exists(source):
            if self._finder.is_dir(source):
                return Failure(
                    ErrorKind.NO_INPUT_FOUND,
                    "Input path is a directory",
                    path=pattern,
                )
            # An absolute relative_path makes ``output_root / relative_path``
            # resolve to the source itself.
            return [SourceFile(path=source, relative_path=source)]

        matches = self._finder.glob(pattern, search_paths)
        if not matches:
            searched = ", ".join(str(p) for p in search_paths)
            return Failure(
                ErrorKind.NO_INPUT_FOUND,
                f"No files found matching pattern (searched: {searched})",
                path=pattern,
            )
        return matches

    def _load(self, match: SourceFile, job: Job) -> StepResult[ResolvedSource]:
        logger.debug("Loading file: %s", match.path)
        try:
            content = self._finder.read_text(match.path)
        except (OSError, UnicodeError) as exc:
            return Failure(
                ErrorKind.IO_READ,
                f"Error while reading file: {exc}",
                path=str(match.path),
            )
        return Success(ResolvedSource(content, job, match))
