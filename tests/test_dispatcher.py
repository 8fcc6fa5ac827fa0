"""Tests for per-job dispatch (core/dispatcher.py).

The compiler and sink factory are mocked; sink lifetime is observed
through a recording context manager.
"""

from __future__ import annotations

import io
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator
from unittest.mock import MagicMock

import pytest

from bltc.core.dispatcher import JobDispatcher
from bltc.core.models import CONSOLE_DESTINATION, Destination, DestKind, Job, ResolvedSource, SourceKind
from bltc.core.results import Failure, Success
from bltc.core.status import ErrorKind
from bltc.exceptions import FatalError, TemplateSyntaxError


class _RecordingSinks:
    """Sink factory that hands out StringIO buffers and records releases."""

    def __init__(self, *, fail_open: bool = False) -> None:
        self.fail_open = fail_open
        self.opened: list[Destination] = []
        self.released: list[Destination] = []
        self.buffers: list[io.StringIO] = []

    @contextmanager
    def _sink(self, destination: Destination) -> Iterator[io.StringIO]:
        if self.fail_open:
            raise PermissionError("read-only filesystem")
        self.opened.append(destination)
        buffer = io.StringIO()
        self.buffers.append(buffer)
        try:
            yield buffer
        finally:
            self.released.append(destination)

    def open(self, destination: Destination):
        return self._sink(destination)


def _resolved(content: str = "`=1`") -> ResolvedSource:
    return ResolvedSource(content, Job("`=1`", "", SourceKind.RAW, DestKind.CONSOLE))


def _compiler() -> MagicMock:
    compiler = MagicMock()
    compiler.output_extension = ".lua"
    compiler.compile.return_value = "compiled\n"
    compiler.debug.return_value = "trace\n"
    return compiler


FILE_DEST = Destination(DestKind.PATH, Path("out/a.lua"))


class TestDispatchSuccess:
    def test_writes_compiled_output(self) -> None:
        sinks = _RecordingSinks()
        compiler = _compiler()

        result = JobDispatcher(compiler, sinks).dispatch(_resolved("src"), FILE_DEST)

        assert result == Success(FILE_DEST)
        compiler.compile.assert_called_once_with("src")
        compiler.debug.assert_not_called()
        assert sinks.buffers[0].getvalue() == "compiled\n"
        assert sinks.released == [FILE_DEST]

    def test_debug_mode_uses_trace(self) -> None:
        sinks = _RecordingSinks()
        compiler = _compiler()

        JobDispatcher(compiler, sinks, debug=True).dispatch(_resolved("src"), CONSOLE_DESTINATION)

        compiler.debug.assert_called_once_with("src")
        compiler.compile.assert_not_called()
        assert sinks.buffers[0].getvalue() == "trace\n"


class TestDispatchFailures:
    def test_open_failure_skips_compile(self) -> None:
        compiler = _compiler()
        result = JobDispatcher(compiler, _RecordingSinks(fail_open=True)).dispatch(_resolved(), FILE_DEST)

        assert isinstance(result, Failure)
        assert result.kind is ErrorKind.IO_WRITE
        assert result.path == "out/a.lua"
        compiler.compile.assert_not_called()

    def test_compile_error_releases_sink(self) -> None:
        sinks = _RecordingSinks()
        compiler = _compiler()
        compiler.compile.side_effect = TemplateSyntaxError("Unterminated code section", line=1, column=1)

        result = JobDispatcher(compiler, sinks).dispatch(_resolved(), FILE_DEST)

        assert isinstance(result, Failure)
        assert result.kind is ErrorKind.COMPILE
        assert "Unterminated" in result.message
        assert sinks.released == [FILE_DEST]

    def test_write_error_is_io_write(self) -> None:
        sink = MagicMock()
        sink.write.side_effect = OSError("No space left on device")
        sinks = MagicMock()
        sinks.open.return_value.__enter__.return_value = sink
        sinks.open.return_value.__exit__.return_value = False

        result = JobDispatcher(_compiler(), sinks).dispatch(_resolved(), FILE_DEST)

        assert isinstance(result, Failure)
        assert result.kind is ErrorKind.IO_WRITE
        sinks.open.return_value.__exit__.assert_called_once()

    def test_fatal_error_propagates_after_release(self) -> None:
        sinks = _RecordingSinks()
        compiler = _compiler()
        compiler.compile.side_effect = FatalError("out of memory")

        with pytest.raises(FatalError):
            JobDispatcher(compiler, sinks).dispatch(_resolved(), FILE_DEST)
        assert sinks.released == [FILE_DEST]
