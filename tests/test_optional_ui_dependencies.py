"""Regression tests for running without the optional Rich renderer.

Help, version and plain compilation must keep working when Rich cannot
be imported; diagnostics fall back to plain stderr text.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest

from bltc.cli import exit_codes
from bltc.cli.app import main
from bltc.cli.console import console, get_rich_console
from bltc.cli.logging_setup import configure_logging
from bltc.exceptions import BltcError, EnvironmentError


def _hide_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(sys.modules, "rich", None)
    monkeypatch.setitem(sys.modules, "rich.console", None)
    monkeypatch.setitem(sys.modules, "rich.logging", None)


def test_help_works_without_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)

    with pytest.raises(SystemExit) as exc_info:
        main(["--help"])
    assert exc_info.value.code == 0


def test_get_rich_console_raises_environment_error(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)

    with pytest.raises(EnvironmentError, match="rich is not installed"):
        get_rich_console()


def test_logging_falls_back_to_stream_handler(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)

    configure_logging("warning")

    handlers = logging.getLogger("bltc").handlers
    assert len(handlers) == 1
    assert type(handlers[0]) is logging.StreamHandler


def test_error_rendering_falls_back_to_stderr(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str],
) -> None:
    _hide_rich(monkeypatch)

    console.print_error(BltcError("boom", hint="try again"))

    err = capsys.readouterr().err
    assert "boom" in err
    assert "try again" in err


def test_missing_input_reported_without_rich(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str],
) -> None:
    _hide_rich(monkeypatch)
    monkeypatch.chdir(tmp_path)

    assert main(["missing.blt"]) == exit_codes.NO_INPUT_FOUND
    assert "missing.blt" in capsys.readouterr().err
