"""Shared pytest fixtures and configuration for the bltc test suite.

Guidelines
----------
* Filesystem tests work only inside ``tmp_path``.
* Core tests drive the protocols with mocks or in-memory fakes.
* Standard streams are observed through ``capsys``/``monkeypatch``.
"""

from __future__ import annotations

import io
import logging
import sys

import pytest


@pytest.fixture()
def fake_stdin(monkeypatch: pytest.MonkeyPatch):
    """Replace ``sys.stdin`` with a text buffer; returns a setter."""

    def _install(text: str) -> io.StringIO:
        stream = io.StringIO(text)
        monkeypatch.setattr(sys, "stdin", stream)
        return stream

    return _install


@pytest.fixture(autouse=True)
def _reset_bltc_logging():
    """Drop handlers installed by ``configure_logging`` during a test."""
    yield
    logger = logging.getLogger("bltc")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
