"""Single capture of standard input, shared by every ``--stdin`` job.

Standard input cannot be replayed, so it is read once, on first use, and
the captured text is handed out verbatim afterwards.
"""

from __future__ import annotations

from collections.abc import Callable


class StdinCache:
    """Lazily read and memoise the text produced by *reader*.

    Parameters
    ----------
    reader:
        Zero-argument callable returning the whole input stream.  It is
        expected to raise :class:`~bltc.exceptions.StdinReadError` on
        failure.
    """

    def __init__(self, reader: Callable[[], str]) -> None:
        self._reader = reader
        self._content: str | None = None

    @property
    def loaded(self) -> bool:
        return self._content is not None

    def get(self) -> str:
        """Return the captured input, reading it on the first call.

        A failing read propagates and leaves the cache empty.
        """
        if self._content is None:
            self._content = self._reader()
        return self._content
