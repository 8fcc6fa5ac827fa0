"""Infrastructure: local filesystem adapter.

Implements :class:`~bltc.core.protocols.SourceFinder` and
:class:`~bltc.core.protocols.Workspace` on top of :mod:`glob` and
:mod:`pathlib`.

Rules
-----
* Glob results keep the enumeration order of the directory; they are
  never sorted.
* Directories are never returned as inputs.
* ``OSError`` raised while preparing the output root is re-raised as
  :class:`~bltc.exceptions.OutputRootError`.
"""

from __future__ import annotations

import glob as globlib
import os
import re
from collections.abc import Sequence
from pathlib import Path

from bltc.core.models import SourceFile
from bltc.exceptions import OutputRootError

_MULTI_PATH_SEPARATORS = re.compile("[;" + re.escape(os.pathsep) + "]")


def parse_multi_path(value: str) -> list[Path]:
    """Split a ``;``/path-separator delimited list of directories."""
    return [Path(part) for part in _MULTI_PATH_SEPARATORS.split(value) if part]


class LocalFileSystem:
    """Concrete filesystem adapter used by the CLI."""

    # ------------------------------------------------------------------
    # SourceFinder
    # ------------------------------------------------------------------

    def exists(self, path: Path) -> bool:
        return path.exists()

    def is_dir(self, path: Path) -> bool:
        return path.is_dir()

    def glob(self, pattern: str, search_paths: Sequence[Path]) -> list[SourceFile]:
        """Expand *pattern* in every search path, in order.

        An absolute pattern ignores the search paths and is expanded once;
        its matches keep their absolute path as ``relative_path``.
        """
        if Path(pattern).is_absolute():
            return [
                SourceFile(path=Path(match), relative_path=Path(match))
                for match in globlib.glob(pattern, recursive=True)
                if not os.path.isdir(match)
            ]

        matches: list[SourceFile] = []
        for root in search_paths:
            for match in globlib.glob(pattern, root_dir=root, recursive=True):
                candidate = root / match
                if candidate.is_dir():
                    continue
                matches.append(SourceFile(path=candidate, relative_path=Path(match)))
        return matches

    def read_text(self, path: Path) -> str:
        return path.read_text(encoding="utf-8")

    # ------------------------------------------------------------------
    # Workspace
    # ------------------------------------------------------------------

    def cwd(self) -> Path:
        return Path.cwd()

    def prepare_output_root(self, path: Path) -> Path:
        root = path.absolute()
        try:
            if not root.exists():
                root.mkdir(parents=True)
        except OSError as exc:
            raise OutputRootError(
                f"Filesystem error while creating output path: {exc}",
                path=str(root),
            ) from exc

        if not root.is_dir():
            raise OutputRootError(
                "Output path is not a directory",
                path=str(root),
                hint="Pass an existing directory, or a path that does not exist yet, to --output-dir.",
            )
        return root
