"""Infrastructure layer — filesystem, standard streams and the BLT compiler.

Every raw ``OSError`` raised during configuration is caught here and
re-raised as a :class:`~bltc.exceptions.BltcError` subclass; per-job
``OSError`` is left for the core to classify.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
"""

from bltc.infra.blt_compiler import BltCompiler
from bltc.infra.filesystem import LocalFileSystem, parse_multi_path
from bltc.infra.streams import OutputSinks, read_stdin

__all__: list[str] = [
    "BltCompiler",
    "LocalFileSystem",
    "OutputSinks",
    "parse_multi_path",
    "read_stdin",
]
