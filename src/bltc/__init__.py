"""bltc — Backtick Lua Template compiler.

Compiles BLT templates from files, glob patterns, inline strings or
standard input to Lua source, one job at a time.
"""

from bltc.version import __version__

__all__: list[str] = ["__version__"]
