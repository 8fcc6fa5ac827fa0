"""Allow ``python -m bltc`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m bltc`` behaves identically to the ``bltc`` console
script.
"""

from __future__ import annotations

from bltc.cli.app import cli

if __name__ == "__main__":
    cli()
