"""Exit-code constants used by the CLI layer.

Centralised here so that every exit path uses a well-known, tested
value rather than magic integers scattered across the codebase.  Codes
1-6 are ranked by severity; a run exits with the highest one it hit.
"""

from __future__ import annotations

SUCCESS: int = 0
"""Clean exit — every job compiled."""

UNKNOWN_ERROR: int = 1
"""An unknown or unexpected error occurred, or there was nothing to do."""

USAGE_ERROR: int = 2
"""There was a problem parsing the command line arguments."""

NO_INPUT_FOUND: int = 3
"""An input file does not exist or is a directory."""

INPUT_READ_ERROR: int = 4
"""An I/O error occurred while reading an input file."""

OUTPUT_WRITE_ERROR: int = 5
"""An I/O error occurred while writing an output file."""

COMPILE_ERROR: int = 6
"""A BLT lexer or parser error occurred."""

KEYBOARD_INTERRUPT: int = 130
"""User pressed Ctrl+C.  Follows POSIX convention (128 + SIGINT=2)."""

DESCRIPTIONS: dict[int, str] = {
    SUCCESS: "There were no errors.",
    UNKNOWN_ERROR: "An unknown error occurred.",
    USAGE_ERROR: "There was a problem parsing the command line arguments.",
    NO_INPUT_FOUND: "An input file does not exist or is a directory.",
    INPUT_READ_ERROR: "An I/O error occurred while reading an input file.",
    OUTPUT_WRITE_ERROR: "An I/O error occurred while writing an output file.",
    COMPILE_ERROR: "A BLT lexer or parser error occurred.",
}
