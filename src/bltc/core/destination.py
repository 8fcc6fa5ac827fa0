"""Pure destination resolution.

Every function in this module is a **pure** transformation over paths —
no filesystem access, fully deterministic, and trivially unit-testable.

Precedence
----------
1. A console job stays on the console.
2. No explicit destination:
   * file source — the source path (joined onto the output root when one
     is configured, so absolute sources stay where they are) with its
     extension replaced;
   * raw/console source — standard output, with or without an output
     root, since there is no file name to anchor a default.
3. Explicit destination — joined to the output root when relative and a
   root is configured, otherwise used as given.
"""

from __future__ import annotations

from pathlib import Path

from bltc.core.models import (
    CONSOLE_DESTINATION,
    DestKind,
    Destination,
    Job,
    SourceFile,
)


def default_destination(
    source_file: SourceFile,
    output_root: Path | None,
    extension: str,
) -> Path:
    """Return the destination used when a file job names none."""
    if output_root is not None:
        base = output_root / source_file.relative_path
    else:
        base = source_file.path
    return base.with_suffix(extension)


def explicit_destination(dest: str, output_root: Path | None) -> Path:
    """Root a relative explicit destination beneath *output_root*."""
    path = Path(dest)
    if output_root is not None and not path.is_absolute():
        return output_root / path
    return path


def resolve_destination(
    job: Job,
    source_file: SourceFile | None,
    output_root: Path | None,
    extension: str,
) -> Destination:
    """Compute where the output of *job* goes.

    Parameters
    ----------
    job:
        The declared job.
    source_file:
        The matched file, or ``None`` for raw and console sources.
    output_root:
        Absolute output directory, or ``None``.
    extension:
        Compiler output extension including the leading dot.
    """
    if job.dest_kind is DestKind.CONSOLE:
        return CONSOLE_DESTINATION

    if not job.dest:
        if source_file is None:
            return CONSOLE_DESTINATION
        return Destination(
            DestKind.PATH,
            default_destination(source_file, output_root, extension),
        )

    return Destination(DestKind.PATH, explicit_destination(job.dest, output_root))
