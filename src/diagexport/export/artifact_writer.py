"""
Artifact Writer
===============

Writes the contents of the special columns to individual files:
one .sqlplan file per query plan, one .sql file per query text.

Artifacts are always fully replaced, never appended to.
"""

import logging
from pathlib import Path
from typing import Sequence, Union

from .errors import ArtifactExportError
from .models import ArtifactKind, DiagnosticResultRow, Value
from .paths import artifact_path


logger = logging.getLogger(__name__)


# =============================================================================
# PUBLIC INTERFACE
# =============================================================================

def write_artifact(file_path: Path, content: Value) -> Path:
    """
    Write a single value as raw text, replacing any existing file.

    Args:
        file_path: Destination file.
        content: str (written as UTF-8), bytes (written as-is) or any
                 other scalar (written as str()).

    Returns:
        The destination path.

    Raises:
        ArtifactExportError: If the file cannot be written.
    """
    # Encode before opening so a bad value never truncates an existing file
    if isinstance(content, (bytes, bytearray)):
        data = bytes(content)
    else:
        try:
            data = str(content).encode("utf-8")
        except UnicodeError as e:
            raise ArtifactExportError(f"value is not valid text: {e}", file_path) from e

    try:
        with open(file_path, "wb") as f:
            f.write(data)
    except OSError as e:
        raise ArtifactExportError(str(e), file_path) from e

    return file_path


def route_artifacts(
    values: Sequence[Value],
    kind: ArtifactKind,
    row: DiagnosticResultRow,
    output_dir: Union[str, Path],
    suffix: str,
    suppressed: bool = False
) -> list[Path]:
    """
    Write one file per value, numbered from 1.

    Args:
        values: Extracted plan or query-text values.
        kind: Which special column the values came from.
        row: The originating row (selects the naming template).
        output_dir: Destination directory (must already exist).
        suffix: Disambiguating token appended to every file name.
        suppressed: If True, nothing is written.

    Returns:
        Paths of the written files.

    Raises:
        ArtifactExportError: On the first file that cannot be written.
    """
    if suppressed:
        return []

    written = []
    for index, value in enumerate(values, start=1):
        file_path = artifact_path(output_dir, row, kind, index, suffix)
        logger.info("Exporting %s", file_path)
        written.append(write_artifact(file_path, value))

    return written
