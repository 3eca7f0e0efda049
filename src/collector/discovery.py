"""Result file discovery in the server's results directory.

Provides:
- ResultFile: dataclass for a single discovered result file
- discover_result_files: list result files by naming pattern and date
- read_result_file: load one file's raw bytes, ``None`` when unusable
"""

import logging
import re
from dataclasses import dataclass
from datetime import date
from pathlib import Path

from collector.config import FILE_PATTERN
from collector.exceptions import DiscoveryError

logger = logging.getLogger(__name__)

_FILE_RE = re.compile(FILE_PATTERN)


@dataclass
class ResultFile:
    """A result file found in the results directory."""

    filename: str  # endresults-2024-12-18_20-30-00.txt
    path: Path


def discover_result_files(
    directory: str | Path,
    only_today: bool = False,
    today: str | None = None,
) -> list[ResultFile]:
    """List result files, sorted by filename (i.e. by round end time).

    Args:
        directory: Directory the server writes results into.
        only_today: Keep only files whose name carries today's date.
        today: ``YYYY-MM-DD`` to treat as today; local date when None.

    Returns:
        Matching files. Names not following the result file pattern are
        ignored.

    Raises:
        DiscoveryError: If the directory cannot be listed.
    """
    base = Path(directory)
    try:
        entries = sorted(base.iterdir())
    except OSError as exc:
        raise DiscoveryError(
            f"Could not read directory: {base} ({exc})", directory=str(base)
        ) from exc

    day = today or date.today().isoformat()
    results: list[ResultFile] = []
    for entry in entries:
        if not entry.is_file() or not _FILE_RE.search(entry.name):
            continue
        if only_today and day not in entry.name:
            continue
        results.append(ResultFile(filename=entry.name, path=entry))

    logger.info(
        "Found %d result files in %s%s",
        len(results), base, f" for {day}" if only_today else "",
    )
    return results


def read_result_file(result_file: ResultFile) -> bytes | None:
    """Read a result file's raw bytes, ``None`` if it is unreadable or empty.

    Bytes are returned untouched: the record hash is taken over them, and
    decoding happens at assembly.
    """
    try:
        content = result_file.path.read_bytes()
    except OSError as exc:
        logger.warning("Could not read %s: %s", result_file.filename, exc)
        return None

    if not content:
        logger.debug("Skipping %s: empty file", result_file.filename)
        return None
    return content
