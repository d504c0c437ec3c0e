from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import TextIO

from ..schemas import TleRecord

logger = logging.getLogger(__name__)


class OutputError(Exception):
    pass


def format_record(record: TleRecord) -> str:
    """Render one record as the three-line name/line1/line2 block."""
    return f"{record.display_name}\n{record.line_1}\n{record.line_2}\n"


def open_output(path: Path) -> TextIO:
    """Create (or truncate) the output file, line buffered."""
    try:
        return open(path, "w", buffering=1, encoding="utf-8", newline="\n")
    except OSError as exc:
        raise OutputError(f"Could not create output file {path}: {exc}") from exc


def write_records(handle: TextIO, records: Iterable[TleRecord]) -> int:
    """Write the records in order to an open handle and return the count.

    A failure partway through leaves whatever was already flushed.
    """
    count = 0
    try:
        for record in records:
            handle.write(format_record(record))
            count += 1
    except OSError as exc:
        raise OutputError(f"Could not write output file {handle.name}: {exc}") from exc
    logger.debug("Wrote %d records to %s", count, handle.name)
    return count
