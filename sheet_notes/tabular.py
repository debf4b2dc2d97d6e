"""
Workbook loading for the note importer.

Reads the first sheet of an Excel workbook (header row + data rows) into plain
row records: ``{"Name": "Clean Code", "Year": 2008, ...}``. Blank cells are left
out of the record so downstream code treats them exactly like a missing column.
"""

from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path
from typing import Any, Dict, List, Tuple

import pandas as pd

from .errors import ParseError

logger = logging.getLogger(__name__)


def _excel_source(blob: Any) -> BytesIO:
    """Return a rewound BytesIO for bytes/bytearray/BytesIO inputs."""

    if isinstance(blob, BytesIO):
        blob.seek(0)
        return blob
    if isinstance(blob, (bytes, bytearray)):
        return BytesIO(blob)
    raise TypeError(f"Expected workbook bytes, got {type(blob).__name__}")


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


# Header is sheet row 1, so DataFrame index 0 is sheet row 2.
FIRST_DATA_ROW = 2


def _frame_to_records(df: pd.DataFrame) -> List[Tuple[int, Dict[str, Any]]]:
    records: List[Tuple[int, Dict[str, Any]]] = []
    for position, raw in zip(df.index, df.to_dict(orient="records")):
        record = {str(col): value for col, value in raw.items() if not _is_blank(value)}
        if record:
            records.append((int(position) + FIRST_DATA_ROW, record))
    return records


def read_numbered_rows(blob: Any) -> List[Tuple[int, Dict[str, Any]]]:
    """
    Parse a workbook blob and return ``(sheet_row_number, record)`` pairs.

    The first row is the header. Rows keep sheet order; fully blank rows are
    skipped but still count towards the row numbers of the rows after them.
    A sheet without a header row yields ``[]``.
    """

    source = _excel_source(blob)
    try:
        df = pd.read_excel(source, sheet_name=0, header=0, dtype=object)
    except Exception as exc:
        logger.error("Failed to parse workbook: %s", exc)
        raise ParseError(f"Could not read workbook: {exc}") from exc

    if df.columns.empty:
        logger.info("First sheet has no header row; nothing to import.")
        return []

    records = _frame_to_records(df)
    logger.info("Read %d row(s) from first sheet (columns: %s)", len(records), ", ".join(map(str, df.columns)))
    return records


def read_rows(blob: Any) -> List[Dict[str, Any]]:
    """Parse a workbook blob and return the first sheet as row records."""

    return [record for _, record in read_numbered_rows(blob)]


def read_rows_from_path(path: Path) -> List[Dict[str, Any]]:
    return read_rows(Path(path).read_bytes())
