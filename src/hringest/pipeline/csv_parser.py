"""CSV row normalizer: raw upload bytes to an ordered list of rows.

Each row maps a lowercased, trimmed header name to a trimmed cell value.
"""

from __future__ import annotations

import csv
import io
import logging

from hringest.core.exceptions import CSVParseError
from hringest.core.types import Row

logger = logging.getLogger(__name__)

REQUIRED_HEADERS = ["employeeid", "name", "email", "department", "salary", "joiningdate"]


def normalize_header(header: str) -> str:
    return header.strip().lower()


def parse_csv_bytes(data: bytes, encoding: str = "utf-8-sig") -> list[Row]:
    """Parse a CSV upload into rows keyed by normalized header.

    Empty lines are skipped, cells past the header width are dropped and
    missing trailing cells become ``""``.

    Raises:
        CSVParseError: If the bytes cannot be decoded or the CSV is malformed.
    """
    try:
        text = data.decode(encoding)
    except UnicodeDecodeError as exc:
        raise CSVParseError(f"Failed to parse CSV: {exc}") from exc

    reader = csv.reader(io.StringIO(text, newline=""))
    rows: list[Row] = []
    try:
        header = next(reader, None)
        if header is None:
            return rows
        keys = [normalize_header(h) for h in header]

        for cells in reader:
            if not cells:
                continue
            row: Row = {}
            for i, key in enumerate(keys):
                if not key:
                    continue
                row[key] = cells[i].strip() if i < len(cells) else ""
            rows.append(row)
    except csv.Error as exc:
        raise CSVParseError(f"Failed to parse CSV: line {reader.line_num}: {exc}") from exc

    logger.debug("CSV parsed", extra={"records": len(rows)})
    return rows


def find_missing_headers(rows: list[Row]) -> list[str]:
    """Return the required headers absent from the first row, in canonical order."""
    if not rows:
        return list(REQUIRED_HEADERS)
    present = set(rows[0])
    return [h for h in REQUIRED_HEADERS if h not in present]
