"""Batch router: validate every row once and split accepted from rejected."""

from __future__ import annotations

from datetime import date
from typing import Sequence

from hringest.core.types import Row
from hringest.models.audit import AuditRecord
from hringest.models.upload import AcceptedRow, RoutedBatch
from hringest.pipeline.validator import validate_employee_data

HEADER_OFFSET = 2  # row 1 is the header and row numbers are 1-based


def route_rows(
    rows: Sequence[Row],
    upload_batch: str,
    file_name: str | None = None,
    today: date | None = None,
) -> RoutedBatch:
    """Partition ``rows`` into accepted and rejected, preserving input order.

    Performs no I/O; an empty input yields two empty collections.
    """
    routed = RoutedBatch(file_name=file_name)

    for index, row in enumerate(rows):
        row_number = index + HEADER_OFFSET
        validation = validate_employee_data(row, today=today)

        if validation.is_valid:
            routed.accepted.append(
                AcceptedRow(row_number=row_number, data=dict(row), upload_batch=upload_batch)
            )
        else:
            routed.rejected.append(
                AuditRecord(
                    row_number=row_number,
                    raw_data=dict(row),
                    validation_errors=validation.errors,
                    failure_reason=validation.primary_reason,
                    upload_batch=upload_batch,
                    file_name=file_name,
                )
            )

    return routed
