"""Dual-sink persistence: accepted rows to the record store, rejected rows to the audit store."""

from __future__ import annotations

import logging
from collections import Counter

from hringest.core.logging import log_operation
from hringest.core.protocols import IAuditStore, IRecordStore
from hringest.models.audit import AuditRecord
from hringest.models.employee import EmployeeRecord
from hringest.models.upload import AcceptedRow, PersistResult, RoutedBatch
from hringest.models.validation import FailureReason, ValidationIssue
from hringest.pipeline.validator import sanitize_employee_data

logger = logging.getLogger(__name__)


def _duplicate_audit_records(
    accepted: list[AcceptedRow],
    employees: list[EmployeeRecord],
    conflicts: list[str],
    file_name: str | None,
) -> list[AuditRecord]:
    """Audit entries for the accepted rows the record store refused as duplicates.

    Inserts run in input order, so for an id refused ``n`` times the refused
    rows are its last ``n`` occurrences.
    """
    remaining = Counter(conflicts)
    occurrences: dict[str, list[AcceptedRow]] = {}
    for row, employee in zip(accepted, employees):
        occurrences.setdefault(employee.employee_id, []).append(row)

    refused: list[tuple[AcceptedRow, str]] = []
    for employee_id, count in remaining.items():
        rows = occurrences.get(employee_id, [])
        refused.extend((row, employee_id) for row in rows[len(rows) - count:])

    return [
        AuditRecord(
            row_number=row.row_number,
            raw_data=dict(row.data),
            validation_errors=[
                ValidationIssue(
                    field="employeeId",
                    message=f"Employee ID '{employee_id}' already exists",
                    value=employee_id,
                )
            ],
            failure_reason=FailureReason.DUPLICATE_EMPLOYEE_ID,
            upload_batch=row.upload_batch,
            file_name=file_name,
        )
        for row, employee_id in sorted(refused, key=lambda pair: pair[0].row_number)
    ]


def persist_batch(
    routed: RoutedBatch,
    record_store: IRecordStore,
    audit_store: IAuditStore,
    *,
    audit_duplicates: bool = False,
) -> PersistResult:
    """Write both sinks and return what each actually committed.

    Duplicate employee ids on the accepted path are not fatal: they lower
    ``saved_valid`` and are listed in ``duplicates``. Every other store
    failure propagates as ``StoreError``.
    """
    result = PersistResult()
    rejected = list(routed.rejected)

    with log_operation(
        "Persisting batch", logger,
        accepted=len(routed.accepted), rejected=len(routed.rejected),
    ):
        if routed.accepted:
            employees = [sanitize_employee_data(row.data, row.upload_batch) for row in routed.accepted]
            inserted = record_store.insert_many(employees)
            result.saved_valid = inserted.inserted_count
            result.duplicates = list(inserted.conflicts)

            if inserted.conflicts:
                logger.warning(
                    f"Some records were duplicates: {inserted.conflict_count}",
                    extra={"duplicates": inserted.conflict_count},
                )
                if audit_duplicates:
                    rejected.extend(
                        _duplicate_audit_records(routed.accepted, employees, inserted.conflicts, routed.file_name)
                    )

        if rejected:
            result.saved_invalid = audit_store.insert_many(rejected).inserted_count

    return result
