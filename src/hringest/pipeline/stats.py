"""Read-only aggregation over the record and audit stores."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from hringest.core.protocols import IAuditStore, IRecordStore
from hringest.models.audit import AuditRecord
from hringest.models.upload import format_success_rate
from hringest.models.validation import FailureReason, ValidationIssue

_CAMEL = {"alias_generator": to_camel, "populate_by_name": True}


class GlobalStats(BaseModel):
    total_valid_records: int
    total_invalid_records: int
    total_processed: int

    model_config = _CAMEL


class FailedRecordView(BaseModel):
    row: int
    reason: FailureReason
    errors: list[ValidationIssue] = Field(default_factory=list)
    data: dict[str, Any] = Field(default_factory=dict)


class BatchStats(BaseModel):
    """Success/failure metrics for one upload batch."""

    batch_id: str
    total_records: int
    success_count: int
    failure_count: int
    success_rate: str
    failure_breakdown: dict[str, int] = Field(default_factory=dict)
    failed_records: list[FailedRecordView] = Field(default_factory=list)

    model_config = _CAMEL


class StatsService:
    """Query layer answering batch and global statistics."""

    def __init__(self, *, record_store: IRecordStore, audit_store: IAuditStore) -> None:
        self._records = record_store
        self._audit = audit_store

    def global_stats(self) -> GlobalStats:
        valid = self._records.count()
        invalid = self._audit.count()
        return GlobalStats(
            total_valid_records=valid,
            total_invalid_records=invalid,
            total_processed=valid + invalid,
        )

    def batch_stats(self, batch_id: str) -> BatchStats:
        valid = self._records.count(batch_id)
        failures = self._audit.find(batch_id)
        total = valid + len(failures)

        breakdown: dict[str, int] = {}
        for record in failures:
            reason = record.failure_reason.value
            breakdown[reason] = breakdown.get(reason, 0) + 1

        return BatchStats(
            batch_id=batch_id,
            total_records=total,
            success_count=valid,
            failure_count=len(failures),
            success_rate=format_success_rate(valid, total),
            failure_breakdown=breakdown,
            failed_records=[
                FailedRecordView(
                    row=r.row_number, reason=r.failure_reason,
                    errors=r.validation_errors, data=r.raw_data,
                )
                for r in failures
            ],
        )

    def audit_log(self, batch_id: str) -> list[AuditRecord]:
        """All audit records of a batch ordered by row number."""
        return self._audit.find(batch_id)
