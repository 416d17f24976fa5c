"""In-flight models for one upload: routing output, store results and summary."""

from __future__ import annotations

from pydantic import BaseModel, Field

from hringest.core.types import Row
from hringest.models.audit import AuditRecord


class AcceptedRow(BaseModel):
    """A row that passed validation, waiting to be sanitized and stored."""

    row_number: int
    data: Row
    upload_batch: str


class RoutedBatch(BaseModel):
    """Rows of one upload partitioned by validation outcome, input order preserved."""

    file_name: str | None = None
    accepted: list[AcceptedRow] = Field(default_factory=list)
    rejected: list[AuditRecord] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.accepted) + len(self.rejected)


class BulkInsertResult(BaseModel):
    """What a store actually committed from one unordered bulk insert."""

    inserted_count: int = 0
    conflicts: list[str] = Field(default_factory=list)  # keys rejected as duplicates

    @property
    def conflict_count(self) -> int:
        return len(self.conflicts)


class PersistResult(BaseModel):
    """Counts of records committed to each sink for one upload."""

    saved_valid: int = 0
    saved_invalid: int = 0
    duplicates: list[str] = Field(default_factory=list)


class UploadSummary(BaseModel):
    """Outcome of processing one uploaded file."""

    batch_id: str
    file_name: str
    total_records: int
    valid_records: int
    invalid_records: int
    rejected_by_validation: int = 0
    duplicates: list[str] = Field(default_factory=list)

    @property
    def success_rate(self) -> str:
        return format_success_rate(self.valid_records, self.total_records)


def format_success_rate(successes: int, total: int) -> str:
    """Render ``successes / total`` as a two-decimal percentage, ``"0%"`` when empty."""
    if total <= 0:
        return "0%"
    return f"{successes / total * 100:.2f}%"
