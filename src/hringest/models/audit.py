"""AuditRecord: a rejected row with the reasons it was turned away."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from hringest.models.employee import utcnow
from hringest.models.validation import FailureReason, ValidationIssue


class AuditRecord(BaseModel):
    """Immutable audit entry for one invalid row of one upload."""

    row_number: int = Field(ge=2)  # row 1 is the CSV header
    raw_data: dict[str, Any]
    validation_errors: list[ValidationIssue] = Field(default_factory=list)
    failure_reason: FailureReason
    upload_batch: str
    file_name: Optional[str] = None
    processed_at: datetime = Field(default_factory=utcnow)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    model_config = {"alias_generator": to_camel, "populate_by_name": True}
