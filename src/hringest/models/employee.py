"""EmployeeRecord: an accepted row as stored in the record store."""

from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal
from enum import StrEnum

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class EmployeeStatus(StrEnum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class EmployeeRecord(BaseModel):
    """Validated, sanitized employee tagged with the upload batch that created it."""

    # --- Identity ---
    employee_id: str = Field(min_length=1)  # unique across the store

    # --- Profile ---
    name: str = Field(min_length=1)
    email: str = Field(pattern=r"^\S+@\S+\.\S+$")
    department: str = Field(min_length=1)
    salary: Decimal = Field(ge=0)  # admission requires > 0, see validator
    joining_date: date
    status: EmployeeStatus = EmployeeStatus.ACTIVE

    # --- Processing Metadata ---
    upload_batch: str
    uploaded_at: datetime = Field(default_factory=utcnow)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    model_config = {
        "str_strip_whitespace": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }

    @field_validator("email")
    @classmethod
    def _lowercase_email(cls, v: str) -> str:
        return v.lower()
