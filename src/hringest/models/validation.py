"""Validation outcome models shared by the rule engine and the audit trail."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class FailureReason(StrEnum):
    INVALID_SALARY = "INVALID_SALARY"
    INVALID_EMAIL = "INVALID_EMAIL"
    INVALID_DATE = "INVALID_DATE"
    MISSING_REQUIRED_FIELD = "MISSING_REQUIRED_FIELD"
    DUPLICATE_EMPLOYEE_ID = "DUPLICATE_EMPLOYEE_ID"  # assigned at persistence time only
    BUSINESS_RULE_VIOLATION = "BUSINESS_RULE_VIOLATION"


class ValidationIssue(BaseModel):
    """A single failed check against one field of a row."""

    field: str
    message: str
    value: Any = None


class ValidationResult(BaseModel):
    """Outcome of validating one row (ephemeral, never persisted as-is).

    ``primary_reason`` is always set; it is only meaningful when ``is_valid``
    is false.
    """

    is_valid: bool
    errors: list[ValidationIssue] = Field(default_factory=list)
    primary_reason: FailureReason = FailureReason.BUSINESS_RULE_VIOLATION
