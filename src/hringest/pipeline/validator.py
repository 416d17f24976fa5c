"""Employee business rules engine.

``validate_employee_data`` classifies one row; it is pure and keeps no state
between calls. Checks run in a fixed order and every failing check adds an
error, but only the first failure sets the primary reason:

    1. required fields (only the first missing one is reported)
    2. email format
    3. salary is a positive number
    4. joining date parses and is not in the future

A result always carries a reason. ``BUSINESS_RULE_VIOLATION`` stands in when
no check claimed one, valid rows included.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from decimal import (
    Clamped,
    Context,
    Decimal,
    DecimalException,
    Inexact,
    InvalidOperation,
    Overflow,
    Rounded,
    Underflow,
)
from typing import Any, Mapping, Optional

from hringest.models.employee import EmployeeRecord, EmployeeStatus
from hringest.models.validation import FailureReason, ValidationIssue, ValidationResult

REQUIRED_FIELDS = ["employeeId", "name", "email", "department", "salary", "joiningDate"]

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

_DATE_FORMATS = (
    "%m/%d/%Y",
    "%Y/%m/%d",
    "%m-%d-%Y",
    "%b %d %Y",
    "%b %d, %Y",
    "%B %d %Y",
    "%B %d, %Y",
    "%d %b %Y",
    "%d %B %Y",
)

# Same limits and traps as boto3.dynamodb.types.DYNAMODB_CONTEXT.
_SALARY_CONTEXT = Context(
    prec=38,
    Emin=-128,
    Emax=126,
    traps=[Clamped, Overflow, Inexact, Rounded, Underflow, InvalidOperation],
)


def _get(row: Mapping[str, Any], field: str) -> Any:
    """Look up a canonical field name against normalized (lowercase) headers."""
    if field in row:
        return row[field]
    return row.get(field.lower())


def _text(value: Any) -> str:
    return "" if value is None else str(value).strip()


# ---------------------------------------------------------------------------
# Parse-or-fail helpers
# ---------------------------------------------------------------------------

def parse_salary(value: Any) -> Optional[Decimal]:
    """Parse a salary cell as a finite Decimal; ``None`` if it is not numeric.

    Values that cannot be stored exactly as a DynamoDB number (more than 38
    significant digits, or an exponent out of range) are not numeric here.
    """
    text = _text(value)
    if not text or "_" in text:
        return None
    try:
        amount = _SALARY_CONTEXT.create_decimal(text)
    except DecimalException:
        return None
    return amount if amount.is_finite() else None


def parse_joining_date(value: Any) -> Optional[date]:
    """Parse a date cell (ISO date/datetime or common US forms); ``None`` on failure."""
    text = _text(value)
    if not text:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        pass
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------

def is_valid_email(email: Any) -> bool:
    if not isinstance(email, str):
        return False
    return EMAIL_PATTERN.fullmatch(email.strip()) is not None


def is_valid_salary(salary: Any) -> bool:
    amount = parse_salary(salary)
    return amount is not None and amount > 0


def is_valid_date(value: Any, today: date | None = None) -> bool:
    """True if ``value`` is a calendar date on or before ``today``."""
    parsed = parse_joining_date(value)
    if parsed is None:
        return False
    return parsed <= (today or date.today())


def parse_status(value: Any) -> EmployeeStatus:
    """Map a status cell onto EmployeeStatus; blank or unknown values become ``active``."""
    text = _text(value).lower()
    if text in {s.value for s in EmployeeStatus}:
        return EmployeeStatus(text)
    return EmployeeStatus.ACTIVE


def find_missing_field(row: Mapping[str, Any]) -> Optional[str]:
    """Return the first required field that is absent or blank, if any."""
    for field in REQUIRED_FIELDS:
        if not _text(_get(row, field)):
            return field
    return None


# ---------------------------------------------------------------------------
# Rule engine
# ---------------------------------------------------------------------------

def validate_employee_data(row: Mapping[str, Any], today: date | None = None) -> ValidationResult:
    """Classify one row as valid or invalid with an ordered error list."""
    errors: list[ValidationIssue] = []
    primary_reason: Optional[FailureReason] = None

    def fail(field: str, message: str, reason: FailureReason) -> None:
        nonlocal primary_reason
        errors.append(ValidationIssue(field=field, message=message, value=_get(row, field)))
        if primary_reason is None:
            primary_reason = reason

    missing = find_missing_field(row)
    if missing is not None:
        fail(missing, f"Required field '{missing}' is missing or empty", FailureReason.MISSING_REQUIRED_FIELD)

    email = _get(row, "email")
    if _text(email) and not is_valid_email(_text(email)):
        fail("email", "Invalid email format", FailureReason.INVALID_EMAIL)

    salary = _get(row, "salary")
    if _text(salary) and not is_valid_salary(salary):
        fail("salary", "Salary must be a positive number", FailureReason.INVALID_SALARY)

    joining_date = _get(row, "joiningDate")
    if _text(joining_date) and not is_valid_date(joining_date, today):
        fail("joiningDate", "Invalid date or future date not allowed", FailureReason.INVALID_DATE)

    return ValidationResult(
        is_valid=not errors,
        errors=errors,
        primary_reason=primary_reason or FailureReason.BUSINESS_RULE_VIOLATION,
    )


def sanitize_employee_data(row: Mapping[str, Any], upload_batch: str) -> EmployeeRecord:
    """Coerce a validated row into an EmployeeRecord ready for the record store.

    Raises:
        ValueError: If salary or joining date do not parse (the row was not validated).
    """
    salary = parse_salary(_get(row, "salary"))
    joining_date = parse_joining_date(_get(row, "joiningDate"))
    if salary is None or joining_date is None:
        raise ValueError("sanitize_employee_data requires a row that passed validation")

    return EmployeeRecord(
        employee_id=_text(_get(row, "employeeId")),
        name=_text(_get(row, "name")),
        email=_text(_get(row, "email")).lower(),
        department=_text(_get(row, "department")),
        salary=salary,
        joining_date=joining_date,
        status=parse_status(_get(row, "status")),
        upload_batch=upload_batch,
    )
