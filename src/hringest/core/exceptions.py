"""HR ingest exception hierarchy."""

from __future__ import annotations

from typing import Any


class HRIngestError(Exception):
    """Base exception for all HR ingest errors."""


class UploadRejectedError(HRIngestError):
    """The upload was rejected before any record was processed."""

    status_code = 400

    def __init__(self, error: str, message: str | None = None, **extra: Any) -> None:
        self.error = error
        self.message = message
        self.extra = extra
        super().__init__(error if message is None else f"{error}: {message}")


class CSVParseError(HRIngestError):
    """The uploaded bytes could not be read as delimited text."""


class StoreError(HRIngestError):
    """A record or audit store operation failed for a reason other than a key conflict."""


class ApiError(HRIngestError):
    """Error rendered by the API layer as a JSON error envelope."""

    def __init__(self, status_code: int, error: str, details: str | None = None) -> None:
        self.status_code = status_code
        self.error = error
        self.details = details
        super().__init__(error if details is None else f"{error}: {details}")
