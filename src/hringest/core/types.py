"""Type aliases used across the HR ingest service."""

from __future__ import annotations

from typing import Any

JsonDict = dict[str, Any]
Row = dict[str, str]
BatchId = str
EmployeeId = str
RowNumber = int
