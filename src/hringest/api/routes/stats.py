"""Statistics and audit-log endpoints."""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from hringest.api.deps import get_stats_service
from hringest.core.exceptions import ApiError
from hringest.pipeline.stats import StatsService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["stats"])


@router.get("/stats")
def get_stats(
    batch_id: Optional[str] = Query(None, alias="batchId"),
    service: StatsService = Depends(get_stats_service),
) -> dict[str, Any]:
    """Overall counts, or success/failure metrics for one batch when ``batchId`` is given."""
    try:
        if not batch_id:
            overall = service.global_stats()
            return {
                "success": True,
                "message": "Overall statistics",
                "stats": overall.model_dump(by_alias=True),
            }

        batch = service.batch_stats(batch_id).model_dump(by_alias=True, mode="json")
    except Exception as exc:
        logger.exception(f"Stats Error: {exc}")
        raise ApiError(500, "Failed to retrieve statistics", details=str(exc)) from exc

    return {
        "success": True,
        "batchId": batch_id,
        "stats": {
            "totalRecords": batch["totalRecords"],
            "successCount": batch["successCount"],
            "failureCount": batch["failureCount"],
            "successRate": batch["successRate"],
        },
        "failureBreakdown": batch["failureBreakdown"],
        "failedRecords": batch["failedRecords"],
    }


@router.get("/audit/{batch_id}", response_model=None)
def get_audit_log(
    batch_id: str,
    service: StatsService = Depends(get_stats_service),
) -> dict[str, Any] | JSONResponse:
    """All audit records of a batch, sorted by row number."""
    try:
        records = service.audit_log(batch_id)
    except Exception as exc:
        logger.exception(f"Audit Log Error: {exc}")
        raise ApiError(500, "Failed to retrieve audit log", details=str(exc)) from exc

    if not records:
        return JSONResponse(
            status_code=404,
            content={"success": False, "message": "No audit records found for this batch"},
        )

    return {
        "success": True,
        "batchId": batch_id,
        "totalFailures": len(records),
        "records": [r.model_dump(by_alias=True, mode="json") for r in records],
    }
