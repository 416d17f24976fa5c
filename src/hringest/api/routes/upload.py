"""CSV upload endpoint."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from starlette.concurrency import run_in_threadpool

from hringest.api.deps import get_ingest_service, get_settings
from hringest.api.upload_gate import read_csv_upload
from hringest.core.config import AppSettings
from hringest.core.exceptions import ApiError, UploadRejectedError
from hringest.pipeline.service import IngestService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["upload"])


@router.post("/upload")
async def upload_csv(
    request: Request,
    settings: AppSettings = Depends(get_settings),
    service: IngestService = Depends(get_ingest_service),
) -> dict[str, Any]:
    """Validate an uploaded employee CSV and store accepted and rejected rows.

    Body: multipart/form-data with the CSV in the ``file`` field.
    """
    async with request.form() as form:
        file_name, content = await read_csv_upload(form, settings.upload)

    try:
        summary = await run_in_threadpool(service.process_upload, content, file_name)
    except UploadRejectedError:
        raise
    except Exception as exc:
        logger.exception(f"Upload Error: {exc}")
        raise ApiError(500, "Failed to process CSV file", details=str(exc)) from exc

    if summary.rejected_by_validation > 0:
        validation_summary = (
            f"{summary.rejected_by_validation} records failed validation. "
            f"Use /api/stats?batchId={summary.batch_id} for details."
        )
    else:
        validation_summary = "All records passed validation"

    details: dict[str, Any] = {"validationSummary": validation_summary}
    if summary.duplicates:
        details["duplicatesSkipped"] = len(summary.duplicates)

    return {
        "success": True,
        "message": "CSV processed successfully",
        "batchId": summary.batch_id,
        "fileName": summary.file_name,
        "stats": {
            "totalRecords": summary.total_records,
            "validRecords": summary.valid_records,
            "invalidRecords": summary.invalid_records,
            "successRate": summary.success_rate,
        },
        "details": details,
    }
