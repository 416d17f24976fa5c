"""Multipart upload gating: exactly one CSV file, under the size cap, in the expected field."""

from __future__ import annotations

from starlette.datastructures import FormData, UploadFile

from hringest.core.config import UploadConfig
from hringest.core.exceptions import UploadRejectedError


def is_csv(upload: UploadFile, config: UploadConfig) -> bool:
    """Accept on declared MIME type or on a ``.csv`` extension."""
    if upload.content_type in config.allowed_mime_types:
        return True
    return (upload.filename or "").lower().endswith(".csv")


async def read_csv_upload(form: FormData, config: UploadConfig) -> tuple[str, bytes]:
    """Return ``(file_name, content)`` of the single uploaded CSV.

    Raises:
        UploadRejectedError: No file, a file under another field name, more
            than one file, a non-CSV file, or a file over ``max_file_size``.
    """
    uploads = [(key, value) for key, value in form.multi_items() if isinstance(value, UploadFile)]

    if not uploads:
        raise UploadRejectedError("No file uploaded. Please upload a CSV file.")

    if any(key != config.field_name for key, _ in uploads):
        raise UploadRejectedError(
            "Unexpected field",
            f'File must be uploaded with field name "{config.field_name}"',
        )

    if len(uploads) > 1:
        raise UploadRejectedError("Too many files", "Only one file can be uploaded at a time")

    _, upload = uploads[0]
    if not is_csv(upload, config):
        raise UploadRejectedError("Invalid file type. Only CSV files are allowed.")

    content = await upload.read(config.max_file_size + 1)
    if len(content) > config.max_file_size:
        raise UploadRejectedError("File too large", f"Maximum file size is {config.max_file_size} bytes")

    return upload.filename or "", content
