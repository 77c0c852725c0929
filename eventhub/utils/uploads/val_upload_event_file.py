import logging
import uuid
from pathlib import Path
from typing import Optional

from fastapi import UploadFile
from slugify import slugify
from starlette.concurrency import run_in_threadpool

from eventhub.constants.constants import EVENT_FILE_TYPES
from eventhub.core.exceptions import ValidationFailedError

logger = logging.getLogger(__name__)

# Public URL prefix under which EVENT_UPLOAD_DIR is served
EVENT_FILES_URL = "/uploads/events"


def _write_file(path: Path, content: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)


async def validate_and_store_event_file(
    file: UploadFile,
    upload_dir: str,
    max_size: int,
    prefix: Optional[str] = None,
) -> str:
    """
    Validate an event attachment and write it to the event upload directory
    Returns the public URL path of the stored file
    """
    file_ext = EVENT_FILE_TYPES.get(file.content_type or "")
    if not file_ext:
        raise ValidationFailedError(
            "Invalid file type. Only images, videos, and PDF files are allowed."
        )

    # size is known up front for multipart uploads
    if file.size is not None and file.size > max_size:
        raise ValidationFailedError(f"File too large. Maximum size: {max_size // (1024 * 1024)}MB")

    content = await file.read()
    if not content:
        raise ValidationFailedError("Empty file received")
    if len(content) > max_size:
        raise ValidationFailedError(f"File too large. Maximum size: {max_size // (1024 * 1024)}MB")

    base_name = Path(file.filename or "").stem
    safe_name = slugify(prefix or base_name) or "event"
    unique_filename = f"{safe_name}-{uuid.uuid4().hex}.{file_ext}"

    await run_in_threadpool(_write_file, Path(upload_dir) / unique_filename, content)
    logger.info(f"Stored event file {unique_filename} ({len(content)} bytes)")

    return f"{EVENT_FILES_URL}/{unique_filename}"


def _unlink_file(path: Path) -> bool:
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    return True


async def remove_event_file(file_url: Optional[str], upload_dir: str) -> bool:
    """
    Delete a file previously stored by validate_and_store_event_file
    URLs outside EVENT_FILES_URL are left alone
    """
    if not file_url or not file_url.startswith(f"{EVENT_FILES_URL}/"):
        return False

    filename = Path(file_url).name
    removed = await run_in_threadpool(_unlink_file, Path(upload_dir) / filename)
    if removed:
        logger.info(f"Removed event file {filename}")
    return removed
