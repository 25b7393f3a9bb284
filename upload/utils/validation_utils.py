"""
Validation Utilities

Checks applied to files before they enter the upload queue, so bad
input is reported at enqueue() time instead of during the batch.
"""

import logging
from typing import Optional, Sequence

from config.settings import ALLOWED_UPLOAD_TYPES, MAX_UPLOAD_FILE_SIZE
from upload.interfaces.uploader_interface import EnqueueError
from upload.models.upload_item import FileHandle

logger = logging.getLogger(__name__)


def validate_file_handle(
    handle: FileHandle,
    allowed_types: Sequence[str] = ALLOWED_UPLOAD_TYPES,
    max_size: int = MAX_UPLOAD_FILE_SIZE,
) -> None:
    """
    Validate a file handle before queueing.

    Performs these checks:
    1. Content is bytes and not empty
    2. File name is set
    3. MIME type is accepted by the backend
    4. Size does not exceed the maximum

    Args:
        handle: File to check
        allowed_types: Accepted MIME types
        max_size: Maximum size in bytes

    Raises:
        EnqueueError: On the first failed check

    Example:
        validate_file_handle(FileHandle(b"...", "page_1.png", "image/png"))
    """
    if not isinstance(handle, FileHandle):
        raise EnqueueError(f"Not a file handle: {handle!r}")

    if not isinstance(handle.content, (bytes, bytearray)):
        raise EnqueueError(
            f"Unreadable file content for {handle.file_name!r}: "
            f"expected bytes, got {type(handle.content).__name__}",
        )

    if not handle.file_name or not handle.file_name.strip():
        raise EnqueueError("File name is empty")

    if handle.size_bytes == 0:
        raise EnqueueError(f"File is empty: {handle.file_name}")

    if handle.mime_type not in allowed_types:
        raise EnqueueError(
            f"File type {handle.mime_type} is not allowed. "
            f"Allowed types: {', '.join(allowed_types)}",
        )

    if handle.size_bytes > max_size:
        size_mb = handle.size_bytes / (1024 ** 2)
        max_mb = max_size / (1024 ** 2)
        raise EnqueueError(
            f"File size {size_mb:.2f}MB exceeds maximum size of {max_mb:.2f}MB",
        )

    logger.debug(
        f"File validated: {handle.file_name} ({handle.size_bytes} bytes)",
    )


def is_valid_file(
    handle: FileHandle,
    allowed_types: Sequence[str] = ALLOWED_UPLOAD_TYPES,
    max_size: int = MAX_UPLOAD_FILE_SIZE,
) -> bool:
    """Boolean form of validate_file_handle()"""
    return get_validation_error(handle, allowed_types, max_size) is None


def get_validation_error(
    handle: FileHandle,
    allowed_types: Sequence[str] = ALLOWED_UPLOAD_TYPES,
    max_size: int = MAX_UPLOAD_FILE_SIZE,
) -> Optional[str]:
    """
    Return the validation error message, or None if the file is valid.
    """
    try:
        validate_file_handle(handle, allowed_types, max_size)
    except EnqueueError as e:
        return str(e)
    return None
