"""
Uploader Interface

Abstract interface for remote upload implementations.
The queue manager depends on this abstraction, not on the concrete
HTTP client talking to the EchoReads backend.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional

from upload.constants import UploadOutcome


@dataclass
class UploadResult:
    """
    Result of a single remote upload call.

    Attributes:
        success: True if the backend accepted the file
        data: Backend "data" payload (stored verbatim on the item)
        status: Upload outcome code
        error_message: Error description (if failed)
        status_code: HTTP status code, when a response was received
        upload_duration: Time taken by the call in seconds
        file_size: Size of the uploaded content in bytes
    """

    success: bool
    data: Any = None
    status: UploadOutcome = UploadOutcome.SUCCESS
    error_message: Optional[str] = None
    status_code: Optional[int] = None
    upload_duration: float = 0.0
    file_size: int = 0


class UploaderInterface(ABC):
    """
    Abstract base class for uploaders.

    Any uploader implementation (EchoReads HTTP backend, mock, ...)
    must implement these methods.
    """

    @abstractmethod
    async def upload_file(
        self,
        content: bytes,
        file_name: str,
        mime_type: str,
        folder: str,
    ) -> UploadResult:
        """
        Upload one file into a destination folder.

        Implementations must not raise for per-request failures
        (network error, timeout, HTTP error, success: false). They
        report them through the returned UploadResult instead.

        Args:
            content: Raw file bytes
            file_name: Original file name
            mime_type: MIME type of the content
            folder: Destination folder identifier (e.g. magazine ID)

        Returns:
            UploadResult with success status and backend payload

        Example:
            result = await uploader.upload_file(
                content=b"...",
                file_name="page_1.png",
                mime_type="image/png",
                folder="mag-42",
            )
        """

    @abstractmethod
    def is_available(self) -> bool:
        """
        Check if uploader is ready to upload.

        Returns:
            True if the uploader is configured and usable
        """

    @abstractmethod
    async def test_connection(self) -> bool:
        """
        Test connection to the upload service without uploading.

        Returns:
            True if the service answered
        """

    async def aclose(self) -> None:
        """Release network resources. Default: nothing to release."""


class UploaderError(Exception):
    """
    Base exception for upload-related errors.

    Carries an UploadOutcome so callers can tell failure kinds apart.
    """

    def __init__(self, message: str, status: UploadOutcome = UploadOutcome.FAILED):
        super().__init__(message)
        self.status = status


class EnqueueError(UploaderError):
    """Invalid file input, raised at enqueue() time"""

    def __init__(self, message: str):
        super().__init__(message, status=UploadOutcome.INVALID_FILE)


class QueueError(UploaderError):
    """Base class for queue operation errors"""


class NotRemovableError(QueueError):
    """Item cannot be removed while it is uploading"""


class ItemNotFoundError(QueueError):
    """No item with the given ID in the queue"""


class QueueBusyError(QueueError):
    """Operation rejected because a batch run is active"""


class EmptyQueueError(QueueError):
    """start() called on an empty queue"""


class InvalidTransitionError(QueueError):
    """Item status change outside the legal state machine"""
