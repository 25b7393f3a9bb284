"""
Upload Item Models

Data classes representing queued files and their upload state.
"""

import mimetypes
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
from uuid import uuid4

from config.settings import PAGE_IMAGE_MIME_TYPES
from upload.constants import ALLOWED_TRANSITIONS, UploadItemStatus
from upload.interfaces.uploader_interface import EnqueueError, InvalidTransitionError

DEFAULT_MIME_TYPE = "application/octet-stream"


@dataclass(frozen=True)
class FileHandle:
    """
    A local file's bytes and metadata, as handed to the queue.
    """

    content: bytes
    file_name: str
    mime_type: str = DEFAULT_MIME_TYPE

    @property
    def size_bytes(self) -> int:
        return len(self.content)

    @classmethod
    def from_path(
        cls,
        path: Union[str, Path],
        mime_type: Optional[str] = None,
    ) -> "FileHandle":
        """
        Read a file from disk.

        MIME type is taken from the page extension table, then guessed
        from the host MIME database, unless given.

        Raises:
            EnqueueError: If the file cannot be read
        """
        path = Path(path)
        try:
            content = path.read_bytes()
        except OSError as e:
            raise EnqueueError(f"Cannot read file {path}: {e}") from e

        guessed = PAGE_IMAGE_MIME_TYPES.get(path.suffix.lower())
        if guessed is None:
            guessed, _ = mimetypes.guess_type(path.name)
        return cls(
            content=content,
            file_name=path.name,
            mime_type=mime_type or guessed or DEFAULT_MIME_TYPE,
        )


@dataclass(frozen=True)
class UploadItemView:
    """Read-only, point-in-time copy of an UploadItem"""

    id: str
    display_name: str
    file_name: str
    mime_type: str
    size_bytes: int
    status: UploadItemStatus
    progress_percent: int
    error_message: Optional[str] = None
    response_data: Any = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "display_name": self.display_name,
            "file_name": self.file_name,
            "mime_type": self.mime_type,
            "size_bytes": self.size_bytes,
            "status": self.status.value,
            "progress_percent": self.progress_percent,
            "error_message": self.error_message,
            "response_data": self.response_data,
        }


@dataclass
class UploadItem:
    """
    A single file tracked by the upload queue.

    Lifecycle: pending → uploading → completed/error.
    Status changes go through the mark_* methods, which reject
    transitions outside ALLOWED_TRANSITIONS.
    """

    file: FileHandle
    display_name: str = ""
    id: str = field(default_factory=lambda: uuid4().hex)

    status: UploadItemStatus = UploadItemStatus.PENDING
    progress_percent: int = 0
    error_message: Optional[str] = None
    response_data: Any = None

    def __post_init__(self):
        """Default display name to the file name"""
        if not self.display_name:
            self.display_name = self.file.file_name

    @property
    def size_bytes(self) -> int:
        return self.file.size_bytes

    @property
    def is_pending(self) -> bool:
        return self.status == UploadItemStatus.PENDING

    @property
    def is_uploading(self) -> bool:
        return self.status == UploadItemStatus.UPLOADING

    @property
    def is_finished(self) -> bool:
        """Completed or errored"""
        return self.status in (UploadItemStatus.COMPLETED, UploadItemStatus.ERROR)

    def _transition(self, new_status: UploadItemStatus) -> None:
        if new_status not in ALLOWED_TRANSITIONS[self.status]:
            raise InvalidTransitionError(
                f"Item {self.id}: illegal transition "
                f"{self.status.value} -> {new_status.value}",
            )
        self.status = new_status

    def mark_upload_started(self) -> None:
        """Mark item as uploading"""
        self._transition(UploadItemStatus.UPLOADING)
        self.progress_percent = 0

    def mark_upload_success(self, response_data: Any = None) -> None:
        """Mark item as completed and keep the backend payload"""
        self._transition(UploadItemStatus.COMPLETED)
        self.progress_percent = 100
        self.response_data = response_data
        self.error_message = None

    def mark_upload_failed(self, error: str) -> None:
        """Mark item as failed with a non-empty message"""
        self._transition(UploadItemStatus.ERROR)
        self.error_message = error

    def reset_to_pending(self) -> None:
        """
        Put an errored item back in line for the next run.

        This is the only way back to PENDING and is driven by the caller.
        """
        if self.status != UploadItemStatus.ERROR:
            raise InvalidTransitionError(
                f"Item {self.id}: only errored items can be reset "
                f"(status: {self.status.value})",
            )
        self.status = UploadItemStatus.PENDING
        self.progress_percent = 0
        self.error_message = None

    def to_view(self) -> UploadItemView:
        return UploadItemView(
            id=self.id,
            display_name=self.display_name,
            file_name=self.file.file_name,
            mime_type=self.file.mime_type,
            size_bytes=self.size_bytes,
            status=self.status,
            progress_percent=self.progress_percent,
            error_message=self.error_message,
            response_data=self.response_data,
        )


@dataclass(frozen=True)
class TransitionRecord:
    """One entry of the queue's status change log"""

    item_id: str
    from_status: UploadItemStatus
    to_status: UploadItemStatus


@dataclass
class BatchOutcome:
    """Summary of one start() run"""

    completed_count: int = 0
    error_count: int = 0
    items: List[UploadItemView] = field(default_factory=list)
    cancelled: bool = False
    duration_seconds: float = 0.0

    @property
    def all_succeeded(self) -> bool:
        return self.error_count == 0 and not self.cancelled

    def to_dict(self) -> Dict[str, Any]:
        return {
            "completed_count": self.completed_count,
            "error_count": self.error_count,
            "cancelled": self.cancelled,
            "duration_seconds": self.duration_seconds,
            "items": [item.to_dict() for item in self.items],
        }
