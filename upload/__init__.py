"""
Upload Module

Sequential page upload system for the EchoReads backend.

Public API:
    - UploadQueueManager: Ordered, sequential upload queue
    - UploadController: High-level upload coordinator
    - FileHandle / UploadItemView / BatchOutcome: Data types
    - UploadItemStatus: Item lifecycle states
    - UploadConfig: Explicit configuration object
    - create_uploader: Factory function

Usage:
    from upload import UploadController

    controller = UploadController()
    outcome = await controller.upload_directory(
        folder="magazine-42",
        directory="/scans/magazine-42",
    )
"""

from upload.config import UploadConfig
from upload.constants import UploadItemStatus, UploadOutcome
from upload.controllers.upload_controller import UploadController
from upload.factory import create_uploader
from upload.interfaces.uploader_interface import (
    EmptyQueueError,
    EnqueueError,
    ItemNotFoundError,
    NotRemovableError,
    QueueBusyError,
    UploaderError,
    UploadResult,
)
from upload.models.upload_item import BatchOutcome, FileHandle, UploadItemView
from upload.upload_manager import UploadQueueManager

# Public API
__all__ = [
    "BatchOutcome",
    "EmptyQueueError",
    "EnqueueError",
    "FileHandle",
    "ItemNotFoundError",
    "NotRemovableError",
    "QueueBusyError",
    "UploadConfig",
    "UploadController",
    "UploadItemStatus",
    "UploadItemView",
    "UploadOutcome",
    "UploadQueueManager",
    "UploadResult",
    "UploaderError",
    "create_uploader",
]
