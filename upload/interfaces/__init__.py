"""
Interfaces Package

Abstract interfaces and error types for upload implementations.
"""

from upload.interfaces.uploader_interface import (
    EmptyQueueError,
    EnqueueError,
    InvalidTransitionError,
    ItemNotFoundError,
    NotRemovableError,
    QueueBusyError,
    QueueError,
    UploaderError,
    UploaderInterface,
    UploadResult,
)

__all__ = [
    "UploaderInterface",
    "UploadResult",
    "UploaderError",
    "EnqueueError",
    "QueueError",
    "NotRemovableError",
    "ItemNotFoundError",
    "QueueBusyError",
    "EmptyQueueError",
    "InvalidTransitionError",
]
