"""
Models Package

Data classes for queued uploads and batch results.
"""

from upload.models.upload_item import (
    BatchOutcome,
    FileHandle,
    TransitionRecord,
    UploadItem,
    UploadItemView,
)

__all__ = [
    "BatchOutcome",
    "FileHandle",
    "TransitionRecord",
    "UploadItem",
    "UploadItemView",
]
