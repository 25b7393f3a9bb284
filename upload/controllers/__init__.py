"""
Controllers Package

High-level upload coordinators.
"""

from upload.controllers.upload_controller import UploadController

__all__ = [
    "UploadController",
]
