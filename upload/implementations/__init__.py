"""
Implementations Package

Concrete uploader implementations.
"""

from upload.implementations.http_uploader import HttpUploader
from upload.implementations.mock_uploader import MockUploader

__all__ = [
    "HttpUploader",
    "MockUploader",
]
