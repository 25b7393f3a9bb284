"""
Upload Controller

High-level coordinator for magazine page uploads.
Simplifies upload operations for scripts and host applications:
- Reads files from disk
- Queues them in page order
- Runs the batch and reports the outcome
"""

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Union

from upload.config import UploadConfig
from upload.factory import create_uploader
from upload.interfaces.uploader_interface import UploaderInterface
from upload.models.upload_item import BatchOutcome, FileHandle
from upload.upload_manager import ItemCallback, UploadQueueManager
from upload.utils.ordering import list_page_files

PathLike = Union[str, Path]


class UploadController:
    """
    High-level page upload controller.

    Usage:
        controller = UploadController()

        outcome = await controller.upload_directory(
            folder="magazine-42",
            directory="/scans/magazine-42",
        )

        if outcome.error_count:
            print("Some pages failed")
    """

    def __init__(
        self,
        uploader: Optional[UploaderInterface] = None,
        config: Optional[UploadConfig] = None,
        on_item_update: Optional[ItemCallback] = None,
    ):
        """
        Initialize upload controller.

        Args:
            uploader: UploaderInterface implementation, or None to auto-create
            config: Upload configuration (None = defaults from settings)
            on_item_update: Forwarded to the queue

        Example:
            # Custom uploader (testing)
            controller = UploadController(uploader=MockUploader())
        """
        self.logger = logging.getLogger(__name__)

        self.config = config or UploadConfig()
        self.uploader = uploader or create_uploader(config=self.config)
        self.queue = UploadQueueManager(
            self.uploader,
            config=self.config,
            on_item_update=on_item_update,
        )

        if not self.uploader.is_available():
            self.logger.warning(
                "Uploader initialized but not available. "
                "Check ECHOREADS_API_BASE_URL.",
            )

        self.logger.info("Upload Controller initialized")

    async def upload_pages(
        self,
        folder: str,
        paths: Iterable[PathLike],
        order_by_page: bool = True,
    ) -> BatchOutcome:
        """
        Read, queue and upload files into one folder.

        Args:
            folder: Destination folder (magazine ID)
            paths: Files to upload
            order_by_page: Sort by page number before queueing

        Returns:
            BatchOutcome of the run

        Raises:
            EnqueueError: If a file is unreadable or invalid
            EmptyQueueError: If paths is empty
        """
        handles = [FileHandle.from_path(path) for path in paths]
        self.queue.enqueue(handles, order_by_page=order_by_page)

        self.logger.info(f"Uploading {len(handles)} file(s) to folder {folder}")
        return await self.queue.start(folder)

    async def upload_directory(self, folder: str, directory: PathLike) -> BatchOutcome:
        """
        Upload every page image of a directory, in page order.

        Raises:
            NotADirectoryError: If directory does not exist
            EmptyQueueError: If no page images were found
        """
        paths = list_page_files(Path(directory), self.config.page_extensions)
        self.logger.info(f"Found {len(paths)} page image(s) in {directory}")
        return await self.upload_pages(folder, paths, order_by_page=True)

    async def test_connection(self) -> bool:
        """
        Test connection to the backend.

        Returns:
            True if connection successful
        """
        self.logger.info("Testing backend connection...")

        result = await self.uploader.test_connection()
        if result:
            self.logger.info("✅ Connection test passed")
        else:
            self.logger.warning("❌ Connection test failed")
        return result

    def is_ready(self) -> bool:
        """Check if uploader is ready to upload"""
        return self.uploader.is_available()

    def get_status(self) -> Dict[str, Any]:
        """
        Get current controller status.

        Example:
            status = controller.get_status()
            print(f"Ready: {status['ready']}")
        """
        return {
            "ready": self.is_ready(),
            "uploader_type": type(self.uploader).__name__,
            "queue": self.queue.get_status(),
        }

    async def cleanup(self) -> None:
        """Release uploader resources"""
        await self.uploader.aclose()
        self.logger.info("Upload Controller cleanup")
