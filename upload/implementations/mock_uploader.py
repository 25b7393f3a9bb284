"""
Mock Uploader Implementation

Simulated uploader for testing without the EchoReads backend.
"""

import asyncio
import logging
import random
import time
from typing import Any, Callable, Iterable, Optional, Union
from uuid import uuid4

from upload.constants import UploadOutcome
from upload.interfaces.uploader_interface import UploaderInterface, UploadResult

ResponseFactory = Callable[[str, str], Any]


class MockUploader(UploaderInterface):
    """
    Mock uploader for testing.

    Useful for:
    - Unit tests
    - Development without backend credentials
    - Dry runs of the upload script
    """

    def __init__(
        self,
        delay: float = 0.0,
        fail_names: Iterable[str] = (),
        fail_rate: float = 0.0,
        response_data: Union[None, dict, ResponseFactory] = None,
        error_message: str = "Simulated upload failure",
        raise_names: Iterable[str] = (),
        release_event: Optional[asyncio.Event] = None,
    ):
        """
        Initialize mock uploader.

        Args:
            delay: Simulated duration of each upload (seconds)
            fail_names: File names whose upload fails with error_message
            fail_rate: Probability of a random failure (0.0 to 1.0)
            response_data: Payload returned on success, or a function
                (file_name, folder) -> payload. Default: fake key/url
            error_message: Message reported for simulated failures
            raise_names: File names whose upload raises RuntimeError
            release_event: If set, every upload waits for this event

        Example:
            # Fast mock for unit tests
            uploader = MockUploader()

            # Second file fails
            uploader = MockUploader(fail_names={"page_2.png"})
        """
        self.logger = logging.getLogger(__name__)
        self.delay = delay
        self.fail_names = set(fail_names)
        self.fail_rate = fail_rate
        self.response_data = response_data
        self.error_message = error_message
        self.raise_names = set(raise_names)
        self.release_event = release_event

        # Track upload history for testing
        self.upload_history: list[dict] = []
        self.in_flight = 0
        self.max_concurrent = 0

        self.logger.info(
            f"Mock Uploader initialized (delay: {delay}, fail_rate: {fail_rate})",
        )

    async def upload_file(
        self,
        content: bytes,
        file_name: str,
        mime_type: str,
        folder: str,
    ) -> UploadResult:
        """Simulate an upload"""
        start_time = time.monotonic()
        self.in_flight += 1
        self.max_concurrent = max(self.max_concurrent, self.in_flight)

        try:
            self.logger.info(
                f"[MOCK] Starting upload: {file_name} ({len(content)} bytes)",
            )

            if self.release_event is not None:
                await self.release_event.wait()
            if self.delay:
                await asyncio.sleep(self.delay)

            record = {
                "file_name": file_name,
                "mime_type": mime_type,
                "folder": folder,
                "file_size": len(content),
                "timestamp": time.time(),
            }
            self.upload_history.append(record)

            if file_name in self.raise_names:
                raise RuntimeError(f"Simulated crash uploading {file_name}")

            if file_name in self.fail_names or random.random() < self.fail_rate:
                self.logger.error(f"[MOCK] Upload failed: {file_name}")
                return UploadResult(
                    success=False,
                    status=UploadOutcome.REJECTED,
                    error_message=self.error_message,
                    upload_duration=time.monotonic() - start_time,
                    file_size=len(content),
                )

            data = self._build_response(file_name, folder)
            record["data"] = data

            self.logger.info(f"[MOCK] ✅ Upload successful: {file_name}")
            return UploadResult(
                success=True,
                data=data,
                status=UploadOutcome.SUCCESS,
                status_code=200,
                upload_duration=time.monotonic() - start_time,
                file_size=len(content),
            )
        finally:
            self.in_flight -= 1

    def _build_response(self, file_name: str, folder: str) -> Any:
        if callable(self.response_data):
            return self.response_data(file_name, folder)
        if self.response_data is not None:
            return self.response_data
        key = f"{folder}/{file_name}"
        return {
            "key": key,
            "fileName": file_name,
            "url": f"https://mock.storage/{key}?v={uuid4().hex[:8]}",
        }

    def is_available(self) -> bool:
        """Mock uploader is always available"""
        return True

    async def test_connection(self) -> bool:
        """Simulated connection test (always succeeds)"""
        self.logger.info("[MOCK] ✅ Connection test successful")
        return True

    # =========================================================================
    # TESTING HELPER METHODS
    # =========================================================================

    def get_upload_history(self) -> list[dict]:
        """List of all upload attempts, in call order"""
        return self.upload_history.copy()

    def clear_history(self) -> None:
        self.upload_history.clear()
        self.logger.debug("[MOCK] Upload history cleared")

    def get_last_upload(self) -> Optional[dict]:
        """Most recent upload attempt, or None"""
        return self.upload_history[-1] if self.upload_history else None

    def was_uploaded(self, file_name: str) -> bool:
        return any(record["file_name"] == file_name for record in self.upload_history)
