"""
HTTP Uploader Implementation

Concrete implementation of UploaderInterface for the EchoReads backend.
Sends each file as multipart/form-data with the destination folder as
a sibling field, and maps every failure into an UploadResult.
"""

import asyncio
import logging
import time
from typing import Any, Dict, Optional

import httpx

from upload.auth.token_manager import TokenManager
from upload.config import UploadConfig
from upload.constants import (
    GENERIC_UPLOAD_ERROR,
    TIMEOUT_ERROR,
    UploadOutcome,
)
from upload.interfaces.uploader_interface import UploaderInterface, UploadResult


def extract_message(body: Any) -> Optional[str]:
    """
    Best message from a backend envelope ("message", then "error").
    """
    if not isinstance(body, dict):
        return None
    for key in ("message", "error"):
        value = body.get(key)
        if isinstance(value, str) and value.strip():
            return value
    return None


class HttpUploader(UploaderInterface):
    """
    Uploader for the EchoReads backend upload endpoint.

    Features:
    - Bearer token authentication
    - Configurable multipart field names
    - Finite timeout per phase and for the whole request (timeouts are
      reported as network failures)
    - No automatic retry
    """

    def __init__(
        self,
        config: Optional[UploadConfig] = None,
        token_manager: Optional[TokenManager] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize HTTP uploader.

        Args:
            config: Upload configuration (None = defaults from settings)
            token_manager: Source of the bearer token (None = no auth header)
            transport: Custom httpx transport (tests pass httpx.MockTransport)

        Example:
            uploader = HttpUploader(config, TokenManager(token="..."))
            async with uploader:
                result = await uploader.upload_file(...)
        """
        self.logger = logging.getLogger(__name__)
        self.config = config or UploadConfig()
        self.token_manager = token_manager or TokenManager()
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

        self.logger.info(f"HTTP Uploader initialized ({self.config.upload_url})")

    def _get_client(self) -> httpx.AsyncClient:
        """Create the shared client on first use"""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.config.http_timeout),
                transport=self._transport,
            )
        return self._client

    def _auth_headers(self) -> Dict[str, str]:
        token = self.token_manager.get_token()
        if not token:
            return {}
        return {"Authorization": f"Bearer {token}"}

    async def upload_file(
        self,
        content: bytes,
        file_name: str,
        mime_type: str,
        folder: str,
    ) -> UploadResult:
        """
        POST one file to the upload endpoint.

        Never raises for request failures; see UploadOutcome for the
        codes reported in the result.
        """
        start_time = time.monotonic()
        file_size = len(content)

        self.logger.info(
            f"Starting upload: {file_name} ({file_size} bytes) -> folder {folder}",
        )

        try:
            # httpx.Timeout limits each phase; wait_for bounds the whole request
            response = await asyncio.wait_for(
                self._get_client().post(
                    self.config.upload_url,
                    files={self.config.file_field: (file_name, content, mime_type)},
                    data={self.config.folder_field: folder},
                    headers=self._auth_headers(),
                ),
                timeout=self.config.http_timeout,
            )
        except (httpx.TimeoutException, asyncio.TimeoutError) as e:
            self.logger.error(f"Upload timed out: {file_name}: {e!r}")
            return self._failure(
                UploadOutcome.TIMEOUT, TIMEOUT_ERROR, start_time, file_size,
            )
        except httpx.HTTPError as e:
            detail = str(e) or type(e).__name__
            self.logger.error(f"Network error uploading {file_name}: {detail}")
            return self._failure(
                UploadOutcome.NETWORK_ERROR,
                f"Network error: {detail}",
                start_time,
                file_size,
            )

        return self._parse_response(response, start_time, file_size)

    def _parse_response(
        self,
        response: httpx.Response,
        start_time: float,
        file_size: int,
    ) -> UploadResult:
        """Map an HTTP response to an UploadResult"""
        try:
            body = response.json()
        except ValueError:
            body = None

        if not response.is_success:
            message = extract_message(body) or f"Upload failed: {response.status_code}"
            self.logger.error(f"❌ Upload rejected by server: {message}")
            return self._failure(
                UploadOutcome.HTTP_ERROR,
                message,
                start_time,
                file_size,
                status_code=response.status_code,
            )

        if not isinstance(body, dict):
            return self._failure(
                UploadOutcome.INVALID_RESPONSE,
                "Upload failed: invalid JSON response",
                start_time,
                file_size,
                status_code=response.status_code,
            )

        if not body.get("success"):
            message = extract_message(body) or GENERIC_UPLOAD_ERROR
            self.logger.error(f"❌ Upload failed: {message}")
            return self._failure(
                UploadOutcome.REJECTED,
                message,
                start_time,
                file_size,
                status_code=response.status_code,
            )

        upload_duration = time.monotonic() - start_time
        self.logger.info(f"✅ Upload successful ({upload_duration:.1f}s)")

        return UploadResult(
            success=True,
            data=body.get("data"),
            status=UploadOutcome.SUCCESS,
            status_code=response.status_code,
            upload_duration=upload_duration,
            file_size=file_size,
        )

    def _failure(
        self,
        status: UploadOutcome,
        message: str,
        start_time: float,
        file_size: int,
        status_code: Optional[int] = None,
    ) -> UploadResult:
        return UploadResult(
            success=False,
            status=status,
            error_message=message,
            status_code=status_code,
            upload_duration=time.monotonic() - start_time,
            file_size=file_size,
        )

    def is_available(self) -> bool:
        """Available once a backend URL is configured"""
        return bool(self.config.api_base_url)

    async def test_connection(self) -> bool:
        """
        Check that the backend answers at all.

        Any response below 500 counts as reachable.
        """
        if not self.is_available():
            self.logger.warning("Backend URL not configured")
            return False

        try:
            response = await self._get_client().get(
                self.config.api_base_url,
                headers=self._auth_headers(),
            )
        except httpx.HTTPError as e:
            self.logger.warning(f"Connection test failed: {e!r}")
            return False

        return response.status_code < 500

    async def aclose(self) -> None:
        """Close the underlying HTTP client"""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "HttpUploader":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
