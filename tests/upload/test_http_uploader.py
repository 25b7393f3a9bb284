"""
HTTP Uploader Tests

Tests for the backend upload call showing:
- Multipart request shape and bearer token
- Mapping of every failure kind into an UploadResult
- Connection test

Requests are served by httpx.MockTransport; nothing leaves the process.

To run these tests:
    pytest tests/upload/test_http_uploader.py -v
"""

import asyncio

import httpx
import pytest

from upload.auth.token_manager import TokenManager
from upload.config import UploadConfig
from upload.constants import TIMEOUT_ERROR, UploadOutcome
from upload.implementations.http_uploader import HttpUploader, extract_message

BASE_URL = "https://api.echoreads.test"


@pytest.fixture
def http_config(tmp_path):
    return UploadConfig(
        config_path=tmp_path / "missing.yaml",
        overrides={"api_base_url": BASE_URL, "http_timeout": 5},
    )


def make_uploader(config, handler, token="secret-token"):
    return HttpUploader(
        config=config,
        token_manager=TokenManager(token=token),
        transport=httpx.MockTransport(handler),
    )


async def upload_page(uploader):
    return await uploader.upload_file(
        content=b"\x89PNG-bytes",
        file_name="page_1.png",
        mime_type="image/png",
        folder="mag-42",
    )


# =============================================================================
# REQUEST TESTS
# =============================================================================


@pytest.mark.unit
@pytest.mark.asyncio
async def test_request_is_multipart_with_bearer_token(http_config):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["url"] = str(request.url)
        seen["auth"] = request.headers.get("Authorization")
        seen["content_type"] = request.headers.get("Content-Type")
        seen["body"] = request.read()
        return httpx.Response(200, json={"success": True, "data": {"key": "mag-42/page_1.png"}})

    async with make_uploader(http_config, handler) as uploader:
        result = await upload_page(uploader)

    assert result.success is True
    assert result.data == {"key": "mag-42/page_1.png"}
    assert seen["method"] == "POST"
    assert seen["url"] == f"{BASE_URL}/api/upload"
    assert seen["auth"] == "Bearer secret-token"
    assert seen["content_type"].startswith("multipart/form-data")
    assert b'name="image"; filename="page_1.png"' in seen["body"]
    assert b'name="folderName"' in seen["body"]
    assert b"mag-42" in seen["body"]
    assert b"\x89PNG-bytes" in seen["body"]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_field_names_are_configurable(tmp_path):
    config = UploadConfig(
        config_path=tmp_path / "missing.yaml",
        overrides={"api_base_url": BASE_URL, "file_field": "file", "folder_field": "folder"},
    )
    bodies = []

    def handler(request):
        bodies.append(request.read())
        return httpx.Response(200, json={"success": True})

    async with make_uploader(config, handler) as uploader:
        await upload_page(uploader)

    assert b'name="file"; filename="page_1.png"' in bodies[0]
    assert b'name="folder"' in bodies[0]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_no_auth_header_without_token(http_config):
    headers = []

    def handler(request):
        headers.append(request.headers.get("Authorization"))
        return httpx.Response(200, json={"success": True})

    async with make_uploader(http_config, handler, token=None) as uploader:
        await upload_page(uploader)

    assert headers == [None]


# =============================================================================
# FAILURE MAPPING TESTS
# =============================================================================


@pytest.mark.unit
@pytest.mark.asyncio
async def test_success_false_uses_server_message(http_config):
    def handler(request):
        return httpx.Response(200, json={"success": False, "message": "Folder is locked"})

    async with make_uploader(http_config, handler) as uploader:
        result = await upload_page(uploader)

    assert result.success is False
    assert result.status == UploadOutcome.REJECTED
    assert result.error_message == "Folder is locked"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_success_false_without_message(http_config):
    def handler(request):
        return httpx.Response(200, json={"success": False})

    async with make_uploader(http_config, handler) as uploader:
        result = await upload_page(uploader)

    assert result.error_message == "Upload failed"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_http_error_prefers_body_error(http_config):
    def handler(request):
        return httpx.Response(400, json={"success": False, "error": "File type text/plain is not allowed"})

    async with make_uploader(http_config, handler) as uploader:
        result = await upload_page(uploader)

    assert result.status == UploadOutcome.HTTP_ERROR
    assert result.status_code == 400
    assert result.error_message == "File type text/plain is not allowed"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_http_error_without_json(http_config):
    def handler(request):
        return httpx.Response(502, text="Bad Gateway")

    async with make_uploader(http_config, handler) as uploader:
        result = await upload_page(uploader)

    assert result.status == UploadOutcome.HTTP_ERROR
    assert result.error_message == "Upload failed: 502"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_invalid_json_on_success_status(http_config):
    def handler(request):
        return httpx.Response(200, text="<html>ok</html>")

    async with make_uploader(http_config, handler) as uploader:
        result = await upload_page(uploader)

    assert result.success is False
    assert result.status == UploadOutcome.INVALID_RESPONSE


@pytest.mark.unit
@pytest.mark.asyncio
async def test_timeout_is_network_failure(http_config):
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    async with make_uploader(http_config, handler) as uploader:
        result = await upload_page(uploader)

    assert result.success is False
    assert result.status == UploadOutcome.TIMEOUT
    assert result.error_message == TIMEOUT_ERROR


@pytest.mark.unit
@pytest.mark.asyncio
async def test_slow_request_is_bounded_by_total_timeout(tmp_path):
    config = UploadConfig(
        config_path=tmp_path / "missing.yaml",
        overrides={"api_base_url": BASE_URL, "http_timeout": 0.05},
    )

    async def handler(request):
        await asyncio.sleep(5)
        return httpx.Response(200, json={"success": True})

    async with make_uploader(config, handler) as uploader:
        result = await upload_page(uploader)

    assert result.success is False
    assert result.status == UploadOutcome.TIMEOUT
    assert result.error_message == TIMEOUT_ERROR
    assert result.upload_duration < 5


@pytest.mark.unit
@pytest.mark.asyncio
async def test_connection_error_is_network_failure(http_config):
    def handler(request):
        raise httpx.ConnectError("Name or service not known", request=request)

    async with make_uploader(http_config, handler) as uploader:
        result = await upload_page(uploader)

    assert result.status == UploadOutcome.NETWORK_ERROR
    assert result.error_message == "Network error: Name or service not known"


@pytest.mark.unit
def test_extract_message_order():
    assert extract_message({"message": "a", "error": "b"}) == "a"
    assert extract_message({"message": "", "error": "b"}) == "b"
    assert extract_message({"success": False}) is None
    assert extract_message(["not", "a", "dict"]) is None


# =============================================================================
# AVAILABILITY TESTS
# =============================================================================


@pytest.mark.unit
def test_unconfigured_uploader_is_not_available(tmp_path):
    config = UploadConfig(config_path=tmp_path / "missing.yaml", overrides={"api_base_url": ""})

    uploader = HttpUploader(config=config)

    assert uploader.is_available() is False


@pytest.mark.unit
@pytest.mark.asyncio
async def test_connection_test(http_config):
    def handler(request):
        return httpx.Response(404)

    async with make_uploader(http_config, handler) as uploader:
        assert uploader.is_available() is True
        assert await uploader.test_connection() is True


@pytest.mark.unit
@pytest.mark.asyncio
async def test_connection_test_failure(http_config):
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    async with make_uploader(http_config, handler) as uploader:
        assert await uploader.test_connection() is False
