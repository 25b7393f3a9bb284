"""
Upload Test Configuration and Fixtures

Fixtures shared across upload tests.

To use pytest:
    pip install -e ".[test]"
    pytest tests/upload/
"""

import asyncio

import pytest

from upload.config import UploadConfig
from upload.constants import UploadItemStatus
from upload.implementations.mock_uploader import MockUploader
from upload.models.upload_item import FileHandle
from upload.upload_manager import UploadQueueManager


# =============================================================================
# CONFIG FIXTURES
# =============================================================================

@pytest.fixture
def fast_config(tmp_path):
    """
    UploadConfig with no pause between uploads and no YAML file.
    """
    return UploadConfig(
        config_path=tmp_path / "missing.yaml",
        overrides={"inter_item_delay": 0},
    )


# =============================================================================
# FILE FIXTURES
# =============================================================================

@pytest.fixture
def make_handle():
    """
    Factory for in-memory file handles.

    Usage:
        def test_something(make_handle):
            handle = make_handle("page_1.png", size=1200)
    """
    def _make(name: str, size: int = 100, mime_type: str = "image/png") -> FileHandle:
        return FileHandle(content=b"x" * size, file_name=name, mime_type=mime_type)

    return _make


@pytest.fixture
def page_directory(tmp_path):
    """
    Directory of page images written out of order, plus noise files.
    """
    pages = tmp_path / "pages"
    pages.mkdir()
    for name in ["page_3.png", "page_1.png", "page_10.png", "cover.png"]:
        (pages / name).write_bytes(b"\x89PNG" + b"0" * 64)
    (pages / "notes.txt").write_text("not an image")
    (pages / "nested").mkdir()
    return pages


# =============================================================================
# UPLOADER / QUEUE FIXTURES
# =============================================================================

@pytest.fixture
def mock_uploader():
    """Fresh MockUploader with no delay"""
    return MockUploader()


@pytest.fixture
def upload_queue(mock_uploader, fast_config):
    """Queue wired to the mock uploader, no inter-item pause"""
    return UploadQueueManager(mock_uploader, config=fast_config)


@pytest.fixture
def wait_for_status():
    """
    Yield to the event loop until an item reaches a status.

    Usage:
        await wait_for_status(queue, item_id, UploadItemStatus.UPLOADING)
    """
    async def _wait(queue, item_id, status: UploadItemStatus, attempts: int = 100):
        for _ in range(attempts):
            if queue.get(item_id).status == status:
                return
            await asyncio.sleep(0)
        raise AssertionError(f"Item {item_id} never reached {status.value}")

    return _wait


# =============================================================================
# PYTEST CONFIGURATION
# =============================================================================

def pytest_configure(config):
    """
    Configure pytest with custom markers.
    """
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Full integration tests")
