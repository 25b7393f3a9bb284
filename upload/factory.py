"""
Upload Factory

Factory pattern for creating uploader implementations.

Automatically configures from environment variables (via config/settings.py).
"""

import logging
from typing import Literal, Optional

from config.settings import API_TOKEN
from upload.auth.token_manager import TokenManager
from upload.config import UploadConfig
from upload.implementations.http_uploader import HttpUploader
from upload.implementations.mock_uploader import MockUploader
from upload.interfaces.uploader_interface import UploaderInterface

# Type alias
UploaderMode = Literal["auto", "http", "mock"]


class UploaderFactory:
    """
    Factory for creating uploader implementations.

    Reads configuration from environment variables:
    - ECHOREADS_API_BASE_URL: Backend base URL
    - ECHOREADS_API_TOKEN: Bearer token

    Usage:
        # Auto-detect from environment
        uploader = UploaderFactory.create_uploader()

        # Force mock for testing
        uploader = UploaderFactory.create_uploader(mode="mock")
    """

    _logger = logging.getLogger(__name__)

    @classmethod
    def create_uploader(
        cls,
        mode: UploaderMode = "auto",
        config: Optional[UploadConfig] = None,
        token_manager: Optional[TokenManager] = None,
    ) -> UploaderInterface:
        """
        Create an uploader instance.

        Args:
            mode: "auto" (from config), "http" (force real), "mock" (force sim)
            config: Upload configuration (None = defaults from settings)
            token_manager: Token source (None = ECHOREADS_API_TOKEN)

        Returns:
            UploaderInterface implementation

        Raises:
            RuntimeError: If mode="http" but no backend URL is configured
            ValueError: If mode is unknown
        """
        if mode == "mock":
            cls._logger.info("Creating Mock Uploader (forced)")
            return MockUploader()

        config = config or UploadConfig()

        if mode == "http":
            if not config.api_base_url:
                raise RuntimeError(
                    "HTTP uploader requested but ECHOREADS_API_BASE_URL is not set",
                )
            cls._logger.info("Creating HTTP Uploader (forced)")
            return cls._create_http_uploader(config, token_manager)

        if mode != "auto":
            raise ValueError(f"Unknown uploader mode: {mode}")

        if config.api_base_url:
            cls._logger.info("Creating HTTP Uploader (auto-detected)")
            return cls._create_http_uploader(config, token_manager)

        cls._logger.warning("Backend URL not configured, using Mock Uploader")
        return MockUploader()

    @classmethod
    def _create_http_uploader(
        cls,
        config: UploadConfig,
        token_manager: Optional[TokenManager],
    ) -> HttpUploader:
        if token_manager is None:
            token_manager = TokenManager(token=API_TOKEN or None)
            if not token_manager.is_authenticated():
                cls._logger.warning(
                    "ECHOREADS_API_TOKEN not set, uploads will be unauthenticated",
                )
        return HttpUploader(config=config, token_manager=token_manager)


# Convenience function for quick creation
def create_uploader(
    force_mock: bool = False,
    config: Optional[UploadConfig] = None,
) -> UploaderInterface:
    """
    Quick uploader creation with simple mock override.

    Example:
        uploader = create_uploader()                 # Normal usage
        uploader = create_uploader(force_mock=True)  # Testing
    """
    mode = "mock" if force_mock else "auto"
    return UploaderFactory.create_uploader(mode=mode, config=config)
