"""
Upload Configuration Handler

Explicitly passed configuration object for the upload module.
Defaults come from config/settings.py; an optional YAML file
(config/upload.yaml) overrides them per deployment.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from config.settings import (
    ALLOWED_UPLOAD_TYPES,
    API_BASE_URL,
    MAX_UPLOAD_FILE_SIZE,
    PAGE_IMAGE_EXTENSIONS,
    UPLOAD_CONFIG_PATH,
    UPLOAD_FILE_FIELD,
    UPLOAD_FOLDER_FIELD,
    UPLOAD_HTTP_TIMEOUT,
    UPLOAD_INTER_ITEM_DELAY,
    UPLOAD_PATH,
)


class UploadConfig:
    """
    Upload configuration with YAML file support.

    Usage:
        config = UploadConfig()
        delay = config.inter_item_delay

        # Tests: no file, explicit overrides
        config = UploadConfig(overrides={"inter_item_delay": 0})
    """

    def __init__(
        self,
        config_path: Optional[Path] = None,
        overrides: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize configuration.

        Args:
            config_path: Path to YAML config file (None = settings default)
            overrides: Values applied on top of defaults and file

        Raises:
            ValueError: If a configuration value is invalid
        """
        self.logger = logging.getLogger(__name__)
        self.config_path = Path(config_path or UPLOAD_CONFIG_PATH)

        self._config = self._load_config()
        if overrides:
            self._config.update(overrides)

        self._validate_config(self._config)

    def _get_defaults(self) -> Dict[str, Any]:
        """Get default configuration values from settings"""
        return {
            # Backend
            "api_base_url": API_BASE_URL,
            "upload_path": UPLOAD_PATH,
            "file_field": UPLOAD_FILE_FIELD,
            "folder_field": UPLOAD_FOLDER_FIELD,
            "http_timeout": UPLOAD_HTTP_TIMEOUT,
            # Queue
            "inter_item_delay": UPLOAD_INTER_ITEM_DELAY,
            # Validation
            "max_file_size": MAX_UPLOAD_FILE_SIZE,
            "allowed_types": list(ALLOWED_UPLOAD_TYPES),
            "page_extensions": list(PAGE_IMAGE_EXTENSIONS),
        }

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file on top of defaults"""
        config = self._get_defaults()

        if not self.config_path.exists():
            self.logger.debug(
                f"Config file not found at {self.config_path}. Using defaults.",
            )
            return config

        try:
            with open(self.config_path, "r") as f:
                file_config = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            self.logger.warning(
                f"Failed to load config from {self.config_path}: {e}. "
                f"Using defaults.",
            )
            return config

        if not isinstance(file_config, dict):
            raise ValueError(f"Config file must contain a mapping: {self.config_path}")

        config.update(file_config)
        self.logger.info(f"Loaded upload config from {self.config_path}")
        return config

    def _validate_config(self, config: Dict[str, Any]) -> None:
        """Validate configuration values"""
        if config["http_timeout"] is None or config["http_timeout"] <= 0:
            raise ValueError("http_timeout must be a positive number of seconds")

        if config["inter_item_delay"] < 0:
            raise ValueError("inter_item_delay cannot be negative")

        if config["max_file_size"] <= 0:
            raise ValueError("max_file_size must be positive")

        if not config["allowed_types"]:
            raise ValueError("allowed_types cannot be empty")

        if not config["file_field"] or not config["folder_field"]:
            raise ValueError("file_field and folder_field must be set")

    def save(self) -> None:
        """Save current configuration to the YAML file"""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(self.config_path, "w") as f:
            yaml.dump(
                self._config,
                f,
                default_flow_style=False,
                sort_keys=False,
                indent=2,
            )

        self.logger.info(f"Config saved to {self.config_path}")

    # =========================================================================
    # PROPERTY ACCESSORS
    # =========================================================================

    @property
    def api_base_url(self) -> str:
        """Backend base URL without trailing slash (empty = not configured)"""
        return (self._config["api_base_url"] or "").rstrip("/")

    @property
    def upload_path(self) -> str:
        return self._config["upload_path"]

    @property
    def upload_url(self) -> str:
        """Absolute upload endpoint URL"""
        return f"{self.api_base_url}{self.upload_path}"

    @property
    def file_field(self) -> str:
        """Multipart field carrying the file bytes"""
        return self._config["file_field"]

    @property
    def folder_field(self) -> str:
        """Multipart field carrying the destination folder"""
        return self._config["folder_field"]

    @property
    def http_timeout(self) -> float:
        return float(self._config["http_timeout"])

    @property
    def inter_item_delay(self) -> float:
        """Pause between two uploads of a batch (seconds)"""
        return float(self._config["inter_item_delay"])

    @property
    def max_file_size(self) -> int:
        return int(self._config["max_file_size"])

    @property
    def allowed_types(self) -> List[str]:
        return list(self._config["allowed_types"])

    @property
    def page_extensions(self) -> List[str]:
        return [ext.lower() for ext in self._config["page_extensions"]]

    # =========================================================================
    # UTILITY METHODS
    # =========================================================================

    def get(self, key: str, default: Any = None) -> Any:
        return self._config.get(key, default)

    def to_dict(self) -> Dict[str, Any]:
        """Get configuration as dictionary"""
        return self._config.copy()

    def __repr__(self) -> str:
        return f"UploadConfig(path={self.config_path})"
