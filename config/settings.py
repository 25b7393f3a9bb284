"""
Central Configuration File

ALL configuration values live here. This is the single source of truth.

Guidelines:
- Secrets (API tokens) should be in .env, NOT here
- Import these settings in modules: from config.settings import UPLOAD_HTTP_TIMEOUT
- Per-deployment overrides go in config/upload.yaml (see upload/config.py)
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# =============================================================================
# BACKEND API CONFIGURATION
# =============================================================================

# Base URL of the EchoReads backend (no trailing slash)
# Empty means "not configured" - the factory falls back to the mock uploader
API_BASE_URL = os.getenv("ECHOREADS_API_BASE_URL", "").rstrip("/")

# Upload endpoint, relative to API_BASE_URL
UPLOAD_PATH = os.getenv("ECHOREADS_UPLOAD_PATH", "/api/upload")

# Multipart field names (contract with the backend, varies by deployment)
UPLOAD_FILE_FIELD = os.getenv("ECHOREADS_UPLOAD_FILE_FIELD", "image")
UPLOAD_FOLDER_FIELD = os.getenv("ECHOREADS_UPLOAD_FOLDER_FIELD", "folderName")

# HTTP request timeout (seconds) - must be finite
UPLOAD_HTTP_TIMEOUT = float(os.getenv("UPLOAD_HTTP_TIMEOUT", "30"))

# =============================================================================
# UPLOAD QUEUE CONFIGURATION
# =============================================================================

# Fixed pause between two uploads of the same batch (seconds)
UPLOAD_INTER_ITEM_DELAY = float(os.getenv("UPLOAD_INTER_ITEM_DELAY", "0.5"))

# Maximum accepted file size (bytes)
MAX_UPLOAD_FILE_SIZE = 50 * 1024 * 1024  # 50 MB

# MIME types accepted by the backend upload route
ALLOWED_UPLOAD_TYPES = [
    "image/jpeg",
    "image/png",
    "image/webp",
    "application/pdf",
    "audio/mpeg",
    "audio/mp3",
    "audio/wav",
    "audio/m4a",
    "audio/ogg",
    "audio/aac",
]

# Extensions picked up when scanning a directory of page images
PAGE_IMAGE_EXTENSIONS = [".png", ".jpg", ".jpeg", ".webp"]

# MIME types for page extensions, checked before the host MIME database
# (".webp" is missing from it on some systems)
PAGE_IMAGE_MIME_TYPES = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".webp": "image/webp",
}

# Optional YAML overrides
UPLOAD_CONFIG_PATH = Path(os.getenv("UPLOAD_CONFIG_PATH", "config/upload.yaml"))

# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# =============================================================================
# SECRETS (loaded from .env)
# =============================================================================
# IMPORTANT: These should NEVER be committed to version control!
# Create a .env file in the project root with these values

# Bearer token sent with every backend request
API_TOKEN = os.getenv("ECHOREADS_API_TOKEN", "")
