"""
Upload Constants

Enums and fixed values for the upload module.
Tunable configuration lives in config/settings.py.
"""

from enum import Enum

# =============================================================================
# ITEM STATUS
# =============================================================================


class UploadItemStatus(Enum):
    """Lifecycle states of a queued upload item"""

    PENDING = "pending"  # Waiting for start()
    UPLOADING = "uploading"  # Request in flight
    COMPLETED = "completed"  # Backend accepted the file
    ERROR = "error"  # Request failed, message recorded on the item


# Legal item transitions: from_status -> allowed to_status values
ALLOWED_TRANSITIONS = {
    UploadItemStatus.PENDING: {UploadItemStatus.UPLOADING},
    UploadItemStatus.UPLOADING: {UploadItemStatus.COMPLETED, UploadItemStatus.ERROR},
    UploadItemStatus.COMPLETED: set(),
    UploadItemStatus.ERROR: set(),
}

# States in which an item may be removed from the queue
REMOVABLE_STATUSES = {
    UploadItemStatus.PENDING,
    UploadItemStatus.COMPLETED,
    UploadItemStatus.ERROR,
}

# =============================================================================
# UPLOAD OUTCOME
# =============================================================================


class UploadOutcome(Enum):
    """Result codes for a single remote upload call"""

    SUCCESS = "success"
    FAILED = "failed"
    TIMEOUT = "timeout"
    NETWORK_ERROR = "network_error"
    HTTP_ERROR = "http_error"
    REJECTED = "rejected"  # 2xx but success: false
    INVALID_RESPONSE = "invalid_response"
    INVALID_FILE = "invalid_file"


# =============================================================================
# MESSAGES
# =============================================================================

GENERIC_UPLOAD_ERROR = "Upload failed"
GENERIC_NETWORK_ERROR = "Network error: unknown network error"
TIMEOUT_ERROR = "Network error: request timed out"

# =============================================================================
# PAGE ORDERING
# =============================================================================

# Matches "page_12." in "page_12.png"
PAGE_NUMBER_PATTERN = r"page_(\d+)\."

# Mask length when showing a token in status output
TOKEN_VISIBLE_CHARS = 10
