"""
Upload Utilities Package

Public API:
    Ordering utilities:
    - extract_page_number: Page number from a "page_<N>." file name
    - page_sort_key: Sort key putting numbered pages first
    - sort_by_page: Sort items by embedded page number
    - list_page_files: Page images of a directory, in reading order

    Validation utilities:
    - validate_file_handle: Raise EnqueueError for invalid input
    - get_validation_error: Validation message or None
    - is_valid_file: Boolean validation
"""

from upload.utils.ordering import (
    extract_page_number,
    list_page_files,
    page_sort_key,
    sort_by_page,
)
from upload.utils.validation_utils import (
    get_validation_error,
    is_valid_file,
    validate_file_handle,
)

# Public API
__all__ = [
    "extract_page_number",
    "get_validation_error",
    "is_valid_file",
    "list_page_files",
    "page_sort_key",
    "sort_by_page",
    "validate_file_handle",
]
