"""
Page Ordering Utilities

Functions for putting magazine page images in reading order.
"""

import re
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence, Tuple, TypeVar

from upload.constants import PAGE_NUMBER_PATTERN

T = TypeVar("T")

_PAGE_RE = re.compile(PAGE_NUMBER_PATTERN)


def extract_page_number(file_name: str) -> Optional[int]:
    """
    Extract the page number from a file name.

    Args:
        file_name: File name such as "page_12.png"

    Returns:
        Page number, or None if the name has no page_<N>. token

    Example:
        extract_page_number("page_12.png")   # 12
        extract_page_number("cover.png")     # None
    """
    match = _PAGE_RE.search(file_name)
    if match is None:
        return None
    return int(match.group(1))


def page_sort_key(file_name: str) -> Tuple[int, int, str]:
    """
    Sort key: numbered pages first (ascending), then the rest by name.
    """
    number = extract_page_number(file_name)
    if number is None:
        return (1, 0, file_name)
    return (0, number, file_name)


def sort_by_page(items: Iterable[T], name_of: Callable[[T], str]) -> List[T]:
    """
    Return items ordered by the page number embedded in their name.

    Args:
        items: Anything with a name
        name_of: Function returning the name of an item

    Example:
        sort_by_page(handles, lambda h: h.file_name)
    """
    return sorted(items, key=lambda item: page_sort_key(name_of(item)))


def list_page_files(directory: Path, extensions: Sequence[str]) -> List[Path]:
    """
    List page images in a directory, in reading order.

    Only direct children with a matching extension are returned.

    Raises:
        NotADirectoryError: If directory does not exist or is not a directory
    """
    if not directory.is_dir():
        raise NotADirectoryError(f"Not a directory: {directory}")

    wanted = {ext.lower() for ext in extensions}
    files = [
        path
        for path in directory.iterdir()
        if path.is_file() and path.suffix.lower() in wanted
    ]
    return sort_by_page(files, lambda path: path.name)
