#!/usr/bin/env python3
"""
Upload Magazine Pages - Maintenance Script

Uploads every page image of a directory into a magazine's storage folder,
one file at a time, in page order (page_1.png, page_2.png, ...).

Usage:
    python scripts/upload_pages.py ./pages --folder mag-42            # Dry run
    python scripts/upload_pages.py ./pages --folder mag-42 --upload   # Upload
    python scripts/upload_pages.py ./pages --folder mag-42 --upload --mock

Safety:
    - Dry run by default (requires --upload to actually upload)
    - Only processes page image extensions from config/settings.py
    - Continues on errors (one failed upload won't stop the rest)
    - Exit code 1 if any page failed
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from config.settings import LOG_FORMAT, LOG_LEVEL
from upload import UploadConfig, UploadController, UploaderError
from upload.factory import create_uploader
from upload.utils.ordering import list_page_files

# Configure logging
logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Upload a directory of magazine page images",
    )
    parser.add_argument("directory", type=Path, help="Directory with page images")
    parser.add_argument("--folder", required=True, help="Destination folder (magazine ID)")
    parser.add_argument("--upload", action="store_true", help="Actually upload (default: dry run)")
    parser.add_argument("--mock", action="store_true", help="Use the mock uploader")
    parser.add_argument("--delay", type=float, default=None, help="Pause between uploads (seconds)")
    return parser.parse_args(argv)


def show_plan(directory: Path, config: UploadConfig) -> int:
    """Print the files that would be uploaded, in order"""
    paths = list_page_files(directory, config.page_extensions)
    if not paths:
        logger.warning(f"No page images found in {directory}")
        return 0

    logger.info(f"Would upload {len(paths)} file(s):")
    for index, path in enumerate(paths, start=1):
        logger.info(f"  {index:3d}. {path.name} ({path.stat().st_size} bytes)")
    return len(paths)


async def run_upload(args: argparse.Namespace, config: UploadConfig) -> int:
    uploader = create_uploader(force_mock=args.mock, config=config)
    controller = UploadController(uploader=uploader, config=config)

    try:
        outcome = await controller.upload_directory(args.folder, args.directory)
    finally:
        await controller.cleanup()

    logger.info("=" * 60)
    logger.info(
        f"Upload summary: {outcome.completed_count} completed, "
        f"{outcome.error_count} failed",
    )
    for item in outcome.items:
        if item.error_message:
            logger.error(f"  ❌ {item.display_name}: {item.error_message}")
    logger.info("=" * 60)

    return 0 if outcome.error_count == 0 else 1


def main(argv=None) -> int:
    args = parse_args(argv)

    overrides = {}
    if args.delay is not None:
        overrides["inter_item_delay"] = args.delay
    config = UploadConfig(overrides=overrides)

    try:
        if not args.upload:
            logger.info("DRY RUN - pass --upload to upload")
            show_plan(args.directory, config)
            return 0
        return asyncio.run(run_upload(args, config))
    except (UploaderError, NotADirectoryError) as e:
        logger.error(f"Upload aborted: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
