"""
Upload Queue Manager

Ordered queue of files uploaded one at a time to a single destination
folder. This is what the magazine editor uses to push a folder of page
images into object storage.

Why sequential?
- Predictable load on the backend (one request in flight)
- Completion order equals queue order
- A failed item never blocks the ones behind it

Every item moves through pending → uploading → completed/error. Items
can be removed or cleared between runs, never while uploading.
"""

import asyncio
import logging
import time
from typing import Any, Callable, Dict, List, Optional, Sequence

from upload.config import UploadConfig
from upload.constants import GENERIC_UPLOAD_ERROR, REMOVABLE_STATUSES, UploadItemStatus
from upload.interfaces.uploader_interface import (
    EmptyQueueError,
    ItemNotFoundError,
    NotRemovableError,
    QueueBusyError,
    UploaderInterface,
    UploadResult,
)
from upload.models.upload_item import (
    BatchOutcome,
    FileHandle,
    TransitionRecord,
    UploadItem,
    UploadItemView,
)
from upload.utils.ordering import sort_by_page
from upload.utils.validation_utils import validate_file_handle

ItemCallback = Callable[[UploadItemView], None]


class UploadQueueManager:
    """
    Sequential upload queue.

    This class:
    - Keeps queued files in insertion (or page) order
    - Uploads pending items one at a time with a fixed pause between them
    - Records each item's status, error and backend payload
    - Reports aggregate progress and read-only snapshots

    Usage:
        queue = UploadQueueManager(uploader)
        queue.enqueue(handles, order_by_page=True)
        outcome = await queue.start(folder="magazine-42")
        print(outcome.completed_count, outcome.error_count)
    """

    def __init__(
        self,
        uploader: UploaderInterface,
        config: Optional[UploadConfig] = None,
        on_item_update: Optional[ItemCallback] = None,
    ):
        """
        Initialize upload queue.

        Args:
            uploader: Performs the remote upload call
            config: Upload configuration (None = defaults from settings)
            on_item_update: Called with a view of an item after each
                status change. Errors raised by the callback are logged.
        """
        self.logger = logging.getLogger(__name__)
        self.uploader = uploader
        self.config = config or UploadConfig()
        self.on_item_update = on_item_update

        self._items: List[UploadItem] = []
        self._running = False
        self._cancel_requested = False
        self._progress = 0
        self._transition_log: List[TransitionRecord] = []

    # =========================================================================
    # QUEUE MUTATION
    # =========================================================================

    def enqueue(
        self,
        files: Sequence[FileHandle],
        order_by_page: bool = False,
    ) -> List[UploadItemView]:
        """
        Append files to the queue as pending items.

        All files are validated first; if one is invalid nothing from
        this call is queued. Uploading does not start.

        Args:
            files: Files to queue
            order_by_page: Sort the new files by the number in their
                "page_<N>." name; files without one go last, by name

        Returns:
            Views of the newly queued items, in queue order

        Raises:
            EnqueueError: If any file is invalid
        """
        files = list(files)
        for handle in files:
            validate_file_handle(
                handle,
                allowed_types=self.config.allowed_types,
                max_size=self.config.max_file_size,
            )

        if order_by_page:
            files = sort_by_page(files, lambda handle: handle.file_name)

        existing_ids = {item.id for item in self._items}
        new_items = []
        for handle in files:
            item = UploadItem(file=handle)
            while item.id in existing_ids:
                item = UploadItem(file=handle)
            existing_ids.add(item.id)
            new_items.append(item)

        self._items.extend(new_items)
        self._refresh_progress()

        self.logger.info(
            f"Queued {len(new_items)} file(s) (queue size: {len(self._items)})",
        )
        return [item.to_view() for item in new_items]

    def remove(self, item_id: str) -> None:
        """
        Remove an item that is not uploading.

        Raises:
            ItemNotFoundError: If no item has this ID
            NotRemovableError: If the item is uploading
        """
        item = self._find(item_id)

        if item.status not in REMOVABLE_STATUSES:
            raise NotRemovableError(
                f"Cannot remove {item.display_name}: upload in progress",
            )

        self._items.remove(item)
        self._refresh_progress()
        self.logger.debug(f"Removed {item.display_name} from queue")

    def clear(self) -> int:
        """
        Remove every item, reset progress and the transition log.

        Returns:
            Number of items removed

        Raises:
            QueueBusyError: If a batch is running
        """
        if self._running:
            raise QueueBusyError("Cannot clear the queue while uploading")

        cleared = len(self._items)
        self._items.clear()
        self._progress = 0
        self._transition_log.clear()

        if cleared:
            self.logger.info(f"Cleared {cleared} queued file(s)")
        return cleared

    def reset_errors(self) -> int:
        """
        Put errored items back to pending so the next start() retries them.

        Returns:
            Number of items reset

        Raises:
            QueueBusyError: If a batch is running
        """
        if self._running:
            raise QueueBusyError("Cannot reset items while uploading")

        reset = 0
        for item in self._items:
            if item.status == UploadItemStatus.ERROR:
                item.reset_to_pending()
                reset += 1

        self._progress = self._compute_progress()
        if reset:
            self.logger.info(f"Reset {reset} failed item(s) to pending")
        return reset

    # =========================================================================
    # BATCH RUN
    # =========================================================================

    async def start(self, folder: str) -> BatchOutcome:
        """
        Upload every pending item, in queue order, into one folder.

        Failures are recorded on the item and never stop the batch.

        Args:
            folder: Destination folder shared by the whole batch

        Returns:
            BatchOutcome with the counts for this run and a snapshot

        Raises:
            EmptyQueueError: If the queue is empty
            QueueBusyError: If a batch is already running
            ValueError: If folder is empty
        """
        if self._running:
            raise QueueBusyError("Upload already in progress")
        if not self._items:
            raise EmptyQueueError("Nothing to upload: queue is empty")
        if not folder:
            raise ValueError("Destination folder is required")

        self._running = True
        self._cancel_requested = False

        pending = [item for item in self._items if item.is_pending]
        self._progress = self._compute_progress()
        outcome = BatchOutcome()
        start_time = time.monotonic()

        self.logger.info(
            f"Starting batch: {len(pending)} pending of {len(self._items)} "
            f"queued -> folder {folder}",
        )

        try:
            for index, item in enumerate(pending):
                if self._cancel_requested:
                    outcome.cancelled = True
                    self.logger.info("Batch cancelled, remaining items stay pending")
                    break

                # Removed or changed by the caller while we were waiting
                if not item.is_pending or not any(q is item for q in self._items):
                    continue

                await self._upload_item(item, folder)

                if item.status == UploadItemStatus.COMPLETED:
                    outcome.completed_count += 1
                else:
                    outcome.error_count += 1

                self._progress = max(self._progress, self._compute_progress())
                self.logger.debug(f"Batch progress: {self._progress}%")

                if index < len(pending) - 1 and self.config.inter_item_delay > 0:
                    await asyncio.sleep(self.config.inter_item_delay)
        finally:
            self._running = False
            self._cancel_requested = False

        outcome.items = self.snapshot()
        outcome.duration_seconds = time.monotonic() - start_time

        log = self.logger.info if outcome.error_count == 0 else self.logger.warning
        log(
            f"Batch finished: {outcome.completed_count} completed, "
            f"{outcome.error_count} failed ({outcome.duration_seconds:.1f}s)",
        )
        return outcome

    async def _upload_item(self, item: UploadItem, folder: str) -> None:
        """Run one item through uploading → completed/error"""
        self._set_status(item, item.mark_upload_started)

        try:
            result = await self.uploader.upload_file(
                content=item.file.content,
                file_name=item.file.file_name,
                mime_type=item.file.mime_type,
                folder=folder,
            )
        except asyncio.CancelledError:
            self._set_status(item, item.mark_upload_failed, "Upload cancelled")
            raise
        except Exception as e:
            # Uploaders should report failures in the result; be safe anyway
            self.logger.error(f"Uploader raised for {item.display_name}: {e}", exc_info=True)
            result = UploadResult(success=False, error_message=f"Upload error: {e}")

        if result.success:
            self._set_status(item, item.mark_upload_success, result.data)
            self.logger.info(f"✅ Uploaded {item.display_name}")
        else:
            message = result.error_message or GENERIC_UPLOAD_ERROR
            self._set_status(item, item.mark_upload_failed, message)
            self.logger.error(f"❌ Upload failed for {item.display_name}: {message}")

    def cancel(self) -> None:
        """
        Ask the running batch to stop after the current item.

        Remaining items stay pending. No-op when idle.
        """
        if not self._running:
            return
        self._cancel_requested = True
        self.logger.info("Cancellation requested")

    # =========================================================================
    # STATE
    # =========================================================================

    def snapshot(self) -> List[UploadItemView]:
        """Point-in-time, read-only copy of all items"""
        return [item.to_view() for item in self._items]

    def get(self, item_id: str) -> UploadItemView:
        """
        Raises:
            ItemNotFoundError: If no item has this ID
        """
        return self._find(item_id).to_view()

    @property
    def progress(self) -> int:
        """Aggregate progress, 0-100"""
        return self._progress

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def transition_log(self) -> List[TransitionRecord]:
        """Every status change since the queue was created or last cleared"""
        return list(self._transition_log)

    def __len__(self) -> int:
        return len(self._items)

    def get_status(self) -> Dict[str, Any]:
        """
        Get queue status.

        Example:
            status = queue.get_status()
            print(f"{status['completed']}/{status['total']} done")
        """
        counts = {status.value: 0 for status in UploadItemStatus}
        for item in self._items:
            counts[item.status.value] += 1

        return {
            "total": len(self._items),
            "is_running": self._running,
            "progress": self._progress,
            **counts,
        }

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _find(self, item_id: str) -> UploadItem:
        for item in self._items:
            if item.id == item_id:
                return item
        raise ItemNotFoundError(f"No queued item with id {item_id}")

    def _refresh_progress(self) -> None:
        """Recompute progress after the queue changed between runs"""
        # A running batch only moves progress forward, in start()
        if not self._running:
            self._progress = self._compute_progress()

    def _compute_progress(self) -> int:
        """
        round(100 * finished / total), half up, and below 100 until
        every item is finished.
        """
        total = len(self._items)
        if total == 0:
            return 0

        finished = sum(1 for item in self._items if item.is_finished)
        percent = (200 * finished + total) // (2 * total)
        if finished < total:
            percent = min(percent, 99)
        return percent

    def _set_status(self, item: UploadItem, mark: Callable[..., None], *args) -> None:
        """Apply a mark_* transition, log it and notify the callback"""
        old_status = item.status
        mark(*args)
        self._transition_log.append(
            TransitionRecord(item.id, old_status, item.status),
        )

        if self.on_item_update is None:
            return
        try:
            self.on_item_update(item.to_view())
        except Exception as e:
            self.logger.error(f"Error in item update callback: {e}")
