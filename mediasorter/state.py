"""
State management for Media Sorter.

Holds the in-memory working set produced by the last scan, the progress of
the running operation, and the recently scanned roots. Items stay in the
working set until a trash run removes them successfully.
"""

import json
import logging
import os
import threading
from datetime import datetime
from typing import Optional

from .models import MediaItem, ScanProgress, ScanResult, TrashProgress, TrashResult
from .user_config import get_user_config

_logger = logging.getLogger(__name__)


class SessionState:
    """
    Thread-safe state shared between the web API and background workers.

    Status values: idle, scanning, trashing, complete, cancelled, error
    """

    BUSY_STATUSES = ('scanning', 'trashing')

    def __init__(self):
        self._lock = threading.Lock()
        self._worker: Optional[threading.Thread] = None
        self.reset()

    def reset(self):
        """Reset state to initial values."""
        with self._lock:
            self.cancel_event = threading.Event()
            self.status = 'idle'
            self.message = ''
            self.roots: list[str] = []
            self.items: list[MediaItem] = []
            self.skipped_paths: list[str] = []
            self.scan_progress = ScanProgress(loaded=0, total=0)
            self.trash_progress = TrashProgress(processed=0, total=0)
            self.last_trash_result: Optional[TrashResult] = None
            self.last_updated: Optional[str] = None
            self.settings = {
                'threshold': get_user_config().default_threshold,
                'workers': get_user_config().default_workers,
            }

    @property
    def is_busy(self) -> bool:
        return self.status in self.BUSY_STATUSES

    @property
    def cancel_requested(self) -> bool:
        """Check if cancel has been requested."""
        return self.cancel_event.is_set()

    def request_cancel(self):
        """Request cooperative cancellation of the running scan."""
        self.cancel_event.set()

    def attach_worker(self, thread: threading.Thread):
        """Register the background thread running the current operation."""
        self._worker = thread

    def wait(self, timeout: Optional[float] = None) -> bool:
        """
        Block until the current background operation finishes.

        Returns:
            True if no operation is running afterwards
        """
        worker = self._worker
        if worker is not None:
            worker.join(timeout)
            return not worker.is_alive()
        return True

    def try_begin(self, status: str) -> bool:
        """
        Claim the session for a scan or trash run.

        The check and the status change happen under one lock, so of two
        concurrent callers only one succeeds.

        Args:
            status: 'scanning' or 'trashing'

        Returns:
            False if another operation already holds the session
        """
        if status not in self.BUSY_STATUSES:
            raise ValueError(f"Not an operation status: {status}")
        with self._lock:
            if self.status in self.BUSY_STATUSES:
                return False
            if status == 'scanning':
                self.cancel_event = threading.Event()
            self.status = status
            return True

    # -- scan lifecycle -------------------------------------------------------

    def start_scan(self, roots: list[str], threshold: int, workers: int):
        with self._lock:
            # A session claimed through try_begin already has a fresh event
            if self.status != 'scanning':
                self.cancel_event = threading.Event()
            self.status = 'scanning'
            self.message = f'Scanning {len(roots)} folder(s)...'
            self.scan_progress = ScanProgress(loaded=0, total=0)
            self.settings = {'threshold': threshold, 'workers': workers}

    def update_scan_progress(self, progress: ScanProgress):
        with self._lock:
            self.scan_progress = progress

    def finish_scan(self, result: ScanResult, message: str):
        """Replace the working set with a finished scan's items."""
        with self._lock:
            self.roots = list(result.roots)
            self.items = list(result.items)
            self.skipped_paths = list(result.skipped_paths)
            self.status = 'cancelled' if result.cancelled else 'complete'
            self.message = message
            self.last_updated = datetime.now().isoformat()

    # -- trash lifecycle ------------------------------------------------------

    def start_trash(self, paths: list[str]):
        with self._lock:
            self.status = 'trashing'
            self.message = f'Moving {len(paths)} file(s) to trash...'
            self.trash_progress = TrashProgress(processed=0, total=len(paths))
            self.last_trash_result = None

    def update_trash_progress(self, progress: TrashProgress):
        with self._lock:
            self.trash_progress = progress

    def finish_trash(self, result: TrashResult, message: str):
        """Record a trash run and drop trashed items from the working set."""
        trashed = set(result.trashed_paths)
        with self._lock:
            self.items = [item for item in self.items if item.path not in trashed]
            self.last_trash_result = result
            self.status = 'complete'
            self.message = message
            self.last_updated = datetime.now().isoformat()

    def fail(self, message: str):
        with self._lock:
            self.status = 'error'
            self.message = message

    # -- snapshots ------------------------------------------------------------

    def snapshot_items(self) -> list[MediaItem]:
        with self._lock:
            return list(self.items)

    def to_status_dict(self) -> dict:
        """Return current status for API response."""
        with self._lock:
            return {
                'status': self.status,
                'message': self.message,
                'roots': list(self.roots),
                'itemCount': len(self.items),
                'skippedCount': len(self.skipped_paths),
                'scanProgress': self.scan_progress.to_dict(),
                'trashProgress': self.trash_progress.to_dict(),
                'cancelRequested': self.cancel_event.is_set(),
                'settings': dict(self.settings),
                'lastUpdated': self.last_updated,
            }

    def to_items_dict(self) -> dict:
        """Return the working set for API response."""
        with self._lock:
            return {
                'roots': list(self.roots),
                'items': [item.to_dict() for item in self.items],
                'skippedPaths': list(self.skipped_paths),
            }


class HistoryManager:
    """Manages recently scanned roots for autocomplete."""

    MAX_ENTRIES = 10

    @staticmethod
    def load() -> dict:
        """Load root history from disk."""
        history_file = get_user_config().history_file
        try:
            if os.path.exists(history_file):
                with open(history_file, 'r', encoding='utf-8') as f:
                    return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            _logger.debug(f"Could not load history: {e}")
        return {'roots': []}

    @staticmethod
    def save_roots(roots: list[str]):
        """Move roots to the front of the history."""
        history_file = get_user_config().history_file
        try:
            history = HistoryManager.load()
            recent = [r for r in history.get('roots', []) if r not in roots]
            history['roots'] = (list(roots) + recent)[:HistoryManager.MAX_ENTRIES]

            with open(history_file, 'w', encoding='utf-8') as f:
                json.dump(history, f)
        except OSError as e:
            _logger.debug(f"Could not save history: {e}")


# Global state instance for the application
session_state = SessionState()
