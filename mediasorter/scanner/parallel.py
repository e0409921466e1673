"""
Parallel processing module for the scanner package.

Provides the hashing worker pool: a fixed number of workers that claim
candidates from a shared cursor, analyze them, and report progress exactly
once per claimed candidate.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Callable, Any

from ..config import DEFAULT_WORKERS, SMALL_FILE_THRESHOLD, SHORT_VIDEO_THRESHOLD
from ..exceptions import ReadError, StatError
from ..models import MediaCandidate, MediaItem, ScanProgress
from .analysis import analyze_media
from .dependencies import HAS_TQDM, _tqdm_class, _logger

ProgressCallback = Callable[[ScanProgress], None]


class ClaimCursor:
    """
    Shared index into the candidate list.

    Every index in range(total) is handed out exactly once, whatever the
    number of workers or the order in which they finish.
    """

    def __init__(self, total: int):
        self._total = total
        self._next = 0
        self._lock = threading.Lock()

    def claim(self) -> Optional[int]:
        """Return the next unclaimed index, or None when exhausted."""
        with self._lock:
            if self._next >= self._total:
                return None
            index = self._next
            self._next += 1
            return index

    @property
    def claimed(self) -> int:
        with self._lock:
            return self._next


class _ProgressReporter:
    """Serializes progress events so 'loaded' grows by one per event."""

    def __init__(self, total: int, callback: Optional[ProgressCallback], pbar: Optional[Any]):
        self.total = total
        self.loaded = 0
        self._callback = callback
        self._pbar = pbar
        self._lock = threading.Lock()

    def start(self) -> None:
        if self._callback:
            self._callback(ScanProgress(loaded=0, total=self.total))

    def advance(self) -> None:
        with self._lock:
            self.loaded += 1
            if self._pbar is not None:
                self._pbar.update(1)
            if self._callback:
                self._callback(ScanProgress(loaded=self.loaded, total=self.total))


def analyze_media_parallel(
    candidates: list[MediaCandidate],
    max_workers: int = DEFAULT_WORKERS,
    progress_callback: Optional[ProgressCallback] = None,
    cancel_event: Optional[threading.Event] = None,
    show_progress: bool = False,
    logger: Optional[logging.Logger] = None,
    small_file_threshold: int = SMALL_FILE_THRESHOLD,
    short_video_threshold: int = SHORT_VIDEO_THRESHOLD,
) -> tuple[list[MediaItem], list[str]]:
    """
    Analyze media candidates with a bounded pool of workers.

    Args:
        candidates: Files found by the folder walk
        max_workers: Desired concurrency (effective: min(max_workers, total))
        progress_callback: Optional callback(ScanProgress), called once with
            loaded=0 and then once per processed candidate
        cancel_event: Optional event; once set, no new candidates are claimed
            but in-flight ones still complete and are reported
        show_progress: Whether to show tqdm progress bar
        logger: Optional logger for status messages
        small_file_threshold: Size below which files are flagged TooSmall
        short_video_threshold: Size below which videos are flagged ShortVideo

    Returns:
        Tuple of (analyzed items in candidate order, paths that were skipped
        because their metadata or content could not be read)
    """
    total = len(candidates)
    if total == 0:
        if progress_callback:
            progress_callback(ScanProgress(loaded=0, total=0))
        return [], []

    if max_workers < 1:
        raise ValueError("max_workers must be at least 1")

    worker_count = min(max_workers, total)
    cancel_event = cancel_event or threading.Event()
    cursor = ClaimCursor(total)

    # Each worker writes only to the slot of the index it claimed
    slots: list[Optional[MediaItem]] = [None] * total
    skipped: list[bool] = [False] * total

    pbar: Optional[Any] = None
    if HAS_TQDM and show_progress and _tqdm_class is not None:
        pbar = _tqdm_class(total=total, desc="Hashing media", unit="file", ncols=80)

    reporter = _ProgressReporter(total, progress_callback, pbar)

    def worker() -> None:
        while not cancel_event.is_set():
            index = cursor.claim()
            if index is None:
                return
            candidate = candidates[index]
            try:
                slots[index] = analyze_media(
                    candidate,
                    small_file_threshold=small_file_threshold,
                    short_video_threshold=short_video_threshold,
                )
            except (StatError, ReadError) as e:
                skipped[index] = True
                _logger.warning(f"Skipping {candidate.absolute_path}: {e}")
            except Exception as e:
                skipped[index] = True
                _logger.exception(f"Unexpected error analyzing {candidate.absolute_path}: {e}")
            reporter.advance()

    reporter.start()
    try:
        with ThreadPoolExecutor(max_workers=worker_count) as executor:
            futures = [executor.submit(worker) for _ in range(worker_count)]
            for future in futures:
                future.result()
    finally:
        if pbar is not None:
            pbar.close()

    items = [item for item in slots if item is not None]
    skipped_paths = [candidates[i].absolute_path for i in range(total) if skipped[i]]

    if logger:
        logger.info(
            f"Analyzed {reporter.loaded:,}/{total:,} files "
            f"({len(skipped_paths):,} skipped)"
        )
        if cancel_event.is_set() and reporter.loaded < total:
            logger.info(f"Cancelled after {reporter.loaded:,} files")

    return items, skipped_paths


__all__ = ['ClaimCursor', 'analyze_media_parallel']
