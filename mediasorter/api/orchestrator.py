"""
Scan and trash orchestration for Media Sorter.

Provides the two core operations, scan and trash, each taking a progress
callback and returning a final result, plus orchestrator classes that run
them in the background against the shared session state.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Optional

from ..exceptions import SelectionCancelled
from ..models import ScanProgress, ScanResult, TrashProgress, TrashResult
from ..scanner import (
    find_media_candidates,
    analyze_media_parallel,
    find_exact_duplicates,
    find_similar_groups,
)
from ..state import SessionState, HistoryManager
from ..trash import TrashExecutor
from ..user_config import get_user_config
from ..utils import formatters

# Module logger
_logger = logging.getLogger(__name__)


def scan(
    roots: list[str],
    progress_callback: Optional[Callable[[ScanProgress], None]] = None,
    max_workers: Optional[int] = None,
    cancel_event: Optional[threading.Event] = None,
    show_progress: bool = False,
) -> ScanResult:
    """
    Walk the roots, hash every media file, and return the analyzed items.

    Args:
        roots: Root folders to scan (an empty list yields an empty result)
        progress_callback: Optional callback(ScanProgress)
        max_workers: Hashing concurrency (default from user config)
        cancel_event: Optional event to stop claiming new files
        show_progress: Whether to show a tqdm progress bar

    Returns:
        ScanResult with roots, items, skipped paths and cancellation flag

    Raises:
        ValueError: If roots is None
    """
    if roots is None:
        raise ValueError("A root list is required")

    config = get_user_config()
    roots = list(roots)
    candidates = find_media_candidates(roots)

    items, skipped_paths = analyze_media_parallel(
        candidates,
        max_workers=max_workers or config.default_workers,
        progress_callback=progress_callback,
        cancel_event=cancel_event,
        show_progress=show_progress,
        logger=_logger,
        small_file_threshold=config.small_file_threshold,
        short_video_threshold=config.short_video_threshold,
    )

    return ScanResult(
        roots=roots,
        items=items,
        skipped_paths=skipped_paths,
        cancelled=len(items) + len(skipped_paths) < len(candidates),
    )


def scan_selection(
    select_folders: Callable[[], list[str]],
    progress_callback: Optional[Callable[[ScanProgress], None]] = None,
    **kwargs,
) -> ScanResult:
    """
    Ask a folder-selection surface for roots, then scan them.

    If the surface raises SelectionCancelled the result is empty and no
    progress is reported.

    Args:
        select_folders: Callable returning absolute directory paths
        progress_callback: Optional callback(ScanProgress)
        **kwargs: Passed through to scan()

    Returns:
        ScanResult
    """
    try:
        roots = select_folders()
    except SelectionCancelled:
        _logger.info("Folder selection cancelled")
        return ScanResult(roots=[], items=[])
    return scan(roots, progress_callback=progress_callback, **kwargs)


def trash(
    paths: list[str],
    progress_callback: Optional[Callable[[TrashProgress], None]] = None,
    trash_func: Optional[Callable[[str], None]] = None,
) -> TrashResult:
    """
    Move a confirmed path list to the reversible trash, one path at a time.

    Args:
        paths: Reviewed absolute paths
        progress_callback: Optional callback(TrashProgress)
        trash_func: Trash primitive override (default: send2trash)

    Returns:
        TrashResult with trashed and failed paths
    """
    return TrashExecutor(trash_func).run(paths, progress_callback=progress_callback)


class ScanOrchestrator:
    """
    Runs a scan against the shared session state.

    Progress is written into the session as it arrives; on completion the
    working set is replaced and a summary message is built.
    """

    def __init__(
        self,
        session: SessionState,
        roots: list[str],
        threshold: int,
        workers: int,
    ):
        self.session = session
        self.roots = roots
        self.threshold = threshold
        self.workers = workers

    def run(self) -> None:
        """Execute the complete scan process."""
        try:
            self.session.start_scan(self.roots, self.threshold, self.workers)
            HistoryManager.save_roots(self.roots)
            start_time = time.time()

            result = scan(
                self.roots,
                progress_callback=self.session.update_scan_progress,
                max_workers=self.workers,
                cancel_event=self.session.cancel_event,
            )

            elapsed = formatters.format_time_estimate(time.time() - start_time)
            self.session.finish_scan(result, self._summary(result, elapsed))
        except Exception as e:
            _logger.exception(f"Scan error: {e}")
            self.session.fail(f'Error: {e}')

    def _summary(self, result: ScanResult, elapsed: str) -> str:
        exact_groups = find_exact_duplicates(result.items)
        similar_groups = find_similar_groups(result.items, threshold=self.threshold)

        parts = [
            f'Found {formatters.format_number(len(result.items))} media files',
            f'({formatters.format_number(len(exact_groups))} exact groups, '
            f'{formatters.format_number(len(similar_groups))} similar groups)',
            f'• Completed in {elapsed}',
        ]
        if result.skipped_paths:
            parts.append(f'• {formatters.format_number(len(result.skipped_paths))} files could not be read')
        if result.cancelled:
            parts[0] = 'Scan cancelled. ' + parts[0]
        return ' '.join(parts)


class TrashOrchestrator:
    """Runs a trash request against the shared session state."""

    def __init__(
        self,
        session: SessionState,
        paths: list[str],
        trash_func: Optional[Callable[[str], None]] = None,
    ):
        self.session = session
        self.paths = paths
        self.trash_func = trash_func

    def run(self) -> None:
        try:
            self.session.start_trash(self.paths)
            result = trash(
                self.paths,
                progress_callback=self.session.update_trash_progress,
                trash_func=self.trash_func,
            )
            message = f'Moved {formatters.format_number(len(result.trashed_paths))} file(s) to trash'
            if result.failed_paths:
                message += f', {formatters.format_number(len(result.failed_paths))} failed'
            self.session.finish_trash(result, message)
        except Exception as e:
            _logger.exception(f"Trash error: {e}")
            self.session.fail(f'Error: {e}')


__all__ = ['scan', 'scan_selection', 'trash', 'ScanOrchestrator', 'TrashOrchestrator']
