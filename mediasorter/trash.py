"""
Trash execution for Media Sorter.

Moves an already reviewed list of paths to the platform's reversible trash,
one path at a time. A failing path is recorded and the run continues; the
caller gets a full accounting of what was trashed and what was not.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from send2trash import send2trash

from .exceptions import TrashError
from .models import TrashProgress, TrashResult

_logger = logging.getLogger(__name__)

TrashProgressCallback = Callable[[TrashProgress], None]


class TrashExecutor:
    """
    Runs the trash primitive sequentially over a confirmed path list.

    Args:
        trash_func: Callable taking one absolute path, raising on failure.
            Defaults to send2trash (OS recycle bin / freedesktop trash).
    """

    def __init__(self, trash_func: Optional[Callable[[str], None]] = None):
        self.trash_func = trash_func or send2trash

    def trash_one(self, path: str) -> None:
        """
        Move a single path to trash.

        Raises:
            TrashError: If the primitive fails for any reason
        """
        try:
            self.trash_func(path)
        except Exception as e:
            raise TrashError(path, str(e)) from e

    def run(
        self,
        paths: list[str],
        progress_callback: Optional[TrashProgressCallback] = None,
    ) -> TrashResult:
        """
        Trash every path in order and report progress after each one.

        Args:
            paths: Confirmed absolute paths, processed strictly in order
            progress_callback: Optional callback(TrashProgress); called with
                processed=0 first, then once per path

        Returns:
            TrashResult with trashed and failed paths

        Raises:
            ValueError: If paths is None
        """
        if paths is None:
            raise ValueError("A path list is required")

        result = TrashResult()
        total = len(paths)

        if progress_callback:
            progress_callback(TrashProgress(processed=0, total=total))
        if total == 0:
            return result

        for processed, path in enumerate(paths, 1):
            try:
                self.trash_one(path)
                result.trashed_paths.append(path)
                _logger.info(f"Moved to trash: {path}")
            except TrashError as e:
                result.failed_paths.append(path)
                _logger.warning(str(e))

            if progress_callback:
                progress_callback(TrashProgress(processed=processed, total=total))

        return result


def move_to_trash(
    paths: list[str],
    progress_callback: Optional[TrashProgressCallback] = None,
) -> TrashResult:
    """Trash paths with the default platform primitive."""
    return TrashExecutor().run(paths, progress_callback=progress_callback)


__all__ = ['TrashExecutor', 'move_to_trash']
