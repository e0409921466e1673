"""
File discovery module for the scanner package.

Walks the selected root folders and enumerates media files, tagging each one
with the root it was found under. Roots are walked concurrently, each one as
a sequential depth-first traversal driven by an explicit stack.
"""

from __future__ import annotations

import os
from concurrent.futures import ThreadPoolExecutor
from typing import Iterator, Optional

from ..config import IMAGE_EXTENSIONS, VIDEO_EXTENSIONS, HEIF_EXTENSIONS
from ..exceptions import FileSystemError
from ..models import MediaCandidate, MediaType
from .dependencies import HAS_HEIF_SUPPORT, _logger


def _image_extensions() -> set[str]:
    if HAS_HEIF_SUPPORT:
        return IMAGE_EXTENSIONS
    return IMAGE_EXTENSIONS - HEIF_EXTENSIONS


def classify_media_type(path: str) -> Optional[MediaType]:
    """
    Classify a file by its extension (case-insensitive).

    Args:
        path: File path or name

    Returns:
        MediaType.IMAGE, MediaType.VIDEO, or None if not a media file
    """
    ext = os.path.splitext(path)[1].lower()
    if ext in _image_extensions():
        return MediaType.IMAGE
    if ext in VIDEO_EXTENSIONS:
        return MediaType.VIDEO
    return None


def _read_directory(directory: str) -> list[os.DirEntry]:
    try:
        with os.scandir(directory) as entries:
            return list(entries)
    except OSError as e:
        raise FileSystemError(f"Cannot read directory {directory}: {e}") from e


def iter_media_files(root: str) -> Iterator[MediaCandidate]:
    """
    Yield media candidates below one root, depth-first.

    Symlinks are not followed. A directory that cannot be read is logged and
    its subtree skipped, the rest of the walk continues.

    Args:
        root: Directory to walk

    Yields:
        MediaCandidate for every regular media file, tagged with root
    """
    stack = [os.path.abspath(root)]

    while stack:
        directory = stack.pop()
        try:
            entries = _read_directory(directory)
        except FileSystemError as e:
            _logger.warning(f"Skipping subtree: {e}")
            continue

        subdirectories = []
        for entry in entries:
            try:
                if entry.is_dir(follow_symlinks=False):
                    subdirectories.append(entry.path)
                    continue
                if not entry.is_file(follow_symlinks=False):
                    continue
            except OSError as e:
                _logger.debug(f"Cannot inspect {entry.path}: {e}")
                continue

            if classify_media_type(entry.name) is not None:
                yield MediaCandidate(absolute_path=entry.path, origin_root=root)

        # Reverse so the first listed subdirectory is visited first
        stack.extend(reversed(subdirectories))


def find_media_files(root: str) -> list[MediaCandidate]:
    """
    Find all media files below a single root.

    Args:
        root: Directory path to search

    Returns:
        List of MediaCandidate objects
    """
    return list(iter_media_files(root))


def find_media_candidates(
    roots: list[str],
    max_workers: Optional[int] = None,
) -> list[MediaCandidate]:
    """
    Find media files below several roots.

    Each root is walked independently on its own thread. The candidate lists
    are concatenated in root order once every walk has finished.

    Args:
        roots: Directories to search
        max_workers: Thread count for walking roots (default: one per root)

    Returns:
        Concatenated list of MediaCandidate objects
    """
    if not roots:
        return []

    workers = max_workers or len(roots)
    with ThreadPoolExecutor(max_workers=workers) as executor:
        per_root = list(executor.map(find_media_files, roots))

    candidates = [candidate for found in per_root for candidate in found]
    _logger.info(f"Found {len(candidates):,} media files in {len(roots)} folder(s)")
    return candidates


__all__ = [
    'classify_media_type',
    'iter_media_files',
    'find_media_files',
    'find_media_candidates',
]
