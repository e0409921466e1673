"""
Media analysis module for the scanner package.

Turns a single MediaCandidate into a MediaItem: reads file metadata, assigns
the auto-flag and, for images, computes the content hash and the perceptual
fingerprint.
"""

from __future__ import annotations

import os
from typing import Optional

from ..config import SCREENSHOT_MARKER, SMALL_FILE_THRESHOLD, SHORT_VIDEO_THRESHOLD
from ..exceptions import StatError
from ..models import AutoFlag, MediaCandidate, MediaItem, MediaType
from ..utils.content_ref import build_content_ref
from .dependencies import _logger
from .file_discovery import classify_media_type
from .hashing import calculate_file_hash, calculate_perceptual_hash


def compute_auto_flag(
    name: str,
    size_bytes: int,
    media_type: MediaType,
    small_file_threshold: int = SMALL_FILE_THRESHOLD,
    short_video_threshold: int = SHORT_VIDEO_THRESHOLD,
) -> Optional[AutoFlag]:
    """
    Pick the review hint for a file, first matching rule wins.

    1. Name contains the screenshot marker (case-insensitive)
    2. Size below the small-file threshold
    3. Video below the short-video size threshold

    Returns:
        The matching AutoFlag, or None
    """
    if SCREENSHOT_MARKER in name.lower():
        return AutoFlag.SCREENSHOT
    if size_bytes < small_file_threshold:
        return AutoFlag.TOO_SMALL
    if media_type == MediaType.VIDEO and size_bytes < short_video_threshold:
        return AutoFlag.SHORT_VIDEO
    return None


def analyze_media(
    candidate: MediaCandidate,
    small_file_threshold: int = SMALL_FILE_THRESHOLD,
    short_video_threshold: int = SHORT_VIDEO_THRESHOLD,
) -> MediaItem:
    """
    Analyze a media file and extract metadata and fingerprints.

    Args:
        candidate: File found by the folder walk
        small_file_threshold: Size below which files are flagged TooSmall
        short_video_threshold: Size below which videos are flagged ShortVideo

    Returns:
        MediaItem with all extracted metadata

    Raises:
        StatError: If file metadata cannot be read
        ReadError: If an image's content cannot be read for hashing
        ValueError: If the candidate is not a media file
    """
    path = candidate.absolute_path
    media_type = classify_media_type(path)
    if media_type is None:
        raise ValueError(f"Not a media file: {path}")

    try:
        stat = os.stat(path)
    except OSError as e:
        raise StatError(f"Cannot stat {path}: {e}") from e

    name = os.path.basename(path)
    item = MediaItem(
        id=name,
        name=name,
        path=path,
        content_ref=build_content_ref(path),
        size_bytes=stat.st_size,
        modified_at_epoch_ms=stat.st_mtime_ns / 1_000_000,
        media_type=media_type,
        origin_root=candidate.origin_root,
        auto_flag=compute_auto_flag(
            name,
            stat.st_size,
            media_type,
            small_file_threshold=small_file_threshold,
            short_video_threshold=short_video_threshold,
        ),
    )

    # Videos are never fingerprinted
    if media_type == MediaType.IMAGE:
        item.content_hash = calculate_file_hash(path)
        item.perceptual_hash = calculate_perceptual_hash(path)
        if item.perceptual_hash is None:
            _logger.debug(f"No perceptual hash for {path}")

    return item


__all__ = ['compute_auto_flag', 'analyze_media']
