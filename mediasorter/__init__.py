"""
Media Sorter
============
Offline review helper for photo and video folders.

Features:
- Recursive scanning of several folders at once
- SHA-256 content hash for exact duplicates
- dHash perceptual fingerprint for visually similar images
- Auto-flags for screenshots, tiny files and short videos
- Bounded worker pool with streamed progress and cooperative cancel
- Reversible removal through the system trash
- Web API and CLI front ends
"""

__version__ = "1.0.0"

from .models import (
    MediaType,
    AutoFlag,
    MediaCandidate,
    MediaItem,
    ScanProgress,
    TrashProgress,
    ScanResult,
    TrashResult,
    DuplicateGroup,
    SimilarGroup,
    SimilarMatch,
)
from .config import IMAGE_EXTENSIONS, VIDEO_EXTENSIONS, DEFAULT_THRESHOLD, DEFAULT_WORKERS
from .exceptions import (
    MediaSorterError,
    FileSystemError,
    StatError,
    ReadError,
    DecodeError,
    TrashError,
    SelectionCancelled,
)
from .scanner import (
    find_media_candidates,
    analyze_media,
    analyze_media_parallel,
    calculate_file_hash,
    calculate_dhash,
    calculate_perceptual_hash,
    hamming_distance,
    find_exact_duplicates,
    find_similar_groups,
)
from .trash import TrashExecutor, move_to_trash
from .api.orchestrator import scan, scan_selection
from .utils.content_ref import build_content_ref, resolve_content_ref

__all__ = [
    "MediaType",
    "AutoFlag",
    "MediaCandidate",
    "MediaItem",
    "ScanProgress",
    "TrashProgress",
    "ScanResult",
    "TrashResult",
    "DuplicateGroup",
    "SimilarGroup",
    "SimilarMatch",
    "IMAGE_EXTENSIONS",
    "VIDEO_EXTENSIONS",
    "DEFAULT_THRESHOLD",
    "DEFAULT_WORKERS",
    "MediaSorterError",
    "FileSystemError",
    "StatError",
    "ReadError",
    "DecodeError",
    "TrashError",
    "SelectionCancelled",
    "find_media_candidates",
    "analyze_media",
    "analyze_media_parallel",
    "calculate_file_hash",
    "calculate_dhash",
    "calculate_perceptual_hash",
    "hamming_distance",
    "find_exact_duplicates",
    "find_similar_groups",
    "TrashExecutor",
    "move_to_trash",
    "scan",
    "scan_selection",
    "build_content_ref",
    "resolve_content_ref",
]
