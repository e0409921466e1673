"""
Scanner package for Media Sorter.

Provides folder walking, media analysis, the hashing worker pool and
duplicate / near-duplicate grouping.

Public API:
- find_media_candidates: Discover media files below several root folders
- find_media_files: Discover media files below one root folder
- classify_media_type: Image / video classification by extension
- calculate_file_hash: SHA-256 content hash of a file
- calculate_dhash: dHash fingerprint of a decoded image
- calculate_perceptual_hash: dHash fingerprint of an image file
- compute_auto_flag: Screenshot / too-small / short-video review hint
- analyze_media: Analyze a single candidate
- analyze_media_parallel: Analyze candidates with a bounded worker pool
- find_exact_duplicates: Group items by content hash
- find_similar_groups: Group items by fingerprint similarity
- hamming_distance / similarity_score: Fingerprint comparison
- has_heif_support: Check if HEIC/HEIF support is available
"""

from __future__ import annotations

from .file_discovery import classify_media_type, find_media_files, find_media_candidates
from .hashing import calculate_file_hash, calculate_dhash, calculate_perceptual_hash
from .analysis import compute_auto_flag, analyze_media
from .parallel import ClaimCursor, analyze_media_parallel
from .deduplication import (
    hamming_distance,
    similarity_score,
    find_exact_duplicates,
    find_similar_groups,
)

from .dependencies import HAS_HEIF_SUPPORT


def has_heif_support() -> bool:
    """Check if HEIC/HEIF support is available."""
    return HAS_HEIF_SUPPORT


__all__ = [
    # File discovery
    'classify_media_type',
    'find_media_files',
    'find_media_candidates',
    # Hashing
    'calculate_file_hash',
    'calculate_dhash',
    'calculate_perceptual_hash',
    # Analysis
    'compute_auto_flag',
    'analyze_media',
    'ClaimCursor',
    'analyze_media_parallel',
    # Grouping
    'hamming_distance',
    'similarity_score',
    'find_exact_duplicates',
    'find_similar_groups',
    # Feature detection
    'has_heif_support',
]
