"""
Deduplication module for the scanner package.

Groups analyzed media items into exact duplicates (same content hash) and
near-duplicates (dHash fingerprints within a Hamming distance threshold).
Everything here is pure: no file access, no threads.
"""

from __future__ import annotations

import math
from collections import defaultdict
from typing import Optional

from ..config import BUCKET_PREFIX_LENGTH, DEFAULT_THRESHOLD
from ..models import DuplicateGroup, MediaItem, SimilarGroup, SimilarMatch
from .dependencies import imagehash

HASH_BITS = 64


def hamming_distance(hash_a: Optional[str], hash_b: Optional[str]) -> int:
    """
    Count the differing bits between two 64-bit hex fingerprints.

    Args:
        hash_a: 16-character hex fingerprint
        hash_b: 16-character hex fingerprint

    Returns:
        Number of differing bits (0-64)

    Raises:
        ValueError: If either fingerprint is missing
    """
    if not hash_a or not hash_b:
        raise ValueError("Hamming distance needs two defined fingerprints")
    return int(imagehash.hex_to_hash(hash_a) - imagehash.hex_to_hash(hash_b))


def similarity_score(distance: int) -> int:
    """
    Convert a Hamming distance into a 0-100 similarity score.

    Examples:
        >>> similarity_score(0)
        100
        >>> similarity_score(10)
        84
    """
    # Round half up
    return math.floor((1 - distance / HASH_BITS) * 100 + 0.5)


def find_exact_duplicates(
    items: list[MediaItem],
    start_id: int = 1,
) -> list[DuplicateGroup]:
    """
    Find exact duplicate files based on content hash.

    Args:
        items: List of MediaItem objects to check
        start_id: Starting ID for duplicate groups

    Returns:
        List of DuplicateGroup objects containing exact duplicates
    """
    # Group by content hash
    hash_groups: dict[str, list[MediaItem]] = defaultdict(list)

    for item in items:
        if item.content_hash:
            hash_groups[item.content_hash].append(item)

    groups = []
    group_id = start_id

    for group_items in hash_groups.values():
        if len(group_items) > 1:
            groups.append(DuplicateGroup(id=group_id, items=group_items, match_type="exact"))
            group_id += 1

    return groups


def find_similar_groups(
    items: list[MediaItem],
    threshold: int = DEFAULT_THRESHOLD,
    prefix_length: int = BUCKET_PREFIX_LENGTH,
) -> list[SimilarGroup]:
    """
    Find visually similar images using their dHash fingerprints.

    Items are bucketed by the first hex characters of their fingerprint and
    only pairs inside a bucket are compared. Close fingerprints that differ
    in that prefix are therefore never matched.

    Every item with at least one match becomes the base of its own group, so
    both members of a similar pair appear as a base.

    Args:
        items: List of MediaItem objects to check
        threshold: Maximum Hamming distance for similarity (0-64)
        prefix_length: Number of leading hex characters used as bucket key

    Returns:
        SimilarGroup list ordered by descending match count, ties in
        first-seen order
    """
    candidates = [item for item in items if item.perceptual_hash]

    buckets: dict[str, list[int]] = defaultdict(list)
    for index, item in enumerate(candidates):
        buckets[item.perceptual_hash[:prefix_length]].append(index)

    matches: dict[int, list[SimilarMatch]] = defaultdict(list)

    for members in buckets.values():
        for pos, i in enumerate(members):
            for j in members[pos + 1:]:
                distance = hamming_distance(
                    candidates[i].perceptual_hash,
                    candidates[j].perceptual_hash,
                )
                if distance > threshold:
                    continue
                score = similarity_score(distance)
                matches[i].append(SimilarMatch(item=candidates[j], score=score, distance=distance))
                matches[j].append(SimilarMatch(item=candidates[i], score=score, distance=distance))

    groups = [
        SimilarGroup(base=candidates[index], matches=matches[index])
        for index in sorted(matches)
    ]
    groups.sort(key=lambda group: -group.match_count)
    return groups


__all__ = [
    'HASH_BITS',
    'hamming_distance',
    'similarity_score',
    'find_exact_duplicates',
    'find_similar_groups',
]
