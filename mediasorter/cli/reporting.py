"""
Report formatting and display for the CLI interface.

Provides functions to print scan and trash results in a human-readable
format.
"""

from __future__ import annotations

from collections import Counter

from ..models import (
    DuplicateGroup,
    MediaItem,
    ScanResult,
    SimilarGroup,
    TrashResult,
    format_size,
)


def _print_section_header(title: str) -> None:
    """Print a section header with divider lines."""
    print("\n" + "-" * 70)
    print(title)
    print("-" * 70)


def _describe(item: MediaItem) -> str:
    flag = f" [{item.auto_flag.value}]" if item.auto_flag else ""
    return f"{item.path} | {format_size(item.size_bytes)}{flag}"


def _print_exact_groups(groups: list[DuplicateGroup]) -> None:
    if not groups:
        return

    _print_section_header("EXACT DUPLICATES (identical content)")
    for i, group in enumerate(groups, 1):
        print(f"\nGroup {i} ({group.item_count} files, {group.content_hash[:12]}...):")
        for item in group.items:
            print(f"  {_describe(item)}")


def _print_similar_groups(groups: list[SimilarGroup]) -> None:
    if not groups:
        return

    _print_section_header("SIMILAR IMAGES (perceptual match)")
    for i, group in enumerate(groups, 1):
        print(f"\nGroup {i} ({group.match_count} matches):")
        print(f"  [BASE] {_describe(group.base)}")
        for match in group.matches:
            print(f"  [{match.score:3d}%] {_describe(match.item)}")


def print_scan_report(
    result: ScanResult,
    exact_groups: list[DuplicateGroup],
    similar_groups: list[SimilarGroup],
) -> None:
    """
    Print a report of a finished scan.

    Shows totals, auto-flag counts, exact groups, similar groups and the
    files that could not be read.
    """
    print("\n" + "=" * 70)
    print("MEDIA SCAN REPORT")
    print("=" * 70)

    images = sum(1 for item in result.items if item.is_image)
    print(f"\nFolders: {', '.join(result.roots) if result.roots else '(none)'}")
    print(f"Media files: {len(result.items)} ({images} images, {len(result.items) - images} videos)")

    flags = Counter(item.auto_flag.value for item in result.items if item.auto_flag)
    for flag, count in sorted(flags.items()):
        print(f"  {flag}: {count}")

    print(f"Exact duplicate groups: {len(exact_groups)}")
    print(f"Similar image groups: {len(similar_groups)}")
    if result.cancelled:
        print("Scan was cancelled before all files were processed.")

    _print_exact_groups(exact_groups)
    _print_similar_groups(similar_groups)

    if result.skipped_paths:
        _print_section_header("UNREADABLE FILES (skipped)")
        for path in result.skipped_paths:
            print(f"  {path}")

    total_waste = sum(group.potential_savings for group in exact_groups)
    print("\n" + "=" * 70)
    print(f"Space recoverable from exact duplicates: {format_size(total_waste)}")
    print("=" * 70)


def print_trash_report(result: TrashResult) -> None:
    """Print which paths were moved to trash and which failed."""
    _print_section_header(
        f"TRASH: {len(result.trashed_paths)} moved, {len(result.failed_paths)} failed"
    )
    for path in result.trashed_paths:
        print(f"  [OK]     {path}")
    for path in result.failed_paths:
        print(f"  [FAILED] {path}")


__all__ = ['print_scan_report', 'print_trash_report']
