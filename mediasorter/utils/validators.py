"""
Input validation and security checks for Media Sorter.

Provides validators for root folders, scan parameters and trash requests.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional


def validate_path_in_roots(filepath: str, roots: list[str]) -> bool:
    """
    Validate that a file path lies inside one of the scanned roots.

    Prevents a trash request from reaching files the scan never saw.

    Args:
        filepath: Path to validate
        roots: Scanned root directories

    Returns:
        True if path is within any root, False otherwise

    Examples:
        >>> validate_path_in_roots('/home/user/photos/img.jpg', ['/home/user/photos'])
        True
        >>> validate_path_in_roots('/etc/passwd', ['/home/user/photos'])
        False
    """
    try:
        file_resolved = Path(filepath).resolve()
    except (OSError, RuntimeError):
        return False

    for root in roots:
        try:
            root_resolved = Path(root).resolve()
        except (OSError, RuntimeError):
            continue
        if file_resolved == root_resolved or root_resolved in file_resolved.parents:
            return True
    return False


def validate_directory(directory: str) -> tuple[bool, str]:
    """
    Validate that a directory exists and is accessible.

    Args:
        directory: Directory path to validate

    Returns:
        Tuple of (is_valid, error_message)

    Examples:
        >>> validate_directory('/nonexistent/directory')
        (False, 'Directory not found: /nonexistent/directory')
    """
    if not directory:
        return False, "Directory path is required"

    if not os.path.isabs(directory):
        return False, "Directory must be an absolute path"

    if not os.path.exists(directory):
        return False, f"Directory not found: {directory}"

    if not os.path.isdir(directory):
        return False, f"Path is not a directory: {directory}"

    if not os.access(directory, os.R_OK):
        return False, f"Cannot read directory (permission denied): {directory}"

    return True, ""


def validate_threshold(threshold: int) -> tuple[bool, str]:
    """
    Validate that a threshold value is within acceptable range.

    Args:
        threshold: Maximum Hamming distance (0-64 for a 64-bit dHash)

    Returns:
        Tuple of (is_valid, error_message)

    Examples:
        >>> validate_threshold(10)
        (True, '')
        >>> validate_threshold(100)
        (False, 'Threshold must be between 0 and 64')
    """
    try:
        threshold = int(threshold)
        if not 0 <= threshold <= 64:
            return False, "Threshold must be between 0 and 64"
        return True, ""
    except (ValueError, TypeError):
        return False, "Threshold must be an integer"


def validate_scan_params(
    roots: list[str],
    threshold: Optional[int] = None,
    workers: Optional[int] = None,
) -> tuple[bool, str]:
    """
    Validate all scan parameters.

    An empty root list is valid: it produces an empty scan.

    Args:
        roots: Directories to scan
        threshold: Similarity threshold (optional)
        workers: Number of hashing workers (optional)

    Returns:
        Tuple of (is_valid, error_message)

    Examples:
        >>> validate_scan_params(None)
        (False, 'Roots must be a list of directories')
    """
    if not isinstance(roots, list):
        return False, "Roots must be a list of directories"

    for root in roots:
        if not isinstance(root, str):
            return False, "Roots must be a list of directories"
        is_valid, error = validate_directory(root)
        if not is_valid:
            return False, error

    if threshold is not None:
        is_valid, error = validate_threshold(threshold)
        if not is_valid:
            return False, error

    if workers is not None:
        try:
            workers = int(workers)
            if not 1 <= workers <= 32:
                return False, "Workers must be between 1 and 32"
        except (ValueError, TypeError):
            return False, "Workers must be an integer"

    return True, ""


def validate_trash_paths(paths: list[str]) -> tuple[bool, str]:
    """
    Validate the shape of a trash request.

    Args:
        paths: Paths to trash

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not isinstance(paths, list):
        return False, "Paths must be a list"
    for path in paths:
        if not isinstance(path, str) or not os.path.isabs(path):
            return False, f"Paths must be absolute: {path!r}"
    return True, ""


__all__ = [
    'validate_path_in_roots',
    'validate_directory',
    'validate_threshold',
    'validate_scan_params',
    'validate_trash_paths',
]
