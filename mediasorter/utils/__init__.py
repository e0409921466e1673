"""
Utilities package for Media Sorter.

Provides:
- formatters: Human-readable formatting for numbers, time, and file sizes
- validators: Input validation and security checks
- content_ref: Reversible content references for media items
"""

from __future__ import annotations

# Import submodules for convenient access
from . import formatters
from . import validators
from . import content_ref

# Export commonly used functions
from .formatters import format_number, format_progress, format_time_estimate, format_size
from .validators import (
    validate_path_in_roots,
    validate_directory,
    validate_threshold,
    validate_scan_params,
    validate_trash_paths,
)
from .content_ref import build_content_ref, resolve_content_ref

__all__ = [
    # Submodules
    'formatters',
    'validators',
    'content_ref',
    # Formatters
    'format_number',
    'format_progress',
    'format_time_estimate',
    'format_size',
    # Validators
    'validate_path_in_roots',
    'validate_directory',
    'validate_threshold',
    'validate_scan_params',
    'validate_trash_paths',
    # Content references
    'build_content_ref',
    'resolve_content_ref',
]
