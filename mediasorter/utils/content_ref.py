"""
Content reference encoding for the Media Sorter.

A content reference is an opaque string that lets a byte-source resolver find
the file behind a MediaItem. It is the scheme prefix followed by the fully
percent-encoded path, so decoding recovers the exact original path including
spaces, separators and non-ASCII characters.
"""

from __future__ import annotations

from urllib.parse import quote, unquote

from ..config import CONTENT_REF_SCHEME

_PREFIX = f"{CONTENT_REF_SCHEME}://"


def build_content_ref(path: str) -> str:
    """
    Build the content reference for a file path.

    Args:
        path: Absolute file path

    Returns:
        Reference string such as 'media://%2Fhome%2Fme%2Fa%20b.jpg'

    Examples:
        >>> build_content_ref('/tmp/a b.jpg')
        'media://%2Ftmp%2Fa%20b.jpg'
    """
    return _PREFIX + quote(path, safe='', errors='surrogateescape')


def resolve_content_ref(content_ref: str) -> str:
    """
    Recover the file path from a content reference.

    Args:
        content_ref: Reference produced by build_content_ref

    Returns:
        The original path

    Raises:
        ValueError: If the reference does not use the media scheme
    """
    if not content_ref.startswith(_PREFIX):
        raise ValueError(f"Not a {CONTENT_REF_SCHEME} reference: {content_ref}")
    return unquote(content_ref[len(_PREFIX):], errors='surrogateescape')


__all__ = ['build_content_ref', 'resolve_content_ref']
