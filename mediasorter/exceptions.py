"""
Exception hierarchy for Media Sorter.

Per-item failures are raised close to the file system and absorbed by the
batch operations (walker, hashing pool, trash executor), which turn them into
missing fields or entries in a failure list.
"""


class MediaSorterError(Exception):
    """Base exception for all Media Sorter errors."""
    pass


class FileSystemError(MediaSorterError):
    """Raised when a directory cannot be read during the folder walk."""
    pass


class StatError(MediaSorterError):
    """Raised when file metadata (size, modification time) cannot be read."""
    pass


class ReadError(MediaSorterError):
    """Raised when file content cannot be read for hashing."""
    pass


class DecodeError(MediaSorterError):
    """Raised when an image cannot be decoded or downscaled."""
    pass


class TrashError(MediaSorterError):
    """Raised when the platform trash operation fails for one path."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Failed to move to trash: {path} ({reason})")
        self.path = path
        self.reason = reason


class SelectionCancelled(MediaSorterError):
    """Raised by a folder-selection surface when the user cancels."""
    pass
