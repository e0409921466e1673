"""
Data models for Media Sorter.

Contains dataclasses for discovered candidates, analyzed media items,
progress counters, operation results and duplicate groups.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional
import os


def format_size(size_bytes: int) -> str:
    """Format file size in human-readable form."""
    for unit in ['B', 'KB', 'MB', 'GB']:
        if size_bytes < 1024:
            return f"{size_bytes:.1f} {unit}"
        size_bytes /= 1024
    return f"{size_bytes:.1f} TB"


class MediaType(str, Enum):
    """Classification of a media file by extension."""
    IMAGE = 'image'
    VIDEO = 'video'


class AutoFlag(str, Enum):
    """Heuristic review hint attached to an item. Never triggers deletion."""
    SCREENSHOT = 'Screenshot'
    TOO_SMALL = 'TooSmall'
    SHORT_VIDEO = 'ShortVideo'


@dataclass(frozen=True)
class MediaCandidate:
    """
    A media file found during the folder walk, before analysis.

    Attributes:
        absolute_path: Full path to the file
        origin_root: The top-level root the walk started from
    """
    absolute_path: str
    origin_root: str


@dataclass
class MediaItem:
    """
    Stores metadata and fingerprints of an analyzed media file.

    Attributes:
        id: Identifier derived from the file name
        name: Final path segment
        path: Full path to the file
        content_ref: Opaque, reversible reference to the file bytes
        size_bytes: Size in bytes
        modified_at_epoch_ms: Modification time in milliseconds since epoch
        media_type: Image or video
        origin_root: Root folder the file was discovered under
        auto_flag: Review hint (screenshot, too small, short video)
        content_hash: SHA-256 hex digest (images only)
        perceptual_hash: 16-char dHash fingerprint (images only)
    """
    id: str
    name: str
    path: str
    content_ref: str
    size_bytes: int
    modified_at_epoch_ms: float
    media_type: MediaType
    origin_root: str
    auto_flag: Optional[AutoFlag] = None
    content_hash: Optional[str] = None
    perceptual_hash: Optional[str] = None

    def __hash__(self):
        return hash(self.path)

    def __eq__(self, other):
        if not isinstance(other, MediaItem):
            return False
        return self.path == other.path

    @property
    def directory(self) -> str:
        """Return the directory containing this file."""
        return os.path.dirname(self.path)

    @property
    def is_image(self) -> bool:
        return self.media_type == MediaType.IMAGE

    @property
    def size_formatted(self) -> str:
        """Return human-readable file size."""
        return format_size(self.size_bytes)

    def to_dict(self) -> dict:
        """Convert to the flat record exchanged with clients."""
        return {
            'id': self.id,
            'name': self.name,
            'path': self.path,
            'contentRef': self.content_ref,
            'sizeBytes': self.size_bytes,
            'modifiedAtEpochMs': self.modified_at_epoch_ms,
            'mediaType': self.media_type.value,
            'originRoot': self.origin_root,
            'autoFlag': self.auto_flag.value if self.auto_flag else None,
            'contentHash': self.content_hash,
            'perceptualHash': self.perceptual_hash,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'MediaItem':
        """Create MediaItem from a flat record."""
        auto_flag = data.get('autoFlag')
        return cls(
            id=data['id'],
            name=data['name'],
            path=data['path'],
            content_ref=data['contentRef'],
            size_bytes=data.get('sizeBytes', 0),
            modified_at_epoch_ms=data.get('modifiedAtEpochMs', 0),
            media_type=MediaType(data['mediaType']),
            origin_root=data['originRoot'],
            auto_flag=AutoFlag(auto_flag) if auto_flag else None,
            content_hash=data.get('contentHash'),
            perceptual_hash=data.get('perceptualHash'),
        )


@dataclass(frozen=True)
class ScanProgress:
    """Progress of a scan: candidates processed so far out of total."""
    loaded: int
    total: int

    def to_dict(self) -> dict:
        return {'loaded': self.loaded, 'total': self.total}


@dataclass(frozen=True)
class TrashProgress:
    """Progress of a trash run: paths processed so far out of total."""
    processed: int
    total: int

    def to_dict(self) -> dict:
        return {'processed': self.processed, 'total': self.total}


@dataclass
class ScanResult:
    """
    Final result of a scan.

    Attributes:
        roots: Root folders that were scanned
        items: Analyzed media items
        skipped_paths: Candidates dropped because they could not be read
        cancelled: True if the scan stopped early on request
    """
    roots: list = field(default_factory=list)
    items: list = field(default_factory=list)
    skipped_paths: list = field(default_factory=list)
    cancelled: bool = False

    def to_dict(self) -> dict:
        return {
            'roots': list(self.roots),
            'items': [item.to_dict() for item in self.items],
            'skippedPaths': list(self.skipped_paths),
            'cancelled': self.cancelled,
        }


@dataclass
class TrashResult:
    """Paths successfully moved to trash and paths that failed."""
    trashed_paths: list = field(default_factory=list)
    failed_paths: list = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            'trashedPaths': list(self.trashed_paths),
            'failedPaths': list(self.failed_paths),
        }


@dataclass
class DuplicateGroup:
    """
    A group of byte-identical media items.

    Attributes:
        id: Unique identifier for this group
        items: Items sharing one content hash
        match_type: How duplicates were detected
    """
    id: int
    items: list = field(default_factory=list)
    match_type: str = "exact"

    @property
    def item_count(self) -> int:
        """Number of items in this group."""
        return len(self.items)

    @property
    def content_hash(self) -> Optional[str]:
        return self.items[0].content_hash if self.items else None

    @property
    def potential_savings(self) -> int:
        """Bytes that could be saved by keeping only one copy."""
        if len(self.items) > 1:
            return sum(item.size_bytes for item in self.items[1:])
        return 0

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'id': self.id,
            'matchType': self.match_type,
            'contentHash': self.content_hash,
            'itemCount': self.item_count,
            'items': [item.to_dict() for item in self.items],
            'potentialSavings': self.potential_savings,
            'potentialSavingsFormatted': format_size(self.potential_savings),
        }


@dataclass
class SimilarMatch:
    """One near-duplicate of a base item."""
    item: MediaItem
    score: int
    distance: int

    def to_dict(self) -> dict:
        return {
            'item': self.item.to_dict(),
            'score': self.score,
            'distance': self.distance,
        }


@dataclass
class SimilarGroup:
    """
    A base item and the items whose fingerprints are close to it.

    Attributes:
        base: The item the matches were measured against
        matches: Similar items with their similarity score (0-100)
    """
    base: MediaItem
    matches: list = field(default_factory=list)

    @property
    def match_count(self) -> int:
        return len(self.matches)

    def to_dict(self) -> dict:
        return {
            'base': self.base.to_dict(),
            'matches': [match.to_dict() for match in self.matches],
        }
