"""
Unit tests for data models and small utilities.
"""

import pytest

from mediasorter.models import (
    AutoFlag,
    DuplicateGroup,
    MediaItem,
    MediaType,
    ScanProgress,
    ScanResult,
    TrashResult,
    format_size,
)
from mediasorter.utils.content_ref import build_content_ref, resolve_content_ref
from mediasorter.utils.formatters import format_number, format_progress, format_time_estimate
from mediasorter.utils.validators import (
    validate_path_in_roots,
    validate_scan_params,
    validate_threshold,
    validate_trash_paths,
)


class TestFormatSize:
    """Test format_size function."""

    def test_bytes(self):
        assert format_size(500) == "500.0 B"

    def test_kilobytes(self):
        assert format_size(1024) == "1.0 KB"
        assert format_size(1536) == "1.5 KB"

    def test_megabytes(self):
        assert format_size(1024 * 1024) == "1.0 MB"

    def test_gigabytes(self):
        assert format_size(1024 * 1024 * 1024) == "1.0 GB"


class TestMediaItem:
    """Test MediaItem dataclass."""

    def test_flat_record_keys(self, make_item):
        """The exchanged record uses the documented field names."""
        item = make_item("a.jpg", content_hash="abc", perceptual_hash="0" * 16)
        item.auto_flag = AutoFlag.SCREENSHOT

        data = item.to_dict()

        assert data == {
            'id': 'a.jpg',
            'name': 'a.jpg',
            'path': '/photos/a.jpg',
            'contentRef': build_content_ref('/photos/a.jpg'),
            'sizeBytes': 500_000,
            'modifiedAtEpochMs': 1_700_000_000_000,
            'mediaType': 'image',
            'originRoot': '/photos',
            'autoFlag': 'Screenshot',
            'contentHash': 'abc',
            'perceptualHash': '0000000000000000',
        }

    def test_video_record_has_no_hashes(self, make_item):
        item = make_item("clip.mp4", media_type=MediaType.VIDEO)
        data = item.to_dict()
        assert data['mediaType'] == 'video'
        assert data['contentHash'] is None
        assert data['perceptualHash'] is None
        assert data['autoFlag'] is None

    def test_from_dict_restores_item(self, make_item):
        item = make_item("b.png", content_hash="ff", perceptual_hash="1" * 16)
        item.auto_flag = AutoFlag.TOO_SMALL

        restored = MediaItem.from_dict(item.to_dict())

        assert restored == item
        assert restored.auto_flag == AutoFlag.TOO_SMALL
        assert restored.media_type == MediaType.IMAGE
        assert restored.perceptual_hash == "1" * 16

    def test_equality_by_path(self, make_item):
        """Items with the same path are equal whatever their other fields."""
        first = make_item("a.jpg", content_hash="x")
        second = make_item("a.jpg", content_hash="y")
        assert first == second
        assert len({first, second}) == 1

    def test_properties(self, make_item):
        item = make_item("a.jpg", size_bytes=2048)
        assert item.directory == "/photos"
        assert item.is_image
        assert item.size_formatted == "2.0 KB"


class TestResults:
    """Test progress and result containers."""

    def test_scan_progress_dict(self):
        assert ScanProgress(loaded=3, total=7).to_dict() == {'loaded': 3, 'total': 7}

    def test_scan_result_dict(self, make_item):
        result = ScanResult(roots=['/photos'], items=[make_item("a.jpg")], skipped_paths=['/photos/x.jpg'])
        data = result.to_dict()
        assert data['roots'] == ['/photos']
        assert [i['name'] for i in data['items']] == ['a.jpg']
        assert data['skippedPaths'] == ['/photos/x.jpg']
        assert data['cancelled'] is False

    def test_trash_result_dict(self):
        result = TrashResult(trashed_paths=['/a'], failed_paths=['/b'])
        assert result.to_dict() == {'trashedPaths': ['/a'], 'failedPaths': ['/b']}

    def test_duplicate_group_savings(self, make_item):
        group = DuplicateGroup(id=1, items=[
            make_item("a.jpg", content_hash="h", size_bytes=1000),
            make_item("b.jpg", content_hash="h", size_bytes=1000),
            make_item("c.jpg", content_hash="h", size_bytes=1000),
        ])
        assert group.item_count == 3
        assert group.content_hash == "h"
        assert group.potential_savings == 2000
        assert group.to_dict()['potentialSavingsFormatted'] == "2.0 KB"


class TestContentRef:
    """Test content reference encoding."""

    @pytest.mark.parametrize("path", [
        "/home/me/Pictures/IMG_0001.jpg",
        "/home/me/My Photos/summer holiday.png",
        "/home/me/Fotos/Größe & Café #1.jpg",
        "/home/me/写真/東京?.heic",
        "/tmp/100%/a+b=c.gif",
    ])
    def test_reference_recovers_path(self, path):
        ref = build_content_ref(path)
        assert ref.startswith("media://")
        assert resolve_content_ref(ref) == path

    def test_reference_is_fully_encoded(self):
        ref = build_content_ref("/tmp/a b.jpg")
        assert ref == "media://%2Ftmp%2Fa%20b.jpg"

    def test_foreign_reference_rejected(self):
        with pytest.raises(ValueError):
            resolve_content_ref("file:///tmp/a.jpg")


class TestFormatters:
    """Test human-readable formatting helpers."""

    def test_format_number(self):
        assert format_number(1234567) == "1,234,567"

    def test_format_progress(self):
        assert format_progress(5, 20) == "5/20 (25%)"
        assert format_progress(0, 0) == "0/0 (100%)"

    def test_format_time_estimate(self):
        assert format_time_estimate(45) == "45s"
        assert format_time_estimate(150) == "2m 30s"
        assert format_time_estimate(3665) == "1h 1m"


class TestValidators:
    """Test input validators."""

    def test_path_in_roots(self, temp_dir):
        root = temp_dir / "photos"
        root.mkdir()
        assert validate_path_in_roots(str(root / "a.jpg"), [str(root)])
        assert not validate_path_in_roots(str(temp_dir / "other" / "a.jpg"), [str(root)])

    def test_path_traversal_rejected(self, temp_dir):
        root = temp_dir / "photos"
        root.mkdir()
        sneaky = str(root / ".." / "secret.jpg")
        assert not validate_path_in_roots(sneaky, [str(root)])

    def test_sibling_prefix_rejected(self, temp_dir):
        """'/x/photos2' is not inside '/x/photos'."""
        root = temp_dir / "photos"
        root.mkdir()
        assert not validate_path_in_roots(str(temp_dir / "photos2" / "a.jpg"), [str(root)])

    def test_threshold_range(self):
        assert validate_threshold(0) == (True, "")
        assert validate_threshold(64) == (True, "")
        assert validate_threshold(65)[0] is False
        assert validate_threshold("abc") == (False, "Threshold must be an integer")

    def test_scan_params(self, temp_dir):
        assert validate_scan_params([]) == (True, "")
        assert validate_scan_params([str(temp_dir)], threshold=10, workers=4) == (True, "")
        assert validate_scan_params(None)[0] is False
        assert validate_scan_params("/tmp")[0] is False
        assert validate_scan_params([str(temp_dir / "missing")])[0] is False
        assert validate_scan_params(["relative/path"])[0] is False
        assert validate_scan_params([str(temp_dir)], workers=0)[0] is False

    def test_trash_paths(self):
        assert validate_trash_paths([]) == (True, "")
        assert validate_trash_paths(["/a.jpg"]) == (True, "")
        assert validate_trash_paths(None)[0] is False
        assert validate_trash_paths(["a.jpg"])[0] is False
        assert validate_trash_paths([42])[0] is False
