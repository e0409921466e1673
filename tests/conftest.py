"""
Pytest configuration and shared fixtures for test suite.
"""

import pytest
import tempfile
import shutil
from pathlib import Path
from PIL import Image


@pytest.fixture(autouse=True)
def isolated_user_config(tmp_path, monkeypatch):
    """Keep tests away from the real ~/.mediasorter config and history."""
    from mediasorter.user_config import get_user_config

    monkeypatch.setenv('MEDIASORTER_CONFIG_DIR', str(tmp_path / 'config'))
    monkeypatch.setenv('MEDIASORTER_HISTORY_FILE', str(tmp_path / 'history.json'))
    get_user_config().reload()
    yield
    get_user_config().reload()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir)
    shutil.rmtree(tmpdir, ignore_errors=True)


def make_gradient_image(path: Path, size=(90, 80), reverse=False) -> Path:
    """Save an RGB image whose brightness falls (or rises) left to right."""
    width, height = size
    img = Image.new('RGB', size)
    for x in range(width):
        value = int(255 * x / (width - 1))
        if not reverse:
            value = 255 - value
        for y in range(height):
            img.putpixel((x, y), (value, value, value))
    img.save(path)
    return path


@pytest.fixture
def media_tree(temp_dir):
    """
    Create a folder tree with media and non-media files.

    Layout:
        root/
            red1.png, red2.png     identical bytes
            blue.png               unique image
            Screenshot_01.png      screenshot marker in name
            notes.txt              not media
            clip.MP4               small video (upper-case extension)
            nested/deeper/
                gradient.JPG       image two levels down
            nested/broken.png      not decodable
    """
    root = temp_dir / "root"
    deeper = root / "nested" / "deeper"
    deeper.mkdir(parents=True)

    red = Image.new('RGB', (64, 64), color='red')
    red.save(root / "red1.png")
    (root / "red2.png").write_bytes((root / "red1.png").read_bytes())

    Image.new('RGB', (64, 64), color='blue').save(root / "blue.png")
    Image.new('RGB', (32, 32), color='white').save(root / "Screenshot_01.png")

    (root / "notes.txt").write_text("not media")
    (root / "clip.MP4").write_bytes(b"\x00" * 1024)

    gradient = make_gradient_image(deeper / "gradient.png")
    gradient.rename(deeper / "gradient.JPG")

    (root / "nested" / "broken.png").write_bytes(b"definitely not a png")

    return root


@pytest.fixture
def make_item():
    """Factory for MediaItem objects without touching the file system."""
    from mediasorter.models import MediaItem, MediaType
    from mediasorter.utils.content_ref import build_content_ref

    def _make(name, content_hash=None, perceptual_hash=None,
              media_type=MediaType.IMAGE, size_bytes=500_000, root="/photos"):
        path = f"{root}/{name}"
        return MediaItem(
            id=name,
            name=name,
            path=path,
            content_ref=build_content_ref(path),
            size_bytes=size_bytes,
            modified_at_epoch_ms=1_700_000_000_000,
            media_type=media_type,
            origin_root=root,
            content_hash=content_hash,
            perceptual_hash=perceptual_hash,
        )

    return _make
