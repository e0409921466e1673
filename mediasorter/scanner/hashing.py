"""
Hashing module for the scanner package.

Provides the cryptographic content hash used for exact duplicate detection
and the dHash perceptual fingerprint used for near-duplicate detection.
"""

from __future__ import annotations

import hashlib
from pathlib import Path
from typing import Optional

from ..config import DHASH_WIDTH, DHASH_HEIGHT, HASH_CHUNK_SIZE
from ..exceptions import DecodeError, ReadError
from .dependencies import Image, np, imagehash, _logger

# ITU-R 601-2 luma weights
_LUMA_WEIGHTS = (0.299, 0.587, 0.114)


def calculate_file_hash(filepath: str | Path, algorithm: str = 'sha256') -> str:
    """
    Calculate cryptographic hash of a file.

    Args:
        filepath: Path to the file
        algorithm: Hash algorithm to use (default: sha256)

    Returns:
        Lowercase hex digest of the full file content

    Raises:
        ReadError: If the file cannot be read
    """
    hasher = hashlib.new(algorithm)
    try:
        with open(filepath, 'rb') as f:
            for chunk in iter(lambda: f.read(HASH_CHUNK_SIZE), b''):
                hasher.update(chunk)
    except OSError as e:
        raise ReadError(f"Cannot read {filepath}: {e}") from e
    return hasher.hexdigest()


def _to_8bit(img: Image.Image) -> Image.Image:
    """Scale a 16-bit grayscale image down to 8-bit 'L' instead of clipping it."""
    wide = np.asarray(img, dtype=np.float64) / 256
    return Image.fromarray(np.clip(wide, 0, 255).astype(np.uint8))


def luminance_grid(img: Image.Image) -> np.ndarray:
    """
    Downscale an image to the dHash grid and convert it to luminance.

    Aspect ratio is ignored. Luminance is rounded half up to integers.

    Args:
        img: Decoded PIL image

    Returns:
        Integer array of shape (DHASH_HEIGHT, DHASH_WIDTH)
    """
    if img.mode == 'I' or img.mode.startswith('I;16'):
        img = _to_8bit(img)
    if img.mode != 'RGB':
        img = img.convert('RGB')
    small = img.resize((DHASH_WIDTH, DHASH_HEIGHT), Image.Resampling.LANCZOS)
    pixels = np.asarray(small, dtype=np.float64)
    luma = pixels @ np.array(_LUMA_WEIGHTS)
    return np.floor(luma + 0.5).astype(np.int64)


def calculate_dhash(img: Image.Image) -> str:
    """
    Calculate the dHash fingerprint of a decoded image.

    For every row of the 9x8 luminance grid a bit is set when a pixel is
    brighter than its right neighbour. The 64 bits are read row-major,
    leftmost first, and hex-encoded to 16 lowercase characters.

    Args:
        img: Decoded PIL image

    Returns:
        16-character lowercase hex string

    Raises:
        DecodeError: If the image cannot be converted or resized
    """
    try:
        grid = luminance_grid(img)
    except (OSError, ValueError) as e:
        raise DecodeError(f"Cannot downscale image: {e}") from e
    bits = grid[:, :-1] > grid[:, 1:]
    return str(imagehash.ImageHash(bits))


def calculate_perceptual_hash(filepath: str | Path) -> Optional[str]:
    """
    Calculate the dHash fingerprint of an image file.

    Decode and resize failures are not fatal: they are logged and the
    fingerprint is simply absent.

    Args:
        filepath: Path to the image

    Returns:
        16-character hex fingerprint, or None if the image cannot be decoded
    """
    try:
        with Image.open(filepath) as img:
            # Force load to detect truncated/corrupt images early
            img.load()
            return calculate_dhash(img)
    except DecodeError as e:
        _logger.debug(f"Perceptual hash failed for {filepath}: {e}")
        return None
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        _logger.debug(f"Cannot decode image {filepath}: {e}")
        return None


__all__ = [
    'calculate_file_hash',
    'luminance_grid',
    'calculate_dhash',
    'calculate_perceptual_hash',
]
