"""
Configuration constants for Media Sorter.

This module contains all configurable settings including:
- Supported image and video extensions
- Auto-flag thresholds used to pre-mark files for review
- Defaults for similarity matching and the hashing worker pool
"""

import os

# Image extensions that are hashed and fingerprinted
IMAGE_EXTENSIONS = {
    '.jpg', '.jpeg', '.png', '.gif', '.webp', '.bmp', '.tiff', '.tif',
    '.heic', '.heif',
}

# Video extensions are collected and flagged but never hashed
VIDEO_EXTENSIONS = {
    '.mp4', '.mov', '.mkv', '.avi', '.webm', '.m4v',
}

# Formats that need pillow-heif to decode
HEIF_EXTENSIONS = {'.heic', '.heif'}

# Case-insensitive file name marker for the Screenshot flag
SCREENSHOT_MARKER = 'screenshot'

# Files below this size are flagged TooSmall (bytes)
SMALL_FILE_THRESHOLD = 200 * 1024

# Videos below this size are flagged ShortVideo.
# File size stands in for duration, no container parsing is done.
SHORT_VIDEO_THRESHOLD = 5 * 1024 * 1024

# Default similarity threshold for dHash matching
# Maximum Hamming distance out of 64 bits
DEFAULT_THRESHOLD = 10

# Number of leading hex characters used to bucket fingerprints
BUCKET_PREFIX_LENGTH = 4

# Default number of concurrent hashing workers
DEFAULT_WORKERS = 4

# Chunk size used when streaming file content into the digest
HASH_CHUNK_SIZE = 65536

# dHash grid: one extra column so every row yields 8 gradient bits
DHASH_WIDTH = 9
DHASH_HEIGHT = 8

# Scheme prefix of the opaque content reference
CONTENT_REF_SCHEME = 'media'

# Directory history file (recently scanned roots)
HISTORY_FILE = os.path.join(os.path.expanduser('~'), '.mediasorter_history.json')
