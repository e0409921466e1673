"""
User configuration management for Media Sorter.

Each setting is resolved from, in order of priority:
1. Its MEDIASORTER_* environment variable
2. The user config file (~/.mediasorter/config.json)
3. The default from config.py

Example config.json:
{
    "default_threshold": 10,
    "default_workers": 4,
    "small_file_threshold": 204800,
    "short_video_threshold": 5242880,
    "max_image_pixels": 500000000,
    "history_file": null
}
"""

import json
import os
from pathlib import Path
from typing import Any, Optional
import logging

from .config import (
    DEFAULT_THRESHOLD,
    DEFAULT_WORKERS,
    SMALL_FILE_THRESHOLD,
    SHORT_VIDEO_THRESHOLD,
    HISTORY_FILE,
)

logger = logging.getLogger(__name__)

# setting name -> (environment variable, default)
SETTINGS = {
    'default_threshold': ('MEDIASORTER_THRESHOLD', DEFAULT_THRESHOLD),
    'default_workers': ('MEDIASORTER_WORKERS', DEFAULT_WORKERS),
    'small_file_threshold': ('MEDIASORTER_SMALL_FILE_THRESHOLD', SMALL_FILE_THRESHOLD),
    'short_video_threshold': ('MEDIASORTER_SHORT_VIDEO_THRESHOLD', SHORT_VIDEO_THRESHOLD),
    'max_image_pixels': ('MEDIASORTER_MAX_PIXELS', 500_000_000),
    'history_file': ('MEDIASORTER_HISTORY_FILE', None),
}


class UserConfig:
    """
    Resolves user settings from environment, config file and defaults.

    The config file is read once and cached until reload() is called.
    Environment variables are read on every access.
    """

    _instance: Optional['UserConfig'] = None
    _file_data: Optional[dict] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @property
    def config_dir(self) -> Path:
        env_dir = os.getenv('MEDIASORTER_CONFIG_DIR')
        return Path(env_dir) if env_dir else Path.home() / '.mediasorter'

    @property
    def config_file_path(self) -> Path:
        return self.config_dir / 'config.json'

    def _file_settings(self) -> dict:
        if self._file_data is None:
            self._file_data = {}
            path = self.config_file_path
            if path.exists():
                try:
                    with open(path, 'r', encoding='utf-8') as f:
                        self._file_data = json.load(f)
                    logger.debug(f"Loaded configuration from {path}")
                except (OSError, json.JSONDecodeError) as e:
                    logger.warning(f"Ignoring unreadable config file {path}: {e}")
        return self._file_data

    def reload(self):
        """Forget the cached config file so the next access re-reads it."""
        self._file_data = None

    def get(self, name: str) -> Any:
        """
        Resolve one setting.

        Numeric defaults make the environment value parse as an int; an
        unparsable value is logged and ignored.
        """
        env_var, default = SETTINGS[name]
        raw = os.getenv(env_var)
        if raw is not None:
            if isinstance(default, int):
                try:
                    return int(raw)
                except ValueError:
                    logger.warning(f"Ignoring {env_var}={raw!r}: not an integer")
            else:
                return raw

        file_settings = self._file_settings()
        if file_settings.get(name) is not None:
            return file_settings[name]
        return default

    def as_dict(self) -> dict:
        """All resolved settings, for display."""
        return {name: self.get(name) for name in SETTINGS}

    @property
    def default_threshold(self) -> int:
        """Maximum Hamming distance for similar images (0-64)."""
        return self.get('default_threshold')

    @property
    def default_workers(self) -> int:
        """Number of concurrent hashing workers."""
        return self.get('default_workers')

    @property
    def small_file_threshold(self) -> int:
        """Files below this many bytes are flagged TooSmall."""
        return self.get('small_file_threshold')

    @property
    def short_video_threshold(self) -> int:
        """Videos below this many bytes are flagged ShortVideo."""
        return self.get('short_video_threshold')

    @property
    def max_image_pixels(self) -> int:
        """Decompression bomb limit handed to Pillow."""
        return self.get('max_image_pixels')

    @property
    def history_file(self) -> str:
        """Path to the recent-roots history file."""
        return self.get('history_file') or HISTORY_FILE

    def create_example_config(self) -> bool:
        """Write config.json with every setting at its default value."""
        example = {'_comment': 'Media Sorter user configuration'}
        example.update({name: default for name, (_, default) in SETTINGS.items()})

        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            with open(self.config_file_path, 'w', encoding='utf-8') as f:
                json.dump(example, f, indent=2)
        except OSError as e:
            logger.error(f"Failed to create example config: {e}")
            return False
        logger.info(f"Created example config file at {self.config_file_path}")
        return True


_user_config = UserConfig()


def get_user_config() -> UserConfig:
    """Get the global UserConfig instance."""
    return _user_config
