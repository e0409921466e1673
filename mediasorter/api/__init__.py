"""
API package for Media Sorter.

Provides the scan / trash operations and the Flask routes exposing them.
"""

from __future__ import annotations

from .orchestrator import scan, scan_selection, trash
from .routes import api

__all__ = ['api', 'scan', 'scan_selection', 'trash']
