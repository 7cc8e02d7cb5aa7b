"""Shared helpers used across the scanner."""

from .config import ScannerSettings, get_settings
from .html_utils import decode_html_entities
from .logging import configure_logging

__all__ = ["ScannerSettings", "get_settings", "configure_logging", "decode_html_entities"]
