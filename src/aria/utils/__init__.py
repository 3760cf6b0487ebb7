"""Utility functions for Aria."""

from aria.utils.formats import SUPPORTED_EXTENSIONS, detect, is_supported

__all__ = ["detect", "is_supported", "SUPPORTED_EXTENSIONS"]
