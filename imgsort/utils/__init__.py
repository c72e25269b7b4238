"""Utility modules for the image sorter."""

from .exif import ExifTags, decode

__all__ = ["ExifTags", "decode"]
