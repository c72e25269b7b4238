"""EXIF decoding and capture time extraction."""

import datetime
import io
import struct
from typing import BinaryIO, Dict, Optional

import piexif
from PIL import Image, UnidentifiedImageError

from ..errors import MetadataError

# EXIF tag numbers
DATETIME_ORIGINAL = piexif.ExifIFD.DateTimeOriginal  # 36867
DATETIME = piexif.ImageIFD.DateTime  # 306
EXIF_IFD_POINTER = 0x8769

EXIF_DATETIME_FORMAT = "%Y:%m:%d %H:%M:%S"

_JPEG_MAGIC = b"\xff\xd8"
_EXIF_HEADER = b"Exif\x00\x00"

# JPEG markers
_APP1 = 0xE1
_END_MARKERS = (0xD9, 0xDA)  # EOI, SOS
_STANDALONE_MARKERS = (0x01, 0xD0, 0xD1, 0xD2, 0xD3, 0xD4, 0xD5, 0xD6, 0xD7)


class ExifTags:
    """Decoded EXIF tag set of a single file."""

    def __init__(self, ifd0: Dict[int, object], exif_ifd: Dict[int, object]) -> None:
        """
        Args:
            ifd0: Tags of the primary image directory
            exif_ifd: Tags of the EXIF sub-directory
        """
        self.ifd0 = ifd0
        self.exif_ifd = exif_ifd

    def capture_datetime(self) -> datetime.datetime:
        """
        Return the time the picture was taken.

        DateTimeOriginal is preferred; DateTime of the primary directory
        is used when it is missing.

        Raises:
            MetadataError: If neither tag holds a valid timestamp
        """
        value = self.exif_ifd.get(DATETIME_ORIGINAL)
        if value is None:
            value = self.ifd0.get(DATETIME)
        if value is None:
            raise MetadataError("no capture time in EXIF data")

        return _parse_exif_datetime(value)


def decode(file_obj: BinaryIO) -> ExifTags:
    """
    Decode the EXIF block of an open file.

    Only headers are read: JPEG segments are walked up to the EXIF
    segment, other containers are handed to Pillow, which reads lazily.

    Args:
        file_obj: Seekable binary file object positioned at the start of the file

    Returns:
        The decoded tag set

    Raises:
        MetadataError: If the file holds no parsable EXIF data
    """
    magic = file_obj.read(2)
    if not magic:
        raise MetadataError("empty file")
    file_obj.seek(0)

    if magic == _JPEG_MAGIC:
        return _decode_jpeg(file_obj)

    return _decode_pillow(file_obj)


def _read_jpeg_exif_segment(file_obj: BinaryIO) -> Optional[bytes]:
    """
    Walk JPEG markers until the EXIF APP1 segment.

    Returns:
        Segment payload starting with b"Exif\\x00\\x00", or None when the
        image data starts (or the file ends) first
    """
    file_obj.seek(2)
    while True:
        marker = file_obj.read(2)
        if len(marker) < 2 or marker[0] != 0xFF:
            return None
        if marker[1] == 0xFF:
            # Fill byte before the actual marker
            file_obj.seek(-1, io.SEEK_CUR)
            continue
        if marker[1] in _END_MARKERS:
            return None
        if marker[1] in _STANDALONE_MARKERS:
            continue

        length_bytes = file_obj.read(2)
        if len(length_bytes) < 2:
            return None
        (length,) = struct.unpack(">H", length_bytes)
        if length < 2:
            return None

        if marker[1] == _APP1:
            payload = file_obj.read(length - 2)
            if payload.startswith(_EXIF_HEADER):
                return payload
        else:
            file_obj.seek(length - 2, io.SEEK_CUR)


def _decode_jpeg(file_obj: BinaryIO) -> ExifTags:
    segment = _read_jpeg_exif_segment(file_obj)
    if segment is None:
        raise MetadataError("no EXIF data")

    try:
        exif_dict = piexif.load(segment)
    except (ValueError, struct.error, IndexError, KeyError, TypeError) as e:
        raise MetadataError(f"unreadable EXIF data: {e}") from e

    ifd0 = exif_dict.get("0th") or {}
    exif_ifd = exif_dict.get("Exif") or {}
    if not ifd0 and not exif_ifd:
        raise MetadataError("no EXIF data")

    return ExifTags(ifd0, exif_ifd)


def _decode_pillow(file_obj: BinaryIO) -> ExifTags:
    """Containers other than JPEG (TIFF, WebP, PNG, ...)."""
    try:
        with Image.open(file_obj) as img:
            exif = img.getexif()
            ifd0 = dict(exif)
            exif_ifd = dict(exif.get_ifd(EXIF_IFD_POINTER))
    except (
        UnidentifiedImageError,
        Image.DecompressionBombError,
        OSError,
        EOFError,
        ValueError,
        SyntaxError,
        struct.error,
        IndexError,
        KeyError,
        TypeError,
    ) as e:
        raise MetadataError(f"not an image with EXIF data: {e}") from e

    if not ifd0 and not exif_ifd:
        raise MetadataError("no EXIF data")

    return ExifTags(ifd0, exif_ifd)


def _parse_exif_datetime(value: object) -> datetime.datetime:
    """
    Parse EXIF datetime value.

    Args:
        value: EXIF datetime as bytes or str (format: "YYYY:MM:DD HH:MM:SS")

    Raises:
        MetadataError: If the value is not a valid timestamp
    """
    if isinstance(value, bytes):
        try:
            value = value.decode("ascii")
        except UnicodeDecodeError as e:
            raise MetadataError(f"invalid EXIF datetime: {value!r}") from e

    if not isinstance(value, str):
        raise MetadataError(f"invalid EXIF datetime: {value!r}")

    # Cameras pad the field with NULs or spaces
    text = value.strip("\x00 \t")
    try:
        return datetime.datetime.strptime(text, EXIF_DATETIME_FORMAT)
    except ValueError as e:
        raise MetadataError(f"invalid EXIF datetime: {text!r}") from e

