"""Shared fixtures and test configuration."""

import datetime
import tempfile
from pathlib import Path
from typing import Callable, Generator, Optional
import pytest
import piexif
from PIL import Image as PILImage


def write_jpeg(
    path: Path,
    taken: Optional[datetime.datetime] = None,
    tag: int = piexif.ExifIFD.DateTimeOriginal,
) -> Path:
    """
    Write a small JPEG, optionally carrying an EXIF capture time.

    Args:
        path: Where to write the file (any extension)
        taken: Capture time to embed; no EXIF block when None
        tag: DateTimeOriginal (EXIF IFD) or DateTime (IFD0)
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    image = PILImage.new("RGB", (8, 8), color=(200, 30, 30))

    if taken is None:
        image.save(path, format="JPEG")
        return path

    stamp = taken.strftime("%Y:%m:%d %H:%M:%S").encode("ascii")
    if tag == piexif.ImageIFD.DateTime:
        exif_dict = {"0th": {piexif.ImageIFD.DateTime: stamp}}
    else:
        exif_dict = {"Exif": {piexif.ExifIFD.DateTimeOriginal: stamp}}

    image.save(path, format="JPEG", exif=piexif.dump(exif_dict))
    return path


@pytest.fixture
def tmp_tree() -> Generator[Path, None, None]:
    """Temporary directory holding an empty source and no destination yet."""
    with tempfile.TemporaryDirectory() as temp_dir:
        temp_path = Path(temp_dir)
        (temp_path / "source").mkdir()
        yield temp_path


@pytest.fixture
def source_dir(tmp_tree: Path) -> Path:
    return tmp_tree / "source"


@pytest.fixture
def destination_dir(tmp_tree: Path) -> Path:
    return tmp_tree / "sorted"


@pytest.fixture
def make_jpeg() -> Callable[..., Path]:
    """Factory writing JPEG files with EXIF capture times."""
    return write_jpeg


@pytest.fixture
def mixed_source(source_dir: Path) -> Path:
    """
    Builds a nested source tree with a mix of files.

    Creates:
    - Dated JPEGs at several depths, with upper and lower case extensions
    - A JPEG without EXIF data
    - A dated JPEG saved under a .png name
    - A plain text file
    """
    write_jpeg(source_dir / "photo.JPG", datetime.datetime(2023, 3, 5, 14, 7, 9))
    write_jpeg(source_dir / "trip" / "beach.jpeg", datetime.datetime(2021, 7, 1, 9, 0, 0))
    write_jpeg(
        source_dir / "trip" / "day2" / "sunset.jpg",
        datetime.datetime(2021, 7, 2, 20, 15, 30),
        tag=piexif.ImageIFD.DateTime,
    )
    write_jpeg(source_dir / "scan.jpg")
    write_jpeg(source_dir / "renamed.png", datetime.datetime(2020, 1, 1, 0, 0, 0))
    (source_dir / "note.txt").write_text("not an image")
    return source_dir


@pytest.fixture
def oversized_gif() -> bytes:
    """
    A tiny GIF whose header declares a 65535x65535 canvas.

    The pixel count is far above Pillow's decompression bomb limit.
    """
    header = b"GIF89a" + (0xFFFF).to_bytes(2, "little") * 2 + b"\x00\x00\x00"
    descriptor = b"," + b"\x00\x00\x00\x00" + (0xFFFF).to_bytes(2, "little") * 2 + b"\x00"
    return header + descriptor + b"\x02\x02\x4c\x01\x00" + b";"
