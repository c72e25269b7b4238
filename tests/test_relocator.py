"""Tests for the ImageRelocator class."""

import datetime
from pathlib import Path
import pytest

from imgsort.errors import RelocationError
from imgsort.image import Image
from imgsort.relocator import ImageRelocator


def _image(path: Path, taken: datetime.datetime, content: bytes = b"jpeg") -> Image:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    return Image(source_path=path, extension=path.suffix, created_at=taken)


TAKEN = datetime.datetime(2023, 3, 5, 14, 7, 9)


class TestImageRelocator:
    """Test cases for ImageRelocator class."""

    def test_destination_for(self, destination_dir: Path) -> None:
        """Test that destinations are joined under the root."""
        image = Image(source_path=Path("x.jpg"), extension=".jpg", created_at=TAKEN)

        destination = ImageRelocator(destination_dir).destination_for(image)

        assert destination == destination_dir / "2023" / "2023.03.05_14.07.09.jpg"

    def test_file_movement(self, source_dir: Path, destination_dir: Path) -> None:
        """Test that the file is moved and the source no longer exists."""
        image = _image(source_dir / "photo.jpg", TAKEN)

        destination = ImageRelocator(destination_dir).relocate(image)

        assert destination.read_bytes() == b"jpeg"
        assert not image.source_path.exists()

    def test_directory_creation(self, source_dir: Path, tmp_tree: Path) -> None:
        """Test that missing intermediate directories are created."""
        root = tmp_tree / "deep" / "sorted"
        image = _image(source_dir / "photo.jpg", TAKEN)

        ImageRelocator(root).relocate(image)

        assert (root / "2023").is_dir()

    def test_existing_directory_tolerated(self, source_dir: Path, destination_dir: Path) -> None:
        """Test that a pre-existing year directory is not an error."""
        (destination_dir / "2023").mkdir(parents=True)
        image = _image(source_dir / "photo.jpg", TAKEN)

        ImageRelocator(destination_dir).relocate(image)

        assert (destination_dir / "2023" / "2023.03.05_14.07.09.jpg").exists()

    def test_existing_file_is_replaced(
        self, source_dir: Path, destination_dir: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test that the last image moved to a name wins and the overwrite is logged."""
        relocator = ImageRelocator(destination_dir)
        first = _image(source_dir / "a.jpg", TAKEN, b"first")
        second = _image(source_dir / "b.jpg", TAKEN, b"second")

        relocator.relocate(first)
        with caplog.at_level("WARNING", logger="imgsort"):
            destination = relocator.relocate(second)

        assert destination.read_bytes() == b"second"
        assert list((destination_dir / "2023").iterdir()) == [destination]
        assert "Replacing existing file" in caplog.text

    def test_directory_creation_failure_is_fatal(self, source_dir: Path, destination_dir: Path) -> None:
        """Test that a file blocking the year directory halts relocation."""
        destination_dir.mkdir()
        (destination_dir / "2023").write_bytes(b"in the way")
        image = _image(source_dir / "photo.jpg", TAKEN)

        with pytest.raises(RelocationError):
            ImageRelocator(destination_dir).relocate(image)

        assert image.source_path.exists()

    def test_missing_source_is_fatal(self, source_dir: Path, destination_dir: Path) -> None:
        """Test that a failed move raises instead of being skipped."""
        image = Image(source_path=source_dir / "gone.jpg", extension=".jpg", created_at=TAKEN)

        with pytest.raises(RelocationError):
            ImageRelocator(destination_dir).relocate(image)

    def test_run_counts_moves(
        self, source_dir: Path, destination_dir: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test that run moves every image and reports the total."""
        images = [
            _image(source_dir / "a.jpg", datetime.datetime(2020, 1, 1, 1, 1, 1)),
            _image(source_dir / "b.jpeg", datetime.datetime(2021, 2, 2, 2, 2, 2)),
        ]

        with caplog.at_level("INFO", logger="imgsort"):
            count = ImageRelocator(destination_dir).run(images)

        assert count == 2
        assert (destination_dir / "2020" / "2020.01.01_01.01.01.jpg").exists()
        assert (destination_dir / "2021" / "2021.02.02_02.02.02.jpeg").exists()
        assert "Moved images: 2" in caplog.text
