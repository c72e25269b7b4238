"""Classification stage: turns scanned paths into dated images."""

from pathlib import Path
from typing import BinaryIO, Callable, Iterable, Iterator, Optional
import logging

from .channel import HandoffChannel
from .config import IMAGE_EXTENSIONS
from .errors import FileOpenError, MetadataError
from .image import Image
from .utils import exif

logger = logging.getLogger(__name__)

Decoder = Callable[[BinaryIO], exif.ExifTags]


class ImageClassifier:
    """Keeps only JPEG files that carry an EXIF capture time."""

    def __init__(self, decoder: Optional[Decoder] = None) -> None:
        """
        Initialize classifier.

        Args:
            decoder: Metadata decoder; defaults to the EXIF decoder
        """
        self.decoder = decoder or exif.decode

    def classify_file(self, path: Path) -> Optional[Image]:
        """
        Build an Image for a single file.

        Files without metadata, without a capture time or with an
        extension outside IMAGE_EXTENSIONS are skipped.

        Args:
            path: File to examine

        Returns:
            Image record, or None if the file is skipped

        Raises:
            FileOpenError: If the file cannot be opened
        """
        path = Path(path)

        try:
            file_obj = open(path, "rb")
        except OSError as e:
            raise FileOpenError(f"cannot open {path}: {e.strerror}") from e

        with file_obj:
            try:
                created_at = self.decoder(file_obj).capture_datetime()
            except MetadataError as e:
                logger.debug(f"Skipping {path}: {e}")
                return None

        extension = path.suffix
        if extension.lower() not in IMAGE_EXTENSIONS:
            logger.debug(f"Skipping {path}: unsupported extension {extension!r}")
            return None

        return Image(source_path=path, extension=extension, created_at=created_at)

    def classify(self, paths: Iterable[Path]) -> Iterator[Image]:
        """Yield an Image for every recognized path, in input order."""
        for path in paths:
            image = self.classify_file(path)
            if image is not None:
                yield image

    def run(self, files: HandoffChannel[Path], output: HandoffChannel[Image]) -> int:
        """
        Consume scanned paths and feed recognized images to the relocator.

        Args:
            files: Channel written by the scanner
            output: Channel read by the relocator; closed when files is drained

        Returns:
            Number of recognized images
        """
        images_count = 0

        for image in self.classify(files):
            output.send(image)
            images_count += 1

        output.close()

        logger.info(f"Recognized images: {images_count}")
        return images_count
