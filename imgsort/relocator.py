"""Relocation stage: moves images into the dated destination tree."""

import os
from pathlib import Path
from typing import Iterable
import logging

from .errors import RelocationError
from .image import Image

logger = logging.getLogger(__name__)


class ImageRelocator:
    """
    Moves images to <destination_root>/<year>/<timestamp><ext>.

    An existing file at the destination is replaced (os.replace), so the
    last image moved to a given name wins. Moves are renames: source and
    destination must be on the same filesystem.
    """

    def __init__(self, destination_root: Path) -> None:
        """
        Initialize relocator.

        Args:
            destination_root: Root of the sorted tree; created on demand
        """
        self.destination_root = Path(destination_root)

    def destination_for(self, image: Image) -> Path:
        return self.destination_root / image.destination_relative_path

    def relocate(self, image: Image) -> Path:
        """
        Move one image into place.

        Args:
            image: Image to move

        Returns:
            The path the image now lives at

        Raises:
            RelocationError: If the directory cannot be created or the move fails
        """
        destination = self.destination_for(image)

        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise RelocationError(
                f"cannot create directory {destination.parent}: {e}"
            ) from e

        if destination.exists() and not _same_file(image.source_path, destination):
            logger.warning(f"Replacing existing file {destination} with {image.source_path}")

        try:
            os.replace(image.source_path, destination)
        except OSError as e:
            raise RelocationError(
                f"cannot move {image.source_path} to {destination}: {e}"
            ) from e

        logger.debug(f"Moved {image.source_path} to {destination}")
        return destination

    def run(self, images: Iterable[Image]) -> int:
        """
        Move every image received from the classifier.

        Returns:
            Number of files moved
        """
        moved_count = 0

        for image in images:
            self.relocate(image)
            moved_count += 1

        logger.info(f"Moved images: {moved_count}")
        return moved_count


def _same_file(source: Path, destination: Path) -> bool:
    try:
        return os.path.samefile(source, destination)
    except OSError:
        return False
