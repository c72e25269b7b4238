"""Pipeline driver wiring the scanner, classifier and relocator together."""

import os
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, NoReturn, Optional
import logging

from .channel import HandoffChannel
from .classifier import Decoder, ImageClassifier
from .config import SorterConfig
from .errors import FatalError
from .image import Image
from .relocator import ImageRelocator
from .scanner import FileScanner

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SortReport:
    """Counters of a finished run, one per stage."""

    files_scanned: int
    images_recognized: int
    files_moved: int


def halt_process(error: BaseException) -> NoReturn:
    """
    Log the error and terminate the process at once.

    No cleanup happens: queued work is dropped and files already moved
    stay where they are.
    """
    if isinstance(error, FatalError):
        logger.critical(f"{error}")
    else:
        logger.critical(f"Unexpected error: {error}", exc_info=error)
    os._exit(1)


class ImageSorter:
    """
    Runs the three stages concurrently and waits for all of them.

    Scanner -> Classifier -> Relocator, connected by zero-capacity
    handoff channels. Each stage closes its output when its input is
    exhausted.
    """

    def __init__(
        self,
        config: SorterConfig,
        decoder: Optional[Decoder] = None,
    ) -> None:
        """
        Initialize the sorter.

        Args:
            config: Source and destination of the run
            decoder: Metadata decoder passed to the classifier
        """
        self.config = config
        self.decoder = decoder

    def run(self) -> SortReport:
        """
        Validate the configuration and sort all images.

        Returns:
            Per-stage counters

        Raises:
            ConfigurationError: If the configuration is invalid; no stage runs
        """
        self.config.validate()

        source = Path(self.config.source)
        destination = Path(self.config.destination)
        logger.info(f"Sorting images from {source} into {destination}")

        files: HandoffChannel[Path] = HandoffChannel("files")
        images: HandoffChannel[Image] = HandoffChannel("images")

        scanner = FileScanner(source)
        classifier = ImageClassifier(self.decoder)
        relocator = ImageRelocator(destination)

        with ThreadPoolExecutor(max_workers=3, thread_name_prefix="imgsort") as executor:
            scanned = executor.submit(self._run_stage, scanner.run, files)
            recognized = executor.submit(self._run_stage, classifier.run, files, images)
            moved = executor.submit(self._run_stage, relocator.run, images)

            # Completion barrier
            wait([scanned, recognized, moved])

        return SortReport(
            files_scanned=scanned.result(),
            images_recognized=recognized.result(),
            files_moved=moved.result(),
        )

    def _run_stage(self, stage: Callable[..., int], *channels: HandoffChannel) -> int:
        try:
            return stage(*channels)
        except Exception as e:
            halt_process(e)
