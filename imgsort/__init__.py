"""Image Sorter - Move JPEG photos into a dated folder tree by EXIF capture time."""

import logging
import logging.handlers
import sys
from pathlib import Path

from .config import SorterConfig
from .pipeline import ImageSorter, SortReport
from .scanner import FileScanner
from .classifier import ImageClassifier
from .relocator import ImageRelocator
from .image import Image

# Configure logging
logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

# Create rotating file handler
log_file = Path("imgsort.log")
handler = logging.handlers.RotatingFileHandler(
    log_file, maxBytes=1024 * 1024, backupCount=5
)
formatter = logging.Formatter(
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
handler.setFormatter(formatter)
logger.addHandler(handler)

# Console handler
console_handler = logging.StreamHandler(sys.stdout)
console_handler.setFormatter(formatter)
logger.addHandler(console_handler)

__version__ = "1.0.0"

__all__ = [
    "SorterConfig",
    "ImageSorter",
    "SortReport",
    "FileScanner",
    "ImageClassifier",
    "ImageRelocator",
    "Image",
    "sort_images",
]


def sort_images(source: Path, destination: Path) -> SortReport:
    """Move every dated JPEG under source into the destination tree."""
    config = SorterConfig(source=Path(source), destination=Path(destination))
    return ImageSorter(config).run()
