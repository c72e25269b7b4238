"""Command-line interface for the image sorter."""

import argparse
import sys
from pathlib import Path
from typing import List, Optional
import logging

from .config import SorterConfig
from .errors import ConfigurationError
from .pipeline import ImageSorter

logger = logging.getLogger(__name__)


def main(argv: Optional[List[str]] = None) -> None:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    # Configure logging level
    if args.verbose:
        logging.getLogger("imgsort").setLevel(logging.DEBUG)

    config = SorterConfig(source=args.source, destination=args.destination)

    try:
        report = ImageSorter(config).run()
    except ConfigurationError as e:
        logger.error(f"Error: {e}")
        sys.exit(1)

    logger.info(
        f"Done: {report.files_scanned} files scanned, "
        f"{report.images_recognized} images recognized, "
        f"{report.files_moved} images moved"
    )


def create_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(
        prog="imgsort",
        description="Sort JPEG photos into <year>/<timestamp> folders by EXIF capture time",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --from /path/to/unsorted --to /path/to/sorted
  %(prog)s --from ~/DCIM --to ~/Pictures/by-date --verbose
        """
    )

    parser.add_argument(
        '--from',
        dest='source',
        type=_optional_path,
        default=None,
        help='Directory holding the unsorted images'
    )
    parser.add_argument(
        '--to',
        dest='destination',
        type=_optional_path,
        default=None,
        help='Directory receiving the sorted images (created if missing)'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose logging'
    )

    return parser


def _optional_path(value: str) -> Optional[Path]:
    # An empty flag value counts as not given
    return Path(value) if value else None


if __name__ == '__main__':
    main()
