"""Source tree scanning stage."""

import os
from pathlib import Path
from typing import Iterator, NoReturn
import logging

from .channel import HandoffChannel
from .errors import ScanError

logger = logging.getLogger(__name__)


class FileScanner:
    """Walks the source tree and emits every file it contains."""

    def __init__(self, root: Path) -> None:
        """
        Initialize scanner for a source directory.

        Args:
            root: Directory to walk recursively
        """
        self.root = Path(root)

    def scan(self) -> Iterator[Path]:
        """
        Lazily yield every non-directory entry below the root.

        Entries are visited in lexical order within each directory.
        Symlinked directories are not followed.

        Raises:
            ScanError: On the first directory that cannot be read
        """
        for dirpath, dirnames, filenames in os.walk(self.root, onerror=_raise_scan_error):
            dirnames.sort()
            for filename in sorted(filenames):
                yield Path(dirpath) / filename

    def run(self, output: HandoffChannel[Path]) -> int:
        """
        Feed all scanned paths into the next stage.

        Args:
            output: Channel read by the classifier; closed when the walk ends

        Returns:
            Number of files emitted
        """
        files_count = 0

        for path in self.scan():
            output.send(path)
            files_count += 1

        output.close()

        logger.info(f"Total files: {files_count}")
        return files_count


def _raise_scan_error(error: OSError) -> NoReturn:
    raise ScanError(f"cannot scan {error.filename}: {error.strerror}") from error
