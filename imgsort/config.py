"""Run configuration and its validation."""

import os
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
import logging

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

# Only JPEG files are sorted (compared case-insensitively)
IMAGE_EXTENSIONS = frozenset({'.jpg', '.jpeg'})


@dataclass(frozen=True)
class SorterConfig:
    """
    Source and destination of a single sorting run.

    Built once at startup and handed to the pipeline; stages only
    receive the directory they work on.
    """

    source: Optional[Path]
    destination: Optional[Path]

    def validate(self) -> None:
        """
        Check that the run can start.

        Raises:
            ConfigurationError: If a directory is missing or unusable
        """
        if not self.source:
            raise ConfigurationError("source directory is not specified")
        if not self.destination:
            raise ConfigurationError("destination directory is not specified")

        try:
            source_stat = os.stat(self.source)
        except OSError as e:
            raise ConfigurationError(f"cannot access source directory: {e}") from e

        if not stat.S_ISDIR(source_stat.st_mode):
            raise ConfigurationError(f"source is not a directory: {self.source}")

        # The destination is created on demand, but must be reachable if present
        try:
            os.stat(self.destination)
        except FileNotFoundError:
            logger.debug(f"Destination {self.destination} will be created")
        except OSError as e:
            raise ConfigurationError(f"cannot access destination directory: {e}") from e
