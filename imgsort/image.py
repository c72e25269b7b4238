"""Image record handed from the classifier to the relocator."""

import datetime
from dataclasses import dataclass, field
from pathlib import Path, PurePath


def destination_name(created_at: datetime.datetime, extension: str) -> PurePath:
    """
    Build the path of an image relative to the destination root.

    The layout is <year>/<year>.<month>.<day>_<hour>.<minute>.<second><ext>
    with every numeric field padded to at least two digits.

    Args:
        created_at: Capture time of the image
        extension: File suffix including the leading dot

    Returns:
        Relative destination path
    """
    directory = f"{created_at.year:02d}"
    filename = (
        f"{created_at.year:02d}.{created_at.month:02d}.{created_at.day:02d}"
        f"_{created_at.hour:02d}.{created_at.minute:02d}.{created_at.second:02d}"
        f"{extension}"
    )
    return PurePath(directory, filename)


@dataclass(frozen=True)
class Image:
    """A file confirmed to be a timestamped JPEG."""

    source_path: Path
    extension: str
    created_at: datetime.datetime
    destination_relative_path: PurePath = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "destination_relative_path",
            destination_name(self.created_at, self.extension),
        )
