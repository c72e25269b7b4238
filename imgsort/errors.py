"""Exception hierarchy for the image sorter."""


class ImageSorterError(Exception):
    """Base exception for all image sorter errors."""
    pass


class ConfigurationError(ImageSorterError):
    """Raised when the source or destination settings are unusable."""
    pass


class MetadataError(ImageSorterError):
    """Raised when a file carries no usable EXIF capture time."""
    pass


class ChannelClosedError(ImageSorterError):
    """Raised when sending on a handoff channel that was already closed."""
    pass


class FatalError(ImageSorterError):
    """
    Base for errors that halt the whole run.

    Files already moved stay where they are.
    """
    pass


class ScanError(FatalError):
    """Raised when walking the source tree fails."""
    pass


class FileOpenError(FatalError):
    """Raised when a scanned file cannot be opened for reading."""
    pass


class RelocationError(FatalError):
    """Raised when a destination directory cannot be created or a move fails."""
    pass
