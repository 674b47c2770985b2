"""
Exception types raised by the image pipeline.
"""


class ExplorerError(Exception):
    """Base class for errors reported by the explorer."""


class DecodeError(ExplorerError):
    """A single file could not be turned into an image stack."""

    def __init__(self, path, message):
        super().__init__(f"{path}: {message}")
        self.path = str(path)
        self.reason = message


class UnsupportedFormat(DecodeError):
    """File extension is not one of fits, tif or tiff."""


class IOFailure(DecodeError):
    """File could not be opened or read."""


class UnexpectedPixelFormat(DecodeError):
    """Decoded samples are not 16-bit grayscale (TIFF) or float32 (FITS)."""


class DimensionMismatch(UnexpectedPixelFormat):
    """A frame's dimensions differ from the first frame of the stack."""


class ZeroRangeData(ExplorerError):
    """Maximum sample value is zero or negative, so no stretch is possible."""


class DirectoryScanFailure(ExplorerError):
    """Image directory is missing or unreadable."""

    def __init__(self, directory, message):
        super().__init__(f"Cannot scan {directory}: {message}")
        self.directory = str(directory)
