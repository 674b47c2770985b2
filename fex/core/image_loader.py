"""
Image loading for TIFF stacks and FITS images.
"""

import os
import logging
from pathlib import Path
import numpy as np
import tifffile
from astropy.io import fits

from .errors import (UnsupportedFormat, IOFailure, UnexpectedPixelFormat,
                     DimensionMismatch)
from .policy import (ReductionPolicy, HDU_PRIMARY, sample_offsets,
                     offsets_in_bounds)


class ImageStack:
    """Frames decoded from a single file, all float32 and the same size."""

    def __init__(self, width, height, frames, path=None, source_format=None):
        if width <= 0 or height <= 0:
            raise ValueError(f"Invalid stack dimensions {width}x{height}")
        if not frames:
            raise ValueError("An image stack needs at least one frame")
        for index, frame in enumerate(frames):
            if frame.shape != (height, width):
                raise ValueError(
                    f"Frame {index} has shape {frame.shape}, expected {(height, width)}"
                )

        self.width = width
        self.height = height
        self.frames = frames
        self.path = path
        self.source_format = source_format

    @property
    def frame_count(self):
        return len(self.frames)

    def __repr__(self):
        return (f"ImageStack({self.source_format or 'unknown'}, "
                f"{self.width}x{self.height}, frames={self.frame_count})")


class ImageLoader:
    """Decode TIFF and FITS files into image stacks."""

    def __init__(self, policy=None, logger=None):
        self.logger = logger or logging.getLogger('fex')
        self.policy = policy or ReductionPolicy()
        self.supported_formats = {
            'tiff': ['tif', 'tiff'],
            'fits': ['fits'],
        }

    def detect_format(self, file_path):
        """Return 'tiff' or 'fits' for a path, based on its extension.

        The comparison is case-sensitive: ``image.FITS`` is not recognised.
        """
        ext = Path(file_path).suffix[1:]
        for name, extensions in self.supported_formats.items():
            if ext in extensions:
                return name
        raise UnsupportedFormat(file_path, f"unsupported file extension {ext!r}")

    def decode(self, file_path):
        """Decode a file into an ImageStack."""
        file_path = Path(file_path)
        source_format = self.detect_format(file_path)

        if not file_path.exists():
            raise IOFailure(file_path, "file not found")

        if source_format == 'tiff':
            return self.load_tiff(file_path)
        return self.load_fits(file_path)

    def _frame_from_samples(self, file_path, samples, width, height):
        """Arrange flat samples into a float32 (height, width) frame."""
        if samples.size < width * height:
            raise UnexpectedPixelFormat(
                file_path, f"expected {width * height} samples, found {samples.size}"
            )
        if not offsets_in_bounds(width, height, self.policy.indexing):
            raise UnexpectedPixelFormat(
                file_path,
                f"{width}x{height} frame cannot be indexed with the "
                f"{self.policy.indexing} layout"
            )
        offsets = sample_offsets(width, height, self.policy.indexing)
        return samples[offsets].astype(np.float32)

    def load_tiff(self, file_path):
        """Load every page of a 16-bit grayscale TIFF as a frame."""
        self.logger.info(f"Loading TIFF stack from {file_path}")

        try:
            with tifffile.TiffFile(file_path) as tif:
                frames = []
                width = height = None
                for index, page in enumerate(tif.pages):
                    if page.dtype != np.uint16 or page.samplesperpixel != 1:
                        raise UnexpectedPixelFormat(
                            file_path,
                            f"page {index} is {page.dtype} with {page.samplesperpixel} "
                            "samples per pixel, expected single-channel uint16"
                        )
                    page_width, page_height = page.imagewidth, page.imagelength
                    if width is None:
                        width, height = page_width, page_height
                    elif (page_width, page_height) != (width, height):
                        raise DimensionMismatch(
                            file_path,
                            f"page {index} is {page_width}x{page_height}, "
                            f"first page is {width}x{height}"
                        )
                    samples = page.asarray().reshape(-1)
                    frames.append(self._frame_from_samples(file_path, samples, width, height))
        except (OSError, tifffile.TiffFileError) as e:
            raise IOFailure(file_path, f"cannot read TIFF: {e}") from e

        if not frames:
            raise UnexpectedPixelFormat(file_path, "TIFF contains no pages")

        self.logger.debug(f"Decoded {len(frames)} TIFF pages of {width}x{height}")
        return ImageStack(width, height, frames, path=str(file_path), source_format='tiff')

    def _select_hdu(self, file_path, hdul):
        """Pick the HDU holding the pixel data according to the policy."""
        for index, hdu in enumerate(hdul):
            self.logger.debug(f"HDU {index}: EXTNAME={hdu.header.get('EXTNAME')}")

        primary = hdul[0]
        if self.policy.fits_hdu == HDU_PRIMARY or primary.header.get('NAXIS', 0) > 0:
            return 0, primary

        for index, hdu in enumerate(hdul):
            if hdu.is_image and hdu.header.get('NAXIS', 0) > 0:
                self.logger.info(
                    f"Primary HDU of {os.path.basename(file_path)} has no data, "
                    f"using HDU {index}"
                )
                return index, hdu
        return 0, primary

    def load_fits(self, file_path):
        """Load the image HDU of a float32 FITS file as a single frame."""
        self.logger.info(f"Loading FITS image from {file_path}")

        try:
            with fits.open(file_path, memmap=False) as hdul:
                index, hdu = self._select_hdu(file_path, hdul)
                header = hdu.header
                if header.get('NAXIS', 0) == 0:
                    raise UnexpectedPixelFormat(file_path, f"HDU {index} has no pixel data")
                # hdu.data is already rescaled by BSCALE/BZERO; BITPIX is the stored encoding.
                bitpix = header.get('BITPIX')
                if bitpix != -32:
                    raise UnexpectedPixelFormat(
                        file_path, f"HDU {index} has BITPIX {bitpix}, expected -32"
                    )
                data = hdu.data
        except (OSError, ValueError) as e:
            raise IOFailure(file_path, f"cannot read FITS: {e}") from e

        if data is None:
            raise UnexpectedPixelFormat(file_path, f"HDU {index} has no pixel data")
        if data.dtype.kind != 'f' or data.dtype.itemsize != 4:
            raise UnexpectedPixelFormat(
                file_path, f"HDU {index} holds {data.dtype}, expected 32-bit float"
            )
        if data.ndim != 2:
            raise UnexpectedPixelFormat(
                file_path, f"HDU {index} has shape {data.shape}, expected 2D"
            )

        height, width = data.shape
        samples = np.ascontiguousarray(data, dtype=np.float32).reshape(-1)
        frame = self._frame_from_samples(file_path, samples, width, height)
        return ImageStack(width, height, [frame], path=str(file_path), source_format='fits')
