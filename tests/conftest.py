"""Shared fixtures: synthetic TIFF and FITS files written into tmp_path."""

import numpy as np
import pytest
import tifffile
from astropy.io import fits


def write_tiff_pages(path, frames, dtype=np.uint16):
    """Write each frame as a separate TIFF page."""
    with tifffile.TiffWriter(path) as tif:
        for frame in frames:
            tif.write(np.asarray(frame, dtype=dtype), photometric='minisblack')
    return path


def write_fits(path, data):
    fits.PrimaryHDU(np.asarray(data)).writeto(path)
    return path


@pytest.fixture
def two_frame_tiff(tmp_path):
    frame = [[0, 100], [200, 300]]
    return write_tiff_pages(tmp_path / "stack.tif", [frame, frame])


@pytest.fixture
def single_pixel_fits(tmp_path):
    return write_fits(tmp_path / "star.fits", np.array([[42.0]], dtype=np.float32))
