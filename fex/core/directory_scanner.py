"""
Discovery of TIFF and FITS files in an image directory.
"""

import os
import logging

from .errors import DirectoryScanFailure

NAME_MARKERS = ('tif', 'fits')


def is_candidate(filename):
    """Whether a file name looks like a TIFF or FITS image."""
    return any(marker in filename for marker in NAME_MARKERS)


def scan_directory(directory, sort_files=True, logger=None):
    """List image files directly inside ``directory``.

    Matching is by substring, so ``frame.tiff.bak`` is listed too and is
    rejected later by the decoder. Sub-directories are never listed.
    """
    logger = logger or logging.getLogger('fex')

    try:
        with os.scandir(directory) as entries:
            matches = [entry.path for entry in entries
                       if entry.is_file() and is_candidate(entry.name)]
    except OSError as e:
        raise DirectoryScanFailure(directory, e.strerror or str(e)) from e

    for path in matches:
        logger.debug(f"Found tiff / fits: {os.path.basename(path)}")

    if sort_files:
        matches.sort()

    logger.info(f"Found {len(matches)} image files in {directory}")
    return matches
