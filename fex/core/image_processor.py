"""
Stack reduction and display normalization.
"""

import logging
import numpy as np

from .errors import ZeroRangeData
from .policy import (ReductionPolicy, AVERAGE_ADDITIONAL, MINMAX_SENTINEL,
                     ZERO_RANGE_ERROR, INDEX_ROW_WIDTH, SENTINEL_MINIMUM,
                     SENTINEL_MAXIMUM, sample_offsets, offsets_in_bounds)

CHANNELS = 3


class ReducedImage:
    """A stack averaged down to one float32 frame, with its data range."""

    def __init__(self, width, height, samples, minimum, maximum, frame_count=1):
        self.width = width
        self.height = height
        self.samples = samples
        self.minimum = minimum
        self.maximum = maximum
        self.frame_count = frame_count

    def __repr__(self):
        return (f"ReducedImage({self.width}x{self.height}, "
                f"min={self.minimum}, max={self.maximum})")


class DisplayBuffer:
    """Row-major 8-bit RGB pixels with equal channels and no row padding."""

    def __init__(self, width, height, pixels):
        if len(pixels) != width * height * CHANNELS:
            raise ValueError(
                f"Pixel buffer holds {len(pixels)} bytes, expected {width * height * CHANNELS}"
            )
        self.width = width
        self.height = height
        self.pixels = bytes(pixels)

    @property
    def stride(self):
        return self.width * CHANNELS

    def as_array(self):
        """Read-only (height, width, 3) uint8 view of the pixels."""
        return np.frombuffer(self.pixels, dtype=np.uint8).reshape(
            self.height, self.width, CHANNELS)


class ImageProcessor:
    """Average image stacks and stretch them into displayable bytes."""

    def __init__(self, policy=None, logger=None):
        """Initialize image processor."""
        self.logger = logger or logging.getLogger('fex')
        self.policy = policy or ReductionPolicy()

    def average_frames(self, frames):
        """Collapse frames into one float32 array.

        With the ``additional`` averaging policy the sum of all frames is
        divided by the number of frames after the first, which is how the
        first explorer release accounted for them.
        """
        if len(frames) == 1:
            return frames[0].copy()

        total = np.sum(np.stack(frames), axis=0, dtype=np.float64)
        if self.policy.averaging == AVERAGE_ADDITIONAL:
            divisor = len(frames) - 1
        else:
            divisor = len(frames)
        return (total / divisor).astype(np.float32)

    def compute_range(self, samples):
        """Return (minimum, maximum) of the samples.

        NaNs are always skipped. The ``exact`` policy also skips infinities,
        the ``sentinel`` policy lets them through as the first release did.
        """
        if self.policy.min_max == MINMAX_SENTINEL:
            valid = samples[~np.isnan(samples)]
            minimum, maximum = SENTINEL_MINIMUM, SENTINEL_MAXIMUM
            if valid.size:
                minimum = min(minimum, float(valid.min()))
                maximum = max(maximum, float(valid.max()))
            return minimum, maximum

        finite = samples[np.isfinite(samples)]
        if not finite.size:
            self.logger.warning("No valid samples, reporting a 0-0 range")
            return 0.0, 0.0
        return float(finite.min()), float(finite.max())

    def reduce(self, stack):
        """Average an ImageStack and scan its range."""
        samples = self.average_frames(stack.frames)
        minimum, maximum = self.compute_range(samples)
        self.logger.debug(
            f"Reduced {stack.frame_count} frame(s): min={minimum}, max={maximum}"
        )
        return ReducedImage(stack.width, stack.height, samples, minimum, maximum,
                            frame_count=stack.frame_count)

    def stretch(self, reduced):
        """Map samples to 0-255 by dividing by the maximum.

        The minimum is reported but does not take part in the stretch.
        """
        maximum = reduced.maximum
        if not maximum > 0:
            if self.policy.zero_range == ZERO_RANGE_ERROR:
                raise ZeroRangeData(f"Cannot stretch data with maximum {maximum}")
            self.logger.warning(f"Maximum is {maximum}, showing a blank image")
            return np.zeros((reduced.height, reduced.width), dtype=np.uint8)

        scaled = reduced.samples.astype(np.float64) / maximum * 255.0
        scaled = np.nan_to_num(scaled, nan=0.0)
        return np.clip(np.rint(scaled), 0, 255).astype(np.uint8)

    def normalize(self, reduced):
        """Turn a ReducedImage into an RGB DisplayBuffer."""
        levels = self.stretch(reduced)
        width, height = reduced.width, reduced.height

        if self.policy.indexing != INDEX_ROW_WIDTH:
            if not offsets_in_bounds(width, height, self.policy.indexing):
                raise ValueError(
                    f"{width}x{height} image cannot be laid out with "
                    f"{self.policy.indexing} indexing"
                )
            # Pixels whose offset is never produced stay black.
            flat = np.zeros(width * height, dtype=np.uint8)
            flat[sample_offsets(width, height, self.policy.indexing)] = levels
            levels = flat.reshape(height, width)

        rgb = np.repeat(levels[:, :, np.newaxis], CHANNELS, axis=2)
        return DisplayBuffer(width, height, rgb.tobytes())

    def reduce_and_normalize(self, stack):
        """Reduce a stack and normalize it in one step."""
        reduced = self.reduce(stack)
        return reduced, self.normalize(reduced)
