"""
Path-to-pixels pipeline used by the viewer.
"""

import logging
from collections import namedtuple

from .image_loader import ImageLoader
from .image_processor import ImageProcessor
from .policy import ReductionPolicy

RenderResult = namedtuple('RenderResult', ['pixels', 'width', 'height', 'minimum', 'maximum'])


class ImagePipeline:
    """Decode a file, average its frames and stretch it for display."""

    def __init__(self, policy=None, logger=None):
        self.logger = logger or logging.getLogger('fex')
        self.policy = policy or ReductionPolicy()
        self.image_loader = ImageLoader(self.policy, self.logger)
        self.image_processor = ImageProcessor(self.policy, self.logger)

    def process(self, path):
        """Return (stack, reduced, display) for a path."""
        stack = self.image_loader.decode(path)
        reduced, display = self.image_processor.reduce_and_normalize(stack)
        self.logger.info(f"Successfully read {path} which has {stack.frame_count} frames.")
        return stack, reduced, display

    def render(self, path):
        """Return the RGB bytes, size and data range for a path."""
        _, reduced, display = self.process(path)
        return RenderResult(display.pixels, display.width, display.height,
                            reduced.minimum, reduced.maximum)
