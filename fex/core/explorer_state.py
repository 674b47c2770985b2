"""
Cursor over the images of a directory.
"""

import logging


class ExplorerState:
    """The list of image paths, the current position and the last render."""

    def __init__(self, paths, pipeline, logger=None):
        if not paths:
            raise ValueError("ExplorerState needs at least one image path")
        self.logger = logger or logging.getLogger('fex')
        self.paths = list(paths)
        self.pipeline = pipeline
        self.index = 0
        self._cached_index = None
        self._cached_result = None

    def __len__(self):
        return len(self.paths)

    @property
    def current_path(self):
        return self.paths[self.index]

    def current(self):
        """Render the current image, reusing the last result for the same index.

        Decode errors propagate; nothing is cached for a failed image.
        """
        if self._cached_index == self.index:
            return self._cached_result

        result = self.pipeline.render(self.current_path)
        self._cached_index = self.index
        self._cached_result = result
        return result

    def advance(self):
        """Move to the next image, wrapping to the first after the last."""
        if self.index + 1 >= len(self.paths):
            self.logger.info("All images checked! Starting again.")
            self.index = 0
        else:
            self.index += 1
        return self.index
