"""
Image panel showing a rendered image with its size and data range.
"""

import logging
import numpy as np
from PyQt6.QtWidgets import QWidget, QHBoxLayout, QVBoxLayout, QLabel
from PyQt6.QtCore import Qt
import pyqtgraph as pg


class ImagePanel(QWidget):
    """Rendered image on the left, metadata labels on the right."""

    def __init__(self, parent=None):
        super().__init__(parent)

        self.logger = logging.getLogger('fex')
        self.current_result = None

        self.init_ui()

    def init_ui(self):
        """Initialize the user interface."""
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self.view = pg.ImageView()
        self.view.ui.roiBtn.hide()
        self.view.ui.menuBtn.hide()
        self.view.ui.histogram.hide()
        self.view.getView().setAspectLocked(True)
        layout.addWidget(self.view, stretch=1)

        info_layout = QVBoxLayout()
        self.size_label = QLabel("width/height: -")
        self.range_label = QLabel("min/max: -")
        self.status_label = QLabel("")
        self.status_label.setWordWrap(True)
        self.status_label.setStyleSheet("color: #c0392b;")
        self.status_label.setVisible(False)
        for label in (self.size_label, self.range_label, self.status_label):
            label.setAlignment(Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignTop)
            info_layout.addWidget(label)
        info_layout.addStretch()
        layout.addLayout(info_layout)

    def show_result(self, result):
        """Display a RenderResult."""
        self.current_result = result
        rgb = np.frombuffer(result.pixels, dtype=np.uint8).reshape(result.height, result.width, 3)
        self.view.setImage(rgb, autoLevels=False, levels=(0, 255),
                           axes={'y': 0, 'x': 1, 'c': 2})
        self.size_label.setText(f"width/height: {result.width}x{result.height}")
        self.range_label.setText(f"min/max: {result.minimum:g} / {result.maximum:g}")
        self.status_label.setVisible(False)

    def show_error(self, error):
        """Replace the image with the reason it could not be shown."""
        self.current_result = None
        self.view.clear()
        self.size_label.setText("width/height: -")
        self.range_label.setText("min/max: -")
        self.status_label.setText(f"Could not display image:\n{error}")
        self.status_label.setVisible(True)
