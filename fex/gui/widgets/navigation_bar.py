"""
Navigation bar for stepping through the image directory.
"""

from PyQt6.QtWidgets import QWidget, QHBoxLayout, QPushButton, QLabel
from PyQt6.QtCore import pyqtSignal


class NavigationBar(QWidget):
    """Next button and an image counter."""

    # Signals
    next_requested = pyqtSignal()

    def __init__(self, parent=None):
        """Initialize navigation bar."""
        super().__init__(parent)

        self.init_ui()

    def init_ui(self):
        """Initialize the user interface."""
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self.next_button = QPushButton("Next")
        self.next_button.setToolTip("Show the next image")
        self.next_button.clicked.connect(self.next_requested.emit)
        layout.addWidget(self.next_button)

        self.position_label = QLabel("0 / 0")
        layout.addWidget(self.position_label)

        layout.addStretch()

    def set_position(self, index, count):
        """Show the 1-based position of the current image."""
        self.position_label.setText(f"{index + 1} / {count}")
