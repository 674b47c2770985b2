"""
Main window for the explorer.
"""

import logging

from PyQt6.QtWidgets import QMainWindow, QStatusBar, QWidget, QVBoxLayout
from PyQt6.QtGui import QKeySequence, QShortcut

from ..core.errors import ExplorerError
from .image_view import ImagePanel
from .widgets.navigation_bar import NavigationBar


class MainWindow(QMainWindow):
    """Window showing one image of the directory at a time."""

    def __init__(self, config, state, logger=None):
        """Initialize main window."""
        super().__init__()

        self.logger = logger or logging.getLogger('fex')
        self.config = config
        self.state = state

        self.init_ui()
        self.connect_signals()
        self.show_current()

        self.logger.info("Main window initialized")

    def init_ui(self):
        """Initialize the user interface."""
        appearance = self.config['appearance']
        self.resize(*appearance['window_size'])
        self.move(*appearance['window_position'])

        central = QWidget(self)
        layout = QVBoxLayout(central)

        self.image_panel = ImagePanel(self)
        layout.addWidget(self.image_panel, stretch=1)

        self.navigation_bar = NavigationBar(self)
        layout.addWidget(self.navigation_bar)

        self.setCentralWidget(central)

        self.statusBar = QStatusBar(self)
        self.setStatusBar(self.statusBar)

        self.next_shortcut = QShortcut(
            QKeySequence(self.config['navigation']['next_shortcut']), self)

    def connect_signals(self):
        """Connect signals and slots."""
        self.navigation_bar.next_requested.connect(self.show_next)
        self.next_shortcut.activated.connect(self.show_next)

    def show_current(self):
        """Render the current image, or report why it cannot be rendered."""
        path = self.state.current_path
        self.setWindowTitle(f"{self.config['appearance']['title_prefix']}{path}")
        self.navigation_bar.set_position(self.state.index, len(self.state))

        try:
            result = self.state.current()
        except ExplorerError as e:
            self.logger.error(f"Failed to display {path}: {e}")
            self.image_panel.show_error(e)
            self.statusBar.showMessage(f"Failed to load {path}")
            return

        self.image_panel.show_result(result)
        self.statusBar.showMessage(path)

    def show_next(self):
        """Advance to the next image and show it."""
        self.state.advance()
        self.show_current()

    def closeEvent(self, event):
        """Remember the window geometry before closing."""
        self.config['appearance']['window_size'] = [self.width(), self.height()]
        self.config['appearance']['window_position'] = [self.x(), self.y()]
        super().closeEvent(event)
