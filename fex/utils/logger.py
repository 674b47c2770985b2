"""
Logging configuration for the explorer.

Console output is kept short (``LEVEL: message``); the optional log file
under ``~/.fex/logs`` records source locations as well.
"""

import os
import sys
import logging
import logging.handlers
from pathlib import Path
from datetime import datetime

LOGGER_NAME = 'fex'
CONSOLE_FORMAT = '%(levelname)s: %(message)s'
FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s'
MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5


def default_log_directory():
    """Directory holding the explorer's log files, created on demand."""
    if sys.platform == 'win32':
        base_dir = Path(os.path.expandvars('%LOCALAPPDATA%'))
    else:
        base_dir = Path(os.path.expanduser('~'))

    log_dir = base_dir / '.fex' / 'logs'
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir


class ExplorerLogging:
    """Attach console and rotating-file output to the ``fex`` logger."""

    def __init__(self, debug=False, log_to_file=True, log_dir=None):
        self.logger = logging.getLogger(LOGGER_NAME)
        self.level = logging.DEBUG if debug else logging.INFO
        self.log_file = None
        if log_to_file:
            log_dir = Path(log_dir) if log_dir else default_log_directory()
            self.log_file = log_dir / f"fex_{datetime.now():%Y%m%d_%H%M%S}.log"

    def install(self):
        """Replace the logger's handlers and route uncaught exceptions to it."""
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

        self.logger.setLevel(self.level)
        self.logger.addHandler(self._console_handler())
        if self.log_file:
            self.logger.addHandler(self._file_handler())
            self.logger.debug(f"Writing log to {self.log_file}")

        sys.excepthook = self.report_uncaught
        return self.logger

    def _console_handler(self):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        handler.setLevel(self.level)
        return handler

    def _file_handler(self):
        handler = logging.handlers.RotatingFileHandler(
            self.log_file, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUPS
        )
        handler.setFormatter(logging.Formatter(FILE_FORMAT))
        handler.setLevel(self.level)
        return handler

    def report_uncaught(self, exc_type, exc_value, exc_traceback):
        """``sys.excepthook`` replacement; Ctrl+C keeps the default behaviour."""
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_traceback)
            return

        self.logger.critical("Unhandled exception",
                             exc_info=(exc_type, exc_value, exc_traceback))
        print(f"An unexpected error occurred: {exc_value}", file=sys.stderr)


def setup_logger(debug=False, log_to_file=True, log_dir=None):
    """Initialize and return the application logger."""
    return ExplorerLogging(debug, log_to_file, log_dir).install()
