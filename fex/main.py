#!/usr/bin/env python3
"""
Main entry point for the FITS / TIFF explorer.
"""

import sys
import argparse

from .utils.logger import setup_logger
from .utils.config import load_config, save_config
from .core.errors import DirectoryScanFailure
from .core.directory_scanner import scan_directory
from .core.explorer_state import ExplorerState
from .core.pipeline import ImagePipeline
from .core.policy import ReductionPolicy


def build_parser():
    """Create the command line parser."""
    parser = argparse.ArgumentParser(
        prog='explorer',
        description='View a directory of TIFF stacks and FITS images'
    )

    parser.add_argument('directory', nargs='?',
                        help='Directory of tiff / fits files')
    parser.add_argument('output_directory', nargs='?',
                        help='Output directory (accepted, currently unused)')
    parser.add_argument('--debug', '-d', action='store_true', help='Enable debug logging')
    parser.add_argument('--config', '-c', type=str, help='Path to configuration file')
    parser.add_argument('--legacy', action='store_true',
                        help='Reproduce the original averaging, indexing and range arithmetic')
    parser.add_argument('--no-log-file', action='store_true',
                        help='Log to the console only')

    return parser


def run_viewer(config, state, logger):
    """Show the main window and run the Qt event loop."""
    from PyQt6.QtWidgets import QApplication
    import pyqtgraph as pg

    from .gui.main_window import MainWindow

    app = QApplication(sys.argv)
    app.setApplicationName("FEX")

    pg.setConfigOptions(imageAxisOrder='row-major')

    window = MainWindow(config, state, logger)
    window.show()

    return app.exec()


def main(argv=None):
    """Application entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.directory:
        parser.print_usage(sys.stderr)
        return 1

    logger = setup_logger(args.debug, log_to_file=not args.no_log_file)
    config = load_config(args.config)

    try:
        if args.legacy:
            policy = ReductionPolicy.legacy()
        else:
            policy = ReductionPolicy.from_config(config['pipeline'])
    except ValueError as e:
        logger.error(f"Invalid pipeline configuration: {e}")
        return 1
    logger.debug(f"Using {policy}")

    if args.output_directory:
        logger.info(f"Output directory {args.output_directory} is not written to")

    try:
        image_paths = scan_directory(args.directory, config['scan']['sort_files'], logger)
    except DirectoryScanFailure as e:
        logger.error(str(e))
        return 1

    if not image_paths:
        print(f"No image files found in {args.directory}.")
        return 0

    state = ExplorerState(image_paths, ImagePipeline(policy, logger), logger)
    exit_code = run_viewer(config, state, logger)

    save_config(config, args.config)

    logger.info(f"Application exiting with code {exit_code}")
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
