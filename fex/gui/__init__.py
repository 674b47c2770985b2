"""
GUI components for the explorer.

This package contains the main window, the image panel and the navigation bar.
"""

__all__ = ['main_window', 'image_view', 'widgets']
