"""
Custom widgets for the explorer.
"""

from .navigation_bar import NavigationBar

__all__ = [
    'NavigationBar'
]
