"""
Utility functions for the explorer.

This package contains helper modules for logging and configuration.
"""

__all__ = ['logger', 'config']
