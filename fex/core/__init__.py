"""
Core functionality for the explorer.

This package contains the TIFF/FITS decoder, the stack reducer and display
normalizer, directory discovery and the image cursor.
"""

__all__ = ['errors', 'policy', 'image_loader', 'image_processor', 'pipeline',
           'directory_scanner', 'explorer_state']
