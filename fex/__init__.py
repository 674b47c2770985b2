"""
FEX, a viewer for directories of TIFF stacks and FITS images.
"""

__version__ = '0.2.0'
