"""
Irodori Colors Module

Color space conversion, harmony palettes, hair pixel filtering, k-means
clustering and hair color role classification.
"""

__version__ = "1.0.0"
