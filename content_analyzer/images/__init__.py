"""
Image analysis module.
"""

from .analyzer import ImageAnalyzer, image_score, resolution_score

__all__ = [
    "ImageAnalyzer",
    "image_score",
    "resolution_score",
]
