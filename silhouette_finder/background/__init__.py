"""
Background color estimation from the image perimeter.
"""

from .estimator import ReferenceColor, estimate_background, perimeter_pixel_count

__all__ = ['ReferenceColor', 'estimate_background', 'perimeter_pixel_count']
