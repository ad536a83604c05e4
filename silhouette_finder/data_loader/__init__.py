"""
Image loading for the silhouette pipeline.

Example:
    >>> from silhouette_finder.data_loader import load_image
    >>> image = load_image("assets/shapes.png")
    >>> grid = image.to_channel_grid()
"""

from .image_loader import RawImage, load_image

__all__ = ['RawImage', 'load_image']
