"""
Silhouette Map Builder

A pixel belongs to the foreground when the sum of the absolute differences
between its channels and the background color reaches a threshold.
"""

import numpy as np

from ..background import ReferenceColor
from ..pixels import CHANNELS, ChannelGrid

MIN_DEVIATION_LIMIT = 255 * len(CHANNELS)
"""Largest possible deviation: every channel differs by 255."""


def deviation_map(grid: ChannelGrid, reference: ReferenceColor) -> np.ndarray:
    """
    Compute the deviation of every pixel from the reference color.

    Args:
        grid: Channels of the image
        reference: Background color

    Returns:
        deviations: int16 array of shape (width, height), values in [0, 1020]
    """
    diff = grid.channels.astype(np.int16) - np.asarray(reference, dtype=np.int16)
    return np.abs(diff).sum(axis=2, dtype=np.int16)


def build_silhouette_map(grid: ChannelGrid, reference: ReferenceColor, min_deviation: int) -> np.ndarray:
    """
    Generate the boolean silhouette map of an image.

    Args:
        grid: Channels of the image
        reference: Background color
        min_deviation: Threshold, a cell is foreground iff its deviation >= min_deviation

    Returns:
        silhouette_map: Read-only bool array of shape (width, height), indexed [x, y]
    """
    silhouette_map = deviation_map(grid, reference) >= min_deviation
    silhouette_map.setflags(write=False)
    return silhouette_map
