"""
Background Estimation

The background color of an image is the arithmetic mean of its perimeter
pixels, computed per channel with truncating integer division.
"""

from typing import NamedTuple
import logging

import numpy as np

from ..errors import DegenerateImage
from ..pixels import ChannelGrid

logger = logging.getLogger(__name__)


class ReferenceColor(NamedTuple):
    """Estimated background color, each channel in [0, 255]."""
    red: int
    green: int
    blue: int
    alpha: int


def perimeter_pixel_count(width: int, height: int) -> int:
    """Number of perimeter pixels, each corner counted once."""
    return 2 * (width + height) - 4


def estimate_background(grid: ChannelGrid) -> ReferenceColor:
    """
    Estimate the background color of an image.

    Sums the rows y=0 and y=height-1 over every x, then the columns x=0 and
    x=width-1 over the inner rows 1..height-2, and divides each channel sum by
    the perimeter pixel count. A one-pixel-wide strip sums the inner cells of
    its single column twice (once per vertical line), a one-pixel-high strip
    is handled as its transpose; both keep every channel within [0, 255].

    Args:
        grid: Channels of the image

    Returns:
        reference: Per-channel mean of the perimeter

    Raises:
        DegenerateImage: If the grid is empty or has no perimeter (1x1)

    Example:
        >>> grid = extract_channels(bytes([10, 20, 30] * 9), 3, 3, PixelLayout())
        >>> estimate_background(grid)
        ReferenceColor(red=30, green=20, blue=10, alpha=255)
    """
    width, height = grid.width, grid.height
    if width < 1 or height < 1:
        raise DegenerateImage(f"Image must be at least 1x1, got {width}x{height}")

    count = perimeter_pixel_count(width, height)
    if count <= 0:
        raise DegenerateImage(f"Image {width}x{height} has no perimeter to estimate a background from")

    channels = grid.channels.astype(np.int64)
    if height == 1:
        # treat a one-row strip like its one-column transpose
        channels = channels.transpose(1, 0, 2)
        width, height = height, width

    # horizontal perimeter lines
    total = channels[:, 0].sum(axis=0) + channels[:, height - 1].sum(axis=0)
    # vertical perimeter lines without the corners
    total += channels[0, 1:height - 1].sum(axis=0) + channels[width - 1, 1:height - 1].sum(axis=0)

    # sums are never negative, so floor division truncates toward zero
    reference = ReferenceColor(*(int(s) // count for s in total))

    logger.debug("Background of %dx%d image: %s", grid.width, grid.height, reference)

    return reference
