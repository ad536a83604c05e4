"""
Tests for background estimation.
"""

import numpy as np
import pytest

from silhouette_finder.background import ReferenceColor, estimate_background, perimeter_pixel_count
from silhouette_finder.errors import DegenerateImage
from silhouette_finder.pixels import ChannelGrid


def grid_of(channels):
    return ChannelGrid(np.asarray(channels, dtype=np.uint8))


def brute_force_background(channels):
    """Mean over the distinct perimeter cells, for grids at least 2x2."""
    width, height = channels.shape[:2]
    perimeter = [
        channels[x, y].astype(np.int64)
        for x in range(width)
        for y in range(height)
        if x in (0, width - 1) or y in (0, height - 1)
    ]
    return tuple(int(v) // len(perimeter) for v in np.sum(perimeter, axis=0))


class TestPerimeterCount:

    def test_counts_corners_once(self):
        assert perimeter_pixel_count(3, 3) == 8
        assert perimeter_pixel_count(10, 4) == 24

    def test_single_pixel_has_no_perimeter(self):
        assert perimeter_pixel_count(1, 1) == 0


class TestEstimateBackground:

    def test_uniform_image(self):
        channels = np.zeros((4, 3, 4), dtype=np.uint8)
        channels[:] = (12, 34, 56, 255)
        assert estimate_background(grid_of(channels)) == ReferenceColor(12, 34, 56, 255)

    def test_interior_is_ignored(self):
        channels = np.zeros((3, 3, 4), dtype=np.uint8)
        channels[:] = (100, 100, 100, 255)
        channels[1, 1] = (0, 255, 0, 0)
        assert estimate_background(grid_of(channels)) == (100, 100, 100, 255)

    def test_truncating_division(self):
        channels = np.zeros((3, 3, 4), dtype=np.uint8)
        values = iter(range(8))
        for x in range(3):
            for y in range(3):
                if (x, y) != (1, 1):
                    channels[x, y, 0] = next(values)
        # 0 + 1 + ... + 7 = 28, 28 / 8 = 3.5
        assert estimate_background(grid_of(channels)).red == 3

    @pytest.mark.parametrize("seed, width, height", [(0, 2, 2), (1, 5, 3), (2, 7, 11), (3, 2, 9)])
    def test_matches_perimeter_mean(self, seed, width, height):
        channels = np.random.default_rng(seed).integers(0, 256, (width, height, 4), dtype=np.uint8)
        assert estimate_background(grid_of(channels)) == brute_force_background(channels)

    def test_channels_within_byte_range(self):
        channels = np.full((6, 5, 4), 255, dtype=np.uint8)
        reference = estimate_background(grid_of(channels))
        assert all(0 <= c <= 255 for c in reference)

    def test_one_pixel_wide_strip(self):
        channels = np.zeros((1, 3, 4), dtype=np.uint8)
        channels[0, :, 0] = (10, 20, 40)
        # 10 and 40 as top and bottom rows, the inner 20 once per vertical line
        assert estimate_background(grid_of(channels)).red == (10 + 40 + 20 + 20) // 4

    def test_one_pixel_high_strip_matches_its_transpose(self):
        channels = np.zeros((3, 1, 4), dtype=np.uint8)
        channels[:, 0, 0] = (10, 20, 40)
        assert estimate_background(grid_of(channels)) == estimate_background(grid_of(channels.transpose(1, 0, 2)))

    @pytest.mark.parametrize("shape", [(5, 1, 4), (1, 5, 4), (2, 1, 4)])
    def test_strips_stay_in_range(self, shape):
        channels = np.full(shape, 255, dtype=np.uint8)
        assert estimate_background(grid_of(channels)) == (255, 255, 255, 255)

    def test_single_pixel_is_degenerate(self):
        with pytest.raises(DegenerateImage):
            estimate_background(grid_of(np.zeros((1, 1, 4))))
