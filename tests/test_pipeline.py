"""
Tests for the silhouette pipeline.
"""

import numpy as np
import pytest

from grids import bgr_buffer
from silhouette_finder.errors import DegenerateImage, InvalidDimensions
from silhouette_finder.pipeline import (
    PipelineConfig,
    SilhouettePipeline,
    derive_min_size,
    find_silhouettes,
)
from silhouette_finder.pixels import PixelEncoding, PixelLayout, extract_channels
from silhouette_finder.scanner import UNLABELED, ScanStrategy

WIDTH, HEIGHT = 40, 30
RED = (0, 0, 255)


def white_image():
    return np.full((HEIGHT, WIDTH, 3), 255, dtype=np.uint8)


def two_squares(bridge=False):
    """Two red 8x8 squares on white; optionally joined by a one-pixel bridge."""
    image = white_image()
    image[10:18, 5:13] = RED
    image[10:18, 14:22] = RED
    if bridge:
        image[13, 13] = RED
    return image


def grid_of(image):
    return extract_channels(bgr_buffer(image), WIDTH, HEIGHT, PixelLayout())


class TestPipelineConfig:

    def test_defaults(self):
        config = PipelineConfig()
        assert config.min_deviation == 130
        assert config.min_size_factor == 140
        assert config.crop_power == 0
        assert config.strategy is ScanStrategy.BREADTH_FIRST

    @pytest.mark.parametrize("kwargs", [
        {"min_deviation": 0},
        {"min_deviation": 1021},
        {"min_size_factor": 0},
        {"crop_power": -1},
    ])
    def test_invalid(self, kwargs):
        with pytest.raises(ValueError):
            PipelineConfig(**kwargs)

    def test_limits_are_valid(self):
        PipelineConfig(min_deviation=1)
        PipelineConfig(min_deviation=1020, min_size_factor=1)

    def test_strategy_from_string(self):
        assert PipelineConfig(strategy="dfs").strategy is ScanStrategy.DEPTH_FIRST


class TestDeriveMinSize:

    def test_integer_division(self):
        assert derive_min_size(100, 50, 140) == 35
        assert derive_min_size(10, 10, 1) == 100
        assert derive_min_size(3, 3, 10) == 0


class TestSilhouettePipeline:

    def test_background_computed_once(self):
        pipeline = SilhouettePipeline(grid_of(two_squares()))
        assert pipeline.reference == (255, 255, 255, 255)

    def test_counts_squares(self):
        result = SilhouettePipeline(grid_of(two_squares())).run()
        assert result.count == 2
        assert result.seeds == [(5, 10), (14, 10)]
        assert result.min_size == WIDTH * HEIGHT // 140
        assert result.silhouette_map.shape == (WIDTH, HEIGHT)
        assert result.labels is None

    def test_blank_image_has_no_silhouettes(self):
        assert SilhouettePipeline(grid_of(white_image())).run().count == 0

    def test_threshold_above_deviation(self):
        # red on white deviates by 510
        pipeline = SilhouettePipeline(grid_of(two_squares()))
        assert pipeline.run(PipelineConfig(min_deviation=510)).count == 2
        assert pipeline.run(PipelineConfig(min_deviation=511)).count == 0

    def test_crop_power_splits_bridge(self):
        pipeline = SilhouettePipeline(grid_of(two_squares(bridge=True)))
        assert pipeline.run(PipelineConfig(crop_power=0)).count == 1
        assert pipeline.run(PipelineConfig(crop_power=1)).count == 2

    def test_size_factor_filters_small_silhouettes(self):
        image = white_image()
        image[2:4, 2:4] = RED
        image[10:20, 10:20] = RED
        pipeline = SilhouettePipeline(grid_of(image))
        # min size 1200 // 140 = 8 drops the 2x2 speck
        assert pipeline.run(PipelineConfig(min_size_factor=140)).seeds == [(10, 10)]
        assert pipeline.run(PipelineConfig(min_size_factor=1200)).seeds == [(2, 2), (10, 10)]

    def test_strategies_agree(self):
        pipeline = SilhouettePipeline(grid_of(two_squares(bridge=True)))
        for crop_power in range(3):
            dfs = pipeline.run(PipelineConfig(crop_power=crop_power, strategy=ScanStrategy.DEPTH_FIRST))
            bfs = pipeline.run(PipelineConfig(crop_power=crop_power, strategy=ScanStrategy.BREADTH_FIRST))
            assert dfs.seeds == bfs.seeds

    def test_labels(self):
        result = SilhouettePipeline(grid_of(two_squares())).run(with_labels=True)
        assert result.labels.shape == (WIDTH, HEIGHT)
        assert result.labels[5, 10] == 0
        assert result.labels[21, 17] == 1
        assert result.labels[0, 0] == UNLABELED
        assert (result.labels >= 0).sum() == 128

    def test_result_str(self):
        result = SilhouettePipeline(grid_of(two_squares())).run()
        assert "silhouettes=2" in str(result)

    def test_single_pixel_is_degenerate(self):
        grid = extract_channels(bytes(3), 1, 1, PixelLayout())
        with pytest.raises(DegenerateImage):
            SilhouettePipeline(grid)


class TestFromBuffer:

    def test_infers_interleaved(self):
        pipeline = SilhouettePipeline.from_buffer(bgr_buffer(two_squares()), WIDTH, HEIGHT)
        assert pipeline.run().count == 2

    def test_infers_packed(self):
        words = np.zeros(WIDTH * HEIGHT, dtype=np.uint32).reshape(HEIGHT, WIDTH)
        words[:] = 0xFFFFFF
        words[5:15, 5:15] = 0x0000FF
        pipeline = SilhouettePipeline.from_buffer(words, WIDTH, HEIGHT)
        assert pipeline.grid.pixel(6, 6) == (255, 0, 0, 255)
        assert pipeline.run().seeds == [(5, 5)]

    def test_explicit_layout(self):
        rgba = np.zeros((HEIGHT, WIDTH, 4), dtype=np.uint8)
        rgba[20:25, 30:35] = (0, 255, 0, 255)
        layout = PixelLayout(PixelEncoding.INTERLEAVED, "RGBA")
        pipeline = SilhouettePipeline.from_buffer(rgba.tobytes(), WIDTH, HEIGHT, layout)
        assert pipeline.run().seeds == [(30, 20)]

    def test_bad_buffer(self):
        with pytest.raises(InvalidDimensions):
            SilhouettePipeline.from_buffer(bytes(10), WIDTH, HEIGHT, PixelLayout())


class TestFindSilhouettes:

    def test_count(self):
        assert find_silhouettes(grid_of(two_squares())) == 2
        assert find_silhouettes(grid_of(two_squares(bridge=True)), PipelineConfig(crop_power=1)) == 2
