"""
Silhouette Pipeline

Chains the stages for one image:

    raw buffer -> ChannelGrid -> ReferenceColor -> silhouette map -> erosion* -> scan

The channel grid and the background color are computed once per image; the
map, its erosions and the scan are recomputed on every run, so a host can
re-run the pipeline whenever a parameter changes.
"""

from dataclasses import dataclass, field
from typing import List, Optional
import logging
import time

import numpy as np

from ..background import ReferenceColor, estimate_background
from ..erosion import erode_repeatedly
from ..mapping import MIN_DEVIATION_LIMIT, build_silhouette_map
from ..pixels import ChannelGrid, PixelLayout, extract_channels
from ..scanner import ComponentSeed, ScanStrategy, label_components, scan

logger = logging.getLogger(__name__)


# ============================================================================
# Configuration
# ============================================================================

@dataclass
class PipelineConfig:
    """
    Configuration of one pipeline run.

    Attributes:
        min_deviation: Color sensitivity; minimum channel deviation of a foreground pixel
        min_size_factor: The bigger the factor, the smaller silhouettes pass the size filter
        crop_power: Number of erosion passes, splits merged silhouettes
        strategy: Component traversal strategy
    """
    min_deviation: int = 130
    """Minimum deviation from the background, in [1, 1020]."""

    min_size_factor: int = 140
    """Divisor of the image area giving the minimum silhouette size."""

    crop_power: int = 0
    """Number of erosion passes."""

    strategy: ScanStrategy = ScanStrategy.BREADTH_FIRST
    """Traversal strategy, both give identical results."""

    def __post_init__(self):
        """Validate configuration parameters."""
        if not 1 <= self.min_deviation <= MIN_DEVIATION_LIMIT:
            raise ValueError(
                f"min_deviation must be in [1, {MIN_DEVIATION_LIMIT}], got {self.min_deviation}"
            )
        if self.min_size_factor < 1:
            raise ValueError(f"min_size_factor must be >= 1, got {self.min_size_factor}")
        if self.crop_power < 0:
            raise ValueError(f"crop_power must be >= 0, got {self.crop_power}")
        if isinstance(self.strategy, str):
            self.strategy = ScanStrategy(self.strategy)


def derive_min_size(width: int, height: int, min_size_factor: int) -> int:
    """Minimum silhouette size for an image of the given dimensions."""
    return width * height // min_size_factor


# ============================================================================
# Results
# ============================================================================

@dataclass
class PipelineResult:
    """
    Results of one pipeline run.
    """
    reference: ReferenceColor
    """Estimated background color."""

    silhouette_map: np.ndarray
    """Map after erosion, bool (width, height)."""

    seeds: List[ComponentSeed]
    """Seeds of the silhouettes that passed the size filter."""

    min_size: int
    """Minimum silhouette size used by the scan."""

    config: PipelineConfig
    """Configuration of the run."""

    elapsed_time: float = 0.0
    """Time taken by the run (seconds)."""

    labels: Optional[np.ndarray] = field(default=None, repr=False)
    """Component index of every cell, only when requested."""

    @property
    def count(self) -> int:
        """Number of silhouettes found."""
        return len(self.seeds)

    def __str__(self) -> str:
        return (
            f"PipelineResult(silhouettes={self.count}, "
            f"min_deviation={self.config.min_deviation}, "
            f"min_size={self.min_size}, "
            f"crop_power={self.config.crop_power}, "
            f"time={self.elapsed_time*1000:.1f}ms)"
        )


# ============================================================================
# Pipeline
# ============================================================================

class SilhouettePipeline:
    """
    Silhouette finder for one image.

    Example:
        >>> pipeline = SilhouettePipeline(grid)
        >>> result = pipeline.run(PipelineConfig(min_deviation=130, crop_power=2))
        >>> print(f"Silhouettes: {result.count}")
    """

    def __init__(self, grid: ChannelGrid):
        """
        Initialize the pipeline and estimate the background.

        Args:
            grid: Channels of the image

        Raises:
            DegenerateImage: If the image has no perimeter
        """
        self.grid = grid
        self.reference = estimate_background(grid)

    @classmethod
    def from_buffer(
        cls,
        raw_buffer,
        width: int,
        height: int,
        layout: Optional[PixelLayout] = None,
        has_alpha: bool = False
    ) -> 'SilhouettePipeline':
        """
        Create a pipeline from a raw pixel buffer.

        When no layout is given it is inferred from the buffer length.
        """
        if layout is None:
            if isinstance(raw_buffer, (bytes, bytearray)):
                length = len(raw_buffer)
            else:
                length = np.size(raw_buffer)
            layout = PixelLayout.infer(length, width, height, has_alpha)
        return cls(extract_channels(raw_buffer, width, height, layout))

    def silhouette_map(self, config: PipelineConfig) -> np.ndarray:
        """Build the silhouette map and apply `config.crop_power` erosion passes."""
        silhouette_map = build_silhouette_map(self.grid, self.reference, config.min_deviation)
        return erode_repeatedly(silhouette_map, config.crop_power)

    def run(self, config: Optional[PipelineConfig] = None, with_labels: bool = False) -> PipelineResult:
        """
        Run map building, erosion and scanning.

        Args:
            config: Run parameters. If None, uses defaults.
            with_labels: Also label every cell with its component index

        Returns:
            result: PipelineResult with the map and the silhouette seeds
        """
        config = config or PipelineConfig()
        start_time = time.time()

        silhouette_map = self.silhouette_map(config)
        min_size = derive_min_size(self.grid.width, self.grid.height, config.min_size_factor)

        labels = None
        if with_labels:
            seeds, labels = label_components(silhouette_map, min_size, config.strategy)
        else:
            seeds = scan(silhouette_map, min_size, config.strategy)

        result = PipelineResult(
            reference=self.reference,
            silhouette_map=silhouette_map,
            seeds=seeds,
            min_size=min_size,
            config=config,
            elapsed_time=time.time() - start_time,
            labels=labels
        )

        logger.info("%s", result)

        return result


def find_silhouettes(grid: ChannelGrid, config: Optional[PipelineConfig] = None) -> int:
    """
    Count the silhouettes of an image.

    Args:
        grid: Channels of the image
        config: Run parameters. If None, uses defaults.

    Returns:
        count: Number of silhouettes
    """
    return SilhouettePipeline(grid).run(config).count
