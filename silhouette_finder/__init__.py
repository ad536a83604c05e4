"""
Silhouette Finder - foreground silhouette extraction from raster images.

Estimates the background color from the image perimeter, thresholds the
per-pixel deviation from it, optionally erodes the resulting map, and
groups foreground pixels into 4-connected silhouettes filtered by size.

Example:
    >>> from silhouette_finder import SilhouettePipeline, PipelineConfig
    >>> from silhouette_finder.data_loader import load_image
    >>>
    >>> grid = load_image("assets/shapes.png").to_channel_grid()
    >>> result = SilhouettePipeline(grid).run(PipelineConfig(min_deviation=130))
    >>> print(f"Silhouettes: {result.count}")
"""

from .errors import SilhouetteError, InvalidDimensions, DegenerateImage
from .pixels import PixelEncoding, PixelLayout, ChannelGrid, extract_channels
from .background import ReferenceColor, estimate_background
from .mapping import build_silhouette_map
from .erosion import erode, erode_repeatedly
from .scanner import ScanStrategy, ComponentSeed, scan, scan_with_fill, label_components
from .pipeline import PipelineConfig, PipelineResult, SilhouettePipeline, find_silhouettes

__all__ = [
    # Errors
    'SilhouetteError',
    'InvalidDimensions',
    'DegenerateImage',
    # Stages
    'PixelEncoding',
    'PixelLayout',
    'ChannelGrid',
    'extract_channels',
    'ReferenceColor',
    'estimate_background',
    'build_silhouette_map',
    'erode',
    'erode_repeatedly',
    'ScanStrategy',
    'ComponentSeed',
    'scan',
    'scan_with_fill',
    'label_components',
    # Pipeline
    'PipelineConfig',
    'PipelineResult',
    'SilhouettePipeline',
    'find_silhouettes',
]
