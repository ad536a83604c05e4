"""
Pipeline orchestration: configuration, one-image runs and silhouette counting.
"""

from .pipeline import (
    PipelineConfig,
    PipelineResult,
    SilhouettePipeline,
    derive_min_size,
    find_silhouettes
)

__all__ = [
    'PipelineConfig',
    'PipelineResult',
    'SilhouettePipeline',
    'derive_min_size',
    'find_silhouettes'
]
