"""
Silhouette map construction: thresholds per-pixel deviation from the background.
"""

from .builder import MIN_DEVIATION_LIMIT, deviation_map, build_silhouette_map

__all__ = ['MIN_DEVIATION_LIMIT', 'deviation_map', 'build_silhouette_map']
