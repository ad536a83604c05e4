"""
Visualization of silhouettes over the original image.
"""

from .silhouette_plot import SILHOUETTE_PALETTE, render_silhouettes, plot_silhouettes

__all__ = ['SILHOUETTE_PALETTE', 'render_silhouettes', 'plot_silhouettes']
