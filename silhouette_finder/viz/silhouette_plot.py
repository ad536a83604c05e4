"""
Silhouette visualization.

Composites the original image, the silhouette map and the colorized
silhouettes into one RGBA image, and plots it with matplotlib.
"""

from typing import Optional, Tuple

import matplotlib.pyplot as plt
import numpy as np

from ..pixels import ChannelGrid
from ..scanner import UNLABELED

SILHOUETTE_PALETTE = np.array([
    [255, 0, 0, 255],      # red
    [0, 255, 0, 255],      # green
    [0, 0, 255, 255],      # blue
    [255, 255, 0, 255],    # yellow
    [255, 0, 255, 255],    # magenta
    [0, 255, 255, 255],    # cyan
    [255, 100, 0, 255],    # orange
    [0, 150, 0, 255],      # dark green
], dtype=np.uint8)

MAP_COLOR = np.array([0, 0, 0, 255], dtype=np.uint8)
BACKGROUND_COLOR = np.array([255, 255, 255, 255], dtype=np.uint8)


def render_silhouettes(
    grid: ChannelGrid,
    silhouette_map: Optional[np.ndarray] = None,
    labels: Optional[np.ndarray] = None,
    draw_original: bool = True,
    draw_map: bool = False,
    draw_silhouettes: bool = True
) -> np.ndarray:
    """
    Render an image with its map and silhouettes drawn over it.

    Layers are painted in order: original image (or white), map cells in
    black, then every labeled cell in its component's palette color.

    Args:
        grid: Channels of the image
        silhouette_map: Bool (width, height) map, required by draw_map
        labels: int (width, height) component labels, required by draw_silhouettes
        draw_original: Paint the original image instead of a white background
        draw_map: Paint foreground cells of the map
        draw_silhouettes: Paint accepted components

    Returns:
        image: uint8 RGBA image of shape (H, W, 4)
    """
    if draw_original:
        image = grid.to_image()
    else:
        image = np.empty((grid.height, grid.width, 4), dtype=np.uint8)
        image[:] = BACKGROUND_COLOR

    if draw_map:
        if silhouette_map is None:
            raise ValueError("draw_map requires silhouette_map")
        image[np.asarray(silhouette_map, dtype=bool).T] = MAP_COLOR

    if draw_silhouettes:
        if labels is None:
            raise ValueError("draw_silhouettes requires labels")
        labels_hw = np.asarray(labels).T
        labeled = labels_hw != UNLABELED
        image[labeled] = SILHOUETTE_PALETTE[labels_hw[labeled] % len(SILHOUETTE_PALETTE)]

    return image


def plot_silhouettes(
    grid: ChannelGrid,
    silhouette_map: np.ndarray,
    labels: np.ndarray,
    count: int,
    draw_original: bool = True,
    draw_map: bool = False,
    draw_silhouettes: bool = True,
    figsize: Tuple[int, int] = (11, 5)
) -> plt.Figure:
    """
    Plot the rendering of an image's silhouettes.

    Example:
        >>> result = pipeline.run(config, with_labels=True)
        >>> fig = plot_silhouettes(grid, result.silhouette_map, result.labels, result.count)
        >>> fig  # show in marimo
    """
    image = render_silhouettes(
        grid, silhouette_map, labels,
        draw_original=draw_original,
        draw_map=draw_map,
        draw_silhouettes=draw_silhouettes
    )

    fig, ax = plt.subplots(1, 1, figsize=figsize)
    ax.imshow(image)
    ax.axis('off')
    ax.set_title(f"Silhouettes count: {count}", fontsize=14, pad=10)
    plt.tight_layout()

    return fig
