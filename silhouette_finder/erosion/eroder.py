"""
Map Eroder

Deletes the edge cells of every silhouette, so that silhouettes merged
through thin bridges fall apart into separate components. One pass scans
each row left to right and right to left, and each column top to bottom and
bottom to top; in every direction the first cell of each foreground run is
cleared. All four scans read the same input map.

A cell therefore survives a pass only when its four neighbors are all
foreground; cells on the image border never survive.
"""

import logging

import numpy as np

from ..errors import DegenerateImage

logger = logging.getLogger(__name__)


def _check_shape(shape):
    if len(shape) != 2:
        raise ValueError(f"Silhouette map must be 2-dimensional, got shape {shape}")
    if 0 in shape:
        raise DegenerateImage(f"Cannot erode a map of shape {shape}")


def _run_endpoints(silhouette_map: np.ndarray, axis: int) -> np.ndarray:
    """Mark the first and last cell of every foreground run along an axis."""
    before = np.zeros_like(silhouette_map)
    after = np.zeros_like(silhouette_map)
    if axis == 0:
        before[1:, :] = silhouette_map[:-1, :]
        after[:-1, :] = silhouette_map[1:, :]
    else:
        before[:, 1:] = silhouette_map[:, :-1]
        after[:, :-1] = silhouette_map[:, 1:]
    # a run starts where the previous cell is background and ends where the next one is
    return silhouette_map & ~(before & after)


def erode(silhouette_map: np.ndarray) -> np.ndarray:
    """
    Apply one erosion pass.

    Args:
        silhouette_map: Bool array of shape (width, height), indexed [x, y]

    Returns:
        eroded: New read-only map; the input is left untouched

    Raises:
        DegenerateImage: If the map has a zero dimension
        ValueError: If the map is not 2-dimensional
    """
    silhouette_map = np.asarray(silhouette_map, dtype=bool)
    _check_shape(silhouette_map.shape)

    cleared = _run_endpoints(silhouette_map, axis=0) | _run_endpoints(silhouette_map, axis=1)
    eroded = silhouette_map & ~cleared
    eroded.setflags(write=False)
    return eroded


def erode_repeatedly(silhouette_map: np.ndarray, passes: int) -> np.ndarray:
    """
    Apply `passes` erosion passes (the crop power).

    Args:
        silhouette_map: Bool array of shape (width, height)
        passes: Number of passes, 0 returns the map unchanged

    Returns:
        eroded: Map after all passes

    Raises:
        ValueError: If passes is negative or the map is not 2-dimensional
        DegenerateImage: If the map has a zero dimension
    """
    if passes < 0:
        raise ValueError(f"passes must be >= 0, got {passes}")
    _check_shape(np.shape(silhouette_map))

    for i in range(passes):
        silhouette_map = erode(silhouette_map)
        if not silhouette_map.any():
            logger.debug("Map empty after %d of %d erosion passes", i + 1, passes)
            break

    return silhouette_map
