"""
Connected-Component Scanner

Walks a silhouette map column by column (x outer, y inner), and traverses
every foreground cell not yet visited as the seed of a new 4-connected
component. Components reaching the minimum size are reported by their seed.

Each call allocates its own visited grid, so scans never share state.
"""

from typing import Callable, List, NamedTuple, Tuple
import logging
import time

import numpy as np

from ..errors import DegenerateImage
from .traversal import ScanStrategy, create_traversal

logger = logging.getLogger(__name__)

UNLABELED = -1
"""Label of cells outside every accepted component."""


class ComponentSeed(NamedTuple):
    """First discovered cell of a component."""
    x: int
    y: int


OnCellVisited = Callable[[int, int, int], None]


def _as_cells(silhouette_map: np.ndarray) -> List[List[bool]]:
    silhouette_map = np.asarray(silhouette_map, dtype=bool)
    if silhouette_map.ndim != 2:
        raise ValueError(f"Silhouette map must be 2-dimensional, got shape {silhouette_map.shape}")
    if 0 in silhouette_map.shape:
        raise DegenerateImage(f"Cannot scan a map of shape {silhouette_map.shape}")
    # plain lists index much faster than numpy scalars in the traversal loops
    return silhouette_map.tolist()


def _fresh_visited(cells: List[List[bool]]) -> List[List[bool]]:
    height = len(cells[0])
    return [[False] * height for _ in cells]


def _check_min_size(min_size: int):
    if min_size < 0:
        raise ValueError(f"min_size must be >= 0, got {min_size}")


def measure_components(
    silhouette_map: np.ndarray,
    strategy: ScanStrategy = ScanStrategy.BREADTH_FIRST
) -> List[Tuple[ComponentSeed, int]]:
    """
    Find every component of a map, without size filtering.

    Args:
        silhouette_map: Bool array of shape (width, height), indexed [x, y]
        strategy: Traversal strategy

    Returns:
        components: (seed, size) pairs in discovery order

    Raises:
        DegenerateImage: If the map has a zero dimension
        ValueError: If the map is not 2-dimensional
    """
    cells = _as_cells(silhouette_map)
    visited = _fresh_visited(cells)
    traversal = create_traversal(strategy)

    start_time = time.time()
    components = []

    for x, column in enumerate(cells):
        visited_column = visited[x]
        for y, foreground in enumerate(column):
            if foreground and not visited_column[y]:
                size = traversal.traverse(cells, visited, (x, y))
                components.append((ComponentSeed(x, y), size))

    logger.debug(
        "%s scan found %d components in %.1fms",
        strategy.value, len(components), (time.time() - start_time) * 1000
    )

    return components


def scan(
    silhouette_map: np.ndarray,
    min_size: int,
    strategy: ScanStrategy = ScanStrategy.BREADTH_FIRST
) -> List[ComponentSeed]:
    """
    Scan a map for silhouettes.

    Args:
        silhouette_map: Bool array of shape (width, height), indexed [x, y]
        min_size: Components smaller than this are noise and are dropped
        strategy: Traversal strategy, both give identical results

    Returns:
        seeds: Seeds of the accepted components, in discovery order

    Raises:
        DegenerateImage: If the map has a zero dimension
        ValueError: If min_size is negative or the map is not 2-dimensional

    Example:
        >>> silhouette_map = np.array([[True, False], [False, True]])
        >>> scan(silhouette_map, min_size=1)
        [ComponentSeed(x=0, y=0), ComponentSeed(x=1, y=1)]
    """
    _check_min_size(min_size)
    return [seed for seed, size in measure_components(silhouette_map, strategy) if size >= min_size]


def scan_with_fill(
    silhouette_map: np.ndarray,
    min_size: int,
    strategy: ScanStrategy,
    on_cell_visited: OnCellVisited
) -> List[ComponentSeed]:
    """
    Scan a map and report the membership of every accepted component.

    After scanning, every accepted component is traversed again from its
    seed on a fresh visited grid, and `on_cell_visited(x, y, index)` is called
    for each of its cells at first discovery, before the cell is marked
    visited. `index` is the position of the component's seed in the result.

    Args:
        silhouette_map: Bool array of shape (width, height)
        min_size: Minimum component size
        strategy: Traversal strategy
        on_cell_visited: Callback receiving (x, y, component_index)

    Returns:
        seeds: Same list as scan() returns
    """
    seeds = scan(silhouette_map, min_size, strategy)

    cells = _as_cells(silhouette_map)
    visited = _fresh_visited(cells)
    traversal = create_traversal(strategy)

    for index, seed in enumerate(seeds):
        traversal.traverse(cells, visited, seed, lambda x, y, index=index: on_cell_visited(x, y, index))

    return seeds


def label_components(
    silhouette_map: np.ndarray,
    min_size: int,
    strategy: ScanStrategy = ScanStrategy.BREADTH_FIRST
) -> Tuple[List[ComponentSeed], np.ndarray]:
    """
    Label every cell with the index of its accepted component.

    Returns:
        seeds: Seeds of the accepted components
        labels: int32 array of shape (width, height), UNLABELED outside components
    """
    labels = np.full(np.shape(silhouette_map), UNLABELED, dtype=np.int32)

    def fill(x: int, y: int, index: int):
        labels[x, y] = index

    seeds = scan_with_fill(silhouette_map, min_size, strategy, fill)
    return seeds, labels
