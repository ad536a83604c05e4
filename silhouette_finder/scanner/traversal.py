"""
Component Traversal Strategies

A traversal explores one 4-connected component of a silhouette map from a
seed cell, marking every reached cell as visited and counting them. Two
interchangeable strategies are provided:
1. Depth-first: explicit LIFO stack, same visiting order as a recursive
   flood fill expanding left, right, up, down
2. Breadth-first: FIFO queue, cells marked when enqueued

Traversals are stateless; the cell and visited grids are passed in, so one
instance can be shared by any number of scans.
"""

from abc import ABC, abstractmethod
from collections import deque
from enum import Enum
from typing import Callable, List, Optional, Tuple

Cells = List[List[bool]]
"""Nested lists indexed [x][y]."""

OnVisit = Callable[[int, int], None]


class ScanStrategy(Enum):
    """Available component traversal strategies."""
    DEPTH_FIRST = "dfs"
    BREADTH_FIRST = "bfs"


class BaseTraversal(ABC):
    """
    Abstract base class for component traversals.

    Implementations must report identical sizes and must call `on_visit`
    for a cell before marking it visited.
    """

    @abstractmethod
    def traverse(
        self,
        cells: Cells,
        visited: Cells,
        seed: Tuple[int, int],
        on_visit: Optional[OnVisit] = None
    ) -> int:
        """
        Visit every unvisited foreground cell 4-connected to the seed.

        Args:
            cells: Silhouette map as nested lists indexed [x][y]
            visited: Visited grid of the same shape, updated in place
            seed: Starting cell (x, y)
            on_visit: Called with (x, y) at the first discovery of each cell

        Returns:
            size: Number of cells newly visited
        """
        pass


class DepthFirstTraversal(BaseTraversal):
    """
    Depth-first traversal on an explicit stack.

    Neighbors are pushed in reverse (down, up, right, left) so that they are
    popped left, right, up, down, which reproduces the pre-order of the
    recursive flood fill without consuming call stack. A cell may sit on the
    stack more than once; it is checked when popped.
    """

    def traverse(
        self,
        cells: Cells,
        visited: Cells,
        seed: Tuple[int, int],
        on_visit: Optional[OnVisit] = None
    ) -> int:
        width, height = len(cells), len(cells[0])
        stack = [seed]
        size = 0

        while stack:
            x, y = stack.pop()
            if not cells[x][y] or visited[x][y]:
                continue

            if on_visit is not None:
                on_visit(x, y)
            visited[x][y] = True
            size += 1

            if y < height - 1:
                stack.append((x, y + 1))
            if y > 0:
                stack.append((x, y - 1))
            if x < width - 1:
                stack.append((x + 1, y))
            if x > 0:
                stack.append((x - 1, y))

        return size


class BreadthFirstTraversal(BaseTraversal):
    """Breadth-first traversal on a FIFO queue of coordinates."""

    def traverse(
        self,
        cells: Cells,
        visited: Cells,
        seed: Tuple[int, int],
        on_visit: Optional[OnVisit] = None
    ) -> int:
        width, height = len(cells), len(cells[0])
        queue = deque()
        size = 0

        def enqueue(x: int, y: int):
            nonlocal size
            if cells[x][y] and not visited[x][y]:
                if on_visit is not None:
                    on_visit(x, y)
                queue.append((x, y))
                visited[x][y] = True
                size += 1

        enqueue(*seed)

        while queue:
            x, y = queue.popleft()

            # left, right, upper, lower
            if x > 0:
                enqueue(x - 1, y)
            if x < width - 1:
                enqueue(x + 1, y)
            if y > 0:
                enqueue(x, y - 1)
            if y < height - 1:
                enqueue(x, y + 1)

        return size


def create_traversal(strategy: ScanStrategy) -> BaseTraversal:
    """
    Factory function to create a component traversal.

    Args:
        strategy: DEPTH_FIRST or BREADTH_FIRST

    Returns:
        traversal: Matching BaseTraversal instance

    Raises:
        ValueError: If the strategy is unknown
    """
    if strategy == ScanStrategy.DEPTH_FIRST:
        return DepthFirstTraversal()
    elif strategy == ScanStrategy.BREADTH_FIRST:
        return BreadthFirstTraversal()
    else:
        raise ValueError(f"Unknown scan strategy: {strategy}")
