"""
Connected-component scanning of silhouette maps.

Components are 4-connected regions of foreground cells. Two traversal
strategies (depth-first and breadth-first) produce identical results.
"""

from .traversal import (
    ScanStrategy,
    BaseTraversal,
    DepthFirstTraversal,
    BreadthFirstTraversal,
    create_traversal
)

from .scanner import (
    UNLABELED,
    ComponentSeed,
    measure_components,
    scan,
    scan_with_fill,
    label_components
)

__all__ = [
    # Traversal
    'ScanStrategy',
    'BaseTraversal',
    'DepthFirstTraversal',
    'BreadthFirstTraversal',
    'create_traversal',
    # Scanning
    'UNLABELED',
    'ComponentSeed',
    'measure_components',
    'scan',
    'scan_with_fill',
    'label_components'
]
