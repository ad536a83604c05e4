"""
Map erosion ("crop"): shrinks silhouette boundaries to split lightly merged silhouettes.
"""

from .eroder import erode, erode_repeatedly

__all__ = ['erode', 'erode_repeatedly']
