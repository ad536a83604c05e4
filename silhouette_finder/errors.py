"""
Error taxonomy for the silhouette pipeline.

Every stage raises immediately and never retries: all stages are pure
functions of their inputs.
"""


class SilhouetteError(ValueError):
    """Base class for errors raised by the silhouette pipeline."""


class InvalidDimensions(SilhouetteError):
    """Raw buffer is empty or its length does not match the declared layout."""


class DegenerateImage(SilhouetteError):
    """A grid with zero width or height reached a pipeline stage."""
