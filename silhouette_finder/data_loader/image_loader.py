"""
Image file loading.

Decodes an image file with OpenCV into a raw interleaved pixel buffer and
the layout describing it, ready for the pixel extractor.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Union
import logging

import cv2
import numpy as np

from ..pixels import ChannelGrid, PixelEncoding, PixelLayout, extract_channels

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RawImage:
    """
    Decoded image as a flat pixel buffer.

    Attributes:
        buffer: uint8 array of width * height * channels elements, row-major
        width: Image width
        height: Image height
        layout: Layout of the buffer
    """
    buffer: np.ndarray
    width: int
    height: int
    layout: PixelLayout

    def to_channel_grid(self) -> ChannelGrid:
        """Extract the RGBA channel grid of the image."""
        return extract_channels(self.buffer, self.width, self.height, self.layout)


def _to_bytes(pixels: np.ndarray, path: Path) -> np.ndarray:
    """Reduce a decoded image of any supported depth to uint8 channels."""
    if pixels.dtype == np.uint8:
        return pixels
    if np.issubdtype(pixels.dtype, np.unsignedinteger):
        # keep the most significant byte
        return (pixels >> (8 * pixels.dtype.itemsize - 8)).astype(np.uint8)
    if np.issubdtype(pixels.dtype, np.floating):
        # float images are normalized to [0, 1]
        pixels = np.nan_to_num(pixels, nan=0.0)
        return np.clip(pixels * 255, 0, 255).astype(np.uint8)
    raise ValueError(f"Unsupported pixel depth {pixels.dtype} in {path}")


def load_image(path: Union[str, Path]) -> RawImage:
    """
    Load an image file.

    Gray images are expanded to BGR. OpenCV decodes to BGR or BGRA, which is
    kept as the buffer's channel order. 16-bit images keep their high byte,
    float images are scaled from [0, 1] to [0, 255] and clipped.

    Args:
        path: Path of the image file

    Returns:
        image: RawImage with an interleaved BGR or BGRA buffer

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If OpenCV cannot decode the file or its pixel depth is unsupported

    Example:
        >>> image = load_image("assets/shapes.png")
        >>> grid = image.to_channel_grid()
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Image file does not exist: {path}")

    pixels = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
    if pixels is None:
        raise ValueError(f"Cannot read image file: {path}")

    pixels = _to_bytes(pixels, path)
    if pixels.ndim == 2:
        pixels = cv2.cvtColor(pixels, cv2.COLOR_GRAY2BGR)

    height, width, n_channels = pixels.shape
    order = "BGRA" if n_channels == 4 else "BGR"

    logger.debug("Loaded %s: %dx%d %s", path, width, height, order)

    return RawImage(
        buffer=np.ascontiguousarray(pixels).ravel(),
        width=width,
        height=height,
        layout=PixelLayout(PixelEncoding.INTERLEAVED, order)
    )
