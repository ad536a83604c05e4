"""
Pixel Channel Extraction

Converts an opaque raw pixel buffer into a ChannelGrid: a read-only
(width, height, 4) array of red, green, blue and alpha bytes indexed [x, y].

Two buffer encodings are supported:
1. PACKED: one element per pixel, channels stored in bit-shifted byte fields
2. INTERLEAVED: one element per channel, consecutive, row-major

The buffer is consumed in a single vectorized pass, never per pixel.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union, Sequence
import logging

import numpy as np

from ..errors import DegenerateImage, InvalidDimensions

logger = logging.getLogger(__name__)

CHANNELS = "RGBA"
"""Channel order of the ChannelGrid's last axis."""

OPAQUE = 255

RawBuffer = Union[bytes, bytearray, memoryview, np.ndarray, Sequence[int]]


# ============================================================================
# Layout
# ============================================================================

class PixelEncoding(Enum):
    """How the raw buffer stores the channels of one pixel."""
    PACKED = "packed"
    INTERLEAVED = "interleaved"


@dataclass(frozen=True)
class PixelLayout:
    """
    Storage layout descriptor of a raw pixel buffer.

    Attributes:
        encoding: PACKED (one word per pixel) or INTERLEAVED (one element per channel)
        channel_order: Channels listed from the lowest buffer position (INTERLEAVED)
                       or from the least-significant byte (PACKED), e.g. "BGR",
                       "ABGR", "RGBA". Alpha is present iff the order contains "A".
    """
    encoding: PixelEncoding = PixelEncoding.INTERLEAVED
    channel_order: str = "BGR"

    def __post_init__(self):
        """Validate the channel order."""
        order = self.channel_order
        if len(set(order)) != len(order) or not set(order) <= set(CHANNELS):
            raise ValueError(f"channel_order must be distinct letters of {CHANNELS!r}, got {order!r}")
        if not set("RGB") <= set(order):
            raise ValueError(f"channel_order must contain R, G and B, got {order!r}")

    @property
    def has_alpha(self) -> bool:
        return "A" in self.channel_order

    @property
    def elements_per_pixel(self) -> int:
        """Number of buffer elements that encode one pixel."""
        if self.encoding is PixelEncoding.PACKED:
            return 1
        return len(self.channel_order)

    @classmethod
    def infer(cls, buffer_length: int, width: int, height: int, has_alpha: bool) -> 'PixelLayout':
        """
        Guess the layout from the buffer length.

        A buffer holding exactly one element per pixel is packed (red in the
        low byte, alpha in the high byte); anything else is interleaved in
        BGR / ABGR order.

        Example:
            >>> PixelLayout.infer(12, 2, 2, has_alpha=False)
            PixelLayout(encoding=<PixelEncoding.INTERLEAVED: 'interleaved'>, channel_order='BGR')
        """
        if buffer_length == width * height:
            return cls(PixelEncoding.PACKED, "RGBA" if has_alpha else "RGB")
        return cls(PixelEncoding.INTERLEAVED, "ABGR" if has_alpha else "BGR")


# ============================================================================
# Channel Grid
# ============================================================================

@dataclass(frozen=True)
class ChannelGrid:
    """
    Per-pixel RGBA channels of one image.

    Attributes:
        channels: Read-only uint8 array of shape (width, height, 4), indexed [x, y, c]
    """
    channels: np.ndarray

    def __post_init__(self):
        if self.channels.ndim != 3 or self.channels.shape[2] != len(CHANNELS):
            raise ValueError(f"channels must have shape (width, height, 4), got {self.channels.shape}")
        if self.channels.dtype != np.uint8:
            raise ValueError(f"channels must be uint8, got {self.channels.dtype}")
        if self.channels.shape[0] == 0 or self.channels.shape[1] == 0:
            raise DegenerateImage(f"Channel grid must not be empty, got shape {self.channels.shape}")
        # freeze a view, the caller's array stays writable
        channels = self.channels.view()
        channels.setflags(write=False)
        object.__setattr__(self, "channels", channels)

    @property
    def width(self) -> int:
        return self.channels.shape[0]

    @property
    def height(self) -> int:
        return self.channels.shape[1]

    @property
    def shape(self) -> Tuple[int, int]:
        """Grid dimensions (width, height)."""
        return self.width, self.height

    def pixel(self, x: int, y: int) -> Tuple[int, int, int, int]:
        """Get the (red, green, blue, alpha) channels of one pixel."""
        return tuple(int(v) for v in self.channels[x, y])

    def to_image(self) -> np.ndarray:
        """Return the pixels as a conventional (H, W, 4) RGBA image."""
        return self.channels.transpose(1, 0, 2).copy()

    def __str__(self) -> str:
        return f"ChannelGrid(width={self.width}, height={self.height})"


# ============================================================================
# Extraction
# ============================================================================

def _as_flat_array(raw_buffer: RawBuffer) -> np.ndarray:
    if isinstance(raw_buffer, (bytes, bytearray, memoryview)):
        return np.frombuffer(raw_buffer, dtype=np.uint8)
    return np.asarray(raw_buffer).ravel()


def extract_channels(
    raw_buffer: RawBuffer,
    width: int,
    height: int,
    layout: PixelLayout
) -> ChannelGrid:
    """
    Extract the RGBA channels of every pixel of a raw buffer.

    The buffer is read in row-major, column-fastest order and distributed
    into a grid indexed [x, y]. When the layout carries no alpha channel,
    alpha is synthesized as 255.

    Args:
        raw_buffer: Bytes or integer array-like; multi-dimensional arrays are flattened
        width: Declared image width
        height: Declared image height
        layout: Storage layout of the buffer

    Returns:
        grid: ChannelGrid of shape (width, height, 4)

    Raises:
        InvalidDimensions: If width * height is 0, a dimension is negative, or the
                           buffer length does not match the layout

    Example:
        >>> grid = extract_channels(bytes([0, 0, 255]), 1, 1, PixelLayout())
        >>> grid.pixel(0, 0)
        (255, 0, 0, 255)
    """
    if width < 0 or height < 0 or width * height == 0:
        raise InvalidDimensions(f"Image dimensions must be positive, got width={width}, height={height}")

    flat = _as_flat_array(raw_buffer)
    expected = width * height * layout.elements_per_pixel
    if flat.size != expected:
        raise InvalidDimensions(
            f"Buffer of {flat.size} elements does not match {width}x{height} "
            f"{layout.encoding.value} layout {layout.channel_order!r} ({expected} elements)"
        )

    words = flat.astype(np.int64)
    if layout.encoding is PixelEncoding.PACKED:
        words = words.reshape(height, width)
        fields = {name: (words >> (8 * k)) & 0xFF for k, name in enumerate(layout.channel_order)}
    else:
        words = words.reshape(height, width, len(layout.channel_order)) & 0xFF
        fields = {name: words[:, :, k] for k, name in enumerate(layout.channel_order)}

    channels = np.full((height, width, len(CHANNELS)), OPAQUE, dtype=np.uint8)
    for c, name in enumerate(CHANNELS):
        if name in fields:
            channels[:, :, c] = fields[name]

    logger.debug("Extracted %dx%d pixels from %s buffer", width, height, layout.encoding.value)

    # (H, W, 4) -> (W, H, 4); a contiguous copy keeps [x, y] access cache friendly
    return ChannelGrid(np.ascontiguousarray(channels.transpose(1, 0, 2)))
