"""
Pixel extraction module.

Turns a raw pixel buffer into a per-pixel RGBA ChannelGrid.
"""

from .extractor import (
    CHANNELS,
    PixelEncoding,
    PixelLayout,
    ChannelGrid,
    extract_channels
)

__all__ = [
    'CHANNELS',
    'PixelEncoding',
    'PixelLayout',
    'ChannelGrid',
    'extract_channels'
]
