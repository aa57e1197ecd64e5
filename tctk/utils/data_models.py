#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# ******************************************************************************
# Project: Traffic Color ToolKit (TCTK)
# Author: Eric Robeck <robeckgeo@gmail.com>
#
# Copyright (c) 2025, Eric Robeck
# Licensed under the MIT License
# ******************************************************************************

"""
Data Models for Traffic Color ToolKit.

This module defines strongly-typed data classes for representing tile inputs
and analysis results. These classes provide type safety, self-documentation,
and clear contracts between modules. All instances are request-scoped: they
are built fresh for each tile and never shared between tiles.

Input classes:
    PixelBuffer: Decoded RGBA raster tile
    MapView: Geographic center and display zoom
    Viewport: Screen size in pixels

Domain model classes (no suffix):
    ColorSample: Hue/saturation/lightness of one pixel
    TileCoord: Tile address in a tile pyramid
    TileRange: Inclusive tile column/row bounds covering a viewport

Result classes (*Summary / *Result suffix):
    TileColorSummary: Raster classification outcome for one tile
    VectorColorCount: Occurrence count of one vector color value
    VectorTileResult: Vector aggregation outcome for one tile
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Sequence

import numpy as np


# ============================================================================
# Input classes
# ============================================================================

@dataclass(frozen=True)
class PixelBuffer:
    """
    A decoded raster tile in the standard canvas pixel-buffer shape.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        data: Interleaved RGBA bytes, row-major, 4 bytes per pixel, no padding.

    Example:
        >>> buf = PixelBuffer(width=1, height=1, data=bytes([255, 0, 0, 255]))
        >>> buf.as_array().shape
        (1, 1, 4)
    """
    width: int
    height: int
    data: bytes = b''

    @classmethod
    def from_array(cls, array: np.ndarray) -> 'PixelBuffer':
        """
        Build a buffer from a (height, width, 4) array.

        Args:
            array: Array of RGBA values in [0, 255].

        Returns:
            PixelBuffer holding a copy of the array bytes.
        """
        if array.ndim != 3 or array.shape[2] != 4:
            raise ValueError(f"Expected an array of shape (height, width, 4), got {array.shape}")
        rgba = np.ascontiguousarray(array, dtype=np.uint8)
        return cls(width=int(rgba.shape[1]), height=int(rgba.shape[0]), data=rgba.tobytes())

    @property
    def is_empty(self) -> bool:
        return not self.width or not self.height

    def as_array(self) -> np.ndarray:
        """
        View the pixel data as a read-only (height, width, 4) uint8 array.

        Raises:
            ValueError: If the data is shorter than width * height * 4 bytes.
        """
        expected = self.width * self.height * 4
        flat = np.frombuffer(self.data, dtype=np.uint8)
        if flat.size < expected:
            raise ValueError(
                f"Pixel data holds {flat.size} bytes, expected {expected} for {self.width}x{self.height} RGBA"
            )
        return flat[:expected].reshape(self.height, self.width, 4)


@dataclass(frozen=True)
class MapView:
    """Map center and display zoom. The zoom may be fractional."""
    lat: float
    lon: float
    zoom: float


@dataclass(frozen=True)
class Viewport:
    """Viewport size in screen pixels."""
    width: float
    height: float


# ============================================================================
# Domain model classes
# ============================================================================

@dataclass(frozen=True)
class ColorSample:
    """
    Represents one pixel in HSL space.

    Attributes:
        hue: Degrees in [0, 360); 0 for achromatic pixels.
        saturation: In [0, 1].
        lightness: In [0, 1].
    """
    hue: float
    saturation: float
    lightness: float


@dataclass(frozen=True)
class TileCoord:
    """Represents one tile in a standard z/x/y tile pyramid."""
    z: int
    x: int
    y: int

    @property
    def tile_id(self) -> str:
        return f"{self.z}/{self.x}/{self.y}"

    def format_url(self, template: str) -> str:
        """Substitute this tile into a `{z}/{x}/{y}` URL template."""
        return (template.replace('{z}', str(self.z))
                        .replace('{x}', str(self.x))
                        .replace('{y}', str(self.y)))


@dataclass(frozen=True)
class TileRange:
    """
    Inclusive tile index bounds covering a viewport.

    Attributes:
        min_x: First tile column.
        max_x: Last tile column.
        min_y: First tile row.
        max_y: Last tile row.
    """
    min_x: int
    max_x: int
    min_y: int
    max_y: int

    @property
    def width(self) -> int:
        return self.max_x - self.min_x + 1

    @property
    def height(self) -> int:
        return self.max_y - self.min_y + 1

    @property
    def tile_count(self) -> int:
        return max(0, self.width) * max(0, self.height)

    def tiles(self, z: int) -> Iterator[TileCoord]:
        """Yield every tile in the range at zoom `z`, column by column."""
        for x in range(self.min_x, self.max_x + 1):
            for y in range(self.min_y, self.max_y + 1):
                yield TileCoord(z, x, y)

    def to_dict(self) -> Dict[str, int]:
        return {'minX': self.min_x, 'maxX': self.max_x, 'minY': self.min_y, 'maxY': self.max_y}


# ============================================================================
# Result classes
# ============================================================================

@dataclass
class TileColorSummary:
    """
    Raster classification outcome for one tile.

    Attributes:
        tile_id: `z/x/y` key, or a synthesized fallback such as 'tiles-tile-3'.
        colors: Buckets that met the significance threshold, in bucket order.
        color_counts: Raw sample count for every bucket (empty on error).
        sample_count: Samples that passed quality filters and got a bucket.
        error: Why the tile could not be analyzed, if it could not.
        src: Where the tile came from (file path or URL), if known.
    """
    tile_id: str
    colors: List[str] = field(default_factory=list)
    color_counts: Dict[str, int] = field(default_factory=dict)
    sample_count: int = 0
    error: Optional[str] = None
    src: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None

    @property
    def has_colors(self) -> bool:
        return self.succeeded and len(self.colors) > 0

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            'tileId': self.tile_id,
            'colors': list(self.colors),
            'colorCounts': dict(self.color_counts),
            'sampleCount': self.sample_count,
        }
        if self.error is not None:
            result['error'] = self.error
        if self.src is not None:
            result['src'] = self.src
        return result


@dataclass(frozen=True)
class VectorColorCount:
    """
    Occurrence count of one `color` property value within a vector tile.

    Attributes:
        value: Normalized string form of the property value.
        hex: Display color, or None when the value is not in the lookup table.
        count: Number of features carrying this value.
    """
    value: str
    hex: Optional[str]
    count: int

    def to_dict(self) -> Dict[str, Any]:
        return {'value': self.value, 'hex': self.hex, 'count': self.count}


@dataclass
class VectorTileResult:
    """Vector aggregation outcome for one tile: either colors or an error."""
    tile_id: str
    url: str
    colors: Sequence[VectorColorCount] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None

    @property
    def has_colors(self) -> bool:
        return self.succeeded and len(self.colors) > 0

    def to_dict(self) -> Dict[str, Any]:
        if self.error is not None:
            return {'tileId': self.tile_id, 'url': self.url, 'error': self.error}
        return {
            'tileId': self.tile_id,
            'url': self.url,
            'colors': [c.to_dict() for c in self.colors],
        }
