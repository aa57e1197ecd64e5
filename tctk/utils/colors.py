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
Color Constants and Logic.

This module provides a centralized source for the display colors of traffic
buckets (raster analysis) and of the integer `color` property carried by
traffic vector tiles.
"""

from typing import Any, Dict, Optional

# Display hex for the vector tile `color` property, keyed by normalized value
VECTOR_COLOR_HEX = {
    '1': '#000000',
    '2': '#e60000',
    '3': '#ffaa00',
}

# Representative swatches for raster buckets, used in Markdown reports
BUCKET_COLOR_MAP = {
    'green': '#30b050',
    'yellow': '#f0d020',
    'orange': '#ff8c00',
    'red': '#e60000',
    'dark red': '#8b0000',
}

def normalize_color_value(value: Any) -> str:
    """
    Normalize a raw `color` property to its string key.

    Integer-valued floats collapse onto the integer form so that 2, 2.0 and "2"
    share one key. Booleans use lowercase literals.

    Args:
        value: The raw property value decoded from the tile.

    Returns:
        The string key used for counting and hex lookup.
    """
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)

def resolve_vector_hex(value: Any) -> Optional[str]:
    """Get the display hex for a vector color value, or None if unknown."""
    return VECTOR_COLOR_HEX.get(normalize_color_value(value))

def get_bucket_color_map() -> Dict[str, str]:
    """Get a map of bucket name -> swatch color."""
    return dict(BUCKET_COLOR_MAP)
