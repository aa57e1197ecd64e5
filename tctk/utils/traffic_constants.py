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
Shared Constants and Default Values for Traffic Color Analysis.

This module centralizes the thresholds used by the raster pixel classifier,
the default map view used by the scanning tools, and the enumerations shared
between modules. It provides a single source of truth for these values.

Classes:
    ColorBucket: Enum for the traffic color categories.
    BatchStatus: Enum for the overall outcome of a tile batch.
    ReportFormat: Enum for the supported report formats.
"""
from enum import Enum

# --- Helper Accessors ---

def min_significant_count(sample_count: int) -> int:
    """Smallest bucket count that is reported as a detected color."""
    return max(MIN_BUCKET_COUNT, int(sample_count * MIN_BUCKET_SHARE))

def sampling_step(width: int, height: int) -> int:
    """Pixel stride so roughly SAMPLES_PER_SIDE samples span the shorter side."""
    return max(1, min(width, height) // SAMPLES_PER_SIDE)


# --- Enumerations ---

class ColorBucket(Enum):
    """Enumeration of traffic color categories."""
    GREEN = 'green'
    YELLOW = 'yellow'
    ORANGE = 'orange'
    RED = 'red'
    DARK_RED = 'dark red'
    NONE = 'none'

class BatchStatus(Enum):
    """Enumeration of batch outcomes."""
    NO_TILES = 'no-tiles'
    NO_DATA = 'no-data'
    NO_COLORS = 'no-colors'
    COLORS_FOUND = 'colors-found'

class ReportFormat(Enum):
    """Enumeration of report output formats."""
    JSON = 'json'
    MARKDOWN = 'md'


# Buckets in reporting order (excludes NONE)
TRAFFIC_BUCKETS = (
    ColorBucket.GREEN,
    ColorBucket.YELLOW,
    ColorBucket.ORANGE,
    ColorBucket.RED,
    ColorBucket.DARK_RED,
)

# --- Classifier Thresholds ---

SAMPLES_PER_SIDE = 32
MIN_ALPHA = 60
MIN_SATURATION = 0.25
MIN_LIGHTNESS = 0.2
MAX_LIGHTNESS = 0.95
DARK_RED_MAX_LIGHTNESS = 0.45

# Significance filter
MIN_BUCKET_COUNT = 5
MIN_BUCKET_SHARE = 0.02

# Hue ranges in degrees
GREEN_HUE_RANGE = (75.0, 160.0)     # inclusive on both ends
YELLOW_HUE_RANGE = (45.0, 75.0)     # [min, max)
ORANGE_HUE_RANGE = (20.0, 45.0)     # [min, max)
RED_HUE_MAX = 20.0                  # hue < RED_HUE_MAX
RED_HUE_WRAP = 340.0                # or hue >= RED_HUE_WRAP


# --- Default Parameter Values ---

DEFAULT_TILE_SIZE = 512
DEFAULT_MIN_TILE_SIZE = 64
DEFAULT_VIEWPORT = (1280, 720)
DEFAULT_TARGET = (48.8581, 2.3727, 9.04)  # lat, lon, zoom
DEFAULT_HTTP_TIMEOUT = 30.0

# Max length of a tile source before it is shortened in reports
MAX_SOURCE_LENGTH = 180

RASTER_EXTENSIONS = ('.png', '.jpg', '.jpeg', '.webp', '.tif', '.tiff')
