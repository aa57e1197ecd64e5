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
Raster Pixel Classifier.

Samples a grid of pixels from a decoded raster tile, converts each sample to
HSL and buckets it into a traffic color (green, yellow, orange, red, dark red).
Returns the significant buckets together with the raw per-bucket counts.

The scalar helpers `rgb_to_hsl` and `bucket_for` define the classification
rules. `classify_pixels` applies the same rules to all samples at once with
numpy and produces identical results.
"""

import logging
from typing import Dict, Tuple

import numpy as np

import tctk.utils.traffic_constants as tc
from tctk.utils.data_models import ColorSample, PixelBuffer, TileColorSummary
from tctk.utils.exceptions import DecodeFailureError
from tctk.utils.traffic_constants import ColorBucket, TRAFFIC_BUCKETS

logger = logging.getLogger(__name__)

EMPTY_IMAGE_ERROR = 'empty-image'
NO_BUCKET = -1


def rgb_to_hsl(r: int, g: int, b: int) -> ColorSample:
    """
    Convert an RGB triple (0-255 channels) to hue, saturation and lightness.

    Args:
        r: Red channel.
        g: Green channel.
        b: Blue channel.

    Returns:
        ColorSample with hue in degrees and saturation/lightness in [0, 1].
        Achromatic pixels get hue 0 and saturation 0.
    """
    r_norm = r / 255
    g_norm = g / 255
    b_norm = b / 255
    max_c = max(r_norm, g_norm, b_norm)
    min_c = min(r_norm, g_norm, b_norm)
    h = 0.0
    s = 0.0
    l = (max_c + min_c) / 2
    if max_c != min_c:
        d = max_c - min_c
        s = d / (2 - max_c - min_c) if l > 0.5 else d / (max_c + min_c)
        if max_c == r_norm:
            h = (g_norm - b_norm) / d + (6 if g_norm < b_norm else 0)
        elif max_c == g_norm:
            h = (b_norm - r_norm) / d + 2
        else:
            h = (r_norm - g_norm) / d + 4
        h *= 60
    return ColorSample(hue=h, saturation=s, lightness=l)


def bucket_for(hue: float, lightness: float) -> ColorBucket:
    """
    Map a hue and lightness to a traffic color bucket (first match wins).

    Args:
        hue: Hue in degrees.
        lightness: Lightness in [0, 1]; only used to split red from dark red.

    Returns:
        The matching ColorBucket, or ColorBucket.NONE.
    """
    if tc.GREEN_HUE_RANGE[0] <= hue <= tc.GREEN_HUE_RANGE[1]:
        return ColorBucket.GREEN
    if tc.YELLOW_HUE_RANGE[0] <= hue < tc.YELLOW_HUE_RANGE[1]:
        return ColorBucket.YELLOW
    if tc.ORANGE_HUE_RANGE[0] <= hue < tc.ORANGE_HUE_RANGE[1]:
        return ColorBucket.ORANGE
    if hue < tc.RED_HUE_MAX or hue >= tc.RED_HUE_WRAP:
        return ColorBucket.DARK_RED if lightness < tc.DARK_RED_MAX_LIGHTNESS else ColorBucket.RED
    return ColorBucket.NONE


def is_quality_sample(sample: ColorSample) -> bool:
    """True if the sample is saturated and neither near-black nor near-white."""
    return not (
        sample.saturation < tc.MIN_SATURATION
        or sample.lightness < tc.MIN_LIGHTNESS
        or sample.lightness > tc.MAX_LIGHTNESS
    )


def classify_pixel(r: int, g: int, b: int, a: int = 255) -> ColorBucket:
    """Classify a single RGBA pixel, applying the alpha and quality filters."""
    if a < tc.MIN_ALPHA:
        return ColorBucket.NONE
    sample = rgb_to_hsl(r, g, b)
    if not is_quality_sample(sample):
        return ColorBucket.NONE
    return bucket_for(sample.hue, sample.lightness)


def rgb_to_hsl_array(rgb: np.ndarray) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Vectorized `rgb_to_hsl` over an (N, 3) array of 0-255 channels.

    Returns:
        Tuple of (hue, saturation, lightness) float64 arrays of length N.
    """
    norm = rgb.astype(np.float64) / 255
    r, g, b = norm[:, 0], norm[:, 1], norm[:, 2]
    max_c = norm.max(axis=1)
    min_c = norm.min(axis=1)
    l = (max_c + min_c) / 2
    d = max_c - min_c
    chromatic = max_c != min_c

    with np.errstate(divide='ignore', invalid='ignore'):
        s = np.where(l > 0.5, d / (2 - max_c - min_c), d / (max_c + min_c))
        h_red = (g - b) / d + np.where(g < b, 6, 0)
        h_green = (b - r) / d + 2
        h_blue = (r - g) / d + 4
        h = np.select([max_c == r, max_c == g], [h_red, h_green], default=h_blue) * 60

    s = np.where(chromatic, s, 0.0)
    h = np.where(chromatic, h, 0.0)
    return h, s, l


def bucket_array(hue: np.ndarray, lightness: np.ndarray) -> np.ndarray:
    """
    Vectorized `bucket_for`.

    Returns:
        Array of indexes into TRAFFIC_BUCKETS, with NO_BUCKET where unmatched.
    """
    is_red = (hue < tc.RED_HUE_MAX) | (hue >= tc.RED_HUE_WRAP)
    conditions = [
        (hue >= tc.GREEN_HUE_RANGE[0]) & (hue <= tc.GREEN_HUE_RANGE[1]),
        (hue >= tc.YELLOW_HUE_RANGE[0]) & (hue < tc.YELLOW_HUE_RANGE[1]),
        (hue >= tc.ORANGE_HUE_RANGE[0]) & (hue < tc.ORANGE_HUE_RANGE[1]),
        is_red & (lightness < tc.DARK_RED_MAX_LIGHTNESS),
        is_red,
    ]
    choices = [
        TRAFFIC_BUCKETS.index(ColorBucket.GREEN),
        TRAFFIC_BUCKETS.index(ColorBucket.YELLOW),
        TRAFFIC_BUCKETS.index(ColorBucket.ORANGE),
        TRAFFIC_BUCKETS.index(ColorBucket.DARK_RED),
        TRAFFIC_BUCKETS.index(ColorBucket.RED),
    ]
    return np.select(conditions, choices, default=NO_BUCKET)


def _sample_grid(pixels: np.ndarray) -> np.ndarray:
    """Take every `step`-th pixel in both dimensions and flatten to (N, 4)."""
    height, width = pixels.shape[:2]
    step = tc.sampling_step(width, height)
    logger.debug(f"Sampling {width}x{height} tile with a stride of {step} px")
    return pixels[::step, ::step].reshape(-1, 4)


def count_buckets(pixels: np.ndarray) -> Dict[str, int]:
    """
    Count grid samples per traffic bucket.

    Args:
        pixels: (height, width, 4) RGBA array.

    Returns:
        Dict with every bucket name mapped to its sample count.
    """
    samples = _sample_grid(pixels)
    samples = samples[samples[:, 3] >= tc.MIN_ALPHA]

    h, s, l = rgb_to_hsl_array(samples[:, :3])
    quality = (s >= tc.MIN_SATURATION) & (l >= tc.MIN_LIGHTNESS) & (l <= tc.MAX_LIGHTNESS)
    buckets = bucket_array(h[quality], l[quality])

    return {b.value: int(np.count_nonzero(buckets == i)) for i, b in enumerate(TRAFFIC_BUCKETS)}


def significant_colors(counts: Dict[str, int], sample_count: int):
    """Bucket names whose count reaches the significance threshold, in bucket order."""
    threshold = tc.min_significant_count(sample_count)
    return [b.value for b in TRAFFIC_BUCKETS if counts.get(b.value, 0) >= threshold]


def classify_pixels(buffer: PixelBuffer, tile_id: str = 'tile') -> TileColorSummary:
    """
    Classify the traffic colors present in a raster tile.

    Args:
        buffer: Decoded RGBA tile.
        tile_id: Key recorded on the summary.

    Returns:
        TileColorSummary. Zero-size tiles yield an 'empty-image' error with
        empty colors and counts.

    Raises:
        DecodeFailureError: If the pixel data is shorter than the dimensions require.
    """
    if buffer.is_empty:
        logger.debug(f"Tile {tile_id} has no pixels ({buffer.width}x{buffer.height})")
        return TileColorSummary(tile_id=tile_id, error=EMPTY_IMAGE_ERROR)

    try:
        pixels = buffer.as_array()
    except ValueError as e:
        raise DecodeFailureError(str(e)) from e

    counts = count_buckets(pixels)
    sample_count = sum(counts.values())
    colors = significant_colors(counts, sample_count)
    logger.debug(f"Tile {tile_id}: {sample_count} usable samples, colors={colors}")

    return TileColorSummary(
        tile_id=tile_id,
        colors=colors,
        color_counts=counts,
        sample_count=sample_count,
    )
