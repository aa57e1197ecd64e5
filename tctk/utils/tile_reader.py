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
Raster Tile Reader.

Decodes raster tile images (PNG, JPEG, WebP, TIFF) into RGBA pixel buffers
using GDAL. Tiles can be read from disk or from raw bytes fetched over HTTP;
bytes are staged in GDAL's /vsimem/ virtual file system for the duration of
the read.

Band layouts are normalized to RGBA:
    1 band      grey, replicated to RGB, opaque
    1 band      paletted, expanded through its color table
    2 bands     grey + alpha
    3 bands     RGB, opaque
    4+ bands    RGBA (extra bands ignored)

Bands wider than 8 bits (e.g. 16-bit PNG) are rescaled to 0-255 from the full
range of their integer type.
"""

import logging
import uuid
from pathlib import Path
from typing import Union

import numpy as np
from osgeo import gdal

from tctk.utils.data_models import PixelBuffer
from tctk.utils.exceptions import DecodeFailureError, EmptyImageError

gdal.UseExceptions()
logger = logging.getLogger(__name__)


def _to_byte(array: np.ndarray) -> np.ndarray:
    """Scale a band to 0-255. Integer bands are rescaled from their full type range."""
    if array.dtype == np.uint8:
        return array
    if np.issubdtype(array.dtype, np.integer):
        max_value = np.iinfo(array.dtype).max
        scaled = np.clip(array, 0, None).astype(np.float64) * 255 / max_value
        return np.rint(scaled).astype(np.uint8)
    return np.clip(array, 0, 255).astype(np.uint8)


def _expand_palette(band: gdal.Band) -> np.ndarray:
    """Expand a paletted band to an (height, width, 4) RGBA array."""
    color_table = band.GetRasterColorTable()
    indexes = band.ReadAsArray()
    size = max(color_table.GetCount(), int(indexes.max()) + 1 if indexes.size else 0)
    lut = np.zeros((size, 4), dtype=np.uint8)
    for i in range(color_table.GetCount()):
        lut[i] = color_table.GetColorEntry(i)
    return lut[indexes]


def dataset_to_rgba(ds: gdal.Dataset) -> np.ndarray:
    """
    Read a GDAL dataset as a (height, width, 4) uint8 RGBA array.

    Args:
        ds: An open GDAL dataset.

    Returns:
        RGBA numpy array.

    Raises:
        EmptyImageError: If the dataset has no pixels or no bands.
    """
    width, height, band_count = ds.RasterXSize, ds.RasterYSize, ds.RasterCount
    if not width or not height or not band_count:
        raise EmptyImageError('empty-image')

    first_band = ds.GetRasterBand(1)
    if band_count == 1 and first_band.GetRasterColorTable() is not None:
        logger.debug("Expanding paletted band through its color table")
        return _expand_palette(first_band)

    bands = [_to_byte(ds.GetRasterBand(i + 1).ReadAsArray()) for i in range(min(band_count, 4))]
    opaque = np.full((height, width), 255, dtype=np.uint8)

    if band_count == 1:
        grey = bands[0]
        channels = [grey, grey, grey, opaque]
    elif band_count == 2:
        grey, alpha = bands
        channels = [grey, grey, grey, alpha]
    elif band_count == 3:
        channels = bands + [opaque]
    else:
        channels = bands
    return np.stack(channels, axis=-1)


def _read_path(path: str) -> PixelBuffer:
    try:
        ds = gdal.Open(path, gdal.GA_ReadOnly)
    except RuntimeError as e:
        raise DecodeFailureError(f"Could not decode raster tile: {e}") from e
    if ds is None:
        raise DecodeFailureError(f"Could not decode raster tile: {path}")
    try:
        rgba = dataset_to_rgba(ds)
    except RuntimeError as e:
        raise DecodeFailureError(f"Could not read raster tile pixels: {e}") from e
    finally:
        ds = None
    return PixelBuffer.from_array(rgba)


def read_pixel_buffer(source: Union[str, Path, bytes]) -> PixelBuffer:
    """
    Decode a raster tile into a PixelBuffer.

    Args:
        source: Path to an image file, or the raw image bytes.

    Returns:
        PixelBuffer with RGBA data.

    Raises:
        DecodeFailureError: If GDAL cannot open or read the image.
        EmptyImageError: If the image has no pixels.
    """
    if isinstance(source, (bytes, bytearray)):
        if not source:
            raise DecodeFailureError("Could not decode raster tile: empty payload")
        vsi_path = f"/vsimem/tctk_{uuid.uuid4().hex}"
        gdal.FileFromMemBuffer(vsi_path, bytes(source))
        try:
            return _read_path(vsi_path)
        finally:
            gdal.Unlink(vsi_path)
    return _read_path(str(source))
