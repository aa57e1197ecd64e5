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
Vector Feature Color Aggregator.

Counts the distinct values of the `color` property across every feature of
every layer in a decoded Mapbox Vector Tile, and resolves known values to a
display hex color. Decoding is delegated to `mapbox_vector_tile`.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

import mapbox_vector_tile

from tctk.utils.colors import normalize_color_value, resolve_vector_hex
from tctk.utils.data_models import VectorColorCount
from tctk.utils.exceptions import DecodeFailureError

logger = logging.getLogger(__name__)

COLOR_PROPERTY = 'color'


def decode_vector_tile(payload: bytes) -> Dict[str, Any]:
    """
    Decode a Mapbox Vector Tile protobuf payload.

    Args:
        payload: Raw tile bytes as served by the tile server.

    Returns:
        Mapping of layer name -> layer dict with a 'features' list.

    Raises:
        DecodeFailureError: If the payload is not a valid vector tile.
    """
    try:
        return mapbox_vector_tile.decode(payload)
    except Exception as e:
        raise DecodeFailureError(f"Could not decode vector tile ({len(payload)} bytes): {e}") from e


def _layer_features(layer: Any) -> Sequence[Any]:
    """Return the indexable feature sequence of a decoded layer."""
    if isinstance(layer, Mapping):
        return layer.get('features') or []
    return layer


def _feature_properties(feature: Any) -> Optional[Mapping[str, Any]]:
    if isinstance(feature, Mapping):
        return feature.get('properties')
    return getattr(feature, 'properties', None)


def count_feature_colors(tile: Mapping[str, Any]) -> List[VectorColorCount]:
    """
    Tally the `color` property of every feature in a decoded tile.

    Features without the property (or with a null value) are skipped.
    Numeric and string forms of the same value share one count. Values not in
    the display table are still returned, with `hex=None`.

    Args:
        tile: Decoded tile, layer name -> layer.

    Returns:
        One VectorColorCount per distinct value, in first-seen order.
    """
    counts: Dict[str, int] = {}
    for layer_name, layer in tile.items():
        features = _layer_features(layer)
        skipped = 0
        for i in range(len(features)):
            properties = _feature_properties(features[i])
            value = properties.get(COLOR_PROPERTY) if properties else None
            if value is None:
                skipped += 1
                continue
            key = normalize_color_value(value)
            counts[key] = counts.get(key, 0) + 1
        logger.debug(f"Layer '{layer_name}': {len(features)} features, {skipped} without a color")

    return [VectorColorCount(value=key, hex=resolve_vector_hex(key), count=count)
            for key, count in counts.items()]


def aggregate_tile_colors(payload: bytes) -> List[VectorColorCount]:
    """Decode a vector tile payload and count its feature colors."""
    return count_feature_colors(decode_vector_tile(payload))
