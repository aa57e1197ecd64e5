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
Custom Exceptions Module.

A centralized module for custom exceptions used throughout the Traffic Color
ToolKit. Per-tile failures are raised with these types and recorded on the
tile's result record by the scanning tools.
"""

class TrafficColorError(Exception):
    """Base exception for traffic color analysis errors."""
    pass

class EmptyImageError(TrafficColorError):
    """Raised when a raster tile has zero width or height."""
    pass

class DecodeFailureError(TrafficColorError):
    """Raised when a raster image or vector tile payload cannot be decoded."""
    pass

class FetchFailureError(TrafficColorError):
    """Raised when a tile request fails or returns a non-2xx status."""

    def __init__(self, message: str, status: int = None):
        super().__init__(message)
        self.status = status

class GeometryDomainError(TrafficColorError, ValueError):
    """Raised when a latitude has no Web Mercator projection (e.g. the poles)."""
    pass
