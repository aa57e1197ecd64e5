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
Test fixtures and mock data factories for TCTK tests.

This package contains:
- MockTile: Factory for synthetic RGBA raster tiles (pixel buffers, PNG files)
- make_vector_tile: Builds Mapbox Vector Tile bytes with traffic color features
"""

from tests.fixtures.mock_tile_factory import MockTile, make_vector_tile

__all__ = ['MockTile', 'make_vector_tile']
