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
Pytest configuration and shared fixtures for TCTK test suite.

This module provides:
- Shared fixtures for common tiles and map views
- A fetch stub that serves tile bytes from a dict instead of the network

Fixtures are organized by scope:
- session: Created once per test session (expensive setup)
- function: Created for each test function (default)

Example:
    >>> def test_using_fixture(green_tile):
    ...     '''Test using the green_tile fixture.'''
    ...     assert green_tile.width == 256
"""

from typing import Dict, List

import pytest

# pythonpath is configured in pyproject.toml to include project root
from tests.fixtures.mock_tile_factory import (
    TRAFFIC_GREEN,
    TRAFFIC_RED,
    MockTile,
)
from tctk.utils.data_models import MapView, Viewport
from tctk.utils.exceptions import FetchFailureError


# =============================================================================
# Session-scope Fixtures (Created once per test session)
# =============================================================================

@pytest.fixture(scope="session")
def temp_dir(tmp_path_factory):
    """
    Create a temporary directory for the entire test session.

    Returns:
        Path: Path to temporary directory
    """
    return tmp_path_factory.mktemp("tctk_tests")


# =============================================================================
# Function-scope Fixtures (Created for each test)
# =============================================================================

@pytest.fixture
def green_tile():
    """A 256x256 opaque tile painted entirely in free-flow green."""
    return MockTile(width=256, height=256, fill=TRAFFIC_GREEN)


@pytest.fixture
def mixed_tile():
    """
    A 256x256 transparent tile with a green top half and a red bottom quarter.

    Of the 32x32 sample grid, 512 samples are green, 256 red and the rest
    transparent.
    """
    tile = MockTile(width=256, height=256)
    tile.paint(TRAFFIC_GREEN, rows=slice(0, 128))
    tile.paint(TRAFFIC_RED, rows=slice(192, 256))
    return tile


@pytest.fixture
def blank_tile():
    """A 256x256 fully transparent tile (a basemap tile with no traffic)."""
    return MockTile(width=256, height=256)


@pytest.fixture
def small_view():
    """
    Map view at the equator and prime meridian, zoom 1.

    With 256 px tiles and a 100x100 viewport this covers tiles x 0..1, y 0..1.
    """
    return MapView(lat=0.0, lon=0.0, zoom=1.0), Viewport(width=100, height=100)


class FakeTileServer:
    """
    In-memory stand-in for `fetch_tile_bytes`.

    Attributes:
        tiles: URL -> payload bytes, or an Exception to raise for that URL.
        requested: URLs fetched, in request order.
    """

    def __init__(self):
        self.tiles: Dict[str, object] = {}
        self.requested: List[str] = []

    def fetch(self, url: str, timeout: float = None) -> bytes:
        self.requested.append(url)
        payload = self.tiles.get(url)
        if payload is None:
            raise FetchFailureError("404 Not Found", status=404)
        if isinstance(payload, Exception):
            raise payload
        return payload


@pytest.fixture
def tile_server(monkeypatch):
    """
    Replace HTTP fetching in both scanning tools with a FakeTileServer.

    URLs not registered in `tile_server.tiles` fail with '404 Not Found'.

    Example:
        >>> def test_scan(tile_server):
        ...     tile_server.tiles['https://tiles.test/1/0/0.pbf'] = b'...'
    """
    server = FakeTileServer()
    monkeypatch.setattr('tctk.tools.scan_vector_tiles.fetch_tile_bytes', server.fetch)
    monkeypatch.setattr('tctk.tools.scan_raster_tiles.fetch_tile_bytes', server.fetch)
    return server

