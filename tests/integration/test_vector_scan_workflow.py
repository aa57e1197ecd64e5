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
Integration tests for the vector scan: tile range, fetching, decoding,
color counting and the summary report. Fetching is served from memory.
"""

import json

import pytest

from tctk.tools.scan_vector_tiles import read_tile_colors, scan_vector_tiles
from tctk.tools.tile_range import describe_tile_range
from tctk.utils.data_models import TileCoord, VectorColorCount
from tctk.utils.exceptions import FetchFailureError
from tctk.utils.script_arguments import RangeArguments, VectorScanArguments
from tctk.utils.traffic_constants import BatchStatus
from tests.fixtures.mock_tile_factory import make_vector_tile

TEMPLATE = "https://tiles.test/traffic/{z}/{x}/{y}.pbf"
VIEW = dict(lat=0.0, lon=0.0, zoom=1.0, width=100, height=100, tile_size=256)


@pytest.fixture
def traffic_tiles(tile_server):
    """Serve one colored tile, one colorless tile, one corrupt tile; the fourth is missing."""
    tile_server.tiles["https://tiles.test/traffic/1/0/0.pbf"] = make_vector_tile({'traffic': [2] * 10 + [None] * 5})
    tile_server.tiles["https://tiles.test/traffic/1/0/1.pbf"] = make_vector_tile({'roads': [None, None]})
    tile_server.tiles["https://tiles.test/traffic/1/1/0.pbf"] = b'not a tile'
    return tile_server


@pytest.mark.integration
class TestVectorScan:

    def test_summary(self, traffic_tiles, tmp_path):
        report = tmp_path / "vector.json"
        args = VectorScanArguments(url_template=TEMPLATE, output_path=report, **VIEW)
        summary, status = scan_vector_tiles(args)

        assert status is BatchStatus.COLORS_FOUND
        assert summary['tileZoom'] == 1
        assert summary['tileCount'] == 4
        assert summary['endpoint'] == TEMPLATE

        listed = summary['tilesWithTrafficColors']
        assert [t['tileId'] for t in listed] == ['1/0/0', '1/1/0', '1/1/1']
        assert listed[0] == {
            'tileId': '1/0/0',
            'url': 'https://tiles.test/traffic/1/0/0.pbf',
            'colors': [{'value': '2', 'hex': '#e60000', 'count': 10}],
        }
        assert listed[1]['error'].startswith("Could not decode vector tile")
        assert listed[2]['error'] == "404 Not Found"

        assert json.loads(report.read_text(encoding='utf-8')) == summary

    def test_requests_are_column_major(self, traffic_tiles, tmp_path):
        args = VectorScanArguments(url_template=TEMPLATE, output_path=tmp_path / "v.json", **VIEW)
        scan_vector_tiles(args)
        assert traffic_tiles.requested == [
            "https://tiles.test/traffic/1/0/0.pbf",
            "https://tiles.test/traffic/1/0/1.pbf",
            "https://tiles.test/traffic/1/1/0.pbf",
            "https://tiles.test/traffic/1/1/1.pbf",
        ]

    def test_tile_zoom_differs_from_display_zoom(self, tile_server, tmp_path):
        """The range is computed at the display zoom; the tiles are requested at the tile zoom."""
        args = VectorScanArguments(url_template=TEMPLATE, output_path=tmp_path / "v.json", tile_zoom=3, **VIEW)
        summary, status = scan_vector_tiles(args)
        assert summary['tileZoom'] == 3
        assert all(url.startswith("https://tiles.test/traffic/3/") for url in tile_server.requested)
        assert status is BatchStatus.NO_DATA

    def test_no_colors(self, tile_server, tmp_path):
        for x in (0, 1):
            for y in (0, 1):
                tile_server.tiles[f"https://tiles.test/traffic/1/{x}/{y}.pbf"] = make_vector_tile({'roads': [None]})
        args = VectorScanArguments(url_template=TEMPLATE, output_path=tmp_path / "v.json", **VIEW)
        summary, status = scan_vector_tiles(args)
        assert status is BatchStatus.NO_COLORS
        assert summary['tilesWithTrafficColors'] == []

    def test_markdown_report(self, traffic_tiles, tmp_path):
        report = tmp_path / "vector.md"
        args = VectorScanArguments(url_template=TEMPLATE, output_path=report, report_format='md', **VIEW)
        scan_vector_tiles(args)
        content = report.read_text(encoding='utf-8')
        assert "# Vector Traffic Color Report" in content
        assert "| 1/0/0 | 2 | #e60000 | 10 | |" in content
        assert "404 Not Found" in content

    def test_read_tile_colors_records_fetch_errors(self, tile_server):
        tile_server.tiles["https://tiles.test/traffic/9/1/1.pbf"] = FetchFailureError("503 Service Unavailable", status=503)
        result = read_tile_colors(TileCoord(9, 1, 1), TEMPLATE, timeout=1)
        assert result.error == "503 Service Unavailable"
        assert result.url == "https://tiles.test/traffic/9/1/1.pbf"

    def test_read_tile_colors(self, tile_server):
        tile_server.tiles["https://tiles.test/traffic/9/1/1.pbf"] = make_vector_tile({'a': [1, 3], 'b': [3]})
        result = read_tile_colors(TileCoord(9, 1, 1), TEMPLATE, timeout=1)
        assert result.succeeded
        assert sorted(result.colors, key=lambda c: c.value) == [
            VectorColorCount('1', '#000000', 1),
            VectorColorCount('3', '#ffaa00', 2),
        ]


@pytest.mark.integration
class TestTileRangeTool:

    def test_describe_tile_range(self, tmp_path):
        report = tmp_path / "range.json"
        result = describe_tile_range(RangeArguments(output_path=report, **VIEW))
        assert result['range'] == {'minX': 0, 'maxX': 1, 'minY': 0, 'maxY': 1}
        assert result['tileCount'] == 4
        assert result['tileZoom'] == 1
        assert result['centerPixel'] == {'x': 256.0, 'y': 256.0}
        assert result['tiles'] == ['1/0/0', '1/0/1', '1/1/0', '1/1/1']
        assert json.loads(report.read_text(encoding='utf-8')) == result
