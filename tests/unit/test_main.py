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
Unit tests for the CLI parser and exit code mapping.
"""

from pathlib import Path

import pytest

from tctk.main import (
    EXIT_NO_DATA,
    EXIT_NO_TRAFFIC_COLORS,
    EXIT_OK,
    build_parser,
    exit_code_for,
)
from tctk.utils.traffic_constants import BatchStatus


@pytest.mark.unit
class TestExitCodeFor:

    @pytest.mark.parametrize("status, strict, expected", [
        (BatchStatus.COLORS_FOUND, False, EXIT_OK),
        (BatchStatus.COLORS_FOUND, True, EXIT_OK),
        (BatchStatus.NO_COLORS, False, EXIT_OK),
        (BatchStatus.NO_COLORS, True, EXIT_NO_TRAFFIC_COLORS),
        (BatchStatus.NO_TILES, True, EXIT_NO_TRAFFIC_COLORS),
        (BatchStatus.NO_DATA, False, EXIT_NO_DATA),
        (BatchStatus.NO_DATA, True, EXIT_NO_DATA),
    ])
    def test_mapping(self, status, strict, expected):
        assert exit_code_for(status, strict) == expected

    def test_every_tile_failing_is_never_success(self):
        assert exit_code_for(BatchStatus.NO_DATA) != EXIT_OK


@pytest.mark.unit
class TestBuildParser:

    def test_raster_options(self):
        args = build_parser().parse_args(['raster', '-i', 'tiles', '--strict', 'no', '--min-tile-size', '128'])
        assert args.tool == 'raster'
        assert args.input_path == Path('tiles')
        assert args.strict is False
        assert args.min_tile_size == 128

    def test_vector_template_default_from_config(self):
        args = build_parser().parse_args(['vector'])
        assert '{z}' in args.url_template
        assert args.report_format == 'json'

    def test_raster_sources_are_exclusive(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(['raster', '-i', 'tiles', '-u', 'https://t.test/{z}/{x}/{y}.png'])
