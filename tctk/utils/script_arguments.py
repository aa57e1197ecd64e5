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
Dataclass-based Argument Models for TCTK Tools.

This module defines strongly-typed dataclasses for parsing and validating the
command-line arguments for each tool (`range`, `vector`, `raster`). It uses
`__post_init__` for validation and resolving context-aware default values,
ensuring that the core logic receives clean and validated inputs.

Classes:
    BaseArguments: A base dataclass for the map view shared by all tools.
    RangeArguments: Arguments for the tile range tool.
    VectorScanArguments: Arguments for the vector tile scan.
    RasterScanArguments: Arguments for the raster tile scan.
"""
import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import tctk.utils.traffic_constants as tc
from tctk.utils.data_models import MapView, Viewport
from tctk.utils.traffic_constants import ReportFormat

logger = logging.getLogger(__name__)

TEMPLATE_PLACEHOLDERS = ('{z}', '{x}', '{y}')

@dataclass
class BaseArguments:
    """A base dataclass for the map view shared by all tools."""
    lat: float = tc.DEFAULT_TARGET[0]
    lon: float = tc.DEFAULT_TARGET[1]
    zoom: float = tc.DEFAULT_TARGET[2]
    tile_zoom: Optional[int] = None
    width: int = tc.DEFAULT_VIEWPORT[0]
    height: int = tc.DEFAULT_VIEWPORT[1]
    tile_size: int = tc.DEFAULT_TILE_SIZE
    output_path: Optional[Path] = None
    report_format: str = ReportFormat.JSON.value
    log_file: Optional[Path] = None
    verbose: bool = False

    def __post_init__(self):
        """Validation and default resolution for the map view."""
        if self.output_path and isinstance(self.output_path, str):
            self.output_path = Path(self.output_path)
        try:
            self._validate_view()
            self._resolve_defaults()
        except ValueError as e:
            self.handle_error(str(e))

    def handle_error(self, message: str):
        """Logs an error and raises ValueError."""
        logger.error(message)
        raise ValueError(message)

    def _validate_view(self):
        """Perform validation checks for the map view."""
        if not -90 < self.lat < 90:
            raise ValueError(f"Latitude must be strictly between -90 and 90, got {self.lat}")
        if self.zoom < 0:
            raise ValueError(f"Zoom must not be negative, got {self.zoom}")
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Viewport must be positive, got {self.width}x{self.height}")
        if self.tile_size <= 0:
            raise ValueError(f"Tile size must be positive, got {self.tile_size}")
        if self.tile_zoom is not None and self.tile_zoom < 0:
            raise ValueError(f"Tile zoom must not be negative, got {self.tile_zoom}")
        if self.report_format not in [f.value for f in ReportFormat]:
            raise ValueError(f"Unsupported report format: {self.report_format}")

    def _resolve_defaults(self):
        """Set context-aware default values."""
        if self.tile_zoom is None:
            self.tile_zoom = math.floor(self.zoom)

    @property
    def view(self) -> MapView:
        return MapView(lat=self.lat, lon=self.lon, zoom=self.zoom)

    @property
    def viewport(self) -> Viewport:
        return Viewport(width=self.width, height=self.height)

def _validate_template(template: str, name: str):
    missing = [p for p in TEMPLATE_PLACEHOLDERS if p not in template]
    if missing:
        raise ValueError(f"{name} is missing placeholder(s) {', '.join(missing)}: {template}")

@dataclass
class RangeArguments(BaseArguments):
    """Arguments for the tile range tool."""
    pass

@dataclass
class VectorScanArguments(BaseArguments):
    """Arguments for the vector tile scan."""
    url_template: Optional[str] = None
    timeout: float = tc.DEFAULT_HTTP_TIMEOUT

    def __post_init__(self):
        """Validation for vector scan arguments."""
        super().__post_init__()
        try:
            self._validate_vector()
        except ValueError as e:
            self.handle_error(str(e))

    def _validate_vector(self):
        if not self.url_template:
            raise ValueError("A vector tile URL template is required (--url-template or [vector] url_template).")
        _validate_template(self.url_template, "Vector tile URL template")
        if self.timeout <= 0:
            raise ValueError(f"Timeout must be positive, got {self.timeout}")

@dataclass
class RasterScanArguments(BaseArguments):
    """Arguments for the raster tile scan: tile images on disk or a raster endpoint."""
    input_path: Optional[Path] = None
    url_template: Optional[str] = None
    min_tile_size: int = tc.DEFAULT_MIN_TILE_SIZE
    timeout: float = tc.DEFAULT_HTTP_TIMEOUT
    strict: bool = True

    def __post_init__(self):
        """Validation for raster scan arguments."""
        if self.input_path and isinstance(self.input_path, str):
            self.input_path = Path(self.input_path)
        super().__post_init__()
        try:
            self._validate_raster()
        except ValueError as e:
            self.handle_error(str(e))

    def _validate_raster(self):
        if (self.input_path is None) == (not self.url_template):
            raise ValueError("Exactly one of an input path or a raster tile URL template is required.")
        if self.input_path is not None and not self.input_path.exists():
            raise ValueError(f"Input path not found: {self.input_path}")
        if self.url_template:
            _validate_template(self.url_template, "Raster tile URL template")
        if self.min_tile_size < 0:
            raise ValueError(f"Minimum tile size must not be negative, got {self.min_tile_size}")
        if self.timeout <= 0:
            raise ValueError(f"Timeout must be positive, got {self.timeout}")
