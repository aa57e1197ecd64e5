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
File and Directory Path Utilities for TCTK.

This module provides helper functions for locating rendered tile images on
disk, such as a `{z}/{x}/{y}.png` tile cache or a folder of tiles saved from a
map viewer.
"""
import os
from pathlib import Path
import logging
from typing import List, Union
from tctk.utils.traffic_constants import RASTER_EXTENSIONS

logger = logging.getLogger(__name__)

def is_tile_image(path: Union[str, Path]) -> bool:
    """True if the file has a supported raster tile extension."""
    return str(path).lower().endswith(RASTER_EXTENSIONS)

def find_tile_images(input_path: Union[str, Path]) -> List[Path]:
    """
    Get a sorted list of tile images from an input path (file or directory).

    Args:
        input_path: The path to a single image or a directory searched recursively.

    Returns:
        List[Path]: Paths to tile images, in a stable order.
    """
    input_path = Path(input_path)
    tile_files: List[Path] = []
    if input_path.is_dir():
        for root, dirs, files in os.walk(input_path):
            dirs.sort()
            for file in sorted(files):
                if is_tile_image(file):
                    tile_files.append(Path(root) / file)
    elif input_path.is_file():
        if is_tile_image(input_path):
            tile_files.append(input_path)
        else:
            logger.warning(f"Not a supported tile image: {input_path}")
    logger.debug(f"Found {len(tile_files)} tile image(s) under {input_path}")
    return tile_files
