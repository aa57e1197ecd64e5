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
Traffic Color ToolKit (TCTK).

Checks that a traffic-congestion map layer renders by classifying the traffic
colors in raster tiles and counting the color values in vector tiles.
"""
from importlib import metadata

try:
    __version__ = metadata.version("traffic-color-toolkit")
except metadata.PackageNotFoundError:
    __version__ = "0.0.0-dev"
