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
Configuration Management for the Traffic Color ToolKit.

This module provides a singleton configuration manager (`Config`) that loads,
parses, and provides access to settings from the package's `config.toml`
file: the default map target, viewport, tile endpoints and HTTP timeout used
by the scanning tools. Values are loaded only once and shared by the CLI.

Classes:
    Config: A singleton class for managing application-wide configuration.
"""
import copy
import logging
import sys
from pathlib import Path
from typing import Any, Dict

import tctk.utils.traffic_constants as tc

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

logger = logging.getLogger(__name__)

CONFIG_PATH = Path(__file__).parent.parent / "config.toml"

class Config:
    """Singleton configuration manager"""
    _instance = None
    _config: Dict[str, Any] = {}

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._load_config()
        return cls._instance

    def _load_config(self):
        """Load configuration from config.toml, layered over the defaults"""
        self._config = self._default_config()
        if not CONFIG_PATH.exists():
            logger.debug(f"No config file at {CONFIG_PATH}, using defaults")
            return
        try:
            with open(CONFIG_PATH, "rb") as f:
                loaded = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.warning(f"Could not load config.toml: {e}")
            return
        for section, values in loaded.items():
            if isinstance(values, dict):
                self._config.setdefault(section, {}).update(values)
            else:
                self._config[section] = values

    def _default_config(self) -> Dict[str, Any]:
        """Default configuration if config.toml doesn't exist"""
        lat, lon, zoom = tc.DEFAULT_TARGET
        width, height = tc.DEFAULT_VIEWPORT
        return copy.deepcopy({
            "target": {
                "lat": lat,
                "lon": lon,
                "zoom": zoom,
            },
            "viewport": {
                "width": width,
                "height": height,
            },
            "tiles": {
                "size": tc.DEFAULT_TILE_SIZE,
                "min_tile_size": tc.DEFAULT_MIN_TILE_SIZE,
            },
            "vector": {
                "url_template": "",
            },
            "raster": {
                "url_template": "",
            },
            "http": {
                "timeout": tc.DEFAULT_HTTP_TIMEOUT,
            },
            "logging": {
                "level": "INFO",
            },
        })

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value using dot notation

        Args:
            key: Configuration key in dot notation (e.g., "target.zoom")
            default: Default value if key is not found

        Returns:
            Configuration value or default

        Example:
            >>> config.get("viewport.width")
            1280
        """
        keys = key.split(".")
        value = self._config
        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def reload(self):
        """Reload configuration from config.toml"""
        self._load_config()

# Singleton instance
config = Config()
