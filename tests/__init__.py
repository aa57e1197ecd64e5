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
Traffic Color ToolKit Test Suite.

This package contains tests for TCTK components including:
- Unit tests for individual functions and classes
- Integration tests for the scanning tools with on-disk tiles and a faked endpoint
- End-to-end tests for CLI commands
"""
