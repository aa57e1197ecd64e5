#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# ******************************************************************************
# Project: Traffic Color ToolKit (TCTK)
# Author: Eric Robeck <robeckgeo@gmail.com>
#
# Copyright (c) 2025, Eric Robeck
# Licensed under the MIT License
# ******************************************************************************

"""Allow running the toolkit with `python -m tctk`."""
from tctk.main import main

if __name__ == "__main__":
    main()
