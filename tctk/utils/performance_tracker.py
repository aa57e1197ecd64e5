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
Performance Tracker for Tile Scans.

This module provides the `PerformanceTracker` class, used by the scanning
tools to time the fetch, decode and classification steps. A step may run once
per tile; its durations accumulate so the summary shows the total and the
per-tile average for each step.

Classes:
    PerformanceTracker: A class to manage named, accumulating timers.
"""
import logging
import time
from typing import Dict

logger = logging.getLogger(__name__)

class PerformanceTracker:
    """A class to track the accumulated duration of repeated processing steps."""

    def __init__(self):
        self.timings: Dict[str, float] = {}
        self.calls: Dict[str, int] = {}
        self._start_times: Dict[str, float] = {}

    def start(self, step_name: str):
        """Starts the timer for a given step."""
        self._start_times[step_name] = time.perf_counter()

    def stop(self, step_name: str):
        """Stops the timer for a given step and adds the duration to its total."""
        if step_name in self._start_times:
            duration = time.perf_counter() - self._start_times.pop(step_name)
            self.timings[step_name] = self.timings.get(step_name, 0.0) + duration
            self.calls[step_name] = self.calls.get(step_name, 0) + 1

    def get_timings(self) -> Dict[str, float]:
        """Returns all recorded timings."""
        return self.timings

    def get_total_time(self) -> float:
        """Returns the total time for all recorded steps."""
        return sum(self.timings.values())

    def log_summary(self, level: int = logging.DEBUG):
        """Logs a summary of the recorded timings."""
        if not self.timings:
            return
        logger.log(level, "--- Performance Summary ---")
        for step, duration in self.timings.items():
            calls = self.calls.get(step, 1)
            logger.log(level, f"- {step}: {self.format_time(duration)} over {calls} call(s), "
                              f"{self.format_time(duration / calls)} avg")
        logger.log(level, f"- total: {self.format_time(self.get_total_time())}")

    def format_time(self, seconds: float) -> str:
        """Formats seconds into a human-readable string."""
        if seconds < 1:
            return f"{seconds * 1000:.1f}ms"
        elif seconds < 60:
            return f"{seconds:.2f}s"
        else:
            minutes = int(seconds // 60)
            remaining_seconds = seconds % 60
            return f"{minutes}m {remaining_seconds:.1f}s"
