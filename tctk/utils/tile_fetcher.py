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
Tile Fetching over HTTP.

One request per tile, no retries. Failures are raised as FetchFailureError
carrying the HTTP status and reason text so the scanning tools can record
them on the tile's result instead of aborting the batch.
"""

import logging
import urllib.error
import urllib.request

from tctk.utils.exceptions import FetchFailureError
from tctk.utils.traffic_constants import DEFAULT_HTTP_TIMEOUT

logger = logging.getLogger(__name__)

USER_AGENT = 'tctk-tile-scanner'


def fetch_tile_bytes(url: str, timeout: float = DEFAULT_HTTP_TIMEOUT) -> bytes:
    """
    Fetch the raw bytes of one tile.

    Args:
        url: Fully substituted tile URL.
        timeout: Socket timeout in seconds.

    Returns:
        The response body.

    Raises:
        FetchFailureError: On a non-2xx response ("<status> <reason>") or a
            transport error.
    """
    request = urllib.request.Request(url, headers={'User-Agent': USER_AGENT})
    try:
        with urllib.request.urlopen(request, timeout=timeout) as response:
            status = response.status
            if not 200 <= status < 300:
                raise FetchFailureError(f"{status} {response.reason}", status=status)
            content = response.read()
    except urllib.error.HTTPError as e:
        raise FetchFailureError(f"{e.code} {e.reason}", status=e.code) from e
    except urllib.error.URLError as e:
        raise FetchFailureError(f"Request failed: {e.reason}") from e
    except OSError as e:
        raise FetchFailureError(f"Request failed: {e}") from e

    logger.debug(f"Fetched {len(content)} bytes from {url}")
    return content
