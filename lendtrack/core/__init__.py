#!/usr/bin/env python

"""
    Core module for lendtrack: models, event feed and book operations

    :copyright: (c) 2026 by AUTHORS
    :license: see LICENSE for more details
"""

from lendtrack.core.db import Store
from lendtrack.core.api import LendTrackAPI

__all__ = ["Store", "LendTrackAPI"]
