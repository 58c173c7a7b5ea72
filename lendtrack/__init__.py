#!/usr/bin/env python

"""
    lendtrack
    ~~~~~~~~~
    A small library book lending tracker.

    :copyright: (c) 2026 by AUTHORS
    :license: see LICENSE for more details
"""

__version__ = '0.1.0'
