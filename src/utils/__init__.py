# -*- coding: utf-8 -*-
"""
Utilities package for common functionality across the ingestion pipeline.

Contains logging setup, JSON I/O helpers, dataclasses and the shared rate
limiter used throughout the codebase.
"""
