#!/usr/bin/env python3
# hostfacts/config/__init__.py
from __future__ import annotations

from .config import DEFAULTS, LOG_LEVELS, OUTPUT_FORMATS, AppConfig, load_config

__all__ = ["DEFAULTS", "LOG_LEVELS", "OUTPUT_FORMATS", "AppConfig", "load_config"]
