#!/usr/bin/env python3
# hostfacts/__init__.py
from __future__ import annotations
"""
hostfacts package bootstrap.

Keep imports shallow: plugin modules import `hostfacts.facts` while the
loader is still walking the plugin package.
"""

__version__ = "0.1.0"

from hostfacts.facts import REGISTRY, Fact, fact  # noqa: E402,F401
