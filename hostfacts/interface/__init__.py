#!/usr/bin/env python3
# hostfacts/interface/__init__.py
from __future__ import annotations

"""
Package for the plugin loader and the command line frontend.

Provides:
- Dynamic fact loader for the plugins package.
- One-shot CLI with text / JSON / table output.
"""


from .loader import DEFAULT_PACKAGE, load_facts
from .cli import format_facts, list_facts, main

__all__ = [
    "DEFAULT_PACKAGE",
    "load_facts",
    "format_facts",
    "list_facts",
    "main",
]
