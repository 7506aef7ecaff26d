#!/usr/bin/env python3
# hostfacts/facts/__init__.py
from __future__ import annotations

"""
Package for fact definition, registration and resolution.

Provides:
- Data structures (`Fact`, `FactCallback`, `FactValue`).
- In-memory registry and decorators (`REGISTRY`, `fact`, `register_fact`).
- Confine-aware resolution (`FactResolver`, `resolve`, `resolve_all`).
"""


from .fact_types import ConfineValue, Fact, FactCallback, FactValue
from .facts import REGISTRY, FactRegistry, fact, register_fact
from .resolver import FactResolver, resolve, resolve_all

__all__ = [
    "ConfineValue",
    "Fact",
    "FactCallback",
    "FactValue",
    "REGISTRY",
    "FactRegistry",
    "fact",
    "register_fact",
    "FactResolver",
    "resolve",
    "resolve_all",
]
