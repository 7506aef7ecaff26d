#!/usr/bin/env python3
# hostfacts/facts/resolver.py
from __future__ import annotations

"""
Confine-aware fact resolution.

A fact is suitable when every confine entry holds against the value of the
named fact, itself resolved through the same resolver. Unsuitable facts are
never invoked. Nothing is cached: every call recomputes.
"""

import logging
from typing import Iterable, Optional

from .fact_types import Fact, FactValue, confine_matches
from .facts import REGISTRY, FactRegistry

logger = logging.getLogger("hostfacts.resolver")


class FactResolver:
    """Resolve facts from a registry, honouring confines."""

    def __init__(self, registry: Optional[FactRegistry] = None) -> None:
        self.registry = registry if registry is not None else REGISTRY
        # Primary names currently being resolved, outermost first
        self._stack: list[str] = []

    def suitable(self, fact_obj: Fact) -> bool:
        """Return True if every confine entry of `fact_obj` holds."""
        for other_name, expected in fact_obj.confine.items():
            actual = self.resolve(other_name)
            if not confine_matches(expected, actual):
                logger.debug(
                    "Fact '%s' confined out: %s=%r does not match %r",
                    fact_obj.name, other_name, actual, expected,
                )
                return False
        return True

    def resolve(self, name: str) -> FactValue:
        """
        Return the value of fact `name`, or None when it is absent.

        Absent covers: unknown name, unsuitable host, a failing callback,
        and a confine chain that loops back onto `name`.
        """
        fact_obj = self.registry.get(name)
        if fact_obj is None:
            logger.debug("Unknown fact '%s'", name)
            return None

        key = fact_obj.name.lower()
        if key in self._stack:
            logger.warning(
                "Confine cycle while resolving '%s': %s",
                fact_obj.name, " -> ".join([*self._stack, key]),
            )
            return None

        self._stack.append(key)
        try:
            if not self.suitable(fact_obj):
                return None
            try:
                value = fact_obj.invoke()
            except Exception as exc:  # noqa: BLE001
                logger.warning(
                    "Error while resolving fact '%s' (%s): %s",
                    fact_obj.name, type(exc).__name__, exc,
                )
                logger.debug("Traceback for fact '%s'", fact_obj.name, exc_info=True)
                return None
        finally:
            self._stack.pop()

        logger.debug("Resolved fact '%s' = %r", fact_obj.name, value)
        return value

    def resolve_all(self, names: Optional[Iterable[str]] = None) -> dict[str, FactValue]:
        """
        Resolve the requested facts (default: every primary fact).

        Keys are the names as requested; absent facts are omitted.
        """
        if names is None:
            names = sorted(f.name for f in self.registry.all())
        values: dict[str, FactValue] = {}
        for name in names:
            value = self.resolve(name)
            if value is not None:
                values[name] = value
        return values


def resolve(name: str, registry: Optional[FactRegistry] = None) -> FactValue:
    """Resolve a single fact against `registry` (default: global REGISTRY)."""
    return FactResolver(registry).resolve(name)


def resolve_all(
    names: Optional[Iterable[str]] = None,
    registry: Optional[FactRegistry] = None,
) -> dict[str, FactValue]:
    """Resolve several facts against `registry` (default: global REGISTRY)."""
    return FactResolver(registry).resolve_all(names)
