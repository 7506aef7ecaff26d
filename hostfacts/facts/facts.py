#!/usr/bin/env python3
# hostfacts/facts/facts.py
from __future__ import annotations

"""
Fact registry and decorator utilities.

This module provides:
- FactRegistry: in-memory registry of facts and aliases.
- fact: decorator to register zero-argument functions as facts.
- register_fact: explicit API to register pre-built Fact objects.
"""

from typing import Any, Callable, Dict, Mapping, Optional

from .fact_types import ConfineValue, Fact


class FactRegistry:
    """Holds all fact definitions and provides lookup utilities."""

    def __init__(self) -> None:
        # Primary name -> Fact
        self._facts_by_name: Dict[str, Fact] = {}
        # Alias name -> primary name
        self._alias_to_primary: Dict[str, str] = {}
        # Category -> description text
        self._category_descriptions: Dict[str, str] = {}

    # ---------------- Registration ----------------

    def register(self, fact_obj: Fact) -> None:
        """Register a fact and its aliases, ensuring no collisions."""
        primary_key = fact_obj.name.lower()

        if primary_key in self._facts_by_name or primary_key in self._alias_to_primary:
            raise ValueError(f"Fact '{fact_obj.name}' already registered.")

        for alias in fact_obj.aliases:
            alias_key = alias.lower()
            if (
                alias_key == primary_key
                or alias_key in self._facts_by_name
                or alias_key in self._alias_to_primary
            ):
                raise ValueError(
                    f"Alias '{alias}' for '{fact_obj.name}' collides with an existing name."
                )

        self._facts_by_name[primary_key] = fact_obj
        for alias in fact_obj.aliases:
            self._alias_to_primary[alias.lower()] = primary_key

    def clear(self) -> None:
        """Forget every registered fact (used by tests and reloads)."""
        self._facts_by_name.clear()
        self._alias_to_primary.clear()
        self._category_descriptions.clear()

    # ---------------- Lookup ----------------

    def get(self, name: str) -> Optional[Fact]:
        """Return the fact by primary name or alias, or None if not found."""
        key = name.lower()
        if key in self._facts_by_name:
            return self._facts_by_name[key]
        if key in self._alias_to_primary:
            return self._facts_by_name[self._alias_to_primary[key]]
        return None

    def all(self) -> list[Fact]:
        """Return only primary facts (no alias duplicates)."""
        return list(self._facts_by_name.values())

    def names(self) -> list[str]:
        """Return all primary names and aliases."""
        return [*self._facts_by_name.keys(), *self._alias_to_primary.keys()]

    def __contains__(self, name: str) -> bool:
        return self.get(name) is not None

    def __len__(self) -> int:
        return len(self._facts_by_name)

    # ---------------- Categories ----------------

    def categories(self) -> dict[str, list[Fact]]:
        """Group facts by category."""
        grouped: dict[str, list[Fact]] = {}
        for fact_obj in self._facts_by_name.values():
            grouped.setdefault(fact_obj.category, []).append(fact_obj)
        return grouped

    def set_category_description(self, category: str, description: str) -> None:
        self._category_descriptions[category] = description.strip()

    def get_category_description(self, category: str) -> str:
        return self._category_descriptions.get(category, "")


# Global registry used across the app
REGISTRY = FactRegistry()


def fact(
    *,
    name: str | None = None,
    description: str | None = None,
    confine: Mapping[str, ConfineValue] | None = None,
    category: str | None = None,
    aliases: list[str] | None = None,
    registry: FactRegistry | None = None,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """
    Decorator to register a zero-argument function as a fact.

    - Name defaults to the function name.
    - Description defaults to the function docstring.
    - `confine` restricts resolution to hosts where other facts match.
    """

    def wrapper(func: Callable[..., Any]) -> Callable[..., Any]:
        fact_obj = Fact(
            name=name or func.__name__,
            description=(description or (func.__doc__ or "")).strip(),
            callback=func,
            confine=dict(confine or {}),
            category=category or "general",
            aliases=aliases or [],
        )
        fact_obj.module = func.__module__
        (registry if registry is not None else REGISTRY).register(fact_obj)
        return func

    return wrapper


def register_fact(fact_obj: Fact) -> None:
    """Explicit API for modules that construct Fact objects directly."""
    REGISTRY.register(fact_obj)
