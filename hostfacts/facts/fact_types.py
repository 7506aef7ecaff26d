#!/usr/bin/env python3
# hostfacts/facts/fact_types.py
from __future__ import annotations

"""
Fact data structures and protocols.

This module defines:
- FactCallback: the callable protocol for any fact implementation.
- ConfineValue: what a confine entry may expect of another fact.
- Fact: a registered fact with metadata, confines and a callable.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Protocol, Union

# Values a fact may report. None means "absent" everywhere in hostfacts.
FactValue = Union[str, int, float, bool, list, dict, None]

ConfineValue = Union[str, list, tuple, set, frozenset, Callable[[Any], bool]]


class FactCallback(Protocol):
    """Protocol for any fact resolution function."""

    def __call__(self) -> FactValue:  # pragma: no cover - signature only
        ...


def confine_matches(expected: ConfineValue, actual: FactValue) -> bool:
    """
    Check one confine expectation against another fact's resolved value.

    Strings compare case-insensitively against str(actual); collections
    match if any member does; callables receive the raw value.
    Absent values never match.
    """
    if actual is None:
        return False
    if callable(expected):
        return bool(expected(actual))
    if isinstance(expected, (list, tuple, set, frozenset)):
        return any(confine_matches(item, actual) for item in expected)
    return str(expected).lower() == str(actual).lower()


@dataclass(slots=True)
class Fact:
    """
    A registered fact with metadata and a callable to resolve it.

    Important fields:
        name: Primary unique fact name.
        description: Short, user-facing description.
        callback: Zero-argument function computing the value.
        confine: Mapping of other fact names to expected values; every
            entry must hold before the callback may run.
        module: Python module path where the fact is defined.
        category: Logical group for listings.
        aliases: Extra names resolving to the same fact.
    """

    name: str
    description: str
    callback: FactCallback
    confine: Mapping[str, ConfineValue] = field(default_factory=dict)  # type: ignore
    module: str = field(default="", repr=False)
    category: str = "general"
    aliases: list[str] = field(default_factory=list)  # type: ignore

    def invoke(self) -> FactValue:
        """Execute the underlying fact callback."""
        return self.callback()
