#!/usr/bin/env python3
# hostfacts/interface/loader.py
from __future__ import annotations

"""
Dynamic fact loader.

Features:
- Imports all modules under a given package (default: 'fact_plugins').
- Supports 'entrypoint.py' inside a subpackage exporting FACT/FACTS.
- Derives categories from module paths if not explicitly set.
- Collects category descriptions from either CATEGORY_DESCRIPTION or module docstring.
"""

import importlib
import logging
import pkgutil
from pathlib import Path
from types import ModuleType
from typing import Iterable

from hostfacts.facts import REGISTRY, Fact

logger = logging.getLogger("hostfacts.loader")

DEFAULT_PACKAGE = "fact_plugins"


def _register(fact_obj: Fact) -> bool:
    """Register an exported Fact unless this exact object is already known."""
    if REGISTRY.get(fact_obj.name) is fact_obj:
        return False
    REGISTRY.register(fact_obj)
    return True


def _register_from_entry_module(module: ModuleType) -> int:
    """Register FACT/FACTS exported by an entry module, if present."""
    registered_count = 0
    obj = getattr(module, "FACT", None)
    if isinstance(obj, Fact):
        registered_count += _register(obj)
    objs = getattr(module, "FACTS", None)
    if isinstance(objs, Iterable):
        for item in objs:
            if isinstance(item, Fact):
                registered_count += _register(item)
    return registered_count


def load_facts(facts_package: str = DEFAULT_PACKAGE) -> int:
    """
    Import all modules under the given package and return how many were loaded.

    Supported layouts:
      1) Plain modules: fact_plugins/foo.py -> import fact_plugins.foo
      2) Packages with an entrypoint: fact_plugins/bar/entrypoint.py
         -> import fact_plugins.bar.entrypoint
            and register FACT/FACTS if present.

    Works with regular and namespace packages.
    """

    package = importlib.import_module(facts_package)
    package_paths = [str(p) for p in getattr(package, "__path__", [])]

    if not package_paths:
        raise RuntimeError(
            f"'{facts_package}' must be a package (folder) with modules."
        )

    loaded_count = 0
    discovered_subpackages: set[str] = set()

    for base_path in package_paths:
        for modinfo in pkgutil.iter_modules([base_path]):
            module_name = modinfo.name
            if module_name.startswith("_"):
                continue

            if modinfo.ispkg:
                discovered_subpackages.add(module_name)
                entrypoint_path = Path(base_path) / module_name / "entrypoint.py"
                if entrypoint_path.exists():
                    module = importlib.import_module(
                        f"{facts_package}.{module_name}.entrypoint")
                    _register_from_entry_module(module)
                else:
                    module = importlib.import_module(
                        f"{facts_package}.{module_name}")
            else:
                module = importlib.import_module(
                    f"{facts_package}.{module_name}")
                _register_from_entry_module(module)
            loaded_count += 1
            logger.debug("Loaded fact module %s", module.__name__)

    _assign_categories_from_modules(facts_package)
    _collect_category_descriptions(facts_package, discovered_subpackages)

    logger.debug("Loaded %d module(s), %d fact(s) registered",
                 loaded_count, len(REGISTRY))
    return loaded_count


def _assign_categories_from_modules(facts_package: str) -> None:
    """
    Derive category from first subpackage segment (e.g. 'session.entrypoint')
    if not explicitly set (default 'general').
    """
    prefix = f"{facts_package}."
    for fact_obj in REGISTRY.all():
        if fact_obj.category != "general" or not fact_obj.module.startswith(prefix):
            continue
        segments = fact_obj.module[len(prefix):].split(".")
        if len(segments) >= 2:
            fact_obj.category = segments[0]


def _collect_category_descriptions(facts_package: str, subpackages: set[str]) -> None:
    """
    Category description is taken from:
      1) <package>.<category>.CATEGORY_DESCRIPTION (string), or
      2) <package>.<category> module docstring (__doc__), else "".
    """
    for category in subpackages:
        module = importlib.import_module(f"{facts_package}.{category}")

        description_text = ""
        value = getattr(module, "CATEGORY_DESCRIPTION", None)
        if isinstance(value, str):
            description_text = value.strip()
        elif isinstance(getattr(module, "__doc__", None), str):
            description_text = (module.__doc__ or "").strip()

        REGISTRY.set_category_description(category, description_text)
