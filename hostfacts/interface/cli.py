#!/usr/bin/env python3
# hostfacts/interface/cli.py
from __future__ import annotations

"""
One-shot command line frontend.

    hostfacts                      every suitable fact, "name => value"
    hostfacts kernel               bare value of one fact
    hostfacts --json a b           JSON object of the requested facts
    hostfacts --table              ASCII table
    hostfacts --list               registered facts by category
"""

import argparse
import json
import logging
import sys
from typing import Optional, Sequence, TextIO

from hostfacts import __version__
from hostfacts.config import OUTPUT_FORMATS, AppConfig, load_config
from hostfacts.facts import REGISTRY, FactResolver, FactValue
from hostfacts.interface.loader import load_facts
from hostfacts.ui import colorize, format_table, init_logger, print_line

logger = logging.getLogger("hostfacts.cli")

EXIT_OK = 0
EXIT_UNKNOWN_FACT = 1
EXIT_CONFIG = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hostfacts",
        description="Report facts about this host.",
    )
    parser.add_argument("names", nargs="*", metavar="NAME",
                        help="fact names or aliases (default: all)")
    fmt = parser.add_mutually_exclusive_group()
    fmt.add_argument("--json", dest="output_format", action="store_const",
                     const="json", help="print a JSON object")
    fmt.add_argument("--table", dest="output_format", action="store_const",
                     const="table", help="print an ASCII table")
    fmt.add_argument("--format", dest="output_format", choices=OUTPUT_FORMATS)
    parser.add_argument("--list", action="store_true",
                        help="list registered facts and exit")
    parser.add_argument("--debug", action="store_true",
                        help="log at DEBUG level")
    parser.add_argument("--package", dest="facts_package",
                        help="package to load fact plugins from")
    parser.add_argument("--log-file", dest="log_file_path",
                        help="also write a rotating debug log here")
    parser.add_argument("--version", action="version",
                        version=f"%(prog)s {__version__}")
    return parser


def _render_value(value: FactValue) -> str:
    """Text form of a value: strings as-is, structures as compact JSON."""
    if isinstance(value, str):
        return value
    return json.dumps(value, sort_keys=True)


def format_facts(values: dict[str, FactValue], output_format: str, *, single: bool = False) -> Optional[str]:
    """
    Render resolved facts. Returns None when there is nothing to print.

    A single requested fact in text mode prints its bare value.
    """
    if output_format == "json":
        return json.dumps(values, indent=2, sort_keys=True)
    if output_format == "table":
        rows = [[name, _render_value(values[name])] for name in sorted(values)]
        return format_table(rows, headers=["Fact", "Value"])
    if single:
        if not values:
            return None
        return _render_value(next(iter(values.values())))
    return "\n".join(
        f"{name} => {_render_value(values[name])}" for name in sorted(values))


def _format_categories_table(categories: dict[str, list]) -> str:
    rows = []
    for category in sorted(categories):
        count = len(categories[category])
        rows.append([category, f"{count} fact{'s' if count != 1 else ''}",
                     REGISTRY.get_category_description(category)])
    return format_table(rows, headers=["Category", "Facts", "Description"])


def list_facts() -> str:
    """Category overview followed by the registered facts of each category."""
    categories = REGISTRY.categories()
    if not categories:
        return "No facts loaded."

    rows = []
    for category in sorted(categories):
        for fact_obj in sorted(categories[category], key=lambda f: f.name):
            confine = ", ".join(f"{k}={v}" for k, v in fact_obj.confine.items()) or "-"
            rows.append([category, fact_obj.name, confine, fact_obj.description])
    return "\n".join([
        _format_categories_table(categories),
        format_table(rows, headers=["Category", "Fact", "Confine", "Description"]),
    ])


def main(argv: Optional[Sequence[str]] = None, *, stdout: Optional[TextIO] = None) -> int:
    args = _build_parser().parse_args(argv)
    out = stdout if stdout is not None else sys.stdout

    try:
        config: AppConfig = load_config({
            "FACTS_PACKAGE": args.facts_package,
            "LOG_FILE_PATH": args.log_file_path,
            "OUTPUT_FORMAT": args.output_format,
            "LOG_LEVEL": "DEBUG" if args.debug else None,
        })
    except ValueError as exc:
        print_line(colorize(f"[ERROR] Invalid configuration: {exc}", "red"), file=sys.stderr)
        return EXIT_CONFIG

    init_logger("hostfacts", level=config.log_level or logging.WARNING,
                logfile=config.log_file_path)

    try:
        load_facts(config.facts_package)
    except (ImportError, RuntimeError) as exc:
        logger.error("Cannot load fact plugins from '%s': %s", config.facts_package, exc)
        return EXIT_CONFIG

    if args.list:
        print_line(list_facts(), file=out)
        return EXIT_OK

    resolver = FactResolver()
    names = args.names or None
    values = resolver.resolve_all(names)

    status = EXIT_OK
    if names:
        unknown = [n for n in names if n not in REGISTRY]
        for name in unknown:
            logger.error("Unknown fact '%s'", name)
        if unknown and len(names) == 1:
            status = EXIT_UNKNOWN_FACT

    text = format_facts(values, config.output_format, single=bool(names) and len(names) == 1)
    if text is not None:
        print_line(text, file=out)
    return status
