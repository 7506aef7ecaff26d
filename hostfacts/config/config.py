#!/usr/bin/env python3
# hostfacts/config/config.py
from __future__ import annotations

"""
Configuration loader (stdlib-only).

Precedence (low → high):
  1) Built-in defaults
  2) Files in CWD: .env, config.ini, config.json, config.toml
  3) Environment variables
  4) Explicit overrides (CLI flags)

Validation:
  - FACTS_PACKAGE: importable dotted module path
  - LOG_LEVEL: None or one of {'DEBUG','INFO','WARNING','ERROR','CRITICAL'}
  - LOG_FILE_PATH: None or normalized path
  - OUTPUT_FORMAT: one of {'text','json','table'}
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping
import configparser
import json
import os
import re
import tomllib  # stdlib in 3.11+

# ---------- defaults ----------

DEFAULTS: dict[str, Any] = {
    "FACTS_PACKAGE": "fact_plugins",
    "LOG_LEVEL": None,              # 'DEBUG'/'INFO'/'WARNING'/'ERROR'/'CRITICAL'
    "LOG_FILE_PATH": None,
    "OUTPUT_FORMAT": "text",
}

OUTPUT_FORMATS = ("text", "json", "table")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_PACKAGE_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*")


# ---------- data model ----------

@dataclass(frozen=True)
class AppConfig:
    facts_package: str
    log_level: str | None
    log_file_path: Path | None
    output_format: str

    # Unrecognized keys preserved for debugging/forward-compat
    extra: dict[str, Any] = field(default_factory=dict)


# ---------- file loaders (stdlib) ----------

def _load_env_file(path: Path) -> dict[str, str]:
    """Very small .env parser: KEY=VALUE, supports quotes; ignores comments/blank lines."""
    out: dict[str, str] = {}
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return out

    line_re = re.compile(r"""^\s*([A-Za-z_][A-Za-z0-9_]*)\s*=\s*(.*?)\s*$""")
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        m = line_re.match(line)
        if not m:
            continue
        k, v = m.group(1), m.group(2)
        if (v.startswith("'") and v.endswith("'")) or (v.startswith('"') and v.endswith('"')):
            v = v[1:-1]
        out[k] = v
    return out


def _load_ini_file(path: Path) -> dict[str, str]:
    cfg = configparser.ConfigParser()
    try:
        cfg.read(path, encoding="utf-8")  # missing files are skipped
    except configparser.Error as exc:
        raise ValueError(f"Invalid INI in {path}: {exc}") from exc
    flat: dict[str, str] = {}
    for sec in cfg.sections():
        for k, v in cfg.items(sec):
            flat[k.upper()] = v
    return flat


def _load_json_file(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    return data if isinstance(data, dict) else {}


def _load_toml_file(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except FileNotFoundError:
        return {}
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Invalid TOML in {path}: {exc}") from exc


def _flatten_mapping(obj: Any, prefix: str = "") -> dict[str, Any]:
    """
    Flatten nested dicts to UPPER_SNAKE keys.
    Example: {'log': {'level': 'debug'}} -> {'LOG_LEVEL': 'debug'}
    """
    flat: dict[str, Any] = {}
    if isinstance(obj, Mapping):
        for k, v in obj.items():
            key = f"{prefix}_{k}" if prefix else str(k)
            if isinstance(v, Mapping):
                flat.update(_flatten_mapping(v, key))
            else:
                flat[str(key).upper()] = v
    return flat


def _find_config_files(base: Path | None = None) -> list[Path]:
    cwd = base or Path.cwd()
    return [
        cwd / ".env",
        cwd / "config.ini",
        cwd / "config.json",
        cwd / "config.toml",
    ]


# ---------- normalization & coercion ----------

def _as_opt_str(val: Any) -> str | None:
    return None if val is None or str(val).strip().lower() in {"", "none"} else str(val).strip()


def _as_log_level(val: Any) -> str | None:
    lv = _as_opt_str(val)
    if lv is None:
        return None
    up = lv.upper()
    if up not in LOG_LEVELS:
        raise ValueError(f"LOG_LEVEL must be one of {list(LOG_LEVELS)}, got {lv!r}")
    return up


def _as_output_format(val: Any) -> str:
    fmt = (_as_opt_str(val) or DEFAULTS["OUTPUT_FORMAT"]).lower()
    if fmt not in OUTPUT_FORMATS:
        raise ValueError(f"OUTPUT_FORMAT must be one of {list(OUTPUT_FORMATS)}, got {val!r}")
    return fmt


def _as_package(val: Any) -> str:
    pkg = _as_opt_str(val) or DEFAULTS["FACTS_PACKAGE"]
    if not _PACKAGE_RE.fullmatch(pkg):
        raise ValueError(f"FACTS_PACKAGE must be a dotted module path, got {val!r}")
    return pkg


def _as_opt_path(val: Any) -> Path | None:
    v = _as_opt_str(val)
    if v is None:
        return None
    return Path(os.path.expandvars(os.path.expanduser(v))).resolve()


# ---------- merge & load ----------

def _normalize_keys(d: Mapping[str, Any]) -> dict[str, Any]:
    return {str(k).upper(): v for k, v in d.items()}


def _merge_sources(
    base: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    merged: dict[str, Any] = dict(DEFAULTS)

    for file in _find_config_files(base):
        if file.name == ".env":
            merged.update(_normalize_keys(_load_env_file(file)))
        elif file.suffix == ".ini":
            merged.update(_normalize_keys(_load_ini_file(file)))
        elif file.suffix == ".json":
            merged.update(_normalize_keys(_flatten_mapping(_load_json_file(file))))
        elif file.suffix == ".toml":
            merged.update(_normalize_keys(_flatten_mapping(_load_toml_file(file))))

    # Environment variables override files; only take UPPERCASE-like keys
    env = os.environ if environ is None else environ
    merged.update({k: v for k, v in env.items() if re.fullmatch(r"[A-Z0-9_]+", k)})
    return merged


def _validate_and_build(config: Mapping[str, Any], *, keep_extra: bool = False) -> AppConfig:
    recognized = set(DEFAULTS.keys())
    # Environment noise (PATH, HOME, ...) only matters when debugging config
    extra = {k: v for k, v in config.items() if k not in recognized} if keep_extra else {}
    return AppConfig(
        facts_package=_as_package(config.get("FACTS_PACKAGE")),
        log_level=_as_log_level(config.get("LOG_LEVEL")),
        log_file_path=_as_opt_path(config.get("LOG_FILE_PATH")),
        output_format=_as_output_format(config.get("OUTPUT_FORMAT")),
        extra=extra,
    )


# ---------- public API ----------

def load_config(
    overrides: Mapping[str, Any] | None = None,
    *,
    base: Path | None = None,
    environ: Mapping[str, str] | None = None,
    keep_extra: bool = False,
) -> AppConfig:
    """
    Load, merge, normalize, and validate configuration.

    `overrides` (e.g. CLI flags) win over every other source; None values
    in it are ignored. Raises ValueError on invalid values.
    """
    raw = _merge_sources(base, environ)
    if overrides:
        raw.update({k.upper(): v for k, v in overrides.items() if v is not None})
    return _validate_and_build(raw, keep_extra=keep_extra)
