#!/usr/bin/env python3
# hostfacts/helpers/sysinfo.py
from __future__ import annotations

"""
Host identification helpers.

- Zero external dependencies; everything comes from `platform`.
- Feeds the built-in identification facts used by confines.
"""

from dataclasses import dataclass
from typing import Optional
import platform


# ------------------------------ models ------------------------------

@dataclass(slots=True)
class KernelInfo:
    name: str = ""                  # e.g., "Darwin", "Linux", "Windows"
    release: Optional[str] = None   # e.g., "23.4.0"
    version: Optional[str] = None   # full kernel version banner


# ----------------------------- collectors -----------------------------

def get_kernel_info() -> KernelInfo:
    """Return the running kernel's name, release and version."""
    uname = platform.uname()
    return KernelInfo(
        name=uname.system,
        release=uname.release or None,
        version=uname.version or None,
    )


def get_hostname() -> str:
    """Short host name: the node name up to the first dot."""
    return platform.node().split(".", 1)[0]

