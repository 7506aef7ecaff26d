# fact_plugins/host/entrypoint.py
from __future__ import annotations

import platform

from hostfacts.facts import fact
from hostfacts.helpers import get_hostname, get_kernel_info


# ---------- kernel ----------
@fact(
    name="kernel",
    description="Kernel name as reported by uname (Darwin, Linux, Windows).",
    category="host",
)
def kernel() -> str:
    return get_kernel_info().name


# ---------- kernelrelease ----------
@fact(
    name="kernelrelease",
    description="Kernel release string.",
    category="host",
)
def kernelrelease() -> str | None:
    return get_kernel_info().release


# ---------- hostname ----------
@fact(
    name="hostname",
    description="Short host name (node name up to the first dot).",
    category="host",
)
def hostname() -> str | None:
    return get_hostname() or None


# ---------- python_version ----------
@fact(
    name="python_version",
    description="Version of the interpreter running hostfacts.",
    category="host",
)
def python_version() -> str:
    return platform.python_version()
