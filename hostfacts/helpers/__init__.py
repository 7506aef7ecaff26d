#!/usr/bin/env python3
# hostfacts/helpers/__init__.py
from __future__ import annotations

from .kernel import ExecResult, Kernel
from .sysinfo import KernelInfo, get_hostname, get_kernel_info

__all__ = [
    "ExecResult",
    "Kernel",
    "KernelInfo",
    "get_hostname",
    "get_kernel_info",
]
