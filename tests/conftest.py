"""
Shared pytest fixtures for hostfacts tests.

This module provides common fixtures including:
- FakeKernel: canned external command results without spawning processes
- A fresh FactRegistry per test
- A scrubbed configuration environment (no stray config files / env vars)
"""

import logging
import os
import sys
from dataclasses import dataclass
from typing import List, Optional, Sequence

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from hostfacts.config import DEFAULTS
from hostfacts.facts import FactRegistry
from hostfacts.helpers import ExecResult, Kernel


# =============================================================================
# Kernel Mocking Infrastructure
# =============================================================================

@dataclass
class KernelCall:
    """Record of an external command issued during a test."""
    args: List[str]
    input: Optional[str] = None


class FakeKernel(Kernel):
    """
    Kernel whose process layer returns a queued or default ExecResult.

    Only `_exec` is replaced, so `run`/`exec` argument handling and the
    success/failure contract are exercised as in production.
    """

    def __init__(self, stdout: str = "", stderr: str = "", returncode: int = 0) -> None:
        super().__init__()
        self.default = ExecResult(stdout, stderr, returncode, False, 0.0)
        self.queue: List[ExecResult] = []
        self.calls: List[KernelCall] = []

    def respond(self, stdout: str = "", stderr: str = "", returncode: int = 0,
                timed_out: bool = False) -> "FakeKernel":
        self.queue.append(ExecResult(stdout, stderr, returncode, timed_out, 0.0))
        return self

    def _exec(self, args: Sequence[str], *, input, timeout, env, cwd, encoding) -> ExecResult:
        self.calls.append(KernelCall(args=list(args), input=input))
        return self.queue.pop(0) if self.queue else self.default


@pytest.fixture
def fake_kernel():
    """A FakeKernel answering every command with empty success."""
    return FakeKernel()


@pytest.fixture
def registry():
    """An empty, test-local FactRegistry."""
    return FactRegistry()


@pytest.fixture
def clean_config_env(tmp_path, monkeypatch):
    """Run in an empty directory with no hostfacts settings in the environment."""
    monkeypatch.chdir(tmp_path)
    for key in DEFAULTS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    return tmp_path


@pytest.fixture(autouse=True)
def reset_hostfacts_logger():
    """Undo init_logger() so caplog keeps seeing records via propagation."""
    yield
    logger = logging.getLogger("hostfacts")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
