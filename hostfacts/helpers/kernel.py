#!/usr/bin/env python3
# hostfacts/helpers/kernel.py
"""
External command interface for fact plugins.

This module provides a small, well-typed facade for:
- Running POSIX shell commands or argument lists.
- Capturing stdout/stderr and reaping the child before returning.
- The "output or absent" contract facts use for external queries.
"""

from __future__ import annotations

import logging
import os
import subprocess
import time
from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

logger = logging.getLogger("hostfacts.kernel")

# ---- Public result type -----------------------------------------------------


@dataclass(slots=True)
class ExecResult:
    """Normalized result for external command execution."""
    stdout: str
    stderr: str
    returncode: int
    timed_out: bool
    duration_sec: float

    @property
    def ok(self) -> bool:
        return self.returncode == 0 and not self.timed_out


# ---- Kernel -----------------------------------------------------------------


class Kernel:
    """
    Thin interface to run external commands.

    Notes:
        - Argument lists are executed directly; strings go through /bin/sh -c.
        - stdin is /dev/null unless `input` text is supplied.
        - Spawn failures become failed results instead of exceptions.
    """

    def __init__(self, shell: str = "/bin/sh") -> None:
        self._shell = shell

    # ---- Runners ------------------------------------------------------------

    def run(
        self,
        command: Union[str, Sequence[str]],
        *,
        input: Optional[str] = None,
        timeout: Optional[float] = None,
        env: Optional[dict] = None,
        cwd: Optional[str] = None,
        encoding: str = "utf-8",
    ) -> ExecResult:
        """
        Run a command and return a normalized result.

        Examples:
            run("uname -s")
            run(["/usr/sbin/scutil"], input="show State:/Users/ConsoleUser\\n")
        """
        if isinstance(command, str):
            args: List[str] = [self._shell, "-c", command]
        else:
            args = list(command)
        if not args:
            raise ValueError("command must not be empty")

        return self._exec(args, input=input, timeout=timeout, env=env,
                          cwd=cwd, encoding=encoding)

    def exec(
        self,
        command: Union[str, Sequence[str]],
        **kwargs,
    ) -> Optional[str]:
        """
        Run a command and return its stripped stdout, or None on failure.

        Failure means the executable could not be started, exited non-zero,
        or timed out.
        """
        res = self.run(command, **kwargs)
        if not res.ok:
            logger.debug(
                "Command %r failed (exit=%s, timed_out=%s): %s",
                command, res.returncode, res.timed_out, res.stderr.strip(),
            )
            return None
        return res.stdout.strip()

    # ---- Internals ----------------------------------------------------------

    def _exec(
        self,
        args: Sequence[str],
        *,
        input: Optional[str],
        timeout: Optional[float],
        env: Optional[dict],
        cwd: Optional[str],
        encoding: str,
    ) -> ExecResult:
        start = time.perf_counter()
        stdin = None if input is not None else subprocess.DEVNULL
        data = input.encode(encoding) if input is not None else None
        try:
            completed = subprocess.run(
                args,
                input=data,
                stdin=stdin,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                timeout=timeout,
                env={**os.environ, **(env or {})} if env else None,
                cwd=cwd,
                text=False,  # capture bytes; decode ourselves
            )
            duration = time.perf_counter() - start
            return ExecResult(
                stdout=completed.stdout.decode(encoding, errors="replace"),
                stderr=completed.stderr.decode(encoding, errors="replace"),
                returncode=completed.returncode,
                timed_out=False,
                duration_sec=duration,
            )
        except subprocess.TimeoutExpired as exc:
            duration = time.perf_counter() - start
            stdout = (exc.stdout or b"").decode(encoding, errors="replace")
            stderr = (exc.stderr or b"").decode(encoding, errors="replace")
            return ExecResult(
                stdout=stdout,
                stderr=stderr or "Process timed out.",
                returncode=1,
                timed_out=True,
                duration_sec=duration,
            )
        except (FileNotFoundError, PermissionError) as exc:
            duration = time.perf_counter() - start
            return ExecResult(
                stdout="",
                stderr=str(exc),
                returncode=127 if isinstance(exc, FileNotFoundError) else 126,
                timed_out=False,
                duration_sec=duration,
            )
