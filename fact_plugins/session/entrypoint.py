# fact_plugins/session/entrypoint.py
from __future__ import annotations

import re
from typing import Optional

from hostfacts.facts import Fact
from hostfacts.helpers import Kernel

NAME = "launchd_current_user"
DESCRIPTION = "User owning the active console session; empty when nobody is logged in."

SCUTIL = "/usr/sbin/scutil"
CONSOLE_USER_QUERY = "show State:/Users/ConsoleUser\n"

# Console owners that mean "no real user"
_NO_USER = frozenset({None, "", "loginwindow"})

# "  Name : alice" in scutil's dictionary dump; "No such key" when unset.
# Whitespace is [ \t] so an empty entry never reaches into the next line.
_NAME_RE = re.compile(r"^[ \t]*Name[ \t]*:[ \t]*(.*?)[ \t]*$", re.MULTILINE)


def parse_console_user(output: str) -> Optional[str]:
    """Return the Name entry of a ConsoleUser dump, or None if there is none."""
    m = _NAME_RE.search(output)
    return m.group(1) if m else None


def normalize_console_user(username: Optional[str]) -> str:
    if username is None or username in _NO_USER:
        return ""
    return username


def console_user(kernel: Optional[Kernel] = None) -> Optional[str]:
    """Query the dynamic store for the console user. None if scutil fails."""
    k = kernel or Kernel()
    out = k.exec([SCUTIL], input=CONSOLE_USER_QUERY)
    if out is None:
        return None
    return normalize_console_user(parse_console_user(out))


FACT = Fact(
    name=NAME,
    description=DESCRIPTION,
    callback=console_user,
    confine={"kernel": "Darwin"},
    category="session",
    aliases=["console_user"],
)
FACT.module = __name__
