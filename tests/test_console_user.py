"""
Unit tests for the launchd_current_user fact.

Tests cover:
- Parsing scutil's dump of State:/Users/ConsoleUser
- Collapsing "no real user" states to the empty string
- Confinement to Darwin hosts
- Query failure resolving to absent
"""

from unittest.mock import MagicMock

import pytest

from fact_plugins.session import entrypoint as console
from hostfacts.facts import Fact, FactResolver

from conftest import FakeKernel


ALICE_DUMP = """<dictionary> {
  GID : 20
  Name : alice
  SessionInfo : <array> {
    0 : <dictionary> {
      kCGSSessionAuditIDKey : 100006
      kCGSSessionUserNameKey : alice
      kCGSessionLoginDoneKey : TRUE
    }
  }
  UID : 501
}
"""

LOGINWINDOW_DUMP = """<dictionary> {
  GID : 0
  Name : loginwindow
  UID : 0
}
"""

NO_SESSION_DUMP = "  No such key\n"

# Session key present but the owner is empty, with and without trailing blanks
EMPTY_NAME_DUMPS = [
    "<dictionary> {\n  GID : 20\n  Name : \n  UID : 501\n}\n",
    "<dictionary> {\n  GID : 20\n  Name :\n  SessionInfo : <array> {\n  }\n  UID : 501\n}\n",
    "<dictionary> {\n  Name :\t \n  UID : 501\n}\n",
]


@pytest.fixture
def host(registry):
    """Registry holding a switchable kernel fact plus the console user fact."""
    state = {"kernel": "Darwin"}
    registry.register(Fact(name="kernel", description="", callback=lambda: state["kernel"]))
    registry.register(console.FACT)
    return registry, state


# =============================================================================
# Parsing and normalization
# =============================================================================


class TestParsing:

    def test_name_entry(self):
        assert console.parse_console_user(ALICE_DUMP) == "alice"

    def test_no_such_key(self):
        assert console.parse_console_user(NO_SESSION_DUMP) is None

    def test_empty_output(self):
        assert console.parse_console_user("") is None

    @pytest.mark.parametrize("dump", EMPTY_NAME_DUMPS)
    def test_empty_name_entry_stays_on_its_line(self, dump):
        assert console.parse_console_user(dump) == ""

    @pytest.mark.parametrize("raw, expected", [
        ("alice", "alice"),
        ("loginwindow", ""),
        ("", ""),
        (None, ""),
    ])
    def test_normalize(self, raw, expected):
        assert console.normalize_console_user(raw) == expected


# =============================================================================
# Query
# =============================================================================


class TestConsoleUserQuery:

    def test_real_user(self):
        k = FakeKernel(stdout=ALICE_DUMP)
        assert console.console_user(k) == "alice"

    def test_issues_one_scutil_query(self):
        k = FakeKernel(stdout=ALICE_DUMP)
        console.console_user(k)
        assert len(k.calls) == 1
        assert k.calls[0].args == [console.SCUTIL]
        assert k.calls[0].input == "show State:/Users/ConsoleUser\n"

    def test_no_session(self):
        assert console.console_user(FakeKernel(stdout=NO_SESSION_DUMP)) == ""

    def test_login_window(self):
        assert console.console_user(FakeKernel(stdout=LOGINWINDOW_DUMP)) == ""

    @pytest.mark.parametrize("dump", EMPTY_NAME_DUMPS)
    def test_empty_owner(self, dump):
        assert console.console_user(FakeKernel(stdout=dump)) == ""

    def test_query_failure_is_absent(self):
        k = FakeKernel(stderr="scutil: not found", returncode=127)
        assert console.console_user(k) is None

    def test_idempotent_under_unchanged_state(self):
        k = FakeKernel(stdout=ALICE_DUMP)
        assert {console.console_user(k) for _ in range(3)} == {"alice"}
        assert len(k.calls) == 3

    def test_default_kernel_is_constructed(self, monkeypatch):
        instance = FakeKernel(stdout=ALICE_DUMP)
        monkeypatch.setattr(console, "Kernel", MagicMock(return_value=instance))
        assert console.console_user() == "alice"


# =============================================================================
# As a registered fact
# =============================================================================


class TestConsoleUserFact:

    def test_metadata(self):
        assert console.FACT.name == "launchd_current_user"
        assert console.FACT.aliases == ["console_user"]
        assert console.FACT.confine == {"kernel": "Darwin"}
        assert console.FACT.module == "fact_plugins.session.entrypoint"

    def test_resolves_on_darwin(self, host, monkeypatch):
        registry, _ = host
        monkeypatch.setattr(console, "Kernel", lambda: FakeKernel(stdout=ALICE_DUMP))
        assert FactResolver(registry).resolve("launchd_current_user") == "alice"
        assert FactResolver(registry).resolve("console_user") == "alice"

    def test_login_window_resolves_to_empty(self, host, monkeypatch):
        registry, _ = host
        monkeypatch.setattr(console, "Kernel", lambda: FakeKernel(stdout=LOGINWINDOW_DUMP))
        assert FactResolver(registry).resolve("launchd_current_user") == ""

    @pytest.mark.parametrize("kernel_name", ["Linux", "Windows", "FreeBSD"])
    def test_other_platforms_never_query(self, host, monkeypatch, kernel_name):
        registry, state = host
        state["kernel"] = kernel_name
        factory = MagicMock()
        monkeypatch.setattr(console, "Kernel", factory)

        assert FactResolver(registry).resolve("launchd_current_user") is None
        assert "launchd_current_user" not in FactResolver(registry).resolve_all()
        factory.assert_not_called()
