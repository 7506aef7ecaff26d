"""
Unit tests for fact types and the fact registry.

Tests cover:
- Registration, alias lookup and collision detection
- The @fact decorator defaults
- Confine expectation matching
"""

import pytest

from hostfacts.facts import REGISTRY, Fact, fact, register_fact
from hostfacts.facts.fact_types import confine_matches


def _make(name, value=None, **kwargs):
    return Fact(name=name, description="", callback=lambda: value, **kwargs)


# =============================================================================
# Registry
# =============================================================================


class TestFactRegistry:

    def test_get_by_name_is_case_insensitive(self, registry):
        f = _make("Kernel")
        registry.register(f)
        assert registry.get("kernel") is f
        assert registry.get("KERNEL") is f

    def test_get_by_alias(self, registry):
        f = _make("launchd_current_user", aliases=["console_user"])
        registry.register(f)
        assert registry.get("console_user") is f
        assert "console_user" in registry
        assert set(registry.names()) == {"launchd_current_user", "console_user"}

    def test_unknown_returns_none(self, registry):
        assert registry.get("nope") is None
        assert "nope" not in registry

    def test_duplicate_name_rejected(self, registry):
        registry.register(_make("kernel"))
        with pytest.raises(ValueError, match="already registered"):
            registry.register(_make("kernel"))

    def test_alias_colliding_with_name_rejected(self, registry):
        registry.register(_make("kernel"))
        with pytest.raises(ValueError, match="collides"):
            registry.register(_make("os", aliases=["kernel"]))

    def test_failed_registration_leaves_no_partial_aliases(self, registry):
        registry.register(_make("kernel"))
        with pytest.raises(ValueError):
            registry.register(_make("os", aliases=["osfamily", "kernel"]))
        assert registry.get("osfamily") is None
        assert registry.get("os") is None

    def test_all_excludes_aliases(self, registry):
        registry.register(_make("a", aliases=["b", "c"]))
        assert [f.name for f in registry.all()] == ["a"]
        assert len(registry) == 1

    def test_categories_and_descriptions(self, registry):
        registry.register(_make("kernel", category="host"))
        registry.register(_make("launchd_current_user", category="session"))
        registry.set_category_description("host", "  Host identification.  ")
        assert set(registry.categories()) == {"host", "session"}
        assert registry.get_category_description("host") == "Host identification."
        assert registry.get_category_description("session") == ""

    def test_clear(self, registry):
        registry.register(_make("a", aliases=["b"]))
        registry.clear()
        assert len(registry) == 0
        assert registry.get("b") is None


# =============================================================================
# Decorator
# =============================================================================


class TestFactDecorator:

    def test_defaults_from_function(self, registry):
        @fact(registry=registry)
        def uptime_days():
            """Days since boot."""
            return 3

        f = registry.get("uptime_days")
        assert f is not None
        assert f.description == "Days since boot."
        assert f.category == "general"
        assert f.confine == {}
        assert f.module == __name__
        assert f.invoke() == 3

    def test_decorator_returns_function_unchanged(self, registry):
        def original():
            return "x"

        decorated = fact(name="renamed", registry=registry)(original)
        assert decorated is original
        assert registry.get("renamed").callback is original

    def test_register_fact_uses_global_registry(self):
        f = Fact(name="test_register_fact_global", description="", callback=lambda: 1)
        register_fact(f)
        assert REGISTRY.get("test_register_fact_global") is f

    def test_explicit_metadata(self, registry):
        @fact(name="console", description="who", confine={"kernel": "Darwin"},
              category="session", aliases=["cu"], registry=registry)
        def _console():
            return "alice"

        f = registry.get("cu")
        assert f.name == "console"
        assert f.confine == {"kernel": "Darwin"}
        assert f.category == "session"


# =============================================================================
# Confine matching
# =============================================================================


class TestConfineMatches:

    @pytest.mark.parametrize("expected, actual, result", [
        ("Darwin", "Darwin", True),
        ("darwin", "Darwin", True),
        ("Darwin", "Linux", False),
        (["Linux", "Darwin"], "darwin", True),
        (("Linux", "FreeBSD"), "Darwin", False),
        ("3", 3, True),
    ])
    def test_values(self, expected, actual, result):
        assert confine_matches(expected, actual) is result

    def test_callable(self):
        assert confine_matches(lambda v: v.startswith("Dar"), "Darwin")
        assert not confine_matches(lambda v: False, "Darwin")

    def test_absent_value_never_matches(self):
        assert not confine_matches("", None)
        assert not confine_matches(lambda v: True, None)
