"""
Tests for Naming — Managed namespace prefix
"""

import pytest

from statusbar.core.naming import REGEX_PREFIX, ensure_managed_name, is_managed


class TestEnsureManagedName:
    """Prefixing rule names into the managed namespace."""

    def test_adds_prefix(self):
        assert ensure_managed_name("Foo") == "[状态栏] Foo"

    def test_keeps_prefixed_name(self):
        assert ensure_managed_name("[状态栏] Foo") == "[状态栏] Foo"

    def test_empty_name_becomes_prefix(self):
        assert ensure_managed_name("") == REGEX_PREFIX

    def test_prefix_without_space_is_not_managed(self):
        """Only the exact prefix (with trailing space) counts."""
        assert ensure_managed_name("[状态栏]Foo") == "[状态栏] [状态栏]Foo"

    @pytest.mark.parametrize("name", [
        "", "Foo", "[状态栏] Foo", "[状态栏]", "  spaced  ", "[状态栏] [状态栏] x", "状态栏",
    ])
    def test_idempotent(self, name):
        once = ensure_managed_name(name)
        assert ensure_managed_name(once) == once

    def test_custom_prefix(self):
        assert ensure_managed_name("Foo", prefix="SB: ") == "SB: Foo"
        assert ensure_managed_name("SB: Foo", prefix="SB: ") == "SB: Foo"


class TestIsManaged:
    """Membership in the managed subset."""

    def test_prefixed_name_is_managed(self):
        assert is_managed("[状态栏] HP") is True

    def test_plain_name_is_not_managed(self):
        assert is_managed("HP") is False

    def test_empty_and_none_are_not_managed(self):
        assert is_managed("") is False
        assert is_managed(None) is False

    def test_ensure_then_is_managed(self):
        assert is_managed(ensure_managed_name("anything"))
