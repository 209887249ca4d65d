"""Tests for configpanel.panel.addressing."""

from __future__ import annotations

import pytest

from configpanel.exceptions import FilterKeyNoneError, FilterKeyTooDeepError
from configpanel.panel.addressing import ExcludeKey, FilterKey, KeyKind

pytestmark = [pytest.mark.unit]


class TestFilterKeyParse:
    """Test FilterKey.parse."""

    @pytest.mark.parametrize(
        ("raw", "kind", "parts"),
        [
            ("security", KeyKind.PANEL, ("security", None, None)),
            ("security.ssh", KeyKind.SECTION, ("security", "ssh", None)),
            ("security.ssh.ssh_port", KeyKind.OPTION, ("security", "ssh", "ssh_port")),
        ],
    )
    def test_parse_depths(self, raw, kind, parts):
        """Test one to three segments select panel, section and option."""
        key = FilterKey.parse(raw)

        assert key.kind is kind
        assert (key.panel, key.section, key.option) == parts
        assert str(key) == raw

    def test_parse_empty(self):
        """Test empty key is its own error."""
        with pytest.raises(FilterKeyNoneError):
            FilterKey.parse("")

    def test_parse_too_deep(self):
        """Test four segments are rejected with the key in the error."""
        with pytest.raises(FilterKeyTooDeepError) as exc_info:
            FilterKey.parse("a.b.c.d")

        assert exc_info.value.filter_key == "a.b.c.d"
        assert "a.b.c.d" in str(exc_info.value)

    def test_everything(self):
        """Test the default key selects everything."""
        key = FilterKey.everything()

        assert key.kind is KeyKind.ALL
        assert str(key) == ""

    def test_constructors_match_parse(self):
        """Test helper constructors build the same keys as parse."""
        assert FilterKey.for_panel("p") == FilterKey.parse("p")
        assert FilterKey.for_section("p", "s") == FilterKey.parse("p.s")
        assert FilterKey.for_option("p", "s", "o") == FilterKey.parse("p.s.o")


class TestFilterKeyMatches:
    """Test FilterKey predicates."""

    def test_everything_matches_all(self):
        """Test Everything matches any node."""
        key = FilterKey.everything()

        assert key.matches_panel("p")
        assert key.matches_section("p", "s")
        assert key.matches_option("p", "s", "o")

    def test_panel_matches_beneath(self):
        """Test a panel key matches its sections and options only."""
        key = FilterKey.parse("p")

        assert key.matches_panel("p")
        assert key.matches_section("p", "s")
        assert key.matches_option("p", "s", "o")
        assert not key.matches_panel("q")
        assert not key.matches_option("q", "s", "o")

    def test_section_matches(self):
        """Test a section key matches its panel, itself and its options."""
        key = FilterKey.parse("p.s")

        assert key.matches_panel("p")
        assert key.matches_section("p", "s")
        assert key.matches_option("p", "s", "o")
        assert not key.matches_section("p", "t")
        assert not key.matches_option("p", "t", "o")

    def test_option_matches_only_itself(self):
        """Test an option key matches a single option."""
        key = FilterKey.parse("p.s.o")

        assert key.matches_option("p", "s", "o")
        assert not key.matches_option("p", "s", "other")


class TestExcludeKey:
    """Test ExcludeKey parsing and predicates."""

    def test_nothing_excludes_nothing(self):
        """Test Nothing never excludes."""
        key = ExcludeKey.nothing()

        assert str(key) == "NOTHING"
        assert not key.excludes_panel("p")
        assert not key.excludes_section("p", "s")
        assert not key.excludes_option("p", "s", "o")

    def test_parse_errors(self):
        """Test exclude keys share the filter key parse errors."""
        with pytest.raises(FilterKeyNoneError):
            ExcludeKey.parse("")
        with pytest.raises(FilterKeyTooDeepError):
            ExcludeKey.parse("a.b.c.d")

    def test_panel_excludes_all_beneath(self):
        """Test a panel exclusion removes the panel and its content."""
        key = ExcludeKey.parse("p")

        assert key.excludes_panel("p")
        assert key.excludes_section("p", "s")
        assert key.excludes_option("p", "s", "o")
        assert not key.excludes_panel("q")

    def test_section_keeps_panel(self):
        """Test a section exclusion keeps its panel and siblings."""
        key = ExcludeKey.for_section("security", "root_access")

        assert not key.excludes_panel("security")
        assert key.excludes_section("security", "root_access")
        assert key.excludes_option("security", "root_access", "root_password")
        assert not key.excludes_section("security", "ssh")
        assert not key.excludes_option("security", "ssh", "ssh_port")

    def test_option_keeps_section(self):
        """Test an option exclusion removes nothing but the option."""
        key = ExcludeKey.parse("p.s.o")

        assert not key.excludes_panel("p")
        assert not key.excludes_section("p", "s")
        assert key.excludes_option("p", "s", "o")
        assert not key.excludes_option("p", "s", "other")
