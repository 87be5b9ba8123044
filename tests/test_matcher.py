"""Tests for single-wildcard filename matching."""

from __future__ import annotations

import pytest

from pollwatch.matcher import WildcardMatcher, has_wildcard, matches, split_filter


class TestSplitFilter:
    """Test splitting a filter around its wildcard."""

    @pytest.mark.parametrize(
        ("pattern", "expected"),
        [
            ("shader.*", ("shader.", "")),
            ("*.frag", ("", ".frag")),
            ("shader*.frag", ("shader", ".frag")),
            ("*", ("", "")),
            ("a*b*c", ("a", "b*c")),
            ("plain.txt", ("plain.txt", "")),
        ],
    )
    def test_split(self, pattern: str, expected: tuple[str, str]) -> None:
        assert split_filter(pattern) == expected

    def test_has_wildcard(self) -> None:
        assert has_wildcard("*.png")
        assert not has_wildcard("image.png")


class TestMatches:
    """Test prefix/suffix containment matching."""

    def test_prefix_match(self) -> None:
        assert matches("shader.frag", "shader.", "") is True

    def test_prefix_mismatch(self) -> None:
        assert matches("other.frag", "shader.", "") is False

    def test_empty_filter_matches_everything(self) -> None:
        assert matches("a.x", "", "") is True
        assert matches("", "", "") is True

    def test_suffix_only(self) -> None:
        assert matches("water.frag", "", ".frag") is True
        assert matches("water.vert", "", ".frag") is False

    def test_prefix_and_suffix_both_required(self) -> None:
        assert matches("shader_water.frag", "shader", ".frag") is True
        assert matches("shader_water.vert", "shader", ".frag") is False
        assert matches("water.frag", "shader", ".frag") is False

    def test_containment_not_anchored(self) -> None:
        """Prefix and suffix may appear anywhere in the name."""
        assert matches("my_shader.frag.bak", "shader.", "") is True
        assert matches("a.frag.orig", "", ".frag") is True

    def test_repeated_substrings(self) -> None:
        assert matches("x.frag.frag", "x", ".frag") is True


class TestWildcardMatcher:
    """Test the compiled matcher object."""

    def test_callable(self) -> None:
        matcher = WildcardMatcher("*.json")
        assert matcher.prefix == ""
        assert matcher.suffix == ".json"
        assert matcher("config.json")
        assert not matcher("config.yaml")

    def test_repr(self) -> None:
        assert repr(WildcardMatcher("a*")) == "WildcardMatcher('a*')"
