"""Tests for the longest-match suffix matcher."""

from __future__ import annotations

import pytest

from psltree.loader import build_tree
from psltree.matcher import match
from psltree.models import RuleTree


def _labels(host: str) -> list[str]:
    return host.split(".")


class TestLiteralRules:
    """Tests for plain suffix rules."""

    @pytest.fixture
    def tree(self) -> RuleTree:
        return build_tree("uk\nco.uk\ncom")

    def test_longest_literal_wins(self, tree) -> None:
        """co.uk beats uk."""
        assert match(_labels("whatever.host.co.uk"), tree, 1) == 2

    def test_single_label_rule(self, tree) -> None:
        """A TLD rule gives a one-label suffix."""
        assert match(_labels("example.com"), tree, 1) == 1

    def test_shorter_rule_when_longer_does_not_apply(self, tree) -> None:
        """Only uk matches example.org.uk."""
        assert match(_labels("example.org.uk"), tree, 1) == 1

    def test_host_equal_to_rule(self, tree) -> None:
        """A bare suffix matches its full length."""
        assert match(_labels("co.uk"), tree, 1) == 2

    def test_unknown_tld_uses_min_suffix(self, tree) -> None:
        """Unmatched hosts fall back to min_suffix."""
        assert match(_labels("example.test"), tree, 1) == 1
        assert match(_labels("example.test"), tree, 0) == 0
        assert match(_labels("a.example.test"), tree, 2) == 2

    def test_intermediate_node_is_not_a_rule(self) -> None:
        """A path node without a terminal does not match on its own."""
        tree = build_tree("a.b.example")
        assert match(_labels("x.b.example"), tree, 0) == 0
        assert match(_labels("x.a.b.example"), tree, 0) == 3


class TestWildcardRules:
    """Tests for wildcard and exception rules."""

    @pytest.fixture
    def tree(self) -> RuleTree:
        return build_tree("jp\n*.kawasaki.jp\n!city.kawasaki.jp\n*.ck\n!www.ck")

    def test_wildcard_matches_any_label(self, tree) -> None:
        """*.kawasaki.jp covers foo.kawasaki.jp."""
        assert match(_labels("foo.kawasaki.jp"), tree, 1) == 3
        assert match(_labels("www.foo.kawasaki.jp"), tree, 1) == 3

    def test_exception_shortens_wildcard(self, tree) -> None:
        """!city.kawasaki.jp carves city out of the wildcard."""
        assert match(_labels("city.kawasaki.jp"), tree, 1) == 2
        assert match(_labels("www.city.kawasaki.jp"), tree, 1) == 2

    def test_wildcard_without_parent_rule(self, tree) -> None:
        """*.ck applies although ck itself is not a rule."""
        assert match(_labels("foo.ck"), tree, 1) == 2
        assert match(_labels("www.ck"), tree, 1) == 1

    def test_wildcard_needs_a_label(self, tree) -> None:
        """The wildcard is not reached when labels run out."""
        assert match(_labels("kawasaki.jp"), tree, 1) == 1
        assert match(_labels("ck"), tree, 0) == 0

    def test_top_level_wildcard(self) -> None:
        """A bare * rule makes every TLD a suffix."""
        tree = build_tree("*")
        assert match(_labels("example.anything"), tree, 0) == 1


class TestBacktracking:
    """Tests that every consistent path is explored."""

    def test_wildcard_branch_beats_shorter_literal(self) -> None:
        """A deeper wildcard match wins over a literal match found first."""
        tree = build_tree("b.c\n*.*.c")
        # literal branch gives 2 (b.c), wildcard branch gives 3 (*.*.c)
        assert match(_labels("x.a.b.c"), tree, 1) == 3

    def test_literal_branch_beats_shorter_wildcard(self) -> None:
        """A deeper literal match wins over a wildcard match."""
        tree = build_tree("*.c\nx.a.b.c")
        assert match(_labels("y.x.a.b.c"), tree, 1) == 4

    def test_dead_end_literal_falls_back_to_wildcard(self) -> None:
        """A literal path without terminals does not hide the wildcard."""
        tree = build_tree("a.b.c.example\n*.example")
        assert match(_labels("x.c.example"), tree, 1) == 2

    def test_exception_from_literal_branch_overrides_wildcard(self) -> None:
        """Exceptions apply whichever branch recorded them."""
        tree = build_tree("*.*.example\n!keep.foo.example")
        assert match(_labels("keep.foo.example"), tree, 1) == 2
        assert match(_labels("other.foo.example"), tree, 1) == 3

    def test_exception_does_not_remove_literal_match(self) -> None:
        """A literal rule of the same length as an exception still counts."""
        tree = build_tree("*.example\n!a.example\nb.a.example")
        assert match(_labels("b.a.example"), tree, 1) == 3
        assert match(_labels("a.example"), tree, 1) == 1

    def test_exception_alone(self) -> None:
        """An exception without a wildcard yields its length minus one."""
        tree = build_tree("!www.example")
        assert match(_labels("www.example"), tree, 0) == 1


class TestMatchEdgeCases:
    """Tests for empty inputs and empty trees."""

    def test_empty_tree_returns_min_suffix(self) -> None:
        """No rules means the fallback applies."""
        tree = RuleTree.empty()
        assert match(["example", "com"], tree, 1) == 1
        assert match(["example", "com"], tree, 0) == 0

    def test_empty_labels_return_min_suffix(self) -> None:
        """Matching no labels is total and uses the fallback."""
        tree = build_tree("com")
        assert match([], tree, 1) == 1

    def test_does_not_modify_labels(self) -> None:
        """Input labels are left untouched."""
        tree = build_tree("co.uk")
        labels = ["a", "co", "uk"]
        match(labels, tree, 1)
        assert labels == ["a", "co", "uk"]

    def test_min_suffix_may_exceed_label_count(self) -> None:
        """The matcher reports the fallback as is; callers clamp."""
        tree = RuleTree.empty()
        assert match(["com"], tree, 3) == 3
