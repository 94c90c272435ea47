"""Public suffix lookups for psltree.

A Ruleset pairs an immutable RuleTree with a min_suffix setting and answers
public suffix queries:

    >>> rs = Ruleset.from_string("uk\\nco.uk")
    >>> rs.public_suffix("whatever.host.co.uk")
    SuffixSplit(remainder='whatever.host', suffix='co.uk')
    >>> rs.suffix("whatever.host.co.uk", extra_labels=1)
    'host.co.uk'
    >>> rs.public_suffix(["whatever", "host", "co", "uk"])
    SuffixSplit(remainder=['whatever', 'host'], suffix=['co', 'uk'])
"""

from __future__ import annotations

import logging
import threading
from typing import Any, NamedTuple, Optional

from .config import RulesetOptions, parse_options
from .loader import RuleSource, build_tree, load_tree
from .matcher import match
from .models import RuleTree
from .normalizer import Host, Labels, normalize_host, reshape
from .sources import clear_default_tree, load_default_tree

logger = logging.getLogger(__name__)


class SuffixSplit(NamedTuple):
    """A hostname split into its private part and its public suffix."""

    remainder: Labels
    suffix: Labels


class Ruleset:
    """
    Public suffix rules plus lookup settings.

    Rulesets are read-only and can be shared between threads. Several
    rulesets may share one RuleTree.
    """

    __slots__ = ("_tree", "_options")

    def __init__(self, tree: RuleTree, **options: Any):
        self._tree = tree
        self._options: RulesetOptions = parse_options(**options)

    @classmethod
    def from_tree(cls, tree: RuleTree, **options: Any) -> Ruleset:
        """Create a ruleset around an existing tree."""
        return cls(tree, **options)

    @classmethod
    def from_string(cls, text: str, **options: Any) -> Ruleset:
        """Create a ruleset from PSL-format text."""
        parsed = parse_options(**options)
        return cls(build_tree(text), min_suffix=parsed.min_suffix)

    @classmethod
    def from_file(cls, source: RuleSource, **options: Any) -> Ruleset:
        """
        Create a ruleset from a PSL file path or readable stream.

        Raises:
            ConfigurationError: If options are invalid
            MalformedInputError: If the source cannot be read
        """
        parsed = parse_options(**options)
        return cls(load_tree(source), min_suffix=parsed.min_suffix)

    @classmethod
    def default(cls, **options: Any) -> Ruleset:
        """Return the shared ruleset built from the default rules."""
        parsed = parse_options(**options)
        return _get_default_ruleset(parsed.min_suffix)

    @property
    def tree(self) -> RuleTree:
        return self._tree

    @property
    def min_suffix(self) -> int:
        return self._options.min_suffix

    def public_suffix(self, host: Host | None, extra_labels: Optional[int] = 0) -> Optional[SuffixSplit]:
        """
        Split a hostname into remainder and public suffix.

        The result has the same form as the input: strings for a string
        (Unicode if the input was Unicode), lists for a label sequence.

        Args:
            host: Hostname string or sequence of labels
            extra_labels: Labels of the remainder to move into the suffix,
                e.g. 1 yields the registrable root domain; None counts as 0

        Returns:
            The split, or None if host is None or empty

        Raises:
            ValueError: If extra_labels is negative
            UnsupportedEncodingError: If host is a Unicode string and no IDNA library is installed
        """
        if extra_labels is None:
            extra_labels = 0
        if extra_labels < 0:
            raise ValueError(f"extra_labels must be non-negative, got {extra_labels}")

        normalized = normalize_host(host)
        if normalized is None:
            return None

        labels = normalized.labels
        length = match(labels, self._tree, self.min_suffix) + extra_labels

        if length >= len(labels):
            remainder, suffix = [], labels
        elif length > 0:
            remainder, suffix = labels[:-length], labels[-length:]
        else:
            remainder, suffix = labels, []

        return SuffixSplit(
            reshape(remainder, normalized.shape),
            reshape(suffix, normalized.shape),
        )

    def suffix(self, host: Host | None, extra_labels: int = 0) -> Optional[Labels]:
        """Return only the public suffix of host (see public_suffix)."""
        result = self.public_suffix(host, extra_labels)
        return result.suffix if result is not None else None

    def root_domain(self, host: Host | None) -> Optional[Labels]:
        """Return the registrable domain: the public suffix plus one label."""
        return self.suffix(host, extra_labels=1)

    def is_public_suffix(self, domain: Host | None) -> bool:
        """
        Check if a domain is itself a public suffix.

        Examples (with the bundled rules):
        - "com", "co.uk" -> True
        - "google.com" -> False
        """
        result = self.public_suffix(domain)
        return result is not None and not result.remainder

    def __repr__(self) -> str:
        return f"Ruleset({self._tree!r}, min_suffix={self.min_suffix})"


_default_rulesets: dict[int, Ruleset] = {}
_default_rulesets_lock = threading.Lock()


def _get_default_ruleset(min_suffix: int) -> Ruleset:
    """Return the cached default ruleset for min_suffix, building it on first use."""
    ruleset = _default_rulesets.get(min_suffix)
    if ruleset is not None:
        return ruleset

    with _default_rulesets_lock:
        ruleset = _default_rulesets.get(min_suffix)
        if ruleset is None:
            ruleset = Ruleset(load_default_tree(), min_suffix=min_suffix)
            _default_rulesets[min_suffix] = ruleset
            logger.debug("Built default ruleset with min_suffix=%d", min_suffix)
        return ruleset


def get_public_suffix(domain: Host | None) -> Optional[Labels]:
    """
    Get the public suffix of a domain using the default rules.

    Args:
        domain: Full domain (e.g., "www.example.co.uk")

    Returns:
        The public suffix (e.g., "co.uk"), or None for empty input
    """
    return Ruleset.default().suffix(domain)


def get_root_domain(domain: Host | None) -> Optional[Labels]:
    """Get the registrable domain (e.g., "example.co.uk") using the default rules."""
    return Ruleset.default().root_domain(domain)


def is_public_suffix(domain: Host | None) -> bool:
    """Check if a domain is a public suffix using the default rules."""
    return Ruleset.default().is_public_suffix(domain)


def clear_cache() -> None:
    """Drop the default rulesets and tree (for testing purposes)."""
    with _default_rulesets_lock:
        _default_rulesets.clear()
    clear_default_tree()
