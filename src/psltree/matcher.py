"""Longest-match public suffix lookup.

A hostname can match rules on two branches at every depth: the literal label
and the ``*`` wildcard. A long wildcard match and a shorter literal match are
independent findings, so the search visits every path consistent with the
hostname, collects all terminals, and only then picks the longest match with
exceptions applied.
"""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple, Sequence

from .constants import WILDCARD_LABEL
from .models import RuleNode, RuleTree, Terminal


class Branch(Enum):
    """How a deferred node was reached."""

    LITERAL = "literal"
    WILDCARD = "wildcard"


class _Pending(NamedTuple):
    branch: Branch
    node: RuleNode
    depth: int  # Distance of the node's label from the end of the hostname


def match(labels: Sequence[str], tree: RuleTree, min_suffix: int) -> int:
    """
    Compute the public suffix length of a hostname.

    Args:
        labels: Normalized (lowercase ASCII) labels, left to right
        tree: Rules to match against
        min_suffix: Length to use when no rule matches

    Returns:
        Number of rightmost labels forming the public suffix
    """
    count = len(labels)
    host_matches: dict[int, Terminal] = {}
    wild_matches: dict[int, Terminal] = {}
    exception_matches: dict[int, Terminal] = {}

    stack: list[_Pending] = []

    def defer_children(node: RuleNode, depth: int) -> None:
        if depth >= count:
            return
        # Wildcard pushed first so the literal branch is explored first
        wildcard = node.children.get(WILDCARD_LABEL)
        if wildcard is not None:
            stack.append(_Pending(Branch.WILDCARD, wildcard, depth))
        literal = node.children.get(labels[count - 1 - depth])
        if literal is not None:
            stack.append(_Pending(Branch.LITERAL, literal, depth))

    defer_children(tree.root, 0)

    while stack:
        branch, node, depth = stack.pop()
        length = depth + 1

        if node.terminal is Terminal.EXCEPTION:
            exception_matches[length] = node.terminal
        elif node.terminal is Terminal.NORMAL:
            if branch is Branch.WILDCARD:
                wild_matches[length] = node.terminal
            else:
                host_matches[length] = node.terminal

        defer_children(node, depth + 1)

    # Exceptions override wildcard matches of the same length
    for length in exception_matches:
        wild_matches.pop(length, None)

    # An exception removes its own leftmost label from the suffix
    candidates = [
        *wild_matches,
        *host_matches,
        *(length - 1 for length in exception_matches),
    ]
    if not candidates:
        return min_suffix
    return max(candidates)
