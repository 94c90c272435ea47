"""Rule tree data model for psltree.

Rules are stored in a suffix tree: the root's children are TLD labels, their
children the next label to the left, and so on. A node that ends a rule
carries a Terminal marking the rule as normal or as an exception.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional

from .constants import EXCEPTION_PREFIX, WILDCARD_LABEL


class Terminal(Enum):
    """Polarity of a rule ending at a node."""

    NORMAL = 1
    EXCEPTION = -1


_EMPTY_CHILDREN: Mapping[str, "RuleNode"] = MappingProxyType({})


@dataclass(frozen=True)
class RuleNode:
    """One label position in the rule tree."""

    children: Mapping[str, RuleNode] = field(default_factory=lambda: _EMPTY_CHILDREN)  # label -> child, "*" for wildcard
    terminal: Optional[Terminal] = None  # Set if a rule ends here

    def child(self, label: str) -> Optional[RuleNode]:
        """Return the child for a label, or None."""
        return self.children.get(label)

    @property
    def wildcard(self) -> Optional[RuleNode]:
        """Return the wildcard child, or None."""
        return self.children.get(WILDCARD_LABEL)

    def to_dict(self) -> dict:
        """Convert to a nested dictionary literal."""
        data: dict[str, Any] = {
            "children": {label: node.to_dict() for label, node in self.children.items()},
        }
        if self.terminal is not None:
            data["terminal"] = self.terminal.value
        return data

    @classmethod
    def from_dict(cls, data: Mapping) -> RuleNode:
        """Create instance from a nested dictionary literal."""
        children = {
            label: cls.from_dict(child)
            for label, child in data.get("children", {}).items()
        }
        terminal = data.get("terminal")
        return cls(
            children=MappingProxyType(children) if children else _EMPTY_CHILDREN,
            terminal=Terminal(terminal) if terminal is not None else None,
        )


class RuleTree:
    """
    Immutable suffix tree of public suffix rules.

    Built once (see psltree.loader) and safe to share between threads and
    between rulesets with different settings.
    """

    __slots__ = ("_root",)

    def __init__(self, root: RuleNode | None = None):
        self._root = root if root is not None else RuleNode()

    @classmethod
    def empty(cls) -> RuleTree:
        """Return a tree without rules."""
        return cls()

    @property
    def root(self) -> RuleNode:
        return self._root

    def _walk(self) -> Iterator[tuple[list[str], RuleNode]]:
        """Yield (labels from TLD inward, node) for every node below the root."""
        stack: list[tuple[list[str], RuleNode]] = [([], self._root)]
        while stack:
            path, node = stack.pop()
            for label in sorted(node.children, reverse=True):
                child_path = path + [label]
                yield child_path, node.children[label]
                stack.append((child_path, node.children[label]))

    def rules(self) -> Iterator[str]:
        """Yield every rule in PSL text form."""
        for path, node in self._walk():
            if node.terminal is None:
                continue
            rule = ".".join(reversed(path))
            if node.terminal is Terminal.EXCEPTION:
                rule = EXCEPTION_PREFIX + rule
            yield rule

    @property
    def rule_count(self) -> int:
        """Number of rules in the tree."""
        return sum(1 for _, node in self._walk() if node.terminal is not None)

    def __len__(self) -> int:
        return self.rule_count

    def __contains__(self, rule: str) -> bool:
        """Check for a rule in PSL text form, e.g. "co.uk" or "!www.ck"."""
        expected = Terminal.NORMAL
        if rule.startswith(EXCEPTION_PREFIX):
            expected = Terminal.EXCEPTION
            rule = rule[len(EXCEPTION_PREFIX):]

        node: Optional[RuleNode] = self._root
        for label in reversed(rule.split(".")):
            node = node.child(label)
            if node is None:
                return False
        return node.terminal is expected

    def to_dict(self) -> dict:
        """Convert to a nested dictionary literal."""
        return self._root.to_dict()

    @classmethod
    def from_dict(cls, data: Mapping) -> RuleTree:
        """Create a tree from a nested dictionary literal (see to_dict)."""
        return cls(RuleNode.from_dict(data))

    def __repr__(self) -> str:
        return f"RuleTree(rules={self.rule_count})"
