"""Public Suffix List loader for psltree.

Parses PSL-format text into a RuleTree. Handles:
- Standard suffix rules (e.g., com, co.uk)
- Wildcard rules (e.g., *.ck means any label directly under ck is a public suffix)
- Exception rules (e.g., !www.ck means www.ck is NOT a public suffix)
- Unicode rules, which are stored in their IDNA ASCII form

Rule syntax problems never fail a load; unusable lines are skipped.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from types import MappingProxyType
from typing import IO, Optional, Union

from . import idna_support
from .constants import COMMENT_MARKER, EXCEPTION_PREFIX, WILDCARD_LABEL
from .models import RuleNode, RuleTree, Terminal

logger = logging.getLogger(__name__)

RuleSource = Union[str, os.PathLike, IO[str], IO[bytes]]


class MalformedInputError(OSError):
    """Raised when a rule source cannot be read."""
    pass


class _NodeBuilder:
    """Mutable node used while a tree is being built."""

    __slots__ = ("children", "terminal")

    def __init__(self) -> None:
        self.children: dict[str, _NodeBuilder] = {}
        self.terminal: Optional[Terminal] = None

    def freeze(self) -> RuleNode:
        """Convert this subtree into immutable RuleNodes."""
        if not self.children:
            return RuleNode(terminal=self.terminal)
        children = {label: node.freeze() for label, node in self.children.items()}
        return RuleNode(children=MappingProxyType(children), terminal=self.terminal)


def _strip_comment(line: str) -> str:
    """Remove a // comment and surrounding whitespace."""
    return line.split(COMMENT_MARKER, 1)[0].strip()


def build_tree(text: str) -> RuleTree:
    """
    Build a RuleTree from PSL-format text.

    Args:
        text: Rule text, one rule per line

    Returns:
        The immutable rule tree

    Raises:
        UnsupportedEncodingError: If a rule is non-ASCII and no IDNA library is installed
    """
    root = _NodeBuilder()
    rule_count = 0
    wildcard_count = 0
    exception_count = 0

    for line_number, raw_line in enumerate(text.splitlines(), start=1):
        line = _strip_comment(raw_line)

        # Skip comments and blank lines
        if not line:
            continue

        is_exception = line.startswith(EXCEPTION_PREFIX)
        if is_exception:
            line = line[len(EXCEPTION_PREFIX):]

        if not line.isascii():
            try:
                line = idna_support.to_ascii(line)
            except UnicodeError as e:
                logger.warning("Skipping rule on line %d (%r): %s", line_number, raw_line, e)
                continue

        labels = [label for label in line.lower().split(".") if label]
        if not labels:
            logger.warning("Skipping rule on line %d (%r): no labels", line_number, raw_line)
            continue

        # Walk from the TLD inward
        node = root
        for label in reversed(labels):
            node = node.children.setdefault(label, _NodeBuilder())

        if node.terminal is not None:
            logger.debug("Rule on line %d redefines %s", line_number, ".".join(labels))
        else:
            rule_count += 1
            if is_exception:
                exception_count += 1
            elif labels[0] == WILDCARD_LABEL:
                wildcard_count += 1

        node.terminal = Terminal.EXCEPTION if is_exception else Terminal.NORMAL

    logger.info(
        "Loaded PSL: %d rules, %d wildcards, %d exceptions",
        rule_count,
        wildcard_count,
        exception_count,
    )
    return RuleTree(root.freeze())


def read_rules(source: RuleSource) -> str:
    """
    Read rule text from a file path or a readable stream.

    Binary streams are decoded as UTF-8.

    Raises:
        MalformedInputError: If the source cannot be opened, read or decoded
    """
    if isinstance(source, (str, os.PathLike)):
        path = Path(source)
        try:
            with open(path, "r", encoding="utf-8") as f:
                return f.read()
        except (OSError, ValueError) as e:
            raise MalformedInputError(f"Failed to read public suffix data from {path}: {e}") from e

    try:
        content = source.read()
        if isinstance(content, bytes):
            content = content.decode("utf-8")
    except (OSError, ValueError) as e:
        raise MalformedInputError(f"Failed to read public suffix data: {e}") from e

    if not isinstance(content, str):
        raise MalformedInputError(
            f"Failed to read public suffix data: stream returned {type(content).__name__}"
        )
    return content


def load_tree(source: RuleSource) -> RuleTree:
    """Read a rule source and build its RuleTree."""
    logger.debug("Loading public suffix rules from %s", source)
    return build_tree(read_rules(source))
