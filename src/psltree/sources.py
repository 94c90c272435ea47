"""Rule sources for the default ruleset.

The default tree comes from the "latest" rules file written by update
tooling when one exists, otherwise from the list bundled with the package.
It is loaded at most once per process.
"""

from __future__ import annotations

import logging
import threading
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path
from typing import Optional

from .constants import BUILTIN_RULES_FILE, DATA_PACKAGE_DIR, PACKAGE_NAME, latest_rules_file
from .idna_support import UnsupportedEncodingError
from .loader import MalformedInputError, load_tree
from .models import RuleTree

logger = logging.getLogger(__name__)

_default_tree: Optional[RuleTree] = None
_default_tree_lock = threading.Lock()


def latest_rules_path() -> Path:
    """Get the path of the preferred "latest" rules file."""
    return latest_rules_file()


def builtin_rules_path() -> Traversable:
    """Get the bundled rules file inside the installed package."""
    return resources.files(PACKAGE_NAME).joinpath(DATA_PACKAGE_DIR, BUILTIN_RULES_FILE)


def _load_builtin_tree() -> RuleTree:
    """Load the list bundled with the package."""
    resource = builtin_rules_path()
    logger.debug("Using built-in PSL data at %s", resource)
    with resource.open("rb") as f:
        return load_tree(f)


def _load_latest_tree() -> Optional[RuleTree]:
    """Load the "latest" rules file, or None if it is missing or cannot be loaded."""
    path = latest_rules_path()
    if not path.exists():
        logger.debug("Latest PSL data not found at %s", path)
        return None
    try:
        return load_tree(path)
    except (MalformedInputError, UnsupportedEncodingError) as e:
        logger.warning("Failed to load latest PSL data: %s, using built-in", e)
        return None


def load_default_tree() -> RuleTree:
    """
    Return the default rule tree, loading it on first use.

    Safe to call from several threads; the source is read once.
    """
    global _default_tree
    tree = _default_tree
    if tree is not None:
        return tree

    with _default_tree_lock:
        if _default_tree is None:
            tree = _load_latest_tree()
            if tree is None:
                tree = _load_builtin_tree()
            _default_tree = tree
        return _default_tree


def clear_default_tree() -> None:
    """Forget the loaded default tree (for testing purposes)."""
    global _default_tree
    with _default_tree_lock:
        _default_tree = None
