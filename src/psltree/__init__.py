"""Public suffix (effective TLD) lookups based on the Mozilla Public Suffix List."""

from .constants import PACKAGE_VERSION as __version__
from .config import ConfigurationError, RulesetOptions, parse_options
from .idna_support import UnsupportedEncodingError, idna_available
from .loader import MalformedInputError, build_tree, load_tree, read_rules
from .logging_config import setup_logging
from .matcher import match
from .models import RuleNode, RuleTree, Terminal
from .ruleset import (
    Ruleset,
    SuffixSplit,
    clear_cache,
    get_public_suffix,
    get_root_domain,
    is_public_suffix,
)

__all__ = [
    "__version__",
    # Config
    "ConfigurationError",
    "RulesetOptions",
    "parse_options",
    # IDNA
    "UnsupportedEncodingError",
    "idna_available",
    # Logging
    "setup_logging",
    # Rule tree
    "RuleNode",
    "RuleTree",
    "Terminal",
    "MalformedInputError",
    "build_tree",
    "load_tree",
    "read_rules",
    # Lookup
    "match",
    "Ruleset",
    "SuffixSplit",
    "get_public_suffix",
    "get_root_domain",
    "is_public_suffix",
    "clear_cache",
]
