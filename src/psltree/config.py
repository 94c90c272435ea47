"""Construction options for psltree rulesets."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from .constants import DEFAULT_MIN_SUFFIX

logger = logging.getLogger(__name__)

KNOWN_OPTIONS = frozenset({"min_suffix"})


class ConfigurationError(Exception):
    """Raised when ruleset construction options are invalid."""
    pass


@dataclass(frozen=True)
class RulesetOptions:
    """Validated options shared by every ruleset constructor."""

    min_suffix: int = DEFAULT_MIN_SUFFIX  # Fallback suffix length when no rule matches


def _validate_options(options: dict[str, Any]) -> list[str]:
    """Validate construction options and return list of errors."""
    errors = []

    for key in sorted(set(options) - KNOWN_OPTIONS):
        errors.append(f"Unknown option '{key}'")

    min_suffix = options.get("min_suffix", DEFAULT_MIN_SUFFIX)
    # bool is an int subclass but never a meaningful label count
    if isinstance(min_suffix, bool) or not isinstance(min_suffix, int):
        errors.append(f"'min_suffix' must be an integer, got {type(min_suffix).__name__}")
    elif min_suffix < 0:
        errors.append(f"'min_suffix' must be non-negative, got {min_suffix}")

    return errors


def parse_options(**options: Any) -> RulesetOptions:
    """
    Build RulesetOptions from keyword arguments.

    A min_suffix of None means "use the default".

    Raises:
        ConfigurationError: If any key is unknown or any value is invalid
    """
    if options.get("min_suffix") is None:
        options.pop("min_suffix", None)

    errors = _validate_options(options)
    if errors:
        for error in errors:
            logger.error("Ruleset option error: %s", error)
        raise ConfigurationError(f"Invalid ruleset options: {'; '.join(errors)}")

    return RulesetOptions(**options)
