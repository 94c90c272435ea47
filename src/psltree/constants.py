"""Package constants and default paths for psltree."""

import os
from pathlib import Path

# Package metadata
PACKAGE_NAME = "psltree"
PACKAGE_VERSION = "1.0.0"

# Lookup defaults
DEFAULT_MIN_SUFFIX = 1
WILDCARD_LABEL = "*"
EXCEPTION_PREFIX = "!"
COMMENT_MARKER = "//"

# Bundled data (relative to the package root)
DATA_PACKAGE_DIR = "data"
BUILTIN_RULES_FILE = "public_suffix_list.dat"

# Preferred "latest" rules, written by external update tooling
LATEST_FILE_ENV_VAR = "PSLTREE_LATEST_FILE"
DEFAULT_LATEST_RULES_FILE = Path.home() / ".psltree" / "public_suffix_list.dat"


def latest_rules_file() -> Path:
    """Return the configured location of the "latest" rules file."""
    override = os.environ.get(LATEST_FILE_ENV_VAR)
    return Path(override) if override else DEFAULT_LATEST_RULES_FILE


# Marks the end of the ICANN section; private domains follow it upstream
ICANN_END_MARKER = "// ===END ICANN DOMAINS==="

# Logging settings
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
LOG_BACKUP_COUNT = 3
