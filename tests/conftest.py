"""Shared pytest fixtures for psltree tests."""

import shutil
import tempfile
from pathlib import Path

import pytest

from psltree import idna_support
from psltree.ruleset import Ruleset


# Rules from the Public Suffix List test cases
SAMPLE_RULES = """\
// ===BEGIN ICANN DOMAINS===
// Literal rules
com
uk
co.uk

// Wildcards and exceptions
*.ck
!www.ck
jp
*.kawasaki.jp
!city.kawasaki.jp

// Unicode rule
公司.cn
cn
// ===END ICANN DOMAINS===
"""


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    path = Path(tempfile.mkdtemp())
    yield path
    shutil.rmtree(path, ignore_errors=True)


@pytest.fixture
def sample_rules_text():
    """Return PSL-format text with literal, wildcard, exception and Unicode rules."""
    return SAMPLE_RULES


@pytest.fixture
def sample_rules_file(temp_dir, sample_rules_text):
    """Write the sample rules to a file and return its path."""
    path = temp_dir / "public_suffix_list.dat"
    path.write_text(sample_rules_text, encoding="utf-8")
    return path


@pytest.fixture
def sample_ruleset(sample_rules_text):
    """Return a ruleset built from the sample rules."""
    return Ruleset.from_string(sample_rules_text)


@pytest.fixture
def no_idna():
    """Disable IDNA support for the duration of a test."""
    previous = idna_support.set_codec(idna_support.UnavailableIdnaCodec())
    yield
    idna_support.set_codec(previous)
