"""Hostname normalization and result shaping.

Lookups accept a hostname string or a sequence of labels and answer in the
same form. Unicode hostname strings are matched in IDNA ASCII form and
converted back for the answer.
"""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple, Sequence, Union

from . import idna_support

Host = Union[str, Sequence[str]]
Labels = Union[str, list[str]]


class HostShape(Enum):
    """Representation of the caller's input, reused for the answer."""

    SEQUENCE = "sequence"
    ASCII = "ascii"
    UNICODE = "unicode"


class NormalizedHost(NamedTuple):
    labels: list[str]  # Lowercase labels, left to right
    shape: HostShape


def normalize_host(host: Host | None) -> NormalizedHost | None:
    """
    Turn a hostname into lowercase labels.

    - Strings lose one trailing dot and empty labels; non-ASCII strings are
      converted with the IDNA codec.
    - Sequences are copied and lowercased, never modified in place.

    Returns:
        The normalized host, or None if there is nothing to look up

    Raises:
        UnsupportedEncodingError: If the string is non-ASCII and no IDNA library is installed
    """
    if not host:
        return None

    if isinstance(host, str):
        name = host.lower()
        if name.endswith("."):
            name = name[:-1]
        shape = HostShape.ASCII
        if not name.isascii():
            name = idna_support.to_ascii(name)
            shape = HostShape.UNICODE
        labels = [label for label in name.lower().split(".") if label]
    else:
        labels = [label.lower() for label in host]
        shape = HostShape.SEQUENCE

    if not labels:
        return None
    return NormalizedHost(labels, shape)


def reshape(labels: list[str], shape: HostShape) -> Labels:
    """Convert labels back to the caller's representation."""
    if shape is HostShape.SEQUENCE:
        return labels
    name = ".".join(labels)
    if shape is HostShape.UNICODE and name:
        name = idna_support.to_unicode(name)
    return name
