"""IDNA boundary for psltree.

Hostnames and rules are matched in ASCII (punycode) form. Conversion between
Unicode and ASCII domains goes through a single codec object which is chosen
once at import time: the ``idna`` package when it is installed, otherwise a
codec that refuses every conversion with UnsupportedEncodingError.

Pure-ASCII input never reaches the codec, so lookups on ASCII hostnames work
either way.
"""

from __future__ import annotations

import logging
from typing import Protocol

logger = logging.getLogger(__name__)


class UnsupportedEncodingError(Exception):
    """Raised when a non-ASCII domain needs conversion but no IDNA library is installed."""
    pass


class IdnaCodec(Protocol):
    """ASCII <-> Unicode domain conversion."""

    available: bool

    def encode_ascii(self, domain: str) -> str:
        ...

    def decode_unicode(self, domain: str) -> str:
        ...


class IdnaLibraryCodec:
    """
    Codec backed by the ``idna`` package.

    Works label by label so that ASCII labels, including the ``*`` wildcard
    of PSL rules, pass through untouched.
    """

    available = True

    def __init__(self, idna_module):
        self._idna = idna_module

    def encode_ascii(self, domain: str) -> str:
        labels = []
        for label in domain.split("."):
            if label.isascii():
                labels.append(label)
            else:
                labels.append(self._idna.encode(label, uts46=True).decode("ascii"))
        return ".".join(labels)

    def decode_unicode(self, domain: str) -> str:
        labels = []
        for label in domain.split("."):
            if label.startswith("xn--"):
                try:
                    label = self._idna.decode(label)
                except UnicodeError as e:
                    # Not valid punycode, keep the ASCII form
                    logger.debug("Cannot decode label %r: %s", label, e)
            labels.append(label)
        return ".".join(labels)


class UnavailableIdnaCodec:
    """Codec used when no IDNA library is installed."""

    available = False

    def encode_ascii(self, domain: str) -> str:
        raise UnsupportedEncodingError(
            f"Cannot convert {domain!r} to ASCII: no IDNA library installed"
        )

    def decode_unicode(self, domain: str) -> str:
        raise UnsupportedEncodingError(
            f"Cannot convert {domain!r} to Unicode: no IDNA library installed"
        )


def _select_codec() -> IdnaCodec:
    """Pick the codec for this process."""
    try:
        import idna
    except ImportError:
        logger.debug("idna package not installed, IDN support disabled")
        return UnavailableIdnaCodec()
    return IdnaLibraryCodec(idna)


_codec: IdnaCodec = _select_codec()


def get_codec() -> IdnaCodec:
    """Return the active IDNA codec."""
    return _codec


def set_codec(codec: IdnaCodec) -> IdnaCodec:
    """
    Replace the active IDNA codec.

    Intended for application startup and tests; not synchronized with
    concurrent lookups.

    Returns:
        The previously active codec
    """
    global _codec
    previous = _codec
    _codec = codec
    return previous


def idna_available() -> bool:
    """Return True if Unicode hostnames can be converted."""
    return _codec.available


def to_ascii(domain: str) -> str:
    """Convert a Unicode domain to its ASCII form via the active codec."""
    return _codec.encode_ascii(domain)


def to_unicode(domain: str) -> str:
    """Convert an ASCII domain to its Unicode form via the active codec."""
    return _codec.decode_unicode(domain)
