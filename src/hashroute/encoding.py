"""Percent-encoding of single URI components.

Mirrors the browser's ``encodeURIComponent`` / ``decodeURIComponent`` so that
built URIs survive a trip through the address bar unchanged.
"""

from __future__ import annotations

from urllib.parse import quote, unquote

# Characters encodeURIComponent leaves alone besides ASCII alphanumerics.
_UNRESERVED_MARKS = "-_.!~*'()"


def encode_uri_component(value: str) -> str:
    """Percent-encode *value* as UTF-8, keeping only unreserved characters."""
    return quote(value, safe=_UNRESERVED_MARKS, encoding="utf-8", errors="strict")


def decode_uri_component(value: str) -> str:
    """Decode ``%XX`` escapes in *value*.

    ``+`` is left as-is, unlike form decoding.
    """
    return unquote(value, encoding="utf-8", errors="strict")
