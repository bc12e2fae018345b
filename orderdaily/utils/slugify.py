"""Utility for generating URL-safe slugs from arbitrary text.

The slug pipeline works on raw bytes so that input which is not valid
UTF-8 still produces a result. Text-level normalisation (tag stripping,
entity removal, case folding) is done with regular expressions; the
byte-level part is a small UTF-8 walker that percent-encodes multi-byte
characters without ever splitting one across the length budget.
"""

from __future__ import annotations

import re
from typing import Union

SLUG_ENCODE_LENGTH = 200

_TAG_PATTERN = re.compile(rb"<[^>]*(?:>|$)")
_PERCENT_PAIR_PATTERN = re.compile(rb"(%[a-fA-F0-9]{2})")
_ENTITY_PATTERN = re.compile(rb"&.+?;")
_DISALLOWED_PATTERN = re.compile(rb"[^%a-z0-9 _-]")
_WHITESPACE_PATTERN = re.compile(rb"\s+")
_HYPHENS_PATTERN = re.compile(rb"-+")


def seems_utf8(data: bytes) -> bool:
    """Return ``True`` when ``data`` is a well-formed UTF-8 byte sequence.

    The legacy five- and six-byte forms are accepted as well.
    """
    length = len(data)
    i = 0
    while i < length:
        c = data[i]
        if c < 0x80:
            n = 0
        elif (c & 0xE0) == 0xC0:
            n = 1
        elif (c & 0xF0) == 0xE0:
            n = 2
        elif (c & 0xF8) == 0xF0:
            n = 3
        elif (c & 0xFC) == 0xF8:
            n = 4
        elif (c & 0xFE) == 0xFC:
            n = 5
        else:
            return False
        for _ in range(n):
            i += 1
            if i == length or (data[i] & 0xC0) != 0x80:
                return False
        i += 1
    return True


def utf8_uri_encode(data: bytes, length: int = 0) -> str:
    """Percent-encode the multi-byte characters of a UTF-8 byte string.

    Parameters
    ----------
    data: bytes
        UTF-8 encoded text. ASCII bytes are copied through unchanged.
    length: int
        Output budget in encoded units: one per ASCII byte, three per
        byte of a multi-byte character. ``0`` disables truncation.

    Returns
    -------
    str
        The encoded text, cut at the last whole character that fits.
    """
    encoded: list[str] = []
    values: list[int] = []
    num_octets = 1
    unicode_length = 0
    for value in data:
        if value < 128:
            if length and unicode_length >= length:
                break
            encoded.append(chr(value))
            unicode_length += 1
            continue

        if not values:
            if value < 224:
                num_octets = 2
            elif value < 240:
                num_octets = 3
            else:
                num_octets = 4
        values.append(value)
        if length and unicode_length + num_octets * 3 > length:
            break

        if len(values) == num_octets:
            encoded.extend(f"%{octet:02x}" for octet in values)
            unicode_length += num_octets * 3
            values = []
            num_octets = 1
    return "".join(encoded)


def _protect_percent_pairs(value: bytes) -> bytes:
    """Drop stray ``%`` signs while keeping ``%XX`` hex pairs intact."""
    parts = _PERCENT_PAIR_PATTERN.split(value)
    # split() with one capturing group puts the matched pairs at odd indices
    return b"".join(
        part if index % 2 else part.replace(b"%", b"")
        for index, part in enumerate(parts)
    )


def slugify(value: Union[str, bytes]) -> str:
    """Convert arbitrary text into a lowercase slug for URLs and API fields.

    Markup, entities and punctuation are removed, runs of whitespace and
    hyphens collapse to a single hyphen, and non-ASCII characters survive
    only as the hex digits of their UTF-8 bytes. Never raises; input with
    nothing usable gives ``""``.

    Examples
    --------
    >>> slugify("Hello World!")
    'hello-world'
    >>> slugify("<b>Bold</b> Title")
    'bold-title'
    >>> slugify("Café")
    'cafc3a9'
    """
    if isinstance(value, str):
        data = value.encode("utf-8", "surrogatepass")
    else:
        data = bytes(value)

    data = _TAG_PATTERN.sub(b"", data)
    data = _protect_percent_pairs(data)

    if seems_utf8(data):
        try:
            lowered = data.decode("utf-8").lower().encode("utf-8")
        except UnicodeError:
            # Surrogates and the legacy long forms pass the byte check
            # but cannot be decoded; encode them as they are.
            lowered = data
        data = utf8_uri_encode(lowered, SLUG_ENCODE_LENGTH).encode("ascii")

    data = data.lower()
    data = _ENTITY_PATTERN.sub(b"", data)
    data = data.replace(b".", b"-")
    data = _DISALLOWED_PATTERN.sub(b"", data)
    data = _WHITESPACE_PATTERN.sub(b"-", data)
    data = _HYPHENS_PATTERN.sub(b"-", data)
    data = data.strip(b"-")
    data = data.replace(b"%", b"")
    return data.decode("ascii")
