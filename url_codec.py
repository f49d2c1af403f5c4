"""Percent-decoding for request targets and percent-encoding for listing links."""

from string import hexdigits
from urllib.parse import quote

_HEX_DIGITS = frozenset(hexdigits)


def url_decode(text: str) -> str:
    """Decode %XX escapes in ``text``.

    A ``%`` always consumes the next two characters, padding with ``'0'`` when the
    input runs out. Pairs that are not hexadecimal are kept verbatim behind the
    ``%``. Each decoded byte becomes the character with that code point, so
    ``%C3%A9`` yields two characters rather than one. A truncated invalid escape
    keeps its padding, so ``x%G`` decodes to ``x%G0``.
    """
    decoded: list[str] = []
    chars = iter(text)
    for char in chars:
        if char != "%":
            decoded.append(char)
            continue

        high = next(chars, "0")
        low = next(chars, "0")
        if high in _HEX_DIGITS and low in _HEX_DIGITS:
            decoded.append(chr(int(high + low, 16)))
        else:
            decoded.append(char + high + low)
    return "".join(decoded)


def url_encode(text: str) -> str:
    """Encode a path for use in an href.

    Alphanumerics, ``-_.~`` and ``/`` are left alone; everything else, including
    space and ``"#%&+?``, becomes an uppercase %XX escape.
    """
    return quote(text, safe="/", errors="surrogateescape")
