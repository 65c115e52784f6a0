"""Color token decoding."""

from __future__ import annotations

import string

from .errors import ColorParseError

FALLBACK_GRAY = (155, 155, 155)

_HEX = frozenset(string.hexdigits)


def decode_color(token: str) -> tuple[int, int, int]:
    """Decode ``#RRGGBB`` or ``RRGGBB``; any other length maps to the fallback gray."""
    if len(token) == 7:
        digits = token[1:]
    elif len(token) == 6:
        digits = token
    else:
        return FALLBACK_GRAY

    if not _HEX.issuperset(digits):
        raise ColorParseError(token)
    return tuple(int(digits[i : i + 2], 16) for i in (0, 2, 4))  # type: ignore[return-value]
