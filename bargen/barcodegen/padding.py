"""
RU: Выравнивание числовых полей нулями.
EN: Zero padding of numeric fields.

Non-digit characters are never an error here: they are stripped before padding.
"""

from __future__ import annotations

import re
from typing import Final, Union

__all__ = ["GTIN_LENGTH", "digits_only", "zero_pad", "pad_gtin14"]

GTIN_LENGTH: Final[int] = 14

_NON_DIGIT = re.compile(r"[^0-9]")


def digits_only(value: Union[str, int, float]) -> str:
    # 2500.0 from a numeric form field means 2500, not "25000"
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return _NON_DIGIT.sub("", str(value))


def zero_pad(value: Union[str, int, float], length: int) -> str:
    """Strip non-digits from ``value`` and left-pad with ``'0'`` to ``length``.

    Values already at or beyond ``length`` pass through untruncated; callers
    that need a hard width check validate before padding.

    Example:
        >>> zero_pad("ABC123", 6)
        '000123'
        >>> zero_pad("123456", 4)
        '123456'
    """
    return digits_only(value).rjust(length, "0")


def pad_gtin14(value: str) -> str:
    """Normalize a GTIN to exactly 14 digits: strip, left-pad, keep the first 14.

    Example:
        >>> pad_gtin14("4810099003310")
        '04810099003310'
        >>> pad_gtin14("123456789012345678")
        '12345678901234'
    """
    return digits_only(value).rjust(GTIN_LENGTH, "0")[:GTIN_LENGTH]
