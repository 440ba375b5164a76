"""
RU: Алгоритмы контрольной цифры: сумма цифр по модулю 10 и EAN-13.
EN: Check digit algorithms used by the linear encoders.
"""

from __future__ import annotations

import logging

from .padding import digits_only

logger = logging.getLogger(__name__)

__all__ = ["mod10_digit_sum", "ean13_checksum", "is_valid_ean13"]


def mod10_digit_sum(code: str) -> int:
    """Sum of every decimal digit in ``code`` modulo 10. Non-digits are ignored.

    Example:
        >>> mod10_digit_sum("12345")
        5
        >>> mod10_digit_sum("1a2b3") == mod10_digit_sum("123")
        True
    """
    return sum(int(c) for c in digits_only(code)) % 10


def ean13_checksum(code: str) -> int:
    """Standard EAN/UPC check digit over ``code``.

    Weight 1 for even (0-based) positions, 3 for odd ones; a non-digit
    character counts as 0 but still occupies its position.

    Example:
        >>> ean13_checksum("590123412345")
        7
    """
    total = 0
    for i, c in enumerate(code):
        value = int(c) if "0" <= c <= "9" else 0
        total += value * (3 if i % 2 else 1)
    return (10 - total % 10) % 10


def is_valid_ean13(code: str) -> bool:
    if len(code) != 13 or digits_only(code) != code:
        return False
    ok = ean13_checksum(code[:12]) == int(code[12])
    if not ok:
        logger.debug("EAN-13 check digit mismatch for %s", code)
    return ok
