"""
RU: Генератор случайных токенов для серийных номеров и "крипто-хвостов" GS1.
EN: Fixed-length pseudo-random tokens for GS1 serial and crypto-tail fields.

Not cryptographically secure: the tokens only have to look like a signed or
serialized field on a test label, so the host default PRNG is used. Pass a
seeded ``random.Random`` as ``rng`` for reproducible output.
"""

from __future__ import annotations

import random
from typing import Any, Final, Optional

__all__ = [
    "ALPHANUMERIC",
    "HEX",
    "BASE64URLISH",
    "DIGITS",
    "random_from",
    "random_digits",
    "random_hex",
    "random_base64",
    "generate_serial",
    "random_weight",
]

ALPHANUMERIC: Final[str] = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789"
HEX: Final[str] = "0123456789ABCDEF"
# Не настоящий base64: без паддинга, просто фиксированный алфавит-заполнитель
BASE64URLISH: Final[str] = ALPHANUMERIC + "+/"
DIGITS: Final[str] = "0123456789"


def _source(rng: Optional[random.Random]) -> Any:
    return rng if rng is not None else random


def random_from(alphabet: str, n: int, rng: Optional[random.Random] = None) -> str:
    """Return ``n`` characters drawn uniformly, with replacement, from ``alphabet``.

    Raises:
        ValueError: if ``n`` is negative or the alphabet is empty.
    """
    if n < 0:
        raise ValueError(f"Token length must be >= 0, got {n}")
    if n == 0:
        return ""
    if not alphabet:
        raise ValueError("Alphabet must be non-empty")
    return "".join(_source(rng).choices(alphabet, k=n))


def random_digits(n: int, rng: Optional[random.Random] = None) -> str:
    return random_from(DIGITS, n, rng)


def random_hex(n: int, rng: Optional[random.Random] = None) -> str:
    return random_from(HEX, n, rng)


def random_base64(n: int, rng: Optional[random.Random] = None) -> str:
    return random_from(BASE64URLISH, n, rng)


def generate_serial(prefix: str, length: int, rng: Optional[random.Random] = None) -> str:
    """Fixed prefix followed by alphanumeric filler up to ``length`` characters.

    A prefix already at or beyond ``length`` is returned unchanged.

    Example:
        >>> len(generate_serial("0", 7))
        7
    """
    return prefix + random_from(ALPHANUMERIC, max(0, length - len(prefix)), rng)


def random_weight(minimum: int, maximum: int, rng: Optional[random.Random] = None) -> int:
    """Uniform integer in ``[minimum, maximum]`` (both inclusive)."""
    if minimum > maximum:
        raise ValueError(f"minimum {minimum} is greater than maximum {maximum}")
    return _source(rng).randint(minimum, maximum)
