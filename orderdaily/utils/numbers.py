"""Random numeric suffixes for identifiers sent to the API."""

from __future__ import annotations

import random


def generate_numbers(length: int = 5) -> int:
    """Return a random integer with exactly ``length`` digits.

    The value is uniformly distributed over ``[10**(length-1), 10**length - 1]``.
    """
    if length < 1:
        raise ValueError("length must be at least 1")
    return random.randint(10 ** (length - 1), 10**length - 1)
