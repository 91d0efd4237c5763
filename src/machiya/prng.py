"""Seeded linear-congruential generator shared by every layer of one artwork.

The stream is the whole reproducibility contract: the same seed driven through
the same sequence of ``next()`` calls yields bit-identical floats on any
platform, because the update is integer multiply/add modulo 2**31.
"""

import math

_MULTIPLIER = 1103515245
_INCREMENT = 12345
_MODULUS = 2**31
_MASK = _MODULUS - 1


def coerce_seed(value: object) -> int:
    """Truncate to a nonzero 31-bit integer. Malformed seeds become 1."""
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 1
    if not math.isfinite(number):
        return 1
    state = int(number) & _MASK
    return state or 1


class Prng:
    """One stream per generation pass. Pass the instance; never construct a second."""

    def __init__(self, seed: object = 1) -> None:
        self._state = 1
        self.seed(seed)

    def seed(self, value: object) -> None:
        self._state = coerce_seed(value)

    @property
    def state(self) -> int:
        return self._state

    def restore(self, state: int) -> None:
        """Rewind to a value previously read from ``state``."""
        self._state = int(state) & _MASK

    def next(self, min_value: float = 0.0, max_value: float = 1.0) -> float:
        self._state = (self._state * _MULTIPLIER + _INCREMENT) % _MODULUS
        return min_value + (self._state / _MODULUS) * (max_value - min_value)

    def next_int(self, min_value: float, max_value: float) -> int:
        """``floor(next(min, max))`` — the form every count and index pick uses."""
        return math.floor(self.next(min_value, max_value))

    def chance(self, threshold: float = 0.5) -> bool:
        """True when the next draw exceeds threshold."""
        return self.next() > threshold
