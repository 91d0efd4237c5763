"""Seeded 2D gradient noise with octave combination."""

import math

import numpy as np

from machiya.prng import Prng


def _fade(t: float) -> float:
    # 6t^5 - 15t^4 + 10t^3
    return t * t * t * (t * (t * 6 - 15) + 10)


def _lerp(a: float, b: float, t: float) -> float:
    return a + t * (b - a)


def _grad(hash_value: int, x: float, y: float) -> float:
    """Simplified 4-direction gradient dot product."""
    h = hash_value & 15
    u = x if h < 8 else y
    if h < 4:
        v = y
    elif h in (12, 14):
        v = x
    else:
        v = 0.0
    return (u if (h & 1) == 0 else -u) + (v if (h & 2) == 0 else -v)


class NoiseField:
    """Permutation-table noise driven by the shared PRNG stream.

    ``seed()`` consumes 255 PRNG draws. Callers that want the rest of the
    stream unaffected snapshot ``prng.state`` before seeding and restore it
    afterwards.
    """

    def __init__(self, prng: Prng) -> None:
        self._prng = prng
        self._perm = np.zeros(512, dtype=np.int64)

    @property
    def permutation(self) -> tuple[int, ...]:
        return tuple(int(v) for v in self._perm[:256])

    def seed(self, value: object) -> None:
        self._prng.seed(value)
        table = list(range(256))
        for i in range(255, 0, -1):
            j = math.floor(self._prng.next() * (i + 1))
            table[i], table[j] = table[j], table[i]
        base = np.array(table, dtype=np.int64)
        self._perm = np.concatenate([base, base])

    def noise(self, x: float, y: float) -> float:
        """Smooth noise in [0, 1]."""
        if not (math.isfinite(x) and math.isfinite(y)):
            return 0.5
        p = self._perm
        xf = math.floor(x)
        yf = math.floor(y)
        cx = xf & 255
        cy = yf & 255
        x -= xf
        y -= yf
        u = _fade(x)
        v = _fade(y)

        a = int(p[cx]) + cy
        aa = int(p[a])
        ab = int(p[a + 1])
        b = int(p[cx + 1]) + cy
        ba = int(p[b])
        bb = int(p[b + 1])

        value = _lerp(
            _lerp(_grad(int(p[aa]), x, y), _grad(int(p[ba]), x - 1, y), u),
            _lerp(_grad(int(p[ab]), x, y - 1), _grad(int(p[bb]), x - 1, y - 1), u),
            v,
        )
        return min(1.0, max(0.0, value * 0.5 + 0.5))

    def octave_noise(
        self,
        x: float,
        y: float,
        octaves: int = 4,
        persistence: float = 0.5,
        scale: float = 1.0,
    ) -> float:
        """Fractal sum of ``octaves`` layers, normalised by total amplitude."""
        value = 0.0
        amplitude = 1.0
        frequency = scale
        max_value = 0.0
        for _ in range(max(1, octaves)):
            value += self.noise(x * frequency, y * frequency) * amplitude
            max_value += amplitude
            amplitude *= persistence
            frequency *= 2
        return value / max_value if max_value else 0.5
