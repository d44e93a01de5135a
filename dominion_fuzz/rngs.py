"""Multi-stream Lehmer random number generator.

Park and Miller's minimal standard generator with 256 streams, matching the
generator the Dominion engine uses for shuffling. Each stream is an independent
``seed * 48271 mod (2**31 - 1)`` sequence; :meth:`StreamRandom.plant_seeds`
spaces the streams 8,367,782 draws apart.
"""

from __future__ import annotations

import time
from typing import Final

MODULUS: Final[int] = 2147483647
MULTIPLIER: Final[int] = 48271
CHECK: Final[int] = 399268537
STREAMS: Final[int] = 256
A256: Final[int] = 22925
DEFAULT: Final[int] = 123456789


class StreamRandom:
    """Lehmer generator holding one seed per stream."""

    def __init__(self) -> None:
        self._seeds = [0] * STREAMS
        self._seeds[0] = DEFAULT
        self._stream = 0
        self._initialized = False

    @property
    def stream(self) -> int:
        return self._stream

    def random(self) -> float:
        """Advance the current stream and return a float in ``(0, 1)``."""

        q = MODULUS // MULTIPLIER
        r = MODULUS % MULTIPLIER
        seed = self._seeds[self._stream]
        t = MULTIPLIER * (seed % q) - r * (seed // q)
        if t <= 0:
            t += MODULUS
        self._seeds[self._stream] = t
        return t / MODULUS

    def randint(self, upper: int) -> int:
        """Return ``floor(random() * upper)``, an integer in ``[0, upper)``."""

        return int(self.random() * upper)

    def put_seed(self, x: int) -> None:
        """Seed the current stream.

        Positive values are reduced modulo the generator modulus; negative values
        select a clock-derived seed. Zero is rejected.
        """

        if x > 0:
            x %= MODULUS
        if x < 0:
            x = int(time.time()) % MODULUS
        if x == 0:
            raise ValueError("seed must be a non-zero integer")
        self._seeds[self._stream] = x

    def get_seed(self) -> int:
        return self._seeds[self._stream]

    def select_stream(self, index: int) -> None:
        """Make ``index`` (taken modulo 256) the current stream."""

        self._stream = index % STREAMS
        if not self._initialized and self._stream != 0:
            self.plant_seeds(DEFAULT)

    def plant_seeds(self, x: int) -> None:
        """Seed stream 0 with ``x`` and derive every other stream from it."""

        q = MODULUS // A256
        r = MODULUS % A256
        self._initialized = True
        current = self._stream
        self._stream = 0
        self.put_seed(x)
        self._stream = current
        for j in range(1, STREAMS):
            previous = self._seeds[j - 1]
            value = A256 * (previous % q) - r * (previous // q)
            self._seeds[j] = value if value > 0 else value + MODULUS


def seeded(seed: int, stream: int) -> StreamRandom:
    """Return a generator positioned on ``stream`` and seeded with ``seed``."""

    rng = StreamRandom()
    rng.select_stream(stream)
    rng.put_seed(seed)
    return rng
