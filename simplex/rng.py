from __future__ import annotations

from typing import Protocol

import numpy as np

_MASK64 = (1 << 64) - 1


class RandomSource(Protocol):
    """Anything that can draw a uniform unsigned integer in ``[0, bound)``."""

    def next_uint(self, bound: int) -> int:  # pragma: no cover
        ...


def _splitmix64(state: int) -> tuple[int, int]:
    state = (state + 0x9E3779B97F4A7C15) & _MASK64
    z = state
    z = ((z ^ (z >> 30)) * 0xBF58476D1CE4E5B9) & _MASK64
    z = ((z ^ (z >> 27)) * 0x94D049BB133111EB) & _MASK64
    return state, z ^ (z >> 31)


def _check_bound(bound: int) -> int:
    bound = int(bound)
    if bound <= 0:
        raise ValueError("bound must be > 0")
    return bound


class XorShift128PlusRandom:
    """Seeded xorshift128+ generator.

    The 64-bit seed is expanded into the 128-bit state with SplitMix64, so
    nearby seeds still give unrelated streams and the state is never all zero
    in practice.
    """

    def __init__(self, seed: int):
        seed = int(seed)
        if seed < 0 or seed > _MASK64:
            raise ValueError("seed must fit in an unsigned 64-bit integer")
        self.seed = seed
        state, self._s0 = _splitmix64(seed)
        _, self._s1 = _splitmix64(state)

    def next_uint64(self) -> int:
        s1 = self._s0
        s0 = self._s1
        result = (s0 + s1) & _MASK64
        self._s0 = s0
        s1 ^= (s1 << 23) & _MASK64
        self._s1 = s1 ^ s0 ^ (s1 >> 18) ^ (s0 >> 5)
        return result

    def next_uint(self, bound: int) -> int:
        bound = _check_bound(bound)
        # Multiply-shift keeps the high bits; rejecting the short bucket
        # keeps every value in [0, bound) equally likely.
        threshold = ((_MASK64 + 1) - bound) % bound
        while True:
            m = self.next_uint64() * bound
            if (m & _MASK64) >= threshold:
                return m >> 64


class GeneratorRandomSource:
    """Adapter exposing a ``numpy.random.Generator`` as a random source."""

    def __init__(self, rng: np.random.Generator):
        self.rng = rng

    @classmethod
    def from_seed(cls, seed: int) -> GeneratorRandomSource:
        return cls(np.random.default_rng(int(seed)))

    def next_uint(self, bound: int) -> int:
        bound = _check_bound(bound)
        return int(self.rng.integers(0, bound))
