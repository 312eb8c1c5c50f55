from __future__ import annotations

import logging
import math

import numpy as np

from .config import DEFAULT_SEED
from .core import PermutationTable
from .noise_2d import debug_point2, simplex2, simplex2_array
from .noise_3d import debug_point3, simplex3, simplex3_array
from .noise_4d import debug_point4, simplex4, simplex4_array
from .rng import RandomSource, XorShift128PlusRandom

logger = logging.getLogger(__name__)

_MAX_SEED = (1 << 64) - 1


def _arity(coords: tuple) -> int:
    n = len(coords)
    if n < 1 or n > 4:
        raise ValueError(f"expected 1 to 4 coordinates, got {n}")
    return n


def _as_floats(coords: tuple) -> tuple[float, ...]:
    n = _arity(coords)
    coords = tuple(float(c) for c in coords)
    # The 1D form samples the 2D field along y = 0.
    return coords + (0.0,) if n == 1 else coords


_SCALAR = {2: simplex2, 3: simplex3, 4: simplex4}
_DEBUG = {2: debug_point2, 3: debug_point3, 4: debug_point4}


class SimplexNoise:
    """Simplex noise over 2, 3 and 4 dimensions.

    ``seed`` 0 (or None) uses the reference permutation, so every instance
    built that way produces the same field. Any other seed randomizes the
    table through a seeded xorshift128+ generator. Passing ``random_source``
    skips the seed entirely and draws the table from that source.

    The table is built once here and never changes, so one instance can be
    sampled from several threads.
    """

    def __init__(
        self,
        seed: int | None = DEFAULT_SEED,
        *,
        random_source: RandomSource | None = None,
    ):
        if random_source is not None:
            self.seed = None
            self.table = PermutationTable.build(random_source)
            return

        seed = 0 if seed is None else int(seed)
        if seed < 0 or seed > _MAX_SEED:
            raise ValueError("seed must fit in an unsigned 64-bit integer")
        self.seed = seed
        self.table = PermutationTable.build(XorShift128PlusRandom(seed) if seed else None)
        logger.debug("SimplexNoise ready (seed=%d)", seed)

    @classmethod
    def from_random_source(cls, random_source: RandomSource) -> SimplexNoise:
        return cls(random_source=random_source)

    def value(self, *coords: float) -> float:
        """Sample the field at one point.

        One coordinate is an alias for ``value(x, 0.0)``. Values are nominally
        in [-1, 1]; non-finite coordinates, or coordinates so large that the
        skewed lattice position leaves the float range, give ``nan``.
        """

        coords = _as_floats(coords)
        if not all(math.isfinite(c) for c in coords):
            return math.nan
        try:
            return _SCALAR[len(coords)](self.table, *coords)
        except OverflowError:
            return math.nan

    def noise(self, *coords: np.ndarray) -> np.ndarray:
        """Array counterpart of ``value``; coordinates broadcast together."""

        n = _arity(coords)
        if n == 1:
            x = np.asarray(coords[0], dtype=np.float64)
            return simplex2_array(self.table, x, np.zeros_like(x))
        if n == 2:
            return simplex2_array(self.table, *coords)
        if n == 3:
            return simplex3_array(self.table, *coords)
        return simplex4_array(self.table, *coords)

    def debug_point(self, *coords: float) -> dict:
        """Corner-by-corner breakdown of ``value`` at one point.

        Raises ``ValueError`` where ``value`` would return ``nan``.
        """

        coords = _as_floats(coords)
        if not all(math.isfinite(c) for c in coords):
            raise ValueError("debug_point needs finite coordinates")
        try:
            return _DEBUG[len(coords)](self.table, *coords)
        except OverflowError as exc:
            raise ValueError("coordinates too large to place on the simplex lattice") from exc
