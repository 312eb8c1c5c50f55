from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .rng import RandomSource

logger = logging.getLogger(__name__)

# Skewing and unskewing factors for 2, 3 and 4 dimensions.
F2 = 0.5 * (math.sqrt(3.0) - 1.0)
G2 = (3.0 - math.sqrt(3.0)) / 6.0
F3 = 1.0 / 3.0
G3 = 1.0 / 6.0
F4 = (math.sqrt(5.0) - 1.0) / 4.0
G4 = (5.0 - math.sqrt(5.0)) / 20.0

# Edge midpoints of a cube. 2D uses the (x, y) components only.
GRAD3: tuple[tuple[int, int, int], ...] = (
    (1, 1, 0),
    (-1, 1, 0),
    (1, -1, 0),
    (-1, -1, 0),
    (1, 0, 1),
    (-1, 0, 1),
    (1, 0, -1),
    (-1, 0, -1),
    (0, 1, 1),
    (0, -1, 1),
    (0, 1, -1),
    (0, -1, -1),
)

# Edge midpoints of a tesseract.
GRAD4: tuple[tuple[int, int, int, int], ...] = (
    (0, 1, 1, 1),
    (0, 1, 1, -1),
    (0, 1, -1, 1),
    (0, 1, -1, -1),
    (0, -1, 1, 1),
    (0, -1, 1, -1),
    (0, -1, -1, 1),
    (0, -1, -1, -1),
    (1, 0, 1, 1),
    (1, 0, 1, -1),
    (1, 0, -1, 1),
    (1, 0, -1, -1),
    (-1, 0, 1, 1),
    (-1, 0, 1, -1),
    (-1, 0, -1, 1),
    (-1, 0, -1, -1),
    (1, 1, 0, 1),
    (1, 1, 0, -1),
    (1, -1, 0, 1),
    (1, -1, 0, -1),
    (-1, 1, 0, 1),
    (-1, 1, 0, -1),
    (-1, -1, 0, 1),
    (-1, -1, 0, -1),
    (1, 1, 1, 0),
    (1, 1, -1, 0),
    (1, -1, 1, 0),
    (1, -1, -1, 0),
    (-1, 1, 1, 0),
    (-1, 1, -1, 0),
    (-1, -1, 1, 0),
    (-1, -1, -1, 0),
)

# Component-major copies for array evaluation: GRAD3_T[:, gi][0] is the x
# component of every gradient picked by gi.
GRAD3_T = np.array(GRAD3, dtype=np.int32).T.copy()
GRAD4_T = np.array(GRAD4, dtype=np.int32).T.copy()
GRAD3_T.setflags(write=False)
GRAD4_T.setflags(write=False)

# Ken Perlin's reference permutation of 0..255.
PERM_SOURCE: tuple[int, ...] = (
    151, 160, 137, 91, 90, 15, 131, 13, 201, 95, 96, 53, 194, 233, 7, 225,
    140, 36, 103, 30, 69, 142, 8, 99, 37, 240, 21, 10, 23, 190, 6, 148,
    247, 120, 234, 75, 0, 26, 197, 62, 94, 252, 219, 203, 117, 35, 11, 32,
    57, 177, 33, 88, 237, 149, 56, 87, 174, 20, 125, 136, 171, 168, 68, 175,
    74, 165, 71, 134, 139, 48, 27, 166, 77, 146, 158, 231, 83, 111, 229, 122,
    60, 211, 133, 230, 220, 105, 92, 41, 55, 46, 245, 40, 244, 102, 143, 54,
    65, 25, 63, 161, 1, 216, 80, 73, 209, 76, 132, 187, 208, 89, 18, 169,
    200, 196, 135, 130, 116, 188, 159, 86, 164, 100, 109, 198, 173, 186, 3, 64,
    52, 217, 226, 250, 124, 123, 5, 202, 38, 147, 118, 126, 255, 82, 85, 212,
    207, 206, 59, 227, 47, 16, 58, 17, 182, 189, 28, 42, 223, 183, 170, 213,
    119, 248, 152, 2, 44, 154, 163, 70, 221, 153, 101, 155, 167, 43, 172, 9,
    129, 22, 39, 253, 19, 98, 108, 110, 79, 113, 224, 232, 178, 185, 112, 104,
    218, 246, 97, 228, 251, 34, 242, 193, 238, 210, 144, 12, 191, 179, 162, 241,
    81, 51, 145, 235, 249, 14, 239, 107, 49, 192, 214, 31, 181, 199, 106, 157,
    184, 84, 204, 176, 115, 121, 50, 45, 127, 4, 150, 254, 138, 236, 205, 93,
    222, 114, 67, 29, 24, 72, 243, 141, 128, 195, 78, 66, 215, 61, 156, 180,
)


def fast_floor(x: float) -> int:
    """Floor via truncation; exact for every finite float."""
    xi = int(x)
    return xi - 1 if x < xi else xi


def fast_floor_array(x: np.ndarray) -> np.ndarray:
    x = np.asarray(x, dtype=np.float64)
    with np.errstate(invalid="ignore"):
        xi = x.astype(np.int64)
    return xi - (x < xi)


def dot2(g: Sequence, x, y):
    return g[0] * x + g[1] * y


def dot3(g: Sequence, x, y, z):
    return g[0] * x + g[1] * y + g[2] * z


def dot4(g: Sequence, x, y, z, w):
    return g[0] * x + g[1] * y + g[2] * z + g[3] * w


def skew_to_cell(
    coords: Sequence[float], f: float, g: float
) -> tuple[tuple[int, ...], tuple[float, ...]]:
    """Return the simplex cell of ``coords`` and the offsets from its origin.

    ``f`` skews the input onto the simplex lattice, ``g`` unskews the cell
    origin back into input space.
    """

    total = coords[0]
    for c in coords[1:]:
        total = total + c
    s = total * f
    cell = tuple(fast_floor(c + s) for c in coords)

    cell_total = cell[0]
    for c in cell[1:]:
        cell_total = cell_total + c
    t = cell_total * g
    offsets = tuple(c - (n - t) for c, n in zip(coords, cell))
    return cell, offsets


def skew_to_cell_array(
    coords: Sequence[np.ndarray], f: float, g: float
) -> tuple[list[np.ndarray], list[np.ndarray]]:
    total = coords[0]
    for c in coords[1:]:
        total = total + c
    s = total * f
    cell = [fast_floor_array(c + s) for c in coords]

    cell_total = cell[0]
    for c in cell[1:]:
        cell_total = cell_total + c
    t = cell_total * g
    offsets = [c - (n - t) for c, n in zip(coords, cell)]
    return cell, offsets


@dataclass(frozen=True)
class Corner:
    offset: tuple[int, ...]
    delta: tuple[float, ...]
    gradient: int
    t: float
    contribution: float


@dataclass(frozen=True, eq=False)
class PermutationTable:
    """Lattice hash used to pick a gradient for every simplex corner.

    ``expanded`` is ``base`` repeated twice so chained lookups never wrap;
    ``expanded_mod12`` indexes the 12 gradients shared by 2D and 3D.
    """

    base: np.ndarray
    expanded: np.ndarray
    expanded_mod12: np.ndarray

    @classmethod
    def build(cls, random_source: RandomSource | None = None) -> PermutationTable:
        if random_source is None:
            base = np.array(PERM_SOURCE, dtype=np.int32)
        else:
            # Independent draws per slot, not a shuffle: duplicates can occur.
            draws = [int(random_source.next_uint(256)) for _ in range(256)]
            if any(d < 0 or d > 255 for d in draws):
                raise ValueError("random source returned a value outside [0, 256)")
            base = np.array(draws, dtype=np.int32)

        expanded = base[np.arange(512) & 255]
        expanded_mod12 = expanded % 12
        for arr in (base, expanded, expanded_mod12):
            arr.setflags(write=False)

        table = cls(base=base, expanded=expanded, expanded_mod12=expanded_mod12)
        logger.debug(
            "built permutation table (source=%s, bijective=%s)",
            "reference" if random_source is None else type(random_source).__name__,
            table.is_bijective(),
        )
        return table

    @classmethod
    def default(cls) -> PermutationTable:
        return cls.build(None)

    def is_bijective(self) -> bool:
        return len(np.unique(self.base)) == 256

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PermutationTable):
            return NotImplemented
        return bool(np.array_equal(self.base, other.base))

    def __hash__(self) -> int:
        return hash(self.base.tobytes())
