from __future__ import annotations

import numpy as np

from .config import KERNEL_RADIUS_2D, OUTPUT_SCALE_2D
from .core import (
    F2,
    G2,
    GRAD3,
    GRAD3_T,
    Corner,
    PermutationTable,
    dot2,
    skew_to_cell,
    skew_to_cell_array,
)


def simplex_corners2(x0: float, y0: float) -> tuple[int, int]:
    """Lattice offset of the middle triangle corner.

    Lower triangle (x0 > y0) steps along i first, otherwise along j; a tie
    goes to j.
    """

    if x0 > y0:
        return 1, 0
    return 0, 1


def _contribution2(g, x: float, y: float) -> tuple[float, float]:
    t = KERNEL_RADIUS_2D - x * x - y * y
    if t < 0.0:
        return t, 0.0
    t2 = t * t
    return t, t2 * t2 * dot2(g, x, y)


def _corners2(table: PermutationTable, x: float, y: float):
    (i, j), (x0, y0) = skew_to_cell((x, y), F2, G2)
    i1, j1 = simplex_corners2(x0, y0)

    x1 = x0 - i1 + G2
    y1 = y0 - j1 + G2
    x2 = x0 - 1.0 + 2.0 * G2
    y2 = y0 - 1.0 + 2.0 * G2

    p = table.expanded
    p12 = table.expanded_mod12
    ii = i & 255
    jj = j & 255
    gi0 = int(p12[ii + p[jj]])
    gi1 = int(p12[ii + i1 + p[jj + j1]])
    gi2 = int(p12[ii + 1 + p[jj + 1]])

    corners = [
        ((0, 0), (x0, y0), gi0),
        ((i1, j1), (x1, y1), gi1),
        ((1, 1), (x2, y2), gi2),
    ]
    return (i, j), (x0, y0), corners


def simplex2(table: PermutationTable, x: float, y: float) -> float:
    _, _, corners = _corners2(table, x, y)
    n0, n1, n2 = (_contribution2(GRAD3[gi], dx, dy)[1] for _, (dx, dy), gi in corners)
    return float(OUTPUT_SCALE_2D * (n0 + n1 + n2))


def debug_point2(table: PermutationTable, x: float, y: float) -> dict:
    # Scalar breakdown for inspection; "noise" equals simplex2(table, x, y).
    x = float(x)
    y = float(y)
    cell, offset, corners = _corners2(table, x, y)

    out: list[Corner] = []
    for lattice, delta, gi in corners:
        t, n = _contribution2(GRAD3[gi], *delta)
        out.append(Corner(offset=lattice, delta=delta, gradient=gi, t=t, contribution=n))

    n0, n1, n2 = (c.contribution for c in out)
    return {
        "input": {"x": x, "y": y},
        "skew": (x + y) * F2,
        "cell": {"i": cell[0], "j": cell[1]},
        "offset": {"x0": offset[0], "y0": offset[1]},
        "corners": [c.__dict__ for c in out],
        "noise": float(OUTPUT_SCALE_2D * (n0 + n1 + n2)),
    }


def _contribution2_array(g: np.ndarray, x: np.ndarray, y: np.ndarray) -> np.ndarray:
    t = KERNEL_RADIUS_2D - x * x - y * y
    t2 = t * t
    return np.where(t < 0.0, 0.0, t2 * t2 * dot2(g, x, y))


def simplex2_array(table: PermutationTable, x: np.ndarray, y: np.ndarray) -> np.ndarray:
    x, y = np.broadcast_arrays(
        np.asarray(x, dtype=np.float64), np.asarray(y, dtype=np.float64)
    )

    (i, j), (x0, y0) = skew_to_cell_array((x, y), F2, G2)

    lower = x0 > y0
    i1 = np.where(lower, 1, 0)
    j1 = np.where(lower, 0, 1)

    x1 = x0 - i1 + G2
    y1 = y0 - j1 + G2
    x2 = x0 - 1.0 + 2.0 * G2
    y2 = y0 - 1.0 + 2.0 * G2

    p = table.expanded
    p12 = table.expanded_mod12
    ii = i & 255
    jj = j & 255
    gi0 = p12[ii + p[jj]]
    gi1 = p12[ii + i1 + p[jj + j1]]
    gi2 = p12[ii + 1 + p[jj + 1]]

    n0 = _contribution2_array(GRAD3_T[:, gi0], x0, y0)
    n1 = _contribution2_array(GRAD3_T[:, gi1], x1, y1)
    n2 = _contribution2_array(GRAD3_T[:, gi2], x2, y2)
    return OUTPUT_SCALE_2D * (n0 + n1 + n2)
