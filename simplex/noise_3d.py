from __future__ import annotations

import numpy as np

from .config import KERNEL_RADIUS_3D, OUTPUT_SCALE_3D
from .core import (
    F3,
    G3,
    GRAD3,
    GRAD3_T,
    Corner,
    PermutationTable,
    dot3,
    skew_to_cell,
    skew_to_cell_array,
)

Offset3 = tuple[int, int, int]


def simplex_corners3(x0: float, y0: float, z0: float) -> tuple[Offset3, Offset3]:
    """Second and third tetrahedron corners for the axis order of the offsets.

    The first corner steps along the largest offset, the second adds the
    next largest. Ties favour x over y over z.
    """

    if x0 >= y0:
        if y0 >= z0:
            return (1, 0, 0), (1, 1, 0)  # X Y Z
        if x0 >= z0:
            return (1, 0, 0), (1, 0, 1)  # X Z Y
        return (0, 0, 1), (1, 0, 1)  # Z X Y
    if y0 < z0:
        return (0, 0, 1), (0, 1, 1)  # Z Y X
    if x0 < z0:
        return (0, 1, 0), (0, 1, 1)  # Y Z X
    return (0, 1, 0), (1, 1, 0)  # Y X Z


def _contribution3(g, x: float, y: float, z: float) -> tuple[float, float]:
    t = KERNEL_RADIUS_3D - x * x - y * y - z * z
    if t < 0.0:
        return t, 0.0
    t2 = t * t
    return t, t2 * t2 * dot3(g, x, y, z)


def _corners3(table: PermutationTable, x: float, y: float, z: float):
    (i, j, k), (x0, y0, z0) = skew_to_cell((x, y, z), F3, G3)
    (i1, j1, k1), (i2, j2, k2) = simplex_corners3(x0, y0, z0)

    x1 = x0 - i1 + G3
    y1 = y0 - j1 + G3
    z1 = z0 - k1 + G3
    x2 = x0 - i2 + 2.0 * G3
    y2 = y0 - j2 + 2.0 * G3
    z2 = z0 - k2 + 2.0 * G3
    x3 = x0 - 1.0 + 3.0 * G3
    y3 = y0 - 1.0 + 3.0 * G3
    z3 = z0 - 1.0 + 3.0 * G3

    p = table.expanded
    p12 = table.expanded_mod12
    ii = i & 255
    jj = j & 255
    kk = k & 255
    gi0 = int(p12[ii + p[jj + p[kk]]])
    gi1 = int(p12[ii + i1 + p[jj + j1 + p[kk + k1]]])
    gi2 = int(p12[ii + i2 + p[jj + j2 + p[kk + k2]]])
    gi3 = int(p12[ii + 1 + p[jj + 1 + p[kk + 1]]])

    corners = [
        ((0, 0, 0), (x0, y0, z0), gi0),
        ((i1, j1, k1), (x1, y1, z1), gi1),
        ((i2, j2, k2), (x2, y2, z2), gi2),
        ((1, 1, 1), (x3, y3, z3), gi3),
    ]
    return (i, j, k), (x0, y0, z0), corners


def simplex3(table: PermutationTable, x: float, y: float, z: float) -> float:
    _, _, corners = _corners3(table, x, y, z)
    n0, n1, n2, n3 = (_contribution3(GRAD3[gi], *delta)[1] for _, delta, gi in corners)
    return float(OUTPUT_SCALE_3D * (n0 + n1 + n2 + n3))


def debug_point3(table: PermutationTable, x: float, y: float, z: float) -> dict:
    x = float(x)
    y = float(y)
    z = float(z)
    cell, offset, corners = _corners3(table, x, y, z)

    out: list[Corner] = []
    for lattice, delta, gi in corners:
        t, n = _contribution3(GRAD3[gi], *delta)
        out.append(Corner(offset=lattice, delta=delta, gradient=gi, t=t, contribution=n))

    n0, n1, n2, n3 = (c.contribution for c in out)
    return {
        "input": {"x": x, "y": y, "z": z},
        "skew": (x + y + z) * F3,
        "cell": {"i": cell[0], "j": cell[1], "k": cell[2]},
        "offset": {"x0": offset[0], "y0": offset[1], "z0": offset[2]},
        "corners": [c.__dict__ for c in out],
        "noise": float(OUTPUT_SCALE_3D * (n0 + n1 + n2 + n3)),
    }


def _contribution3_array(
    g: np.ndarray, x: np.ndarray, y: np.ndarray, z: np.ndarray
) -> np.ndarray:
    t = KERNEL_RADIUS_3D - x * x - y * y - z * z
    t2 = t * t
    return np.where(t < 0.0, 0.0, t2 * t2 * dot3(g, x, y, z))


def simplex3_array(
    table: PermutationTable, x: np.ndarray, y: np.ndarray, z: np.ndarray
) -> np.ndarray:
    x, y, z = np.broadcast_arrays(
        np.asarray(x, dtype=np.float64),
        np.asarray(y, dtype=np.float64),
        np.asarray(z, dtype=np.float64),
    )

    (i, j, k), (x0, y0, z0) = skew_to_cell_array((x, y, z), F3, G3)

    # Same decision tree as simplex_corners3, one np.where per branch.
    xy = x0 >= y0
    yz = y0 >= z0
    xz = x0 >= z0
    i1 = np.where(xy, np.where(yz, 1, np.where(xz, 1, 0)), 0)
    j1 = np.where(xy, 0, np.where(yz, 1, 0))
    k1 = np.where(xy, np.where(yz, 0, np.where(xz, 0, 1)), np.where(yz, 0, 1))
    i2 = np.where(xy, 1, np.where(yz, np.where(xz, 1, 0), 0))
    j2 = np.where(xy, np.where(yz, 1, 0), 1)
    k2 = np.where(xy, np.where(yz, 0, 1), np.where(yz, np.where(xz, 0, 1), 1))

    x1 = x0 - i1 + G3
    y1 = y0 - j1 + G3
    z1 = z0 - k1 + G3
    x2 = x0 - i2 + 2.0 * G3
    y2 = y0 - j2 + 2.0 * G3
    z2 = z0 - k2 + 2.0 * G3
    x3 = x0 - 1.0 + 3.0 * G3
    y3 = y0 - 1.0 + 3.0 * G3
    z3 = z0 - 1.0 + 3.0 * G3

    p = table.expanded
    p12 = table.expanded_mod12
    ii = i & 255
    jj = j & 255
    kk = k & 255
    gi0 = p12[ii + p[jj + p[kk]]]
    gi1 = p12[ii + i1 + p[jj + j1 + p[kk + k1]]]
    gi2 = p12[ii + i2 + p[jj + j2 + p[kk + k2]]]
    gi3 = p12[ii + 1 + p[jj + 1 + p[kk + 1]]]

    n0 = _contribution3_array(GRAD3_T[:, gi0], x0, y0, z0)
    n1 = _contribution3_array(GRAD3_T[:, gi1], x1, y1, z1)
    n2 = _contribution3_array(GRAD3_T[:, gi2], x2, y2, z2)
    n3 = _contribution3_array(GRAD3_T[:, gi3], x3, y3, z3)
    return OUTPUT_SCALE_3D * (n0 + n1 + n2 + n3)
