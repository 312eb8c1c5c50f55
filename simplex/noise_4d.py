from __future__ import annotations

import numpy as np

from .config import KERNEL_RADIUS_4D, OUTPUT_SCALE_4D
from .core import (
    F4,
    G4,
    GRAD4,
    GRAD4_T,
    Corner,
    PermutationTable,
    dot4,
    skew_to_cell,
    skew_to_cell_array,
)

Offset4 = tuple[int, int, int, int]


def offset_ranks4(x0: float, y0: float, z0: float, w0: float) -> tuple[int, int, int, int]:
    """Rank of each offset among the four (3 = largest).

    Six pairwise comparisons; each awards one point to the strictly larger
    side, ties go to the right-hand axis.
    """

    rankx = 0
    ranky = 0
    rankz = 0
    rankw = 0
    if x0 > y0:
        rankx += 1
    else:
        ranky += 1
    if x0 > z0:
        rankx += 1
    else:
        rankz += 1
    if x0 > w0:
        rankx += 1
    else:
        rankw += 1
    if y0 > z0:
        ranky += 1
    else:
        rankz += 1
    if y0 > w0:
        ranky += 1
    else:
        rankw += 1
    if z0 > w0:
        rankz += 1
    else:
        rankw += 1
    return rankx, ranky, rankz, rankw


def simplex_corners4(
    x0: float, y0: float, z0: float, w0: float
) -> tuple[Offset4, Offset4, Offset4]:
    """Second, third and fourth corners of the 5-cell containing the point.

    Corners are set in turn from the largest offset down by thresholding the
    ranks. The first corner is the cell origin and the last is (1, 1, 1, 1).
    """

    rankx, ranky, rankz, rankw = offset_ranks4(x0, y0, z0, w0)
    c1 = (int(rankx >= 3), int(ranky >= 3), int(rankz >= 3), int(rankw >= 3))
    c2 = (int(rankx >= 2), int(ranky >= 2), int(rankz >= 2), int(rankw >= 2))
    c3 = (int(rankx >= 1), int(ranky >= 1), int(rankz >= 1), int(rankw >= 1))
    return c1, c2, c3


def _contribution4(g, x: float, y: float, z: float, w: float) -> tuple[float, float]:
    t = KERNEL_RADIUS_4D - x * x - y * y - z * z - w * w
    if t < 0.0:
        return t, 0.0
    t2 = t * t
    return t, t2 * t2 * dot4(g, x, y, z, w)


def _corners4(table: PermutationTable, x: float, y: float, z: float, w: float):
    (i, j, k, l), (x0, y0, z0, w0) = skew_to_cell((x, y, z, w), F4, G4)
    c1, c2, c3 = simplex_corners4(x0, y0, z0, w0)
    i1, j1, k1, l1 = c1
    i2, j2, k2, l2 = c2
    i3, j3, k3, l3 = c3

    x1 = x0 - i1 + G4
    y1 = y0 - j1 + G4
    z1 = z0 - k1 + G4
    w1 = w0 - l1 + G4
    x2 = x0 - i2 + 2.0 * G4
    y2 = y0 - j2 + 2.0 * G4
    z2 = z0 - k2 + 2.0 * G4
    w2 = w0 - l2 + 2.0 * G4
    x3 = x0 - i3 + 3.0 * G4
    y3 = y0 - j3 + 3.0 * G4
    z3 = z0 - k3 + 3.0 * G4
    w3 = w0 - l3 + 3.0 * G4
    x4 = x0 - 1.0 + 4.0 * G4
    y4 = y0 - 1.0 + 4.0 * G4
    z4 = z0 - 1.0 + 4.0 * G4
    w4 = w0 - 1.0 + 4.0 * G4

    p = table.expanded
    ii = i & 255
    jj = j & 255
    kk = k & 255
    ll = l & 255
    gi0 = int(p[ii + p[jj + p[kk + p[ll]]]]) % 32
    gi1 = int(p[ii + i1 + p[jj + j1 + p[kk + k1 + p[ll + l1]]]]) % 32
    gi2 = int(p[ii + i2 + p[jj + j2 + p[kk + k2 + p[ll + l2]]]]) % 32
    gi3 = int(p[ii + i3 + p[jj + j3 + p[kk + k3 + p[ll + l3]]]]) % 32
    gi4 = int(p[ii + 1 + p[jj + 1 + p[kk + 1 + p[ll + 1]]]]) % 32

    corners = [
        ((0, 0, 0, 0), (x0, y0, z0, w0), gi0),
        (c1, (x1, y1, z1, w1), gi1),
        (c2, (x2, y2, z2, w2), gi2),
        (c3, (x3, y3, z3, w3), gi3),
        ((1, 1, 1, 1), (x4, y4, z4, w4), gi4),
    ]
    return (i, j, k, l), (x0, y0, z0, w0), corners


def simplex4(table: PermutationTable, x: float, y: float, z: float, w: float) -> float:
    _, _, corners = _corners4(table, x, y, z, w)
    n0, n1, n2, n3, n4 = (
        _contribution4(GRAD4[gi], *delta)[1] for _, delta, gi in corners
    )
    return float(OUTPUT_SCALE_4D * (n0 + n1 + n2 + n3 + n4))


def debug_point4(table: PermutationTable, x: float, y: float, z: float, w: float) -> dict:
    x = float(x)
    y = float(y)
    z = float(z)
    w = float(w)
    cell, offset, corners = _corners4(table, x, y, z, w)

    out: list[Corner] = []
    for lattice, delta, gi in corners:
        t, n = _contribution4(GRAD4[gi], *delta)
        out.append(Corner(offset=lattice, delta=delta, gradient=gi, t=t, contribution=n))

    n0, n1, n2, n3, n4 = (c.contribution for c in out)
    return {
        "input": {"x": x, "y": y, "z": z, "w": w},
        "skew": (x + y + z + w) * F4,
        "cell": {"i": cell[0], "j": cell[1], "k": cell[2], "l": cell[3]},
        "offset": {"x0": offset[0], "y0": offset[1], "z0": offset[2], "w0": offset[3]},
        "ranks": offset_ranks4(*offset),
        "corners": [c.__dict__ for c in out],
        "noise": float(OUTPUT_SCALE_4D * (n0 + n1 + n2 + n3 + n4)),
    }


def _contribution4_array(
    g: np.ndarray, x: np.ndarray, y: np.ndarray, z: np.ndarray, w: np.ndarray
) -> np.ndarray:
    t = KERNEL_RADIUS_4D - x * x - y * y - z * z - w * w
    t2 = t * t
    return np.where(t < 0.0, 0.0, t2 * t2 * dot4(g, x, y, z, w))


def simplex4_array(
    table: PermutationTable,
    x: np.ndarray,
    y: np.ndarray,
    z: np.ndarray,
    w: np.ndarray,
) -> np.ndarray:
    x, y, z, w = np.broadcast_arrays(
        np.asarray(x, dtype=np.float64),
        np.asarray(y, dtype=np.float64),
        np.asarray(z, dtype=np.float64),
        np.asarray(w, dtype=np.float64),
    )

    (i, j, k, l), (x0, y0, z0, w0) = skew_to_cell_array((x, y, z, w), F4, G4)

    # Rank counting as in offset_ranks4; "not greater" covers the else branch.
    xy = x0 > y0
    xz = x0 > z0
    xw = x0 > w0
    yz = y0 > z0
    yw = y0 > w0
    zw = z0 > w0
    rankx = xy.astype(np.int64) + xz + xw
    ranky = (~xy).astype(np.int64) + yz + yw
    rankz = (~xz).astype(np.int64) + ~yz + zw
    rankw = (~xw).astype(np.int64) + ~yw + ~zw

    i1 = (rankx >= 3).astype(np.int64)
    j1 = (ranky >= 3).astype(np.int64)
    k1 = (rankz >= 3).astype(np.int64)
    l1 = (rankw >= 3).astype(np.int64)
    i2 = (rankx >= 2).astype(np.int64)
    j2 = (ranky >= 2).astype(np.int64)
    k2 = (rankz >= 2).astype(np.int64)
    l2 = (rankw >= 2).astype(np.int64)
    i3 = (rankx >= 1).astype(np.int64)
    j3 = (ranky >= 1).astype(np.int64)
    k3 = (rankz >= 1).astype(np.int64)
    l3 = (rankw >= 1).astype(np.int64)

    x1 = x0 - i1 + G4
    y1 = y0 - j1 + G4
    z1 = z0 - k1 + G4
    w1 = w0 - l1 + G4
    x2 = x0 - i2 + 2.0 * G4
    y2 = y0 - j2 + 2.0 * G4
    z2 = z0 - k2 + 2.0 * G4
    w2 = w0 - l2 + 2.0 * G4
    x3 = x0 - i3 + 3.0 * G4
    y3 = y0 - j3 + 3.0 * G4
    z3 = z0 - k3 + 3.0 * G4
    w3 = w0 - l3 + 3.0 * G4
    x4 = x0 - 1.0 + 4.0 * G4
    y4 = y0 - 1.0 + 4.0 * G4
    z4 = z0 - 1.0 + 4.0 * G4
    w4 = w0 - 1.0 + 4.0 * G4

    p = table.expanded
    ii = i & 255
    jj = j & 255
    kk = k & 255
    ll = l & 255
    gi0 = p[ii + p[jj + p[kk + p[ll]]]] % 32
    gi1 = p[ii + i1 + p[jj + j1 + p[kk + k1 + p[ll + l1]]]] % 32
    gi2 = p[ii + i2 + p[jj + j2 + p[kk + k2 + p[ll + l2]]]] % 32
    gi3 = p[ii + i3 + p[jj + j3 + p[kk + k3 + p[ll + l3]]]] % 32
    gi4 = p[ii + 1 + p[jj + 1 + p[kk + 1 + p[ll + 1]]]] % 32

    n0 = _contribution4_array(GRAD4_T[:, gi0], x0, y0, z0, w0)
    n1 = _contribution4_array(GRAD4_T[:, gi1], x1, y1, z1, w1)
    n2 = _contribution4_array(GRAD4_T[:, gi2], x2, y2, z2, w2)
    n3 = _contribution4_array(GRAD4_T[:, gi3], x3, y3, z3, w3)
    n4 = _contribution4_array(GRAD4_T[:, gi4], x4, y4, z4, w4)
    return OUTPUT_SCALE_4D * (n0 + n1 + n2 + n3 + n4)
