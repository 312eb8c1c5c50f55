import numpy as np
import pytest

from simplex.core import PermutationTable
from simplex.noise_2d import debug_point2, simplex2, simplex2_array, simplex_corners2

TABLE = PermutationTable.default()


def test_simplex2_origin_is_zero():
    assert simplex2(TABLE, 0.0, 0.0) == 0.0


def test_simplex2_reference_values():
    cases = [
        ((0.5, 0.5), -0.30715651362721619),
        ((1.25, -3.7), -0.43913321631987429),
        ((0.3, 0.3), -0.49894290436638833),
        ((-12.75, 7.125), -0.51310576303780309),
        ((100.5, -42.25), 0.31470504806142419),
    ]
    for (x, y), expected in cases:
        assert simplex2(TABLE, x, y) == pytest.approx(expected, abs=1e-9)


def test_simplex2_deterministic():
    assert simplex2(TABLE, 3.14, -2.71) == simplex2(TABLE, 3.14, -2.71)


def test_simplex_corners2_order_and_tie():
    assert simplex_corners2(0.4, 0.1) == (1, 0)
    assert simplex_corners2(0.1, 0.4) == (0, 1)
    assert simplex_corners2(0.3, 0.3) == (0, 1)


def test_simplex2_array_matches_scalar():
    rng = np.random.default_rng(0)
    pts = rng.uniform(-50.0, 50.0, size=(500, 2))
    out = simplex2_array(TABLE, pts[:, 0], pts[:, 1])
    ref = np.array([simplex2(TABLE, x, y) for x, y in pts])
    assert out.shape == (500,)
    assert np.allclose(out, ref, rtol=0.0, atol=1e-12)


def test_simplex2_array_broadcasts():
    xg, yg = np.meshgrid(np.linspace(0, 3, 16), np.linspace(0, 3, 8))
    out = simplex2_array(TABLE, xg, yg)
    assert out.shape == (8, 16)
    row = simplex2_array(TABLE, xg[0], 0.0)
    assert np.allclose(row, [simplex2(TABLE, x, 0.0) for x in xg[0]])


def test_simplex2_reasonable_range():
    rng = np.random.default_rng(1)
    pts = rng.uniform(-100.0, 100.0, size=(20000, 2))
    out = simplex2_array(TABLE, pts[:, 0], pts[:, 1])
    assert np.isfinite(out).all()
    assert float(np.max(np.abs(out))) <= 1.05


def test_simplex2_continuous_across_triangle_boundary():
    # x == y is the edge between the two triangles of a cell.
    t = np.linspace(0.01, 10.0, 500)
    eps = 1e-7
    a = simplex2_array(TABLE, t, t)
    b = simplex2_array(TABLE, t + eps, t)
    c = simplex2_array(TABLE, t - eps, t)
    assert float(np.max(np.abs(b - a))) < 100 * eps
    assert float(np.max(np.abs(c - a))) < 100 * eps


def test_simplex2_continuity_small_step():
    xg, yg = np.meshgrid(np.linspace(-5, 5, 128), np.linspace(-5, 5, 128))
    d = 1e-6
    z0 = simplex2_array(TABLE, xg, yg)
    z1 = simplex2_array(TABLE, xg + d, yg + d)
    assert float(np.max(np.abs(z1 - z0))) < 100 * d


def test_debug_point2_matches_noise():
    dbg = debug_point2(TABLE, 0.5, 0.5)
    assert dbg["noise"] == simplex2(TABLE, 0.5, 0.5)
    assert dbg["cell"] == {"i": 0, "j": 0}
    assert [c["offset"] for c in dbg["corners"]] == [(0, 0), (0, 1), (1, 1)]
    assert [c["gradient"] for c in dbg["corners"]] == [5, 11, 8]
    # Only the far corner is inside the kernel radius here.
    assert dbg["corners"][0]["contribution"] == 0.0
    assert dbg["corners"][1]["contribution"] == 0.0
    assert dbg["corners"][2]["contribution"] != 0.0
