import itertools

import numpy as np
import pytest

from simplex.core import PermutationTable
from simplex.noise_4d import (
    debug_point4,
    offset_ranks4,
    simplex4,
    simplex4_array,
    simplex_corners4,
)

TABLE = PermutationTable.default()
ORDERINGS = list(itertools.permutations((0.01, 0.02, 0.03, 0.04)))


def _expected_corners(offsets):
    order = sorted(range(4), key=lambda a: -offsets[a])
    corners = []
    c = [0, 0, 0, 0]
    for axis in order[:3]:
        c[axis] = 1
        corners.append(tuple(c))
    return tuple(corners)


def test_simplex4_origin_is_zero():
    assert simplex4(TABLE, 0.0, 0.0, 0.0, 0.0) == 0.0


def test_simplex4_reference_values():
    cases = [
        ((0.1, 0.2, 0.3, 0.4), 0.22762956106590113),
        ((1.5, -2.25, 3.75, 0.5), 0.32309651724303551),
        ((-7.3, 2.1, 0.65, -4.4), -0.49643891932131373),
    ]
    for coords, expected in cases:
        assert simplex4(TABLE, *coords) == pytest.approx(expected, abs=1e-9)


def test_all_24_orderings_visit_expected_corners():
    assert len(ORDERINGS) == 24
    seen = set()
    for perm in ORDERINGS:
        expected = _expected_corners(perm)
        assert simplex_corners4(*perm) == expected
        seen.add(expected)

        dbg = debug_point4(TABLE, *perm)
        assert dbg["cell"] == {"i": 0, "j": 0, "k": 0, "l": 0}
        offsets = [c["offset"] for c in dbg["corners"]]
        assert offsets == [(0, 0, 0, 0), *expected, (1, 1, 1, 1)]
    assert len(seen) == 24


def test_ranks_form_a_permutation_even_with_ties():
    rng = np.random.default_rng(0)
    for row in rng.integers(0, 3, size=(500, 4)):
        ranks = offset_ranks4(*(float(v) for v in row))
        assert sorted(ranks) == [0, 1, 2, 3]


def test_ties_rank_the_right_hand_axis_higher():
    assert offset_ranks4(0.2, 0.2, 0.1, 0.1) == (2, 3, 0, 1)
    assert simplex_corners4(0.2, 0.2, 0.1, 0.1) == (
        (0, 1, 0, 0),
        (1, 1, 0, 0),
        (1, 1, 0, 1),
    )
    assert offset_ranks4(0.5, 0.5, 0.5, 0.5) == (0, 1, 2, 3)


def test_simplex4_array_matches_scalar():
    rng = np.random.default_rng(1)
    pts = rng.uniform(-50.0, 50.0, size=(500, 4))
    pts = np.concatenate([pts, np.array(ORDERINGS) + 2.0, [[0.2, 0.2, 0.1, 0.1]]])
    out = simplex4_array(TABLE, *(pts[:, d] for d in range(4)))
    ref = np.array([simplex4(TABLE, *p) for p in pts])
    assert np.allclose(out, ref, rtol=0.0, atol=1e-12)


def test_simplex4_shape_finite_and_reasonable_range():
    rng = np.random.default_rng(2)
    pts = rng.uniform(-100.0, 100.0, size=(20000, 4))
    out = simplex4_array(TABLE, *(pts[:, d] for d in range(4)))
    assert out.shape == (20000,)
    assert np.isfinite(out).all()
    assert float(np.max(np.abs(out))) <= 1.05


def test_simplex4_small_step_stays_close():
    rng = np.random.default_rng(3)
    pts = rng.uniform(-10.0, 10.0, size=(5000, 4))
    eps = 1e-7
    a = simplex4_array(TABLE, *(pts[:, d] for d in range(4)))
    b = simplex4_array(TABLE, pts[:, 0], pts[:, 1], pts[:, 2], pts[:, 3] + eps)
    assert float(np.max(np.abs(b - a))) < 0.02


def test_debug_point4_matches_noise():
    dbg = debug_point4(TABLE, 1.5, -2.25, 3.75, 0.5)
    assert dbg["noise"] == simplex4(TABLE, 1.5, -2.25, 3.75, 0.5)
    assert sorted(dbg["ranks"]) == [0, 1, 2, 3]
    assert all(0 <= c["gradient"] < 32 for c in dbg["corners"])
