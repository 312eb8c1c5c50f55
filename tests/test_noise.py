import math
import threading

import numpy as np
import pytest

from simplex import GeneratorRandomSource, PermutationTable, SimplexNoise


class CountingSource:
    def __init__(self):
        self.calls = 0

    def next_uint(self, bound):
        self.calls += 1
        return (self.calls * 31) % bound


def test_default_seed_variants_share_reference_table():
    a = SimplexNoise()
    b = SimplexNoise(seed=0)
    c = SimplexNoise(seed=None)
    assert a.table == b.table == c.table == PermutationTable.default()
    for coords in [(0.5, 0.5), (1.2, -3.4, 5.6), (0.1, 0.2, 0.3, 0.4)]:
        assert a.value(*coords) == b.value(*coords) == c.value(*coords)


def test_concrete_scenarios():
    n = SimplexNoise()
    assert n.value(0.0, 0.0) == 0.0
    assert n.value(0.0, 0.0, 0.0) == 0.0
    assert n.value(0.5, 0.5) == pytest.approx(-0.30715651362721619, abs=1e-9)
    assert n.value(1.0, 1.0, 1.0) == pytest.approx(0.0, abs=1e-9)


def test_value_is_deterministic():
    n = SimplexNoise()
    for coords in [(3.3, -1.1), (3.3, -1.1, 0.7), (3.3, -1.1, 0.7, 9.9)]:
        assert n.value(*coords) == n.value(*coords)


def test_one_argument_aliases_2d():
    n = SimplexNoise(seed=11)
    for x in [-3.5, 0.37, 12.0]:
        assert n.value(x) == n.value(x, 0.0)
    xs = np.linspace(-4.0, 4.0, 33)
    assert np.array_equal(n.noise(xs), n.noise(xs, np.zeros_like(xs)))


def test_seeded_instances():
    a = SimplexNoise(seed=7)
    b = SimplexNoise(seed=7)
    c = SimplexNoise(seed=8)
    assert a.seed == 7
    assert a.table == b.table
    assert a.table != c.table
    assert a.table != SimplexNoise().table
    x = np.array([0.1, 1.25, 10.5])
    y = np.array([0.2, 2.75, 9.0])
    assert np.allclose(a.noise(x, y), b.noise(x, y))
    assert not np.allclose(a.noise(x, y), c.noise(x, y))


def test_random_source_bypasses_seed():
    src = CountingSource()
    n = SimplexNoise(seed=123, random_source=src)
    assert src.calls == 256
    assert n.seed is None

    m = SimplexNoise.from_random_source(GeneratorRandomSource.from_seed(1))
    assert not m.table.is_bijective()


def test_invalid_seed():
    with pytest.raises(ValueError):
        SimplexNoise(seed=-1)
    with pytest.raises(ValueError):
        SimplexNoise(seed=2**64)
    SimplexNoise(seed=2**64 - 1)


def test_arity_errors():
    n = SimplexNoise()
    with pytest.raises(ValueError):
        n.value()
    with pytest.raises(ValueError):
        n.value(1.0, 2.0, 3.0, 4.0, 5.0)
    with pytest.raises(ValueError):
        n.noise()


def test_non_finite_coordinates_give_nan():
    n = SimplexNoise()
    assert math.isnan(n.value(math.nan, 1.0))
    assert math.isnan(n.value(0.0, math.inf, 2.0))
    assert math.isnan(n.value(1.0, 2.0, 3.0, -math.inf))


def test_noise_matches_value_per_dimension():
    n = SimplexNoise(seed=42)
    rng = np.random.default_rng(0)
    pts = rng.uniform(-20.0, 20.0, size=(100, 4))
    for dims in (2, 3, 4):
        out = n.noise(*(pts[:, d] for d in range(dims)))
        ref = [n.value(*p[:dims]) for p in pts]
        assert np.allclose(out, ref, rtol=0.0, atol=1e-12)


def test_debug_point_dispatch():
    n = SimplexNoise()
    assert n.debug_point(0.4)["noise"] == n.value(0.4)
    assert n.debug_point(0.4, 0.9)["noise"] == n.value(0.4, 0.9)
    assert len(n.debug_point(0.4, 0.9, 1.3)["corners"]) == 4
    assert len(n.debug_point(0.4, 0.9, 1.3, 2.2)["corners"]) == 5


def test_concurrent_reads_agree():
    n = SimplexNoise(seed=5)
    rng = np.random.default_rng(3)
    pts = rng.uniform(-10.0, 10.0, size=(200, 3))
    expected = [n.value(*p) for p in pts]
    results = {}

    def worker(idx):
        results[idx] = [n.value(*p) for p in pts]

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert all(results[i] == expected for i in range(4))


@pytest.mark.parametrize(
    "coords",
    [
        (1e308, 1e308),
        (-1e308, -1e308),
        (1.7e308, -1e308),
        (1.7e308, 1.7e308, 1.0),
        (-1.7e308, -1.7e308, -1.0),
        (1e308,) * 4,
        (-1e308,) * 4,
    ],
)
def test_huge_finite_coordinates_give_nan(coords):
    n = SimplexNoise()
    assert math.isnan(n.value(*coords))
    with pytest.raises(ValueError):
        n.debug_point(*coords)


def test_large_coordinates_within_float_range_still_evaluate():
    n = SimplexNoise()
    assert math.isfinite(n.value(1e300, -1e300))
    assert math.isfinite(n.value(1e300, 2e300, 3e300))


def test_debug_point_rejects_non_finite_coordinates():
    n = SimplexNoise()
    with pytest.raises(ValueError):
        n.debug_point(math.nan, 0.0)
    with pytest.raises(ValueError):
        n.debug_point(0.0, math.inf, 1.0)
    with pytest.raises(ValueError):
        n.debug_point()
