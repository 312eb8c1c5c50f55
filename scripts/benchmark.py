from __future__ import annotations

import logging
import time

import numpy as np

from simplex import SimplexNoise, noise_map_2d

logger = logging.getLogger("benchmark")


def _timeit(label: str, fn) -> float:
    t0 = time.perf_counter()
    fn()
    t1 = time.perf_counter()
    ms = (t1 - t0) * 1000.0
    logger.info("%s: %.2f ms", label, ms)
    return ms


def main() -> None:
    """Quick CPU benchmark.

    Intended targets (laptop-class CPU):
    - Scalar value(): a few microseconds per call
    - Noise map 512x512, 4 octaves: < ~300ms in 2D, more for 3D/4D slices
    """

    logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")

    noise = SimplexNoise(seed=0)
    rng = np.random.default_rng(0)
    pts = rng.uniform(-64.0, 64.0, size=(10_000, 4))

    def scalar(dims: int) -> None:
        for row in pts:
            noise.value(*row[:dims])

    def vectorized(dims: int) -> None:
        noise.noise(*(pts[:, d] for d in range(dims)))

    for dims in (2, 3, 4):
        _timeit(f"value() {dims}D x10k", lambda: scalar(dims))
        _timeit(f"noise() {dims}D x10k", lambda: vectorized(dims))

    for label, z, w in (("2D", None, None), ("3D slice", 0.5, None), ("4D slice", 0.5, 0.25)):
        _timeit(
            f"noise_map_2d 512x512 {label}",
            lambda: noise_map_2d(
                noise=noise,
                width=512,
                height=512,
                scale=120.0,
                octaves=4,
                variant="fbm",
                z=z,
                w=w,
            ),
        )


if __name__ == "__main__":
    main()
