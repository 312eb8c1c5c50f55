from __future__ import annotations

from typing import Callable, Protocol

import numpy as np

from .config import FRACTAL_LACUNARITY, FRACTAL_OCTAVES, FRACTAL_PERSISTENCE


class SupportsNoise(Protocol):
    def noise(self, *coords: np.ndarray) -> np.ndarray:  # pragma: no cover
        ...


def _octave_sum(
    noise: SupportsNoise,
    coords: tuple[np.ndarray, ...],
    shape: Callable[[np.ndarray], np.ndarray],
    octaves: int,
    lacunarity: float,
    persistence: float,
) -> np.ndarray:
    arrays = np.broadcast_arrays(*(np.asarray(c, dtype=np.float64) for c in coords))

    octaves = int(octaves)
    lacunarity = float(lacunarity)
    persistence = float(persistence)

    amp = 1.0
    freq = 1.0
    total = np.zeros(arrays[0].shape, dtype=np.float64)
    amp_sum = 0.0

    for _ in range(max(octaves, 1)):
        total += amp * shape(noise.noise(*(a * freq for a in arrays)))
        amp_sum += amp
        amp *= persistence
        freq *= lacunarity

    if amp_sum == 0.0:
        return total
    return total / amp_sum


def fbm(
    noise: SupportsNoise,
    *coords: np.ndarray,
    octaves: int = FRACTAL_OCTAVES,
    lacunarity: float = FRACTAL_LACUNARITY,
    persistence: float = FRACTAL_PERSISTENCE,
) -> np.ndarray:
    """Fractal Brownian motion: amplitude-normalized sum of octaves."""
    return _octave_sum(noise, coords, lambda n: n, octaves, lacunarity, persistence)


def turbulence(
    noise: SupportsNoise,
    *coords: np.ndarray,
    octaves: int = FRACTAL_OCTAVES,
    lacunarity: float = FRACTAL_LACUNARITY,
    persistence: float = FRACTAL_PERSISTENCE,
) -> np.ndarray:
    return _octave_sum(noise, coords, np.abs, octaves, lacunarity, persistence)


def _ridge(n: np.ndarray) -> np.ndarray:
    signal = 1.0 - np.abs(n)
    return signal * signal


def ridged(
    noise: SupportsNoise,
    *coords: np.ndarray,
    octaves: int = FRACTAL_OCTAVES,
    lacunarity: float = FRACTAL_LACUNARITY,
    persistence: float = FRACTAL_PERSISTENCE,
) -> np.ndarray:
    return _octave_sum(noise, coords, _ridge, octaves, lacunarity, persistence)
