from __future__ import annotations

import logging
import math

import numpy as np

from .config import (
    DEFAULT_SEED,
    FRACTAL_LACUNARITY,
    FRACTAL_OCTAVES,
    FRACTAL_PERSISTENCE,
    MAP_SCALE,
    MAP_VARIANT,
)
from .fractal import fbm, ridged, turbulence
from .noise import SimplexNoise

logger = logging.getLogger(__name__)


def noise_map_2d(
    *,
    seed: int = DEFAULT_SEED,
    width: int,
    height: int,
    scale: float = MAP_SCALE,
    octaves: int = FRACTAL_OCTAVES,
    lacunarity: float = FRACTAL_LACUNARITY,
    persistence: float = FRACTAL_PERSISTENCE,
    variant: str = MAP_VARIANT,
    offset_x: float = 0.0,
    offset_y: float = 0.0,
    z: float | None = None,
    w: float | None = None,
    normalize: bool = False,
    noise: SimplexNoise | None = None,
    dtype: np.dtype | None = None,
) -> np.ndarray:
    """Generate a deterministic ``(height, width)`` simplex noise map.

    With ``z`` set the map is a slice of the 3D field, with ``z`` and ``w``
    a slice of the 4D field. Stepping ``z`` over time animates the map.
    Pass ``noise`` to reuse an already built instance instead of ``seed``.
    """

    width = int(width)
    height = int(height)
    if width <= 0 or height <= 0:
        raise ValueError("width and height must be > 0")
    if w is not None and z is None:
        raise ValueError("w requires z")

    if noise is None:
        noise = SimplexNoise(int(seed))

    scale = max(float(scale), 1e-9)
    xs = (np.arange(width, dtype=np.float64) / scale) + float(offset_x)
    ys = (np.arange(height, dtype=np.float64) / scale) + float(offset_y)
    xg, yg = np.meshgrid(xs, ys)

    coords = [xg, yg]
    if z is not None:
        coords.append(np.full_like(xg, float(z)))
    if w is not None:
        coords.append(np.full_like(xg, float(w)))

    logger.debug(
        "noise_map_2d %dx%d (dims=%d, variant=%s)", width, height, len(coords), variant
    )

    variant = str(variant)
    if variant == "single":
        out = noise.noise(*coords)
    elif variant == "fbm":
        out = fbm(
            noise,
            *coords,
            octaves=int(octaves),
            lacunarity=float(lacunarity),
            persistence=float(persistence),
        )
    elif variant == "turbulence":
        out = turbulence(
            noise,
            *coords,
            octaves=int(octaves),
            lacunarity=float(lacunarity),
            persistence=float(persistence),
        )
    elif variant == "ridged":
        out = ridged(
            noise,
            *coords,
            octaves=int(octaves),
            lacunarity=float(lacunarity),
            persistence=float(persistence),
        )
    else:
        raise ValueError(f"unknown variant: {variant}")

    if dtype is not None:
        out = np.asarray(out, dtype=dtype)

    if not bool(normalize):
        return out

    out = np.asarray(out, dtype=np.float64)
    zmin = float(np.min(out))
    zmax = float(np.max(out))
    if math.isclose(zmin, zmax):
        return np.zeros_like(out)
    return (out - zmin) / (zmax - zmin)
