from __future__ import annotations

import io
from typing import Sequence

import numpy as np
from PIL import Image


def to_gray8(z: np.ndarray, *, value_range: tuple[float, float] | None = None) -> np.ndarray:
    """Map a 2D noise map to uint8 gray levels.

    Without ``value_range`` the map is min/max normalized (a constant map
    becomes all zeros). With it, values are placed on that fixed range and
    clipped, so frames of an animation share one scale.
    """

    z = np.asarray(z, dtype=np.float64)
    if z.ndim != 2:
        raise ValueError("expected a 2D array")

    if value_range is None:
        lo = float(np.min(z))
        hi = float(np.max(z))
    else:
        lo, hi = (float(v) for v in value_range)
        if hi <= lo:
            raise ValueError("value_range must be increasing")

    if hi == lo:
        return np.zeros(z.shape, dtype=np.uint8)
    zn = (z - lo) / (hi - lo)
    return np.clip(zn * 255.0, 0.0, 255.0).astype(np.uint8)


def array_to_png_bytes(
    z: np.ndarray, *, value_range: tuple[float, float] | None = None
) -> bytes:
    out = io.BytesIO()
    Image.fromarray(to_gray8(z, value_range=value_range)).save(out, format="PNG")
    return out.getvalue()


def array_to_npy_bytes(z: np.ndarray) -> bytes:
    z = np.asarray(z)
    out = io.BytesIO()
    np.save(out, z)
    return out.getvalue()


def frames_to_gif_bytes(
    frames: Sequence[np.ndarray],
    *,
    duration_ms: int = 80,
    value_range: tuple[float, float] = (-1.0, 1.0),
) -> bytes:
    """Encode a sequence of noise maps (e.g. z slices over time) as a looping GIF."""

    if len(frames) == 0:
        raise ValueError("need at least one frame")

    images = [
        Image.fromarray(to_gray8(f, value_range=value_range)) for f in frames
    ]
    out = io.BytesIO()
    images[0].save(
        out,
        format="GIF",
        save_all=True,
        append_images=images[1:],
        duration=int(duration_ms),
        loop=0,
    )
    return out.getvalue()
