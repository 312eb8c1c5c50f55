from __future__ import annotations

import logging
import sys
from pathlib import Path

import numpy as np

logger = logging.getLogger("render_samples")


def main() -> None:
    root = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(root))

    from simplex import SimplexNoise, noise_map_2d
    from viz.export import array_to_png_bytes, frames_to_gif_bytes

    logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")

    out_dir = root / "assets"
    out_dir.mkdir(parents=True, exist_ok=True)

    noise = SimplexNoise(seed=0)
    size = 256

    samples = {
        "simplex_2d.png": dict(variant="single"),
        "simplex_2d_fbm.png": dict(variant="fbm", octaves=5),
        "simplex_2d_ridged.png": dict(variant="ridged", octaves=5),
        "simplex_3d_slice.png": dict(variant="fbm", z=0.5),
        "simplex_4d_slice.png": dict(variant="fbm", z=0.5, w=1.5),
    }
    for name, params in samples.items():
        z = noise_map_2d(noise=noise, width=size, height=size, scale=64.0, **params)
        (out_dir / name).write_bytes(array_to_png_bytes(z, value_range=(-1.0, 1.0)))
        logger.info("wrote %s", name)

    # Animated 2D noise: walk the z axis of the 3D field.
    frames = [
        noise_map_2d(noise=noise, width=128, height=128, scale=32.0, variant="single", z=t)
        for t in np.linspace(0.0, 2.0, 40)
    ]
    (out_dir / "simplex_3d_animation.gif").write_bytes(
        frames_to_gif_bytes(frames, duration_ms=60)
    )
    logger.info("wrote simplex_3d_animation.gif (%d frames)", len(frames))


if __name__ == "__main__":
    main()
