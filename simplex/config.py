"""Default constants for simplex noise evaluation and noise-map generation.

Callers override these through keyword arguments; nothing here is read from
files or the environment.
"""

# --- Construction ---
# Seed 0 (or None) selects the reference permutation source.
DEFAULT_SEED = 0

# --- Kernel radii (squared falloff distance per corner) ---
KERNEL_RADIUS_2D = 0.5
# 0.6 instead of the continuous 0.5: smoother looking output, small seams at
# simplex boundaries.
KERNEL_RADIUS_3D = 0.6
KERNEL_RADIUS_4D = 0.6

# --- Output scale factors (map the corner sum into roughly [-1, 1]) ---
OUTPUT_SCALE_2D = 70.0
OUTPUT_SCALE_3D = 32.0
OUTPUT_SCALE_4D = 27.0

# --- Fractal sums ---
FRACTAL_OCTAVES = 4
FRACTAL_LACUNARITY = 2.0
FRACTAL_PERSISTENCE = 0.5

# --- Noise maps ---
MAP_SCALE = 120.0
MAP_VARIANT = "fbm"
MAP_VARIANTS = ("single", "fbm", "turbulence", "ridged")
