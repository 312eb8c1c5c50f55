from .core import PermutationTable
from .fractal import fbm, ridged, turbulence
from .map2d import noise_map_2d
from .noise import SimplexNoise
from .rng import GeneratorRandomSource, RandomSource, XorShift128PlusRandom

__all__ = [
    "GeneratorRandomSource",
    "PermutationTable",
    "RandomSource",
    "SimplexNoise",
    "XorShift128PlusRandom",
    "fbm",
    "noise_map_2d",
    "ridged",
    "turbulence",
]
