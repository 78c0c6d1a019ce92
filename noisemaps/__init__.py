"""noisemaps - Seeded noise fields and masks for tile-map generation."""

from .algebra import CombineOp, combine, invert, threshold
from .config import MapConfig
from .errors import InvalidParameterError
from .masks import MaskKind, create_mask
from .noise import NoiseKind, synthesize, synthesize_layered
from .random_source import GenerationContext, RandomSource, set_seed
from .renderer import render, save_png

__version__ = "0.1.0"
__all__ = [
    "CombineOp",
    "GenerationContext",
    "InvalidParameterError",
    "MapConfig",
    "MaskKind",
    "NoiseKind",
    "RandomSource",
    "combine_noise_maps",
    "create_layered_noise_map",
    "create_noise_map",
    "create_noise_mask",
    "invert_field",
    "render",
    "save_png",
    "set_seed",
    "threshold_field",
]


def create_noise_map(kind, width, height, scale=None, context=None):
    """Generate a noise map.

    Args:
        kind: NoiseKind (or its value: "perlin", "static", "ridged",
            "terrain", "river").
        width: Map width in pixels.
        height: Map height in pixels.
        scale: Number of gradient nodes across the map; ``None`` or 0
            selects the default of 4.
        context: GenerationContext to draw from. Defaults to the one
            installed by ``set_seed``.

    Returns:
        Read-only float64 array of shape (height, width).
    """
    return synthesize(kind, width, height, scale=scale, context=context)


def create_layered_noise_map(width, height, layers, scale=None,
                             persistence=None, context=None):
    """Generate fractal noise from ``layers`` Perlin octaves.

    Args:
        width: Map width in pixels.
        height: Map height in pixels.
        layers: Number of octaves (more = more detail but slower).
        scale: Gradient nodes across the map for the base octave.
        persistence: Amplitude decay per octave, in (0, 1].
        context: GenerationContext to draw from.

    Returns:
        Read-only float64 array of shape (height, width).
    """
    return synthesize_layered(width, height, layers, scale=scale,
                              persistence=persistence, context=context)


def create_noise_mask(kind, width, height, option=None):
    """Generate a mask; ``option`` is the solid value, margin or cell size."""
    return create_mask(kind, width, height, option)


def combine_noise_maps(a, b, op):
    """Combine two maps with a CombineOp over their shared region."""
    return combine(a, b, op)


def invert_field(a):
    return invert(a)


def threshold_field(a, t):
    """Binary map: 1 where ``a > t``, else 0."""
    return threshold(a, t)
