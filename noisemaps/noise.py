"""Coherent gradient noise and the noise-map synthesizers built on it."""

import logging
from dataclasses import dataclass
from enum import Enum

import numpy as np

from .config import DEFAULTS, resolve
from .errors import InvalidParameterError
from .random_source import resolve_context
from .validation import (
    as_member,
    check_layers,
    check_nodes,
    check_positive,
    check_size,
    freeze,
)

logger = logging.getLogger(__name__)


class NoiseKind(Enum):
    PERLIN = "perlin"
    STATIC = "static"
    RIDGED = "ridged"
    TERRAIN = "terrain"
    RIVER = "river"


@dataclass(frozen=True, eq=False)
class GradientField:
    """A nodes x nodes lattice of unit vectors, indexed ``vectors[y, x]``."""

    vectors: np.ndarray

    @property
    def nodes(self):
        return self.vectors.shape[0]

    @classmethod
    def regenerate(cls, nodes, rng):
        """Build a fresh lattice from ``nodes * nodes`` draws of ``rng``.

        Each vector's angle is ``draw * 2 * pi``; draws fill the lattice
        row by row.
        """
        check_nodes(nodes)
        theta = rng.draws(nodes * nodes) * 2 * np.pi
        vectors = np.stack([np.cos(theta), np.sin(theta)], axis=-1)
        vectors = vectors.reshape(nodes, nodes, 2)
        vectors.setflags(write=False)
        return cls(vectors)


def _fade(t):
    """Perlin fade function: 6t^5 - 15t^4 + 10t^3."""
    return t * t * t * (t * (t * 6 - 15) + 10)


def _interp(t, a, b):
    return a + _fade(t) * (b - a)


def _lattice_index(index, nodes, wrap):
    if wrap:
        return index % nodes
    if index.size and (index.min() < 0 or index.max() >= nodes):
        raise IndexError(
            f"lattice index out of range for a {nodes}x{nodes} gradient field")
    return index


def coherent_noise(x, y, gradients, wrap=False):
    """Evaluate gradient noise at real coordinates.

    Args:
        x: Horizontal coordinate(s) in lattice units (scalar or array).
        y: Vertical coordinate(s), broadcastable against ``x``.
        gradients: GradientField to interpolate against.
        wrap: Take lattice indices modulo the node count instead of
            requiring ``floor(c) + 1 < nodes``.

    Returns:
        Noise value(s) in [0, 1]; a float for scalar input, otherwise
        an array shaped like the broadcast coordinates.
    """
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    nodes = gradients.nodes
    g = gradients.vectors

    x0 = np.floor(x).astype(np.intp)
    y0 = np.floor(y).astype(np.intp)
    ix0 = _lattice_index(x0, nodes, wrap)
    ix1 = _lattice_index(x0 + 1, nodes, wrap)
    iy0 = _lattice_index(y0, nodes, wrap)
    iy1 = _lattice_index(y0 + 1, nodes, wrap)

    # Displacement from the (x0, y0) corner
    sx = x - x0
    sy = y - y0

    def dot(iy, ix, dx, dy):
        return dx * g[iy, ix, 0] + dy * g[iy, ix, 1]

    n00 = dot(iy0, ix0, sx, sy)
    n10 = dot(iy0, ix1, sx - 1, sy)
    n01 = dot(iy1, ix0, sx, sy - 1)
    n11 = dot(iy1, ix1, sx - 1, sy - 1)

    top = _interp(sx, n00, n10)
    bottom = _interp(sx, n01, n11)
    value = (_interp(sy, top, bottom) + 1) / 2

    if np.ndim(value) == 0:
        return float(value)
    return value


def _sample_grid(width, height, gradients, frequency=1, wrap=False):
    """Sample noise so the lattice spans the pixel extent ``frequency`` times."""
    span = (gradients.nodes - 1) * frequency
    xs = np.arange(width) / width * span
    ys = np.arange(height) / height * span
    yy, xx = np.meshgrid(ys, xs, indexing='ij')
    return coherent_noise(xx, yy, gradients, wrap=wrap)


def ridged(value):
    """Fold noise about 0.5: the midpoint maps to 1, both extremes to 0."""
    return 1 - np.abs(2 * value - 1)


def terrain(value):
    """Flatten lowlands and steepen highlands."""
    return np.power(value, 1.5)


def river(value):
    """Complement of ridged noise: 1 at the extremes, 0 at the midpoint."""
    return 1 - ridged(value)


_TRANSFORMS = {
    NoiseKind.PERLIN: lambda v: v,
    NoiseKind.RIDGED: ridged,
    NoiseKind.TERRAIN: terrain,
    NoiseKind.RIVER: river,
}


def _resolve_nodes(scale):
    nodes = resolve(scale, DEFAULTS.scale)
    check_nodes(nodes)
    return nodes


def synthesize(kind, width, height, scale=None, context=None):
    """Generate a width x height noise map.

    Args:
        kind: NoiseKind member or its value.
        width: Map width in pixels.
        height: Map height in pixels.
        scale: Gradient lattice node count (``None`` or 0 selects the
            default of 4). Ignored by static noise.
        context: GenerationContext to draw from; the current one if None.

    Returns:
        Read-only float64 array of shape (height, width) in [0, 1].
    """
    kind = as_member(NoiseKind, kind)
    check_size(width, height)
    if kind is not NoiseKind.STATIC:
        nodes = _resolve_nodes(scale)
    context = resolve_context(context)

    if kind is NoiseKind.STATIC:
        logger.debug("Static noise %dx%d", width, height)
        field = context.rng.draws(width * height).reshape(height, width)
        return freeze(field)

    transform = _TRANSFORMS[kind]
    logger.debug("%s noise %dx%d, %d nodes", kind.value, width, height, nodes)

    context.gradients = GradientField.regenerate(nodes, context.rng)
    field = transform(_sample_grid(width, height, context.gradients))
    return freeze(np.array(field, dtype=np.float64))


def synthesize_layered(width, height, layers, scale=None, persistence=None,
                       context=None):
    """Generate fractal noise as a weighted sum of Perlin octaves.

    Octave ``i`` samples a freshly drawn gradient lattice at frequency
    ``2**i`` with amplitude ``persistence**i``. Coordinates span
    ``(scale - 1) * 2**i`` lattice units across the map, not
    ``scale * 2**i``, so a single octave equals ``synthesize("perlin")``.
    Lattice indices wrap, so higher octaves tile the same ``scale x scale``
    lattice. The sum is divided by the total amplitude.

    Args:
        width: Map width in pixels.
        height: Map height in pixels.
        layers: Number of octaves.
        scale: Gradient lattice node count (``None`` or 0 selects 4).
        persistence: Amplitude decay per octave in (0, 1] (``None`` or 0
            selects 0.5).
        context: GenerationContext to draw from; the current one if None.

    Returns:
        Read-only float64 array of shape (height, width) in [0, 1].
    """
    check_size(width, height)
    check_layers(layers)
    nodes = _resolve_nodes(scale)
    persistence = resolve(persistence, DEFAULTS.persistence)
    check_positive("persistence", persistence)
    if persistence > 1:
        raise InvalidParameterError(
            f"persistence must be in (0, 1], got {persistence!r}")
    context = resolve_context(context)
    logger.debug("Layered noise %dx%d, %d nodes, %d layers, persistence %g",
                 width, height, nodes, layers, persistence)

    result = np.zeros((height, width), dtype=np.float64)
    amplitude = 1.0
    total_amplitude = 0.0

    for i in range(layers):
        context.gradients = GradientField.regenerate(nodes, context.rng)
        octave = _sample_grid(width, height, context.gradients,
                              frequency=2 ** i, wrap=True)
        result += amplitude * octave
        total_amplitude += amplitude
        amplitude *= persistence

    return freeze(result / total_amplitude)
