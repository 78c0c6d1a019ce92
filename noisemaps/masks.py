"""Closed-form mask fields: gradients, islands, falloffs and checkerboards.

Masks never touch the random source. Every function returns a read-only
float64 array of shape (height, width).
"""

import logging
from enum import Enum

import numpy as np

from .config import DEFAULTS, resolve
from .validation import (
    as_member,
    check_finite,
    check_positive,
    check_size,
    freeze,
)

logger = logging.getLogger(__name__)


class MaskKind(Enum):
    GRADIENT = "gradient"
    SOLID = "solid"
    ISLAND = "island"
    EDGE_FALLOFF = "edge_falloff"
    VERTICAL_GRADIENT = "vertical_gradient"
    HORIZONTAL_GRADIENT = "horizontal_gradient"
    CHECKERBOARD = "checkerboard"


def _pixel_grid(width, height):
    yy, xx = np.mgrid[0:height, 0:width]
    return xx.astype(np.float64), yy.astype(np.float64)


def _center_distance(width, height):
    xx, yy = _pixel_grid(width, height)
    cx = (width - 1) / 2
    cy = (height - 1) / 2
    return np.hypot(xx - cx, yy - cy), np.hypot(cx, cy)


def gradient_mask(width, height):
    """Radial falloff: 1 at the center, 0 at the corners."""
    check_size(width, height)
    dist, max_dist = _center_distance(width, height)
    if max_dist == 0:
        return freeze(np.ones((height, width), dtype=np.float64))
    return freeze(np.clip(1 - dist / max_dist, 0, 1))


def solid_mask(width, height, value=None):
    """Every cell set to ``value`` (default 1.0; 0.0 is a valid value)."""
    check_size(width, height)
    if value is None:
        value = DEFAULTS.solid_value
    check_finite("value", value)
    return freeze(np.full((height, width), float(value), dtype=np.float64))


def island_mask(width, height):
    """Radial falloff reaching 0 at half the smaller dimension."""
    check_size(width, height)
    dist, _ = _center_distance(width, height)
    radius = min(width, height) / 2
    return freeze(np.maximum(0.0, 1 - dist / radius))


def edge_falloff_mask(width, height, margin=None):
    """Ramp from 0 on the border to 1 at ``margin`` pixels inside it."""
    check_size(width, height)
    margin = resolve(margin, DEFAULTS.edge_margin(width, height))
    check_positive("margin", margin)
    xx, yy = _pixel_grid(width, height)
    edge_dist = np.minimum.reduce(
        [xx, yy, (width - 1) - xx, (height - 1) - yy])
    return freeze(np.minimum(1.0, edge_dist / margin))


def vertical_gradient_mask(width, height):
    """0 on the top row rising linearly to 1 on the bottom row."""
    check_size(width, height)
    _, yy = _pixel_grid(width, height)
    if height == 1:
        return freeze(np.zeros_like(yy))
    return freeze(yy / (height - 1))


def horizontal_gradient_mask(width, height):
    """0 on the left column rising linearly to 1 on the right column."""
    check_size(width, height)
    xx, _ = _pixel_grid(width, height)
    if width == 1:
        return freeze(np.zeros_like(xx))
    return freeze(xx / (width - 1))


def checkerboard_mask(width, height, size=None):
    """Alternating 1/0 squares of ``size`` pixels, 1 in the top-left."""
    check_size(width, height)
    size = resolve(size, DEFAULTS.checker_size)
    check_positive("size", size)
    xx, yy = _pixel_grid(width, height)
    parity = (np.floor(xx / size) + np.floor(yy / size)) % 2
    return freeze((parity == 0).astype(np.float64))


_MASKS = {
    MaskKind.GRADIENT: lambda w, h, option: gradient_mask(w, h),
    MaskKind.SOLID: solid_mask,
    MaskKind.ISLAND: lambda w, h, option: island_mask(w, h),
    MaskKind.EDGE_FALLOFF: edge_falloff_mask,
    MaskKind.VERTICAL_GRADIENT: lambda w, h, option: vertical_gradient_mask(w, h),
    MaskKind.HORIZONTAL_GRADIENT: lambda w, h, option: horizontal_gradient_mask(w, h),
    MaskKind.CHECKERBOARD: checkerboard_mask,
}


def create_mask(kind, width, height, option=None):
    """Generate a mask of the given kind.

    ``option`` is the solid value, the edge-falloff margin or the
    checkerboard cell size; the other kinds ignore it.
    """
    kind = as_member(MaskKind, kind)
    logger.debug("%s mask %sx%s, option=%r", kind.value, width, height, option)
    return _MASKS[kind](width, height, option)
