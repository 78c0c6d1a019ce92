"""Pointwise operators over fields.

Binary operators work on the overlapping top-left region of their
operands: fields of different sizes are cropped to
``min(height) x min(width)``, never resampled.
"""

import logging
from enum import Enum

import numpy as np

from .validation import as_field, as_member, check_finite, freeze

logger = logging.getLogger(__name__)


class CombineOp(Enum):
    PRODUCT = "product"
    AVERAGE = "average"
    DIFFERENCE = "difference"
    UNION = "union"
    INTERSECTION = "intersection"
    QUOTIENT = "quotient"


_OPS = {
    # Geometric mean, not a raw multiply
    CombineOp.PRODUCT: lambda a, b: np.sqrt(a * b),
    CombineOp.AVERAGE: lambda a, b: (a + b) / 2,
    CombineOp.DIFFERENCE: lambda a, b: np.clip(a - b + 0.5, 0, 1),
    CombineOp.UNION: np.maximum,
    CombineOp.INTERSECTION: np.minimum,
    # b == 0 yields inf/nan; callers threshold or clip if they need finite cells
    CombineOp.QUOTIENT: np.divide,
}


def combine(a, b, op):
    """Combine two fields cell by cell.

    Args:
        a: First field (2-D array-like).
        b: Second field (2-D array-like).
        op: CombineOp member or its value.

    Returns:
        Read-only float64 array covering the shared top-left region.
    """
    op = as_member(CombineOp, op)
    a = as_field(a, "a")
    b = as_field(b, "b")
    h = min(a.shape[0], b.shape[0])
    w = min(a.shape[1], b.shape[1])
    if a.shape != b.shape:
        logger.debug("Cropping %s and %s to %dx%d", a.shape, b.shape, w, h)

    with np.errstate(divide="ignore", invalid="ignore"):
        result = _OPS[op](a[:h, :w], b[:h, :w])
    return freeze(np.array(result, dtype=np.float64))


def invert(a):
    """Return ``1 - a`` for every cell."""
    return freeze(1.0 - as_field(a, "a"))


def threshold(a, t):
    """Return 1.0 where ``a > t`` and 0.0 elsewhere."""
    check_finite("threshold", t)
    return freeze((as_field(a, "a") > t).astype(np.float64))
