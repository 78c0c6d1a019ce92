"""Argument checks shared by the synthesis and algebra modules.

All checks run before any array is allocated or any random draw is
taken, so a rejected call leaves the generation context untouched.
"""

import math

import numpy as np

from .errors import InvalidParameterError


def _is_int(value):
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


def check_size(width, height):
    """Require positive integer map dimensions."""
    for name, value in (("width", width), ("height", height)):
        if not _is_int(value) or value <= 0:
            raise InvalidParameterError(
                f"{name} must be a positive integer, got {value!r}")


def check_nodes(nodes):
    """Require a gradient lattice of at least 2x2 nodes."""
    if not _is_int(nodes) or nodes < 2:
        raise InvalidParameterError(
            f"scale (node count) must be an integer >= 2, got {nodes!r}")


def check_layers(layers):
    if not _is_int(layers) or layers < 1:
        raise InvalidParameterError(
            f"layers must be a positive integer, got {layers!r}")


def check_positive(name, value):
    if not isinstance(value, (int, float, np.integer, np.floating)) \
            or isinstance(value, bool) or not value > 0 or math.isinf(value):
        raise InvalidParameterError(
            f"{name} must be a positive number, got {value!r}")


def as_member(enum_cls, value):
    """Coerce ``value`` (a member or its string value) to ``enum_cls``."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        choices = ", ".join(m.value for m in enum_cls)
        raise InvalidParameterError(
            f"unknown {enum_cls.__name__} {value!r} (expected one of: {choices})"
        ) from None


def as_field(value, name="field"):
    """View ``value`` as a non-empty 2-D float64 array."""
    field = np.asarray(value, dtype=np.float64)
    if field.ndim != 2 or field.size == 0:
        raise InvalidParameterError(
            f"{name} must be a non-empty 2-D grid, got shape {field.shape}")
    return field


def freeze(field):
    """Mark a freshly built field read-only and return it."""
    field.setflags(write=False)
    return field


def check_finite(name, value):
    """Require a finite real number."""
    if isinstance(value, bool) \
            or not isinstance(value, (int, float, np.integer, np.floating)) \
            or not math.isfinite(value):
        raise InvalidParameterError(
            f"{name} must be a finite number, got {value!r}")
