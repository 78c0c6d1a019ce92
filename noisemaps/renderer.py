"""Render fields to palette images."""

import logging
from pathlib import Path

import numpy as np
from PIL import Image

from .errors import InvalidParameterError
from .validation import as_field

logger = logging.getLogger(__name__)

# 16-colour game console palette; index 0 is the transparent slot.
ARCADE_PALETTE = (
    (0, 0, 0),
    (255, 255, 255),
    (255, 33, 33),
    (255, 147, 196),
    (255, 129, 53),
    (255, 246, 9),
    (36, 156, 163),
    (120, 220, 82),
    (0, 63, 173),
    (135, 242, 255),
    (142, 46, 196),
    (164, 131, 159),
    (92, 64, 108),
    (229, 205, 196),
    (145, 70, 61),
    (0, 0, 0),
)


def to_palette_indices(field):
    """Map cells to palette indices via ``floor(v * 15) + 1``.

    Indices are clipped to [0, 15]; NaN maps to 0.
    """
    field = as_field(field)
    values = np.nan_to_num(field, nan=-1.0, posinf=1.0, neginf=-1.0)
    indices = np.floor(values * 15) + 1
    return np.clip(indices, 0, 15).astype(np.uint8)


def render(field, palette=ARCADE_PALETTE):
    """Render a field as an RGB image.

    Args:
        field: 2-D array-like of values nominally in [0, 1].
        palette: Sequence of 16 (r, g, b) tuples.

    Returns:
        PIL Image in RGB mode, sized (width, height).
    """
    colours = np.asarray(palette, dtype=np.uint8)
    if colours.shape != (16, 3):
        raise InvalidParameterError(
            f"palette must hold 16 RGB entries, got shape {colours.shape}")
    indices = to_palette_indices(field)
    logger.debug("Rendering %dx%d field", indices.shape[1], indices.shape[0])
    return Image.fromarray(colours[indices])


def save_png(field, path, palette=ARCADE_PALETTE):
    """Render ``field`` and write it to ``path`` as PNG."""
    output = Path(path)
    output.parent.mkdir(parents=True, exist_ok=True)
    render(field, palette).save(str(output), format="PNG")
    return output
