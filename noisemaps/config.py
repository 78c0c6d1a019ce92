"""Default generation parameters."""

from dataclasses import dataclass


@dataclass
class MapConfig:
    """Configuration for noise and mask generation."""

    # Map size
    width: int = 160
    height: int = 120

    # Coherent noise
    scale: int = 4
    layers: int = 3
    persistence: float = 0.5

    # Masks
    solid_value: float = 1.0
    checker_size: int = 8
    edge_margin_ratio: float = 0.125

    def edge_margin(self, width, height):
        """EdgeFalloff margin in pixels for a map of the given size."""
        return max(1.0, self.edge_margin_ratio * min(width, height))


DEFAULTS = MapConfig()


def resolve(value, default):
    """Substitute ``default`` when ``value`` is unset.

    Both ``None`` and ``0`` count as unset: zero is never a valid
    override for the parameters routed through here.
    """
    if value is None or value == 0:
        return default
    return value
