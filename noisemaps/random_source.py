"""Seeded random source and the per-request generation context."""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

import numpy as np

from .errors import InvalidParameterError

if TYPE_CHECKING:
    from .noise import GradientField

logger = logging.getLogger(__name__)

#: Draws from ``RandomSource.next`` lie in ``[0, RANGE)``.
RANGE = 65536


class RandomSource:
    """Seedable generator of integers uniformly distributed over [0, 65535].

    Wraps a numpy ``RandomState`` so a given seed always yields the same
    sequence within one numpy release.
    """

    def __init__(self, seed):
        if isinstance(seed, bool) or not isinstance(seed, (int, np.integer)):
            raise InvalidParameterError(f"seed must be an integer, got {seed!r}")
        if not 0 <= seed < 2**32:
            raise InvalidParameterError(f"seed must be in [0, 2**32), got {seed}")
        self._seed = int(seed)
        self._state = np.random.RandomState(self._seed)

    @property
    def seed(self):
        return self._seed

    def next(self):
        """Return the next raw integer draw."""
        return int(self._state.randint(0, RANGE))

    def draw(self):
        """Return the next draw normalized to [0, 1)."""
        return self.next() / RANGE

    def draws(self, count):
        """Return ``count`` sequential draws as a float64 array."""
        return np.array([self.next() for _ in range(count)],
                        dtype=np.float64) / RANGE

    def __repr__(self):
        return f"RandomSource(seed={self._seed})"


@dataclass
class GenerationContext:
    """RNG plus the gradient field most recently built from it.

    ``gradients`` is replaced wholesale each time a coherent-noise map
    is requested; it is never edited in place.
    """

    rng: RandomSource
    gradients: Optional["GradientField"] = None


_current: Optional[GenerationContext] = None


def set_seed(source):
    """Install a new process-wide context.

    Args:
        source: A RandomSource, or an integer seed to build one from.

    Returns:
        The new current GenerationContext.
    """
    global _current
    if not isinstance(source, RandomSource):
        source = RandomSource(source)
    _current = GenerationContext(rng=source)
    logger.debug("Current random source set to %r", source)
    return _current


def current_context():
    """Return the process-wide context, seeding it randomly on first use."""
    if _current is None:
        set_seed(int(np.random.randint(0, 2**31)))
    return _current


def resolve_context(context=None):
    """Return ``context`` or, when omitted, the current one."""
    if context is None:
        return current_context()
    return context
