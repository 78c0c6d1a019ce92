"""Exceptions raised by noisemaps."""


class InvalidParameterError(ValueError):
    """A size, scale, persistence or kind argument is out of range."""
