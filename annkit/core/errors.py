"""Exceptions raised by layers when their contract is violated."""

from __future__ import annotations


class LayerError(Exception):
    """Base class for layer contract violations."""


class ShapeMismatchError(LayerError, ValueError):
    """A vector does not have the dimensionality the layer declared."""

    def __init__(self, what: str, expected: tuple, actual: tuple) -> None:
        super().__init__(f"{what} must have shape {expected}, got {actual}")
        self.expected = expected
        self.actual = actual


class ProtocolViolationError(LayerError, RuntimeError):
    """Propagation was called out of initialize -> forward -> backward order."""


class InvalidConfigurationError(LayerError, ValueError):
    """A layer was constructed with parameters it cannot work with."""


__all__ = [
    "LayerError",
    "ShapeMismatchError",
    "ProtocolViolationError",
    "InvalidConfigurationError",
]
