"""Core numerical primitives for annkit."""

from . import activations, errors, parameters, types

__all__ = ["activations", "errors", "parameters", "types"]
