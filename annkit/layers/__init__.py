"""Layer contract and concrete layers."""

from .base import Layer
from .fully_connected import FullyConnected

LAYER_TYPES = {"fully_connected": FullyConnected}

__all__ = ["Layer", "FullyConnected", "LAYER_TYPES"]
