"""annkit public API."""

from .core import activations  # noqa: F401
from .core import types  # noqa: F401
from .core.activations import ActivationFunction
from .core.errors import (
    InvalidConfigurationError,
    LayerError,
    ProtocolViolationError,
    ShapeMismatchError,
)
from .core.parameters import ParameterSlot, ParameterView
from .core.types import LayerState, OutputInfo
from .config import build_net, load_config, load_preset, presets
from .data import ArrayDataSet, DataSet, DataSetView, merge, split, split_ratio
from .layers import FullyConnected, Layer
from .training import Net, SGDOptimizer, gradcheck

__all__ = [
    "ActivationFunction",
    "ArrayDataSet",
    "DataSet",
    "DataSetView",
    "FullyConnected",
    "InvalidConfigurationError",
    "Layer",
    "LayerError",
    "LayerState",
    "Net",
    "OutputInfo",
    "ParameterSlot",
    "ParameterView",
    "ProtocolViolationError",
    "SGDOptimizer",
    "ShapeMismatchError",
    "activations",
    "build_net",
    "gradcheck",
    "load_config",
    "load_preset",
    "merge",
    "presets",
    "split",
    "split_ratio",
    "types",
]
