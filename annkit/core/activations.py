"""Elementwise activation functions and their derivatives."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Callable, Dict, Iterable

import numpy as np

from .errors import InvalidConfigurationError
from .types import Array

ActivationFn = Callable[[Array], Array]
DerivativeFn = Callable[[Array, Array], Array]

_SCALED_TANH_OUTER = 1.7159
_SCALED_TANH_INNER = 2.0 / 3.0


class ActivationFunction(str, enum.Enum):
    """Selector for the registered activation kernels."""

    LOGISTIC = "logistic"
    TANH = "tanh"
    TANH_SCALED = "tanh_scaled"
    RECTIFIER = "rectifier"
    LINEAR = "linear"


@dataclass(frozen=True)
class Activation:
    """An activation ``fn(a)`` with its derivative ``derivative(a, fn(a))``."""

    name: str
    fn: ActivationFn
    derivative: DerivativeFn

    def __call__(self, a: Array) -> Array:
        return self.fn(a)


def relu(x: Array) -> Array:
    """Return the ReLU activation."""

    return np.maximum(x, 0.0)


def logistic(x: Array) -> Array:
    return 1.0 / (1.0 + np.exp(-x))


def scaled_tanh(x: Array) -> Array:
    return _SCALED_TANH_OUTER * np.tanh(_SCALED_TANH_INNER * x)


_REGISTRY: Dict[str, Activation] = {}


def register_activation(name: str, fn: ActivationFn, derivative: DerivativeFn) -> Activation:
    activation = Activation(name, fn, derivative)
    _REGISTRY[name] = activation
    return activation


def get_activation(selector: ActivationFunction | Activation | str) -> Activation:
    """Resolve an enum member or registered name to its :class:`Activation`."""

    if isinstance(selector, Activation):
        return selector
    name = selector.value if isinstance(selector, ActivationFunction) else selector
    if not isinstance(name, str) or name not in _REGISTRY:
        available = ", ".join(sorted(_REGISTRY))
        raise InvalidConfigurationError(
            f"Unknown activation function {selector!r}. Available: {available}"
        )
    return _REGISTRY[name]


def available_activations() -> Iterable[str]:
    return sorted(_REGISTRY)


register_activation(
    ActivationFunction.LOGISTIC.value,
    logistic,
    lambda a, y: y * (1.0 - y),
)
register_activation(
    ActivationFunction.TANH.value,
    np.tanh,
    lambda a, y: 1.0 - y**2,
)
register_activation(
    ActivationFunction.TANH_SCALED.value,
    scaled_tanh,
    lambda a, y: (_SCALED_TANH_INNER / _SCALED_TANH_OUTER)
    * (_SCALED_TANH_OUTER - y)
    * (_SCALED_TANH_OUTER + y),
)
register_activation(
    ActivationFunction.RECTIFIER.value,
    relu,
    lambda a, y: (a > 0).astype(np.float64),
)
register_activation(
    ActivationFunction.LINEAR.value,
    lambda a: np.array(a, dtype=np.float64, copy=True),
    lambda a, y: np.ones_like(a, dtype=np.float64),
)

__all__ = [
    "Activation",
    "ActivationFunction",
    "available_activations",
    "get_activation",
    "logistic",
    "register_activation",
    "relu",
    "scaled_tanh",
]
