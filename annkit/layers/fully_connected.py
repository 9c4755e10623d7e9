"""Dense affine layer followed by an elementwise activation."""

from __future__ import annotations

import logging
import math

import numpy as np

from ..core.activations import Activation, ActivationFunction, get_activation
from ..core.errors import InvalidConfigurationError, ProtocolViolationError
from ..core.parameters import ParameterView
from ..core.types import Array, OutputInfo
from .base import Layer, borrow

logger = logging.getLogger(__name__)


class FullyConnected(Layer):
    """Fully connected layer ``y = act(W x)``.

    ``W`` has shape ``(units, I)`` or ``(units, I + 1)`` when ``bias`` is set;
    the last column then multiplies an implicit constant-one input and never
    receives an upstream error component.
    """

    def __init__(
        self,
        info: OutputInfo | int,
        units: int,
        bias: bool = True,
        activation: ActivationFunction | Activation | str = ActivationFunction.LOGISTIC,
        std_dev: float = 0.05,
        rng: np.random.Generator | None = None,
    ) -> None:
        super().__init__(info)
        if isinstance(units, bool) or not isinstance(units, (int, np.integer)) or units <= 0:
            raise InvalidConfigurationError(f"units must be a positive integer, got {units!r}")
        std_dev = float(std_dev)
        if not math.isfinite(std_dev) or std_dev < 0.0:
            raise InvalidConfigurationError(f"std_dev must be finite and >= 0, got {std_dev}")

        self.I = self.input_info.units
        self.J = int(units)
        self.bias = bool(bias)
        self.activation = get_activation(activation)
        self.std_dev = std_dev
        self._rng = rng if rng is not None else np.random.default_rng()

        self._W: Array | None = None
        self._Wd: Array | None = None
        self._x: Array | None = None
        self._a: Array | None = None
        self._y: Array | None = None
        self._yd: Array | None = None
        self._deltas: Array | None = None
        self._e: Array | None = None

    @property
    def weights(self) -> Array:
        return borrow(self._require(self._W))

    @property
    def weight_gradients(self) -> Array:
        return borrow(self._require(self._Wd))

    def _initialize(self, parameters: ParameterView) -> OutputInfo:
        columns = self.I + 1 if self.bias else self.I
        shape = (self.J, columns)
        self._W = self._rng.normal(0.0, self.std_dev, size=shape) if self.std_dev > 0 else np.zeros(shape)
        self._Wd = np.zeros(shape)
        self._a = np.zeros(self.J)
        self._y = np.zeros(self.J)
        self._yd = np.zeros(self.J)
        self._deltas = np.zeros(self.J)
        self._e = np.zeros(self.I)
        parameters.register("W", self._W, self._Wd)
        logger.debug(
            "Initialised fully connected layer %d -> %d (bias=%s, activation=%s, std_dev=%g)",
            self.I,
            self.J,
            self.bias,
            self.activation.name,
            self.std_dev,
        )
        return OutputInfo.of(self.J)

    def _forward(self, x: Array) -> Array:
        W = self._W
        np.matmul(W[:, : self.I], x, out=self._a)
        if self.bias:
            self._a += W[:, self.I]
        np.copyto(self._y, self.activation.fn(self._a))
        np.copyto(self._yd, self.activation.derivative(self._a, self._y))
        self._x = x
        return borrow(self._y)

    def _backward(self, ein: Array) -> Array:
        np.multiply(ein, self._yd, out=self._deltas)
        np.outer(self._deltas, self._x, out=self._Wd[:, : self.I])
        if self.bias:
            self._Wd[:, self.I] = self._deltas
        np.matmul(self._W[:, : self.I].T, self._deltas, out=self._e)
        self._x = None
        return borrow(self._e)

    @staticmethod
    def _require(buffer: Array | None) -> Array:
        if buffer is None:
            raise ProtocolViolationError("FullyConnected has not been initialized")
        return buffer

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(I={self.I}, J={self.J}, bias={self.bias}, "
            f"activation={self.activation.name!r}, std_dev={self.std_dev})"
        )


__all__ = ["FullyConnected"]
