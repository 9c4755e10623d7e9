"""The contract every network stage implements."""

from __future__ import annotations

import abc

import numpy as np

from ..core.errors import InvalidConfigurationError, ProtocolViolationError, ShapeMismatchError
from ..core.parameters import ParameterView
from ..core.types import Array, LayerState, OutputInfo


def as_output_info(info: OutputInfo | int) -> OutputInfo:
    if isinstance(info, OutputInfo):
        result = info
    else:
        result = OutputInfo.of(info)
    if not result.dimensions or any(d <= 0 for d in result.dimensions):
        raise InvalidConfigurationError(
            f"Input dimensions must be positive, got {result.dimensions}"
        )
    return result


def borrow(buffer: Array) -> Array:
    """Return a read-only view of a layer-owned buffer."""

    view = buffer.view()
    view.flags.writeable = False
    return view


class Layer(abc.ABC):
    """Abstract feed-forward stage.

    The public methods enforce the propagation protocol::

        UNINITIALIZED --initialize--> READY --forward--> AWAITING_BACKWARD
                                        ^                       |
                                        +-------backward--------+

    A forward pass may be repeated without a backward pass (inference); the
    cache holds a single example, so ``backpropagate`` always refers to the
    most recent ``forward_propagate``.

    Outputs are read-only views of buffers owned by the layer. They stay valid
    until the next propagation call on the same layer. Inputs are borrowed:
    the caller keeps ``x`` alive and unchanged until the matching backward
    pass returns.
    """

    def __init__(self, info: OutputInfo | int) -> None:
        self._input_info = as_output_info(info)
        self._output_info: OutputInfo | None = None
        self._state = LayerState.UNINITIALIZED

    @property
    def state(self) -> LayerState:
        return self._state

    @property
    def input_info(self) -> OutputInfo:
        return self._input_info

    @property
    def output_info(self) -> OutputInfo:
        if self._output_info is None:
            raise ProtocolViolationError(f"{type(self).__name__} has not been initialized")
        return self._output_info

    def initialize(self, parameters: ParameterView) -> OutputInfo:
        """Register parameters, allocate buffers and return the output shape."""

        if self._state is not LayerState.UNINITIALIZED:
            raise ProtocolViolationError(f"{type(self).__name__} is already initialized")
        self._output_info = self._initialize(parameters)
        self._state = LayerState.READY
        return self._output_info

    def forward_propagate(self, x: Array) -> Array:
        if self._state is LayerState.UNINITIALIZED:
            raise ProtocolViolationError("forward_propagate called before initialize")
        x = self._check_vector(x, self._input_info.units, "input")
        y = self._forward(x)
        self._state = LayerState.AWAITING_BACKWARD
        return y

    def backpropagate(self, ein: Array) -> Array:
        if self._state is LayerState.UNINITIALIZED:
            raise ProtocolViolationError("backpropagate called before initialize")
        if self._state is not LayerState.AWAITING_BACKWARD:
            raise ProtocolViolationError("backpropagate called without a preceding forward_propagate")
        ein = self._check_vector(ein, self.output_info.units, "error signal")
        eout = self._backward(ein)
        self._state = LayerState.READY
        return eout

    @staticmethod
    def _check_vector(vector: Array, units: int, what: str) -> Array:
        array = np.asarray(vector)
        if array.shape != (units,):
            raise ShapeMismatchError(what, (units,), array.shape)
        return array

    @abc.abstractmethod
    def _initialize(self, parameters: ParameterView) -> OutputInfo:
        """Register parameters and allocate every buffer at its final size."""

    @abc.abstractmethod
    def _forward(self, x: Array) -> Array:
        """Compute the output for a validated input vector."""

    @abc.abstractmethod
    def _backward(self, ein: Array) -> Array:
        """Compute gradients and the upstream error for a validated error vector."""


__all__ = ["Layer", "as_output_info", "borrow"]
