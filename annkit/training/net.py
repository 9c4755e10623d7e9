"""Feed-forward network container chaining layers."""

from __future__ import annotations

import logging
from typing import List, Sequence

import numpy as np

from ..core.activations import Activation, ActivationFunction
from ..core.errors import ShapeMismatchError
from ..core.parameters import ParameterView
from ..core.types import Array, OutputInfo
from ..data.dataset import DataSet
from ..layers.base import Layer, as_output_info
from ..layers.fully_connected import FullyConnected
from .losses import REGISTRY as LOSS_REGISTRY
from .losses import Loss

logger = logging.getLogger(__name__)


class Net:
    """Totally ordered sequence of layers with a per-example loss.

    Layers are initialized as they are added, so each one sees the output
    shape of its predecessor. All parameters end up in :attr:`parameters`,
    which is what optimizers consume.
    """

    def __init__(
        self,
        input_dim: OutputInfo | int,
        loss: str | Loss = "mse",
        rng: np.random.Generator | None = None,
    ) -> None:
        self.input_info = as_output_info(input_dim)
        self.loss = loss if isinstance(loss, Loss) else LOSS_REGISTRY.get(loss)
        self.rng = rng if rng is not None else np.random.default_rng()
        self.parameters = ParameterView()
        self.layers: List[Layer] = []
        self._output_info = self.input_info

    @property
    def output_info(self) -> OutputInfo:
        return self._output_info

    def add_layer(self, layer: Layer) -> "Net":
        if layer.input_info.units != self._output_info.units:
            raise ShapeMismatchError(
                f"input of layer {len(self.layers)}",
                (self._output_info.units,),
                (layer.input_info.units,),
            )
        scope = self.parameters.scope(f"layer{len(self.layers)}")
        self._output_info = layer.initialize(scope)
        self.layers.append(layer)
        logger.debug("Added %r, network now has %d parameters", layer, self.parameters.size)
        return self

    def fully_connected(
        self,
        units: int,
        activation: ActivationFunction | Activation | str = ActivationFunction.LOGISTIC,
        std_dev: float = 0.05,
        bias: bool = True,
    ) -> "Net":
        layer = FullyConnected(
            self._output_info,
            units,
            bias=bias,
            activation=activation,
            std_dev=std_dev,
            rng=self.rng,
        )
        return self.add_layer(layer)

    def forward(self, x: Array) -> Array:
        """Propagate ``x`` through every layer; returns a borrowed view."""

        y = np.asarray(x)
        for layer in self.layers:
            y = layer.forward_propagate(y)
        return y

    def backward(self, error: Array) -> Array:
        e = np.asarray(error)
        for layer in reversed(self.layers):
            e = layer.backpropagate(e)
        return e

    def predict(self, x: Array) -> Array:
        return np.array(self.forward(x), copy=True)

    def error(self, x: Array, target: Array) -> float:
        loss, _ = self.loss(self.forward(x), np.asarray(target))
        return loss

    def gradient(self, x: Array, target: Array) -> float:
        """Run one forward/backward cycle; gradients land in :attr:`parameters`."""

        loss, delta = self.loss(self.forward(x), np.asarray(target))
        self.backward(delta)
        return loss

    def dataset_error(self, dataset: DataSet) -> float:
        if dataset.samples() == 0:
            return 0.0
        total = 0.0
        for i in range(dataset.samples()):
            total += self.error(dataset.get_instance(i), dataset.get_target(i))
        return total / dataset.samples()

    def describe(self) -> Sequence[int]:
        return [self.input_info.units] + [layer.output_info.units for layer in self.layers]


__all__ = ["Net"]
