"""Dataset boundary consumed by networks."""

from __future__ import annotations

import abc

import numpy as np

from ..core.types import Array


class DataSet(abc.ABC):
    """Indexed collection of ``(instance, target)`` vector pairs."""

    @abc.abstractmethod
    def samples(self) -> int:
        """Number of instances."""

    @abc.abstractmethod
    def inputs(self) -> int:
        """Dimensionality of an instance."""

    @abc.abstractmethod
    def outputs(self) -> int:
        """Dimensionality of a target."""

    @abc.abstractmethod
    def get_instance(self, i: int) -> Array:
        ...

    @abc.abstractmethod
    def get_target(self, i: int) -> Array:
        ...

    def finish_iteration(self, learner: object) -> None:
        """Called by a training loop after each pass over the data."""

    def __len__(self) -> int:
        return self.samples()


class ArrayDataSet(DataSet):
    """In-memory dataset storing one sample per row."""

    def __init__(self, inputs: Array, targets: Array) -> None:
        inputs = np.atleast_2d(np.asarray(inputs, dtype=np.float64))
        targets = np.atleast_2d(np.asarray(targets, dtype=np.float64))
        if inputs.ndim != 2 or targets.ndim != 2:
            raise ValueError("inputs and targets must be 2-D (samples, features)")
        if inputs.shape[0] != targets.shape[0]:
            raise ValueError(
                f"inputs have {inputs.shape[0]} samples but targets have {targets.shape[0]}"
            )
        self._inputs = inputs
        self._targets = targets

    def samples(self) -> int:
        return int(self._inputs.shape[0])

    def inputs(self) -> int:
        return int(self._inputs.shape[1])

    def outputs(self) -> int:
        return int(self._targets.shape[1])

    def get_instance(self, i: int) -> Array:
        return self._inputs[self._check_index(i)]

    def get_target(self, i: int) -> Array:
        return self._targets[self._check_index(i)]

    def _check_index(self, i: int) -> int:
        if not 0 <= i < self.samples():
            raise IndexError(f"Sample index {i} out of range for {self.samples()} samples")
        return i


__all__ = ["ArrayDataSet", "DataSet"]
