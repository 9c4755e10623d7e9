"""Parameter registration shared between layers and optimizers.

Layers hand their learnable arrays to a :class:`ParameterView` once, during
``initialize``.  The view never copies: every slot references the layer's own
``value`` and ``grad`` arrays, so an optimizer that updates ``slot.value`` in
place updates the layer, and reading ``slot.grad`` after ``backpropagate``
sees the gradient the layer just wrote.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, Mapping

import numpy as np

from .types import Array


@dataclass(frozen=True)
class ParameterSlot:
    """A learnable array paired with its gradient accumulator."""

    name: str
    value: Array
    grad: Array

    @property
    def size(self) -> int:
        return int(self.value.size)


class ParameterView(Mapping[str, ParameterSlot]):
    """Append-only, ordered mapping from parameter id to :class:`ParameterSlot`."""

    def __init__(self, *, _slots: Dict[str, ParameterSlot] | None = None, _prefix: str = "") -> None:
        self._slots: Dict[str, ParameterSlot] = {} if _slots is None else _slots
        self._prefix = _prefix

    def scope(self, prefix: str) -> "ParameterView":
        """Return a view registering into the same storage under ``prefix``."""

        return ParameterView(_slots=self._slots, _prefix=self._qualify(prefix))

    def register(self, name: str, value: Array, grad: Array) -> ParameterSlot:
        key = self._qualify(name)
        if key in self._slots:
            raise KeyError(f"Parameter {key!r} is already registered")
        if value.shape != grad.shape:
            raise ValueError(
                f"Parameter {key!r} has shape {value.shape} but its gradient has {grad.shape}"
            )
        slot = ParameterSlot(name=key, value=value, grad=grad)
        self._slots[key] = slot
        return slot

    def __getitem__(self, key: str) -> ParameterSlot:
        return self._slots[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._slots)

    def __len__(self) -> int:
        return len(self._slots)

    @property
    def size(self) -> int:
        """Number of learnable scalars across all slots."""

        return int(sum(slot.size for slot in self._slots.values()))

    def values_vector(self) -> Array:
        return self._flatten(slot.value for slot in self._slots.values())

    def gradient_vector(self) -> Array:
        return self._flatten(slot.grad for slot in self._slots.values())

    def assign(self, vector: Array) -> None:
        """Write a flat parameter vector back into every slot, in place."""

        vector = np.asarray(vector, dtype=np.float64).reshape(-1)
        if vector.size != self.size:
            raise ValueError(f"Expected {self.size} parameters, got {vector.size}")
        offset = 0
        for slot in self._slots.values():
            slot.value[...] = vector[offset : offset + slot.size].reshape(slot.value.shape)
            offset += slot.size

    def _qualify(self, name: str) -> str:
        return f"{self._prefix}.{name}" if self._prefix else name

    @staticmethod
    def _flatten(arrays) -> Array:
        parts = [np.asarray(a, dtype=np.float64).reshape(-1) for a in arrays]
        if not parts:
            return np.zeros(0, dtype=np.float64)
        return np.concatenate(parts)


__all__ = ["ParameterSlot", "ParameterView"]
