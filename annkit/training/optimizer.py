"""Optimizers working through a :class:`~annkit.core.parameters.ParameterView`."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

import numpy as np

from ..core.parameters import ParameterView
from ..core.types import Array


@dataclass
class SGDOptimizer:
    """Mini-batch SGD with optional momentum.

    Layers overwrite their gradients on every backward pass, so batching
    happens here: call :meth:`accumulate` after each example and :meth:`step`
    once per batch. Without accumulated gradients, :meth:`step` uses the
    gradients of the last backward pass.
    """

    parameters: ParameterView
    lr: float
    momentum: float = 0.0
    _sums: Dict[str, Array] = field(default_factory=dict, init=False, repr=False)
    _velocity: Dict[str, Array] = field(default_factory=dict, init=False, repr=False)
    _count: int = field(default=0, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.lr <= 0:
            raise ValueError("lr must be positive")
        if not 0.0 <= self.momentum < 1.0:
            raise ValueError("momentum must be in [0, 1)")

    @property
    def accumulated(self) -> int:
        return self._count

    def accumulate(self) -> None:
        for name, slot in self.parameters.items():
            total = self._sums.get(name)
            if total is None:
                self._sums[name] = np.array(slot.grad, dtype=np.float64, copy=True)
            else:
                total += slot.grad
        self._count += 1

    def step(self) -> None:
        for name, slot in self.parameters.items():
            if self._count:
                grad = self._sums[name] / self._count
            else:
                grad = slot.grad
            if self.momentum:
                velocity = self._velocity.setdefault(name, np.zeros_like(slot.value))
                velocity *= self.momentum
                velocity -= self.lr * grad
                slot.value[...] += velocity
            else:
                slot.value[...] -= self.lr * grad
        self.reset()

    def reset(self) -> None:
        self._sums.clear()
        self._count = 0


__all__ = ["SGDOptimizer"]
