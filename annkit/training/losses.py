"""Per-example loss registry used by :class:`~annkit.training.net.Net`.

Every loss works on a single output vector and returns both the scalar loss
and ``dL/dy``; the gradient is the exact derivative of the returned loss so
finite-difference checks agree with backpropagation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable

import numpy as np

from ..core.activations import logistic
from ..core.types import Array

LossFn = Callable[[Array, Array], tuple[float, Array]]


@dataclass(frozen=True)
class Loss:
    """Loss wrapper returning both the scalar loss and dL/dy."""

    name: str
    fn: LossFn

    def __call__(self, predictions: Array, targets: Array) -> tuple[float, Array]:
        return self.fn(predictions, targets)


class LossRegistry:
    """Central registry for loss functions."""

    def __init__(self) -> None:
        self._registry: Dict[str, Loss] = {}

    def register(self, name: str, fn: LossFn) -> None:
        self._registry[name] = Loss(name, fn)

    def get(self, name: str) -> Loss:
        try:
            return self._registry[name]
        except KeyError as exc:
            available = ", ".join(sorted(self._registry))
            raise KeyError(f"Unknown loss {name!r}. Available losses: {available}") from exc

    def names(self) -> Iterable[str]:
        return sorted(self._registry)


REGISTRY = LossRegistry()


def _mse(pred: Array, target: Array) -> tuple[float, Array]:
    diff = pred - target
    return float(0.5 * np.sum(np.square(diff))), diff


def _mae(pred: Array, target: Array) -> tuple[float, Array]:
    diff = pred - target
    return float(np.sum(np.abs(diff))), np.sign(diff)


def _huber(pred: Array, target: Array, delta: float = 1.0) -> tuple[float, Array]:
    diff = pred - target
    abs_diff = np.abs(diff)
    quadratic = np.minimum(abs_diff, delta)
    linear = abs_diff - quadratic
    loss = float(np.sum(0.5 * quadratic**2 + delta * linear))
    grad = np.where(abs_diff <= delta, diff, delta * np.sign(diff))
    return loss, grad


def _softmax(logits: Array) -> Array:
    shifted = logits - np.max(logits)
    exp = np.exp(shifted)
    return exp / np.sum(exp)


def _cross_entropy(logits: Array, target: Array) -> tuple[float, Array]:
    probs = _softmax(logits)
    eps = 1e-12
    loss = float(-np.sum(target * np.log(probs + eps)))
    grad = probs * np.sum(target) - target
    return loss, grad


def _bce_with_logits(logits: Array, target: Array) -> tuple[float, Array]:
    # log(1 + exp(-|z|)) formulation avoids overflow for large logits
    loss = float(np.sum(np.maximum(logits, 0.0) - logits * target + np.log1p(np.exp(-np.abs(logits)))))
    grad = logistic(logits) - target
    return loss, grad


REGISTRY.register("mse", _mse)
REGISTRY.register("mae", _mae)
REGISTRY.register("huber", _huber)
REGISTRY.register("ce", _cross_entropy)
REGISTRY.register("bce", _bce_with_logits)

__all__ = ["Loss", "LossRegistry", "REGISTRY"]
