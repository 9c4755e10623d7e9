"""Finite-difference verification of backpropagated gradients."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from ..core.types import Array
from .net import Net


@dataclass(frozen=True)
class GradientCheckResult:
    analytic: Array
    numeric: Array
    max_abs_error: float
    atol: float

    @property
    def passed(self) -> bool:
        return self.max_abs_error <= self.atol


def numerical_gradient(net: Net, x: Array, target: Array, eps: float = 1e-6) -> Array:
    """Central differences of ``net.error`` with respect to every parameter.

    Parameters are restored before returning.
    """

    original = net.parameters.values_vector()
    grad = np.zeros_like(original)
    probe = original.copy()
    try:
        for k in range(original.size):
            probe[k] = original[k] + eps
            net.parameters.assign(probe)
            plus = net.error(x, target)
            probe[k] = original[k] - eps
            net.parameters.assign(probe)
            minus = net.error(x, target)
            probe[k] = original[k]
            grad[k] = (plus - minus) / (2.0 * eps)
    finally:
        net.parameters.assign(original)
    return grad


def gradcheck(
    net: Net,
    x: Array,
    target: Array,
    eps: float = 1e-6,
    atol: float = 1e-4,
) -> GradientCheckResult:
    net.gradient(x, target)
    analytic = net.parameters.gradient_vector()
    numeric = numerical_gradient(net, x, target, eps=eps)
    max_abs_error = float(np.max(np.abs(analytic - numeric))) if analytic.size else 0.0
    return GradientCheckResult(
        analytic=analytic,
        numeric=numeric,
        max_abs_error=max_abs_error,
        atol=atol,
    )


__all__ = ["GradientCheckResult", "gradcheck", "numerical_gradient"]
