"""Network container, losses, optimizer and gradient checking."""

from .gradcheck import GradientCheckResult, gradcheck, numerical_gradient
from .losses import REGISTRY as LOSS_REGISTRY
from .net import Net
from .optimizer import SGDOptimizer

__all__ = [
    "GradientCheckResult",
    "LOSS_REGISTRY",
    "Net",
    "SGDOptimizer",
    "gradcheck",
    "numerical_gradient",
]
