"""Core typing contracts for annkit."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Tuple

import numpy as np

Array = np.ndarray


@dataclass(frozen=True)
class OutputInfo:
    """Shape produced by a layer and consumed by the next one."""

    dimensions: Tuple[int, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "dimensions", tuple(int(d) for d in self.dimensions))

    @property
    def units(self) -> int:
        return int(np.prod(self.dimensions, dtype=np.int64)) if self.dimensions else 0

    @classmethod
    def of(cls, units: int) -> "OutputInfo":
        return cls(dimensions=(int(units),))


class LayerState(enum.Enum):
    """Propagation protocol state of a layer instance."""

    UNINITIALIZED = "uninitialized"
    READY = "ready"
    AWAITING_BACKWARD = "awaiting_backward"
