"""Index-based views over a :class:`~annkit.data.dataset.DataSet`.

A view only stores indices into the referenced dataset, so splitting a
dataset into training and validation parts, or into cross-validation folds,
never copies sample data.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence

import numpy as np

from ..core.types import Array
from .dataset import DataSet


class DataSetView(DataSet):
    """Dataset whose sample ``i`` is sample ``indices[i]`` of another dataset."""

    def __init__(self, dataset: DataSet, indices: Iterable[int] = ()) -> None:
        self.dataset = dataset
        self.indices: List[int] = [int(i) for i in indices]
        for index in self.indices:
            if not 0 <= index < dataset.samples():
                raise IndexError(f"Index {index} out of range for {dataset.samples()} samples")

    def copy(self) -> "DataSetView":
        return DataSetView(self.dataset, self.indices)

    def samples(self) -> int:
        return len(self.indices)

    def inputs(self) -> int:
        return self.dataset.inputs()

    def outputs(self) -> int:
        return self.dataset.outputs()

    def get_instance(self, i: int) -> Array:
        return self.dataset.get_instance(self._resolve(i))

    def get_target(self, i: int) -> Array:
        return self.dataset.get_target(self._resolve(i))

    def finish_iteration(self, learner: object) -> None:
        self.dataset.finish_iteration(learner)

    def shuffle(self, rng: np.random.Generator | None = None) -> "DataSetView":
        """Shuffle the order of instances in place and return ``self``."""

        rng = rng if rng is not None else np.random.default_rng()
        order = rng.permutation(len(self.indices))
        self.indices = [self.indices[k] for k in order]
        return self

    def _resolve(self, i: int) -> int:
        if not 0 <= i < len(self.indices):
            raise IndexError(f"Sample index {i} out of range for view of {len(self.indices)}")
        return self.indices[i]

    def __repr__(self) -> str:
        return f"DataSetView(samples={self.samples()}, dataset={type(self.dataset).__name__})"


def _all_indices(
    dataset: DataSet, shuffling: bool, rng: np.random.Generator | None
) -> np.ndarray:
    indices = np.arange(dataset.samples())
    if shuffling:
        rng = rng if rng is not None else np.random.default_rng()
        rng.shuffle(indices)
    return indices


def split(
    dataset: DataSet,
    number_of_groups: int,
    shuffling: bool = True,
    rng: np.random.Generator | None = None,
) -> List[DataSetView]:
    """Split ``dataset`` into ``number_of_groups`` views.

    Every group receives ``samples // number_of_groups`` indices except
    the last, which takes whatever remains.
    """

    n = dataset.samples()
    if number_of_groups < 1:
        raise ValueError("number_of_groups must be >= 1")
    if number_of_groups > n:
        raise ValueError(f"Cannot split {n} samples into {number_of_groups} groups")

    indices = _all_indices(dataset, shuffling, rng)
    per_group = n // number_of_groups
    groups: List[DataSetView] = []
    for g in range(number_of_groups):
        start = g * per_group
        stop = n if g == number_of_groups - 1 else min(start + per_group, n)
        groups.append(DataSetView(dataset, indices[start:stop]))
    return groups


def split_ratio(
    dataset: DataSet,
    ratio: float = 0.5,
    shuffling: bool = True,
    rng: np.random.Generator | None = None,
) -> List[DataSetView]:
    """Split ``dataset`` into two views holding ``ratio`` and ``1 - ratio`` of it."""

    if not 0.0 <= ratio <= 1.0:
        raise ValueError("ratio must be in [0, 1]")
    n = dataset.samples()
    indices = _all_indices(dataset, shuffling, rng)
    head = int(np.floor(ratio * n + 0.5))
    return [DataSetView(dataset, indices[:head]), DataSetView(dataset, indices[head:])]


def merge(merging: DataSetView, groups: Sequence[DataSetView]) -> DataSetView:
    """Append the indices of every view in ``groups`` to ``merging``."""

    for group in groups:
        if group.dataset is not merging.dataset:
            raise ValueError("Cannot merge views that reference different datasets")
    for group in groups:
        merging.indices.extend(group.indices)
    return merging


__all__ = ["DataSetView", "merge", "split", "split_ratio"]
