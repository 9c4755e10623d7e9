import numpy as np
import pytest

from annkit.data import ArrayDataSet, DataSetView, merge, split, split_ratio


def _dataset(n=10):
    inputs = np.arange(n * 2, dtype=np.float64).reshape(n, 2)
    targets = np.arange(n, dtype=np.float64).reshape(n, 1)
    return ArrayDataSet(inputs, targets)


def test_array_dataset_accessors():
    data = _dataset(4)
    assert (data.samples(), data.inputs(), data.outputs()) == (4, 2, 1)
    assert len(data) == 4
    assert np.array_equal(data.get_instance(2), [4.0, 5.0])
    assert np.array_equal(data.get_target(3), [3.0])
    with pytest.raises(IndexError):
        data.get_instance(4)


def test_array_dataset_rejects_mismatched_samples():
    with pytest.raises(ValueError):
        ArrayDataSet(np.zeros((3, 2)), np.zeros((2, 1)))


def test_view_indirects_through_indices():
    data = _dataset()
    view = DataSetView(data, [7, 2])
    assert view.samples() == 2
    assert view.inputs() == 2 and view.outputs() == 1
    assert np.array_equal(view.get_target(0), [7.0])
    assert np.array_equal(view.get_instance(1), data.get_instance(2))
    with pytest.raises(IndexError):
        view.get_target(2)
    with pytest.raises(IndexError):
        DataSetView(data, [10])


def test_shuffle_permutes_in_place():
    view = DataSetView(_dataset(), range(10))
    result = view.shuffle(np.random.default_rng(0))
    assert result is view
    assert sorted(view.indices) == list(range(10))


def test_copy_is_independent():
    view = DataSetView(_dataset(), [1, 2, 3])
    clone = view.copy()
    clone.indices.append(4)
    assert view.samples() == 3
    assert clone.dataset is view.dataset


@pytest.mark.parametrize("groups", [1, 2, 3, 4, 10])
def test_split_covers_every_sample_once(groups):
    data = _dataset(10)
    views = split(data, groups, rng=np.random.default_rng(1))
    assert len(views) == groups
    collected = [i for view in views for i in view.indices]
    assert sorted(collected) == list(range(10))


def test_split_without_shuffling_is_sequential():
    views = split(_dataset(10), 3, shuffling=False)
    assert [v.indices for v in views] == [[0, 1, 2], [3, 4, 5], [6, 7, 8, 9]]


@pytest.mark.parametrize(
    "n,groups,sizes",
    [
        (9, 6, [1, 1, 1, 1, 1, 4]),
        (10, 4, [2, 2, 2, 4]),
        (15, 10, [1] * 9 + [6]),
    ],
)
def test_split_gives_remainder_to_last_group(n, groups, sizes):
    views = split(_dataset(n), groups, shuffling=False)
    assert [v.samples() for v in views] == sizes


class _CountingDataSet(ArrayDataSet):
    def __init__(self):
        super().__init__(np.zeros((3, 1)), np.zeros((3, 1)))
        self.finished = []

    def finish_iteration(self, learner):
        self.finished.append(learner)


def test_finish_iteration_reaches_wrapped_dataset():
    data = _CountingDataSet()
    head, _ = split_ratio(data, 0.5, shuffling=False)
    learner = object()
    head.finish_iteration(learner)
    assert data.finished == [learner]
    ArrayDataSet(np.zeros((1, 1)), np.zeros((1, 1))).finish_iteration(learner)


def test_split_rejects_bad_group_counts():
    with pytest.raises(ValueError):
        split(_dataset(3), 0)
    with pytest.raises(ValueError):
        split(_dataset(3), 4)


def test_split_ratio_sizes():
    head, tail = split_ratio(_dataset(10), 0.7, rng=np.random.default_rng(2))
    assert head.samples() == 7
    assert tail.samples() == 3
    assert sorted(head.indices + tail.indices) == list(range(10))
    with pytest.raises(ValueError):
        split_ratio(_dataset(10), 1.5)


def test_merge_reassembles_cross_validation_folds():
    data = _dataset(9)
    folds = split(data, 3, shuffling=False)
    training = DataSetView(data)
    merge(training, [folds[0], folds[2]])
    assert training.indices == [0, 1, 2, 6, 7, 8]


def test_merge_rejects_foreign_views():
    first = DataSetView(_dataset(4), [0])
    other = DataSetView(_dataset(4), [1])
    with pytest.raises(ValueError):
        merge(first, [other])
    assert first.indices == [0]
