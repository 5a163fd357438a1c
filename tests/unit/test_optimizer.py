from __future__ import annotations

from typing import List, Sequence

import numpy as np
import pytest

from backpropnets.core.types import Sample
from backpropnets.training.optimizers import (
    StochasticGradientDescent,
    get_optimizer,
    iter_batches,
    shuffle_in_place,
)


class _RecordingTrainable:
    """Capture the batches and ratios handed over by the optimizer."""

    def __init__(self) -> None:
        self.batches: List[List[Sample]] = []
        self.ratios: List[tuple[float, float]] = []

    def update_parameters(self, batch: Sequence[Sample], lr_ratio: float, reg_ratio: float) -> None:
        self.batches.append(list(batch))
        self.ratios.append((lr_ratio, reg_ratio))


def _samples(n: int) -> List[Sample]:
    return [Sample.from_values([float(i)], [0.0]) for i in range(n)]


def _ids(batch: Sequence[Sample]) -> List[int]:
    return [int(sample.features[0]) for sample in batch]


@pytest.mark.parametrize("n, batch_size", [(10, 3), (12, 4), (7, 7), (5, 10)])
def test_sgd_processes_floor_n_over_b_disjoint_batches(n, batch_size):
    trainable = _RecordingTrainable()
    optimizer = StochasticGradientDescent()
    optimizer.initialize(np.random.default_rng(0), trainable)
    training = _samples(n)
    n_batches = n // batch_size

    optimizer.optimize(training, n_batches, batch_size, -0.1, -0.01)

    assert len(trainable.batches) == n_batches
    seen: List[int] = []
    for batch in trainable.batches:
        ids = _ids(batch)
        assert len(ids) == batch_size
        assert len(set(ids)) == batch_size
        seen.extend(ids)
    assert len(set(seen)) == len(seen)
    # the trailing remainder of the shuffled set is excluded
    excluded = _ids(training[n_batches * batch_size :])
    assert not set(excluded) & set(seen)
    assert len(excluded) == n % batch_size
    assert all(ratio == (-0.1, -0.01) for ratio in trainable.ratios)


def test_sgd_batches_are_contiguous_slices_of_the_shuffled_set():
    trainable = _RecordingTrainable()
    optimizer = StochasticGradientDescent()
    optimizer.initialize(np.random.default_rng(3), trainable)
    training = _samples(9)

    optimizer.optimize(training, 3, 3, -1.0, 0.0)

    assert [_ids(batch) for batch in trainable.batches] == [
        _ids(training[0:3]),
        _ids(training[3:6]),
        _ids(training[6:9]),
    ]


def test_shuffle_is_an_in_place_permutation():
    training = _samples(20)
    original = list(training)
    shuffle_in_place(training, np.random.default_rng(1))
    assert sorted(_ids(training)) == list(range(20))
    assert _ids(training) != _ids(original)


def test_shuffle_is_reproducible_for_equal_seeds():
    first, second = _samples(15), _samples(15)
    shuffle_in_place(first, np.random.default_rng(42))
    shuffle_in_place(second, np.random.default_rng(42))
    assert _ids(first) == _ids(second)


def test_iter_batches_ignores_remainder():
    batches = list(iter_batches(_samples(7), 2, 3))
    assert [_ids(batch) for batch in batches] == [[0, 1, 2], [3, 4, 5]]


def test_optimize_requires_initialisation():
    optimizer = get_optimizer("stochastic")
    assert not optimizer.is_initialized
    with pytest.raises(RuntimeError):
        optimizer.optimize(_samples(4), 1, 4, -0.1, 0.0)
