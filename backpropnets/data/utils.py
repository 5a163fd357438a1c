"""Utility helpers for dataset loaders."""

from __future__ import annotations

from typing import Tuple

import numpy as np
from sklearn.model_selection import train_test_split

from ..core.types import Dataset, Sample


def to_samples(features: np.ndarray, labels: np.ndarray) -> Dataset:
    """Pair up rows of ``features`` and ``labels`` as :class:`Sample` objects."""

    return [
        Sample(
            features=np.asarray(x, dtype=np.float64).reshape(-1),
            label=np.asarray(y, dtype=np.float64).reshape(-1),
        )
        for x, y in zip(features, labels)
    ]


def split_samples(
    features: np.ndarray,
    labels: np.ndarray,
    *,
    evaluation_split: float = 0.1,
    testing_split: float = 0.2,
    seed: int = 0,
) -> Tuple[Dataset, Dataset, Dataset]:
    """Shuffle and partition rows into training, evaluation and testing samples.

    Split sizes are ``round(n * fraction)``; the same ``seed`` always yields
    the same partition.
    """

    if evaluation_split < 0 or testing_split < 0 or evaluation_split + testing_split >= 1:
        raise ValueError(
            "evaluation_split and testing_split must be non-negative and sum to less than 1"
        )
    n_samples = len(features)
    testing_size = int(round(n_samples * testing_split))
    evaluation_size = int(round(n_samples * evaluation_split))
    if n_samples - testing_size - evaluation_size <= 0:
        raise ValueError(f"{n_samples} samples are not enough for the requested splits")

    rest_x, rest_y, test_x, test_y = _hold_out(features, labels, testing_size, seed)
    train_x, train_y, eval_x, eval_y = _hold_out(rest_x, rest_y, evaluation_size, seed)
    return (
        to_samples(train_x, train_y),
        to_samples(eval_x, eval_y),
        to_samples(test_x, test_y),
    )


def _hold_out(features: np.ndarray, labels: np.ndarray, size: int, seed: int):
    if size == 0:
        return features, labels, features[:0], labels[:0]
    kept_x, held_x, kept_y, held_y = train_test_split(
        features, labels, test_size=size, random_state=seed
    )
    return kept_x, kept_y, held_x, held_y


__all__ = ["split_samples", "to_samples"]
