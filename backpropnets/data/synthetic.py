"""Small in-memory datasets for smoke runs and tests."""

from __future__ import annotations

import numpy as np
from sklearn.datasets import make_blobs

from ..core.types import Dataset
from .utils import split_samples, to_samples

XOR_FEATURES = np.array([[0.0, 0.0], [0.0, 1.0], [1.0, 0.0], [1.0, 1.0]])
XOR_LABELS = np.array([[0.0], [1.0], [1.0], [0.0]])


def xor_samples() -> Dataset:
    """The four XOR samples with a single 0/1 label each."""

    return to_samples(XOR_FEATURES, XOR_LABELS)


def gaussian_blobs(
    n_samples: int = 300,
    *,
    n_features: int = 2,
    centers: int = 3,
    cluster_std: float = 0.6,
    seed: int = 0,
    evaluation_split: float = 0.2,
    testing_split: float = 0.2,
) -> tuple[Dataset, Dataset, Dataset]:
    """Return one-hot labeled training/evaluation/testing sets of Gaussian clusters."""

    features, classes = make_blobs(
        n_samples=n_samples,
        n_features=n_features,
        centers=centers,
        cluster_std=cluster_std,
        random_state=seed,
    )
    # Logistic units saturate quickly on raw blob coordinates.
    span = np.abs(features).max()
    features = features / (span if span > 0 else 1.0)
    labels = np.eye(centers, dtype=np.float64)[classes]

    return split_samples(
        features,
        labels,
        evaluation_split=evaluation_split,
        testing_split=testing_split,
        seed=seed,
    )


__all__ = ["XOR_FEATURES", "XOR_LABELS", "gaussian_blobs", "xor_samples"]
