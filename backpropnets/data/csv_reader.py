"""Header-less CSV loader producing labeled samples."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pandas as pd
from sklearn.preprocessing import LabelEncoder

from ..core.exceptions import ResourceUnavailableError
from ..core.types import Dataset, Sample

DEFAULT_NORMALIZE_FACTOR = 255.0


def _read_frame(path: Path) -> pd.DataFrame:
    try:
        return pd.read_csv(path, header=None, skipinitialspace=True)
    except (OSError, pd.errors.EmptyDataError) as exc:
        raise ResourceUnavailableError(f"unable to read CSV file {path}") from exc


def read_labeled_csv(
    path: str | Path,
    split_index: int,
    *,
    normalize_factor: float = DEFAULT_NORMALIZE_FACTOR,
    one_hot_classes: int | None = None,
) -> Dataset:
    """Read ``path`` into samples split at column ``split_index``.

    Columns before ``split_index`` are features divided by
    ``normalize_factor``; the remaining columns are the label, left as-is.
    With ``one_hot_classes`` a single label column is encoded into one-hot
    vectors of that length.
    """

    path = Path(path)
    frame = _read_frame(path)
    if not 0 < split_index < frame.shape[1]:
        raise ValueError(
            f"split_index {split_index} must fall inside the {frame.shape[1]} CSV columns"
        )
    features = frame.iloc[:, :split_index].to_numpy(dtype=np.float64) / normalize_factor
    labels = frame.iloc[:, split_index:].to_numpy(dtype=np.float64)

    if one_hot_classes is not None:
        labels = _one_hot(labels, one_hot_classes)

    return [Sample(features=x.copy(), label=y.copy()) for x, y in zip(features, labels)]


def _one_hot(labels: np.ndarray, num_classes: int) -> np.ndarray:
    if labels.shape[1] != 1:
        raise ValueError("one-hot encoding needs exactly one label column")
    encoder = LabelEncoder()
    encoder.fit(np.arange(num_classes))
    indices = encoder.transform(labels[:, 0].astype(int))
    return np.eye(num_classes, dtype=np.float64)[indices]


__all__ = ["DEFAULT_NORMALIZE_FACTOR", "read_labeled_csv"]
