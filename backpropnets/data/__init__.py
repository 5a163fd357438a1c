"""Dataset loading for backpropnets."""

from .csv_reader import read_labeled_csv
from .registry import DatasetSpec, available_datasets, get_dataset, register_dataset
from .synthetic import gaussian_blobs, xor_samples

__all__ = [
    "DatasetSpec",
    "available_datasets",
    "gaussian_blobs",
    "get_dataset",
    "read_labeled_csv",
    "register_dataset",
    "xor_samples",
]
