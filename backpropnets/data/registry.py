"""Dataset registry and metadata contracts."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, MutableMapping

from ..core.exceptions import UnknownNameError
from ..core.types import Dataset
from .csv_reader import DEFAULT_NORMALIZE_FACTOR, read_labeled_csv
from .synthetic import gaussian_blobs, xor_samples


@dataclass
class DatasetSpec:
    """Training, evaluation and testing samples plus their shape.

    Attributes
    ----------
    input_size:
        Length of every feature vector.
    output_size:
        Length of every training label vector.
    provenance:
        Free-form description of where the samples came from, written to the
        run manifest.
    """

    name: str
    training: Dataset
    evaluation: Dataset
    testing: Dataset
    input_size: int
    output_size: int
    provenance: Dict[str, Any] = field(default_factory=dict)

    @property
    def sizes(self) -> Dict[str, int]:
        return {
            "training": len(self.training),
            "evaluation": len(self.evaluation),
            "testing": len(self.testing),
        }


DatasetFactory = Callable[..., DatasetSpec]


_REGISTRY: MutableMapping[str, DatasetFactory] = {}


def register_dataset(
    name: str | None = None,
    factory: DatasetFactory | None = None,
) -> Callable[[DatasetFactory], DatasetFactory] | DatasetFactory:
    """Register a dataset factory.

    ``register_dataset`` can be used both as a decorator::

        @register_dataset("xor")
        def make_xor(**kwargs):
            ...

    or directly::

        register_dataset("xor", make_xor)
    """

    def _decorator(func: DatasetFactory) -> DatasetFactory:
        _REGISTRY[str(name or func.__name__)] = func
        return func

    if factory is not None:
        return _decorator(factory)
    if name is None:
        raise TypeError("register_dataset requires a name when used without a decorator")
    return _decorator


def get_dataset(name: str, /, **options: Any) -> DatasetSpec:
    """Return the :class:`DatasetSpec` built by the factory registered as ``name``."""

    if name not in _REGISTRY:
        raise UnknownNameError(f"unknown dataset name {name!r}")
    spec = _REGISTRY[name](**options)
    _validate_spec(spec)
    return spec


def available_datasets() -> Iterable[str]:
    """Return the sorted list of available dataset identifiers."""

    return sorted(_REGISTRY)


def _validate_spec(spec: DatasetSpec) -> None:
    if not spec.training:
        raise ValueError(f"Dataset {spec.name!r} has no training samples")
    for split, samples in (
        ("training", spec.training),
        ("evaluation", spec.evaluation),
        ("testing", spec.testing),
    ):
        for sample in samples:
            if sample.features.size != spec.input_size:
                raise ValueError(
                    f"Dataset {spec.name!r} {split} sample has {sample.features.size} "
                    f"features, expected {spec.input_size}"
                )


@register_dataset("xor")
def load_xor() -> DatasetSpec:
    """XOR truth table, reused for training, evaluation and testing."""

    return DatasetSpec(
        name="xor",
        training=xor_samples(),
        evaluation=xor_samples(),
        testing=xor_samples(),
        input_size=2,
        output_size=1,
        provenance={"source": "xor truth table"},
    )


@register_dataset("blobs")
def load_blobs(
    *,
    n_samples: int = 300,
    n_features: int = 2,
    centers: int = 3,
    cluster_std: float = 0.6,
    seed: int = 0,
    evaluation_split: float = 0.2,
    testing_split: float = 0.2,
) -> DatasetSpec:
    training, evaluation, testing = gaussian_blobs(
        n_samples,
        n_features=n_features,
        centers=centers,
        cluster_std=cluster_std,
        seed=seed,
        evaluation_split=evaluation_split,
        testing_split=testing_split,
    )
    return DatasetSpec(
        name="blobs",
        training=training,
        evaluation=evaluation,
        testing=testing,
        input_size=n_features,
        output_size=centers,
        provenance={
            "source": "sklearn.datasets.make_blobs",
            "n_samples": n_samples,
            "centers": centers,
            "cluster_std": cluster_std,
            "seed": seed,
        },
    )


@register_dataset("csv")
def load_csv_folder(
    *,
    folder: str | Path,
    split_index: int = 784,
    normalize_factor: float = DEFAULT_NORMALIZE_FACTOR,
    one_hot_classes: int | None = 10,
    training_file: str = "Training.csv",
    evaluation_file: str = "Validation.csv",
    testing_file: str = "Testing.csv",
) -> DatasetSpec:
    """Three header-less CSV files under ``folder`` (MNIST layout by default)."""

    folder = Path(folder)

    def _read(filename: str) -> Dataset:
        return read_labeled_csv(
            folder / filename,
            split_index,
            normalize_factor=normalize_factor,
            one_hot_classes=one_hot_classes,
        )

    training = _read(training_file)
    return DatasetSpec(
        name="csv",
        training=training,
        evaluation=_read(evaluation_file),
        testing=_read(testing_file),
        input_size=split_index,
        output_size=int(training[0].label.size) if training else 0,
        provenance={
            "folder": str(folder),
            "split_index": split_index,
            "normalize_factor": normalize_factor,
            "one_hot_classes": one_hot_classes,
            "files": [training_file, evaluation_file, testing_file],
        },
    )


__all__ = [
    "DatasetSpec",
    "available_datasets",
    "get_dataset",
    "load_blobs",
    "load_csv_folder",
    "load_xor",
    "register_dataset",
]
