"""Core typing contracts for backpropnets."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Protocol, Sequence, Tuple

import numpy as np

Array = np.ndarray

# Draws an array of standard normal samples with the requested shape.
ParameterGenerator = Callable[[Tuple[int, ...]], Array]


@dataclass(frozen=True)
class Sample:
    """A single labeled example: feature vector and label vector."""

    features: Array
    label: Array

    @classmethod
    def from_values(cls, features: Sequence[float], label: Sequence[float]) -> "Sample":
        return cls(
            features=np.asarray(features, dtype=np.float64).reshape(-1),
            label=np.asarray(label, dtype=np.float64).reshape(-1),
        )


Dataset = List[Sample]


class Trainable(Protocol):
    """Capability the optimizer drives once per batch."""

    def update_parameters(
        self, batch: Sequence[Sample], lr_ratio: float, reg_ratio: float
    ) -> None:
        """Accumulate the batch gradients and apply one parameter update."""


@dataclass(frozen=True)
class EpochMetrics:
    """Figures recorded at the end of a training epoch."""

    epoch: int
    training_cost: float
    training_correct: int
    training_total: int
    evaluation_cost: float
    evaluation_correct: int
    evaluation_total: int

    @property
    def training_accuracy(self) -> float:
        return _ratio(self.training_correct, self.training_total)

    @property
    def evaluation_accuracy(self) -> float:
        return _ratio(self.evaluation_correct, self.evaluation_total)

    def as_dict(self) -> Dict[str, float]:
        return {
            "training_cost": float(self.training_cost),
            "training_accuracy": self.training_accuracy,
            "training_correct": float(self.training_correct),
            "evaluation_cost": float(self.evaluation_cost),
            "evaluation_accuracy": self.evaluation_accuracy,
            "evaluation_correct": float(self.evaluation_correct),
        }


def _ratio(correct: int, total: int) -> float:
    if total == 0:
        return float("nan")
    return correct / total


@dataclass(frozen=True)
class RunResult:
    """Summary returned by :func:`backpropnets.training.pipelines.run_pipeline`."""

    epochs: int
    metrics_path: str
    manifest_path: str
    network_path: str = ""
    testing_accuracy: float = float("nan")
    history: Dict[str, List[float]] = field(default_factory=dict)
