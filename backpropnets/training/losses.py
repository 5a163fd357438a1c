"""Cost functions consumed by the training loop."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum

import numpy as np

from ..core.registry import Registry
from ..core.types import Array


class CostKind(str, Enum):
    QUADRATIC = "quadratic"
    CROSSENTROPY = "crossentropy"


class CostFunction(ABC):
    """Scalar cost of one prediction and its gradient w.r.t. the prediction."""

    name: str = ""

    @abstractmethod
    def calculate(self, predicted: Array, target: Array) -> float:
        """Return the cost of ``predicted`` against ``target``."""

    @abstractmethod
    def calculate_derivative(self, predicted: Array, target: Array) -> Array:
        """Return ``d cost / d predicted``, the seed of backpropagation."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class Quadratic(CostFunction):
    name = CostKind.QUADRATIC.value

    def calculate(self, predicted: Array, target: Array) -> float:
        diff = target - predicted
        return float(0.5 * np.dot(diff, diff))

    def calculate_derivative(self, predicted: Array, target: Array) -> Array:
        return predicted - target


class CrossEntropy(CostFunction):
    """Binary cross entropy summed over the output neurons.

    Terms that evaluate to a non-finite value (``predicted`` at exactly 0 or
    1) count as 0. The derivative is left unclamped and yields inf/NaN at
    saturated outputs.
    """

    name = CostKind.CROSSENTROPY.value

    def calculate(self, predicted: Array, target: Array) -> float:
        with np.errstate(divide="ignore", invalid="ignore"):
            terms = -target * np.log(predicted) - (1.0 - target) * np.log(1.0 - predicted)
        terms = np.where(np.isfinite(terms), terms, 0.0)
        return float(terms.sum())

    def calculate_derivative(self, predicted: Array, target: Array) -> Array:
        with np.errstate(divide="ignore", invalid="ignore"):
            return (predicted - target) / (predicted * (1.0 - predicted))


COSTS: Registry[CostKind, CostFunction] = Registry("cost function", CostKind, shared=True)
COSTS.register(CostKind.QUADRATIC, Quadratic)
COSTS.register(CostKind.CROSSENTROPY, CrossEntropy)


def get_cost(name: str | CostKind) -> CostFunction:
    """Return the shared cost function instance for ``name``."""

    return COSTS.create(name)


__all__ = ["COSTS", "CostFunction", "CostKind", "CrossEntropy", "Quadratic", "get_cost"]
