"""Activation functions for backpropnets."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum

import numpy as np

from .exceptions import UnimplementedError
from .registry import Registry
from .types import Array


class ActivationKind(str, Enum):
    LOGISTIC = "logistic"
    SOFTMAX = "softmax"


class ActivationFunction(ABC):
    """Stateless nonlinearity applied to a layer's weighted input."""

    name: str = ""

    @abstractmethod
    def calculate(self, z: Array) -> Array:
        """Return the activation of the weighted input ``z``."""

    @abstractmethod
    def calculate_derivative(self, z: Array) -> Array:
        """Return the derivative used by backpropagation."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class Logistic(ActivationFunction):
    """Sigmoid ``1 / (1 + exp(-z))``."""

    name = ActivationKind.LOGISTIC.value

    def calculate(self, z: Array) -> Array:
        # exp overflow yields inf and a correct 0.0 activation
        with np.errstate(over="ignore"):
            return 1.0 / (1.0 + np.exp(-z))

    def calculate_derivative(self, z: Array) -> Array:
        f = self.calculate(z)
        return f * (1.0 - f)


class Softmax(ActivationFunction):
    """Normalised exponential over the whole vector.

    The exponentials are not shifted by ``max(z)``, so large logits overflow
    and produce NaN. Only usable where no derivative is needed.
    """

    name = ActivationKind.SOFTMAX.value

    def calculate(self, z: Array) -> Array:
        z_exp = np.exp(z)
        return z_exp / z_exp.sum()

    def calculate_derivative(self, z: Array) -> Array:
        raise UnimplementedError("Softmax.calculate_derivative is not implemented")


ACTIVATIONS: Registry[ActivationKind, ActivationFunction] = Registry(
    "activation function", ActivationKind, shared=True
)
ACTIVATIONS.register(ActivationKind.LOGISTIC, Logistic)
ACTIVATIONS.register(ActivationKind.SOFTMAX, Softmax)


def get_activation(name: str | ActivationKind) -> ActivationFunction:
    """Return the shared activation instance for ``name``."""

    return ACTIVATIONS.create(name)


__all__ = [
    "ACTIVATIONS",
    "ActivationFunction",
    "ActivationKind",
    "Logistic",
    "Softmax",
    "get_activation",
]
