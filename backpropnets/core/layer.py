"""Fully connected layer with its own forward and backward step."""

from __future__ import annotations

import numpy as np

from .activations import ActivationFunction
from .types import Array, ParameterGenerator


class Layer:
    """One dense layer: ``a = f(W x + b)``.

    ``weight`` has shape ``(size, previous_size)`` where ``previous_size`` is
    the neuron count of the layer below (or the network input size).
    """

    def __init__(self, size: int, activation: ActivationFunction) -> None:
        if size <= 0:
            raise ValueError(f"Layer size must be positive, got {size}")
        self._size = int(size)
        self.activation = activation
        self.bias: Array | None = None
        self.weight: Array | None = None

    @property
    def size(self) -> int:
        return self._size

    @property
    def previous_size(self) -> int:
        if self.weight is None:
            raise RuntimeError("Layer parameters have not been initialised")
        return int(self.weight.shape[1])

    @property
    def is_initialized(self) -> bool:
        return self.bias is not None and self.weight is not None

    def initialize(self, previous_size: int, generator: ParameterGenerator) -> None:
        """Draw random parameters; weights are scaled by ``1/sqrt(previous_size)``."""

        self.bias = np.asarray(generator((self._size,)), dtype=np.float64)
        weight = np.asarray(generator((self._size, previous_size)), dtype=np.float64)
        self.weight = weight / np.sqrt(previous_size)

    def restore(self, bias: Array, weight: Array) -> None:
        """Assign persisted parameters as-is; shapes are the caller's concern."""

        self.bias = np.array(bias, dtype=np.float64)
        self.weight = np.array(weight, dtype=np.float64)

    def get_parameters(self) -> tuple[Array, Array, ActivationFunction]:
        return self.bias, self.weight, self.activation

    def feed_forward(self, x: Array) -> Array:
        return self.activation.calculate(self.weight @ x + self.bias)

    def feed_forward_with_z(self, x: Array) -> tuple[Array, Array]:
        """Forward step that also returns the weighted input ``z``."""

        z = self.weight @ x + self.bias
        return self.activation.calculate(z), z

    def feed_backward(
        self, delta_next: Array, a_prev: Array, z: Array
    ) -> tuple[Array, Array, Array]:
        """Chain-rule step of backpropagation.

        Parameters
        ----------
        delta_next:
            Error signal arriving from the layer above (or the cost derivative
            for the output layer).
        a_prev:
            Activation of the layer below (the network input for layer 0).
        z:
            This layer's weighted input from the forward pass.

        Returns
        -------
        ``(grad_bias, grad_weight, delta_prev)`` where ``delta_prev`` is the
        error signal for the layer below.
        """

        delta = delta_next * self.activation.calculate_derivative(z)
        grad_weight = np.outer(delta, a_prev)
        delta_prev = self.weight.T @ delta
        return delta, grad_weight, delta_prev

    def update_bias_weight(
        self,
        grad_bias: Array,
        grad_weight: Array,
        lr_ratio: float,
        reg_ratio: float,
    ) -> None:
        """Apply one update; L2 decay touches the weights only."""

        self.bias += lr_ratio * grad_bias
        self.weight += lr_ratio * grad_weight + reg_ratio * self.weight

    def __repr__(self) -> str:
        return f"Layer(size={self._size}, activation={self.activation.name!r})"


__all__ = ["Layer"]
