"""Fully connected network trained by backpropagation."""

from __future__ import annotations

from typing import Dict, List, Mapping, MutableSequence, Sequence, Tuple

import numpy as np

from ..core.exceptions import ShapeMismatchError
from ..core.layer import Layer
from ..core.types import Array, EpochMetrics, ParameterGenerator, Sample
from .decision import Decision, DecisionPolicy
from .losses import CostFunction
from .optimizers import Optimizer

DEFAULT_SEED = 17111993


class Network:
    """Ordered stack of :class:`Layer` objects plus cost function and optimizer.

    The network owns a single :class:`numpy.random.Generator`. It seeds every
    layer initialisation and is handed to the optimizer for shuffling, so a
    deterministic network reproduces its training run exactly.
    """

    def __init__(
        self,
        input_size: int,
        cost_function: CostFunction,
        optimizer: Optimizer,
        *,
        deterministic: bool = True,
        seed: int = DEFAULT_SEED,
        decision: DecisionPolicy | None = None,
    ) -> None:
        if input_size <= 0:
            raise ValueError(f"input_size must be positive, got {input_size}")
        self.input_size = int(input_size)
        self.cost_function = cost_function
        self.optimizer = optimizer
        self.decision = decision or DecisionPolicy()
        self.layers: List[Layer] = []

        self.rng = np.random.default_rng(seed if deterministic else None)
        self.generator: ParameterGenerator = lambda shape: self.rng.standard_normal(shape)
        self.optimizer.initialize(self.rng, self)

        self.training_cost: List[float] = []
        self.training_accuracy: List[float] = []
        self.evaluation_cost: List[float] = []
        self.evaluation_accuracy: List[float] = []

    # ------------------------------------------------------------------
    # Structure

    @property
    def number_of_layers(self) -> int:
        return len(self.layers)

    @property
    def output_size(self) -> int:
        if not self.layers:
            raise ValueError("The network has no layers")
        return self.layers[-1].size

    def add_layer(self, layer: Layer, initialize: bool = True) -> "Network":
        """Append ``layer``; draw its parameters unless it is already populated."""

        if initialize:
            previous_size = self.layers[-1].size if self.layers else self.input_size
            layer.initialize(previous_size, self.generator)
        self.layers.append(layer)
        return self

    def describe(self) -> str:
        if not self.layers:
            return "The neural network is empty."
        lines = [
            f"The neural network has {self.number_of_layers} layers:",
            f"    Input : {self.input_size} neurons",
        ]
        for idx, layer in enumerate(self.layers[:-1]):
            lines.append(f"\t{idx} : {layer.size} neurons ({layer.activation.name})")
        output = self.layers[-1]
        lines.append(f"   Output : {output.size} neurons ({output.activation.name})")
        return "\n".join(lines)

    @property
    def history(self) -> Mapping[str, List[float]]:
        return {
            "training_cost": list(self.training_cost),
            "training_accuracy": list(self.training_accuracy),
            "evaluation_cost": list(self.evaluation_cost),
            "evaluation_accuracy": list(self.evaluation_accuracy),
        }

    # ------------------------------------------------------------------
    # Training

    def train(
        self,
        training: MutableSequence[Sample],
        evaluation: Sequence[Sample],
        epochs: int,
        batch_size: int,
        learning_rate: float,
        regularization: float,
        callbacks: Sequence[object] | None = None,
    ) -> List[EpochMetrics]:
        """Run ``epochs`` optimizer passes and record metrics after each one.

        ``training`` is shuffled in place. Only ``len(training) // batch_size``
        full batches are used per epoch; the remainder is skipped.
        """

        self._validate_training(training, batch_size)

        n_training = len(training)
        n_batches = n_training // batch_size
        lr_ratio = -learning_rate / batch_size
        reg_ratio = -learning_rate * regularization / n_training

        recorded: List[EpochMetrics] = []
        for epoch in range(epochs):
            self.optimizer.optimize(training, n_batches, batch_size, lr_ratio, reg_ratio)

            training_correct, training_cost = self.calc_accuracy_and_cost(training)
            evaluation_correct, evaluation_cost = self.calc_accuracy_and_cost(evaluation)
            metrics = EpochMetrics(
                epoch=epoch,
                training_cost=_normalise(training_cost, len(training)),
                training_correct=training_correct,
                training_total=len(training),
                evaluation_cost=_normalise(evaluation_cost, len(evaluation)),
                evaluation_correct=evaluation_correct,
                evaluation_total=len(evaluation),
            )
            self.training_cost.append(metrics.training_cost)
            self.training_accuracy.append(metrics.training_accuracy)
            self.evaluation_cost.append(metrics.evaluation_cost)
            self.evaluation_accuracy.append(metrics.evaluation_accuracy)
            recorded.append(metrics)
            self._emit_epoch(epoch, metrics, callbacks or ())
        return recorded

    def _validate_training(self, training: Sequence[Sample], batch_size: int) -> None:
        if not self.layers:
            raise ValueError("Network.train requires at least one layer")
        if not training:
            raise ValueError("Network.train requires a non-empty training set")
        if batch_size <= 0:
            raise ValueError(f"batch_size must be positive, got {batch_size}")
        first = training[0]
        if first.features.size != self.input_size:
            raise ShapeMismatchError(
                f"input layer size ({self.input_size}) is inconsistent with "
                f"training input data size ({first.features.size})"
            )
        if first.label.size != self.output_size:
            raise ShapeMismatchError(
                f"output layer size ({self.output_size}) is inconsistent with "
                f"training output data size ({first.label.size})"
            )

    @staticmethod
    def _emit_epoch(epoch: int, metrics: EpochMetrics, callbacks: Sequence[object]) -> None:
        payload = metrics.as_dict()
        for callback in callbacks:
            if hasattr(callback, "on_epoch"):
                callback.on_epoch(epoch, payload)  # type: ignore[attr-defined]
            elif callable(callback):
                callback(epoch, payload)

    # ------------------------------------------------------------------
    # Inference and evaluation

    def feed_forward(self, x: Array) -> Array:
        a = np.asarray(x, dtype=np.float64)
        for layer in self.layers:
            a = layer.feed_forward(a)
        return a

    def predict(self, x: Array) -> Decision:
        return self.decision.output_to_decision(self.feed_forward(x))

    def calc_accuracy_and_cost(
        self, dataset: Sequence[Sample], regularization: float = 0.0
    ) -> Tuple[int, float]:
        """Return the number of correct decisions and the summed cost.

        The cost is not divided by ``len(dataset)``; the L2 term
        ``(regularization / 2) * sum(||W||_F^2)`` is added once.
        """

        correct = 0
        cost = 0.0
        output_size = self.output_size
        for sample in dataset:
            predicted_output = self.feed_forward(sample.features)
            expected_output = self.decision.label_to_output(sample.label, output_size)
            prediction = self.decision.output_to_decision(predicted_output)
            expected = self.decision.output_to_decision(sample.label)
            if prediction == expected:
                correct += 1
            cost += self.cost_function.calculate(predicted_output, expected_output)

        weight_norms = sum(float(np.sum(np.square(layer.weight))) for layer in self.layers)
        cost += (regularization / 2.0) * weight_norms
        return correct, cost

    # ------------------------------------------------------------------
    # Backpropagation

    def back_propagate(self, x: Array, y: Array) -> Tuple[List[Array], List[Array]]:
        """Return per-layer ``(grad_biases, grad_weights)`` for one sample."""

        zs: List[Array] = []
        activations: List[Array] = [np.asarray(x, dtype=np.float64)]
        for layer in self.layers:
            a, z = layer.feed_forward_with_z(activations[-1])
            zs.append(z)
            activations.append(a)

        grad_biases: List[Array] = [np.empty(0)] * self.number_of_layers
        grad_weights: List[Array] = [np.empty(0)] * self.number_of_layers
        delta = self.cost_function.calculate_derivative(activations[-1], y)
        for idx in reversed(range(self.number_of_layers)):
            grad_b, grad_w, delta = self.layers[idx].feed_backward(
                delta, activations[idx], zs[idx]
            )
            grad_biases[idx] = grad_b
            grad_weights[idx] = grad_w
        return grad_biases, grad_weights

    def update_parameters(
        self, batch: Sequence[Sample], lr_ratio: float, reg_ratio: float
    ) -> None:
        """Sum the batch's gradients and apply one update per layer.

        Gradients are summed, not averaged: ``lr_ratio`` already carries the
        ``1 / batch_size`` factor.
        """

        nabla_b = [np.zeros(layer.size) for layer in self.layers]
        nabla_w = [np.zeros_like(layer.weight) for layer in self.layers]
        for sample in batch:
            delta_nabla_b, delta_nabla_w = self.back_propagate(sample.features, sample.label)
            for idx in range(self.number_of_layers):
                nabla_b[idx] += delta_nabla_b[idx]
                nabla_w[idx] += delta_nabla_w[idx]
        for idx, layer in enumerate(self.layers):
            layer.update_bias_weight(nabla_b[idx], nabla_w[idx], lr_ratio, reg_ratio)

    def parameter_count(self) -> int:
        return int(sum(layer.bias.size + layer.weight.size for layer in self.layers))

    def state_dict(self) -> Dict[str, Array]:
        state: Dict[str, Array] = {}
        for idx, layer in enumerate(self.layers):
            state[f"b{idx}"] = layer.bias.copy()
            state[f"W{idx}"] = layer.weight.copy()
        return state


def _normalise(total: float, count: int) -> float:
    if count == 0:
        return float("nan")
    return total / count


__all__ = ["DEFAULT_SEED", "Network"]
