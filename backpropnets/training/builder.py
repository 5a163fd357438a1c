"""Fluent builder assembling a :class:`Network` from names or enum variants."""

from __future__ import annotations

from ..core.activations import ACTIVATIONS, ActivationKind
from ..core.layer import Layer
from .decision import DecisionPolicy
from .losses import COSTS, CostKind
from .network import DEFAULT_SEED, Network
from .optimizers import OPTIMIZERS, OptimizerKind


class NetworkBuilder:
    """Collect construction settings, then :meth:`build` an empty network.

    Names are resolved as soon as they are set, so an unknown cost or
    optimizer name fails at the setter rather than at build time.
    """

    def __init__(self) -> None:
        self.input_size: int | None = None
        self.cost_function: CostKind = CostKind.QUADRATIC
        self.optimizer: OptimizerKind = OptimizerKind.SGD
        self.deterministic = True
        self.seed = DEFAULT_SEED
        self.decision: DecisionPolicy | None = None

    def set_input_size(self, input_size: int) -> "NetworkBuilder":
        self.input_size = int(input_size)
        return self

    def set_cost_function(self, name: str | CostKind) -> "NetworkBuilder":
        self.cost_function = COSTS.parse(name)
        return self

    def set_optimizer(self, name: str | OptimizerKind) -> "NetworkBuilder":
        self.optimizer = OPTIMIZERS.parse(name)
        return self

    def set_deterministic(self, deterministic: bool) -> "NetworkBuilder":
        self.deterministic = bool(deterministic)
        return self

    def set_seed(self, seed: int) -> "NetworkBuilder":
        self.seed = int(seed)
        return self

    def set_decision(self, decision: DecisionPolicy | None) -> "NetworkBuilder":
        self.decision = decision
        return self

    def build(self) -> Network:
        if self.input_size is None:
            raise ValueError("NetworkBuilder.build requires an input size")
        return Network(
            self.input_size,
            COSTS.create(self.cost_function),
            OPTIMIZERS.create(self.optimizer),
            deterministic=self.deterministic,
            seed=self.seed,
            decision=self.decision,
        )

    @staticmethod
    def create_layer(size: int, activation: str | ActivationKind) -> Layer:
        return Layer(size, ACTIVATIONS.create(activation))


__all__ = ["NetworkBuilder"]
