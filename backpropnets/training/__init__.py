"""Training loop, persistence and orchestration."""

from .builder import NetworkBuilder
from .checkpoint import load_network, save_network
from .decision import DecisionPolicy
from .losses import CostFunction, CrossEntropy, Quadratic, get_cost
from .network import DEFAULT_SEED, Network
from .optimizers import Optimizer, StochasticGradientDescent, get_optimizer

__all__ = [
    "DEFAULT_SEED",
    "CostFunction",
    "CrossEntropy",
    "DecisionPolicy",
    "Network",
    "NetworkBuilder",
    "Optimizer",
    "Quadratic",
    "StochasticGradientDescent",
    "get_cost",
    "get_optimizer",
    "load_network",
    "save_network",
]
