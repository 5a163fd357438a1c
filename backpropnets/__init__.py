"""backpropnets public API."""

from .core import activations, exceptions, types  # noqa: F401
from .core.layer import Layer
from .core.types import Sample
from .training.builder import NetworkBuilder
from .training.checkpoint import load_network, save_network
from .training.network import Network
from .training.pipelines import load_preset, presets, run_pipeline

__all__ = [
    "Layer",
    "Network",
    "NetworkBuilder",
    "Sample",
    "activations",
    "exceptions",
    "types",
    "load_network",
    "load_preset",
    "presets",
    "run_pipeline",
    "save_network",
]
