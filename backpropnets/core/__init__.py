"""Core numerical primitives for backpropnets."""

from . import activations, exceptions, layer, registry, types

__all__ = ["activations", "exceptions", "layer", "registry", "types"]
