"""Optimizers driving one epoch of parameter updates."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Iterator, List, MutableSequence, Sequence

import numpy as np

from ..core.registry import Registry
from ..core.types import Sample, Trainable


class OptimizerKind(str, Enum):
    SGD = "stochastic"


class Optimizer(ABC):
    """Epoch driver bound to a :class:`Trainable` and its generator."""

    name: str = ""

    def __init__(self) -> None:
        self._rng: np.random.Generator | None = None
        self._trainable: Trainable | None = None

    def initialize(self, rng: np.random.Generator, trainable: Trainable) -> None:
        self._rng = rng
        self._trainable = trainable

    @property
    def is_initialized(self) -> bool:
        return self._rng is not None and self._trainable is not None

    @abstractmethod
    def optimize(
        self,
        training: MutableSequence[Sample],
        n_batches: int,
        batch_size: int,
        lr_ratio: float,
        reg_ratio: float,
    ) -> None:
        """Run one epoch over ``training``."""

    def _require_initialized(self) -> tuple[np.random.Generator, Trainable]:
        if self._rng is None or self._trainable is None:
            raise RuntimeError(f"{type(self).__name__} must be initialised before optimize()")
        return self._rng, self._trainable


def shuffle_in_place(samples: MutableSequence[Sample], rng: np.random.Generator) -> None:
    """Uniformly permute ``samples`` in place."""

    order = rng.permutation(len(samples))
    samples[:] = [samples[idx] for idx in order]


def iter_batches(
    samples: Sequence[Sample], n_batches: int, batch_size: int
) -> Iterator[List[Sample]]:
    """Yield ``n_batches`` contiguous, non-overlapping slices of ``samples``."""

    for batch_index in range(n_batches):
        start = batch_index * batch_size
        yield list(samples[start : start + batch_size])


class StochasticGradientDescent(Optimizer):
    """Plain mini-batch SGD: shuffle, slice, update once per batch."""

    name = OptimizerKind.SGD.value

    def optimize(
        self,
        training: MutableSequence[Sample],
        n_batches: int,
        batch_size: int,
        lr_ratio: float,
        reg_ratio: float,
    ) -> None:
        rng, trainable = self._require_initialized()
        shuffle_in_place(training, rng)
        # Samples past n_batches * batch_size sit out this epoch.
        for batch in iter_batches(training, n_batches, batch_size):
            trainable.update_parameters(batch, lr_ratio, reg_ratio)


OPTIMIZERS: Registry[OptimizerKind, Optimizer] = Registry("optimizer", OptimizerKind)
OPTIMIZERS.register(OptimizerKind.SGD, StochasticGradientDescent)


def get_optimizer(name: str | OptimizerKind) -> Optimizer:
    """Return a fresh optimizer instance for ``name``."""

    return OPTIMIZERS.create(name)


__all__ = [
    "OPTIMIZERS",
    "Optimizer",
    "OptimizerKind",
    "StochasticGradientDescent",
    "get_optimizer",
    "iter_batches",
    "shuffle_in_place",
]
