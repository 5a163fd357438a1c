"""Conversion between raw network outputs and discrete decisions."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from ..core.types import Array

Decision = int | float


@dataclass(frozen=True)
class DecisionPolicy:
    """Default output <-> label mapping.

    Multi-element outputs decide by argmax. A single-element output is cast
    to an ``int`` (truncation), or compared against ``scalar_threshold`` when
    one is set, which suits a single logistic output neuron. A NaN or
    infinite scalar output is returned unchanged.
    """

    scalar_threshold: float | None = None

    def output_to_decision(self, output: Array) -> Decision:
        output = np.asarray(output).reshape(-1)
        if output.size > 1:
            return int(np.argmax(output))
        value = float(output[0])
        if not math.isfinite(value):
            # never equal to a label, so the sample counts as wrong
            return value
        if self.scalar_threshold is not None:
            return int(value >= self.scalar_threshold)
        return int(value)

    def label_to_output(self, label: Array, output_size: int) -> Array:
        """Expand a scalar class label into a one-hot target vector.

        Labels that already have several elements, or that feed a single
        output neuron, pass through unchanged.
        """

        label = np.asarray(label, dtype=np.float64).reshape(-1)
        if label.size > 1 or output_size == 1:
            return label
        expanded = np.zeros(output_size, dtype=np.float64)
        expanded[int(label[0])] = 1.0
        return expanded


__all__ = ["Decision", "DecisionPolicy"]
