"""Text persistence of network parameters.

Layout, one record per line, comma separated::

    <input size>,<cost function name>
    <bias values>                      # layer 0
    <weight values, row-major>
    <activation function name>
    ...                                # one triplet per layer

Floats are written with ``repr`` so a reload is bit-identical.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

import numpy as np

from ..core.exceptions import MalformedNetworkFileError, ResourceUnavailableError
from ..core.layer import Layer
from ..core.types import Array
from .builder import NetworkBuilder
from .decision import DecisionPolicy
from .network import DEFAULT_SEED, Network
from .optimizers import OptimizerKind


def _format_values(values: Array) -> str:
    return ",".join(repr(float(v)) for v in np.asarray(values).ravel(order="C"))


def _parse_values(line: str, line_number: int) -> Array:
    try:
        return np.array([float(cell) for cell in line.split(",")], dtype=np.float64)
    except ValueError as exc:
        raise MalformedNetworkFileError(
            f"line {line_number}: expected comma separated numbers"
        ) from exc


def dumps_network(network: Network) -> str:
    lines = [f"{network.input_size},{network.cost_function.name}"]
    for layer in network.layers:
        bias, weight, activation = layer.get_parameters()
        lines.append(_format_values(bias))
        lines.append(_format_values(weight))
        lines.append(activation.name)
    return "\n".join(lines) + "\n"


def save_network(network: Network, path: str | Path) -> str:
    """Write ``network``'s parameters to ``path`` and return the path."""

    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as handle:
            handle.write(dumps_network(network))
    except OSError as exc:
        raise ResourceUnavailableError(
            f"unable to open file {path} for writing network parameters"
        ) from exc
    return str(path)


def loads_network(
    text: str,
    *,
    optimizer: str | OptimizerKind = OptimizerKind.SGD,
    deterministic: bool = True,
    seed: int = DEFAULT_SEED,
    decision: DecisionPolicy | None = None,
) -> Network:
    lines = [line.strip() for line in text.splitlines() if line.strip()]
    if not lines:
        raise MalformedNetworkFileError("network file is empty")
    header = lines[0].split(",")
    if len(header) != 2:
        raise MalformedNetworkFileError("header must be '<input size>,<cost function>'")
    try:
        input_size = int(header[0])
    except ValueError as exc:
        raise MalformedNetworkFileError(f"invalid input size {header[0]!r}") from exc

    builder = (
        NetworkBuilder()
        .set_input_size(input_size)
        .set_cost_function(header[1])
        .set_optimizer(optimizer)
        .set_deterministic(deterministic)
        .set_seed(seed)
        .set_decision(decision)
    )
    layers = list(_parse_layers(lines[1:]))
    network = builder.build()
    for layer in layers:
        network.add_layer(layer, initialize=False)
    return network


def _parse_layers(lines: List[str]) -> Iterable[Layer]:
    if len(lines) % 3 != 0:
        raise MalformedNetworkFileError(
            f"expected bias/weight/activation triplets, found {len(lines)} layer lines"
        )
    for start in range(0, len(lines), 3):
        line_number = start + 2
        bias = _parse_values(lines[start], line_number)
        flat_weight = _parse_values(lines[start + 1], line_number + 1)
        if flat_weight.size % bias.size != 0:
            raise MalformedNetworkFileError(
                f"line {line_number + 1}: {flat_weight.size} weights do not fill "
                f"{bias.size} rows"
            )
        layer = NetworkBuilder.create_layer(bias.size, lines[start + 2])
        layer.restore(bias, flat_weight.reshape(bias.size, -1))
        yield layer


def load_network(
    path: str | Path,
    *,
    optimizer: str | OptimizerKind = OptimizerKind.SGD,
    deterministic: bool = True,
    seed: int = DEFAULT_SEED,
    decision: DecisionPolicy | None = None,
) -> Network:
    """Rebuild a network from a file written by :func:`save_network`."""

    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ResourceUnavailableError(
            f"unable to open file {path} for loading network parameters"
        ) from exc
    return loads_network(
        text,
        optimizer=optimizer,
        deterministic=deterministic,
        seed=seed,
        decision=decision,
    )


__all__ = ["dumps_network", "load_network", "loads_network", "save_network"]
