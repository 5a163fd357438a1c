"""Pipeline assembly: dataset, network, training, persistence, reporting."""

from __future__ import annotations

import json
import time
from copy import deepcopy
from pathlib import Path
from typing import Dict, List, Mapping, Sequence

import yaml

from ..core.exceptions import UnknownNameError
from ..core.types import RunResult
from ..data import registry
from ..reporting.artifacts import write_manifest
from ..reporting.console import ConsoleReporter, print_startup_summary
from ..reporting.metrics import CsvSink, JsonlSink
from ..reporting.plots import PlotAdapter
from .builder import NetworkBuilder
from .checkpoint import load_network, save_network
from .decision import DecisionPolicy
from .network import DEFAULT_SEED, Network

_PRESETS: Dict[str, Mapping[str, object]] = {
    "xor-quadratic": {
        "data": {"name": "xor", "options": {}},
        "model": {
            "hidden": [{"size": 4, "activation": "logistic"}],
            "output_activation": "logistic",
            "cost": "quadratic",
            "optimizer": "stochastic",
            "deterministic": True,
            "seed": DEFAULT_SEED,
            "decision_threshold": 0.5,
        },
        "train": {
            "epochs": 500,
            "batch_size": 4,
            "learning_rate": 4.0,
            "regularization": 0.0,
            "run_dir": "runs/xor-quadratic",
            "enable_plots": False,
        },
    },
    "blobs-crossentropy": {
        "data": {
            "name": "blobs",
            "options": {"n_samples": 300, "centers": 3, "seed": 0},
        },
        "model": {
            "hidden": [{"size": 8, "activation": "logistic"}],
            "output_activation": "logistic",
            "cost": "crossentropy",
            "optimizer": "stochastic",
            "deterministic": True,
            "seed": DEFAULT_SEED,
        },
        "train": {
            "epochs": 20,
            "batch_size": 10,
            "learning_rate": 0.5,
            "regularization": 0.1,
            "run_dir": "runs/blobs-crossentropy",
            "enable_plots": False,
        },
    },
    "mnist-csv": {
        "data": {
            "name": "csv",
            "options": {"folder": "../Data/MNIST", "split_index": 784, "one_hot_classes": 10},
        },
        "model": {
            "hidden": [{"size": 30, "activation": "logistic"}],
            "output_activation": "logistic",
            "cost": "crossentropy",
            "optimizer": "stochastic",
            "deterministic": True,
            "seed": DEFAULT_SEED,
        },
        "train": {
            "epochs": 30,
            "batch_size": 10,
            "learning_rate": 0.1,
            "regularization": 5.0,
            "run_dir": "runs/mnist-csv",
            "save_path": "../network.net",
            "enable_plots": False,
        },
    },
}

_PRESET_DIR = Path(__file__).resolve().parents[2] / "configs" / "presets"
_FILE_PRESETS_CACHE: Dict[str, Mapping[str, object]] | None = None
_REQUIRED_SECTIONS = {"data", "model", "train"}


def read_config_file(path: str | Path) -> Mapping[str, object]:
    """Decode a JSON or YAML configuration file into a mapping."""

    path = Path(path)
    text = path.read_text()
    suffix = path.suffix.lower()
    if suffix in {".yaml", ".yml"}:
        data = yaml.safe_load(text) or {}
    elif suffix == ".json":
        data = json.loads(text or "{}")
    else:
        raise ValueError(f"Unsupported config file type: {path.suffix}")

    if not isinstance(data, Mapping):
        raise TypeError(f"Config {path.name} must decode to a mapping")
    return data


def _file_presets() -> Dict[str, Mapping[str, object]]:
    global _FILE_PRESETS_CACHE
    if _FILE_PRESETS_CACHE is None:
        presets: Dict[str, Mapping[str, object]] = {}
        if _PRESET_DIR.exists():
            for file in sorted(_PRESET_DIR.iterdir()):
                if file.suffix.lower() not in {".yaml", ".yml", ".json"}:
                    continue
                data = read_config_file(file)
                missing = _REQUIRED_SECTIONS - set(data)
                if missing:
                    missing_str = ", ".join(sorted(missing))
                    raise KeyError(f"Preset {file.name} is missing required sections: {missing_str}")
                presets[file.stem] = json.loads(json.dumps(data))
        _FILE_PRESETS_CACHE = presets
    return {name: deepcopy(cfg) for name, cfg in _FILE_PRESETS_CACHE.items()}


def presets() -> Mapping[str, Mapping[str, object]]:
    combined: Dict[str, Mapping[str, object]] = {}
    combined.update({name: deepcopy(cfg) for name, cfg in _PRESETS.items()})
    combined.update(_file_presets())
    return combined


def load_preset(name: str) -> Mapping[str, object]:
    file_overrides = _file_presets()
    if name in file_overrides:
        return file_overrides[name]
    try:
        return deepcopy(_PRESETS[name])
    except KeyError:
        raise UnknownNameError(f"unknown preset name {name!r}") from None


def build_network(model_cfg: Mapping[str, object], input_size: int, output_size: int) -> Network:
    """Build and initialise a network described by the ``model`` section."""

    network = _builder(model_cfg).set_input_size(input_size).build()
    for layer_cfg in _hidden_layers(model_cfg):
        network.add_layer(NetworkBuilder.create_layer(layer_cfg["size"], layer_cfg["activation"]))
    output_activation = str(model_cfg.get("output_activation", "logistic"))
    network.add_layer(NetworkBuilder.create_layer(output_size, output_activation))
    return network


def _builder(model_cfg: Mapping[str, object]) -> NetworkBuilder:
    threshold = model_cfg.get("decision_threshold")
    decision = DecisionPolicy(float(threshold)) if threshold is not None else None
    return (
        NetworkBuilder()
        .set_cost_function(str(model_cfg.get("cost", "quadratic")))
        .set_optimizer(str(model_cfg.get("optimizer", "stochastic")))
        .set_deterministic(bool(model_cfg.get("deterministic", True)))
        .set_seed(int(model_cfg.get("seed", DEFAULT_SEED)))
        .set_decision(decision)
    )


def _hidden_layers(model_cfg: Mapping[str, object]) -> List[Dict[str, object]]:
    default_activation = str(model_cfg.get("activation", "logistic"))
    layers: List[Dict[str, object]] = []
    for entry in model_cfg.get("hidden", []):  # type: ignore[union-attr]
        if isinstance(entry, Mapping):
            layers.append(
                {
                    "size": int(entry["size"]),
                    "activation": str(entry.get("activation", default_activation)),
                }
            )
        else:
            layers.append({"size": int(entry), "activation": default_activation})
    return layers


def _restore_network(model_cfg: Mapping[str, object], path: str | Path) -> Network:
    builder = _builder(model_cfg)
    return load_network(
        path,
        optimizer=builder.optimizer,
        deterministic=builder.deterministic,
        seed=builder.seed,
        decision=builder.decision,
    )


def run_pipeline(config: Mapping[str, object]) -> RunResult:
    data_cfg = dict(config["data"])  # type: ignore[arg-type]
    model_cfg = dict(config["model"])  # type: ignore[arg-type]
    train_cfg = dict(config["train"])  # type: ignore[arg-type]
    verbose = bool(train_cfg.get("verbose", True))

    dataset = registry.get_dataset(str(data_cfg["name"]), **data_cfg.get("options", {}))

    load_path = model_cfg.get("load_path")
    if load_path:
        network = _restore_network(model_cfg, str(load_path))
    else:
        network = build_network(model_cfg, dataset.input_size, dataset.output_size)

    run_dir = _resolve_run_dir(train_cfg, dataset.name)
    run_dir.mkdir(parents=True, exist_ok=True)
    seed = int(model_cfg.get("seed", DEFAULT_SEED))

    if verbose:
        print_startup_summary(
            dataset_name=dataset.name,
            sizes=dataset.sizes,
            dims=_dims(network),
            cost=network.cost_function.name,
            optimizer=network.optimizer.name,
            param_count=network.parameter_count(),
        )
        print(network.describe())

    jsonl = JsonlSink(run_dir / "metrics.jsonl", seed=seed)
    csv_sink = CsvSink(run_dir / "metrics.csv")
    plots = PlotAdapter(run_dir, enable_plots=bool(train_cfg.get("enable_plots", False)))
    console = ConsoleReporter(
        len(dataset.training), len(dataset.evaluation), enabled=verbose
    )

    epochs = int(train_cfg.get("epochs", 1))
    started = time.perf_counter()
    network.train(
        dataset.training,
        dataset.evaluation,
        epochs=epochs,
        batch_size=int(train_cfg.get("batch_size", 10)),
        learning_rate=float(train_cfg.get("learning_rate", 0.1)),
        regularization=float(train_cfg.get("regularization", 0.0)),
        callbacks=[console, jsonl, csv_sink, plots],
    )
    elapsed = time.perf_counter() - started
    plots.close()

    network_path = save_network(network, train_cfg.get("save_path") or run_dir / "network.net")

    testing_accuracy = float("nan")
    if dataset.testing:
        correct, _ = network.calc_accuracy_and_cost(dataset.testing)
        testing_accuracy = correct / len(dataset.testing)
        if verbose:
            _print_testing_report(network, dataset.testing, correct, elapsed)

    manifest = write_manifest(
        run_dir / "manifest.json",
        config=json.loads(json.dumps(config, default=str)),
        dataset_provenance=dataset.provenance,
        network_description=network.describe(),
    )

    return RunResult(
        epochs=epochs,
        metrics_path=str(jsonl.path),
        manifest_path=manifest,
        network_path=network_path,
        testing_accuracy=testing_accuracy,
        history=dict(network.history),
    )


def _dims(network: Network) -> List[int]:
    return [network.input_size] + [layer.size for layer in network.layers]


def _resolve_run_dir(train_cfg: Mapping[str, object], dataset: str) -> Path:
    if train_cfg.get("run_dir"):
        return Path(str(train_cfg["run_dir"]))
    timestamp = time.strftime("%Y%m%d-%H%M%S")
    return Path("runs") / timestamp / dataset


def _print_testing_report(
    network: Network, testing: Sequence, correct: int, elapsed: float
) -> None:
    index = min(3, len(testing) - 1)
    sample = testing[index]
    print(f"\nTraining has finished within {elapsed:.1f} seconds.")
    print(f"Testing the network for test input number {index}:")
    print(f"\tNetworks prediction is: {network.predict(sample.features)}.")
    print(f"\tThe actual value is: {network.decision.output_to_decision(sample.label)}.")
    print(f"For the testing set: total correct = {correct} out of {len(testing)}")
    print("List of epoch accuracies for the validation set:")
    for epoch, accuracy in enumerate(network.evaluation_accuracy):
        print(f"\tEpoch {epoch}: {accuracy:.4f}")


__all__ = ["build_network", "load_preset", "presets", "read_config_file", "run_pipeline"]
