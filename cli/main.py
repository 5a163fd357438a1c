"""Command line entry point for backpropnets training runs."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Iterable

from backpropnets.training import pipelines


def _format_result(result) -> str:
    payload = {
        "epochs": result.epochs,
        "metrics": result.metrics_path,
        "manifest": result.manifest_path,
        "network": result.network_path,
        "testing_accuracy": result.testing_accuracy,
    }
    return json.dumps(payload, sort_keys=True)


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    preset_names = sorted(pipelines.presets().keys())
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--preset",
        choices=preset_names,
        default="xor-quadratic",
        help="Preset configuration to execute",
    )
    parser.add_argument(
        "--config", type=Path, help="Optional JSON/YAML config override"
    )
    parser.add_argument("--epochs", type=int, help="Override the number of epochs")
    parser.add_argument("--seed", type=int, help="Seed for deterministic runs")
    parser.add_argument(
        "--deterministic",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Seed the generator with a fixed value instead of OS entropy",
    )
    parser.add_argument("--load", type=Path, help="Restore network parameters from a file")
    parser.add_argument("--save", type=Path, help="Write trained parameters to this file")
    parser.add_argument("--run-dir", type=Path, help="Directory for metrics and manifest")
    parser.add_argument(
        "--enable-plots", action="store_true", help="Write cost/accuracy plots"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Suppress per-epoch console output"
    )
    parser.add_argument(
        "--list-presets", action="store_true", help="List available presets and exit"
    )
    parser.add_argument(
        "--dump-config", type=Path, help="Dump the resolved config to a JSON file"
    )
    return parser.parse_args(argv)


def _merge(base: dict, override: dict) -> dict:
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            base[key] = _merge(dict(base[key]), value)
        else:
            base[key] = value
    return base


def main(argv: Iterable[str] | None = None) -> None:
    args = parse_args(argv)

    if args.list_presets:
        for name in sorted(pipelines.presets().keys()):
            print(name)
        raise SystemExit(0)

    config = json.loads(json.dumps(pipelines.load_preset(args.preset)))

    if args.config:
        override = json.loads(json.dumps(pipelines.read_config_file(args.config)))
        if {"data", "model", "train"} <= set(override.keys()):
            config = override
        else:
            config = _merge(config, override)

    model_cfg = config.setdefault("model", {})
    train_cfg = config.setdefault("train", {})
    if args.epochs is not None:
        train_cfg["epochs"] = int(args.epochs)
    if args.seed is not None:
        model_cfg["seed"] = int(args.seed)
    if args.deterministic is not None:
        model_cfg["deterministic"] = bool(args.deterministic)
    if args.load:
        model_cfg["load_path"] = str(args.load)
    if args.save:
        train_cfg["save_path"] = str(args.save)
    if args.run_dir:
        train_cfg["run_dir"] = str(args.run_dir)
    if args.enable_plots:
        train_cfg["enable_plots"] = True
    if args.quiet:
        train_cfg["verbose"] = False

    if args.dump_config:
        args.dump_config.parent.mkdir(parents=True, exist_ok=True)
        args.dump_config.write_text(json.dumps(config, indent=2))

    result = pipelines.run_pipeline(config)
    print(_format_result(result))


if __name__ == "__main__":
    main()
