from __future__ import annotations

import json
from pathlib import Path

import pytest

from backpropnets import load_preset, presets, run_pipeline
from backpropnets.core.exceptions import UnknownNameError
from backpropnets.training import pipelines


def test_builtin_and_file_presets_are_listed():
    names = set(presets())
    assert {"xor-quadratic", "blobs-crossentropy", "mnist-csv", "xor-crossentropy"} <= names
    for config in presets().values():
        assert {"data", "model", "train"} <= set(config)


def test_yaml_preset_is_loaded():
    config = load_preset("xor-crossentropy")
    assert config["data"]["name"] == "xor"
    assert config["model"]["cost"] == "crossentropy"
    assert config["train"]["epochs"] == 500


def test_load_preset_returns_independent_copies():
    first = load_preset("xor-quadratic")
    first["train"]["epochs"] = 1
    assert load_preset("xor-quadratic")["train"]["epochs"] == 500


def test_unknown_preset():
    with pytest.raises(UnknownNameError, match="unknown preset name 'nope'"):
        load_preset("nope")


def test_read_config_file_formats(tmp_path):
    json_path = tmp_path / "cfg.json"
    json_path.write_text(json.dumps({"train": {"epochs": 2}}))
    yaml_path = tmp_path / "cfg.yml"
    yaml_path.write_text("train:\n  epochs: 3\n")

    assert pipelines.read_config_file(json_path) == {"train": {"epochs": 2}}
    assert pipelines.read_config_file(yaml_path) == {"train": {"epochs": 3}}
    with pytest.raises(ValueError):
        pipelines.read_config_file(tmp_path / "cfg.toml")


def test_build_network_from_model_section():
    network = pipelines.build_network(
        {"hidden": [{"size": 4, "activation": "logistic"}, 3], "cost": "crossentropy"}, 5, 2
    )
    assert network.input_size == 5
    assert [layer.size for layer in network.layers] == [4, 3, 2]
    assert network.cost_function.name == "crossentropy"
    assert all(layer.is_initialized for layer in network.layers)


def test_pipeline_smoke_xor(tmp_path, capsys):
    config = load_preset("xor-quadratic")
    config["train"]["epochs"] = 4
    config["train"]["run_dir"] = str(tmp_path / "run")

    result = run_pipeline(config)

    assert result.epochs == 4
    assert len(Path(result.metrics_path).read_text().splitlines()) == 4
    out = capsys.readouterr().out
    assert "=== backpropnets run ===" in out
    assert "Epoch # 3 of training is complete:" in out
    assert "For the testing set: total correct =" in out
    report = out.split("List of epoch accuracies for the validation set:\n", 1)[1]
    epoch_lines = [line for line in report.splitlines() if line.startswith("\tEpoch ")]
    assert len(epoch_lines) == 4
    assert epoch_lines[0].startswith("\tEpoch 0: ")
