import csv
import json
from pathlib import Path

from backpropnets.training import pipelines


def _config(run_dir, **train_overrides):
    train = {
        "epochs": 3,
        "batch_size": 10,
        "learning_rate": 0.5,
        "regularization": 0.1,
        "run_dir": str(run_dir),
        "enable_plots": False,
        "verbose": False,
    }
    train.update(train_overrides)
    return {
        "data": {"name": "blobs", "options": {"n_samples": 60, "centers": 3, "seed": 0}},
        "model": {
            "hidden": [5],
            "output_activation": "logistic",
            "cost": "crossentropy",
            "seed": 11,
        },
        "train": train,
    }


def test_pipeline_produces_artifacts(tmp_path):
    config = _config(tmp_path / "run")

    result = pipelines.run_pipeline(config)

    assert result.epochs == 3
    records = [json.loads(line) for line in Path(result.metrics_path).read_text().splitlines()]
    assert [record["epoch"] for record in records] == [0, 1, 2]
    assert all(record["seed"] == 11 for record in records)
    assert all("training_cost" in record and "evaluation_accuracy" in record for record in records)

    with (tmp_path / "run" / "metrics.csv").open() as handle:
        rows = list(csv.DictReader(handle))
    assert len(rows) == 3

    manifest = json.loads(Path(result.manifest_path).read_text())
    assert manifest["config"]["model"]["seed"] == 11
    assert manifest["dataset"]["source"] == "sklearn.datasets.make_blobs"
    assert manifest["network"][0] == "The neural network has 2 layers:"

    assert Path(result.network_path) == tmp_path / "run" / "network.net"
    assert Path(result.network_path).read_text().startswith("2,crossentropy\n")
    assert 0.0 <= result.testing_accuracy <= 1.0
    assert len(result.history["training_cost"]) == 3


def test_pipeline_determinism(tmp_path):
    first = pipelines.run_pipeline(_config(tmp_path / "run1"))
    second = pipelines.run_pipeline(_config(tmp_path / "run2"))

    assert Path(first.metrics_path).read_text() == Path(second.metrics_path).read_text()
    assert Path(first.network_path).read_text() == Path(second.network_path).read_text()


def test_pipeline_restores_saved_network(tmp_path):
    trained = pipelines.run_pipeline(_config(tmp_path / "run"))

    config = _config(tmp_path / "restored", epochs=0, save_path=str(tmp_path / "copy.net"))
    config["model"]["load_path"] = trained.network_path
    restored = pipelines.run_pipeline(config)

    assert Path(restored.network_path).read_text() == Path(trained.network_path).read_text()
    assert restored.testing_accuracy == trained.testing_accuracy


def test_pipeline_writes_plots_when_enabled(tmp_path):
    pipelines.run_pipeline(_config(tmp_path / "run", epochs=2, enable_plots=True))
    assert (tmp_path / "run" / "cost.png").exists()
    assert (tmp_path / "run" / "accuracy.png").exists()
