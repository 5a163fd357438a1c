import json
from pathlib import Path

import pytest

from cli.main import main


def test_cli_basic_preset(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    main(["--preset", "xor-quadratic", "--epochs", "5", "--quiet"])
    run_dir = Path("runs/xor-quadratic")
    assert (run_dir / "metrics.jsonl").exists()
    assert (run_dir / "manifest.json").exists()
    assert (run_dir / "network.net").exists()

    result = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
    assert result["epochs"] == 5


def test_cli_overrides_and_dump_config(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    override = tmp_path / "override.yaml"
    override.write_text("train:\n  batch_size: 2\n")

    main(
        [
            "--preset",
            "xor-crossentropy",
            "--config",
            str(override),
            "--epochs",
            "2",
            "--seed",
            "7",
            "--run-dir",
            str(tmp_path / "out"),
            "--save",
            str(tmp_path / "saved.net"),
            "--dump-config",
            str(tmp_path / "resolved.json"),
            "--quiet",
        ]
    )

    resolved = json.loads((tmp_path / "resolved.json").read_text())
    assert resolved["train"]["batch_size"] == 2
    assert resolved["train"]["epochs"] == 2
    assert resolved["model"]["seed"] == 7
    assert resolved["model"]["cost"] == "crossentropy"
    assert (tmp_path / "saved.net").read_text().startswith("2,crossentropy")
    assert (tmp_path / "out" / "metrics.jsonl").exists()


def test_cli_load_restores_network(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    main(["--epochs", "3", "--run-dir", "first", "--quiet"])
    main(
        [
            "--epochs",
            "0",
            "--load",
            "first/network.net",
            "--save",
            "second.net",
            "--run-dir",
            "second",
            "--quiet",
        ]
    )
    assert Path("second.net").read_text() == Path("first/network.net").read_text()


def test_cli_list_presets(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--list-presets"])
    assert excinfo.value.code == 0
    names = capsys.readouterr().out.split()
    assert "xor-quadratic" in names
    assert "xor-crossentropy" in names
