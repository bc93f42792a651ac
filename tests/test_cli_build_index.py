import sys

import pytest

from chains.prompts import load_prompt_template
from common.config import GlobalYAMLConfig, load_yaml_config, yaml_config
from ingestion import cli_build_index
from ingestion.cli_build_index import discover_files, load_inputs


def test_discover_files_filters_by_extension(tmp_path):
    (tmp_path / "rules").mkdir()
    (tmp_path / "rules" / "catan.PDF").write_bytes(b"%PDF-1.4")
    (tmp_path / "guide.txt").write_text("Chrono Trigger")
    (tmp_path / "page.html").write_text("<html></html>")
    (tmp_path / "cover.png").write_bytes(b"\x89PNG")

    names = [p.name for p in discover_files(tmp_path)]

    assert sorted(names) == ["catan.PDF", "guide.txt", "page.html"]


def test_load_inputs_keeps_file_names(tmp_path):
    path = tmp_path / "guide.txt"
    path.write_bytes(b"Chrono Trigger")

    (raw,) = load_inputs([path])

    assert raw.source == "guide.txt"
    assert raw.data == b"Chrono Trigger"


def test_missing_input_dir_exits(tmp_path, monkeypatch):
    monkeypatch.setattr(
        sys, "argv", ["game-loader", "--input_dir", str(tmp_path / "missing")]
    )

    with pytest.raises(SystemExit) as exc:
        cli_build_index.main()

    assert exc.value.code == 1


def test_yaml_config_defaults():
    assert yaml_config.classification.sentinel == "UNKNOWN"
    assert yaml_config.classification.metadata_key == "gameTitle"
    assert yaml_config.pipeline.max_workers >= 1


def test_partial_yaml_uses_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("pipeline:\n  max_workers: 2\n")

    cfg = load_yaml_config(path)

    assert isinstance(cfg, GlobalYAMLConfig)
    assert cfg.pipeline.max_workers == 2
    assert cfg.chunking.chunk_size == 800


def test_config_and_prompt_are_read_from_working_dir(tmp_path, monkeypatch):
    (tmp_path / "config").mkdir()
    (tmp_path / "config" / "config.yaml").write_text("pipeline:\n  max_workers: 3\n")
    (tmp_path / "prompts").mkdir()
    (tmp_path / "prompts" / "name_of_the_game.txt").write_text("Name it: {document}")
    monkeypatch.chdir(tmp_path)

    assert load_yaml_config().pipeline.max_workers == 3
    assert load_prompt_template().format(document="x") == "Name it: x"
