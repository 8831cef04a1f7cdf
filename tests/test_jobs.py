"""Tests for the snapshot build job."""

import json
import logging
from pathlib import Path

import pytest

from tcgkiosk.jobs.build_snapshot import main, run_build


class TestRunBuild:
    def test_writes_snapshot_file(self, card_tree: Path, tmp_path: Path) -> None:
        output = tmp_path / "out" / "catalog.json"

        total = run_build(card_tree, output)

        assert total == 6
        data = json.loads(output.read_text(encoding="utf-8"))
        assert [g["slug"] for g in data["games"]] == ["one-piece", "pokemon", "riftbound"]
        assert "lastModified" in data
        assert data["i18n"]["selectGame"] == "Select a game to start browsing."
        assert "i18N" not in data
        assert data["games"][1]["cards"][0]["imageFullUrl"].endswith("1_hires.png")

    def test_writes_to_stdout(self, card_tree: Path, capsys: pytest.CaptureFixture[str]) -> None:
        run_build(card_tree)

        data = json.loads(capsys.readouterr().out)
        assert len(data["games"]) == 3

    def test_logs_malformed_files(self, card_tree: Path, tmp_path: Path, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="tcgkiosk.jobs.build_snapshot"):
            run_build(card_tree, tmp_path / "catalog.json")

        assert "broken.json" in caplog.text
        assert "malformed" in caplog.text

    def test_empty_database(self, tmp_path: Path) -> None:
        output = tmp_path / "catalog.json"

        assert run_build(tmp_path / "missing", output) == 0
        assert json.loads(output.read_text(encoding="utf-8"))["games"] == []


class TestMain:
    def test_cli_arguments(self, card_tree: Path, tmp_path: Path) -> None:
        output = tmp_path / "catalog.json"

        main(["--root", str(card_tree), "--output", str(output)])

        assert len(json.loads(output.read_text(encoding="utf-8"))["games"]) == 3
