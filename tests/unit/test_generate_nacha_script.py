"""Tests for the offline generate_nacha CLI."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

# Make scripts/ importable
sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent / "scripts"))

import generate_nacha  # noqa: E402

PROFILE = {
    "company": {"company_name": "ACME CORPORATION", "company_id": "1234567890"},
    "originator": {"immediate_destination_name": "WELLS FARGO BANK"},
}


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch):
    monkeypatch.setattr(generate_nacha, "setup_logging", lambda *args, **kwargs: None)


@pytest.fixture
def batch_file(tmp_path, batch) -> Path:
    path = tmp_path / "batch.json"
    path.write_text(batch.model_dump_json())
    return path


@pytest.fixture
def profile_file(tmp_path) -> Path:
    path = tmp_path / "acme.json"
    path.write_text(json.dumps(PROFILE))
    return path


class TestNacha:
    def test_writes_crlf_file(self, tmp_path, batch_file, profile_file):
        out = tmp_path / "ACH_B-1.txt"
        rc = generate_nacha.main([
            str(batch_file), "--profile", str(profile_file),
            "--now", "2025-03-14T09:26:00", "--output", str(out),
        ])
        assert rc == 0
        lines = out.read_bytes().split(b"\r\n")
        assert len(lines) == 10
        assert all(len(line) == 94 for line in lines)
        assert lines[0][23:33] == b"2503140926"
        assert lines[0][40:63] == b"WELLS FARGO BANK".ljust(23)

    def test_profile_required(self, batch_file, capsys):
        assert generate_nacha.main([str(batch_file)]) == 2
        assert "--profile is required" in capsys.readouterr().err

    def test_validation_issues_exit_1(self, tmp_path, batch, profile_file, capsys):
        bad = batch.model_copy(update={
            "entries": [batch.entries[0].model_copy(update={"routing_number": "123456789"})],
        })
        path = tmp_path / "bad.json"
        path.write_text(bad.model_dump_json())
        assert generate_nacha.main([str(path), "--profile", str(profile_file)]) == 1
        assert "invalid routing number '123456789'" in capsys.readouterr().err

    def test_skip_validation(self, tmp_path, batch, profile_file, capsys):
        bad = batch.model_copy(update={
            "entries": [batch.entries[0].model_copy(update={"routing_number": "123456789"})],
        })
        path = tmp_path / "bad.json"
        path.write_text(bad.model_dump_json())
        rc = generate_nacha.main([str(path), "--profile", str(profile_file), "--skip-validation"])
        assert rc == 0
        assert capsys.readouterr().out.startswith("101 091000019")


class TestExports:
    def test_csv_to_stdout(self, batch_file, capsys):
        assert generate_nacha.main([str(batch_file), "--format", "csv"]) == 0
        out = capsys.readouterr().out
        assert out.startswith("Transaction Type,Routing Number")
        assert len(out.split("\n")) == 3

    def test_json_to_file(self, tmp_path, batch_file):
        out = tmp_path / "batch.out.json"
        assert generate_nacha.main([str(batch_file), "--format", "json", "--output", str(out)]) == 0
        assert json.loads(out.read_text())["batch"]["entryCount"] == 2


def test_missing_batch_file_exit_2(tmp_path, capsys):
    assert generate_nacha.main([str(tmp_path / "missing.json"), "--format", "csv"]) == 2
    assert capsys.readouterr().err.startswith("error:")
