"""
CLI smoke tests: each command runs against a tmp_path storage directory.
"""
import pytest

import skytracker.cli as cli
from skytracker.data.store import open_store
from skytracker.analytics.share import decode_share_link

from conftest import SAMPLE_CSV


@pytest.fixture
def storage_dir(tmp_path, monkeypatch):
    path = tmp_path / "storage"
    monkeypatch.setattr(cli, "open_store", lambda: open_store(path))
    return path


@pytest.fixture
def imported(storage_dir, tmp_path, capsys):
    csv_path = tmp_path / "skylanders.csv"
    csv_path.write_text(SAMPLE_CSV, encoding="utf-8")
    assert cli.main(["import", str(csv_path)]) == 0
    return storage_dir


def test_import_persists(imported, capsys):
    assert "Imported 5 Skylanders" in capsys.readouterr().out
    assert open_store(imported).load().item_count() == 5


def test_import_missing_file(storage_dir, tmp_path, capsys):
    assert cli.main(["import", str(tmp_path / "missing.csv")]) == 1
    assert "Import failed" in capsys.readouterr().out


def test_import_bad_sheet_url(storage_dir, capsys):
    assert cli.main(["import", "--sheet", "https://example.com"]) == 1
    assert "Invalid Google Sheets URL" in capsys.readouterr().out


def test_set_add_and_trade(imported, capsys):
    assert cli.main(["set", "sunburn", "forTrade", "true"]) == 0
    assert cli.main(["add", "sunburn"]) == 0
    capsys.readouterr()

    assert cli.main(["trade"]) == 0
    out = capsys.readouterr().out
    assert "Sunburn (Fire) - 1 available" in out


def test_set_unknown_item_and_field(imported):
    assert cli.main(["set", "nobody", "count", "1"]) == 1
    assert cli.main(["set", "spyro", "colour", "red"]) == 2


def test_list_and_stats(imported, capsys):
    cli.main(["add", "spyro"])
    capsys.readouterr()
    assert cli.main(["list", "--status", "have"]) == 0
    out = capsys.readouterr().out
    assert "Spyro" in out
    assert "Eruptor" not in out

    assert cli.main(["stats"]) == 0
    assert "1 / 5" in capsys.readouterr().out


def test_share_owned_and_save(imported, capsys):
    cli.main(["add", "gill-grunt"])
    capsys.readouterr()
    assert cli.main(["share", "--owned", "--save", "--title", "Water"]) == 0
    lines = [l for l in capsys.readouterr().out.splitlines() if l.startswith("http")]
    payload = decode_share_link(lines[0])
    assert payload["title"] == "Water"
    assert [s["id"] for s in payload["skylanders"]] == ["gill-grunt"]
    assert [v.title for v in open_store(imported).load().views] == ["Water"]


def test_export(imported, tmp_path):
    out = tmp_path / "out.xlsx"
    assert cli.main(["export", "--output", str(out)]) == 0
    assert out.exists()


def test_reset_requires_confirmation(imported):
    cli.main(["add", "spyro"])
    assert cli.main(["reset"]) == 2
    assert open_store(imported).load().record("spyro").count == 1
    assert cli.main(["reset", "--yes"]) == 0
    assert open_store(imported).load().record("spyro").count == 0


def test_no_command_prints_help(capsys):
    assert cli.main([]) == 0
    assert "usage" in capsys.readouterr().out.lower()
