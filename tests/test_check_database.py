from __future__ import annotations

import importlib.util
import json
from pathlib import Path

SCRIPT = Path(__file__).resolve().parents[1] / "scripts" / "check_database.py"


def _load_script():
    spec = importlib.util.spec_from_file_location("check_database", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_reports_invalid_records(tmp_path, game_factory, capsys):
    (tmp_path / "game.json").write_text(json.dumps([{"slug": "x"}, game_factory()]), encoding="utf-8")
    status = _load_script().main(["--dir", str(tmp_path)])
    captured = capsys.readouterr()
    assert status == 1
    assert "Item #1 (ID: unknown) is invalid:" in captured.err


def test_valid_directory_passes(tmp_path, game_factory, capsys):
    (tmp_path / "game.json").write_text(json.dumps([game_factory()]), encoding="utf-8")
    assert _load_script().main(["--dir", str(tmp_path)]) == 0
    assert "[ok] game: 1 record(s)" in capsys.readouterr().out
