from __future__ import annotations

import importlib
import json
from pathlib import Path

import pytest


def test_console_entrypoint_exposes_app() -> None:
    pytest.importorskip("typer")

    module = importlib.import_module("gridcoder.main")

    assert hasattr(module, "app")
    assert module.app is not None


def test_run_command_reports_success(tmp_path: Path) -> None:
    typer_testing = pytest.importorskip("typer.testing")
    from gridcoder.main import app

    script = tmp_path / "solution.py"
    script.write_text("for _ in range(4):\n    move_right()\npick()\n", encoding="utf-8")

    result = typer_testing.CliRunner().invoke(app, ["run", "lvl-006-for-loop", str(script)])

    assert result.exit_code == 0
    assert "All goals completed!" in result.stdout


def test_run_command_fails_on_unmet_goals(tmp_path: Path) -> None:
    typer_testing = pytest.importorskip("typer.testing")
    from gridcoder.main import app

    script = tmp_path / "attempt.py"
    script.write_text("pick()\n", encoding="utf-8")

    result = typer_testing.CliRunner().invoke(app, ["run", "lvl-006-for-loop", str(script)])

    assert result.exit_code == 1
    assert "There is no item here." in result.stdout


def test_unknown_level_exits_with_error() -> None:
    typer_testing = pytest.importorskip("typer.testing")
    from gridcoder.main import app

    result = typer_testing.CliRunner().invoke(app, ["show", "lvl-404"])

    assert result.exit_code == 1
    assert "Unknown level id" in result.stdout


def test_self_check_passes_for_bundled_levels() -> None:
    typer_testing = pytest.importorskip("typer.testing")
    from gridcoder.main import app

    result = typer_testing.CliRunner().invoke(app, ["self-check"])

    assert result.exit_code == 0
    assert "passed" in result.stdout


def test_export_and_import_commands(tmp_path: Path) -> None:
    typer_testing = pytest.importorskip("typer.testing")
    from gridcoder.main import app

    runner = typer_testing.CliRunner()
    levels_file = tmp_path / "levels.json"
    summary_file = tmp_path / "summary.json"

    exported = runner.invoke(app, ["export", str(levels_file)])
    imported = runner.invoke(app, ["import", str(levels_file), "--summary", str(summary_file)])

    assert exported.exit_code == 0
    assert imported.exit_code == 0
    assert len(json.loads(summary_file.read_text(encoding="utf-8"))) == 10


def test_import_rejects_broken_file(tmp_path: Path) -> None:
    typer_testing = pytest.importorskip("typer.testing")
    from gridcoder.main import app

    broken = tmp_path / "broken.json"
    broken.write_text('[{"id": "x"}]', encoding="utf-8")

    result = typer_testing.CliRunner().invoke(app, ["import", str(broken)])

    assert result.exit_code == 1


def test_self_check_rejects_level_file_without_start(tmp_path: Path) -> None:
    typer_testing = pytest.importorskip("typer.testing")
    from gridcoder.levels import LEVELS, dump_levels
    from gridcoder.main import app

    payload = json.loads(dump_levels(LEVELS[:1]))
    payload[0]["map"].update(rows=1, cols=4, tiles=["...."])
    levels_file = tmp_path / "levels.json"
    levels_file.write_text(json.dumps(payload), encoding="utf-8")

    result = typer_testing.CliRunner().invoke(app, ["self-check", "--levels-file", str(levels_file)])

    assert result.exit_code == 1
    assert result.exception is None or isinstance(result.exception, SystemExit)
