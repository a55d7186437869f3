"""CLI entrypoint for gridcoder."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich import print
from rich.logging import RichHandler

from gridcoder.config import settings
from gridcoder.evaluation import GoalEvaluator
from gridcoder.levels import (
    LEVELS,
    LevelFormatError,
    check_reference_solutions,
    export_levels,
    get_level,
    import_levels,
    write_summary,
)
from gridcoder.models import RunResult
from gridcoder.script_runtime import ExecutionBudget, ScriptRuntime
from gridcoder.world import WorldEngine

app = typer.Typer(help="Grid-world coding sandbox")


@app.callback()
def _configure_logging() -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=False, show_path=False)],
    )


def _build_runtime() -> ScriptRuntime:
    return ScriptRuntime(
        WorldEngine(),
        budget=ExecutionBudget(time_limit_ms=settings.time_limit_ms, max_steps=settings.max_steps),
    )


def _format_result(result: RunResult) -> dict:
    return {
        "success": result.success,
        "message": result.message,
        "fault": result.fault.value if result.fault else None,
        "goals_completed": list(result.goals_completed),
        "log": [
            {"kind": entry.kind.value, "message": entry.message, "line": entry.line} for entry in result.log
        ],
    }


@app.command()
def start() -> None:
    """Show runtime configuration."""
    print(
        {
            "app_name": settings.app_name,
            "time_limit_ms": settings.time_limit_ms,
            "max_steps": settings.max_steps,
            "levels_path": settings.levels_path,
            "levels": len(LEVELS),
        }
    )


@app.command("levels")
def list_levels() -> None:
    """List the bundled levels."""
    print([{"id": level.id, "title": level.title, "goals": list(level.goals)} for level in LEVELS])


@app.command()
def show(level_id: str) -> None:
    """Show a level's story, map, commands and checks."""
    try:
        level = get_level(level_id)
    except KeyError as exc:
        print({"error": str(exc)})
        raise typer.Exit(code=1)

    print(
        {
            "id": level.id,
            "title": level.title,
            "story": level.story,
            "map": list(level.map.tiles),
            "api": list(level.api),
            "goals": list(level.goals),
            "checks": [GoalEvaluator.describe(criterion) for criterion in level.tests],
            "starter_code": level.starter_code,
        }
    )


@app.command()
def run(
    level_id: str,
    script_file: Path = typer.Argument(..., help="Path to the learner's Python script"),
) -> None:
    """Run a script against a level and report the result."""
    try:
        level = get_level(level_id)
    except KeyError as exc:
        print({"error": str(exc)})
        raise typer.Exit(code=1)
    if not script_file.exists():
        raise typer.BadParameter(f"Script not found: {script_file}")

    result = _build_runtime().run(level, script_file.read_text(encoding="utf-8"))
    print(_format_result(result))
    if not result.success:
        raise typer.Exit(code=1)


@app.command("self-check")
def self_check(
    levels_file: Path = typer.Option(None, help="Check levels from an exported file instead of the bundled ones"),
) -> None:
    """Run every level's reference solution and fail if one does not pass."""
    levels = LEVELS
    if levels_file is not None:
        try:
            levels = import_levels(levels_file)
        except (FileNotFoundError, LevelFormatError) as exc:
            print({"error": str(exc)})
            raise typer.Exit(code=1)

    checks = check_reference_solutions(levels, _build_runtime(), stop_on_failure=True)
    for check in checks:
        if check.passed:
            print({"level": check.level_id, "passed": True})
        else:
            print({"level": check.level_id, "passed": False, "result": _format_result(check.result)})
            raise typer.Exit(code=1)
    print({"self_check": "passed", "levels": len(checks)})


@app.command("export")
def export_command(path: Path = typer.Argument(None, help="Target JSON file")) -> None:
    """Export the bundled levels to a JSON file."""
    target = export_levels(LEVELS, path or settings.levels_path)
    print({"exported": len(LEVELS), "path": str(target)})


@app.command("import")
def import_command(
    path: Path = typer.Argument(None, help="Source JSON file"),
    summary: Path = typer.Option(None, help="Where to write a short summary of the imported levels"),
) -> None:
    """Validate levels from a JSON file."""
    source = path or Path(settings.levels_path)
    try:
        levels = import_levels(source)
    except (FileNotFoundError, LevelFormatError) as exc:
        print({"error": str(exc)})
        raise typer.Exit(code=1)

    payload: dict = {"imported": len(levels), "path": str(source)}
    if summary is not None:
        payload["summary_path"] = str(write_summary(levels, summary))
    print(payload)


if __name__ == "__main__":
    app()
