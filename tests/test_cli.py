"""
Tests for the command line entry point and settings file handling.

Usage:
    pytest tests/test_cli.py
"""

import json
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from main import main
from src.crossword import build_fallback_puzzle
from src.settings import (
    DEFAULT_SETTINGS,
    attempt_budget,
    load_settings,
    save_settings,
)


def test_settings_defaults(tmp_path):
    settings = load_settings(tmp_path / "missing.json")
    assert settings == DEFAULT_SETTINGS
    assert attempt_budget(settings, 9) == 1000
    assert attempt_budget(settings, 6) is None

    # Defaults are copied, not shared
    settings["attempt_budgets"]["5"] = 1
    assert DEFAULT_SETTINGS["attempt_budgets"]["5"] == 100


def test_settings_merge(tmp_path):
    path = tmp_path / "crossword_config.json"
    save_settings({"log_level": "DEBUG", "attempt_budgets": {"7": 50}}, path)

    settings = load_settings(path)
    assert settings["log_level"] == "DEBUG"
    assert settings["default_difficulty"] == "easy"
    assert attempt_budget(settings, 7) == 50
    assert attempt_budget(settings, 5) == 100


def test_settings_invalid_file(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    assert load_settings(path) == DEFAULT_SETTINGS

    path.write_text("[1, 2]", encoding="utf-8")
    assert load_settings(path) == DEFAULT_SETTINGS


def test_generate_command(tmp_path, capsys):
    config = tmp_path / "missing.json"
    assert main(["--config", str(config), "generate", "--difficulty", "medium", "--seed", "4"]) == 0
    first = json.loads(capsys.readouterr().out)
    assert first["difficulty"] == "medium"
    assert len(first["grid"]) == first["size"]

    main(["--config", str(config), "generate", "--difficulty", "medium", "--seed", "4"])
    assert json.loads(capsys.readouterr().out) == first


def test_generate_to_file(tmp_path):
    output = tmp_path / "puzzles.json"
    code = main(["--config", str(tmp_path / "missing.json"), "generate",
                 "--difficulty", "easy", "--seed", "1", "--count", "3", "--output", str(output)])
    assert code == 0
    puzzles = json.loads(output.read_text(encoding="utf-8"))
    assert len(puzzles) == 3
    assert all(p["difficulty"] == "easy" for p in puzzles)


def test_zero_budget_uses_fallback(tmp_path, capsys):
    config = tmp_path / "crossword_config.json"
    save_settings({"attempt_budgets": {"9": 0}}, config)
    main(["--config", str(config), "generate", "--difficulty", "hard"])
    data = json.loads(capsys.readouterr().out)
    assert data["size"] == 5
    assert data["difficulty"] == "hard"


def test_show_command(tmp_path, capsys):
    assert main(["--config", str(tmp_path / "missing.json"), "show",
                 "--difficulty", "easy", "--seed", "2", "--solution"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("easy (5x5)")
    assert "_" in out
    assert "=" in out


def test_validate_command(tmp_path, capsys):
    puzzle = build_fallback_puzzle("easy")
    config = str(tmp_path / "missing.json")

    solved = tmp_path / "solved.json"
    solved.write_text(json.dumps({"grid": puzzle.solved_grid().to_dicts()}), encoding="utf-8")
    assert main(["--config", config, "validate", str(solved)]) == 0
    report = json.loads(capsys.readouterr().out)
    assert report["isValid"] is True

    # Bare grid list, still unsolved
    unsolved = tmp_path / "unsolved.json"
    unsolved.write_text(json.dumps(puzzle.grid.to_dicts()), encoding="utf-8")
    assert main(["--config", config, "validate", str(unsolved)]) == 1
    report = json.loads(capsys.readouterr().out)
    assert report["isValid"] is False
    assert report["horizontalEquations"][0]["isComplete"] is False

    broken = tmp_path / "broken.json"
    broken.write_text("{", encoding="utf-8")
    assert main(["--config", config, "validate", str(broken)]) == 2


def test_validate_command_huge_value(tmp_path, capsys):
    data = build_fallback_puzzle("easy").solved_grid().to_dicts()
    data[0][2]["value"] = int("1" + "0" * 400)
    huge = tmp_path / "huge.json"
    huge.write_text(json.dumps({"grid": data}), encoding="utf-8")
    assert main(["--config", str(tmp_path / "missing.json"), "validate", str(huge)]) == 1
    report = json.loads(capsys.readouterr().out)
    assert report["horizontalEquations"][0]["isComplete"] is False
    assert len(report["verticalEquations"]) == 3


def test_generators_command(tmp_path, capsys):
    assert main(["--config", str(tmp_path / "missing.json"), "generators"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].startswith("chained") and "5x5, 7x7" in lines[0]
    assert lines[1].startswith("dual") and "9x9" in lines[1]
