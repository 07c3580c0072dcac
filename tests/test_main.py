import json
from pathlib import Path

from main import main


def test_main_grades_tree_and_exits_successfully(complete_submission: Path, capsys):
    exit_code = main(["--root", str(complete_submission)])

    grade = json.loads((complete_submission / "dist" / "grading" / "grade.json").read_text(encoding="utf-8"))
    assert exit_code == 0
    assert grade["scoring"]["labPoints"] == 80
    assert grade["metadata"]["repoRoot"] == str(complete_submission.resolve())
    assert "# Lab Grade Summary" in capsys.readouterr().out


def test_main_exits_successfully_on_empty_tree(tmp_path: Path):
    assert main(["--root", str(tmp_path)]) == 0
    assert (tmp_path / "dist" / "grading" / "grade.md").exists()


def test_main_honours_output_dir_and_config(complete_submission: Path, tmp_path: Path, capsys):
    (complete_submission / "grader_config.yml").write_text("verbose: true\n", encoding="utf-8")
    output_dir = tmp_path / "artifacts"

    assert main(["--root", str(complete_submission), "--output-dir", str(output_dir)]) == 0

    out = capsys.readouterr().out
    assert "Loaded configuration from" in out
    assert "server.js:" in out
    assert (output_dir / "grade.json").exists()


def test_main_falls_back_to_defaults_on_bad_config(tmp_path: Path, capsys):
    bad = tmp_path / "bad.yml"
    bad.write_text("search_depth: -3\n", encoding="utf-8")

    assert main(["--root", str(tmp_path), "--config", str(bad)]) == 0
    assert "Warning: Error loading config" in capsys.readouterr().err


def test_main_reports_usage_and_exits_successfully_on_unknown_flag(capsys):
    assert main(["--no-such-flag"]) == 0
    assert "Usage:" in capsys.readouterr().err
