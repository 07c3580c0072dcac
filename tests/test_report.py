import json
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from pydantic import ValidationError

from lab_grader.config import DUE_UTC
from lab_grader.deadline import evaluate_submission
from lab_grader.detector import detect
from lab_grader.models import GradeReport, ScoreBreakdown, TaskResult
from lab_grader.report import append_summary, build_report, render_markdown, write_report
from lab_grader.rubric import CORS
from lab_grader.scorer import score_task


GENERATED_AT = datetime(2025, 11, 11, 8, 30, tzinfo=timezone.utc)


def cors_result(text: str | None, task=CORS) -> TaskResult:
    signals = detect(text, task)
    return TaskResult(
        key=task.key,
        label=task.label,
        max_points=task.max_points,
        signals=signals,
        score=score_task(task, signals),
        max_scores=ScoreBreakdown(
            completeness=task.completeness_points,
            correctness=task.correctness_points,
            quality=task.quality_points,
        ),
    )


@pytest.fixture
def report(tmp_path: Path) -> GradeReport:
    timing = evaluate_submission(DUE_UTC - timedelta(hours=1))
    return build_report(
        [cors_result('const cors = require("cors");\napp.use(cors());')],
        lab_points=60,
        timing=timing,
        root=tmp_path,
        due=DUE_UTC,
        generated_at=GENERATED_AT,
    )


def test_report_uses_stable_field_names(report: GradeReport):
    data = json.loads(report.to_json())

    assert list(data) == ["metadata", "scoring", "details"]
    assert data["metadata"]["generatedAt"] == "2025-11-11T08:30:00.000Z"
    assert data["metadata"]["dueUTC"] == "2025-11-10T20:59:59Z"
    assert data["metadata"]["lastCommitISO"] == "2025-11-10T19:59:59Z"
    assert data["scoring"] == {
        "labPoints": 60,
        "submissionPoints": 20,
        "submissionStatus": "On time (20/20)",
        "total": 80,
    }
    assert data["details"][0]["todo"] == "TODO 4: Enable CORS (server.js)"
    assert data["details"][0]["points"] == 16
    assert data["details"][0]["breakdown"] == {"completeness": 8, "correctness": 4, "quality": 4}
    assert data["details"][0]["maxBreakdown"] == {"completeness": 8, "correctness": 4, "quality": 4}


def test_unknown_commit_is_reported_as_unknown(tmp_path: Path):
    report = build_report([], 0, evaluate_submission(None), tmp_path, DUE_UTC, GENERATED_AT)

    assert report.metadata.last_commit_iso == "unknown"
    assert report.scoring.total == 10


def test_total_must_match_components():
    with pytest.raises(ValidationError):
        GradeReport(
            metadata={"generatedAt": "x", "repoRoot": "/", "dueUTC": "2025-11-10T20:59:59Z"},
            scoring={"labPoints": 60, "submissionPoints": 20, "submissionStatus": "On time (20/20)", "total": 70},
        )


def test_report_round_trips_through_json(report: GradeReport):
    assert GradeReport.model_validate_json(report.to_json()) == report


def test_markdown_is_derived_from_report(report: GradeReport):
    markdown = render_markdown(report)
    lines = markdown.splitlines()

    assert lines[0] == "# Lab Grade Summary"
    assert lines[1] == "**Total:** 80/100"
    assert lines[2] == "- Lab: **60/80**"
    assert lines[3] == "- Submission: **20/20** — On time (20/20)"
    assert lines[4] == "- Due (Riyadh): 2025-11-10 23:59:59 +03:00"
    assert lines[5] == "- Last commit: 2025-11-10T19:59:59Z"
    assert "### TODO 4: Enable CORS (server.js) — **16/16**" in lines
    assert "*Completeness:* 8/8, *Correctness:* 4/4, *Quality:* 4/4" in lines
    assert "- ✅ Imported cors." in lines
    assert "- ✅ Enabled CORS with app.use(cors())." in lines


def test_write_report_overwrites_previous_artifacts(report: GradeReport, tmp_path: Path):
    output_dir = tmp_path / "dist" / "grading"
    output_dir.mkdir(parents=True)
    (output_dir / "grade.md").write_text("stale", encoding="utf-8")

    paths = write_report(report, "fresh", output_dir)

    assert paths["markdown"].read_text(encoding="utf-8") == "fresh"
    assert json.loads(paths["json"].read_text(encoding="utf-8"))["scoring"]["total"] == 80


def test_append_summary_is_skipped_without_environment():
    assert append_summary("# Summary") is None


def test_append_summary_appends_to_configured_file(monkeypatch, tmp_path: Path):
    sink = tmp_path / "summary.md"
    sink.write_text("previous\n", encoding="utf-8")
    monkeypatch.setenv("GITHUB_STEP_SUMMARY", str(sink))

    assert append_summary("# Summary") == sink
    assert sink.read_text(encoding="utf-8") == "previous\n# Summary"


def test_markdown_uses_each_task_point_values(tmp_path: Path):
    heavy_cors = CORS.model_copy(update={"completeness_points": 10, "correctness_points": 6, "quality_points": 2})
    result = cors_result('const cors = require("cors");', task=heavy_cors)
    report = build_report([result], 0, evaluate_submission(None), tmp_path, DUE_UTC, GENERATED_AT)

    lines = render_markdown(report).splitlines()

    assert "### TODO 4: Enable CORS (server.js) — **9/18**" in lines
    assert "*Completeness:* 5/10, *Correctness:* 3/6, *Quality:* 1/2" in lines
