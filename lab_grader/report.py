"""
Report builder for grading results.

Builds a single GradeReport and derives both artifacts from it: the JSON
report and the Markdown summary.
"""

import os
from datetime import datetime, timezone
from pathlib import Path

from .config import (
    GRADE_OUTPUT_FILENAME,
    LOCAL_TIMEZONE,
    LOCAL_TIMEZONE_LABEL,
    REPORT_FILENAME,
    SUMMARY_ENV_VAR,
)
from .models import (
    GradeReport,
    ReportMetadata,
    ReportScoring,
    ScoreBreakdown,
    SubmissionTiming,
    TaskBreakdown,
    TaskResult,
)


def to_iso_utc(value: datetime, timespec: str = "seconds") -> str:
    """Format an aware datetime as ISO 8601 in UTC with a ``Z`` suffix."""
    utc = value.astimezone(timezone.utc)
    return utc.isoformat(timespec=timespec).replace("+00:00", "Z")


def from_iso_utc(value: str) -> datetime:
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def build_report(
    results: list[TaskResult],
    lab_points: int,
    timing: SubmissionTiming,
    root: Path,
    due: datetime,
    generated_at: datetime | None = None,
) -> GradeReport:
    """
    Assemble the grade report.

    Args:
        results: Per-task results, in rubric order.
        lab_points: Floor-adjusted lab points.
        timing: Submission timing outcome.
        root: Working-tree root that was graded.
        due: Deadline instant.
        generated_at: Report timestamp; defaults to now.

    Returns:
        GradeReport whose total is lab points plus submission points.
    """
    generated_at = generated_at or datetime.now(timezone.utc)

    metadata = ReportMetadata(
        generated_at=to_iso_utc(generated_at, timespec="milliseconds"),
        repo_root=str(root),
        due_utc=to_iso_utc(due),
        last_commit_iso=to_iso_utc(timing.last_commit) if timing.last_commit else "unknown",
    )
    scoring = ReportScoring(
        lab_points=lab_points,
        submission_points=timing.points,
        submission_status=timing.status,
        total=lab_points + timing.points,
    )
    details = [
        TaskBreakdown(
            todo=result.label,
            points=result.score.total,
            max_points=result.max_points,
            breakdown=ScoreBreakdown(
                completeness=result.score.completeness,
                correctness=result.score.correctness,
                quality=result.score.quality,
            ),
            max_breakdown=result.max_scores,
            feedback=list(result.signals.feedback),
        )
        for result in results
    ]
    return GradeReport(metadata=metadata, scoring=scoring, details=details)


def render_markdown(
    report: GradeReport,
    title: str = "Lab Grade Summary",
    lab_max: int = 80,
    submission_max: int = 20,
) -> str:
    """
    Render the human-readable summary of a report.

    Args:
        report: Report to render.
        title: Heading of the summary.
        lab_max: Maximum lab points shown next to the lab score.
        submission_max: Maximum submission points.

    Returns:
        Markdown text.
    """
    scoring = report.scoring
    due_local = from_iso_utc(report.metadata.due_utc).astimezone(LOCAL_TIMEZONE)
    offset = due_local.isoformat()[-6:]
    total_max = lab_max + submission_max

    lines = [
        f"# {title}",
        f"**Total:** {scoring.total}/{total_max}",
        f"- Lab: **{scoring.lab_points}/{lab_max}**",
        f"- Submission: **{scoring.submission_points}/{submission_max}** — {scoring.submission_status}",
        f"- Due ({LOCAL_TIMEZONE_LABEL}): {due_local:%Y-%m-%d %H:%M:%S} {offset}",
        f"- Last commit: {report.metadata.last_commit_iso}",
        "",
        "## Per-TODO Feedback (what you implemented vs. what’s missing)",
    ]
    for item in report.details:
        lines.append(f"### {item.todo} — **{item.points}/{item.max_points}**")
        lines.append(
            f"*Completeness:* {item.breakdown.completeness}/{item.max_breakdown.completeness}, "
            f"*Correctness:* {item.breakdown.correctness}/{item.max_breakdown.correctness}, "
            f"*Quality:* {item.breakdown.quality}/{item.max_breakdown.quality}"
        )
        lines.append("")
        lines.append("\n".join(f"- {line}" for line in item.feedback))
        lines.append("")

    return "\n".join(lines)


def write_report(report: GradeReport, markdown: str, output_dir: Path) -> dict[str, Path]:
    """
    Write the JSON and Markdown artifacts, overwriting previous runs.

    Args:
        report: Report to serialize.
        markdown: Rendered Markdown for the same report.
        output_dir: Directory for the artifacts; created if missing.

    Returns:
        Dictionary of output file paths.

    Raises:
        OSError: If the directory or a file cannot be written.
    """
    output_dir.mkdir(parents=True, exist_ok=True)

    json_path = output_dir / GRADE_OUTPUT_FILENAME
    with open(json_path, "w", encoding="utf-8") as f:
        f.write(report.to_json())

    md_path = output_dir / REPORT_FILENAME
    with open(md_path, "w", encoding="utf-8") as f:
        f.write(markdown)

    return {"json": json_path, "markdown": md_path}


def append_summary(markdown: str, env_var: str = SUMMARY_ENV_VAR) -> Path | None:
    """
    Append the Markdown summary to the CI step summary file, if configured.

    Args:
        markdown: Text to append.
        env_var: Environment variable naming the summary file.

    Returns:
        The summary path, or None when the variable is not set.

    Raises:
        OSError: If the summary file cannot be written.
    """
    target = os.environ.get(env_var)
    if not target:
        return None
    path = Path(target)
    with open(path, "a", encoding="utf-8") as f:
        f.write(markdown)
    return path
