"""
Grading pipeline for a single submission.

Locates and reads the rubric's source files, detects signals, scores each
task, applies the floor rule, evaluates submission timing and assembles the
report.
"""

import sys
from datetime import datetime
from pathlib import Path
from typing import Callable

from .config_loader import GraderConfig
from .deadline import evaluate_submission, last_commit_time
from .detector import detect
from .locator import locate, safe_read
from .models import GradeReport, Rubric, ScoreBreakdown, TaskResult
from .policy import any_attempted, apply_floor, is_attempted
from .report import append_summary, build_report, render_markdown, write_report
from .rubric import LAB_RUBRIC
from .scorer import score_task


def read_sources(rubric: Rubric, root: Path, depth: int, verbose: bool = False) -> dict[str, str | None]:
    """
    Locate and read every source file the rubric inspects.

    Args:
        rubric: Rubric listing the source files.
        root: Working-tree root.
        depth: Depth bound for the fallback search.
        verbose: Print where each file was found.

    Returns:
        Mapping of source key to file text (None when not found or unreadable).
    """
    texts: dict[str, str | None] = {}
    for source in rubric.sources:
        path = locate(source, root, depth)
        if verbose:
            print(f"  {source.filename}: {path if path else 'not found'}")
        texts[source.key] = safe_read(path)
    return texts


def grade_tasks(rubric: Rubric, texts: dict[str, str | None], verbose: bool = False) -> list[TaskResult]:
    """
    Detect signals and score every task of the rubric.
    """
    results: list[TaskResult] = []
    for task in rubric.tasks:
        signals = detect(texts.get(task.source), task)
        score = score_task(task, signals)
        results.append(
            TaskResult(
                key=task.key,
                label=task.label,
                max_points=task.max_points,
                signals=signals,
                score=score,
                max_scores=ScoreBreakdown(
                    completeness=task.completeness_points,
                    correctness=task.correctness_points,
                    quality=task.quality_points,
                ),
                attempted=is_attempted(task, signals),
            )
        )
        if verbose:
            hits = ", ".join(name for name, ok in signals.values.items() if ok) or "none"
            print(f"  [{task.key}] {score.total}/{task.max_points} (signals: {hits})")
    return results


def grade_repository(
    config: GraderConfig,
    rubric: Rubric = LAB_RUBRIC,
    generated_at: datetime | None = None,
    commit_reader: Callable[[Path], datetime | None] = last_commit_time,
) -> GradeReport:
    """
    Grade the working tree described by ``config``.

    Args:
        config: Grader configuration.
        rubric: Rubric to apply.
        generated_at: Report timestamp; defaults to now.
        commit_reader: Returns the last commit instant for a root, or None.

    Returns:
        The complete GradeReport.
    """
    root = config.root.resolve()

    texts = read_sources(rubric, root, config.search_depth, verbose=config.verbose)
    results = grade_tasks(rubric, texts, verbose=config.verbose)

    lab_points = sum(r.score.total for r in results)
    attempted = any_attempted(results)
    floored = apply_floor(lab_points, attempted, rubric.floor_points)
    if config.verbose and floored != lab_points:
        print(f"  Lab points raised from {lab_points} to {floored}")

    timing = evaluate_submission(
        commit_reader(root),
        due=config.due_utc,
        on_time_points=rubric.on_time_points,
        late_points=rubric.late_points,
    )

    return build_report(
        results,
        lab_points=floored,
        timing=timing,
        root=root,
        due=config.due_utc,
        generated_at=generated_at,
    )


def publish_report(report: GradeReport, config: GraderConfig, rubric: Rubric = LAB_RUBRIC) -> str:
    """
    Write the report artifacts, append the CI summary and echo to stdout.

    Write failures are reported on stderr; the summary is still echoed.

    Returns:
        The rendered Markdown.
    """
    markdown = render_markdown(
        report,
        title=rubric.title,
        lab_max=rubric.lab_points,
        submission_max=rubric.on_time_points,
    )

    output_dir = config.resolved_output_dir
    try:
        paths = write_report(report, markdown, output_dir)
        if config.verbose:
            print(f"  Saved grade to {paths['json']}")
            print(f"  Saved summary to {paths['markdown']}")
    except OSError as e:
        print(f"Error: Failed to write grade report to {output_dir}: {e}", file=sys.stderr)

    try:
        append_summary(markdown, env_var=config.summary_env_var)
    except OSError as e:
        print(f"Error: Failed to append job summary: {e}", file=sys.stderr)

    print(markdown)
    return markdown
