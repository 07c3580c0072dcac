"""
Pydantic models for the Lab Grader.

Defines the declarative rubric table (sources, signals, gates, attempt rules),
the intermediate grading results, and the report written to disk.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .config import (
    COMPLETENESS_POINTS,
    CORRECTNESS_POINTS,
    FLOOR_POINTS,
    LAB_POINTS,
    QUALITY_POINTS,
    SUBMISSION_LATE_POINTS,
    SUBMISSION_ON_TIME_POINTS,
)


class SourceFile(BaseModel):
    """
    A submission file the rubric inspects.

    Attributes:
        key: Identifier tasks use to refer to this file.
        filename: Exact file name used by the fallback tree search.
        candidates: Relative paths probed first, most likely first.
    """

    key: str = Field(..., description="Identifier referenced by tasks")
    filename: str = Field(..., description="File name for the fallback search")
    candidates: list[str] = Field(default_factory=list, description="Relative paths to probe in order")


class Signal(BaseModel):
    """
    A boolean fact detected in a source file.

    Attributes:
        name: Signal name, unique within its task.
        patterns: Regex alternatives; any match sets the signal. An empty
            list means the source file was found and is non-empty.
        found: Feedback line when the signal is set.
        missing: Feedback line when the signal is not set.
    """

    name: str = Field(..., description="Signal name")
    patterns: list[str] = Field(default_factory=list, description="Regex alternatives (any match counts)")
    found: str = Field(..., description="Feedback when detected")
    missing: str = Field(..., description="Feedback when not detected")


class AttemptRule(BaseModel):
    """
    Decides whether a task shows a genuine attempt.

    True when every ``all_of`` signal is set and, if ``any_of`` is not empty,
    at least one ``any_of`` signal is set.
    """

    all_of: list[str] = Field(default_factory=list)
    any_of: list[str] = Field(default_factory=list)


class Task(BaseModel):
    """
    One gradable TODO of the lab.

    Attributes:
        key: Short task identifier.
        label: Human-readable title used in reports.
        source: Key of the SourceFile the signals are evaluated against.
        signals: Ordered signals; all of them count toward completeness.
        correctness_gate: Signals that must all be set for full correctness.
        quality_gate: Signals that must all be set for full quality.
        attempt: Rule deciding whether the task was genuinely attempted.
    """

    key: str
    label: str
    source: str
    signals: list[Signal]
    correctness_gate: list[str]
    quality_gate: list[str]
    attempt: AttemptRule
    completeness_points: int = Field(default=COMPLETENESS_POINTS, ge=0)
    correctness_points: int = Field(default=CORRECTNESS_POINTS, ge=0)
    quality_points: int = Field(default=QUALITY_POINTS, ge=0)

    @property
    def max_points(self) -> int:
        return self.completeness_points + self.correctness_points + self.quality_points

    @property
    def signal_names(self) -> list[str]:
        return [s.name for s in self.signals]

    @model_validator(mode="after")
    def _check_references(self) -> "Task":
        names = set(self.signal_names)
        if len(names) != len(self.signals):
            raise ValueError(f"Duplicate signal names in task {self.key!r}")
        referenced = (
            self.correctness_gate
            + self.quality_gate
            + self.attempt.all_of
            + self.attempt.any_of
        )
        unknown = [name for name in referenced if name not in names]
        if unknown:
            raise ValueError(f"Task {self.key!r} references unknown signals: {', '.join(unknown)}")
        return self


class Rubric(BaseModel):
    """
    Complete rubric for one lab.

    Attributes:
        title: Lab title.
        sources: Files the tasks inspect.
        tasks: Ordered gradable tasks.
        lab_points: Maximum lab points across all tasks.
        floor_points: Minimum lab points for an attempted submission.
        on_time_points: Submission points when committed before the deadline.
        late_points: Submission points otherwise.
    """

    title: str
    sources: list[SourceFile]
    tasks: list[Task]
    lab_points: int = LAB_POINTS
    floor_points: int = FLOOR_POINTS
    on_time_points: int = SUBMISSION_ON_TIME_POINTS
    late_points: int = SUBMISSION_LATE_POINTS

    def source(self, key: str) -> SourceFile:
        for source in self.sources:
            if source.key == key:
                return source
        raise KeyError(key)

    @model_validator(mode="after")
    def _check_totals(self) -> "Rubric":
        keys = {s.key for s in self.sources}
        for task in self.tasks:
            if task.source not in keys:
                raise ValueError(f"Task {task.key!r} uses unknown source {task.source!r}")
        total = sum(t.max_points for t in self.tasks)
        if total != self.lab_points:
            raise ValueError(f"Task points add up to {total}, expected {self.lab_points}")
        return self


class SignalSet(BaseModel):
    """
    Detected signals for one task, with one feedback line per signal.
    """

    model_config = ConfigDict(frozen=True)

    values: dict[str, bool] = Field(default_factory=dict)
    feedback: list[str] = Field(default_factory=list)

    def __getitem__(self, name: str) -> bool:
        return self.values[name]


class TaskScore(BaseModel):
    """
    Sub-scores for one task. The total is always the sum of the sub-scores.
    """

    completeness: int = Field(..., ge=0)
    correctness: int = Field(..., ge=0)
    quality: int = Field(..., ge=0)
    total: int = Field(..., ge=0)

    @model_validator(mode="after")
    def _check_total(self) -> "TaskScore":
        if self.total != self.completeness + self.correctness + self.quality:
            raise ValueError("total must equal the sum of the sub-scores")
        return self


class ScoreBreakdown(BaseModel):
    completeness: int
    correctness: int
    quality: int


class TaskResult(BaseModel):
    """
    Grading outcome of a single task.
    """

    key: str
    label: str
    max_points: int
    signals: SignalSet
    score: TaskScore
    max_scores: ScoreBreakdown
    attempted: bool = False


class SubmissionTiming(BaseModel):
    """
    Result of comparing the last commit against the deadline.

    Attributes:
        last_commit: Last commit instant in UTC, or None if unknown.
        points: Submission points awarded.
        status: Human-readable status, e.g. "On time (20/20)".
    """

    last_commit: datetime | None = None
    points: int = Field(..., ge=0)
    status: str
    on_time: bool = False


class ReportMetadata(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    generated_at: str = Field(..., alias="generatedAt")
    repo_root: str = Field(..., alias="repoRoot")
    due_utc: str = Field(..., alias="dueUTC")
    last_commit_iso: str = Field("unknown", alias="lastCommitISO")


class ReportScoring(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    lab_points: int = Field(..., ge=0, alias="labPoints")
    submission_points: int = Field(..., ge=0, alias="submissionPoints")
    submission_status: str = Field(..., alias="submissionStatus")
    total: int = Field(..., ge=0, le=100)


class TaskBreakdown(BaseModel):
    """
    Per-task entry of the report.

    Attributes:
        todo: Task label.
        points: Task total.
        max_points: Maximum task points.
        breakdown: Sub-scores.
        max_breakdown: Maximum points per sub-score.
        feedback: Ordered feedback lines, one per signal.
    """

    model_config = ConfigDict(populate_by_name=True)

    todo: str
    points: int = Field(..., ge=0)
    max_points: int = Field(..., ge=0, alias="maxPoints")
    breakdown: ScoreBreakdown
    max_breakdown: ScoreBreakdown = Field(..., alias="maxBreakdown")
    feedback: list[str] = Field(default_factory=list)


class GradeReport(BaseModel):
    """
    Complete grade report for one submission.

    Serialized with camelCase field names under three stable top-level
    keys: ``metadata``, ``scoring`` and ``details``.
    """

    model_config = ConfigDict(populate_by_name=True)

    metadata: ReportMetadata
    scoring: ReportScoring
    details: list[TaskBreakdown] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_total(self) -> "GradeReport":
        expected = self.scoring.lab_points + self.scoring.submission_points
        if self.scoring.total != expected:
            raise ValueError("total must equal lab points plus submission points")
        return self

    def to_json(self) -> str:
        return self.model_dump_json(indent=2, by_alias=True)
