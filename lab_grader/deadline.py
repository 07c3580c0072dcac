"""
Submission timing: compares the last commit against the lab deadline.

The commit timestamp comes from git. Any failure to obtain it counts as an
unknown timestamp, which is graded as late.
"""

import subprocess
from datetime import datetime, timezone
from pathlib import Path

from .config import (
    DUE_UTC,
    GIT_LAST_COMMIT_ARGS,
    SUBMISSION_LATE_POINTS,
    SUBMISSION_ON_TIME_POINTS,
)
from .models import SubmissionTiming


def parse_timestamp(value: str | None) -> datetime | None:
    """
    Parse an ISO 8601 timestamp with offset into an aware UTC datetime.

    Args:
        value: Timestamp such as ``2025-11-10T23:59:59+03:00`` or ending in ``Z``.

    Returns:
        The instant in UTC, or None if the value is empty, unparseable or
        carries no offset.
    """
    if not value:
        return None
    value = value.strip()
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return None
    return parsed.astimezone(timezone.utc)


def last_commit_time(root: Path) -> datetime | None:
    """
    Ask git for the committer date of the most recent commit in ``root``.

    Args:
        root: Working-tree root.

    Returns:
        The commit instant in UTC, or None when git is unavailable, the tree
        has no history, or the output cannot be parsed.
    """
    try:
        result = subprocess.run(
            GIT_LAST_COMMIT_ARGS,
            cwd=str(root),
            capture_output=True,
            text=True,
            check=False,
        )
    except (OSError, subprocess.SubprocessError):
        return None

    if result.returncode != 0:
        return None
    return parse_timestamp(result.stdout)


def evaluate_submission(
    last_commit: datetime | None,
    due: datetime = DUE_UTC,
    on_time_points: int = SUBMISSION_ON_TIME_POINTS,
    late_points: int = SUBMISSION_LATE_POINTS,
) -> SubmissionTiming:
    """
    Grade submission timing as a two-outcome step function.

    A commit at or before ``due`` is on time; a later or unknown commit is late.
    """
    if last_commit is not None and last_commit <= due:
        return SubmissionTiming(
            last_commit=last_commit,
            points=on_time_points,
            status=f"On time ({on_time_points}/{on_time_points})",
            on_time=True,
        )
    return SubmissionTiming(
        last_commit=last_commit,
        points=late_points,
        status=f"Late ({late_points}/{on_time_points})",
        on_time=False,
    )
