"""
Configuration constants for the Lab Grader.
"""

from datetime import datetime, timedelta, timezone
from pathlib import Path


# Deadline: 2025-11-10 23:59:59 in Riyadh (UTC+3), stored as the UTC instant
DUE_UTC: datetime = datetime(2025, 11, 10, 20, 59, 59, tzinfo=timezone.utc)
LOCAL_TIMEZONE: timezone = timezone(timedelta(hours=3))
LOCAL_TIMEZONE_LABEL: str = "Riyadh"

# Point values
COMPLETENESS_POINTS: int = 8
CORRECTNESS_POINTS: int = 4
QUALITY_POINTS: int = 4
LAB_POINTS: int = 80
FLOOR_POINTS: int = 60
SUBMISSION_ON_TIME_POINTS: int = 20
SUBMISSION_LATE_POINTS: int = 10

# File search
SEARCH_DEPTH: int = 5

# Git query for the last commit's committer date (strict ISO 8601)
GIT_LAST_COMMIT_ARGS: list[str] = ["git", "log", "-1", "--format=%cI"]

# Output artifacts
DEFAULT_OUTPUT_DIR: Path = Path("dist") / "grading"
GRADE_OUTPUT_FILENAME: str = "grade.json"
REPORT_FILENAME: str = "grade.md"
SUMMARY_ENV_VAR: str = "GITHUB_STEP_SUMMARY"

# Default configuration file (optional)
DEFAULT_CONFIG_FILENAME: str = "grader_config.yml"
