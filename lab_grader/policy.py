"""
Attempt detection and the lab score floor.

A submission that genuinely attempted at least one task but scored between
0 and the floor is raised to the floor. File presence alone is not an attempt.
"""

from .config import FLOOR_POINTS
from .models import SignalSet, Task, TaskResult


def is_attempted(task: Task, signals: SignalSet) -> bool:
    """
    Evaluate a task's attempt rule.

    Args:
        task: Task providing the rule.
        signals: Detected signals for the task.

    Returns:
        True when all ``all_of`` signals are set and, if ``any_of`` is not
        empty, at least one of those is set.
    """
    rule = task.attempt
    if not all(signals[name] for name in rule.all_of):
        return False
    if rule.any_of and not any(signals[name] for name in rule.any_of):
        return False
    return bool(rule.all_of or rule.any_of)


def any_attempted(results: list[TaskResult]) -> bool:
    return any(r.attempted for r in results)


def apply_floor(lab_points: int, attempted: bool, floor: int = FLOOR_POINTS) -> int:
    """
    Raise an attempted lab score strictly between 0 and ``floor`` to ``floor``.

    Args:
        lab_points: Summed task totals.
        attempted: Whether any task was genuinely attempted.
        floor: Minimum lab points for an attempted submission.

    Returns:
        The floor-adjusted lab points.
    """
    if attempted and 0 < lab_points < floor:
        return floor
    return lab_points
