"""
Rubric scoring: turns a task's signals into completeness, correctness and
quality sub-scores.
"""

import math

from .models import SignalSet, Task, TaskScore


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero (for non-negative values)."""
    return int(math.floor(value + 0.5))


def score_bucket(flags: list[bool], max_points: int) -> int:
    """
    Linear partial credit: the share of set flags scaled to ``max_points``.

    Args:
        flags: Signal values; every one of them counts.
        max_points: Points for all flags set.

    Returns:
        Rounded points in ``[0, max_points]``.
    """
    if not flags:
        return 0
    hits = sum(1 for flag in flags if flag)
    return round_half_up(hits / len(flags) * max_points)


def qualitative(ok: bool, points: int) -> int:
    """Full points when ``ok``, otherwise half of them (rounded)."""
    return points if ok else round_half_up(points / 2)


def gate_passes(signals: SignalSet, gate: list[str]) -> bool:
    """True when every signal named in ``gate`` is set."""
    return all(signals[name] for name in gate)


def score_task(task: Task, signals: SignalSet) -> TaskScore:
    """
    Score one task from its detected signals.

    Each sub-score is rounded on its own, so the total can differ slightly
    from scaling the combined ratio.
    """
    completeness = score_bucket([signals[name] for name in task.signal_names], task.completeness_points)
    correctness = qualitative(gate_passes(signals, task.correctness_gate), task.correctness_points)
    quality = qualitative(gate_passes(signals, task.quality_gate), task.quality_points)
    return TaskScore(
        completeness=completeness,
        correctness=correctness,
        quality=quality,
        total=completeness + correctness + quality,
    )
