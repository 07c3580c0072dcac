"""
Feature detection over submitted source text.

Signals are plain regex checks; a missing file (None text) never matches.
"""

import re

from .models import Signal, SignalSet, Task


def has(text: str | None, pattern: str) -> bool:
    """
    Check whether ``pattern`` occurs anywhere in ``text``.

    Args:
        text: Source text, or None when the file was not found.
        pattern: Regular expression.

    Returns:
        True if the pattern matches; always False for missing or empty text.
    """
    if not text:
        return False
    return re.search(pattern, text) is not None


def evaluate_signal(text: str | None, signal: Signal) -> bool:
    """
    Evaluate one signal: any of its patterns matching sets it.

    A signal with no patterns only requires the file to be present and
    non-empty.
    """
    if not signal.patterns:
        return bool(text)
    return any(has(text, pattern) for pattern in signal.patterns)


def detect(text: str | None, task: Task) -> SignalSet:
    """
    Evaluate every signal of a task against its source text.

    Args:
        text: Contents of the task's source file, or None.
        task: Task whose signals are evaluated.

    Returns:
        SignalSet with one value and one feedback line per signal, in the
        task's signal order.
    """
    values: dict[str, bool] = {}
    feedback: list[str] = []
    for signal in task.signals:
        ok = evaluate_signal(text, signal)
        values[signal.name] = ok
        feedback.append(signal.found if ok else signal.missing)
    return SignalSet(values=values, feedback=feedback)
