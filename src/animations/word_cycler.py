"""
Word Cycler

Index arithmetic for the rotating word list.
"""

from typing import Sequence


def next_index(current: int, words: Sequence[str]) -> int:
    """
    Index of the word that follows `current`.

    Total over all integers: an empty or single-word list always yields 0,
    and any step that would land outside [0, len(words)) wraps to 0, so an
    out-of-range or negative `current` heals on the next call instead of
    propagating.

    Example:
        next_index(3, ["A", "B", "C", "D"])   # → 0
        next_index(-7, ["A", "B", "C", "D"])  # → 0
    """
    if not words:
        return 0
    if len(words) == 1:
        return 0

    candidate = current + 1
    if candidate < 0 or candidate >= len(words):
        return 0
    return candidate
