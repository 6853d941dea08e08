"""
min_window.py - Minimum Window Substring
========================================
Variable-size sliding window, "minimize" flavour: the opposite rhythm
to the longest-substring problem.

  - Expand until the window holds every target character (with
    multiplicity).  `formed` counts distinct characters whose required
    count is met, so validity is an O(1) check against `required`.
  - While valid, record the window if it is the smallest so far, then
    shrink from the left.  A shrink that drops a required character
    below its count makes the window invalid again.
"""

import logging
from typing import Dict, Generator, List

from algorithms.context import PatternContext
from algorithms.step import (
    Expand, PatternStep, Shrink, UpdateBest, ValidityCheck, WindowComplete, WindowInit,
)

logger = logging.getLogger(__name__)


PSEUDOCODE: List[str] = [
    "def minWindow(s, t):",                              # 0
    "    need ← count(t); formed ← 0; left ← 0",         # 1
    "    for right in range(len(s)):",                   # 2
    "        window[s[right]] += 1",                     # 3
    "        if window[c] == need[c]: formed += 1",      # 4
    "        while formed == len(need):",                # 5
    "            best ← min(best, s[left:right+1])",     # 6
    "            window[s[left]] -= 1",                  # 7
    "            if window[c] < need[c]: formed -= 1",   # 8
    "            left += 1",                             # 9
    "    return best",                                   # 10
]

LINE_MAPPING: Dict[str, int] = {
    "init":           1,
    "expand":         3,
    "validity-check": 5,
    "update-best":    6,
    "shrink":         7,
    "complete":       10,
}


def _counts(text: str) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for ch in text:
        counts[ch] = counts.get(ch, 0) + 1
    return counts


def compute_min_window(text: str, target: str) -> str:
    """Direct answer, no steps.  Empty string when no window exists."""
    if not text or not target or len(target) > len(text):
        return ""

    need = _counts(target)
    window: Dict[str, int] = {}
    required = len(need)
    formed = 0
    left = 0
    best = (float("inf"), 0)

    for right, ch in enumerate(text):
        window[ch] = window.get(ch, 0) + 1
        if ch in need and window[ch] == need[ch]:
            formed += 1
        while formed == required:
            if right - left + 1 < best[0]:
                best = (right - left + 1, left)
            out = text[left]
            window[out] -= 1
            if out in need and window[out] < need[out]:
                formed -= 1
            left += 1

    if best[0] == float("inf"):
        return ""
    return text[best[1]:best[1] + int(best[0])]


def min_window(context: PatternContext) -> Generator[PatternStep, None, None]:
    chars = context.input
    target = context.target
    n = len(chars)

    if n == 0 or not target or len(target) > n:
        logger.debug("min_window: nothing to search (input=%d, target=%d)", n, len(target or ""))
        yield WindowComplete(best_length=0, best_substring="")
        return

    need = _counts(target)
    required = len(need)
    formed = 0
    left = 0
    best_length = 0
    best_start = 0
    window: Dict[str, int] = {}

    yield WindowInit(left=0, right=-1, frequency_map={}, target_frequency_map=dict(need))

    for right in range(n):
        ch = chars[right]
        before = dict(window)
        window[ch] = window.get(ch, 0) + 1

        just_satisfied = ch in need and window[ch] == need[ch]
        if just_satisfied:
            formed += 1
        valid = formed == required

        yield Expand(
            right=right,
            char=ch,
            frequency_before=before,
            frequency_map=dict(window),
            satisfies_constraint=valid,
        )

        if just_satisfied and valid:
            yield ValidityCheck(
                is_valid=True,
                char=ch,
                index=right,
                reason="constraint-satisfied",
                satisfied_count=formed,
                required_count=required,
            )

        while formed == required and left <= right:
            length = right - left + 1
            if best_length == 0 or length < best_length:
                best_length = length
                best_start = left
                yield UpdateBest(
                    best_length=best_length,
                    window_start=left,
                    window_end=right,
                    substring=chars[left:right + 1],
                )

            out = chars[left]
            before = dict(window)
            window[out] -= 1
            if window[out] == 0:
                del window[out]
            breaks = out in need and window.get(out, 0) < need[out]
            if breaks:
                formed -= 1
            left += 1

            yield Shrink(
                left=left,
                char=out,
                frequency_before=before,
                frequency_map=dict(window),
                window_valid=formed == required,
            )

            if breaks:
                yield ValidityCheck(
                    is_valid=False,
                    char=out,
                    index=left - 1,
                    reason="missing-chars",
                    satisfied_count=formed,
                    required_count=required,
                )

    yield WindowComplete(
        best_length=best_length,
        best_substring=chars[best_start:best_start + best_length],
    )
