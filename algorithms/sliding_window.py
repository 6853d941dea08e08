"""
sliding_window.py - Longest Substring Without Repeating Characters
==================================================================
Variable-size sliding window, "maximize" flavour.

  1. Expand `right` one character at a time.
  2. If the new character is a duplicate, the window is invalid:
     shrink from `left` until that character appears only once.
  3. After each expansion the window is valid; record it if it is the
     longest seen so far.

Both pointers only move forward, so the run is O(n).  Every expand and
shrink step carries the frequency map before and after the change.
"""

import logging
from typing import Dict, Generator, List

from algorithms.context import PatternContext
from algorithms.step import (
    Expand, PatternStep, Shrink, UpdateBest, ValidityCheck, WindowComplete, WindowInit,
)

logger = logging.getLogger(__name__)


PSEUDOCODE: List[str] = [
    "def lengthOfLongestSubstring(s):",                  # 0
    "    left ← 0; best ← 0; freq ← {}",                 # 1
    "    for right in range(len(s)):",                   # 2
    "        freq[s[right]] += 1",                       # 3
    "        while freq[s[right]] > 1:",                 # 4
    "            freq[s[left]] -= 1",                    # 5
    "            left += 1",                             # 6
    "        best ← max(best, right - left + 1)",        # 7
    "    return best",                                   # 8
]

LINE_MAPPING: Dict[str, int] = {
    "init":           1,
    "expand":         3,
    "validity-check": 4,
    "shrink":         5,
    "update-best":    7,
    "complete":       8,
}


def compute_longest_substring(text: str) -> int:
    """Direct O(n) answer, no steps."""
    last_seen: Dict[str, int] = {}
    left = best = 0
    for right, ch in enumerate(text):
        if last_seen.get(ch, -1) >= left:
            left = last_seen[ch] + 1
        last_seen[ch] = right
        best = max(best, right - left + 1)
    return best


def sliding_window(context: PatternContext) -> Generator[PatternStep, None, None]:
    chars = context.input
    n = len(chars)

    if n == 0:
        logger.debug("sliding_window: empty input")
        yield WindowComplete(best_length=0, best_substring="")
        return

    left = 0
    best_length = 0
    best_start = 0
    freq: Dict[str, int] = {}

    yield WindowInit(left=0, right=-1, frequency_map={})

    for right in range(n):
        ch = chars[right]
        before = dict(freq)
        freq[ch] = freq.get(ch, 0) + 1
        duplicate = freq[ch] > 1

        yield Expand(
            right=right,
            char=ch,
            frequency_before=before,
            frequency_map=dict(freq),
            causes_duplicate=duplicate,
        )

        if duplicate:
            yield ValidityCheck(
                is_valid=False,
                char=ch,
                index=right,
                reason="duplicate",
                frequency=freq[ch],
            )

            while freq[ch] > 1 and left < right:
                left_char = chars[left]
                before = dict(freq)
                freq[left_char] -= 1
                if freq[left_char] == 0:
                    del freq[left_char]
                left += 1

                yield Shrink(
                    left=left,
                    char=left_char,
                    frequency_before=before,
                    frequency_map=dict(freq),
                    window_valid=freq.get(ch, 0) <= 1,
                )

        length = right - left + 1
        if length > best_length:
            best_length = length
            best_start = left
            yield UpdateBest(
                best_length=best_length,
                window_start=left,
                window_end=right,
                substring=chars[left:right + 1],
            )

    yield WindowComplete(
        best_length=best_length,
        best_substring=chars[best_start:best_start + best_length],
    )
