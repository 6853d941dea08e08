"""
largest_rectangle.py - Largest Rectangle in Histogram (monotonic stack)
======================================================================
The stack holds indices of bars with non-decreasing heights.  When a
shorter bar arrives, every taller bar on top of the stack has found its
right boundary; its left boundary is the bar now beneath it.  Popping
it settles the widest rectangle of exactly that height.

A virtual bar of height 0 after the last index flushes the stack.
Rectangles are reported as (left, right_exclusive, height).
"""

import logging
from typing import Dict, Generator, List, Sequence, Tuple

from algorithms.context import HeightsContext
from algorithms.step import (
    CalculateArea, HistogramComplete, InterviewStep, StackPop, StackPush, UpdateMaxArea,
)

logger = logging.getLogger(__name__)


PSEUDOCODE: List[str] = [
    "def largestRectangle(heights):",                        # 0
    "    stack ← []",                                         # 1
    "    for i in range(n + 1):",                             # 2
    "        h ← heights[i] if i < n else 0",                 # 3
    "        while stack and h < heights[stack.top]:",        # 4
    "            top ← stack.pop()",                          # 5
    "            width ← i - (stack.top if stack else -1) - 1",  # 6
    "            best ← max(best, heights[top] * width)",     # 7
    "        stack.push(i)",                                  # 8
    "    return best",                                        # 9
]

LINE_MAPPING: Dict[str, int] = {
    "stack-pop":       5,
    "calculate-area":  6,
    "update-max-area": 7,
    "stack-push":      8,
    "complete":        9,
}


def compute_largest_rectangle(heights: Sequence[float]) -> float:
    """Direct O(n) answer, no steps."""
    stack: List[int] = []
    best = 0
    n = len(heights)
    for i in range(n + 1):
        h = heights[i] if i < n else 0
        while stack and h < heights[stack[-1]]:
            top = stack.pop()
            left_bound = stack[-1] if stack else -1
            best = max(best, heights[top] * (i - left_bound - 1))
        if i < n:
            stack.append(i)
    return best


def largest_rectangle(context: HeightsContext) -> Generator[InterviewStep, None, None]:
    heights = context.heights
    n = len(heights)

    if n == 0:
        logger.debug("largest_rectangle: empty histogram")
        yield HistogramComplete(max_area=0)
        return

    stack: List[int] = []
    max_area = 0
    rectangle: Tuple[int, int, float] = (0, 0, 0)

    for i in range(n + 1):
        h = heights[i] if i < n else 0

        while stack and h < heights[stack[-1]]:
            top = stack.pop()
            top_height = heights[top]
            yield StackPop(
                popped_index=top,
                popped_height=top_height,
                current_index=i,
                stack=tuple(stack),
            )

            left_bound = stack[-1] if stack else -1
            width = i - left_bound - 1
            area = top_height * width
            yield CalculateArea(
                popped_index=top,
                height=top_height,
                left_bound=left_bound,
                right_bound=i,
                width=width,
                area=area,
            )

            if area > max_area:
                previous, max_area = max_area, area
                rectangle = (left_bound + 1, i, top_height)
                yield UpdateMaxArea(previous_max=previous, new_max=max_area, rectangle=rectangle)

        if i < n:
            stack.append(i)
            yield StackPush(index=i, height=h, stack=tuple(stack))

    yield HistogramComplete(max_area=max_area, rectangle=rectangle)
