"""
trapping_rain_water.py - Trapping Rain Water (two pointers)
===========================================================
Water above bar i is  min(max_left[i], max_right[i]) - height[i].

Two pointers walk inwards from both ends.  Whichever side has the
smaller running maximum is the bottleneck, so the bar next to it can be
settled immediately: either it raises that side's maximum, or it traps
`max - height` units.  O(n) time, O(1) extra space.
"""

import logging
from typing import Dict, Generator, List, Sequence

from algorithms.context import HeightsContext
from algorithms.step import (
    Compare, FillWater, InterviewStep, MoveLeft, MoveRight, RainInit,
    RainWaterComplete, UpdateMaxLeft, UpdateMaxRight,
)

logger = logging.getLogger(__name__)


PSEUDOCODE: List[str] = [
    "def trap(height):",                                 # 0
    "    left, right ← 0, n - 1",                        # 1
    "    maxL, maxR ← height[left], height[right]",      # 2
    "    while left < right:",                           # 3
    "        if maxL <= maxR:",                          # 4
    "            left += 1",                             # 5
    "            maxL ← max(maxL, height[left])",        # 6
    "            water += maxL - height[left]",          # 7
    "        else:",                                     # 8
    "            right -= 1",                            # 9
    "            maxR ← max(maxR, height[right])",       # 10
    "            water += maxR - height[right]",         # 11
    "    return water",                                  # 12
]

LINE_MAPPING: Dict[str, int] = {
    "init":             2,
    "compare":          4,
    "move-left":        5,
    "update-max-left":  6,
    "move-right":       9,
    "update-max-right": 10,
    "fill-water":       7,
    "complete":         12,
}


def compute_trapped_water(heights: Sequence[float]) -> float:
    """Direct O(n) answer, no steps."""
    n = len(heights)
    if n < 3:
        return 0
    left, right = 0, n - 1
    max_left, max_right = heights[left], heights[right]
    total = 0
    while left < right:
        if max_left <= max_right:
            left += 1
            max_left = max(max_left, heights[left])
            total += max_left - heights[left]
        else:
            right -= 1
            max_right = max(max_right, heights[right])
            total += max_right - heights[right]
    return total


def trapping_rain_water(context: HeightsContext) -> Generator[InterviewStep, None, None]:
    heights = context.heights
    n = len(heights)

    if n < 3:
        logger.debug("trapping_rain_water: %d bar(s), nothing can be trapped", n)
        yield RainWaterComplete(total_water=0)
        return

    left, right = 0, n - 1
    max_left, max_right = heights[left], heights[right]
    total = 0

    yield RainInit(left=left, right=right, max_left=max_left, max_right=max_right)

    while left < right:
        if max_left <= max_right:
            yield Compare(left=left, right=right, smaller_side="left")

            left += 1
            yield MoveLeft(from_index=left - 1, to_index=left)

            h = heights[left]
            if h > max_left:
                previous, max_left = max_left, h
                yield UpdateMaxLeft(index=left, previous_max=previous, new_max=max_left)
            elif max_left - h > 0:
                total += max_left - h
                yield FillWater(index=left, water_amount=max_left - h, total_water=total, side="left")
        else:
            yield Compare(left=left, right=right, smaller_side="right")

            right -= 1
            yield MoveRight(from_index=right + 1, to_index=right)

            h = heights[right]
            if h > max_right:
                previous, max_right = max_right, h
                yield UpdateMaxRight(index=right, previous_max=previous, new_max=max_right)
            elif max_right - h > 0:
                total += max_right - h
                yield FillWater(index=right, water_amount=max_right - h, total_water=total, side="right")

    yield RainWaterComplete(total_water=total)
