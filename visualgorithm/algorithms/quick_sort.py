"""
quick_sort.py — Quick Sort
===========================
Lomuto partition with the last element of each range as pivot.  Ranges
are processed from an explicit stack (no Python recursion limit issues
on already-sorted input) in the same order the recursive version would.

Snapshots (partition snapshots carry pivot and left/right = [low, high]):
  1. Initial array
  2. Partition opens                         →  pivot + bounds only
  3. Every comparison against the pivot      →  comparing = (j, high)
  4. Swap into the "< pivot" zone (i != j)   →  swapping = (i, j), then post-swap array
  5. Pivot placement, unless already there   →  swapping = (i+1, high), then post-swap array
  6. Final                                   →  everything sorted

A placed pivot is final, so it joins `sorted` from the next snapshot on.
"""

from typing import Any, Callable, List, Optional, Sequence, Tuple

from visualgorithm.algorithms.step import SortResult, SortTrace


PSEUDOCODE: List[str] = [
    "quickSort(arr, low, high):",                      # 0
    "    if low < high:",                              # 1
    "        pi = partition(arr, low, high)",          # 2
    "        quickSort(arr, low, pi - 1)",             # 3
    "        quickSort(arr, pi + 1, high)",            # 4
    "partition: pivot = arr[high], i = low - 1",       # 5
    "    for j = low to high-1:",                      # 6
    "        if arr[j] < pivot: i++, swap(i, j)",      # 7
    "    swap(arr[i+1], arr[high]); return i + 1",     # 8
]


def quick_sort(values: Sequence[Any], key: Optional[Callable[[Any], Any]] = None) -> SortResult:
    trace = SortTrace(values, key)
    pending: List[Tuple[int, int]] = [(0, len(trace) - 1)]

    while pending:
        low, high = pending.pop()
        if low < high:
            pi = _partition(trace, low, high)
            trace.settle(pi)
            # right pushed first so the left range is handled first
            pending.append((pi + 1, high))
            pending.append((low, pi - 1))
        elif low == high:
            trace.settle(low)

    return trace.finish()


def _partition(trace: SortTrace, low: int, high: int) -> int:
    marks = {"pivot": high, "left": low, "right": high}
    pivot_key = trace.key(high)
    i = low - 1

    trace.snapshot(**marks)

    for j in range(low, high):
        trace.compare(j, high, **marks)
        if trace.key(j) < pivot_key:
            i += 1
            if i != j:
                trace.swap(i, j, **marks)

    if i + 1 != high:
        trace.swap(i + 1, high, after={"pivot": i + 1, "left": low, "right": high}, **marks)

    return i + 1
