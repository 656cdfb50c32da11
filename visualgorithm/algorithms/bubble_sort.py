"""
bubble_sort.py — Bubble Sort
=============================
Repeatedly walks the unsorted prefix, swapping adjacent pairs that are
out of order.  After pass i the largest remaining value has bubbled to
index n-1-i, which joins the `sorted` set.

Snapshots:
  1. Initial array
  2. Every adjacent comparison               →  comparing = (j, j+1)
  3. Every swap                              →  swapping = (j, j+1), then post-swap array
  4. End of each pass                        →  tail index marked sorted
  5. Final                                   →  everything sorted
"""

from typing import Any, Callable, List, Optional, Sequence

from visualgorithm.algorithms.step import SortResult, SortTrace


PSEUDOCODE: List[str] = [
    "for i = 0 to n-2:",                       # 0
    "    for j = 0 to n-i-2:",                 # 1
    "        if arr[j] > arr[j+1]:",           # 2
    "            swap(arr[j], arr[j+1])",      # 3
    "    mark arr[n-1-i] sorted",              # 4
]


def bubble_sort(values: Sequence[Any], key: Optional[Callable[[Any], Any]] = None) -> SortResult:
    trace = SortTrace(values, key)
    n = len(trace)

    for i in range(n - 1):
        for j in range(n - i - 1):
            trace.compare(j, j + 1)
            if trace.key(j) > trace.key(j + 1):
                trace.swap(j, j + 1)
        trace.mark_sorted(n - 1 - i)

    return trace.finish()
