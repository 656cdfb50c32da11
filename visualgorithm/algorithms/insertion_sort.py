"""
insertion_sort.py — Insertion Sort
===================================
Grows a sorted head one element at a time.  The new element sinks
toward the front by adjacent swaps until its left neighbour is not
larger, so every intermediate array is still a permutation of the input.

Snapshots:
  1. Initial array
  2. Every comparison with the left neighbour →  comparing = (j-1, j)
  3. Every sink step                          →  swapping = (j-1, j), then post-swap array
  4. End of each pass                         →  head region 0..i marked sorted
  5. Final                                    →  everything sorted

Equal elements stop the sink (`<=`), so the sort is stable.
"""

from typing import Any, Callable, List, Optional, Sequence

from visualgorithm.algorithms.step import SortResult, SortTrace


PSEUDOCODE: List[str] = [
    "for i = 1 to n-1:",                           # 0
    "    j = i",                                   # 1
    "    while j > 0 and arr[j-1] > arr[j]:",      # 2
    "        swap(arr[j-1], arr[j])",              # 3
    "        j = j - 1",                           # 4
    "    mark arr[0..i] sorted",                   # 5
]


def insertion_sort(values: Sequence[Any], key: Optional[Callable[[Any], Any]] = None) -> SortResult:
    trace = SortTrace(values, key)
    n = len(trace)

    for i in range(1, n):
        j = i
        while j > 0:
            trace.compare(j - 1, j)
            if trace.key(j - 1) <= trace.key(j):
                break
            trace.swap(j - 1, j)
            j -= 1
        trace.mark_sorted(*range(i + 1))

    return trace.finish()
