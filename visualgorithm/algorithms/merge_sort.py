"""
merge_sort.py — Merge Sort
===========================
Top-down merge sort.  Splitting records nothing; all the action is in
the merge, where the two sorted runs [left..mid] and [mid+1..right] are
copied back into the array one element at a time.

Snapshots (every merge snapshot carries left/right = the merged region):
  1. Initial array
  2. Head-vs-head comparison                 →  comparing = (left+i, mid+1+j)
  3. Every element written back              →  post-write array
  4. Final                                   →  everything sorted

Ties take from the left run (`<=`), so the sort is stable.
"""

from typing import Any, Callable, List, Optional, Sequence

from visualgorithm.algorithms.step import SortResult, SortTrace


PSEUDOCODE: List[str] = [
    "mergeSort(arr, left, right):",                    # 0
    "    if left < right:",                            # 1
    "        mid = (left + right) // 2",               # 2
    "        mergeSort(arr, left, mid)",               # 3
    "        mergeSort(arr, mid + 1, right)",          # 4
    "        merge(arr, left, mid, right)",            # 5
    "merge: take the smaller head (left on ties)",     # 6
]


def merge_sort(values: Sequence[Any], key: Optional[Callable[[Any], Any]] = None) -> SortResult:
    trace = SortTrace(values, key)
    _merge_sort(trace, 0, len(trace) - 1)
    return trace.finish()


def _merge_sort(trace: SortTrace, left: int, right: int) -> None:
    if left < right:
        mid = (left + right) // 2
        _merge_sort(trace, left, mid)
        _merge_sort(trace, mid + 1, right)
        _merge(trace, left, mid, right)


def _merge(trace: SortTrace, left: int, mid: int, right: int) -> None:
    left_run  = trace.array[left:mid + 1]
    right_run = trace.array[mid + 1:right + 1]
    region    = {"left": left, "right": right}
    i = j = 0
    k = left

    while i < len(left_run) and j < len(right_run):
        trace.compare(left + i, mid + 1 + j, **region)
        if trace.key_of(left_run[i]) <= trace.key_of(right_run[j]):
            trace.write(k, left_run[i], **region)
            i += 1
        else:
            trace.write(k, right_run[j], **region)
            j += 1
        k += 1

    # drain whichever run still has elements
    while i < len(left_run):
        trace.write(k, left_run[i], **region)
        i += 1
        k += 1

    while j < len(right_run):
        trace.write(k, right_run[j], **region)
        j += 1
        k += 1
