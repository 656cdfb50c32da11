"""
dfs.py — Depth-First Search
=============================
LIFO frontier using an explicit stack (no Python recursion limit issues).

Records a GraphStep at:
  1. Initialise                 →  stack = [start], nothing visited
  2. Pop an unvisited node      →  CURRENT, joins visited
  3. Neighbours pushed          →  exploring = the newly pushed ids
  4. Target popped              →  path reconstructed, stack cleared, stop
  5. Stack empty                →  final visited set, stack cleared

Neighbours are pushed in reverse adjacency order so the first listed
neighbour is popped first.  There is no "already on the stack" check:
an id can be pushed several times and is skipped when popped again.
Parent pointers follow the FIRST discoverer only, even if the node is
pushed again later by a different parent; the reconstructed path and
the recorded trace both depend on this.
"""

from typing import Dict, List, Optional

from visualgorithm.graph import Graph
from visualgorithm.algorithms.step import GraphResult, GraphTrace, reconstruct_path


PSEUDOCODE: List[str] = [
    "def DFS(graph, start, target):",             # 0
    "    stack ← [start]",                        # 1
    "    while stack is not empty:",              # 2
    "        node ← stack.pop()",                 # 3
    "        if node in visited: continue",       # 4
    "        visited.add(node)",                  # 5
    "        if node == target: return path",     # 6
    "        for neighbour in reversed(adj(node)):",  # 7
    "            if neighbour not visited:",      # 8
    "                parent[neighbour] ?= node",  # 9
    "                stack.push(neighbour)",      # 10
    "    return NOT FOUND",                       # 11
]


def dfs(graph: Graph, start: str, target: Optional[str] = None) -> GraphResult:
    """
    Iterative DFS with "mark on pop".  With a `target`, stops as soon as
    it is popped.  The path found is valid but not necessarily shortest.
    """
    trace  = GraphTrace(graph)
    stack  = [start]
    parent: Dict[str, Optional[str]] = {start: None}

    trace.snapshot(stack=stack)

    while stack:
        node = stack.pop()

        # already visited (duplicates are allowed on the stack)
        if node in trace.visited:
            continue

        trace.visit(node)
        trace.snapshot(current=node, stack=stack)

        # -- target check --
        if target is not None and node == target:
            path = reconstruct_path(parent, target)
            trace.snapshot(path=path, stack=())
            return trace.finish(path=path, total_distance=graph.path_weight(path))

        # -- explore neighbours --
        discovered = []
        for nbr, _edge in reversed(graph.neighbours(node)):
            trace.explore_edge()
            if nbr not in trace.visited:
                stack.append(nbr)
                if nbr not in parent:
                    parent[nbr] = node
                discovered.append(nbr)

        if discovered:
            trace.snapshot(current=node, stack=stack, exploring=discovered)

    # --- exhausted ---
    trace.snapshot(stack=())
    return trace.finish()
