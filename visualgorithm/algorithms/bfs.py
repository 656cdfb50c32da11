"""
bfs.py — Breadth-First Search
==============================
FIFO frontier.  Records a GraphStep at:
  1. Initialise                 →  queue = [start], nothing visited
  2. Dequeue an unvisited node  →  CURRENT, joins visited
  3. Neighbours enqueued        →  exploring = the newly queued ids
  4. Target dequeued            →  path reconstructed, queue cleared, stop
  5. Queue empty                →  final visited set, queue cleared

A neighbour is enqueued only if it is neither visited nor already
waiting in the queue, so every node is discovered exactly once and its
parent pointer never changes.
"""

from collections import deque
from typing import Dict, List, Optional, Set

from visualgorithm.graph import Graph
from visualgorithm.algorithms.step import GraphResult, GraphTrace, reconstruct_path


PSEUDOCODE: List[str] = [
    "def BFS(graph, start, target):",             # 0
    "    queue ← [start]",                        # 1
    "    while queue is not empty:",              # 2
    "        node ← queue.dequeue()",             # 3
    "        if node in visited: continue",       # 4
    "        visited.add(node)",                  # 5
    "        if node == target: return path",     # 6
    "        for neighbour in adj(node):",        # 7
    "            if neighbour not visited/queued:",   # 8
    "                parent[neighbour] = node",   # 9
    "                queue.enqueue(neighbour)",   # 10
    "    return NOT FOUND",                       # 11
]


def bfs(graph: Graph, start: str, target: Optional[str] = None) -> GraphResult:
    """
    Breadth-first traversal from `start`.  With a `target`, stops as
    soon as it is dequeued and reports the hop-shortest path.
    """
    trace  = GraphTrace(graph)
    queue  = deque([start])
    queued: Set[str] = {start}
    parent: Dict[str, Optional[str]] = {start: None}

    trace.snapshot(queue=queue)

    while queue:
        node = queue.popleft()
        queued.discard(node)

        if node in trace.visited:
            continue

        trace.visit(node)
        trace.snapshot(current=node, queue=queue)

        # -- target check --
        if target is not None and node == target:
            path = reconstruct_path(parent, target)
            trace.snapshot(path=path, queue=())
            return trace.finish(path=path, total_distance=graph.path_weight(path))

        # -- explore neighbours --
        discovered = []
        for nbr, _edge in graph.neighbours(node):
            trace.explore_edge()
            if nbr not in trace.visited and nbr not in queued:
                queue.append(nbr)
                queued.add(nbr)
                parent[nbr] = node
                discovered.append(nbr)

        if discovered:
            trace.snapshot(current=node, queue=queue, exploring=discovered)

    # --- exhausted (no target, or target unreachable) ---
    trace.snapshot(queue=())
    return trace.finish()
