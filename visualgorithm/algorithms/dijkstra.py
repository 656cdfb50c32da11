"""
dijkstra.py — Dijkstra's Shortest-Path Algorithm
==================================================
Array-scan Dijkstra (O(V²)): each round picks the unvisited node with
the smallest tentative distance by walking the node list, so ties go
to whichever node was declared first.

Records a GraphStep at:
  1. Initialise                 →  all distances ∞, start = 0
  2. Pick the closest node      →  CURRENT, its distance is now final
  3. Successful relaxations     →  exploring = ids whose distance dropped
  4. Target picked              →  path reconstructed, stop
  5. Nothing reachable remains  →  final distance table

Edge weights default to 1.  Negative weights are out of scope.
"""

import math
from typing import Dict, List, Optional

from visualgorithm.graph import Graph
from visualgorithm.algorithms.step import GraphResult, GraphTrace, reconstruct_path


PSEUDOCODE: List[str] = [
    "def Dijkstra(graph, start, target):",            # 0
    "    dist ← {v: ∞ for v in V}; dist[start] ← 0",  # 1
    "    while some unvisited v has dist[v] < ∞:",    # 2
    "        node ← unvisited v with min dist[v]",    # 3
    "        visited.add(node)",                      # 4
    "        if node == target: return path",         # 5
    "        for (neighbour, w) in adj(node):",       # 6
    "            if neighbour not visited:",          # 7
    "                if dist[node] + w < dist[nbr]:", # 8
    "                    dist[nbr] ← dist[node] + w", # 9
    "                    parent[nbr] ← node",         # 10
    "    return NOT FOUND",                           # 11
]


def dijkstra(graph: Graph, start: str, target: Optional[str] = None) -> GraphResult:
    INF   = math.inf
    trace = GraphTrace(graph)

    dist:   Dict[str, float]         = {n.id: INF for n in graph.nodes}
    parent: Dict[str, Optional[str]] = {n.id: None for n in graph.nodes}
    dist[start] = 0

    trace.snapshot(distances=dist)

    while len(trace.visited) < len(dist):
        # -- pick the closest unvisited node (first wins on ties) --
        node: Optional[str] = None
        best = INF
        for candidate in graph.nodes:
            if candidate.id not in trace.visited and dist[candidate.id] < best:
                best = dist[candidate.id]
                node = candidate.id

        if node is None:
            break   # the rest of the graph is unreachable

        trace.visit(node)
        trace.snapshot(current=node, distances=dist)

        # -- target check --
        if target is not None and node == target:
            path = reconstruct_path(parent, target)
            trace.snapshot(distances=dist, path=path)
            return trace.finish(path=path, total_distance=dist[target])

        # -- relax neighbours --
        relaxed = []
        for nbr, edge in graph.neighbours(node):
            trace.explore_edge()
            if nbr in trace.visited:
                continue
            new_dist = dist[node] + (edge.weight or 1)
            if new_dist < dist[nbr]:
                dist[nbr]   = new_dist
                parent[nbr] = node
                if nbr not in relaxed:
                    relaxed.append(nbr)

        if relaxed:
            trace.snapshot(current=node, distances=dist, exploring=relaxed)

    # --- exhausted ---
    trace.snapshot(distances=dist)
    return trace.finish()
