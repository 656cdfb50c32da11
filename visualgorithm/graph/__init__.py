"""
graph/
------
Core data layer.  Public API:

    from visualgorithm.graph import Graph, Node, Edge
    from visualgorithm.graph import GraphType, GraphGenerationOptions, generate_graph
"""

from visualgorithm.graph.node      import Node
from visualgorithm.graph.edge      import Edge
from visualgorithm.graph.graph     import Graph, DEFAULT_GRAPHS
from visualgorithm.graph.generator import (
    GraphType,
    GraphGenerationOptions,
    GENERATOR_PRESETS,
    generate_graph,
    node_id_for,
)

__all__ = [
    "Node",
    "Edge",
    "Graph",             "DEFAULT_GRAPHS",
    "GraphType",         "GraphGenerationOptions",
    "GENERATOR_PRESETS", "generate_graph",
    "node_id_for",
]
