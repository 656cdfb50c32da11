"""
visualgorithm
=============
Step-by-step traces of classic sorting and graph algorithms, plus the
playback engine that replays them.

    from visualgorithm import run_sort, run_traversal, PlaybackController

    result = run_sort("merge", [5, 3, 8, 1])
    player = PlaybackController()
    player.load(result)
"""

from visualgorithm.algorithms import (
    REGISTRY,
    AlgoInfo,
    Family,
    GraphResult,
    GraphStep,
    SortAlgorithm,
    SortResult,
    SortStep,
    TraversalAlgorithm,
    get_algorithm,
    list_algorithms,
    run_sort,
    run_traversal,
)
from visualgorithm.config import VisualizerConfig, load_config
from visualgorithm.engine import (
    IntervalTimer,
    PlaybackController,
    PlaybackState,
    VisualizerSession,
    speed_to_interval_ms,
)
from visualgorithm.exceptions import (
    InvalidDataError,
    InvalidGraphOptionsError,
    UnknownAlgorithmError,
    UnknownNodeError,
    VisualizerError,
)
from visualgorithm.graph import (
    DEFAULT_GRAPHS,
    GENERATOR_PRESETS,
    Edge,
    Graph,
    GraphGenerationOptions,
    GraphType,
    Node,
    generate_graph,
)

__version__ = "0.1.0"

__all__ = [
    "REGISTRY", "AlgoInfo", "Family", "SortAlgorithm", "TraversalAlgorithm",
    "get_algorithm", "list_algorithms", "run_sort", "run_traversal",
    "SortStep", "SortResult", "GraphStep", "GraphResult",
    "VisualizerConfig", "load_config",
    "IntervalTimer", "PlaybackController", "PlaybackState", "VisualizerSession", "speed_to_interval_ms",
    "VisualizerError", "UnknownAlgorithmError", "UnknownNodeError",
    "InvalidGraphOptionsError", "InvalidDataError",
    "Node", "Edge", "Graph", "DEFAULT_GRAPHS", "GENERATOR_PRESETS",
    "GraphType", "GraphGenerationOptions", "generate_graph",
]
