"""
exceptions.py — Typed Failures
===============================
Every precondition the core checks is reported as one of these.

    VisualizerError
      ├── UnknownAlgorithmError     – name not in the registry
      ├── UnknownNodeError          – start / target / edge endpoint missing
      ├── InvalidGraphOptionsError  – node_count < 3, bad weight bounds, …
      └── InvalidDataError          – custom array text that isn't numbers

The concrete classes also subclass ValueError so callers that only
know about the builtin still catch them.
"""


class VisualizerError(Exception):
    """Root of every error raised by the visualizer core."""


class UnknownAlgorithmError(VisualizerError, ValueError):
    def __init__(self, name):
        self.name = name
        super().__init__(f"Unknown algorithm: {name!r}")


class UnknownNodeError(VisualizerError, ValueError):
    def __init__(self, node_id, role: str = "node"):
        self.node_id = node_id
        self.role    = role
        super().__init__(f"Unknown {role} id: {node_id!r}")


class InvalidGraphOptionsError(VisualizerError, ValueError):
    pass


class InvalidDataError(VisualizerError, ValueError):
    pass


__all__ = [
    "VisualizerError",
    "UnknownAlgorithmError",
    "UnknownNodeError",
    "InvalidGraphOptionsError",
    "InvalidDataError",
]
