"""
session.py — Visualizer Session State
======================================
Everything one user is looking at: the mode, the array to sort, the
graph to walk, the chosen endpoints and algorithm, and the playback
controller for the current run.

    s = VisualizerSession()
    s.set_custom_data([5, 3, 8])
    s.select_algorithm("quick")
    s.controller.play()

Design decisions:
  - Algorithms run to completion inside select_algorithm(); the
    controller only ever sees finished results.
  - Any change to the data or the graph unloads the current result,
    so a stale trace can never be replayed against new input.
  - Loading or generating a graph clears start and target, because the
    old ids may not exist any more.
"""

import logging
import random
import re
import secrets
import time
from collections import OrderedDict
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from visualgorithm.algorithms import (
    GraphStep,
    AlgoInfo,
    Family,
    resolve_algorithm,
    run_sort,
    run_traversal,
)
from visualgorithm.config import VisualizerConfig
from visualgorithm.engine.playback import PlaybackController
from visualgorithm.engine.timer import Clock
from visualgorithm.exceptions import InvalidDataError, VisualizerError
from visualgorithm.graph import (
    DEFAULT_GRAPHS,
    Graph,
    GraphGenerationOptions,
    generate_graph,
)

logger = logging.getLogger(__name__)

DEFAULT_DATA: List[int] = [64, 34, 25, 12, 22, 11, 90, 88, 76, 50, 42]

MODES = ("sorting", "graph")

_SEPARATORS = re.compile(r"[,\s]+")


def parse_data(text: str) -> List[Union[int, float]]:
    """
    Parse "5, 3, 8" (commas and/or whitespace) into numbers.
    Integers stay ints; anything unparsable is an InvalidDataError.
    """
    tokens = [t for t in _SEPARATORS.split(text.strip()) if t]
    if not tokens:
        raise InvalidDataError("No numbers given")
    values: List[Union[int, float]] = []
    for token in tokens:
        try:
            values.append(int(token))
        except ValueError:
            try:
                values.append(float(token))
            except ValueError:
                raise InvalidDataError(f"Not a number: {token!r}") from None
    return values


class VisualizerSession:
    """
    Attributes:
        config             : VisualizerConfig in force.
        mode               : "sorting" or "graph".
        data               : Values the sorting algorithms run on.
        graph              : Graph the traversal algorithms run on.
        start_node         : Traversal start id, or None.
        target_node        : Traversal target id, or None.
        selected_algorithm : AlgoInfo of the last run, or None.
        controller         : PlaybackController holding the current run.
    """

    def __init__(self, config: Optional[VisualizerConfig] = None, rng: Optional[random.Random] = None):
        self.config = config or VisualizerConfig()
        self._rng   = rng or random.Random()
        self.mode:               str               = "sorting"
        self.data:               List[Any]         = list(DEFAULT_DATA)
        self.graph:              Graph             = DEFAULT_GRAPHS["simple"]
        self.start_node:         Optional[str]     = None
        self.target_node:        Optional[str]     = None
        self.selected_algorithm: Optional[AlgoInfo] = None
        self.controller = PlaybackController(speed=self.config.default_speed)

    @property
    def nodes(self):
        return self.graph.nodes

    @property
    def edges(self):
        return self.graph.edges

    # ------------------------------------------------------------------
    # Mode
    # ------------------------------------------------------------------
    def set_mode(self, mode: str) -> None:
        if mode not in MODES:
            raise VisualizerError(f"Unknown mode: {mode!r}")
        self.mode = mode
        self.selected_algorithm = None
        self._unload()

    # ------------------------------------------------------------------
    # Sorting data
    # ------------------------------------------------------------------
    def generate_random_data(self, size: Optional[int] = None) -> List[int]:
        size = self.config.random_data_size if size is None else int(size)
        if size < 1:
            raise InvalidDataError(f"size must be positive, got {size}")
        lo, hi = self.config.random_min_value, self.config.random_max_value
        self.data = [self._rng.randint(lo, hi) for _ in range(size)]
        self._unload()
        return list(self.data)

    def set_custom_data(self, values: Union[str, Iterable[Any]]) -> List[Any]:
        """Accept a list of numbers or a "5, 3, 8" string."""
        if isinstance(values, str):
            parsed = parse_data(values)
        else:
            parsed = list(values)
            for v in parsed:
                if isinstance(v, bool) or not isinstance(v, (int, float)):
                    raise InvalidDataError(f"Not a number: {v!r}")
        self.data = parsed
        self._unload()
        return list(self.data)

    # ------------------------------------------------------------------
    # Graph
    # ------------------------------------------------------------------
    def load_graph(self, name: str) -> Graph:
        graph = DEFAULT_GRAPHS.get(name)
        if graph is None:
            raise VisualizerError(f"Unknown graph: {name!r} (choose from {', '.join(DEFAULT_GRAPHS)})")
        self._replace_graph(graph)
        return graph

    def generate_custom_graph(self, options: Union[GraphGenerationOptions, Dict[str, Any]]) -> Graph:
        if not isinstance(options, GraphGenerationOptions):
            options = GraphGenerationOptions.from_dict(options)
        rng = None if options.seed is not None else self._rng
        graph = generate_graph(options, rng=rng)
        self._replace_graph(graph)
        return graph

    def set_start_node(self, node_id: Optional[str]) -> None:
        if node_id is not None:
            self.graph.require_node(node_id, role="start node")
        self.start_node = node_id

    def set_target_node(self, node_id: Optional[str]) -> None:
        if node_id is not None:
            self.graph.require_node(node_id, role="target node")
        self.target_node = node_id

    # ------------------------------------------------------------------
    # Running
    # ------------------------------------------------------------------
    def select_algorithm(self, name: Any) -> AlgoInfo:
        """Run the named algorithm on the current input and load its trace."""
        info = resolve_algorithm(name)

        if info.family is Family.SORTING:
            result = run_sort(info.key, self.data)
            self.mode = "sorting"
        else:
            if self.start_node is None and self.graph.nodes:
                self.start_node = self.graph.nodes[0].id
            result = run_traversal(info.key, self.graph, start_id=self.start_node, target_id=self.target_node)
            self.mode = "graph"

        self.selected_algorithm = info
        self.controller.load(result)
        logger.info("loaded %s: %d steps", info.label, result.total_steps)
        return info

    def set_speed(self, speed: float) -> int:
        clamped = self.config.clamp_speed(speed)
        self.controller.set_speed(clamped)
        return clamped

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def snapshot(self) -> Dict[str, Any]:
        """JSON-safe view of everything a client needs to render."""
        ctl  = self.controller
        step = ctl.current_step
        result = ctl.result
        metrics = result.metrics() if result is not None else None
        return {
            "mode":               self.mode,
            "data":               list(self.data),
            "graph":              self.graph.to_dict(),
            "start_node":         self.start_node,
            "target_node":        self.target_node,
            "selected_algorithm": self.selected_algorithm.key if self.selected_algorithm else None,
            "playback": {
                "state":       ctl.state.value,
                "is_playing":  ctl.is_playing,
                "cursor":      ctl.cursor,
                "total_steps": ctl.total_steps,
                "speed":       ctl.speed,
                "interval_ms": ctl.interval_ms,
            },
            "current_step":       self._step_dict(step),
            "metrics":            metrics,
        }

    @staticmethod
    def _step_dict(step) -> Optional[Dict[str, Any]]:
        if step is None:
            return None
        if isinstance(step, GraphStep):
            return step.to_dict(include_graph=False)
        return step.to_dict()

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _replace_graph(self, graph: Graph) -> None:
        self.graph       = graph
        self.start_node  = None
        self.target_node = None
        self._unload()

    def _unload(self) -> None:
        self.controller.load(None)


# =============================================================================
# Server-side store
# =============================================================================
class SessionStore:
    """
    Bounded map of session id -> VisualizerSession.

    Least-recently-used entries are evicted once `max_sessions` is
    exceeded, and entries idle for longer than `ttl` seconds are dropped
    on the next access to the store.
    """

    def __init__(self, config: Optional[VisualizerConfig] = None, clock: Clock = time.monotonic):
        self.config = config or VisualizerConfig()
        self.max_sessions = max(1, self.config.max_sessions)
        self.ttl          = self.config.session_ttl
        self._clock   = clock
        self._entries: "OrderedDict[str, Tuple[VisualizerSession, float]]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, sid: object) -> bool:
        return sid in self._entries

    def get(self, sid: Optional[str]) -> Optional[VisualizerSession]:
        """Return the live session for `sid` and mark it as used."""
        self._expire()
        if sid is None or sid not in self._entries:
            return None
        vs, _ = self._entries[sid]
        self._entries[sid] = (vs, self._clock())
        self._entries.move_to_end(sid)
        return vs

    def create(self) -> Tuple[str, VisualizerSession]:
        self._expire()
        sid = secrets.token_hex(16)
        vs = VisualizerSession(config=self.config)
        self._entries[sid] = (vs, self._clock())
        while len(self._entries) > self.max_sessions:
            old, _ = self._entries.popitem(last=False)
            logger.info("evicted session %s", old[:8])
        return sid, vs

    def drop(self, sid: Optional[str]) -> bool:
        return self._entries.pop(sid, None) is not None

    def _expire(self) -> None:
        if self.ttl <= 0:
            return
        cutoff = self._clock() - self.ttl
        # oldest first, so stop at the first fresh entry
        while self._entries:
            sid, (_, seen) = next(iter(self._entries.items()))
            if seen > cutoff:
                break
            del self._entries[sid]
            logger.info("expired session %s", sid[:8])
