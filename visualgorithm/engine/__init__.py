"""
engine/
-------
Playback & session layer.

    from visualgorithm.engine import PlaybackController, VisualizerSession
"""

from visualgorithm.engine.timer    import IntervalTimer
from visualgorithm.engine.playback import PlaybackController, PlaybackState, speed_to_interval_ms
from visualgorithm.engine.session  import VisualizerSession, SessionStore, DEFAULT_DATA, parse_data

__all__ = [
    "IntervalTimer",
    "PlaybackController",
    "PlaybackState",
    "speed_to_interval_ms",
    "VisualizerSession",
    "SessionStore",
    "DEFAULT_DATA",
    "parse_data",
]
