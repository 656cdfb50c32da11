"""
config.py — Runtime Configuration
==================================
One frozen dataclass with sane defaults.  Every field can be overridden
from the environment with a ``VISUALGORITHM_<FIELD>`` variable, e.g.

    VISUALGORITHM_DEFAULT_SPEED=80
    VISUALGORITHM_PORT=8080

    from visualgorithm.config import load_config
    cfg = load_config()
"""

import dataclasses
import os
import secrets
from dataclasses import dataclass, field
from typing import Mapping, Optional


ENV_PREFIX = "VISUALGORITHM_"


@dataclass(frozen=True)
class VisualizerConfig:
    # playback
    default_speed:    int   = 50
    min_speed:        int   = 1
    max_speed:        int   = 100

    # sorting data
    random_data_size: int   = 11
    random_min_value: int   = 10
    random_max_value: int   = 99

    # graph canvas
    canvas_width:     float = 500
    canvas_height:    float = 300

    # web host
    host:             str   = "127.0.0.1"
    port:             int   = 5000
    debug:            bool  = False
    secret_key:       str   = field(default_factory=lambda: secrets.token_hex(32))

    # server-side session store
    max_sessions:     int   = 256
    session_ttl:      float = 3600

    def clamp_speed(self, speed: float) -> int:
        """Pin a user-supplied speed into [min_speed, max_speed]."""
        return int(max(self.min_speed, min(self.max_speed, speed)))


def _coerce(raw: str, target_type: type):
    if target_type is bool:
        return raw.strip().lower() in ("1", "true", "yes", "on")
    return target_type(raw)


def load_config(environ: Optional[Mapping[str, str]] = None, **overrides) -> VisualizerConfig:
    """
    Build a config from defaults, then the environment, then explicit
    keyword overrides (highest priority).
    """
    env = os.environ if environ is None else environ
    values = {}
    for f in dataclasses.fields(VisualizerConfig):
        raw = env.get(ENV_PREFIX + f.name.upper())
        if raw is None or raw == "":
            continue
        values[f.name] = _coerce(raw, f.type)
    values.update(overrides)
    return VisualizerConfig(**values)


__all__ = ["VisualizerConfig", "load_config", "ENV_PREFIX"]
