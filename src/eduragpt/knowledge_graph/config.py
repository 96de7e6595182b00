# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
"""
Layout configuration.

Every simulation constant is a field of LayoutConfig so callers can tune
the layout without touching the engine. Defaults reproduce the web
knowledge graph page.

Usage:
    from eduragpt.knowledge_graph.config import LayoutConfig, load_config

    config = LayoutConfig(iterations=50, seed=7)
    config = load_config('layout.yaml')        # optional 'layout:' section
    config = config.replace(damping=0.8)

YAML example:
    layout:
      iterations: 25
      repulsion: 800
      seed: 42
"""

import math
from dataclasses import dataclass, fields, asdict, replace as dc_replace
from pathlib import Path
from typing import Any, Dict, Optional, Union
import logging

import yaml

from .errors import ConfigError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayoutConfig:
    """Tunable constants for circular and force-directed layouts."""
    # Force simulation
    iterations: int = 10
    repulsion: float = 500.0
    repulsion_cutoff: float = 200.0
    attraction: float = 0.05
    center_gravity: float = 0.01
    time_step: float = 0.1
    damping: float = 0.9
    min_distance: float = 1e-9
    init_spread: float = 0.5
    seed: Optional[int] = None

    # Shared
    default_radius: float = 20.0

    # Circular layout
    circle_radius_factor: float = 0.8
    start_angle: float = 0.0

    def validate(self) -> 'LayoutConfig':
        """Check ranges, raising ConfigError on the first violation."""
        if isinstance(self.iterations, bool) or not isinstance(self.iterations, int):
            raise ConfigError(f"iterations must be an integer, got {self.iterations!r}")
        if self.iterations < 0:
            raise ConfigError(f"iterations must be >= 0, got {self.iterations}")
        if self.seed is not None and not isinstance(self.seed, int):
            raise ConfigError(f"seed must be an integer or null, got {self.seed!r}")

        for name in ("repulsion", "repulsion_cutoff", "attraction", "center_gravity",
                     "time_step", "damping", "min_distance", "init_spread",
                     "default_radius", "circle_radius_factor", "start_angle"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)) \
                    or not math.isfinite(value):
                raise ConfigError(f"{name} must be a finite number, got {value!r}")

        for name in ("repulsion", "attraction", "center_gravity", "min_distance"):
            if getattr(self, name) < 0:
                raise ConfigError(f"{name} must be >= 0, got {getattr(self, name)}")
        for name in ("repulsion_cutoff", "time_step", "default_radius"):
            if getattr(self, name) <= 0:
                raise ConfigError(f"{name} must be > 0, got {getattr(self, name)}")
        if not 0.0 <= self.damping <= 1.0:
            raise ConfigError(f"damping must be within [0, 1], got {self.damping}")
        if not 0.0 <= self.init_spread <= 1.0:
            raise ConfigError(f"init_spread must be within [0, 1], got {self.init_spread}")
        if self.circle_radius_factor < 0:
            raise ConfigError(
                f"circle_radius_factor must be >= 0, got {self.circle_radius_factor}"
            )
        return self

    def replace(self, **overrides) -> 'LayoutConfig':
        """Return a validated copy with the given fields changed."""
        unknown = set(overrides) - _field_names()
        if unknown:
            raise ConfigError(f"Unknown layout option(s): {', '.join(sorted(unknown))}")
        return dc_replace(self, **overrides).validate()

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'LayoutConfig':
        """Create from a plain dict, rejecting unknown keys."""
        if not isinstance(d, dict):
            raise ConfigError(f"Layout config must be a mapping, got {type(d).__name__}")
        unknown = set(d) - _field_names()
        if unknown:
            raise ConfigError(f"Unknown layout option(s): {', '.join(sorted(unknown))}")
        return cls(**d).validate()


def _field_names():
    return {f.name for f in fields(LayoutConfig)}


def load_config(path: Union[str, Path]) -> LayoutConfig:
    """
    Load a LayoutConfig from a YAML file.

    The options may sit at the top level or under a ``layout:`` key.
    An empty file yields the defaults.
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        logger.info(f"Config {path} is empty, using defaults")
        return LayoutConfig()
    if isinstance(data, dict) and "layout" in data:
        data = data["layout"] or {}

    config = LayoutConfig.from_dict(data)
    logger.info(f"Loaded layout config from {path}")
    return config
