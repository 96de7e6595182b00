# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Knowledge graph layout algorithms.

"""
Layout algorithms for knowledge graph visualization.

Provides:
- Force-directed layout (NumPy-accelerated spring-electric model)
- Circular layout (nodes evenly spaced on a circle)

``compute_layout`` dispatches on the mode flag and is the single entry
point used by the CLI and renderers.
"""

from enum import Enum
from typing import Dict, Optional, Sequence, Tuple, Union
import logging

from ..config import LayoutConfig
from ..errors import UnknownLayoutModeError
from ..model import Bounds, Edge, Node
from .circular import circular
from .force_directed import ForceSimulation, force_directed, make_rng, RandomSource

logger = logging.getLogger(__name__)


class LayoutMode(str, Enum):
    CIRCULAR = "circular"
    FORCE = "force"

    @classmethod
    def parse(cls, value: Union[str, 'LayoutMode']) -> 'LayoutMode':
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            choices = ", ".join(m.value for m in cls)
            raise UnknownLayoutModeError(
                f"Unknown layout mode: {value!r} (expected one of: {choices})"
            ) from None


def compute_layout(
    nodes: Sequence[Node],
    edges: Sequence[Edge],
    bounds: Bounds,
    mode: Union[str, LayoutMode] = LayoutMode.FORCE,
    config: Optional[LayoutConfig] = None,
    rng: RandomSource = None,
) -> Dict[str, Tuple[float, float]]:
    """
    Compute node positions for the given mode.

    Returns a mapping covering every input node id exactly once. Empty
    input yields an empty mapping in either mode.
    """
    mode = LayoutMode.parse(mode)
    config = config or LayoutConfig()
    logger.debug(f"Layout {mode.value}: {len(nodes)} nodes, {len(edges)} edges, "
                 f"bounds {bounds.width}x{bounds.height} @ {bounds.scale}")

    if mode is LayoutMode.CIRCULAR:
        return circular(nodes, bounds, config)
    return force_directed(nodes, edges, bounds, config, rng)


__all__ = [
    'LayoutMode',
    'compute_layout',
    'circular',
    'force_directed',
    'ForceSimulation',
    'make_rng',
]
