# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Circular layout algorithm for the knowledge graph.

"""
Circular layout placing all nodes on a circle.

Nodes are evenly distributed around a circle centred in the drawing
area. The result depends only on node order, so it is fully
deterministic.
"""

from typing import Dict, Optional, Sequence, Tuple
import math

from ..config import LayoutConfig
from ..model import Bounds, Node, check_unique_ids


def circular(
    nodes: Sequence[Node],
    bounds: Bounds,
    config: Optional[LayoutConfig] = None
) -> Dict[str, Tuple[float, float]]:
    """
    Compute circular layout for the knowledge graph.

    Node i of n is placed at angle ``start_angle + 2*pi*i/n`` on a circle
    around the scaled centre, with radius
    ``circle_radius_factor * min(center_x, center_y)``.

    Args:
        nodes: Nodes to place, in order.
        bounds: Drawing area and zoom factor.
        config: Layout constants (default: LayoutConfig()).

    Returns:
        Dictionary mapping node IDs to (x, y) positions.

    Raises:
        LayoutError: If two nodes share an id.
    """
    config = config or LayoutConfig()

    if not nodes:
        return {}
    check_unique_ids(nodes)

    center_x, center_y = bounds.center
    radius = min(center_x, center_y) * config.circle_radius_factor
    n = len(nodes)
    positions: Dict[str, Tuple[float, float]] = {}

    for i, node in enumerate(nodes):
        angle = config.start_angle + 2 * math.pi * i / n
        x = center_x + radius * math.cos(angle)
        y = center_y + radius * math.sin(angle)
        positions[node.id] = (x, y)

    return positions
