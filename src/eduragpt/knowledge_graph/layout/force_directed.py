# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Force-directed layout algorithm with NumPy acceleration.

"""
Force-directed layout using a velocity-based spring-electric model.

Each iteration accumulates three forces into node velocities:

- repulsion ``k_rep / d^2`` between every ordered pair of nodes closer
  than the cutoff (each unordered pair is therefore applied twice),
- spring attraction ``k_att * d`` along every edge,
- a weak pull toward the canvas centre proportional to the offset,

then integrates positions, damps velocities and clamps every node so its
full radius stays inside the scaled drawing area. There is no
convergence check; the iteration count is a configuration value.

Randomness only enters through the initial placement, which draws from
an explicit ``numpy.random.Generator``.
"""

from typing import Dict, List, Optional, Sequence, Tuple, Union
import logging

import numpy as np

from ..config import LayoutConfig
from ..model import Bounds, Edge, Node, Position, check_unique_ids

logger = logging.getLogger(__name__)

RandomSource = Union[np.random.Generator, int, None]


def make_rng(rng: RandomSource, config: LayoutConfig) -> np.random.Generator:
    """Return ``rng`` if it is a Generator, else seed one from it or the config."""
    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng if rng is not None else config.seed)


class ForceSimulation:
    """
    One force-directed layout run.

    The simulation owns its position and velocity arrays for its lifetime;
    nothing is shared across runs.

    Usage:
        sim = ForceSimulation(nodes, edges, Bounds(800, 500), rng=42)
        positions = sim.run()
    """

    def __init__(
        self,
        nodes: Sequence[Node],
        edges: Sequence[Edge],
        bounds: Bounds,
        config: Optional[LayoutConfig] = None,
        rng: RandomSource = None,
    ):
        self.config = config or LayoutConfig()
        self.bounds = bounds
        self.rng = make_rng(rng, self.config)

        check_unique_ids(nodes)
        self.node_ids: List[str] = [node.id for node in nodes]
        id_to_idx = {nid: i for i, nid in enumerate(self.node_ids)}

        self.radii = np.array(
            [node.radius(self.config.default_radius) for node in nodes], dtype=float
        )

        # Edges with a missing endpoint have no meaning; skip them silently
        pairs = [
            (id_to_idx[e.from_id], id_to_idx[e.to_id])
            for e in edges
            if e.from_id in id_to_idx and e.to_id in id_to_idx
        ]
        if len(pairs) != len(edges):
            logger.debug(f"Ignoring {len(edges) - len(pairs)} dangling edge(s)")
        edge_idx = np.array(pairs, dtype=int).reshape(-1, 2)
        self.sources = edge_idx[:, 0]
        self.targets = edge_idx[:, 1]

        n = len(self.node_ids)
        self.center = np.array(bounds.center, dtype=float)
        self.positions = np.zeros((n, 2))
        self.velocities = np.zeros((n, 2))
        self.iteration = 0
        self._initialized = False

    @property
    def num_nodes(self) -> int:
        return len(self.node_ids)

    def initialize(self) -> None:
        """Scatter nodes uniformly around the centre with zero velocity."""
        spread = self.config.init_spread
        offsets = self.rng.uniform(-spread, spread, size=(self.num_nodes, 2))
        self.positions = self.center + offsets * self.center
        self.velocities = np.zeros((self.num_nodes, 2))
        self.iteration = 0
        self._initialized = True

    def step(self) -> None:
        """Advance the simulation by one iteration."""
        if not self._initialized:
            self.initialize()
        if self.num_nodes == 0:
            return

        cfg = self.config
        pos = self.positions
        vel = self.velocities

        # Repulsion: diff[i, j] points from node i to node j
        diff = pos[np.newaxis, :, :] - pos[:, np.newaxis, :]
        dist = np.sqrt(np.sum(diff ** 2, axis=2))
        active = (dist > cfg.min_distance) & (dist > 0) & (dist < cfg.repulsion_cutoff)
        safe = np.where(active, dist, 1.0)
        magnitude = np.where(active, cfg.repulsion / safe ** 2, 0.0)
        push = diff / safe[:, :, np.newaxis] * magnitude[:, :, np.newaxis]
        # Ordered pair (i, j): i is pushed back along diff, j forward
        vel -= push.sum(axis=1)
        vel += push.sum(axis=0)

        # Attraction along edges
        if self.sources.size:
            delta = pos[self.targets] - pos[self.sources]
            length = np.sqrt(np.sum(delta ** 2, axis=1))
            ok = (length > cfg.min_distance) & (length > 0)
            # (delta / length) * attraction * length
            pull = np.where(ok[:, np.newaxis], cfg.attraction * delta, 0.0)
            np.add.at(vel, self.sources, pull)
            np.add.at(vel, self.targets, -pull)

        # Centre gravity
        vel += (self.center - pos) * cfg.center_gravity

        # Integrate and damp
        pos += vel * cfg.time_step
        vel *= cfg.damping

        self._clamp()
        self.iteration += 1

    def _clamp(self) -> None:
        """Keep every node's full radius inside the scaled drawing area."""
        r = self.radii
        x_max = self.bounds.scaled_width - r
        y_max = self.bounds.scaled_height - r
        self.positions[:, 0] = np.maximum(r, np.minimum(x_max, self.positions[:, 0]))
        self.positions[:, 1] = np.maximum(r, np.minimum(y_max, self.positions[:, 1]))

    def run(self, iterations: Optional[int] = None) -> Dict[str, Tuple[float, float]]:
        """Initialise, iterate and return the final positions."""
        if iterations is None:
            iterations = self.config.iterations
        self.initialize()
        for _ in range(iterations):
            self.step()
        return self.as_dict()

    def as_dict(self) -> Dict[str, Tuple[float, float]]:
        """Current positions as plain floats keyed by node id."""
        return {
            nid: (float(self.positions[i, 0]), float(self.positions[i, 1]))
            for i, nid in enumerate(self.node_ids)
        }

    def states(self) -> Dict[str, Position]:
        """Current positions and velocities keyed by node id."""
        return {
            nid: Position(
                x=float(self.positions[i, 0]),
                y=float(self.positions[i, 1]),
                vx=float(self.velocities[i, 0]),
                vy=float(self.velocities[i, 1]),
            )
            for i, nid in enumerate(self.node_ids)
        }


def force_directed(
    nodes: Sequence[Node],
    edges: Sequence[Edge],
    bounds: Bounds,
    config: Optional[LayoutConfig] = None,
    rng: RandomSource = None,
) -> Dict[str, Tuple[float, float]]:
    """
    Compute force-directed layout for the knowledge graph.

    Args:
        nodes: Nodes to place (already filtered by the caller).
        edges: Edges between them; edges with a missing endpoint are ignored.
        bounds: Drawing area and zoom factor.
        config: Simulation constants (default: LayoutConfig()).
        rng: Generator or integer seed for the initial placement. Falls
            back to ``config.seed``.

    Returns:
        Dictionary mapping node IDs to (x, y) positions.
    """
    if not nodes:
        return {}
    return ForceSimulation(nodes, edges, bounds, config, rng).run()
