# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Knowledge graph data model.

"""
Nodes, edges and drawing bounds for the concept graph.

Nodes and edges are immutable inputs to a layout pass. Positions are
derived per run and never stored on the node itself.
"""

import math
import numbers
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple
import logging

from .errors import GraphFormatError, InvalidBoundsError, LayoutError

logger = logging.getLogger(__name__)

DEFAULT_NODE_RADIUS = 20.0


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _text(d: Dict[str, Any], key: str, default: Optional[str] = None) -> Optional[str]:
    """Read a string field, accepting numbers; None or absent gives ``default``."""
    value = d.get(key)
    if value is None:
        return default
    if isinstance(value, str):
        return value
    if _is_number(value):
        return str(value)
    raise GraphFormatError(f"{key} must be a string, got {value!r}")


def _number(d: Dict[str, Any], key: str) -> Optional[float]:
    """Read an optional finite, non-negative numeric field."""
    value = d.get(key)
    if value is None:
        return None
    if not _is_number(value) or not math.isfinite(value) or value < 0:
        raise GraphFormatError(f"{key} must be a non-negative number, got {value!r}")
    return value


@dataclass(frozen=True)
class Node:
    """A labeled concept in the knowledge graph."""
    id: str
    label: str = ""
    group: str = "default"
    size: Optional[float] = None

    def radius(self, default: float = DEFAULT_NODE_RADIUS) -> float:
        """Rendered radius, falling back to ``default`` when size is unset."""
        return float(self.size) if self.size else float(default)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dict."""
        d: Dict[str, Any] = {"id": self.id, "label": self.label, "group": self.group}
        if self.size is not None:
            d["size"] = self.size
        return d

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'Node':
        """
        Create from JSON dict.

        Raises KeyError when ``id`` is absent and GraphFormatError when a
        field has the wrong type.
        """
        node_id = _text(d, "id")
        if node_id is None:
            raise KeyError("id")
        return cls(
            id=node_id,
            label=_text(d, "label", ""),
            group=_text(d, "group", "default"),
            size=_number(d, "size"),
        )


@dataclass(frozen=True)
class Edge:
    """A directed relation between two node identifiers."""
    from_id: str
    to_id: str
    width: Optional[float] = None
    color: Optional[str] = None
    label: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dict."""
        d: Dict[str, Any] = {"from": self.from_id, "to": self.to_id}
        for key in ("width", "color", "label"):
            value = getattr(self, key)
            if value is not None:
                d[key] = value
        return d

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'Edge':
        """Create from JSON dict."""
        ends = [_text(d, key) for key in ("from", "to")]
        for key, value in zip(("from", "to"), ends):
            if value is None:
                raise KeyError(key)
        return cls(
            from_id=ends[0],
            to_id=ends[1],
            width=_number(d, "width"),
            color=_text(d, "color"),
            label=_text(d, "label"),
        )


@dataclass
class Position:
    """Transient coordinate and velocity of one node during a layout run."""
    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0


@dataclass(frozen=True)
class Bounds:
    """Drawing area in device units plus the zoom factor applied to it."""
    width: float
    height: float
    scale: float = 1.0

    def __post_init__(self):
        for name in ("width", "height", "scale"):
            value = getattr(self, name)
            if not _is_number(value) or not math.isfinite(value) or value <= 0:
                raise InvalidBoundsError(
                    f"{name} must be a finite positive number, got {value!r}"
                )

    @property
    def scaled_width(self) -> float:
        return self.width / self.scale

    @property
    def scaled_height(self) -> float:
        return self.height / self.scale

    @property
    def center(self) -> Tuple[float, float]:
        """Centre of the drawing area in layout (unscaled) coordinates."""
        return self.width / (2 * self.scale), self.height / (2 * self.scale)


def prune_edges(nodes: Iterable[Node], edges: Iterable[Edge]) -> List[Edge]:
    """Keep only edges whose endpoints are both present in ``nodes``."""
    node_ids = {node.id for node in nodes}
    kept = []
    dropped = 0
    for edge in edges:
        if edge.from_id in node_ids and edge.to_id in node_ids:
            kept.append(edge)
        else:
            dropped += 1
    if dropped:
        logger.debug(f"Dropped {dropped} edge(s) with missing endpoints")
    return kept


def check_unique_ids(nodes: Sequence[Node]) -> None:
    """Raise LayoutError if two nodes share an id."""
    seen = set()
    for node in nodes:
        if node.id in seen:
            raise LayoutError(f"Node ids must be unique, {node.id!r} appears twice")
        seen.add(node.id)
