# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# SVG renderer for knowledge graph layouts.

"""
Draw a laid-out knowledge graph as an SVG document.

The renderer only consumes a position mapping; it never computes layout.
Nodes or edges without a position are skipped.
"""

import math
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence, Tuple
from xml.sax.saxutils import escape, quoteattr

from ..model import Bounds, DEFAULT_NODE_RADIUS, Edge, Node

ARROW_SIZE = 8
ARROW_SPREAD = math.pi / 6

ZOOM_MIN = 0.5
ZOOM_MAX = 2.0
ZOOM_STEP = 0.1


@dataclass
class Theme:
    """Colours and fonts used by the renderer."""
    group_colors: Dict[str, str] = field(default_factory=lambda: {
        "ml": "rgba(59, 130, 246, 0.8)",
        "cs": "rgba(16, 185, 129, 0.8)",
        "materials": "rgba(139, 92, 246, 0.8)",
    })
    fallback_color: str = "rgba(209, 213, 219, 0.8)"
    edge_color: str = "#ccc"
    edge_width: float = 1.0
    node_stroke: str = "#fff"
    node_stroke_width: float = 2.0
    label_color: str = "#fff"
    font: str = "sans-serif"
    font_size: int = 12
    line_offset: float = 6.0
    default_radius: float = DEFAULT_NODE_RADIUS

    def color_for(self, group: str) -> str:
        return self.group_colors.get(group, self.fallback_color)


@dataclass
class Zoom:
    """Zoom level stepped by the in/out controls and clamped to a range."""
    level: float = 1.0

    def zoom_in(self) -> float:
        self.level = round(min(self.level + ZOOM_STEP, ZOOM_MAX), 10)
        return self.level

    def zoom_out(self) -> float:
        self.level = round(max(self.level - ZOOM_STEP, ZOOM_MIN), 10)
        return self.level


def wrap_label(label: str) -> List[str]:
    """Split multi-word labels longer than 10 characters onto two lines."""
    words = label.split(" ")
    if len(words) > 1 and len(label) > 10:
        half = math.ceil(len(words) / 2)
        return [" ".join(words[:half]), " ".join(words[half:])]
    return [label]


def _fmt(value: float) -> str:
    return f"{value:.2f}".rstrip("0").rstrip(".")


def _arrow_points(start: Tuple[float, float], end: Tuple[float, float]) -> str:
    angle = math.atan2(end[1] - start[1], end[0] - start[0])
    points = [
        end,
        (end[0] - ARROW_SIZE * math.cos(angle - ARROW_SPREAD),
         end[1] - ARROW_SIZE * math.sin(angle - ARROW_SPREAD)),
        (end[0] - ARROW_SIZE * math.cos(angle + ARROW_SPREAD),
         end[1] - ARROW_SIZE * math.sin(angle + ARROW_SPREAD)),
    ]
    return " ".join(f"{_fmt(x)},{_fmt(y)}" for x, y in points)


def render_svg(
    nodes: Sequence[Node],
    edges: Sequence[Edge],
    positions: Mapping[str, Tuple[float, float]],
    bounds: Bounds,
    theme: Optional[Theme] = None,
) -> str:
    """
    Render nodes and edges at the given positions.

    Edges are drawn first so nodes sit on top. Only edges wider than one
    unit get an arrowhead at their target end.

    Args:
        nodes: Nodes to draw.
        edges: Edges to draw; those lacking a positioned endpoint are skipped.
        positions: Mapping of node id to (x, y) in layout coordinates.
        bounds: Canvas size; ``bounds.scale`` becomes the zoom transform.
        theme: Colours and fonts (default: Theme()).

    Returns:
        SVG document as a string.
    """
    theme = theme or Theme()
    out = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{_fmt(bounds.width)}" '
        f'height="{_fmt(bounds.height)}" viewBox="0 0 {_fmt(bounds.width)} '
        f'{_fmt(bounds.height)}">',
        f'<g transform="scale({_fmt(bounds.scale)})">',
    ]

    for edge in edges:
        start = positions.get(edge.from_id)
        end = positions.get(edge.to_id)
        if start is None or end is None:
            continue
        color = quoteattr(edge.color or theme.edge_color)
        width = edge.width or theme.edge_width
        out.append(
            f'<line class="edge" x1="{_fmt(start[0])}" y1="{_fmt(start[1])}" '
            f'x2="{_fmt(end[0])}" y2="{_fmt(end[1])}" stroke={color} '
            f'stroke-width="{_fmt(width)}"/>'
        )
        if edge.width and edge.width > 1:
            out.append(f'<polygon class="arrow" points="{_arrow_points(start, end)}" '
                       f'fill={color}/>')

    for node in nodes:
        pos = positions.get(node.id)
        if pos is None:
            continue
        x, y = pos
        out.append(
            f'<circle class="node" data-id={quoteattr(node.id)} cx="{_fmt(x)}" '
            f'cy="{_fmt(y)}" r="{_fmt(node.radius(theme.default_radius))}" '
            f'fill={quoteattr(theme.color_for(node.group))} '
            f'stroke="{theme.node_stroke}" stroke-width="{_fmt(theme.node_stroke_width)}"/>'
        )
        lines = wrap_label(node.label)
        offsets = [0.0] if len(lines) == 1 else [-theme.line_offset, theme.line_offset]
        for line, dy in zip(lines, offsets):
            out.append(
                f'<text x="{_fmt(x)}" y="{_fmt(y + dy)}" fill="{theme.label_color}" '
                f'font-family="{theme.font}" font-size="{theme.font_size}" '
                f'text-anchor="middle" dominant-baseline="middle">{escape(line)}</text>'
            )

    out.append("</g>")
    out.append("</svg>")
    return "\n".join(out) + "\n"
