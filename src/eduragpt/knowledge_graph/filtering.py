# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
"""Search and category filtering applied before layout."""

from typing import Iterable, List, Tuple

from .model import Edge, Node, prune_edges

ALL_GROUPS = "all"


def filter_nodes(nodes: Iterable[Node], search: str = "", group: str = ALL_GROUPS) -> List[Node]:
    """Nodes whose label contains ``search`` (case-insensitive) and whose group matches."""
    needle = (search or "").lower()
    group = group or ALL_GROUPS
    return [
        node for node in nodes
        if needle in node.label.lower()
        and (group == ALL_GROUPS or node.group == group)
    ]


def filter_graph(
    nodes: Iterable[Node],
    edges: Iterable[Edge],
    search: str = "",
    group: str = ALL_GROUPS,
) -> Tuple[List[Node], List[Edge]]:
    """Filter nodes, then keep only edges connecting two surviving nodes."""
    kept = filter_nodes(nodes, search, group)
    return kept, prune_edges(kept, edges)
