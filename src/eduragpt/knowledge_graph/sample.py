# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Built-in concept graph for the study assistant.

"""
Bundled knowledge graph.

The base graph covers two courses, Machine Learning (``ml``) and
Computer Science (``cs``). Uploaded study materials become extra nodes in
the ``materials`` group, each linked to a few random concepts.
"""

import re
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from .layout.force_directed import RandomSource
from .model import Edge, Node

MATERIALS_GROUP = "materials"
MATERIAL_NODE_SIZE = 15
MATERIAL_EDGE_COLOR = "rgba(139, 92, 246, 0.6)"

_MATERIAL_EXTENSION = re.compile(r"\.(pdf|docx|pptx|jpg|png)$", re.IGNORECASE)
_MATERIAL_ID = re.compile(r"^m-(\d+)$")

# (id, label, group, size)
_BASE_NODES = [
    ("1", "Machine Learning", "ml", 25),
    ("2", "Neural Networks", "ml", 20),
    ("3", "Deep Learning", "ml", 20),
    ("4", "Supervised Learning", "ml", 18),
    ("5", "Unsupervised Learning", "ml", 18),
    ("6", "Data Structures", "cs", 25),
    ("7", "Arrays", "cs", 15),
    ("8", "Linked Lists", "cs", 15),
    ("9", "Trees", "cs", 18),
    ("10", "Graphs", "cs", 18),
    ("11", "Algorithms", "cs", 25),
    ("12", "Sorting", "cs", 15),
    ("13", "Searching", "cs", 15),
    ("14", "Dynamic Programming", "cs", 18),
]

# (from, to, width)
_BASE_EDGES = [
    ("1", "2", 3), ("1", "3", 3), ("1", "4", 2), ("1", "5", 2),
    ("2", "3", 3),
    ("6", "7", 2), ("6", "8", 2), ("6", "9", 3), ("6", "10", 3),
    ("11", "12", 2), ("11", "13", 2), ("11", "14", 3),
    ("9", "10", 2),
    ("3", "4", 2),
]


def base_nodes() -> List[Node]:
    return [Node(id=i, label=label, group=group, size=size)
            for i, label, group, size in _BASE_NODES]


def base_edges() -> List[Edge]:
    return [Edge(from_id=a, to_id=b, width=w) for a, b, w in _BASE_EDGES]


def material_label(name: str) -> str:
    """Strip a known document/image extension from an uploaded file name."""
    return _MATERIAL_EXTENSION.sub("", name)


def next_material_index(nodes: Iterable[Node]) -> int:
    """First ``m-<n>`` index not used by any of ``nodes``."""
    used = [int(m.group(1)) for m in (_MATERIAL_ID.match(n.id) for n in nodes) if m]
    return max(used) + 1 if used else 0


def material_nodes(names: Iterable[str], start: int = 0) -> List[Node]:
    """One node per uploaded material, with ids ``m-<start>``, ``m-<start+1>``, ..."""
    return [
        Node(id=f"m-{i}", label=material_label(name), group=MATERIALS_GROUP,
             size=MATERIAL_NODE_SIZE)
        for i, name in enumerate(names, start)
    ]


def material_edges(
    nodes: Sequence[Node],
    rng: RandomSource = None,
    materials: Optional[Sequence[Node]] = None,
) -> List[Edge]:
    """
    Link material nodes to 2 or 3 randomly chosen concept nodes.

    Concepts are the non-material nodes of ``nodes``. ``materials`` selects
    which material nodes get links; by default every material node in
    ``nodes`` does. Concepts are drawn with replacement, so a material may
    link to the same concept twice.
    """
    rng = rng if isinstance(rng, np.random.Generator) else np.random.default_rng(rng)
    concepts = [n for n in nodes if n.group != MATERIALS_GROUP]
    if materials is None:
        materials = [n for n in nodes if n.group == MATERIALS_GROUP]
    if not concepts:
        return []

    edges = []
    for node in materials:
        count = int(rng.integers(2, 4))
        for _ in range(count):
            target = concepts[int(rng.integers(len(concepts)))]
            edges.append(Edge(from_id=node.id, to_id=target.id, width=1,
                              color=MATERIAL_EDGE_COLOR))
    return edges


def add_materials(
    nodes: Sequence[Node],
    edges: Sequence[Edge],
    material_names: Iterable[str],
    rng: RandomSource = None,
) -> Tuple[List[Node], List[Edge]]:
    """
    Append uploaded materials to an existing graph.

    New material ids continue after the highest ``m-<n>`` already present,
    and only the new materials are linked; existing edges are kept as is.
    """
    new = material_nodes(material_names, next_material_index(nodes))
    nodes = list(nodes) + new
    return nodes, list(edges) + material_edges(nodes, rng, materials=new)


def build_graph(
    material_names: Iterable[str] = (),
    rng: RandomSource = None,
) -> Tuple[List[Node], List[Edge]]:
    """Base concept graph plus nodes and edges for the given materials."""
    return add_materials(base_nodes(), base_edges(), material_names, rng)
