# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# JSON Lines I/O for knowledge graph objects.

"""
JSON Lines I/O for knowledge graph objects.

Each line is one JSON object tagged with a ``type`` of ``node``, ``edge``
or ``position``. This lets graphs be piped into the layout CLI and
positions piped out to other tools.

Usage:
    from eduragpt.knowledge_graph.io import read_graph, write_positions

    nodes, edges = read_graph(sys.stdin)
    write_positions(positions, sys.stdout)
"""

import json
import sys
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, TextIO, Tuple, Union
import logging

from .errors import GraphFormatError
from .model import Edge, Node

logger = logging.getLogger(__name__)


# ============================================================================
# READERS
# ============================================================================

def read_jsonl(stream: TextIO = sys.stdin) -> Iterator[Dict[str, Any]]:
    """Read raw JSON objects from a JSON Lines stream, skipping bad lines."""
    for lineno, line in enumerate(stream, 1):
        line = line.strip()
        if not line:
            continue
        try:
            obj = json.loads(line)
        except json.JSONDecodeError as e:
            logger.warning(f"Skipping malformed JSON on line {lineno}: {e}")
            continue
        if not isinstance(obj, dict):
            logger.warning(f"Skipping non-object JSON on line {lineno}")
            continue
        yield obj


def _parse_record(obj: Dict[str, Any]) -> Union[Node, Edge, None]:
    obj_type = obj.get("type")
    try:
        if obj_type == "node":
            return Node.from_dict(obj)
        if obj_type == "edge":
            return Edge.from_dict(obj)
    except KeyError as e:
        logger.warning(f"Skipping {obj_type} record missing field {e}")
    except GraphFormatError as e:
        logger.warning(f"Skipping {obj_type} record: {e}")
    return None


def read_graph(stream: TextIO = sys.stdin) -> Tuple[List[Node], List[Edge]]:
    """Read all node and edge records from a JSON Lines stream."""
    nodes: List[Node] = []
    edges: List[Edge] = []
    for obj in read_jsonl(stream):
        record = _parse_record(obj)
        if isinstance(record, Node):
            nodes.append(record)
        elif isinstance(record, Edge):
            edges.append(record)
    return nodes, edges


def graph_from_dict(d: Mapping[str, Any]) -> Tuple[List[Node], List[Edge]]:
    """Build nodes and edges from ``{"nodes": [...], "edges": [...]}``."""
    try:
        nodes = [Node.from_dict(n) for n in d.get("nodes", [])]
        edges = [Edge.from_dict(e) for e in d.get("edges", [])]
    except KeyError as e:
        raise GraphFormatError(f"Malformed graph document: missing field {e}") from e
    except (AttributeError, TypeError) as e:
        raise GraphFormatError(f"Malformed graph document: {e}") from e
    return nodes, edges


def load_graph(path: Union[str, Path]) -> Tuple[List[Node], List[Edge]]:
    """
    Load a graph file.

    Accepts a single JSON document with ``nodes``/``edges`` arrays or a
    JSON Lines file of typed records.
    """
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        text = f.read()

    stripped = text.lstrip()
    if stripped.startswith("{"):
        try:
            doc = json.loads(text)
        except json.JSONDecodeError:
            doc = None  # more than one line of objects: JSON Lines
        if isinstance(doc, dict) and doc.get("type") not in ("node", "edge"):
            nodes, edges = graph_from_dict(doc)
            logger.info(f"Loaded {len(nodes)} nodes, {len(edges)} edges from {path}")
            return nodes, edges

    nodes, edges = read_graph(text.splitlines())
    logger.info(f"Loaded {len(nodes)} nodes, {len(edges)} edges from {path}")
    return nodes, edges


# ============================================================================
# WRITERS
# ============================================================================

def write_jsonl(obj: Dict[str, Any], stream: TextIO = sys.stdout) -> None:
    """Write a JSON object as a single line."""
    print(json.dumps(obj, ensure_ascii=False), file=stream)


def write_node(node: Node, stream: TextIO = sys.stdout) -> None:
    write_jsonl({"type": "node", **node.to_dict()}, stream)


def write_edge(edge: Edge, stream: TextIO = sys.stdout) -> None:
    write_jsonl({"type": "edge", **edge.to_dict()}, stream)


def write_position(node_id: str, x: float, y: float, stream: TextIO = sys.stdout) -> None:
    write_jsonl({"type": "position", "id": node_id, "x": x, "y": y}, stream)


def write_positions(
    positions: Mapping[str, Tuple[float, float]],
    stream: TextIO = sys.stdout
) -> None:
    """Write a positions mapping as JSON Lines."""
    for node_id, (x, y) in positions.items():
        write_position(node_id, x, y, stream)


def read_positions(stream: TextIO = sys.stdin) -> Dict[str, Tuple[float, float]]:
    """Read position records as ``{id: (x, y)}``."""
    positions = {}
    for obj in read_jsonl(stream):
        if obj.get("type") != "position":
            continue
        try:
            positions[str(obj["id"])] = (float(obj["x"]), float(obj["y"]))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Skipping malformed position record: {e}")
    return positions
