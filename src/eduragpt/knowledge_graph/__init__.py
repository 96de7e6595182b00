# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Knowledge graph layout for EduRAGPT.

"""
Knowledge graph layout, filtering and rendering.

The layout engine turns a filtered set of concept nodes and edges into
2D coordinates for a drawing surface. Rendering is a separate step that
consumes the resulting position mapping.

The io module provides JSON Lines I/O so graphs and positions can be
piped between tools.
"""

from . import layout
from . import render
from . import io
from .config import LayoutConfig, load_config
from .errors import (
    ConfigError,
    GraphFormatError,
    InvalidBoundsError,
    LayoutError,
    UnknownLayoutModeError,
)
from .filtering import filter_graph, filter_nodes
from .layout import LayoutMode, compute_layout
from .model import Bounds, Edge, Node, Position, prune_edges

__all__ = [
    'layout', 'render', 'io',
    'LayoutConfig', 'load_config',
    'LayoutError', 'InvalidBoundsError', 'UnknownLayoutModeError',
    'ConfigError', 'GraphFormatError',
    'filter_graph', 'filter_nodes',
    'LayoutMode', 'compute_layout',
    'Bounds', 'Edge', 'Node', 'Position', 'prune_edges',
]
