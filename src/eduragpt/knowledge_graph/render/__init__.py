# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Knowledge graph rendering implementations.

"""
Rendering for laid-out knowledge graphs.

Drawing is kept apart from layout: renderers take a position mapping
produced by ``eduragpt.knowledge_graph.layout`` and emit a document.
"""

from .svg import Theme, Zoom, render_svg, wrap_label

__all__ = ['Theme', 'Zoom', 'render_svg', 'wrap_label']
