# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
"""
Command line front end for knowledge graph layout.

Usage:
    # Lay out the bundled concept graph and print positions
    eduragpt-graph layout --mode force --seed 42

    # Filter, add uploaded materials, render to SVG
    eduragpt-graph layout --materials notes.pdf slides.pptx \\
        --search learn --group ml --format svg -o graph.svg

    # Lay out your own graph (JSON or JSON Lines) with tuned constants
    eduragpt-graph layout --input graph.jsonl --config layout.yaml

    # Dump the bundled graph as JSON Lines
    eduragpt-graph sample > graph.jsonl

    # Draw saved positions without re-running the layout
    eduragpt-graph layout -i graph.jsonl --seed 1 > positions.jsonl
    eduragpt-graph render -i graph.jsonl --positions positions.jsonl -o graph.svg
"""

import argparse
import io
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import LayoutConfig, load_config
from .errors import LayoutError
from .filtering import ALL_GROUPS, filter_graph
from .io import load_graph, read_positions, write_edge, write_node, write_positions
from .layout import LayoutMode, compute_layout, make_rng
from .model import Bounds
from .render import render_svg
from .sample import add_materials, build_graph

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="eduragpt-graph",
        description="Lay out and render the EduRAGPT knowledge graph.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Log progress to stderr')
    sub = parser.add_subparsers(dest='command', required=True)

    layout = sub.add_parser('layout', help='Compute node positions')
    layout.add_argument('--input', '-i', type=Path, default=None,
                        help='Graph file (JSON or JSON Lines); default: bundled sample')
    layout.add_argument('--materials', nargs='*', default=[],
                        help='Uploaded material file names to add as nodes')
    layout.add_argument('--search', default='',
                        help='Keep nodes whose label contains this text')
    layout.add_argument('--group', default=ALL_GROUPS,
                        help='Keep only this group (default: all)')
    layout.add_argument('--mode', choices=[m.value for m in LayoutMode],
                        default=LayoutMode.FORCE.value, help='Layout mode')
    layout.add_argument('--width', type=float, default=800.0, help='Canvas width')
    layout.add_argument('--height', type=float, default=500.0, help='Canvas height')
    layout.add_argument('--scale', type=float, default=1.0, help='Zoom factor')
    layout.add_argument('--seed', type=int, default=None,
                        help='Random seed for force layout and material links')
    layout.add_argument('--iterations', type=int, default=None,
                        help='Override simulation iteration count')
    layout.add_argument('--config', type=Path, default=None,
                        help='YAML file with layout constants')
    layout.add_argument('--format', choices=['jsonl', 'svg'], default='jsonl',
                        help='Output format (default: jsonl)')
    layout.add_argument('--output', '-o', type=Path, default=None,
                        help='Output file (default: stdout)')

    sample = sub.add_parser('sample', help='Print the bundled graph as JSON Lines')
    sample.add_argument('--materials', nargs='*', default=[],
                        help='Uploaded material file names to add as nodes')
    sample.add_argument('--seed', type=int, default=None,
                        help='Random seed for material links')

    render = sub.add_parser('render', help='Draw saved positions as SVG')
    render.add_argument('--input', '-i', type=Path, required=True,
                        help='Graph file (JSON or JSON Lines)')
    render.add_argument('--positions', '-p', type=Path, required=True,
                        help='JSON Lines position records from the layout command')
    render.add_argument('--width', type=float, default=800.0, help='Canvas width')
    render.add_argument('--height', type=float, default=500.0, help='Canvas height')
    render.add_argument('--scale', type=float, default=1.0, help='Zoom factor')
    render.add_argument('--output', '-o', type=Path, default=None,
                        help='Output file (default: stdout)')
    return parser


def _load_config(args) -> LayoutConfig:
    config = load_config(args.config) if args.config else LayoutConfig()
    overrides = {}
    if args.iterations is not None:
        overrides['iterations'] = args.iterations
    if args.seed is not None:
        overrides['seed'] = args.seed
    return config.replace(**overrides) if overrides else config


def run_layout(args) -> str:
    """Execute the ``layout`` command and return the rendered output."""
    config = _load_config(args)
    bounds = Bounds(args.width, args.height, args.scale)
    rng = make_rng(None, config)

    if args.input:
        nodes, edges = load_graph(args.input)
        nodes, edges = add_materials(nodes, edges, args.materials, rng)
    else:
        nodes, edges = build_graph(args.materials, rng)

    nodes, edges = filter_graph(nodes, edges, args.search, args.group)
    logger.info(f"Laying out {len(nodes)} nodes and {len(edges)} edges ({args.mode})")

    positions = compute_layout(nodes, edges, bounds, args.mode, config, rng)

    if args.format == 'svg':
        return render_svg(nodes, edges, positions, bounds)

    lines = io.StringIO()
    write_positions(positions, lines)
    return lines.getvalue()


def run_sample(args) -> str:
    nodes, edges = build_graph(args.materials, args.seed)
    lines = io.StringIO()
    for node in nodes:
        write_node(node, lines)
    for edge in edges:
        write_edge(edge, lines)
    return lines.getvalue()


def run_render(args) -> str:
    """Render a graph at previously computed positions."""
    bounds = Bounds(args.width, args.height, args.scale)
    nodes, edges = load_graph(args.input)
    with open(args.positions, encoding='utf-8') as f:
        positions = read_positions(f)
    logger.info(f"Rendering {len(positions)} of {len(nodes)} nodes")
    return render_svg(nodes, edges, positions, bounds)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
    )

    try:
        if args.command == 'layout':
            output = run_layout(args)
        elif args.command == 'render':
            output = run_render(args)
        else:
            output = run_sample(args)
    except LayoutError as e:
        parser.error(str(e))
    except OSError as e:
        logger.error(f"I/O error: {e}")
        return 1

    target = getattr(args, 'output', None)
    try:
        if target:
            target.write_text(output, encoding='utf-8')
            logger.info(f"Wrote {target}")
        else:
            sys.stdout.write(output)
    except OSError as e:
        logger.error(f"I/O error: {e}")
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
