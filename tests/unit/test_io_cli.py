# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)

"""
Tests for JSON Lines I/O and the command line front end.
"""

import io
import json
import os
import sys
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', 'src'))

from eduragpt.knowledge_graph.cli import main
from eduragpt.knowledge_graph.errors import GraphFormatError
from eduragpt.knowledge_graph.io import (
    graph_from_dict,
    load_graph,
    read_graph,
    read_positions,
    write_edge,
    write_node,
    write_positions,
)
from eduragpt.knowledge_graph.model import Edge, Node


class TestJsonLines(unittest.TestCase):

    def test_read_graph_skips_bad_lines(self):
        stream = io.StringIO(
            '{"type": "node", "id": "1", "label": "Trees", "group": "cs"}\n'
            '\n'
            'not json\n'
            '{"type": "edge", "from": "1", "to": "2", "width": 2}\n'
            '{"type": "node", "label": "no id"}\n'
            '{"type": "comment", "text": "ignored"}\n'
        )
        with self.assertLogs('eduragpt.knowledge_graph.io', level='WARNING') as logs:
            nodes, edges = read_graph(stream)
        self.assertEqual(nodes, [Node("1", "Trees", "cs")])
        self.assertEqual(edges, [Edge("1", "2", width=2)])
        self.assertEqual(len(logs.records), 2)

    def test_read_graph_skips_badly_typed_records(self):
        stream = io.StringIO(
            '{"type": "node", "id": "a", "size": "big"}\n'
            '{"type": "node", "id": "b", "label": null}\n'
            '{"type": "edge", "from": "a", "to": "b", "width": "wide"}\n'
        )
        with self.assertLogs('eduragpt.knowledge_graph.io', level='WARNING') as logs:
            nodes, edges = read_graph(stream)
        self.assertEqual(nodes, [Node("b")])
        self.assertEqual(edges, [])
        self.assertEqual(len(logs.records), 2)

    def test_positions_written_as_records(self):
        out = io.StringIO()
        write_positions({"a": (1.5, 2.0), "b": (3.0, 4.25)}, out)
        records = [json.loads(line) for line in out.getvalue().splitlines()]
        self.assertEqual(records[0], {"type": "position", "id": "a", "x": 1.5, "y": 2.0})
        self.assertEqual(read_positions(io.StringIO(out.getvalue())),
                         {"a": (1.5, 2.0), "b": (3.0, 4.25)})

    def test_graph_from_dict_missing_field(self):
        with self.assertRaises(GraphFormatError):
            graph_from_dict({"nodes": [{"label": "x"}]})

    def test_graph_from_dict_bad_types(self):
        for doc in [{"nodes": [{"id": "a", "label": {"x": 1}}]},
                    {"nodes": ["a"]},
                    {"edges": [{"from": "a", "to": "b", "width": "wide"}]}]:
            with self.subTest(doc=doc):
                with self.assertRaises(GraphFormatError):
                    graph_from_dict(doc)


class TestLoadGraph(unittest.TestCase):

    def test_json_document(self):
        doc = {
            "nodes": [{"id": "a", "label": "A"}, {"id": "b", "label": "B", "size": 12}],
            "edges": [{"from": "a", "to": "b"}],
        }
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "graph.json"
            path.write_text(json.dumps(doc, indent=2))
            nodes, edges = load_graph(path)
        self.assertEqual([n.id for n in nodes], ["a", "b"])
        self.assertEqual(nodes[1].size, 12)
        self.assertEqual(edges, [Edge("a", "b")])

    def test_json_lines(self):
        out = io.StringIO()
        write_node(Node("a", "A"), out)
        write_node(Node("b", "B"), out)
        write_edge(Edge("a", "b", width=3), out)
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "graph.jsonl"
            path.write_text(out.getvalue())
            nodes, edges = load_graph(path)
        self.assertEqual(len(nodes), 2)
        self.assertEqual(edges, [Edge("a", "b", width=3)])

    def test_single_record_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "one.jsonl"
            path.write_text('{"type": "node", "id": "solo"}\n')
            nodes, edges = load_graph(path)
        self.assertEqual(nodes, [Node("solo")])
        self.assertEqual(edges, [])


class TestCli(unittest.TestCase):

    def _run(self, argv):
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            code = main(argv)
        return code, out.getvalue()

    def test_circular_positions(self):
        code, out = self._run(['layout', '--mode', 'circular',
                               '--width', '400', '--height', '400'])
        self.assertEqual(code, 0)
        positions = read_positions(io.StringIO(out))
        self.assertEqual(len(positions), 14)
        self.assertAlmostEqual(positions["1"][0], 360.0)
        self.assertAlmostEqual(positions["1"][1], 200.0)

    def test_force_seeded_is_reproducible(self):
        argv = ['layout', '--seed', '5', '--materials', 'notes.pdf']
        _, first = self._run(argv)
        _, second = self._run(argv)
        self.assertEqual(first, second)
        self.assertEqual(len(read_positions(io.StringIO(first))), 15)

    def test_filters(self):
        code, out = self._run(['layout', '--search', 'learn', '--group', 'ml', '--seed', '1'])
        self.assertEqual(code, 0)
        self.assertEqual(set(read_positions(io.StringIO(out))), {"1", "3", "4", "5"})

    def test_svg_output_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            target = Path(tmpdir) / "graph.svg"
            code, out = self._run(['layout', '--format', 'svg', '--seed', '2',
                                   '-o', str(target)])
            self.assertEqual(code, 0)
            self.assertEqual(out, "")
            svg = target.read_text()
        self.assertTrue(svg.startswith("<svg"))
        self.assertEqual(svg.count("<circle"), 14)

    def test_input_file_and_config(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            graph = Path(tmpdir) / "graph.json"
            graph.write_text(json.dumps({
                "nodes": [{"id": "x"}, {"id": "y"}],
                "edges": [{"from": "x", "to": "y"}, {"from": "x", "to": "missing"}],
            }))
            config = Path(tmpdir) / "layout.yaml"
            config.write_text("layout:\n  iterations: 3\n")
            code, out = self._run(['layout', '-i', str(graph), '--config', str(config),
                                   '--seed', '0'])
        self.assertEqual(code, 0)
        self.assertEqual(set(read_positions(io.StringIO(out))), {"x", "y"})

    def test_invalid_bounds_exit_code(self):
        with self.assertRaises(SystemExit) as ctx:
            self._run(['layout', '--width', '0'])
        self.assertEqual(ctx.exception.code, 2)

    def test_invalid_iterations_exit_code(self):
        with self.assertRaises(SystemExit) as ctx:
            self._run(['layout', '--iterations', '-3'])
        self.assertEqual(ctx.exception.code, 2)

    def test_missing_input_file(self):
        code, _ = self._run(['layout', '-i', '/nonexistent/graph.json'])
        self.assertEqual(code, 1)

    def test_sample_command(self):
        code, out = self._run(['sample'])
        self.assertEqual(code, 0)
        nodes, edges = read_graph(io.StringIO(out))
        self.assertEqual(len(nodes), 14)
        self.assertEqual(len(edges), 14)

    def _sample_file(self, tmpdir, *materials):
        code, out = self._run(['sample', '--seed', '1', '--materials', *materials])
        self.assertEqual(code, 0)
        path = Path(tmpdir) / "sample.jsonl"
        path.write_text(out)
        return path, read_graph(io.StringIO(out))

    def test_input_materials_are_not_relinked(self):
        """Re-laying out a dumped graph keeps its edge set unchanged."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path, (nodes, edges) = self._sample_file(tmpdir, 'a.pdf')
            code, svg = self._run(['layout', '-i', str(path), '--format', 'svg',
                                   '--seed', '1'])
        self.assertEqual(code, 0)
        self.assertEqual(svg.count('<circle '), len(nodes))
        self.assertEqual(svg.count('<line '), len(edges))

    def test_input_with_extra_materials(self):
        """New materials get fresh ids after those already in the file."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path, (nodes, edges) = self._sample_file(tmpdir, 'a.pdf')
            code, out = self._run(['layout', '-i', str(path), '--materials', 'b.pdf',
                                   '--seed', '1'])
        self.assertEqual(code, 0)
        positions = read_positions(io.StringIO(out))
        self.assertEqual(len(positions), 16)
        self.assertIn("m-0", positions)
        self.assertIn("m-1", positions)

    def test_jsonl_null_label_is_accepted(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            graph = Path(tmpdir) / "graph.jsonl"
            graph.write_text(
                '{"type": "node", "id": "a", "label": null}\n'
                '{"type": "node", "id": "b", "size": "big"}\n'
                '{"type": "node", "id": "c", "label": "C"}\n'
            )
            code, out = self._run(['layout', '-i', str(graph), '--search', 'c',
                                   '--seed', '0'])
        self.assertEqual(code, 0)
        self.assertEqual(set(read_positions(io.StringIO(out))), {"c"})

    def test_bad_field_type_exit_code(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            graph = Path(tmpdir) / "graph.json"
            graph.write_text(json.dumps({"nodes": [{"id": "a", "size": "big"}]}))
            with self.assertRaises(SystemExit) as ctx:
                self._run(['layout', '-i', str(graph)])
        self.assertEqual(ctx.exception.code, 2)

    def test_duplicate_ids_exit_code(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            graph = Path(tmpdir) / "graph.json"
            graph.write_text(json.dumps({"nodes": [{"id": "a"}, {"id": "b"}, {"id": "a"}]}))
            with self.assertRaises(SystemExit) as ctx:
                self._run(['layout', '-i', str(graph), '--mode', 'circular'])
        self.assertEqual(ctx.exception.code, 2)

    def test_render_saved_positions(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path, (nodes, edges) = self._sample_file(tmpdir)
            code, out = self._run(['layout', '-i', str(path), '--mode', 'circular'])
            self.assertEqual(code, 0)
            positions = Path(tmpdir) / "positions.jsonl"
            positions.write_text(out)
            code, svg = self._run(['render', '-i', str(path), '-p', str(positions)])
        self.assertEqual(code, 0)
        self.assertTrue(svg.startswith("<svg"))
        self.assertEqual(svg.count('<circle '), len(nodes))
        # node "1" sits right of centre: 400 + 0.8 * 250
        self.assertIn('data-id="1" cx="600"', svg)


if __name__ == '__main__':
    unittest.main()
