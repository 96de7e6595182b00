# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)

"""
Tests for graph filtering and the bundled concept graph.
"""

import os
import sys
import unittest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', 'src'))

from eduragpt.knowledge_graph.filtering import filter_graph, filter_nodes
from eduragpt.knowledge_graph.sample import (
    MATERIALS_GROUP,
    add_materials,
    base_edges,
    base_nodes,
    build_graph,
    material_edges,
    material_label,
    material_nodes,
    next_material_index,
)


class TestFiltering(unittest.TestCase):
    """Search text and category filters."""

    def setUp(self):
        self.nodes = base_nodes()
        self.edges = base_edges()

    def test_no_filter_keeps_everything(self):
        nodes, edges = filter_graph(self.nodes, self.edges)
        self.assertEqual(nodes, self.nodes)
        self.assertEqual(edges, self.edges)

    def test_search_is_case_insensitive(self):
        nodes, edges = filter_graph(self.nodes, self.edges, search="LEARN")
        self.assertEqual({n.id for n in nodes}, {"1", "3", "4", "5"})
        self.assertEqual({(e.from_id, e.to_id) for e in edges},
                         {("1", "3"), ("1", "4"), ("1", "5"), ("3", "4")})

    def test_group_filter(self):
        nodes = filter_nodes(self.nodes, group="cs")
        self.assertEqual(len(nodes), 9)
        self.assertTrue(all(n.group == "cs" for n in nodes))

    def test_search_and_group_combined(self):
        nodes, edges = filter_graph(self.nodes, self.edges, search="network", group="ml")
        self.assertEqual([n.id for n in nodes], ["2"])
        self.assertEqual(edges, [])

    def test_no_matches(self):
        nodes, edges = filter_graph(self.nodes, self.edges, search="quantum")
        self.assertEqual(nodes, [])
        self.assertEqual(edges, [])


class TestSampleGraph(unittest.TestCase):
    """Bundled concepts and uploaded materials."""

    def test_base_graph(self):
        nodes = base_nodes()
        self.assertEqual(len(nodes), 14)
        self.assertEqual(len({n.id for n in nodes}), 14)
        self.assertEqual(len(base_edges()), 14)
        ids = {n.id for n in nodes}
        for edge in base_edges():
            self.assertIn(edge.from_id, ids)
            self.assertIn(edge.to_id, ids)

    def test_material_label(self):
        self.assertEqual(material_label("Lecture 3.PDF"), "Lecture 3")
        self.assertEqual(material_label("slides.pptx"), "slides")
        self.assertEqual(material_label("archive.tar.gz"), "archive.tar.gz")
        self.assertEqual(material_label("pdf notes.txt"), "pdf notes.txt")

    def test_material_nodes(self):
        nodes = material_nodes(["a.pdf", "b.docx"])
        self.assertEqual([n.id for n in nodes], ["m-0", "m-1"])
        self.assertEqual([n.label for n in nodes], ["a", "b"])
        self.assertTrue(all(n.group == MATERIALS_GROUP and n.size == 15 for n in nodes))

    def test_material_edges_link_to_concepts(self):
        nodes = base_nodes() + material_nodes(["x.pdf", "y.png", "z.jpg"])
        edges = material_edges(nodes, rng=4)
        concept_ids = {n.id for n in base_nodes()}

        per_material = {}
        for edge in edges:
            self.assertIn(edge.to_id, concept_ids)
            self.assertEqual(edge.width, 1)
            per_material[edge.from_id] = per_material.get(edge.from_id, 0) + 1

        self.assertEqual(set(per_material), {"m-0", "m-1", "m-2"})
        for count in per_material.values():
            self.assertIn(count, (2, 3))

    def test_material_edges_without_concepts(self):
        self.assertEqual(material_edges(material_nodes(["a.pdf"]), rng=0), [])

    def test_build_graph_seeded(self):
        a = build_graph(["notes.pdf"], rng=10)
        b = build_graph(["notes.pdf"], rng=10)
        self.assertEqual(a, b)
        nodes, edges = a
        self.assertEqual(len(nodes), 15)
        self.assertGreaterEqual(len(edges), 16)

    def test_material_nodes_start_offset(self):
        nodes = material_nodes(["c.pdf"], start=3)
        self.assertEqual([n.id for n in nodes], ["m-3"])
        self.assertEqual(next_material_index(base_nodes()), 0)
        self.assertEqual(next_material_index(base_nodes() + nodes), 4)

    def test_add_materials_keeps_ids_unique(self):
        nodes, edges = build_graph(["a.pdf"], rng=1)
        more_nodes, more_edges = add_materials(nodes, edges, ["b.pdf"], rng=2)
        ids = [n.id for n in more_nodes]
        self.assertEqual(len(ids), len(set(ids)))
        self.assertEqual(ids[-1], "m-1")

    def test_add_materials_links_only_new_nodes(self):
        """Materials already in the graph keep their edges and gain no new ones."""
        nodes, edges = build_graph(["a.pdf"], rng=1)
        same_nodes, same_edges = add_materials(nodes, edges, [], rng=2)
        self.assertEqual(same_nodes, nodes)
        self.assertEqual(same_edges, edges)

        _, more_edges = add_materials(nodes, edges, ["b.pdf"], rng=2)
        self.assertEqual(more_edges[:len(edges)], edges)
        new_edges = more_edges[len(edges):]
        self.assertIn(len(new_edges), (2, 3))
        self.assertTrue(all(e.from_id == "m-1" for e in new_edges))

    def test_material_edges_for_selected_materials(self):
        old = material_nodes(["a.pdf"])
        new = material_nodes(["b.pdf"], start=1)
        edges = material_edges(base_nodes() + old + new, rng=0, materials=new)
        self.assertEqual({e.from_id for e in edges}, {"m-1"})


if __name__ == '__main__':
    unittest.main()
