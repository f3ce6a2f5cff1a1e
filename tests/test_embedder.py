from __future__ import annotations

import sys
import unittest
from pathlib import Path

TESTS_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = TESTS_DIR.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from treelayout import LayoutConfig, Position, Tree, Visualize, compute


class Label(Visualize):
    def __init__(self, text: str) -> None:
        self.text = text

    def visualize(self) -> str:
        return self.text


def build_reference_tree() -> tuple[Tree, dict[str, int]]:
    #      R
    #     / \
    #    C1  C2
    #   / \
    #  G1  G2
    tree = Tree()
    ids = {}
    ids["R"] = tree.insert(Label("R"))
    ids["C1"] = tree.insert(Label("C1"), ids["R"])
    ids["C2"] = tree.insert(Label("C2"), ids["R"])
    ids["G1"] = tree.insert(Label("G1"), ids["C1"])
    ids["G2"] = tree.insert(Label("G2"), ids["C1"])
    return tree, ids


def build_lopsided_tree() -> Tree:
    tree = Tree()
    root = tree.insert(Label("root"))
    wide = tree.insert(Label("wide"), root)
    for i in range(5):
        mid = tree.insert(Label(f"w{i}"), wide)
        if i % 2 == 0:
            tree.insert(Label(f"w{i}a"), mid)
            tree.insert(Label(f"w{i}b"), mid)
    tree.insert(Label("lone"), root)
    pair = tree.insert(Label("pair"), root)
    tree.insert(Label("p1"), pair)
    deep = tree.insert(Label("p2"), pair)
    for i in range(3):
        deep = tree.insert(Label(f"d{i}"), deep)
    return tree


class LayoutEngineTests(unittest.TestCase):
    W, G, H = 40.0, 10.0, 50.0

    def config(self, **overrides) -> LayoutConfig:
        values = dict(node_width=self.W, horizontal_gap=self.G, vertical_gap=self.H)
        values.update(overrides)
        return LayoutConfig(**values)

    def test_reference_scenario_coordinates(self) -> None:
        tree, ids = build_reference_tree()
        pos = compute(tree, self.config()).positions
        w, g, h = self.W, self.G, self.H

        self.assertAlmostEqual(pos[ids["G1"]].x, 0.0)
        self.assertAlmostEqual(pos[ids["G2"]].x, w + g)
        self.assertAlmostEqual(pos[ids["C1"]].x, (w + g) / 2)
        # C1's span ends at 3w/2 + g; C2 starts one gap later and is a leaf.
        self.assertAlmostEqual(pos[ids["C2"]].x, (3 * w / 2 + g) + g + w / 2)
        self.assertAlmostEqual(pos[ids["R"]].x, (pos[ids["C1"]].x + pos[ids["C2"]].x) / 2)
        self.assertEqual(pos[ids["R"]], Position(62.5, 0.0))

        self.assertEqual(pos[ids["R"]].y, 0.0)
        self.assertEqual(pos[ids["C1"]].y, h)
        self.assertEqual(pos[ids["C2"]].y, h)
        self.assertEqual(pos[ids["G1"]].y, 2 * h)
        self.assertEqual(pos[ids["G2"]].y, 2 * h)

    def test_empty_tree_yields_empty_result(self) -> None:
        result = compute(Tree(), self.config())
        self.assertTrue(result.is_empty)
        self.assertEqual(len(result), 0)
        self.assertEqual(result.edges, [])
        self.assertEqual(result.order, [])

    def test_single_node_sits_at_origin(self) -> None:
        tree = Tree()
        root = tree.insert(Label("only"))
        result = compute(tree, self.config())
        self.assertEqual(result.positions, {root: Position(0.0, 0.0)})
        self.assertEqual(result.edges, [])
        self.assertEqual(result.spans[root], (-self.W / 2, self.W / 2))

    def test_counts_and_depths(self) -> None:
        tree = build_lopsided_tree()
        result = compute(tree, self.config())
        self.assertEqual(len(result.positions), len(tree))
        self.assertEqual(len(result.edges), len(tree) - 1)
        self.assertEqual(len(result.edge_ids), len(tree) - 1)
        for node_id, position in result.positions.items():
            self.assertEqual(result.depths[node_id], tree.depth(node_id))
            self.assertEqual(position.y, tree.depth(node_id) * self.H)

    def test_edges_follow_parent_relation(self) -> None:
        tree = build_lopsided_tree()
        result = compute(tree, self.config())
        for (parent, child), (p_pos, c_pos) in zip(result.edge_ids, result.edges):
            self.assertEqual(tree.parent_id(child), parent)
            self.assertEqual(result.positions[parent], p_pos)
            self.assertEqual(result.positions[child], c_pos)

    def test_sibling_spans_are_disjoint(self) -> None:
        tree = build_lopsided_tree()
        result = compute(tree, self.config())
        for node_id in result.order:
            kids = tree.children_ids(node_id)
            for left, right in zip(kids, kids[1:]):
                left_hi = result.spans[left][1]
                right_lo = result.spans[right][0]
                self.assertLessEqual(left_hi, right_lo)
                self.assertAlmostEqual(right_lo - left_hi, self.G)
            for kid in kids:
                self.assertGreaterEqual(result.spans[kid][0], result.spans[node_id][0])
                self.assertLessEqual(result.spans[kid][1], result.spans[node_id][1])

    def test_nodes_on_one_level_never_overlap(self) -> None:
        tree = build_lopsided_tree()
        result = compute(tree, self.config())
        levels: dict[int, list[float]] = {}
        for node_id in result.order:
            levels.setdefault(result.depths[node_id], []).append(result.positions[node_id].x)
        for xs in levels.values():
            for a, b in zip(xs, xs[1:]):
                self.assertGreaterEqual(b - a, self.W + self.G - 1e-9)

    def test_parent_is_centred_over_first_and_last_child(self) -> None:
        tree = build_lopsided_tree()
        result = compute(tree, self.config())
        checked = 0
        for node_id in result.order:
            kids = tree.children_ids(node_id)
            if not kids:
                low, high = result.spans[node_id]
                self.assertAlmostEqual(result.positions[node_id].x, (low + high) / 2)
                continue
            first = result.positions[kids[0]].x
            last = result.positions[kids[-1]].x
            self.assertAlmostEqual(result.positions[node_id].x, (first + last) / 2)
            checked += 1
        self.assertGreater(checked, 3)

    def test_parent_is_not_centred_over_its_full_extent(self) -> None:
        tree = build_lopsided_tree()
        root = tree.root_id()
        result = compute(tree, self.config())
        low, high = result.spans[root]
        self.assertNotAlmostEqual(result.positions[root].x, (low + high) / 2)

    def test_left_right_orientation_swaps_axes(self) -> None:
        tree = build_lopsided_tree()
        top_down = compute(tree, self.config())
        left_right = compute(tree, self.config(orientation="LR"))
        for node_id, position in top_down.positions.items():
            self.assertEqual(left_right.positions[node_id], Position(position.y, position.x))

    def test_layout_is_deterministic(self) -> None:
        tree = build_lopsided_tree()
        first = compute(tree, self.config())
        second = compute(tree, self.config())
        self.assertEqual(first, second)
        self.assertIsNot(first, second)

    def test_label_length_does_not_affect_geometry(self) -> None:
        tree = Tree()
        root = tree.insert(Label("x" * 200))
        tree.insert(Label(""), root)
        result = compute(tree, self.config())
        self.assertEqual(result.positions[root], Position(0.0, 0.0))

    def test_deep_chain_does_not_recurse(self) -> None:
        tree = Tree()
        node = tree.insert(Label("0"))
        for i in range(1, 5000):
            node = tree.insert(Label(str(i)), node)
        result = compute(tree, self.config())
        self.assertEqual(len(result), 5000)
        self.assertEqual(result.positions[node], Position(0.0, 4999 * self.H))

    def test_default_config_and_wide_node(self) -> None:
        tree, ids = build_reference_tree()
        result = compute(tree)
        self.assertAlmostEqual(result.positions[ids["G2"]].x, 100.0)
        narrow = compute(tree, self.config(node_width=300.0, horizontal_gap=0.0))
        self.assertAlmostEqual(narrow.positions[ids["G2"]].x, 300.0)

    def test_config_validation(self) -> None:
        with self.assertRaises(ValueError):
            LayoutConfig(node_width=0)
        with self.assertRaises(ValueError):
            LayoutConfig(horizontal_gap=-1)
        with self.assertRaises(ValueError):
            LayoutConfig(vertical_gap=-0.5)
        with self.assertRaisesRegex(ValueError, "orientation"):
            LayoutConfig(orientation="BT")

    def test_layout_never_calls_visualize(self) -> None:
        class Exploding(Visualize):
            def visualize(self) -> str:
                raise AssertionError("layout must not read labels")

        tree = Tree()
        root = tree.insert(Exploding())
        tree.insert(Exploding(), root)
        self.assertEqual(len(compute(tree, self.config())), 2)


if __name__ == "__main__":
    unittest.main()
