import unittest

from pathwise.errors import FormatError, NotFound
from pathwise.roadmaps.tree import count_nodes, find_node, flatten, parse_roadmap


def names(node):
    return [c.name for c in node.children]


class TestParseRoadmap(unittest.TestCase):
    def test_siblings_and_children(self):
        root = parse_roadmap("| A\n|| B\n| C", "Root")
        self.assertEqual(root.name, "Root")
        self.assertEqual(names(root), ["A", "C"])
        self.assertEqual(names(root.children[0]), ["B"])
        self.assertEqual(root.children[1].children, [])

    def test_node_count_is_lines_plus_root(self):
        text = "| Basics\n|| Variables\n||| Types\n|| Loops\n| Advanced\n|| Generators"
        root = parse_roadmap(text, "Python")
        self.assertEqual(count_nodes(root), 6 + 1)

    def test_no_markers_raises_format_error(self):
        with self.assertRaises(FormatError):
            parse_roadmap("Basics\nAdvanced", "Python")

    def test_unmarked_line_is_depth_one(self):
        root = parse_roadmap("| A\nB\n|| C", "Root")
        self.assertEqual(names(root), ["A", "B"])
        self.assertEqual(names(root.children[1]), ["C"])

    def test_blank_lines_do_not_reset_depth(self):
        root = parse_roadmap("| A\n\n||   \n|| B", "Root")
        self.assertEqual(names(root), ["A"])
        self.assertEqual(names(root.children[0]), ["B"])

    def test_markers_inside_name_are_stripped(self):
        root = parse_roadmap("|  Input | Output  ", "Root")
        self.assertEqual(names(root), ["Input  Output"])

    def test_orphan_line_is_dropped_with_its_children(self):
        root = parse_roadmap("| A\n||| Orphan\n|||| Child of orphan\n|| B", "Root")
        self.assertEqual(names(root), ["A"])
        self.assertEqual(names(root.children[0]), ["B"])
        self.assertEqual(count_nodes(root), 3)

    def test_later_sibling_becomes_insertion_point(self):
        root = parse_roadmap("| A\n| B\n|| C", "Root")
        self.assertEqual(names(root.children[0]), [])
        self.assertEqual(names(root.children[1]), ["C"])

    def test_only_markers_gives_empty_root(self):
        root = parse_roadmap("|||\n||", "Root")
        self.assertEqual(root.children, [])

    def test_node_ids_are_unique_preorder(self):
        root = parse_roadmap("| A\n|| B\n| C", "Root")
        self.assertEqual([n.node_id for n in flatten(root)], ["n0", "n1", "n2", "n3"])
        self.assertEqual([n.name for n in flatten(root)], ["Root", "A", "B", "C"])

    def test_find_node(self):
        root = parse_roadmap("| A\n|| B\n| C", "Root")
        self.assertEqual(find_node(root, "n2").name, "B")
        with self.assertRaises(NotFound):
            find_node(root, "n9")

    def test_round_trips_through_json(self):
        root = parse_roadmap("| A\n|| B", "Root")
        restored = type(root).model_validate_json(root.model_dump_json())
        self.assertEqual(restored, root)


if __name__ == "__main__":
    unittest.main()
