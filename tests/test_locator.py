"""Tests for the instance locator."""

from complink_cli.document import DocumentNode
from complink_cli.locator import locate


def _names(records):
    return [r.node.name for r in records]


class TestLocate:
    """Test depth-first instance discovery."""

    def test_finds_every_instance_in_pre_order(self, sample_document):
        frame = sample_document.get_node_by_id("1:1")

        records = locate(frame)

        assert _names(records) == ["Btn", "Icon", "Avatar", "Badge", "Divider"]

    def test_count_matches_instance_nodes(self, sample_document):
        frame = sample_document.get_node_by_id("1:1")
        walked = [n for n in sample_document.walk() if n.type == "INSTANCE"]
        under_frame = [n for n in walked if n.id in {"1:2", "1:3", "1:7", "1:8", "1:9"}]

        assert len(locate(frame)) == len(under_frame)
        assert len(locate(sample_document.root)) == len(walked)

    def test_level_counts_only_instance_ancestors(self, sample_document):
        records = {r.node.id: r for r in locate(sample_document.get_node_by_id("1:1"))}

        # Avatar sits under a GROUP, which does not add a level
        assert records["1:7"].level == 0
        assert records["1:2"].level == 0
        assert records["1:3"].level == 1
        assert records["1:8"].level == 1

    def test_parent_path_and_name(self, sample_document):
        records = {r.node.id: r for r in locate(sample_document.get_node_by_id("1:1"))}

        assert records["1:2"].parent_path == ()
        assert records["1:2"].parent_name is None
        assert records["1:3"].parent_path == ("Btn",)
        assert records["1:3"].parent_name == "Btn"
        assert records["1:8"].parent_path == ("Avatar",)

    def test_nested_chain_outermost_first(self):
        root = DocumentNode.from_dict({
            "id": "f", "name": "F", "type": "FRAME", "children": [
                {"id": "a", "name": "A", "type": "INSTANCE", "children": [
                    {"id": "g", "name": "G", "type": "GROUP", "children": [
                        {"id": "b", "name": "B", "type": "INSTANCE", "children": [
                            {"id": "c", "name": "C", "type": "INSTANCE"},
                        ]},
                    ]},
                ]},
            ],
        })

        records = locate(root)

        assert [r.level for r in records] == [0, 1, 2]
        assert records[2].parent_path == ("A", "B")
        assert records[2].parent_name == "B"

    def test_root_instance_is_counted_at_level_zero(self):
        root = DocumentNode.from_dict({
            "id": "i", "name": "Root", "type": "INSTANCE", "children": [
                {"id": "j", "name": "Child", "type": "INSTANCE"},
            ],
        })

        records = locate(root)

        assert [(r.node.id, r.level) for r in records] == [("i", 0), ("j", 1)]
        assert records[1].parent_path == ("Root",)

    def test_siblings_do_not_share_chain(self):
        root = DocumentNode.from_dict({
            "id": "f", "name": "F", "type": "FRAME", "children": [
                {"id": "a", "name": "A", "type": "INSTANCE", "children": [
                    {"id": "a1", "name": "A1", "type": "INSTANCE"},
                ]},
                {"id": "b", "name": "B", "type": "INSTANCE", "children": [
                    {"id": "b1", "name": "B1", "type": "INSTANCE"},
                ]},
            ],
        })

        records = {r.node.id: r for r in locate(root)}

        assert records["b"].parent_path == ()
        assert records["b1"].parent_path == ("B",)

    def test_leaf_and_empty_containers(self):
        leaf = DocumentNode("v", "Vector", "VECTOR")
        empty = DocumentNode("f", "Empty", "FRAME", children=[])

        assert locate(leaf) == []
        assert locate(empty) == []

    def test_deep_tree_does_not_recurse(self):
        depth = 5000
        node = DocumentNode(f"n{depth}", f"I{depth}", "INSTANCE")
        for i in range(depth - 1, -1, -1):
            node = DocumentNode(f"n{i}", f"I{i}", "INSTANCE", children=[node])
        root = DocumentNode("root", "Root", "FRAME", children=[node])

        records = locate(root)

        assert len(records) == depth + 1
        assert records[-1].level == depth
        assert records[-1].parent_name == f"I{depth - 1}"

    def test_is_repeatable(self, sample_document):
        frame = sample_document.get_node_by_id("1:1")

        assert locate(frame) == locate(frame)
