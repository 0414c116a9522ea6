"""Tests for XMLNode data and navigation."""

import pytest

from lenient_xml.tree import XMLNode


def _sample_tree() -> XMLNode:
    return XMLNode(
        "library",
        children=[
            XMLNode("book", {"id": "1"}, children=[XMLNode("title", text="Dune")]),
            XMLNode("magazine", {"id": "2"}),
            XMLNode("book", {"id": "3"}, children=[XMLNode("title", text="Emma")]),
        ],
    )


class TestXMLNode:
    """Test XMLNode construction and helpers."""

    def test_node_defaults(self) -> None:
        """Test a bare node has no attributes, text or children."""
        node = XMLNode("root")

        assert node.tag == "root"
        assert node.attributes == {}
        assert node.text is None
        assert node.children == []
        assert node.position is None
        assert node.is_leaf

    def test_empty_tag_raises_error(self) -> None:
        """Test that empty tag raises ValueError."""
        with pytest.raises(ValueError, match="Node tag cannot be empty"):
            XMLNode(tag="")

    def test_add_child_keeps_order(self) -> None:
        """Test children are appended in order."""
        parent = XMLNode("parent")
        first, second = XMLNode("first"), XMLNode("second")

        parent.add_child(first)
        parent.add_child(second)

        assert parent.children == [first, second]
        assert not parent.is_leaf

    def test_add_child_with_invalid_type_raises_error(self) -> None:
        """Test adding a non-node raises TypeError."""
        with pytest.raises(TypeError, match="Child must be an XMLNode instance"):
            XMLNode("parent").add_child("child")  # type: ignore[arg-type]

    def test_equality_is_structural_and_ignores_position(self) -> None:
        """Test nodes compare by content, not by source offset."""
        left = XMLNode("a", {"k": "v"}, text="x", position=0)
        right = XMLNode("a", {"k": "v"}, text="x", position=42)

        assert left == right
        assert left != XMLNode("a", {"k": "other"}, text="x")
        assert left != "a"

    def test_nodes_are_unhashable(self) -> None:
        """Test mutable nodes cannot be used as dict keys."""
        with pytest.raises(TypeError):
            hash(XMLNode("a"))

    def test_find_child_and_children(self) -> None:
        """Test direct child lookup."""
        tree = _sample_tree()

        assert tree.find_child("book").attributes["id"] == "1"
        assert [n.attributes["id"] for n in tree.find_children("book")] == ["1", "3"]
        assert tree.find_child("title") is None

    def test_find_searches_descendants_in_document_order(self) -> None:
        """Test find returns the first descendant in document order."""
        tree = _sample_tree()

        assert tree.find("title").text == "Dune"
        assert [n.text for n in tree.find_all("title")] == ["Dune", "Emma"]
        assert tree.find("library") is None

    def test_iter_is_pre_order(self) -> None:
        """Test iteration visits parents before children, in order."""
        tags = [node.tag for node in _sample_tree().iter()]

        assert tags == ["library", "book", "title", "magazine", "book", "title"]

    def test_node_count(self) -> None:
        """Test node count includes the node itself."""
        assert _sample_tree().node_count() == 6
        assert XMLNode("solo").node_count() == 1

    def test_attribute_helpers(self) -> None:
        """Test attribute getters."""
        node = XMLNode("a", {"k": "v"})

        assert node.get_attribute("k") == "v"
        assert node.get_attribute("missing") is None
        assert node.get_attribute("missing", "fallback") == "fallback"
        assert node.has_attribute("k")
        assert not node.has_attribute("missing")

    def test_to_dict(self) -> None:
        """Test dictionary conversion omits absent text and children."""
        node = XMLNode("person", {"name": "John"}, children=[XMLNode("age", text="45")])

        assert node.to_dict() == {
            "tag": "person",
            "attributes": {"name": "John"},
            "children": [{"tag": "age", "attributes": {}, "text": "45"}],
        }
