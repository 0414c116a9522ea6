"""Node type for the lenient XML tree.

A parsed document is a tree of ``XMLNode`` objects. Each node is exclusively
owned by its parent's ``children`` list; nodes carry no back references.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional


@dataclass(eq=False)
class XMLNode:
    """A single parsed element.

    Attributes:
        tag: Element name, never empty
        attributes: Attribute name to value mapping
        text: Trimmed floating text of the element, ``None`` if there was none
        children: Child elements in source order
        position: Offset of the element's ``<`` in the input
    """

    tag: str
    attributes: Dict[str, str] = field(default_factory=dict)
    text: Optional[str] = None
    children: List["XMLNode"] = field(default_factory=list)
    position: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate node values."""
        if not self.tag:
            raise ValueError("Node tag cannot be empty")

    def __eq__(self, other: object) -> bool:
        # Structural equality; source position is not part of identity
        if not isinstance(other, XMLNode):
            return NotImplemented
        return (
            self.tag == other.tag
            and self.attributes == other.attributes
            and self.text == other.text
            and self.children == other.children
        )

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        from .display import render

        return render(self)

    @property
    def is_leaf(self) -> bool:
        """Check if this node has no child elements."""
        return not self.children

    def add_child(self, child: "XMLNode") -> None:
        """Append a child node."""
        if not isinstance(child, XMLNode):
            raise TypeError("Child must be an XMLNode instance")
        self.children.append(child)

    def find_child(self, tag: str) -> Optional["XMLNode"]:
        """Find first direct child with matching tag name."""
        for child in self.children:
            if child.tag == tag:
                return child
        return None

    def find_children(self, tag: str) -> List["XMLNode"]:
        """Find all direct children with matching tag name."""
        return [child for child in self.children if child.tag == tag]

    def iter(self) -> Iterator["XMLNode"]:
        """Iterate over this node and all descendants in document order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def find(self, tag: str) -> Optional["XMLNode"]:
        """Find first descendant (excluding self) with matching tag name."""
        nodes = self.iter()
        next(nodes)
        for node in nodes:
            if node.tag == tag:
                return node
        return None

    def find_all(self, tag: str) -> List["XMLNode"]:
        """Find all descendants (excluding self) with matching tag name."""
        nodes = self.iter()
        next(nodes)
        return [node for node in nodes if node.tag == tag]

    def get_attribute(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Get attribute value with optional default."""
        return self.attributes.get(name, default)

    def has_attribute(self, name: str) -> bool:
        """Check if node has specific attribute."""
        return name in self.attributes

    def node_count(self) -> int:
        """Count this node and all of its descendants."""
        return sum(1 for _ in self.iter())

    def to_dict(self) -> Dict[str, Any]:
        """Convert node to dictionary representation."""
        result: Dict[str, Any] = {
            "tag": self.tag,
            "attributes": dict(self.attributes),
        }

        if self.text is not None:
            result["text"] = self.text

        if self.children:
            result["children"] = [child.to_dict() for child in self.children]

        return result
