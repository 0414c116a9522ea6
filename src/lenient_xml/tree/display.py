"""Indented debug rendering of a node tree.

The output is meant for people reading logs and test failures. It is not
markup and cannot be parsed back.
"""

from typing import List, Tuple

from .node import XMLNode

DEFAULT_INDENT = "  "


def format_node(node: XMLNode) -> str:
    """Format a single node as ``<tag {attr: val}>`` plus its quoted text."""
    attrs = ", ".join(f"{name}: {value}" for name, value in node.attributes.items())
    line = f"<{node.tag} {{{attrs}}}>"
    if node.text:
        line += f" '{node.text}'"
    return line


def render(node: XMLNode, indent: str = DEFAULT_INDENT) -> str:
    """Render ``node`` and its descendants, one node per line.

    Examples:
        >>> person = XMLNode("person", {"name": "John"}, children=[
        ...     XMLNode("age", text="45")])
        >>> print(render(person))
        <person {name: John}>
          <age {}> '45'
    """
    lines: List[str] = []
    stack: List[Tuple[int, XMLNode]] = [(0, node)]

    while stack:
        depth, current = stack.pop()
        lines.append(f"{indent * depth}{format_node(current)}")
        # Reversed so children come off the stack in stored order
        for child in reversed(current.children):
            stack.append((depth + 1, child))

    return "\n".join(lines)
