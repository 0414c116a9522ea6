"""Tree building for lenient XML parsing.

Key Components:
    TreeBuilder: Stack-driven builder that turns one input string into a tree
    XMLNode: Parsed element with attributes, text and children
    ParseResult: Success flag plus either the root node or the failure
    render: Indented debug rendering of a node tree
"""

from .builder import (
    BuilderState,
    ParseFailure,
    ParseResult,
    TreeBuilder,
    build_tree,
)
from .display import format_node, render
from .node import XMLNode

__all__ = [
    "BuilderState",
    "ParseFailure",
    "ParseResult",
    "TreeBuilder",
    "build_tree",
    "format_node",
    "render",
    "XMLNode",
]
