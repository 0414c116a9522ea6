"""Lenient XML Parser.

A forgiving single-pass parser that turns XML-like markup into a tree of
tagged nodes. Valueless attributes are dropped instead of rejected; anything
that leaves the tree ambiguous (unclosed elements, stray closing tags) makes
the parse fail with a plain unsuccessful result.

API levels:
- Level 1: Simple functions - parse(), parse_string(), parse_file()
- Level 2: Configured parser - LenientXMLParser with ParserConfig
"""

__version__ = "0.1.0"
__author__ = "Lenient XML Parser Team"

from .api import LenientXMLParser, parse, parse_file, parse_string
from .shared import (
    ClosingTagPolicy,
    ConfigValidationError,
    FailureReason,
    ParseError,
    ParserConfig,
)
from .tree import ParseFailure, ParseResult, XMLNode, render

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple parsing functions
    "parse",
    "parse_string",
    "parse_file",

    # Level 2: Configured parser
    "LenientXMLParser",
    "ParserConfig",
    "ClosingTagPolicy",
    "ConfigValidationError",

    # Result objects and data structures
    "ParseResult",
    "ParseFailure",
    "FailureReason",
    "ParseError",
    "XMLNode",
    "render",
]
