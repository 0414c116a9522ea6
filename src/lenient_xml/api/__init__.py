"""Public parsing entry points."""

from .parser import LenientXMLParser, parse, parse_file, parse_string

__all__ = [
    "LenientXMLParser",
    "parse",
    "parse_file",
    "parse_string",
]
