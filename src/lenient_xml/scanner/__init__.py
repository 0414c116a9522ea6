"""Character scanning for lenient XML parsing.

Key Components:
    Scanner: Forward-only cursor that reads tags, attributes and text runs
"""

from .scanner import Scanner, is_name_start_char

__all__ = [
    "Scanner",
    "is_name_start_char",
]
