"""Shared utilities for lenient XML parsing.

Configuration, failure taxonomy, diagnostic types and logging used by the
scanner, the tree builder and the API layer.
"""

from .config import (
    ClosingTagPolicy,
    ConfigError,
    ConfigValidationError,
    ParserConfig,
)
from .logging import (
    ComponentLogger,
    get_logger,
)
from .result import (
    DiagnosticEntry,
    DiagnosticSeverity,
    FailureReason,
    ParseError,
    PerformanceMetrics,
)

__all__ = [
    "ClosingTagPolicy",
    "ConfigError",
    "ConfigValidationError",
    "ParserConfig",
    "ComponentLogger",
    "get_logger",
    "DiagnosticEntry",
    "DiagnosticSeverity",
    "FailureReason",
    "ParseError",
    "PerformanceMetrics",
]
