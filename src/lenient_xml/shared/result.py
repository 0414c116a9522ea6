"""Failure taxonomy and diagnostic types for lenient XML parsing.

Callers only ever see a flat success/failure outcome. The enumerated
``FailureReason`` is kept alongside it so a failed parse can still be
diagnosed.
"""

import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, Optional


class FailureReason(Enum):
    """Why a parse was rejected."""

    EMPTY_DOCUMENT = auto()          # Nothing but whitespace
    NO_OPENING_TAG = auto()          # Text before the first tag
    UNMATCHED_CLOSING_TAG = auto()   # Closing tag with nothing open
    UNTERMINATED_ELEMENT = auto()    # Input ended with elements still open
    MALFORMED_TAG_NAME = auto()      # '<' not followed by a name character
    UNTERMINATED_TAG = auto()        # Input ended inside a tag's brackets
    MISMATCHED_CLOSING_TAG = auto()  # Closing name differs from the open tag
    MAX_DEPTH_EXCEEDED = auto()      # Nesting deeper than configured


class ParseError(Exception):
    """Raised internally when the input cannot be turned into a tree."""

    def __init__(
        self,
        reason: FailureReason,
        message: str,
        position: Optional[int] = None
    ) -> None:
        super().__init__(message)
        self.reason = reason
        self.message = message
        self.position = position

    def __str__(self) -> str:
        if self.position is None:
            return self.message
        return f"{self.message} (at offset {self.position})"


class DiagnosticSeverity(Enum):
    """Severity levels for diagnostic entries."""

    DEBUG = auto()
    INFO = auto()
    WARNING = auto()    # Input was tolerated but not taken literally
    ERROR = auto()      # The parse failed
    CRITICAL = auto()   # Unexpected failure outside the parser proper


@dataclass
class DiagnosticEntry:
    """Single diagnostic entry with context information."""

    severity: DiagnosticSeverity
    message: str
    component: str
    position: Optional[int] = None
    details: Optional[Dict[str, Any]] = None
    timestamp: float = field(default_factory=time.time)
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate diagnostic entry."""
        if not self.message:
            raise ValueError("Diagnostic message cannot be empty")
        if not self.component:
            raise ValueError("Diagnostic component cannot be empty")


@dataclass
class PerformanceMetrics:
    """Counters gathered while parsing one document."""

    processing_time_ms: float = 0.0
    characters_processed: int = 0
    nodes_created: int = 0
    attributes_dropped: int = 0

    @property
    def characters_per_second(self) -> float:
        """Calculate characters processed per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.characters_processed * 1000.0) / self.processing_time_ms
