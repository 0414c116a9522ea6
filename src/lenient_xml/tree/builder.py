"""Tree construction for lenient XML parsing.

The builder drives a ``Scanner`` over the input in a single forward pass and
keeps an explicit stack of open nodes. A node is pushed when its opening tag
is read and popped onto its parent's children when its closing tag is read;
popping the outermost node ends the parse.
"""

import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, List, Optional

from lenient_xml.scanner import Scanner
from lenient_xml.shared import (
    DiagnosticEntry,
    DiagnosticSeverity,
    FailureReason,
    ParseError,
    ParserConfig,
    PerformanceMetrics,
    get_logger,
)

from .node import XMLNode

COMPONENT = "tree_builder"


class BuilderState(Enum):
    """Tree builder state machine states."""

    EXPECT_ELEMENT_OR_TEXT = auto()  # Between tokens
    IN_ELEMENT_HEADER = auto()       # Reading an opening tag's name and attributes
    EXPECT_CLOSE = auto()            # Open element has content, close may follow


@dataclass
class ParseFailure:
    """Why a parse was rejected."""

    reason: Optional[FailureReason]
    message: str
    position: Optional[int] = None

    @classmethod
    def from_error(cls, error: ParseError) -> "ParseFailure":
        """Build a failure record from a raised ``ParseError``."""
        return cls(reason=error.reason, message=error.message, position=error.position)


@dataclass
class ParseResult:
    """Outcome of one parse call.

    ``success`` is the only signal most callers need; on success ``root``
    holds the tree, on failure ``failure`` says why. ``bool(result)`` is
    ``result.success``.
    """

    success: bool = False
    root: Optional[XMLNode] = None
    failure: Optional[ParseFailure] = None
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)
    performance: PerformanceMetrics = field(default_factory=PerformanceMetrics)
    correlation_id: Optional[str] = None

    def __bool__(self) -> bool:
        return self.success

    @property
    def node_count(self) -> int:
        """Get total number of nodes in the tree."""
        return self.root.node_count() if self.root else 0

    @property
    def failure_reason(self) -> Optional[FailureReason]:
        """Get the failure reason, ``None`` on success."""
        return self.failure.reason if self.failure else None

    def add_diagnostic(
        self,
        severity: DiagnosticSeverity,
        message: str,
        component: str,
        position: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        """Add diagnostic entry to result."""
        self.diagnostics.append(
            DiagnosticEntry(
                severity=severity,
                message=message,
                component=component,
                position=position,
                details=details,
                correlation_id=self.correlation_id,
            )
        )

    def get_diagnostics_by_severity(
        self,
        severity: DiagnosticSeverity
    ) -> List[DiagnosticEntry]:
        """Get diagnostics of specific severity level."""
        return [diag for diag in self.diagnostics if diag.severity == severity]

    def summary(self) -> Dict[str, Any]:
        """Get summary statistics for the parse result."""
        return {
            "success": self.success,
            "root_tag": self.root.tag if self.root else None,
            "node_count": self.node_count,
            "failure_reason": (
                self.failure.reason.name
                if self.failure and self.failure.reason else None
            ),
            "failure_message": self.failure.message if self.failure else None,
            "diagnostic_count": len(self.diagnostics),
            "attributes_dropped": self.performance.attributes_dropped,
            "characters_processed": self.performance.characters_processed,
            "processing_time_ms": self.performance.processing_time_ms,
        }


class TreeBuilder:
    """Single-use builder turning one input string into a node tree.

    Examples:
        >>> result = TreeBuilder("<a><b>x</b><c>y</c></a>").build()
        >>> [child.text for child in result.root.children]
        ['x', 'y']
    """

    def __init__(
        self,
        text: str,
        config: Optional[ParserConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize tree builder.

        Args:
            text: Complete input document
            config: Parser configuration, defaults to ``ParserConfig()``
            correlation_id: Optional correlation ID for request tracking
        """
        self.config = config or ParserConfig()
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, COMPONENT)

        self._scanner = Scanner(text, allow_padded_tags=self.config.allow_padded_tags)
        self._text_length = len(text)
        self._stack: List[XMLNode] = []
        self._state = BuilderState.EXPECT_ELEMENT_OR_TEXT
        self._opened_any = False
        self._used = False
        self._result = ParseResult(correlation_id=correlation_id)

    @property
    def state(self) -> BuilderState:
        """Current state machine state."""
        return self._state

    @property
    def depth(self) -> int:
        """Number of currently open nodes."""
        return len(self._stack)

    def build(self) -> ParseResult:
        """Run the parse to completion.

        Returns:
            ParseResult holding either the root node or the failure

        Raises:
            RuntimeError: If the builder has already been used
        """
        if self._used:
            raise RuntimeError("TreeBuilder instances are single-use")
        self._used = True

        start_time = time.perf_counter()
        result = self._result
        self.logger.debug(
            "Starting tree building",
            extra={"input_length": self._text_length, "config": self.config.name},
        )

        try:
            result.root = self._build_tree()
            result.success = True
        except ParseError as e:
            result.success = False
            result.root = None
            result.failure = ParseFailure.from_error(e)
            result.add_diagnostic(
                DiagnosticSeverity.ERROR,
                str(e),
                COMPONENT,
                position=e.position,
                details={"reason": e.reason.name, "open_elements": self.depth},
            )
            self.logger.info(
                "Parse rejected",
                extra={"reason": e.reason.name, "position": e.position},
            )

        performance = result.performance
        performance.processing_time_ms = (time.perf_counter() - start_time) * 1000
        performance.characters_processed = self._scanner.position

        if result.success:
            self.logger.debug(
                "Tree building completed",
                extra={
                    "root_tag": result.root.tag,
                    "nodes_created": performance.nodes_created,
                    "attributes_dropped": performance.attributes_dropped,
                },
            )
        return result

    def _build_tree(self) -> XMLNode:
        scanner = self._scanner

        while True:
            scanner.skip_whitespace()

            if scanner.at_end:
                if not self._opened_any:
                    raise ParseError(
                        FailureReason.EMPTY_DOCUMENT,
                        "Document contains no elements",
                        scanner.position,
                    )
                open_tags = [node.tag for node in self._stack]
                raise ParseError(
                    FailureReason.UNTERMINATED_ELEMENT,
                    f"Input ended with unclosed element(s): {', '.join(open_tags)}",
                    self._stack[-1].position,
                )

            if scanner.at_closing_tag():
                finished = self._close_element()
                if finished is not None:
                    # Anything after the root's closing tag is ignored
                    return finished
            elif scanner.at_opening_tag():
                self._open_element()
            else:
                self._attach_text()

    def _open_element(self) -> None:
        scanner = self._scanner
        position = scanner.position
        self._state = BuilderState.IN_ELEMENT_HEADER

        tag = scanner.read_tag_name()
        attributes, dropped = scanner.read_attributes()

        max_depth = self.config.max_depth
        if max_depth is not None and len(self._stack) >= max_depth:
            raise ParseError(
                FailureReason.MAX_DEPTH_EXCEEDED,
                f"Element <{tag}> exceeds maximum depth {max_depth}",
                position,
            )

        node = XMLNode(tag=tag, attributes=attributes, position=position)
        if dropped:
            self._report_dropped_attributes(node, dropped)

        self._stack.append(node)
        self._opened_any = True
        self._result.performance.nodes_created += 1
        self._state = BuilderState.EXPECT_ELEMENT_OR_TEXT

    def _close_element(self) -> Optional[XMLNode]:
        scanner = self._scanner
        position = scanner.position
        name = scanner.read_closing_tag()

        if not self._stack:
            raise ParseError(
                FailureReason.UNMATCHED_CLOSING_TAG,
                f"Closing tag </{name}> has no open element",
                position,
            )

        current = self._stack[-1]
        if name != current.tag:
            if self.config.is_strict:
                raise ParseError(
                    FailureReason.MISMATCHED_CLOSING_TAG,
                    f"Closing tag </{name}> does not match open element <{current.tag}>",
                    position,
                )
            self.logger.debug(
                "Closing tag name ignored",
                extra={"expected": current.tag, "found": name, "position": position},
            )
            if self.config.collect_diagnostics:
                self._result.add_diagnostic(
                    DiagnosticSeverity.WARNING,
                    f"Closing tag </{name}> closed element <{current.tag}>",
                    COMPONENT,
                    position=position,
                    details={"expected": current.tag, "found": name},
                )

        popped = self._stack.pop()
        if not self._stack:
            return popped

        self._stack[-1].children.append(popped)
        self._state = BuilderState.EXPECT_CLOSE
        return None

    def _attach_text(self) -> None:
        scanner = self._scanner
        position = scanner.position
        run = scanner.read_text()

        if not self._stack:
            raise ParseError(
                FailureReason.NO_OPENING_TAG,
                "Document does not start with an opening tag",
                position,
            )
        if run:
            # Last run wins
            self._stack[-1].text = run
            self._state = BuilderState.EXPECT_CLOSE

    def _report_dropped_attributes(self, node: XMLNode, dropped: List[str]) -> None:
        self._result.performance.attributes_dropped += len(dropped)
        self.logger.debug(
            "Dropped attributes without value",
            extra={"tag": node.tag, "dropped": dropped, "position": node.position},
        )
        if self.config.collect_diagnostics:
            self._result.add_diagnostic(
                DiagnosticSeverity.WARNING,
                f"Dropped attribute(s) without value on <{node.tag}>: "
                f"{', '.join(dropped)}",
                COMPONENT,
                position=node.position,
                details={"tag": node.tag, "dropped": list(dropped)},
            )


def build_tree(
    text: str,
    config: Optional[ParserConfig] = None,
    correlation_id: Optional[str] = None
) -> ParseResult:
    """Parse ``text`` with a fresh ``TreeBuilder``."""
    return TreeBuilder(text, config, correlation_id).build()
