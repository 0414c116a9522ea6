"""Public parsing API for lenient XML parsing.

Module-level functions cover the common cases; ``LenientXMLParser`` holds a
configuration for repeated use. None of them raise on bad markup: every call
returns a ``ParseResult`` whose ``success`` flag says whether a tree was built.
"""

import time
from pathlib import Path
from typing import Any, Dict, Optional, TextIO, Union

from lenient_xml.shared import DiagnosticSeverity, ParserConfig, get_logger
from lenient_xml.tree import ParseFailure, ParseResult, TreeBuilder

# Type definitions for input data
InputType = Union[str, Path, TextIO]

MS_PER_SECOND = 1000


def parse_string(
    xml_string: str,
    config: Optional[ParserConfig] = None,
    correlation_id: Optional[str] = None
) -> ParseResult:
    """Parse markup held in a string.

    Args:
        xml_string: Complete document text
        config: Parser configuration, defaults to ``ParserConfig()``
        correlation_id: Optional correlation ID for request tracking

    Returns:
        ParseResult with the root node on success

    Examples:
        >>> result = parse_string("<person name='John' weird>John</person>")
        >>> result.success
        True
        >>> result.root.attributes
        {'name': 'John'}

        >>> parse_string("<a>").success
        False
    """
    start_time = time.perf_counter()
    logger = get_logger(__name__, correlation_id, "parse_string")

    try:
        return TreeBuilder(xml_string, config, correlation_id).build()
    except Exception as e:
        processing_time = (time.perf_counter() - start_time) * MS_PER_SECOND
        logger.exception(
            "Parse operation failed",
            extra={"processing_time_ms": processing_time},
        )
        return _create_error_result(
            f"Parse operation failed: {e}", correlation_id, processing_time
        )


def parse_file(
    file_path: Union[str, Path],
    encoding: str = "utf-8",
    config: Optional[ParserConfig] = None,
    correlation_id: Optional[str] = None
) -> ParseResult:
    """Read a file and parse its contents.

    Missing or unreadable files produce a failed result rather than an
    exception.
    """
    start_time = time.perf_counter()
    logger = get_logger(__name__, correlation_id, "parse_file")
    path_obj = Path(file_path)

    error_message = None
    if not path_obj.exists():
        error_message = f"File not found: {path_obj}"
    elif not path_obj.is_file():
        error_message = f"Path is not a file: {path_obj}"
    if error_message:
        processing_time = (time.perf_counter() - start_time) * MS_PER_SECOND
        return _create_error_result(error_message, correlation_id, processing_time)

    try:
        content = path_obj.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as e:
        processing_time = (time.perf_counter() - start_time) * MS_PER_SECOND
        logger.warning(
            "Could not read file",
            extra={"file_path": str(path_obj), "error": str(e)},
        )
        return _create_error_result(
            f"Could not read {path_obj}: {e}", correlation_id, processing_time
        )

    logger.debug(
        "File read",
        extra={"file_path": str(path_obj), "content_length": len(content)},
    )
    return parse_string(content, config, correlation_id)


def parse(
    input_data: InputType,
    config: Optional[ParserConfig] = None,
    correlation_id: Optional[str] = None
) -> ParseResult:
    """Parse from a string, a ``Path`` or a text file-like object.

    Strings are always treated as markup, never as file names; pass a
    ``Path`` to read a file.
    """
    if isinstance(input_data, str):
        return parse_string(input_data, config, correlation_id)
    if isinstance(input_data, Path):
        return parse_file(input_data, config=config, correlation_id=correlation_id)
    if hasattr(input_data, "read"):
        return _parse_file_like_object(input_data, config, correlation_id)

    return _create_error_result(
        f"Unsupported input type: {type(input_data).__name__}",
        correlation_id,
        0.0,
    )


def _parse_file_like_object(
    file_obj: TextIO,
    config: Optional[ParserConfig],
    correlation_id: Optional[str]
) -> ParseResult:
    start_time = time.perf_counter()
    logger = get_logger(__name__, correlation_id, "parse_filelike")

    try:
        content = file_obj.read()
    except (OSError, UnicodeDecodeError) as e:
        processing_time = (time.perf_counter() - start_time) * MS_PER_SECOND
        logger.warning("File-like object could not be read", extra={"error": str(e)})
        return _create_error_result(
            f"File-like object could not be read: {e}", correlation_id, processing_time
        )

    if isinstance(content, bytes):
        return _create_error_result(
            "File-like object must be opened in text mode",
            correlation_id,
            (time.perf_counter() - start_time) * MS_PER_SECOND,
        )
    return parse_string(content, config, correlation_id)


def _create_error_result(
    error_message: str,
    correlation_id: Optional[str],
    processing_time: float
) -> ParseResult:
    """Create a failed result for problems outside the markup itself."""
    result = ParseResult(correlation_id=correlation_id)
    result.success = False
    result.failure = ParseFailure(reason=None, message=error_message)
    result.performance.processing_time_ms = processing_time
    result.add_diagnostic(DiagnosticSeverity.CRITICAL, error_message, "api_parser")
    return result


class LenientXMLParser:
    """Reusable parser bound to one configuration.

    The parser keeps only its configuration and call counters; every parse
    builds a fresh ``TreeBuilder``.

    Examples:
        >>> parser = LenientXMLParser(ParserConfig.lenient())
        >>> parser.parse("<a><b></c></a>").success
        True
        >>> parser.statistics["total_parses"]
        1
    """

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        self.config = config or ParserConfig()
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "lenient_xml_parser")
        self._parse_count = 0
        self._success_count = 0
        self._total_processing_time = 0.0

    def parse(
        self, input_data: InputType, correlation_id: Optional[str] = None
    ) -> ParseResult:
        """Parse ``input_data`` with this parser's configuration."""
        result = parse(input_data, self.config, correlation_id or self.correlation_id)
        self._record(result)
        return result

    def parse_string(
        self, xml_string: str, correlation_id: Optional[str] = None
    ) -> ParseResult:
        """Parse a string with this parser's configuration."""
        result = parse_string(
            xml_string, self.config, correlation_id or self.correlation_id
        )
        self._record(result)
        return result

    def parse_file(
        self,
        file_path: Union[str, Path],
        encoding: str = "utf-8",
        correlation_id: Optional[str] = None
    ) -> ParseResult:
        """Parse a file with this parser's configuration."""
        result = parse_file(
            file_path, encoding, self.config, correlation_id or self.correlation_id
        )
        self._record(result)
        return result

    def reconfigure(self, **overrides: Any) -> None:
        """Replace the configuration with an overridden copy."""
        self.config = self.config.override(**overrides)
        self.logger.debug("Parser reconfigured", extra={"overrides": overrides})

    def reset_statistics(self) -> None:
        """Reset call counters."""
        self._parse_count = 0
        self._success_count = 0
        self._total_processing_time = 0.0

    @property
    def statistics(self) -> Dict[str, Any]:
        """Call counters gathered since creation or the last reset."""
        average = (
            self._total_processing_time / self._parse_count
            if self._parse_count else 0.0
        )
        return {
            "total_parses": self._parse_count,
            "successful_parses": self._success_count,
            "failed_parses": self._parse_count - self._success_count,
            "average_processing_time_ms": average,
            "config": self.config.to_dict(),
        }

    def _record(self, result: ParseResult) -> None:
        self._parse_count += 1
        if result.success:
            self._success_count += 1
        self._total_processing_time += result.performance.processing_time_ms
