"""Forward-only character scanner for lenient XML parsing.

The scanner owns a single cursor into the input string. It recognizes the
syntactic units of the markup (opening tag, attribute, closing tag, text run)
but knows nothing about nesting; that is the tree builder's job. The cursor
only ever moves forward.
"""

from typing import Callable, Dict, List, Optional, Tuple

from lenient_xml.shared import FailureReason, ParseError

TAG_OPEN = "<"
TAG_CLOSE = ">"
CLOSING_MARK = "/"
ATTR_EQUALS = "="
QUOTE_CHARS = ("'", '"')
NAME_START_EXTRA = "_:"


def is_name_start_char(char: str) -> bool:
    """Check whether ``char`` may start a tag name."""
    return bool(char) and (char.isalnum() or char in NAME_START_EXTRA)


class Scanner:
    """Cursor over the raw markup with tokenizing primitives.

    Args:
        text: Complete input document
        allow_padded_tags: Tolerate whitespace after ``<`` and ``</``

    Examples:
        >>> scanner = Scanner("<p k1='v1' k2=\\"v2\\">")
        >>> scanner.read_tag_name()
        'p'
        >>> scanner.read_attributes()
        ({'k1': 'v1', 'k2': 'v2'}, [])
    """

    def __init__(self, text: str, allow_padded_tags: bool = False) -> None:
        if not isinstance(text, str):
            raise TypeError(f"Scanner input must be str, got {type(text).__name__}")
        self._text = text
        self._length = len(text)
        self._pos = 0
        self.allow_padded_tags = allow_padded_tags

    @property
    def position(self) -> int:
        """Offset of the next unread character."""
        return self._pos

    @property
    def at_end(self) -> bool:
        """Check whether the whole input has been consumed."""
        return self._pos >= self._length

    def peek(self, offset: int = 0) -> str:
        """Return the character ``offset`` places ahead, or ``""`` past the end."""
        index = self._pos + offset
        if index < 0 or index >= self._length:
            return ""
        return self._text[index]

    def advance(self, count: int = 1) -> None:
        """Move the cursor forward by ``count`` characters."""
        if count < 0:
            raise ValueError("Scanner cannot move backwards")
        self._pos = min(self._pos + count, self._length)

    def skip_whitespace(self) -> None:
        """Advance past a run of whitespace."""
        while self._pos < self._length and self._text[self._pos].isspace():
            self._pos += 1

    def _read_while(self, predicate: Callable[[str], bool]) -> str:
        start = self._pos
        while self._pos < self._length and predicate(self._text[self._pos]):
            self._pos += 1
        return self._text[start:self._pos]

    def _offset_after_padding(self, offset: int) -> int:
        # Lookahead only, the cursor does not move.
        if self.allow_padded_tags:
            while self.peek(offset).isspace():
                offset += 1
        return offset

    def at_closing_tag(self) -> bool:
        """Check whether the cursor sits on ``</``."""
        if self.peek() != TAG_OPEN:
            return False
        return self.peek(self._offset_after_padding(1)) == CLOSING_MARK

    def at_opening_tag(self) -> bool:
        """Check whether the cursor sits on ``<`` not followed by ``/``."""
        return self.peek() == TAG_OPEN and not self.at_closing_tag()

    def read_tag_name(self) -> str:
        """Consume ``<`` and the tag name that follows it.

        Returns:
            The tag name, ending at whitespace or ``>``

        Raises:
            ParseError: MALFORMED_TAG_NAME if no name character follows ``<``
        """
        start = self._pos
        if self.peek() != TAG_OPEN:
            raise ParseError(
                FailureReason.MALFORMED_TAG_NAME,
                f"Expected '<', found {self.peek()!r}",
                start,
            )
        self.advance()
        if self.allow_padded_tags:
            self.skip_whitespace()

        if not is_name_start_char(self.peek()):
            found = self.peek() or "end of input"
            raise ParseError(
                FailureReason.MALFORMED_TAG_NAME,
                f"Tag name expected after '<', found {found!r}",
                start,
            )
        return self._read_while(lambda c: c != TAG_CLOSE and not c.isspace())

    def read_attributes(self) -> Tuple[Dict[str, str], List[str]]:
        """Consume the attribute list of an opening tag, including its ``>``.

        Attributes without a quoted ``=value`` part are skipped and reported
        in the second element of the returned tuple, never raised.

        Returns:
            Tuple of (attribute mapping, names of dropped attribute tokens)

        Raises:
            ParseError: UNTERMINATED_TAG if the input ends before ``>``
        """
        attributes: Dict[str, str] = {}
        dropped: List[str] = []

        while True:
            self.skip_whitespace()
            if self.at_end:
                raise ParseError(
                    FailureReason.UNTERMINATED_TAG,
                    "Input ended inside an opening tag",
                    self._pos,
                )

            char = self.peek()
            if char == TAG_CLOSE:
                self.advance()
                return attributes, dropped

            if char == ATTR_EQUALS:
                # Value with no name in front of it
                self.advance()
                self.skip_whitespace()
                self._read_attribute_value()
                dropped.append(ATTR_EQUALS)
                continue

            name = self._read_while(
                lambda c: c not in (ATTR_EQUALS, TAG_CLOSE) and not c.isspace()
            )
            self.skip_whitespace()
            if self.peek() != ATTR_EQUALS:
                dropped.append(name)
                continue

            self.advance()
            self.skip_whitespace()
            value = self._read_attribute_value()
            if value is None:
                dropped.append(name)
            else:
                attributes[name] = value

    def _read_attribute_value(self) -> Optional[str]:
        quote = self.peek()
        if quote not in QUOTE_CHARS:
            # Unquoted value, skipped like a valueless attribute
            self._read_while(lambda c: c != TAG_CLOSE and not c.isspace())
            return None

        start = self._pos
        end = self._text.find(quote, start + 1)
        if end == -1:
            self._pos = self._length
            raise ParseError(
                FailureReason.UNTERMINATED_TAG,
                "Unterminated attribute value",
                start,
            )
        self._pos = end + 1
        return self._text[start + 1:end]

    def read_closing_tag(self) -> str:
        """Consume a ``</name>`` closing tag and return ``name``.

        The name is not checked against anything; nesting is the caller's
        concern.

        Raises:
            ParseError: UNTERMINATED_TAG if the input ends before ``>``
        """
        start = self._pos
        if not self.at_closing_tag():
            raise ParseError(
                FailureReason.UNMATCHED_CLOSING_TAG,
                "Expected '</'",
                start,
            )
        self._pos += self._offset_after_padding(1) + 1

        end = self._text.find(TAG_CLOSE, self._pos)
        if end == -1:
            self._pos = self._length
            raise ParseError(
                FailureReason.UNTERMINATED_TAG,
                "Input ended inside a closing tag",
                start,
            )
        name = self._text[self._pos:end].strip()
        self._pos = end + 1
        return name

    def read_text(self) -> str:
        """Consume characters up to the next ``<`` and return them trimmed."""
        end = self._text.find(TAG_OPEN, self._pos)
        if end == -1:
            end = self._length
        run = self._text[self._pos:end]
        self._pos = end
        return run.strip()
