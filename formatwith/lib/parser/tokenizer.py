r"""
Template tokenizer.

Splits a template into a lazy sequence of LITERAL and TOKEN segments in a
single forward scan. Segments are views (start/end offsets) into the template;
no text is copied until a caller asks for it.

The scan handles four cases:

- plain literal text
- a token, from an open delimiter to its matching close delimiter
- an escaped open delimiter (`{{` -> `{`)
- an escaped close delimiter (`}}` -> `}`)

An escape pair is emitted as a literal slice covering only its first
character, so collapsing doubled delimiters needs no copying.

Example:
    for segment in tokenize("Hello {name,-10}!"):
        print(segment)
    # Literal(0, 6, 'Hello ')
    # Token(6, 16, '{name,-10}')
    # Literal(16, 17, '!')
"""

from typing import Iterator, Self
from formatwith.models.dataModel import (
    MalformedDelimiterPolicy,
    Segment,
    SegmentKind,
)
from formatwith.lib.errors import MalformedDelimiterError, UnterminatedTokenError
from formatwith.lib.log import LOG


def _close_find(text: str, start: int, open_delimiter: str, close_delimiter: str) -> int:
    """Index of the close delimiter matching an open delimiter, or -1.

    When the two delimiters are the same character there is no nesting and
    the next delimiter ends the token. Otherwise same-type nesting is tracked
    by depth.
    """
    if open_delimiter == close_delimiter:
        return text.find(close_delimiter, start)

    depth: int = 1
    for idx in range(start, len(text)):
        char: str = text[idx]
        if char == open_delimiter:
            depth += 1
        elif char == close_delimiter:
            depth -= 1
            if not depth:
                return idx
    return -1


def tokenize(
    text: str,
    open_delimiter: str = "{",
    close_delimiter: str = "}",
    malformed: MalformedDelimiterPolicy = MalformedDelimiterPolicy.TREAT_AS_LITERAL,
) -> Iterator[Segment]:
    """Scan a template and yield its segments in order.

    Args:
        text: The template to scan
        open_delimiter: Character opening a token
        close_delimiter: Character closing a token
        malformed: Policy for a lone close delimiter outside a token

    Yields:
        Segment: LITERAL and TOKEN views into `text`

    Raises:
        UnterminatedTokenError: If a token is never closed
        MalformedDelimiterError: If a lone close delimiter is found and the
            policy is THROW
    """
    length: int = len(text)
    cursor: int = 0
    run_start: int = 0

    while cursor < length:
        char: str = text[cursor]
        doubled: bool = cursor + 1 < length and text[cursor + 1] == char

        if char == open_delimiter:
            if doubled:
                # Keep the first of the pair in the literal run, skip the second
                yield Segment(SegmentKind.LITERAL, text, run_start, cursor + 1)
                cursor += 2
                run_start = cursor
                continue

            if run_start < cursor:
                yield Segment(SegmentKind.LITERAL, text, run_start, cursor)

            close_idx: int = _close_find(
                text, cursor + 1, open_delimiter, close_delimiter
            )
            if close_idx < 0:
                raise UnterminatedTokenError(cursor, text)

            yield Segment(
                SegmentKind.TOKEN,
                text,
                cursor,
                close_idx + 1,
                inner_start=cursor + 1,
                inner_end=close_idx,
            )
            cursor = close_idx + 1
            run_start = cursor
            continue

        if char == close_delimiter:
            if doubled:
                yield Segment(SegmentKind.LITERAL, text, run_start, cursor + 1)
                cursor += 2
                run_start = cursor
                continue

            if malformed is MalformedDelimiterPolicy.THROW:
                raise MalformedDelimiterError(cursor, text)
            LOG(f"Unmatched close delimiter at position {cursor} kept as literal")

        cursor += 1

    if run_start < length:
        yield Segment(SegmentKind.LITERAL, text, run_start, length)


class Tokenizer:
    """Restartable segment sequence over one template.

    Every iteration starts a fresh scan, so the same Tokenizer can be walked
    any number of times.

    Attributes:
        text: The template
        open_delimiter: Character opening a token
        close_delimiter: Character closing a token
        malformed: Policy for lone close delimiters
    """

    def __init__(
        self: Self,
        text: str,
        open_delimiter: str = "{",
        close_delimiter: str = "}",
        malformed: MalformedDelimiterPolicy = MalformedDelimiterPolicy.TREAT_AS_LITERAL,
    ) -> None:
        """Initialize the tokenizer.

        Raises:
            ValueError: If a delimiter is not exactly one character
        """
        if len(open_delimiter) != 1 or len(close_delimiter) != 1:
            raise ValueError("Delimiters must be single characters")

        self.text: str = text
        self.open_delimiter: str = open_delimiter
        self.close_delimiter: str = close_delimiter
        self.malformed: MalformedDelimiterPolicy = malformed

    def __iter__(self: Self) -> Iterator[Segment]:
        return tokenize(
            self.text, self.open_delimiter, self.close_delimiter, self.malformed
        )
