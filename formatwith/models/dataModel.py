"""
dataModel.py

This module defines the data models and schemas used throughout formatwith.
The models leverage Pydantic for validation and type safety.

Features:
- Enum classes for segment kinds and the configurable error policies.
- Segment descriptors produced by the tokenizer.
- Fill options shared by the tokenizer and the substitution driver.
- Resolution and parsing results.

Usage:
Import these models to validate and structure data used in the library.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Any
from enum import Enum
from dataclasses import dataclass


class SegmentKind(Enum):
    """
    Enum for the kind of a template segment.
    """

    LITERAL = "literal"
    TOKEN = "token"


class MissingKeyPolicy(Enum):
    """
    What the substitution driver does when a resolver misses a key.

    Attributes:
        THROW: Raise MissingKeyError
        SUBSTITUTE_EMPTY: Substitute empty text
        LEAVE_UNCHANGED: Copy the original delimited token to the output
    """

    THROW = "throw"
    SUBSTITUTE_EMPTY = "empty"
    LEAVE_UNCHANGED = "leave"


class MalformedDelimiterPolicy(Enum):
    """
    What the tokenizer does with a lone close delimiter outside a token.

    Attributes:
        THROW: Raise MalformedDelimiterError
        TREAT_AS_LITERAL: Copy the delimiter to the output
    """

    THROW = "throw"
    TREAT_AS_LITERAL = "literal"


@dataclass(frozen=True)
class Segment:
    """A view into a template produced by the tokenizer.

    Segments never copy the template; text is only materialized through
    `text` and `raw_inner`.

    Attributes:
        kind: LITERAL or TOKEN
        source: The template this segment points into
        start: Start of the source slice
        end: End of the source slice (exclusive). For tokens the slice
             includes both delimiters.
        inner_start: Start of the text between the delimiters (tokens only)
        inner_end: End of the text between the delimiters (tokens only)

    Example:
        * In the template "a{{b{c}" the tokenizer produces
          Literal(0, 2)  -> "a{"
          Literal(3, 4)  -> "b"
          Token(4, 7)    -> "{c}", raw_inner "c"
    """

    kind: SegmentKind
    source: str
    start: int
    end: int
    inner_start: int = 0
    inner_end: int = 0

    @property
    def text(self) -> str:
        return self.source[self.start : self.end]

    @property
    def raw_inner(self) -> str:
        if self.kind is not SegmentKind.TOKEN:
            raise ValueError("Only token segments carry inner text")
        return self.source[self.inner_start : self.inner_end]

    def __repr__(self) -> str:
        label: str = "Literal" if self.kind is SegmentKind.LITERAL else "Token"
        return f"{label}({self.start}, {self.end}, {self.text!r})"


class FillOptions(BaseModel):
    """Options controlling tokenizing and substitution.

    Attributes:
        open_delimiter: Character opening a token
        close_delimiter: Character closing a token
        missing_key: Policy for keys the resolver cannot find
        malformed_delimiter: Policy for lone close delimiters
    """

    open_delimiter: str = Field(default="{", description="Token open character.")
    close_delimiter: str = Field(default="}", description="Token close character.")
    missing_key: MissingKeyPolicy = MissingKeyPolicy.THROW
    malformed_delimiter: MalformedDelimiterPolicy = (
        MalformedDelimiterPolicy.TREAT_AS_LITERAL
    )

    @field_validator("open_delimiter", "close_delimiter")
    @classmethod
    def delimiter_check(cls, value: str) -> str:
        if len(value) != 1:
            raise ValueError(f"Delimiter must be a single character, got {value!r}")
        return value


class Resolution(BaseModel):
    """Result of resolving a single token key.

    Attributes:
        found: Whether the resolver knows the key
        value: The resolved value, meaningful only when found
    """

    found: bool
    value: Any = None

    @classmethod
    def miss(cls) -> "Resolution":
        return cls(found=False)

    @classmethod
    def hit(cls, value: Any) -> "Resolution":
        return cls(found=True, value=value)


class ParseResult(BaseModel):
    """Result of a non-raising template fill.

    Attributes:
        text: The processed text after substitutions
        error: Optional error message if parsing failed
        success: Whether parsing succeeded
    """

    text: str
    error: str | None
    success: bool
