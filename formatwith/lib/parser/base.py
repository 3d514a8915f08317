r"""
Substitution driver for template filling.

Ties the tokenizer, the token parser and the pluggable collaborators
together: every TOKEN segment is parsed into its key, alignment and format,
the key is resolved through a ValueResolver, the value is rendered by a
ValueFormatter and padded to the alignment width, and the pieces are joined
with the LITERAL segments into the final text.

The driver handles:
- Resolver strategy pattern for different value sources
- Formatter strategy pattern for value rendering
- Configurable policies for missing keys and stray close delimiters
- Alignment padding without truncation
- All-or-nothing output: an error leaves no partial result

Example:
    fill("{name,-8}|{total,8:,.2f}", {"name": "pens", "total": 1234.5})
    # 'pens    |1,234.50'
"""

from collections.abc import Callable, Mapping
from typing import Any, Protocol, Self, runtime_checkable
from formatwith.config.settings import options_default
from formatwith.lib.errors import MissingKeyError
from formatwith.lib.log import LOG
from formatwith.lib.parser.formatters import DefaultFormatter
from formatwith.lib.parser.resolvers import (
    AttributeResolver,
    CallableResolver,
    ChainResolver,
    MappingResolver,
)
from formatwith.lib.parser.token_information import TokenInformation
from formatwith.lib.parser.tokenizer import tokenize
from formatwith.models.dataModel import (
    FillOptions,
    MissingKeyPolicy,
    ParseResult,
    Resolution,
    Segment,
    SegmentKind,
)


@runtime_checkable
class ValueResolver(Protocol):
    """Protocol defining the resolver interface for token substitution.

    Resolvers map a token key to a value, reporting keys they do not know as
    a miss rather than raising.
    """

    def resolve(self: Self, key: str) -> Resolution:
        """Resolve a token key to its value.

        Args:
            key: The token key (no delimiters, alignment or format)

        Returns:
            Resolution containing:
                - found: Whether the key is known
                - value: The value if found
        """
        ...


@runtime_checkable
class ValueFormatter(Protocol):
    """Protocol defining the formatter interface for token substitution."""

    def format(self: Self, value: Any, format_spec: str | None) -> str:
        """Render a resolved value using the token's format specifier.

        Args:
            value: The resolved value
            format_spec: The token's format, or None when it has none

        Returns:
            The rendered text, before alignment padding
        """
        ...


RESOLVER_TYPES: tuple[type, ...] = (
    MappingResolver,
    AttributeResolver,
    CallableResolver,
    ChainResolver,
)


def resolver_is(source: Any) -> bool:
    """Whether a source is a resolver rather than a value source.

    Only the built-in resolvers and classes that declare ValueResolver as a
    base count. A `resolve` attribute alone does not: `pathlib.Path` and many
    domain objects have an unrelated `resolve()` method.
    """
    if isinstance(source, RESOLVER_TYPES):
        return True
    return ValueResolver in source.__class__.__mro__


def resolver_for(source: Any) -> ValueResolver:
    """Wrap a value source in the matching resolver.

    Args:
        source: A ValueResolver, a Mapping, a callable or any other object

    Returns:
        ValueResolver: `source` itself if it already is one, otherwise a
            MappingResolver, CallableResolver or AttributeResolver

    Note:
        Classes are callable but are read as objects: their attributes are
        looked up, they are never instantiated with the key.
    """
    if resolver_is(source):
        return source
    if isinstance(source, Mapping):
        return MappingResolver(source)
    if isinstance(source, Callable) and not isinstance(source, type):
        return CallableResolver(source)
    return AttributeResolver(source)


def text_align(text: str, width: int | None) -> str:
    """Pad text with spaces to the alignment width.

    Positive widths right-align (pad left), negative widths left-align
    (pad right). Text wider than the width is returned unchanged.
    """
    if not width:
        return text
    if width > 0:
        return text.rjust(width)
    return text.ljust(-width)


def token_substitute(
    segment: Segment,
    resolver: ValueResolver,
    formatter: ValueFormatter,
    policy: MissingKeyPolicy,
) -> str:
    """Produce the output text for one TOKEN segment.

    Args:
        segment: The token segment
        resolver: Strategy for resolving the key
        formatter: Strategy for rendering the value
        policy: What to do if the key is not found

    Returns:
        str: The formatted, padded value

    Raises:
        MissingKeyError: If the key is not found and the policy is THROW
        InvalidAlignmentError: If the alignment is not an integer
    """
    token: TokenInformation = TokenInformation(segment.raw_inner)
    resolution: Resolution = resolver.resolve(token.token_key)

    if not resolution.found:
        if policy is MissingKeyPolicy.THROW:
            raise MissingKeyError(token.token_key)
        if policy is MissingKeyPolicy.LEAVE_UNCHANGED:
            LOG(f"Key not found, token left unchanged: {segment.text}")
            return segment.text
        LOG(f"Key not found, substituting empty text: {token.token_key}")
        return text_align("", token.alignment_width)

    text: str = formatter.format(resolution.value, token.format)
    return text_align(text, token.alignment_width)


def fill(
    template: str,
    resolver: Any,
    formatter: ValueFormatter | None = None,
    options: FillOptions | None = None,
) -> str:
    """Fill every token of a template.

    Main entry point for substitution.

    Args:
        template: Template text containing delimited tokens
        resolver: A ValueResolver, or a source accepted by resolver_for
        formatter: Strategy for rendering values, DefaultFormatter if None
        options: Delimiters and policies, the configured defaults if None

    Returns:
        str: The filled template

    Raises:
        UnterminatedTokenError: If a token is never closed
        MalformedDelimiterError: For a lone close delimiter under THROW
        MissingKeyError: For an unknown key under THROW
        InvalidAlignmentError: If a token's alignment is not an integer
    """
    value_resolver: ValueResolver = resolver_for(resolver)
    value_formatter: ValueFormatter = formatter or DefaultFormatter()
    fill_options: FillOptions = options or options_default()

    pieces: list[str] = []
    for segment in tokenize(
        template,
        fill_options.open_delimiter,
        fill_options.close_delimiter,
        fill_options.malformed_delimiter,
    ):
        if segment.kind is SegmentKind.LITERAL:
            pieces.append(segment.text)
        else:
            pieces.append(
                token_substitute(
                    segment, value_resolver, value_formatter, fill_options.missing_key
                )
            )
    return "".join(pieces)


def tokens_list(template: str, options: FillOptions | None = None) -> list[TokenInformation]:
    """List the tokens of a template in order, without resolving them.

    Args:
        template: Template text containing delimited tokens
        options: Delimiters and policies, the configured defaults if None

    Returns:
        list[TokenInformation]: One entry per token occurrence

    Raises:
        UnterminatedTokenError: If a token is never closed
        MalformedDelimiterError: For a lone close delimiter under THROW
    """
    fill_options: FillOptions = options or options_default()
    return [
        TokenInformation(segment.raw_inner)
        for segment in tokenize(
            template,
            fill_options.open_delimiter,
            fill_options.close_delimiter,
            fill_options.malformed_delimiter,
        )
        if segment.kind is SegmentKind.TOKEN
    ]


class TemplateParser:
    """Template filler bound to a resolver, formatter and options.

    Unlike `fill`, `parse` never raises: failures are
    logged and reported in the returned ParseResult.

    Attributes:
        resolver: Strategy for resolving token keys
        formatter: Strategy for rendering values
        options: Delimiters and policies
    """

    def __init__(
        self: Self,
        resolver: Any,
        formatter: ValueFormatter | None = None,
        options: FillOptions | None = None,
    ) -> None:
        self.resolver: ValueResolver = resolver_for(resolver)
        self.formatter: ValueFormatter = formatter or DefaultFormatter()
        self.options: FillOptions = options or options_default()

    def parse(self: Self, input_text: str) -> ParseResult:
        """Fill a template and report the outcome.

        Args:
            input_text: Template text containing delimited tokens

        Returns:
            ParseResult with the filled text, or the error details
        """
        if not input_text:
            return ParseResult(text="", error=None, success=True)

        try:
            text: str = fill(input_text, self.resolver, self.formatter, self.options)
        except Exception as e:
            LOG(f"Error in parse: {e}")
            return ParseResult(text="", error=str(e), success=False)
        return ParseResult(text=text, error=None, success=True)
