"""Exceptions raised while tokenizing and filling templates."""


class FormatWithError(Exception):
    """Base class for all template errors."""


class UnterminatedTokenError(FormatWithError):
    """Raised when an open delimiter has no matching close before end of input.

    Always fatal: the tokenizer cannot tell where the token was meant to end.
    """

    def __init__(self, position: int, template: str):
        self.position = position
        self.template = template
        super().__init__(
            f"Unterminated token starting at position {position}: "
            f"{template[position:position + 32]!r}"
        )


class MalformedDelimiterError(FormatWithError):
    """Raised for a lone close delimiter when the policy is THROW."""

    def __init__(self, position: int, template: str):
        self.position = position
        self.template = template
        super().__init__(
            f"Unmatched close delimiter {template[position]!r} at position {position}"
        )


class MissingKeyError(FormatWithError, KeyError):
    """Raised when the resolver cannot find a token key and the policy is THROW."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(key)

    def __str__(self) -> str:
        return f"No value found for token key: {self.key!r}"


class InvalidAlignmentError(FormatWithError, ValueError):
    """Raised when a token's alignment is not a signed integer or is too wide."""

    def __init__(
        self, alignment: str, raw_token: str, reason: str = "is not an integer"
    ):
        self.alignment = alignment
        self.raw_token = raw_token
        super().__init__(f"Alignment {alignment!r} in token {raw_token!r} {reason}")
