r"""
Token information: parsing and building the text of one template token.

A raw token is the text between an open and close delimiter, e.g. the
`amount,10:,.2f` in `{amount,10:,.2f}`. It splits into three parts:

- the key, used to resolve the value
- the alignment, a signed field width (`,10` right-aligns, `,-10` left-aligns)
- the format, handed as-is to the formatter

The separators are found with a fixed two-step search:

1. The FIRST colon ends the key/alignment part. The format after it is never
   re-scanned, so it may contain colons and commas freely.
2. The LAST comma in the key/alignment part starts the alignment.

Example:
    info = TokenInformation("token,15:yyyy-MM-dd")
    info.token_key       # "token"
    info.alignment       # "15"
    info.format          # "yyyy-MM-dd"
    info.format_string   # ",15:yyyy-MM-dd"
"""

from functools import cached_property
from typing import Self
from formatwith.lib.errors import InvalidAlignmentError

FORMAT_SEPARATOR: str = ":"
ALIGNMENT_SEPARATOR: str = ","
# Same bound as .NET composite formatting
ALIGNMENT_LIMIT: int = 1_000_000


def _suffix_build(alignment: str | None, format: str | None) -> str:
    """The `[,alignment][:format]` part of a raw token, skipping empty parts."""
    return "".join(
        (
            f"{ALIGNMENT_SEPARATOR}{alignment}" if alignment else "",
            f"{FORMAT_SEPARATOR}{format}" if format else "",
        )
    )


class TokenInformation:
    """Parsed representation of one raw token.

    Instances are immutable once constructed; every attribute is read-only.

    Attributes:
        raw_token: The original text between the delimiters
        token_key: The key used for value resolution, never None
        alignment: Textual signed field width, or None
        format: The format specifier, or None
    """

    def __init__(self: Self, raw_token: str) -> None:
        """Parse token information from a raw token string.

        Args:
            raw_token: Text between the delimiters, excluding the delimiters

        Note:
            Any string parses; in the worst case the whole text becomes the key.
        """
        self._raw_token: str = raw_token
        self._format: str | None = None
        self._alignment: str | None = None

        remainder: str = raw_token
        separator_idx: int = remainder.find(FORMAT_SEPARATOR)
        if separator_idx > -1:
            self._format = remainder[separator_idx + 1 :]
            remainder = remainder[:separator_idx]

        alignment_idx: int = remainder.rfind(ALIGNMENT_SEPARATOR)
        if alignment_idx > -1:
            self._alignment = remainder[alignment_idx + 1 :]
            remainder = remainder[:alignment_idx]

        self._token_key: str = remainder

    @property
    def raw_token(self: Self) -> str:
        return self._raw_token

    @property
    def token_key(self: Self) -> str:
        return self._token_key

    @property
    def alignment(self: Self) -> str | None:
        return self._alignment

    @property
    def format(self: Self) -> str | None:
        return self._format

    @cached_property
    def format_string(self: Self) -> str:
        """The full composite formatting suffix, `[,alignment][:format]`."""
        return _suffix_build(self._alignment, self._format)

    @cached_property
    def alignment_width(self: Self) -> int | None:
        """The alignment as an integer, or None when absent or empty.

        Raises:
            InvalidAlignmentError: If the alignment is not a signed integer,
                or its magnitude reaches ALIGNMENT_LIMIT
        """
        if not self._alignment:
            return None
        try:
            width: int = int(self._alignment.strip())
        except ValueError:
            raise InvalidAlignmentError(self._alignment, self._raw_token) from None
        if abs(width) >= ALIGNMENT_LIMIT:
            raise InvalidAlignmentError(
                self._alignment,
                self._raw_token,
                f"is not below the {ALIGNMENT_LIMIT:,} column limit",
            )
        return width

    @staticmethod
    def build_string(
        token_key: str, alignment: int | str | None = None, format: str | None = None
    ) -> str:
        """Build a raw token string from its parts.

        Args:
            token_key: The key value for the token
            alignment: The left- or right-padding indicator desired
            format: The format string

        Returns:
            The canonical raw token text, `key[,alignment][:format]`
        """
        alignment_text: str | None = None if alignment is None else str(alignment)
        return f"{token_key}{_suffix_build(alignment_text, format)}"

    @classmethod
    def build(
        cls, token_key: str, alignment: int | str | None = None, format: str | None = None
    ) -> "TokenInformation":
        """Build a TokenInformation from its parts.

        Equivalent to parsing the result of `build_string`.
        """
        return cls(cls.build_string(token_key, alignment, format))

    def __eq__(self: Self, other: object) -> bool:
        if not isinstance(other, TokenInformation):
            return NotImplemented
        return (self._token_key, self._alignment, self._format) == (
            other._token_key,
            other._alignment,
            other._format,
        )

    def __hash__(self: Self) -> int:
        return hash((self._token_key, self._alignment, self._format))

    def __repr__(self: Self) -> str:
        return (
            f"TokenInformation(token_key={self._token_key!r}, "
            f"alignment={self._alignment!r}, format={self._format!r})"
        )
