"""
Value formatters for formatwith.

A formatter turns a resolved value and the token's format specifier into
text. Two strategies are provided:

- PythonFormatter: builtin `format(value, spec)`
- DefaultFormatter: as PythonFormatter, but date/time values also accept
  .NET-style custom patterns such as `yyyy-MM-dd` or `dddd, MMMM d`

Example:
    DefaultFormatter().format(datetime(2024, 8, 29), "yyyy-MM-dd")
    # '2024-08-29'
"""

import calendar
from datetime import date, datetime, time
from typing import Any, Callable, Self

# Letters that form date pattern runs; anything else is copied as-is
_PATTERN_LETTERS: str = "yMdHhmsft"
_QUOTES: str = "'\""


def _year(value: Any, width: int) -> str:
    if width <= 2:
        return f"{value.year % 100:0{width}d}"
    return f"{value.year:0{width}d}"


def _month(value: Any, width: int) -> str:
    if width >= 4:
        return calendar.month_name[value.month]
    if width == 3:
        return calendar.month_abbr[value.month]
    return f"{value.month:0{width}d}"


def _day(value: Any, width: int) -> str:
    if width >= 4:
        return calendar.day_name[value.weekday()]
    if width == 3:
        return calendar.day_abbr[value.weekday()]
    return f"{value.day:0{width}d}"


def _hour24(value: Any, width: int) -> str:
    return f"{value.hour:0{min(width, 2)}d}"


def _hour12(value: Any, width: int) -> str:
    return f"{(value.hour % 12) or 12:0{min(width, 2)}d}"


def _minute(value: Any, width: int) -> str:
    return f"{value.minute:0{min(width, 2)}d}"


def _second(value: Any, width: int) -> str:
    return f"{value.second:0{min(width, 2)}d}"


def _fraction(value: Any, width: int) -> str:
    return f"{value.microsecond:06d}"[: min(width, 6)]


def _designator(value: Any, width: int) -> str:
    marker: str = "AM" if value.hour < 12 else "PM"
    return marker[:width] if width < 2 else marker


_PATTERN_PARTS: dict[str, Callable[[Any, int], str]] = {
    "y": _year,
    "M": _month,
    "d": _day,
    "H": _hour24,
    "h": _hour12,
    "m": _minute,
    "s": _second,
    "f": _fraction,
    "t": _designator,
}


def date_pattern_render(value: date | datetime | time, pattern: str) -> str:
    """Render a date/time value with a .NET-style custom pattern.

    Runs of a pattern letter select the field and its width (`M` month,
    `MM` zero-padded month, `MMM` abbreviated name, `MMMM` full name).
    Text in single or double quotes is copied literally, as is the
    character following a backslash.

    Args:
        value: The date, datetime or time to render
        pattern: The custom pattern

    Returns:
        str: The rendered text

    Raises:
        AttributeError: If the pattern asks for a field the value lacks
                        (e.g. `yyyy` on a time)
    """
    out: list[str] = []
    length: int = len(pattern)
    idx: int = 0

    while idx < length:
        char: str = pattern[idx]

        if char == "\\" and idx + 1 < length:
            out.append(pattern[idx + 1])
            idx += 2
            continue

        if char in _QUOTES:
            end: int = pattern.find(char, idx + 1)
            end = length if end < 0 else end
            out.append(pattern[idx + 1 : end])
            idx = end + 1
            continue

        if char in _PATTERN_LETTERS:
            run_end: int = idx
            while run_end < length and pattern[run_end] == char:
                run_end += 1
            out.append(_PATTERN_PARTS[char](value, run_end - idx))
            idx = run_end
            continue

        out.append(char)
        idx += 1

    return "".join(out)


class PythonFormatter:
    """Formatter using Python's format specification mini-language."""

    def format(self: Self, value: Any, format_spec: str | None) -> str:
        if not format_spec:
            return str(value)
        return format(value, format_spec)


class DefaultFormatter(PythonFormatter):
    """Formatter accepting .NET-style date patterns for date/time values.

    A date/time spec containing `%` is passed to `strftime`; any other
    date/time spec is read as a custom pattern. Other values use the
    Python format mini-language.
    """

    def format(self: Self, value: Any, format_spec: str | None) -> str:
        if format_spec and isinstance(value, (date, time)):
            if "%" in format_spec:
                return value.strftime(format_spec)
            return date_pattern_render(value, format_spec)
        return super().format(value, format_spec)
