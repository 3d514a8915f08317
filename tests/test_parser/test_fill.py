"""Tests for template filling."""

from datetime import datetime
from types import SimpleNamespace
from unittest.mock import Mock
import pytest
from formatwith.lib.errors import (
    InvalidAlignmentError,
    MalformedDelimiterError,
    MissingKeyError,
    UnterminatedTokenError,
)
from formatwith.lib.parser.base import (
    TemplateParser,
    ValueResolver,
    fill,
    text_align,
    tokens_list,
)
from formatwith.lib.parser.token_information import TokenInformation
from formatwith.models.dataModel import (
    FillOptions,
    MalformedDelimiterPolicy,
    MissingKeyPolicy,
    Resolution,
)

TEST_DATE: datetime = datetime(2024, 8, 29)


@pytest.fixture
def values() -> dict:
    return {"token": TEST_DATE, "k": "ab", "user": "Leo", "total": 1234.5}


@pytest.fixture
def options() -> FillOptions:
    return FillOptions()


@pytest.mark.parametrize(
    "text", ["", "plain", "no delimiters: at all, really", "tabs\tand\nnewlines"]
)
def test_text_without_delimiters_is_unchanged(text, options):
    assert fill(text, {}, options=options) == text


@pytest.mark.parametrize("template,expected", [("{{", "{"), ("}}", "}")])
def test_doubled_delimiters(template, expected, options):
    assert fill(template, {}, options=options) == expected


def test_escapes_around_token(values, options):
    assert fill("{{{user}}}", values, options=options) == "{Leo}"
    assert fill("{{user}}", values, options=options) == "{user}"


def test_alignment_right(values, options):
    assert fill("{k,10}", values, options=options) == "        ab"


def test_alignment_left(values, options):
    assert fill("{k,-10}", values, options=options) == "ab        "


def test_alignment_never_truncates(options):
    assert fill("[{k,2}]", {"k": "abcdef"}, options=options) == "[abcdef]"


def test_date_format_only(values, options):
    assert fill("'{token:yyyy-MM-dd}'", values, options=options) == "'2024-08-29'"


def test_date_format_and_left_pad(values, options):
    assert (
        fill("'{token,15:yyyy-MM-dd}'", values, options=options) == "'     2024-08-29'"
    )


def test_date_format_and_right_pad(values, options):
    assert (
        fill("'{token,-15:yyyy-MM-dd}'", values, options=options)
        == "'2024-08-29     '"
    )


def test_format_with_commas(values, options):
    assert fill("{total,10:,.2f}", values, options=options) == "  1,234.50"


def test_values_are_stringified_without_format(options):
    assert fill("{n} {b} {x}", {"n": 3, "b": True, "x": None}, options=options) == (
        "3 True None"
    )


def test_unterminated_token(options):
    with pytest.raises(UnterminatedTokenError):
        fill("{abc", {"abc": 1}, options=options)


def test_missing_key_throws_by_default(options):
    with pytest.raises(MissingKeyError) as exc:
        fill("Hello {name}", {}, options=options)
    assert exc.value.key == "name"
    assert isinstance(exc.value, KeyError)


def test_missing_key_substitute_empty():
    options = FillOptions(missing_key=MissingKeyPolicy.SUBSTITUTE_EMPTY)
    assert fill("a{x}b", {}, options=options) == "ab"
    assert fill("a{x,3}b", {}, options=options) == "a   b"


def test_missing_key_leave_unchanged():
    options = FillOptions(missing_key=MissingKeyPolicy.LEAVE_UNCHANGED)
    assert fill("a{x,3:f}b {y}", {"y": 1}, options=options) == "a{x,3:f}b 1"


def test_missing_key_leave_unchanged_ignores_bad_alignment():
    options = FillOptions(missing_key=MissingKeyPolicy.LEAVE_UNCHANGED)
    assert fill("{x,wide}", {}, options=options) == "{x,wide}"


def test_invalid_alignment(options):
    with pytest.raises(InvalidAlignmentError):
        fill("{k,wide}", {"k": "v"}, options=options)


def test_huge_alignment_is_rejected(options):
    with pytest.raises(InvalidAlignmentError, match="column limit"):
        fill("{k,1000000000000}", {"k": "v"}, options=options)


def test_lone_close_delimiter(options):
    assert fill("a}b {k}", {"k": 1}, options=options) == "a}b 1"

    strict = FillOptions(malformed_delimiter=MalformedDelimiterPolicy.THROW)
    with pytest.raises(MalformedDelimiterError):
        fill("a}b", {}, options=strict)


def test_custom_delimiters(values):
    options = FillOptions(open_delimiter="<", close_delimiter=">")
    assert fill("<user,-5>|<<{k}>>", values, options=options) == "Leo  |<{k}>"


def test_no_partial_output_on_error(options):
    resolver = Mock(spec=ValueResolver)
    resolver.resolve.side_effect = [Resolution.hit("first"), Resolution.miss()]
    with pytest.raises(MissingKeyError):
        fill("{a} {b}", resolver, options=options)
    assert resolver.resolve.call_count == 2


def test_attribute_source(options):
    person = SimpleNamespace(name="Ada", address=SimpleNamespace(city="London"))
    assert (
        fill("{name} of {address.city,8}", person, options=options)
        == "Ada of   London"
    )


def test_callable_source(options):
    assert fill("{a}-{bc}", str.upper, options=options) == "A-BC"


def test_custom_formatter_receives_value_and_format(values, options):
    formatter = Mock()
    formatter.format.return_value = "X"
    assert fill("[{k,3:spec:with,commas}]", values, formatter, options) == "[  X]"
    formatter.format.assert_called_once_with("ab", "spec:with,commas")


def test_custom_formatter_receives_none_without_format(values, options):
    formatter = Mock()
    formatter.format.return_value = "X"
    fill("{k}", values, formatter, options)
    formatter.format.assert_called_once_with("ab", None)


def test_default_options_come_from_settings(values):
    assert fill("{k}", values) == "ab"
    with pytest.raises(MissingKeyError):
        fill("{missing}", values)


@pytest.mark.parametrize(
    "text,width,expected",
    [("ab", None, "ab"), ("ab", 0, "ab"), ("ab", 4, "  ab"), ("ab", -4, "ab  ")],
)
def test_text_align(text, width, expected):
    assert text_align(text, width) == expected


def test_tokens_list(options):
    result = tokens_list("{{x}} {a} and {b,-3:0.2f} {}", options)
    assert result == [
        TokenInformation("a"),
        TokenInformation.build("b", -3, "0.2f"),
        TokenInformation(""),
    ]


def test_tokens_list_unterminated(options):
    with pytest.raises(UnterminatedTokenError):
        tokens_list("{a", options)


def test_template_parser_success(values, options):
    parser = TemplateParser(values, options=options)
    result = parser.parse("Hi {user,-5}!")
    assert result.success
    assert result.error is None
    assert result.text == "Hi Leo  !"


def test_template_parser_empty_input(values, options):
    result = TemplateParser(values, options=options).parse("")
    assert result.success
    assert result.text == ""


def test_template_parser_reports_errors(options):
    result = TemplateParser({}, options=options).parse("Hi {user}")
    assert not result.success
    assert result.text == ""
    assert "user" in result.error


def test_template_parser_reports_formatter_errors(options):
    result = TemplateParser({"n": "text"}, options=options).parse("{n:.2f}")
    assert not result.success
    assert result.error
