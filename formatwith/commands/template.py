"""
Template Commands

This module provides CLI commands for filling templates, listing their
tokens and building canonical token text.

Commands:
- fill <template>: Fill a template from --set/--date/--values values.
- tokens <template>: Show the tokens of a template.
- build <key>: Build a token from a key, alignment and format.
"""

from datetime import datetime
from pathlib import Path
from typing import Any, NoReturn
import json
import sys
from rich.console import Console
from rich.markup import escape
from rich.table import Table
import click
from formatwith.commands.base import RichCommand, rich_help
from formatwith.config.settings import options_default
from formatwith.lib.log import LOG
from formatwith.lib.parser import TokenInformation, fill as template_fill, tokens_list
from formatwith.models.dataModel import (
    FillOptions,
    MalformedDelimiterPolicy,
    MissingKeyPolicy,
)

console: Console = Console()


def assignments_parse(assignments: tuple[str, ...]) -> dict[str, str]:
    """
    Split KEY=VALUE assignments into a dictionary.

    :param assignments: The raw assignments.
    :return: Mapping of keys to their (string) values.
    :raises click.BadParameter: If an assignment has no '='.
    """
    values: dict[str, str] = {}
    for assignment in assignments:
        key, sep, value = assignment.partition("=")
        if not sep:
            raise click.BadParameter(
                f"Expected KEY=VALUE, got {assignment!r}", param_hint="--set/--date"
            )
        values[key] = value
    return values


def values_collect(
    values_file: Path | None, assignments: tuple[str, ...], dates: tuple[str, ...]
) -> dict[str, Any]:
    """
    Merge the values of a JSON file, --set and --date options, later ones winning.

    :param values_file: Optional JSON file holding an object of values.
    :param assignments: KEY=VALUE string values.
    :param dates: KEY=ISO-DATE values, parsed to datetimes.
    :return: The merged values.
    :raises click.BadParameter: If the file is not a JSON object or a date is invalid.
    """
    values: dict[str, Any] = {}
    if values_file:
        try:
            loaded: Any = json.loads(values_file.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise click.BadParameter(f"Invalid JSON: {e}", param_hint="--values")
        if not isinstance(loaded, dict):
            raise click.BadParameter("Expected a JSON object", param_hint="--values")
        values.update(loaded)

    values.update(assignments_parse(assignments))
    for key, text in assignments_parse(dates).items():
        try:
            values[key] = datetime.fromisoformat(text)
        except ValueError:
            raise click.BadParameter(f"Invalid ISO date {text!r}", param_hint="--date")
    return values


def options_resolve(
    missing: str | None,
    strict_braces: bool,
    open_delimiter: str | None,
    close_delimiter: str | None,
) -> FillOptions:
    """
    Overlay command-line choices on the configured default options.

    :raises ValueError: If a delimiter is not a single character.
    """
    updates: dict[str, Any] = options_default().model_dump()
    if missing:
        updates["missing_key"] = MissingKeyPolicy(missing)
    if strict_braces:
        updates["malformed_delimiter"] = MalformedDelimiterPolicy.THROW
    if open_delimiter is not None:
        updates["open_delimiter"] = open_delimiter
    if close_delimiter is not None:
        updates["close_delimiter"] = close_delimiter
    return FillOptions(**updates)


def error_report(context: str, e: Exception) -> NoReturn:
    """Log an error, print it in red and exit with status 1."""
    LOG(f"{context}: {e}")
    console.print(f"[bold red]Error:[/bold red] {escape(str(e))}", highlight=False)
    sys.exit(1)


delimiter_options = [
    click.option("--open", "open_delimiter", default=None, help="Token open character."),
    click.option("--close", "close_delimiter", default=None, help="Token close character."),
]


def delimiters_add(func):
    """Attach the --open/--close options to a command."""
    for option in reversed(delimiter_options):
        func = option(func)
    return func


@click.command(
    cls=RichCommand,
    short_help="Fill a template",
    help=rich_help(
        description="Fill the tokens of a template and print the result.",
        usage="fmtwith fill <template> [--set KEY=VALUE]... [--values FILE]",
        args={
            "<template>": "Template text, e.g. 'Hi {name,-10}'. Omit when using --file.",
        },
    ),
)
@click.argument("template_text", required=False)
@click.option(
    "--file",
    "template_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Read the template from a file.",
)
@click.option("--set", "assignments", multiple=True, help="KEY=VALUE string value.")
@click.option("--date", "dates", multiple=True, help="KEY=ISO-DATE datetime value.")
@click.option(
    "--values",
    "values_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON object of values.",
)
@click.option(
    "--missing",
    type=click.Choice([policy.value for policy in MissingKeyPolicy]),
    default=None,
    help="What to do with unknown keys: throw, empty or leave.",
)
@click.option(
    "--strict-braces", is_flag=True, help="Fail on unmatched close delimiters."
)
@delimiters_add
def fill(
    template_text: str | None,
    template_file: Path | None,
    assignments: tuple[str, ...],
    dates: tuple[str, ...],
    values_file: Path | None,
    missing: str | None,
    strict_braces: bool,
    open_delimiter: str | None,
    close_delimiter: str | None,
) -> None:
    """
    Fill a template and echo the result.
    """
    if template_file:
        template_text = template_file.read_text(encoding="utf-8")
    if template_text is None:
        raise click.UsageError("Provide a template argument or --file.")

    values: dict[str, Any] = values_collect(values_file, assignments, dates)
    try:
        options: FillOptions = options_resolve(
            missing, strict_braces, open_delimiter, close_delimiter
        )
        result: str = template_fill(template_text, values, options=options)
    except Exception as e:
        error_report("Error filling template", e)
    click.echo(result, nl=not result.endswith("\n"))


@click.command(
    cls=RichCommand,
    short_help="Show the tokens of a template",
    help=rich_help(
        description="Show the key, alignment and format of every token.",
        usage="fmtwith tokens <template>",
        args={"<template>": "Template text to inspect."},
    ),
)
@click.argument("template_text")
@delimiters_add
def tokens(
    template_text: str, open_delimiter: str | None, close_delimiter: str | None
) -> None:
    """
    Print a table of the tokens of a template.
    """
    try:
        options: FillOptions = options_resolve(
            None, False, open_delimiter, close_delimiter
        )
        infos: list[TokenInformation] = tokens_list(template_text, options)
    except Exception as e:
        error_report("Error listing tokens", e)

    table: Table = Table(title="Tokens", show_lines=False)
    table.add_column("Key", style="cyan")
    table.add_column("Alignment", style="magenta", justify="right")
    table.add_column("Format", style="green")
    for info in infos:
        table.add_row(info.token_key, info.alignment or "", info.format or "")
    console.print(table)


@click.command(
    cls=RichCommand,
    short_help="Build token text",
    help=rich_help(
        description="Build the canonical text of a token.",
        usage="fmtwith build <key> [--align N] [--format F]",
        args={"<key>": "The token key."},
    ),
)
@click.argument("key")
@click.option("--align", type=int, default=None, help="Signed field width.")
@click.option("--format", "format_spec", default=None, help="Format specifier.")
@delimiters_add
def build(
    key: str,
    align: int | None,
    format_spec: str | None,
    open_delimiter: str | None,
    close_delimiter: str | None,
) -> None:
    """
    Echo a delimited token built from its parts.
    """
    try:
        options: FillOptions = options_resolve(
            None, False, open_delimiter, close_delimiter
        )
    except Exception as e:
        error_report("Error building token", e)
    raw: str = TokenInformation.build_string(key, align, format_spec)
    click.echo(f"{options.open_delimiter}{raw}{options.close_delimiter}")
