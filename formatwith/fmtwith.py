"""
formatwith Main Module.

Entry point of the `fmtwith` command, a command-line front end to the
formatwith template engine.

Features:
- Fills `{key,alignment:format}` templates from command-line or JSON values
- Lists the tokens of a template
- Builds canonical token text

Usage:
    Run `fmtwith --help` for the list of commands.

Examples:
    Fill a template:
        $ fmtwith fill "'{token,15:yyyy-MM-dd}'" --date token=2024-08-29
        '     2024-08-29'

    Fill a template file from a JSON object:
        $ fmtwith fill --file invoice.txt --values invoice.json

    Inspect a template:
        $ fmtwith tokens "{name,-10} {total,8:,.2f}"

    Build a token:
        $ fmtwith build total --align 8 --format ",.2f"
        {total,8:,.2f}

Note:
    Defaults for the missing-key policy, the unmatched-delimiter policy and
    the delimiters come from FMTW_* environment variables or the user
    configuration file.
"""

from typing import Final
from loguru import logger
import click
from formatwith.commands.base import RichGroup
from formatwith.commands.template import build, fill, tokens
from formatwith.lib.log import logging_enable

__version__: Final[str] = "0.1.0"


@click.group(
    cls=RichGroup,
    help="""
    Template filling

    Fill, inspect and build {key,alignment:format} templates.
    """,
)
@click.version_option(__version__, "-V", "--version", prog_name="fmtwith")
def cli() -> None:
    """
    Root group for the fmtwith commands.
    """
    pass


cli.add_command(fill)
cli.add_command(tokens)
cli.add_command(build)


def main() -> None:
    """Console script entry point.

    The command owns the process, so loguru's default handler is replaced
    by the package's stderr sink.
    """
    logger.remove()
    logging_enable()
    cli()
