"""
Rich help rendering for the fmtwith click group and its commands.

- `rich_help`: builds the markup help text a command is declared with.
- `RichGroup`: lists the commands and options of `fmtwith`.
- `RichCommand`: shows a command's help in a panel, then its options.

Rendering problems are logged and reported instead of aborting `--help`.
"""

from collections.abc import Iterable
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
import click
from formatwith.lib.log import LOG

console: Console = Console()

PANEL_MAX_WIDTH: int = 80


def rich_help(description: str, usage: str, args: dict[str, str] | None = None) -> str:
    """
    Build the markup help text of a command.

    :param description: One-line description.
    :param usage: Usage line.
    :param args: Positional arguments and their descriptions.
    :return: Help text in rich markup.
    """
    lines: list[str] = [
        f"[bold cyan]{description}[/bold cyan]",
        "",
        "[bold yellow]Usage:[/bold yellow]",
        f"    [green]{escape(usage)}[/green]",
    ]
    if args:
        lines += ["", "[bold yellow]Arguments:[/bold yellow]"]
        lines += [f"    [green]{escape(a)}[/green]: {d}" for a, d in args.items()]
    return "\n".join(lines) + "\n"


def options_print(params: Iterable[click.Parameter]) -> None:
    """Print the options among `params` with their help text."""
    options: list[click.Option] = [p for p in params if isinstance(p, click.Option)]
    if not options:
        return
    console.print("[bold yellow]Options:[/bold yellow]")
    for option in options:
        flags: str = escape(", ".join(option.opts + option.secondary_opts))
        console.print(f"- [cyan]{flags}[/cyan]: {option.help or 'No description.'}")


class RichGroup(click.Group):
    """Click group whose help lists its commands and options with rich."""

    def format_help(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        try:
            info_name: str = ctx.info_name or ""
            console.print(
                f"[bold yellow]Usage:[/bold yellow] [cyan]{info_name}[/cyan] "
                "[magenta]\\[OPTIONS] COMMAND \\[ARGS]...[/magenta]\n"
            )
            if self.help:
                console.print(f"[bold cyan]{escape(self.help.strip())}[/bold cyan]\n")

            console.print("[bold green]Commands:[/bold green]")
            for name in self.list_commands(ctx):
                command: click.Command | None = self.get_command(ctx, name)
                summary: str = command.get_short_help_str() if command else ""
                console.print(f"- [cyan]{name}[/cyan]: {summary}")
            console.print()

            options_print(self.get_params(ctx))
        except Exception as e:
            LOG(f"Help rendering error: {e}")
            console.print(f"[bold red]Help rendering error:[/bold red] {e}")


class RichCommand(click.Command):
    """Click command whose `help` is rich markup, shown in a panel."""

    def format_help(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        try:
            help_text: str = self.help or "No help text available."
            width: int = max(len(line) for line in help_text.splitlines()) + 10
            console.print(
                Panel(
                    help_text,
                    expand=False,
                    width=min(width, PANEL_MAX_WIDTH),
                    border_style="cyan",
                )
            )
            options_print(self.get_params(ctx))
        except Exception as e:
            LOG(f"Help rendering error: {e}")
            console.print(f"[bold red]Help rendering error:[/bold red] {e}")
