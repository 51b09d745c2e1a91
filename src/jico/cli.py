"""Main CLI entry point for jico."""

import sys
from typing import Any

import click
from rich.console import Console
from rich.markup import escape

from jico import __version__
from jico.config import DEFAULT_ENV_FILE
from jico.core.context import JicoContext
from jico.core.output import OutputFormat
from jico.core.exceptions import JicoError


CONTEXT_SETTINGS = {
    "help_option_names": ["-h", "--help"],
    "max_content_width": 120,
}


class OutputFormatType(click.ParamType):
    """Custom Click parameter type for output format."""

    name = "format"

    def convert(
        self,
        value: Any,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> OutputFormat:
        if isinstance(value, OutputFormat):
            return value
        try:
            return OutputFormat(value.lower())
        except ValueError:
            self.fail(
                f"Invalid format '{value}'. Choose from: json, yaml",
                param,
                ctx,
            )


OUTPUT_FORMAT = OutputFormatType()


def print_version(ctx: click.Context, param: click.Parameter, value: bool) -> None:
    """Print version and exit."""
    if not value or ctx.resilient_parsing:
        return
    click.echo(f"jico version {__version__}")
    ctx.exit()


@click.group(context_settings=CONTEXT_SETTINGS)
@click.option(
    "--env-file",
    type=click.Path(dir_okay=False),
    default=DEFAULT_ENV_FILE,
    show_default=True,
    metavar="FILE",
    envvar="JICO_ENV_FILE",
    help="Dotenv file with JIRA_* settings (real environment variables win)",
)
@click.option(
    "-o",
    "--output",
    "output_format",
    type=OUTPUT_FORMAT,
    default=OutputFormat.JSON.value,
    metavar="FORMAT",
    help="Output format: json, yaml",
)
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Increase verbosity (-v for info, -vv for debug)",
)
@click.option(
    "-q",
    "--quiet",
    is_flag=True,
    help="Only log errors",
)
@click.option(
    "--dry-run",
    is_flag=True,
    help="Print the request that would be sent without sending it",
)
@click.option(
    "--no-color",
    is_flag=True,
    help="Disable colored output",
)
@click.option(
    "--version",
    is_flag=True,
    callback=print_version,
    expose_value=False,
    is_eager=True,
    help="Show version and exit",
)
@click.pass_context
def cli(
    ctx: click.Context,
    env_file: str,
    output_format: OutputFormat,
    verbose: int,
    quiet: bool,
    dry_run: bool,
    no_color: bool,
) -> None:
    """jico - CLI helper for Jira Cloud.

    Creates, lists, views, updates, transitions and links issues through
    the Jira Cloud REST API v3. Results are printed as JSON.

    \b
    Examples:
        jico create "Fix login bug" --project PROJ
        jico list --jql "project = PROJ AND status = Open"
        jico transition PROJ-123 --to "In Progress"
        jico link PROJ-1 --to PROJ-2 --relation blocked-by

    \b
    Configuration:
        JIRA_BASE_URL        Site URL, e.g. https://acme.atlassian.net
        JIRA_EMAIL           Account email
        JIRA_API_TOKEN       API token
        JIRA_PROJECT_KEY     Default project key (optional)
        JIRA_DEFAULT_JQL     Default query for `list` (optional)
    """
    ctx.obj = JicoContext(
        env_file=env_file,
        output_format=output_format,
        verbose=verbose,
        quiet=quiet,
        dry_run=dry_run,
        color=not no_color,
    )
    ctx.call_on_close(ctx.obj.close)


def register_commands() -> None:
    """Register all commands."""
    from jico.commands.issues import COMMANDS

    for command in COMMANDS:
        cli.add_command(command)


register_commands()


def main() -> None:
    """Main entry point."""
    try:
        cli()
    except JicoError as e:
        console = Console(stderr=True, soft_wrap=True)
        console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        sys.exit(1)
    except KeyboardInterrupt:
        console = Console(stderr=True, soft_wrap=True)
        console.print("\n[yellow]Interrupted[/yellow]")
        sys.exit(130)


if __name__ == "__main__":
    main()
