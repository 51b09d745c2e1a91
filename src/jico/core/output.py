"""Output formatting utilities using Rich."""

import json
from enum import Enum
from typing import Any

import click
import yaml
from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax


class OutputFormat(str, Enum):
    """Supported output formats."""

    JSON = "json"
    YAML = "yaml"


def to_json(data: Any) -> str:
    """Render data as pretty-printed JSON."""
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)


def to_yaml(data: Any) -> str:
    """Render data as block-style YAML."""
    return yaml.safe_dump(data, default_flow_style=False, allow_unicode=True, sort_keys=False)


class OutputFormatter:
    """Handles output formatting for CLI commands.

    Results go to stdout; errors go to stderr.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.JSON,
        color: bool = True,
    ):
        self.format = format
        self.color = color
        self._console = Console(no_color=not color, highlight=False)
        self._error_console = Console(
            stderr=True, no_color=not color, highlight=False, soft_wrap=True
        )

    def print_error(self, message: str) -> None:
        """Print an error message to stderr."""
        self._error_console.print(f"[red]Error:[/red] {escape(message)}")

    def print_data(self, data: Any) -> None:
        """Print data in the configured format.

        Highlighting is only applied on an interactive terminal, so piped
        output is always plain JSON or YAML.
        """
        if self.format == OutputFormat.YAML:
            text, lexer = to_yaml(data).rstrip("\n"), "yaml"
        else:
            text, lexer = to_json(data), "json"

        if self.color and self._console.is_terminal:
            # soft_wrap: no cropping or wrapping, long strings must survive intact
            self._console.print(
                Syntax(text, lexer, theme="monokai", background_color="default"),
                soft_wrap=True,
            )
        else:
            click.echo(text)
