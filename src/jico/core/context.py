"""Click context object for sharing state across commands."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

import click

from jico.config import DEFAULT_ENV_FILE, JiraSettings, load_settings
from jico.core.output import OutputFormat, OutputFormatter
from jico.core.logging import level_from_verbosity, setup_logging, StructuredLogger

if TYPE_CHECKING:
    from jico.clients.jira import JiraClient


class JicoContext:
    """Shared context object for jico commands.

    This object is passed through Click's context mechanism and provides
    access to settings, the Jira client, and output utilities. Settings are
    loaded on first use so that ``--help`` and input validation work without
    any Jira credentials configured.
    """

    def __init__(
        self,
        settings: JiraSettings | None = None,
        env_file: str | Path | None = DEFAULT_ENV_FILE,
        output_format: OutputFormat = OutputFormat.JSON,
        verbose: int = 0,
        quiet: bool = False,
        dry_run: bool = False,
        color: bool = True,
    ):
        self._settings = settings
        self._env_file = env_file
        self._dry_run = dry_run

        setup_logging(level_from_verbosity(verbose, quiet), color=color)
        self._logger = StructuredLogger("context")

        self._output = OutputFormatter(format=output_format, color=color)

        self._jira_client: JiraClient | None = None

    @property
    def settings(self) -> JiraSettings:
        """Get the Jira settings, loading them on first access."""
        if self._settings is None:
            self._settings = load_settings(self._env_file)
            self._logger.debug(
                "Loaded settings",
                base_url=self._settings.base_url,
                project=self._settings.project_key,
            )
        return self._settings

    @property
    def output(self) -> OutputFormatter:
        """Get the output formatter."""
        return self._output

    @property
    def dry_run(self) -> bool:
        """Check if dry-run mode is enabled."""
        return self._dry_run

    @property
    def logger(self) -> StructuredLogger:
        """Get the context logger."""
        return self._logger

    @property
    def jira(self) -> "JiraClient":
        """Get or create the Jira client."""
        if self._jira_client is None:
            from jico.clients.jira import JiraClient

            self._jira_client = JiraClient(self.settings)
        return self._jira_client

    def close(self) -> None:
        """Release the HTTP client, if one was created."""
        if self._jira_client is not None:
            self._jira_client.close()
            self._jira_client = None

    def show_dry_run(
        self,
        method: str,
        path: str,
        body: dict[str, Any] | None = None,
        **extra: Any,
    ) -> None:
        """Print the request a command would send instead of sending it."""
        planned: dict[str, Any] = {"method": method, "path": path}
        if body is not None:
            planned["json"] = body
        planned.update(extra)
        self._logger.info("Dry run, request not sent", method=method, path=path)
        self._output.print_data(planned)


# Click decorator for passing context
pass_context = click.make_pass_decorator(JicoContext, ensure=True)
