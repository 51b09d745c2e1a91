"""Configuration management for jico using Pydantic settings.

Connection settings come from ``JIRA_*`` environment variables, optionally
supplied through a ``.env`` file in the working directory. Variables already
present in the environment always take precedence over the file.
"""

from pathlib import Path

import pydantic
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from jico.core.exceptions import ConfigError, ValidationError

ENV_PREFIX = "JIRA_"
DEFAULT_ENV_FILE = ".env"

REQUIRED_FIELDS = ("base_url", "email", "api_token")


class JiraSettings(BaseSettings):
    """Jira Cloud connection settings."""

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=DEFAULT_ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    base_url: str
    email: str
    api_token: str
    project_key: str | None = None
    default_jql: str | None = None

    @field_validator("email", "api_token")
    @classmethod
    def validate_required(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("value is blank")
        return v

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        v = v.strip().rstrip("/")
        if not v:
            raise ValueError("value is blank")
        return v

    @field_validator("project_key", "default_jql")
    @classmethod
    def blank_as_unset(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            return None
        return v

    def resolve_project(self, override: str | None = None) -> str:
        """Return the explicit project key, falling back to JIRA_PROJECT_KEY."""
        project = override or self.project_key
        if not project:
            raise ValidationError(
                "Project key is required (pass --project or set JIRA_PROJECT_KEY)"
            )
        return project

    def resolve_jql(self, jql: str | None = None, project: str | None = None) -> str:
        """Pick the JQL for a listing.

        Priority: explicit ``jql``, then JIRA_DEFAULT_JQL, then a newest-first
        query over the resolvable project.
        """
        if jql:
            return jql
        if self.default_jql:
            return self.default_jql
        try:
            key = self.resolve_project(project)
        except ValidationError:
            raise ValidationError("Provide --jql or configure a project key") from None
        return f"project = {key} ORDER BY created DESC"


def _env_name(field: str) -> str:
    return f"{ENV_PREFIX}{field.upper()}"


def load_settings(env_file: str | Path | None = DEFAULT_ENV_FILE) -> JiraSettings:
    """Load Jira settings from the environment and an optional .env file.

    Args:
        env_file: Path to a dotenv file, or None to read only the environment.
            A path that does not exist is ignored.

    Returns:
        Loaded settings

    Raises:
        ConfigError: If a required variable is missing or blank
    """
    try:
        return JiraSettings(_env_file=env_file)  # type: ignore[call-arg]
    except pydantic.ValidationError as e:
        missing = []
        for error in e.errors():
            loc = error.get("loc") or ()
            if loc and loc[0] in REQUIRED_FIELDS:
                missing.append(_env_name(str(loc[0])))
        if missing:
            names = ", ".join(dict.fromkeys(missing))
            raise ConfigError(f"Missing {names} (set in environment or .env)") from None
        raise ConfigError(f"Invalid Jira settings: {e}") from None
