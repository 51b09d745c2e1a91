"""Tests for settings loading."""

import pytest

from jico.config import JiraSettings, load_settings
from jico.core.exceptions import ConfigError, ValidationError


class TestLoadSettings:
    """Tests for load_settings."""

    def test_from_environment(self, jira_env):
        settings = load_settings()
        assert settings.base_url == "https://acme.atlassian.net"
        assert settings.email == "user@example.com"
        assert settings.api_token == "token"
        assert settings.project_key is None
        assert settings.default_jql is None

    def test_trailing_slashes_stripped(self, jira_env, monkeypatch):
        monkeypatch.setenv("JIRA_BASE_URL", "https://acme.atlassian.net//")
        assert load_settings().base_url == "https://acme.atlassian.net"

    def test_optional_values(self, jira_env, monkeypatch):
        monkeypatch.setenv("JIRA_PROJECT_KEY", "ACME")
        monkeypatch.setenv("JIRA_DEFAULT_JQL", "assignee = currentUser()")
        settings = load_settings()
        assert settings.project_key == "ACME"
        assert settings.default_jql == "assignee = currentUser()"

    def test_blank_optional_treated_as_unset(self, jira_env, monkeypatch):
        monkeypatch.setenv("JIRA_PROJECT_KEY", "")
        assert load_settings().project_key is None

    def test_missing_required(self, monkeypatch):
        monkeypatch.setenv("JIRA_BASE_URL", "https://acme.atlassian.net")
        with pytest.raises(ConfigError) as exc_info:
            load_settings()
        message = str(exc_info.value)
        assert "Missing JIRA_EMAIL, JIRA_API_TOKEN" in message
        assert "set in environment or .env" in message

    def test_missing_everything(self):
        with pytest.raises(ConfigError, match="JIRA_BASE_URL"):
            load_settings()

    def test_blank_required(self, jira_env, monkeypatch):
        monkeypatch.setenv("JIRA_API_TOKEN", "  ")
        with pytest.raises(ConfigError, match="Missing JIRA_API_TOKEN"):
            load_settings()

    @pytest.mark.parametrize("value", ["/", "//", " / "])
    def test_base_url_of_only_slashes_is_missing(self, jira_env, monkeypatch, value):
        monkeypatch.setenv("JIRA_BASE_URL", value)
        with pytest.raises(ConfigError, match="Missing JIRA_BASE_URL"):
            load_settings()


class TestDotenv:
    """Tests for .env file handling."""

    def write_env(self, tmp_path, name=".env"):
        path = tmp_path / name
        path.write_text(
            "JIRA_BASE_URL=https://dotenv.atlassian.net/\n"
            "JIRA_EMAIL=dotenv@example.com\n"
            "JIRA_API_TOKEN=dotenv-token\n"
            "JIRA_PROJECT_KEY=DOT\n"
            "UNRELATED=1\n"
        )
        return path

    def test_loaded_from_working_directory(self, tmp_path):
        self.write_env(tmp_path)
        settings = load_settings()
        assert settings.base_url == "https://dotenv.atlassian.net"
        assert settings.email == "dotenv@example.com"
        assert settings.project_key == "DOT"

    def test_environment_wins(self, tmp_path, monkeypatch):
        self.write_env(tmp_path)
        monkeypatch.setenv("JIRA_EMAIL", "env@example.com")
        settings = load_settings()
        assert settings.email == "env@example.com"
        assert settings.api_token == "dotenv-token"

    def test_explicit_path(self, tmp_path):
        path = self.write_env(tmp_path, "jira.env")
        assert load_settings(path).project_key == "DOT"

    def test_missing_file_ignored(self, jira_env):
        assert load_settings("does-not-exist.env").email == "user@example.com"

    def test_disabled(self, tmp_path):
        self.write_env(tmp_path)
        with pytest.raises(ConfigError):
            load_settings(None)


class TestResolveProject:
    def test_override(self, settings):
        assert settings.resolve_project("OTHER") == "OTHER"

    def test_configured(self, settings):
        settings.project_key = "ACME"
        assert settings.resolve_project() == "ACME"

    def test_missing(self, settings):
        with pytest.raises(ValidationError, match="Project key is required"):
            settings.resolve_project()


class TestResolveJQL:
    def test_explicit_jql(self, settings):
        settings.default_jql = "status = Open"
        assert settings.resolve_jql("project = X") == "project = X"

    def test_default_jql(self, settings):
        settings.default_jql = "status = Open"
        settings.project_key = "ACME"
        assert settings.resolve_jql() == "status = Open"

    def test_project_query(self, settings):
        assert settings.resolve_jql(project="ACME") == "project = ACME ORDER BY created DESC"

    def test_configured_project_query(self, settings):
        settings.project_key = "ACME"
        assert settings.resolve_jql() == "project = ACME ORDER BY created DESC"

    def test_nothing_to_query(self, settings):
        with pytest.raises(ValidationError, match="Provide --jql or configure a project key"):
            settings.resolve_jql()


def test_settings_constructed_directly():
    settings = JiraSettings(
        _env_file=None,  # type: ignore[call-arg]
        base_url="https://x.atlassian.net/",
        email="a@b.c",
        api_token="t",
    )
    assert settings.base_url == "https://x.atlassian.net"
