"""Pytest fixtures for jico tests."""

import os
from typing import Callable, Generator

import httpx
import pytest
from click.testing import CliRunner

from jico.clients.jira import JiraClient
from jico.config import JiraSettings

BASE_URL = "https://acme.atlassian.net"


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click CLI runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def clean_env(tmp_path, monkeypatch) -> Generator[None, None, None]:
    """Clear JIRA_* variables and run each test from an empty directory."""
    for key in list(os.environ):
        if key.upper().startswith("JIRA_") or key.upper() == "JICO_ENV_FILE":
            monkeypatch.delenv(key, raising=False)
    for key in ("FORCE_COLOR", "TTY_COMPATIBLE"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    yield


@pytest.fixture
def jira_env(monkeypatch) -> dict[str, str]:
    """Populate the required Jira environment variables."""
    env = {
        "JIRA_BASE_URL": f"{BASE_URL}/",
        "JIRA_EMAIL": "user@example.com",
        "JIRA_API_TOKEN": "token",
    }
    for key, value in env.items():
        monkeypatch.setenv(key, value)
    return env


@pytest.fixture
def settings() -> JiraSettings:
    """Settings built directly, without reading the environment."""
    return JiraSettings(
        _env_file=None,  # type: ignore[call-arg]
        base_url=BASE_URL,
        email="user@example.com",
        api_token="token",
    )


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: list[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(record)


@pytest.fixture
def make_client(settings: JiraSettings) -> Callable[..., tuple[JiraClient, RecordingTransport]]:
    """Build a JiraClient backed by a recording mock transport."""

    def factory(
        handler: Callable[[httpx.Request], httpx.Response],
    ) -> tuple[JiraClient, RecordingTransport]:
        transport = RecordingTransport(handler)
        return JiraClient(settings, transport=transport), transport

    return factory
