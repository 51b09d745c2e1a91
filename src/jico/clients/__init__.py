"""API clients for external services."""

from jico.clients.jira import JiraClient

__all__ = ["JiraClient"]
