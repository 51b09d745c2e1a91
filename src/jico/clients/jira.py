"""Jira Cloud API client using httpx."""

import base64
import json
from typing import Any

import httpx

from jico.config import JiraSettings
from jico.core.exceptions import JiraError
from jico.core.logging import StructuredLogger
from jico.payloads import find_transition_id

logger = StructuredLogger("clients.jira")

API_PREFIX = "/rest/api/3"


def _describe_body(body: Any) -> str:
    if isinstance(body, (dict, list)):
        return json.dumps(body, separators=(",", ":"), ensure_ascii=False)
    return str(body)


class JiraClient:
    """Client for Jira Cloud REST API v3."""

    def __init__(
        self,
        settings: JiraSettings,
        transport: httpx.BaseTransport | None = None,
    ):
        self._settings = settings
        self._transport = transport
        self._client: httpx.Client | None = None

    @property
    def base_url(self) -> str:
        return self._settings.base_url

    @property
    def client(self) -> httpx.Client:
        """Get or create HTTP client."""
        if self._client is None:
            # Jira Cloud uses Basic Auth with email:api_token
            credentials = base64.b64encode(
                f"{self._settings.email}:{self._settings.api_token}".encode()
            ).decode()

            headers = {
                "Authorization": f"Basic {credentials}",
                "Content-Type": "application/json",
                "Accept": "application/json",
            }

            self._client = httpx.Client(
                base_url=self._settings.base_url,
                headers=headers,
                transport=self._transport,
            )

            logger.debug("Created Jira client", url=self._settings.base_url)

        return self._client

    def _request(
        self,
        method: str,
        path: str,
        action: str = "Jira",
        **kwargs: Any,
    ) -> Any:
        """Make an API request.

        Args:
            method: HTTP method
            path: API path
            action: Short description used in error messages
            **kwargs: Additional request arguments

        Returns:
            Decoded JSON body, or ``{}`` when the body is empty
        """
        logger.debug("Sending request", method=method, path=path)
        try:
            response = self.client.request(method, path, **kwargs)
        except httpx.RequestError as e:
            raise JiraError(f"Request failed: {e}")

        logger.debug("Received response", status=response.status_code, path=path)

        if not response.content.strip():
            body: Any = {}
        else:
            try:
                body = response.json()
            except ValueError:
                if response.is_success:
                    raise JiraError(
                        f"Failed to parse {action} response",
                        status_code=response.status_code,
                        body=response.text,
                    )
                body = response.text

        if not response.is_success:
            status = f"{response.status_code} {response.reason_phrase}".strip()
            raise JiraError(
                f"Jira returned error status {status}: {_describe_body(body)}",
                status_code=response.status_code,
                body=body,
            )

        return body

    def get(self, path: str, **kwargs: Any) -> Any:
        """Make a GET request."""
        return self._request("GET", path, **kwargs)

    def post(self, path: str, **kwargs: Any) -> Any:
        """Make a POST request."""
        return self._request("POST", path, **kwargs)

    def put(self, path: str, **kwargs: Any) -> Any:
        """Make a PUT request."""
        return self._request("PUT", path, **kwargs)

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            self._client.close()
            self._client = None

    def __enter__(self) -> "JiraClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    # Issue operations
    def create_issue(self, fields: dict[str, Any]) -> dict[str, Any]:
        """Create an issue (or sub-task) from a prepared field map."""
        return self.post(f"{API_PREFIX}/issue", json={"fields": fields}, action="create issue")

    def search_issues(
        self,
        jql: str,
        max_results: int = 20,
        fields: list[str] | None = None,
    ) -> dict[str, Any]:
        """Search issues using JQL."""
        # Atlassian moved search to /search/jql; the body still uses "jql".
        payload: dict[str, Any] = {
            "jql": jql,
            "maxResults": max_results,
        }
        if fields:
            payload["fields"] = fields
        return self.post(f"{API_PREFIX}/search/jql", json=payload, action="search")

    def get_issue(self, issue_key: str, fields: list[str] | None = None) -> dict[str, Any]:
        """Get issue by key."""
        params: dict[str, Any] = {}
        if fields:
            params["fields"] = ",".join(fields)
        return self.get(f"{API_PREFIX}/issue/{issue_key}", params=params, action="get issue")

    def get_issue_subtasks(self, issue_key: str) -> list[dict[str, Any]]:
        """Get the sub-tasks of an issue."""
        issue = self.get(
            f"{API_PREFIX}/issue/{issue_key}",
            params={"fields": "subtasks"},
            action="get issue subtasks",
        )
        fields = issue.get("fields") if isinstance(issue, dict) else None
        if not isinstance(fields, dict):
            return []
        return fields.get("subtasks") or []

    def update_issue(self, issue_key: str, fields: dict[str, Any]) -> dict[str, Any]:
        """Update issue fields."""
        return self.put(
            f"{API_PREFIX}/issue/{issue_key}",
            json={"fields": fields},
            action="update issue",
        )

    def get_transitions(self, issue_key: str) -> list[dict[str, Any]]:
        """Get available transitions for an issue."""
        result = self.get(f"{API_PREFIX}/issue/{issue_key}/transitions", action="transitions")
        transitions = result.get("transitions") if isinstance(result, dict) else None
        if not isinstance(transitions, list):
            raise JiraError("No transitions found in response", body=result)
        return transitions

    def transition_issue(self, issue_key: str, transition_id: str) -> dict[str, Any]:
        """Apply a transition by id."""
        payload = {"transition": {"id": transition_id}}
        return self.post(
            f"{API_PREFIX}/issue/{issue_key}/transitions",
            json=payload,
            action="transition",
        )

    def transition_issue_by_name(self, issue_key: str, name: str) -> dict[str, Any]:
        """Look up a transition by name and apply it.

        Nothing is submitted when the name does not match a transition
        available for the issue.
        """
        transitions = self.get_transitions(issue_key)
        transition_id = find_transition_id(transitions, name, issue_key)
        logger.info("Applying transition", issue=issue_key, name=name, id=transition_id)
        return self.transition_issue(issue_key, transition_id)

    def link_issues(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Create a link between two issues."""
        return self.post(f"{API_PREFIX}/issueLink", json=payload, action="issue link")
