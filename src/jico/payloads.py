"""Translate command options into Jira REST API v3 request bodies.

Optional options that were not supplied are left out of the payload
entirely rather than sent as null. The one exception is ``description`` on
create, which Jira receives as an explicit null when absent.
"""

from enum import Enum
from typing import Any, Iterable

from jico.core.exceptions import ValidationError

DEFAULT_ISSUE_TYPE = "Task"
SUBTASK_ISSUE_TYPE = "Sub-task"

UPDATE_OPTIONS = (
    "--summary",
    "--description",
    "--project",
    "--issue-type",
    "--parent",
    "--labels",
    "--priority",
    "--assignee",
)


def description_to_adf(text: str) -> dict[str, Any]:
    """Wrap plain text in a single-paragraph Atlassian Document Format doc."""
    return {
        "type": "doc",
        "version": 1,
        "content": [
            {
                "type": "paragraph",
                "content": [{"type": "text", "text": text}],
            }
        ],
    }


def parse_labels(values: Iterable[str]) -> list[str]:
    """Flatten repeated and comma-separated label values.

    Examples:
        ("bug,ui", "backend") -> ["bug", "ui", "backend"]
    """
    labels: list[str] = []
    for value in values:
        labels.extend(part.strip() for part in value.split(",") if part.strip())
    return labels


def parse_field_list(value: str | None) -> list[str] | None:
    """Split a comma-separated --fields value."""
    if not value:
        return None
    fields = [f.strip() for f in value.split(",") if f.strip()]
    return fields or None


def default_issue_type(issue_type: str | None, parent: str | None) -> str:
    """Explicit issue type, else Sub-task under a parent, else Task."""
    if issue_type:
        return issue_type
    return SUBTASK_ISSUE_TYPE if parent else DEFAULT_ISSUE_TYPE


def _add_optional_fields(
    fields: dict[str, Any],
    parent: str | None,
    labels: list[str] | None,
    priority: str | None,
    assignee: str | None,
) -> None:
    if parent is not None:
        fields["parent"] = {"key": parent}
    if labels is not None:
        fields["labels"] = list(labels)
    if priority is not None:
        fields["priority"] = {"name": priority}
    if assignee is not None:
        fields["assignee"] = {"accountId": assignee}


def build_create_fields(
    project_key: str,
    summary: str,
    description: str | None = None,
    issue_type: str | None = None,
    parent: str | None = None,
    labels: list[str] | None = None,
    priority: str | None = None,
    assignee: str | None = None,
) -> dict[str, Any]:
    """Build the ``fields`` map for a new issue or sub-task."""
    fields: dict[str, Any] = {
        "project": {"key": project_key},
        "summary": summary,
        "issuetype": {"name": default_issue_type(issue_type, parent)},
        "description": description_to_adf(description) if description is not None else None,
    }
    _add_optional_fields(fields, parent, labels, priority, assignee)
    return fields


def build_update_fields(
    summary: str | None = None,
    description: str | None = None,
    project: str | None = None,
    issue_type: str | None = None,
    parent: str | None = None,
    labels: list[str] | None = None,
    priority: str | None = None,
    assignee: str | None = None,
) -> dict[str, Any]:
    """Build the ``fields`` map for an issue edit.

    Setting a parent without an issue type converts the issue to a Sub-task.

    Raises:
        ValidationError: If no field was supplied
    """
    fields: dict[str, Any] = {}

    if summary is not None:
        fields["summary"] = summary
    if description is not None:
        fields["description"] = description_to_adf(description)
    if project is not None:
        fields["project"] = {"key": project}

    if issue_type is None and parent is not None:
        issue_type = SUBTASK_ISSUE_TYPE
    if issue_type is not None:
        fields["issuetype"] = {"name": issue_type}

    _add_optional_fields(fields, parent, labels, priority, assignee)

    if not fields:
        raise ValidationError(
            f"Provide at least one field to update ({', '.join(UPDATE_OPTIONS)})"
        )
    return fields


class LinkRelation(str, Enum):
    """Direction of a blocking link, read from the source issue."""

    BLOCKS = "blocks"
    BLOCKED_BY = "blocked-by"

    @property
    def link_type_name(self) -> str:
        return "Blocks"

    def outward_inward_keys(self, key: str, to: str) -> tuple[str, str]:
        """Return ``(outward, inward)`` issue keys.

        Jira shows the type's outward text ("blocks") on the inward issue
        and the inward text ("is blocked by") on the outward issue.
        """
        if self is LinkRelation.BLOCKS:
            return to, key
        return key, to


def build_link_payload(key: str, to: str, relation: LinkRelation) -> dict[str, Any]:
    """Build the body for ``POST /issueLink``."""
    outward_key, inward_key = relation.outward_inward_keys(key, to)
    return {
        "type": {"name": relation.link_type_name},
        "outwardIssue": {"key": outward_key},
        "inwardIssue": {"key": inward_key},
    }


def find_transition_id(
    transitions: list[dict[str, Any]],
    target: str,
    issue_key: str,
) -> str:
    """Resolve a transition name to its id.

    Names are compared case-insensitively and the first match wins. Entries
    that are not objects with a string name are ignored.

    Raises:
        ValidationError: If no transition carries that name
    """
    named = [
        t for t in transitions if isinstance(t, dict) and isinstance(t.get("name"), str)
    ]
    wanted = target.casefold()
    for transition in named:
        if transition["name"].casefold() == wanted:
            transition_id = transition.get("id")
            if transition_id is not None:
                return str(transition_id)

    message = f"Transition '{target}' not available for {issue_key}"
    available = [t["name"] for t in named]
    if available:
        message = f"{message}. Available: {', '.join(available)}"
    raise ValidationError(message)
