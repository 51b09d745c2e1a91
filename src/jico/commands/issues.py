"""Issue commands: create, list, view, update, transition, link."""

import click
import httpx

from jico.clients.jira import API_PREFIX
from jico.core.context import pass_context, JicoContext
from jico.core.exceptions import JicoError
from jico.payloads import (
    LinkRelation,
    build_create_fields,
    build_link_payload,
    build_update_fields,
    parse_field_list,
    parse_labels,
)


def issue_field_options(func):
    """Options shared by create and update."""
    options = [
        click.option("--description", "-d", help="Description (plain text)"),
        click.option("--issue-type", help="Issue type name"),
        click.option("--parent", help="Parent issue key (makes the issue a sub-task)"),
        click.option(
            "--labels",
            multiple=True,
            help="Labels to set (comma-separated or repeated)",
        ),
        click.option("--priority", help="Priority name"),
        click.option("--assignee", help="Assignee accountId"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.command("create")
@click.argument("summary")
@click.option("--project", help="Project key; falls back to JIRA_PROJECT_KEY")
@issue_field_options
@pass_context
def create_issue(
    ctx: JicoContext,
    summary: str,
    project: str | None,
    description: str | None,
    issue_type: str | None,
    parent: str | None,
    labels: tuple[str, ...],
    priority: str | None,
    assignee: str | None,
) -> None:
    """Create a new issue.

    The issue type defaults to Task, or Sub-task when --parent is given.

    \b
    Examples:
        jico create "Fix login bug" --project PROJ --issue-type Bug
        jico create "Write docs" -d "Cover the new flags" --labels docs,cli
        jico create "Child task" --parent PROJ-123
    """
    try:
        fields = build_create_fields(
            project_key=ctx.settings.resolve_project(project),
            summary=summary,
            description=description,
            issue_type=issue_type,
            parent=parent,
            labels=parse_labels(labels) if labels else None,
            priority=priority,
            assignee=assignee,
        )

        if ctx.dry_run:
            ctx.show_dry_run("POST", f"{API_PREFIX}/issue", {"fields": fields})
            return

        result = ctx.jira.create_issue(fields)
        ctx.logger.info("Created issue", key=result.get("key"))
        ctx.output.print_data(result)

    except JicoError as e:
        ctx.output.print_error(f"Failed to create issue: {e}")
        raise click.Abort()


@click.command("list")
@click.option("--jql", help="JQL query; overrides JIRA_DEFAULT_JQL")
@click.option(
    "--limit",
    default=20,
    show_default=True,
    type=click.IntRange(min=1),
    help="Maximum number of results",
)
@click.option("--project", help="Project key used to build the default JQL")
@click.option("--fields", help="Comma-separated fields to return")
@pass_context
def list_issues(
    ctx: JicoContext,
    jql: str | None,
    limit: int,
    project: str | None,
    fields: str | None,
) -> None:
    """List issues via JQL.

    Without --jql, JIRA_DEFAULT_JQL is used, then the newest issues of
    --project (or JIRA_PROJECT_KEY).

    \b
    Examples:
        jico list
        jico list --project PROJ --limit 50
        jico list --jql "assignee = currentUser() AND status != Done"
    """
    try:
        query = ctx.settings.resolve_jql(jql, project)
        field_list = parse_field_list(fields)

        if ctx.dry_run:
            body: dict = {"jql": query, "maxResults": limit}
            if field_list:
                body["fields"] = field_list
            ctx.show_dry_run("POST", f"{API_PREFIX}/search/jql", body)
            return

        ctx.logger.debug("Searching issues", jql=query, limit=limit)
        result = ctx.jira.search_issues(query, max_results=limit, fields=field_list)
        ctx.output.print_data(result)

    except JicoError as e:
        ctx.output.print_error(f"Failed to list issues: {e}")
        raise click.Abort()


@click.command("view")
@click.argument("key")
@click.option("--subtasks", is_flag=True, help="Show only the issue's sub-tasks")
@click.option("--fields", help="Comma-separated fields to return")
@pass_context
def view_issue(ctx: JicoContext, key: str, subtasks: bool, fields: str | None) -> None:
    """Show a single issue.

    \b
    Examples:
        jico view PROJ-123
        jico view PROJ-123 --subtasks
        jico view PROJ-123 --fields summary,status
    """
    if subtasks and fields:
        raise click.UsageError("--subtasks and --fields cannot be combined")

    try:
        field_list = ["subtasks"] if subtasks else parse_field_list(fields)

        if ctx.dry_run:
            params = {"fields": ",".join(field_list)} if field_list else None
            url = httpx.URL(f"{API_PREFIX}/issue/{key}", params=params)
            ctx.show_dry_run("GET", str(url))
            return

        if subtasks:
            ctx.output.print_data(ctx.jira.get_issue_subtasks(key))
        else:
            ctx.output.print_data(ctx.jira.get_issue(key, fields=field_list))

    except JicoError as e:
        ctx.output.print_error(f"Failed to get issue: {e}")
        raise click.Abort()


@click.command("update")
@click.argument("key")
@click.option("--summary", help="New summary/title")
@click.option("--project", help="Move the issue to another project")
@issue_field_options
@pass_context
def update_issue(
    ctx: JicoContext,
    key: str,
    summary: str | None,
    project: str | None,
    description: str | None,
    issue_type: str | None,
    parent: str | None,
    labels: tuple[str, ...],
    priority: str | None,
    assignee: str | None,
) -> None:
    """Update issue fields.

    Only the given fields are sent; at least one is required.

    \b
    Examples:
        jico update PROJ-123 --summary "New title"
        jico update PROJ-123 --labels backend --priority Medium
        jico update PROJ-123 --parent PROJ-100
    """
    try:
        fields = build_update_fields(
            summary=summary,
            description=description,
            project=project,
            issue_type=issue_type,
            parent=parent,
            labels=parse_labels(labels) if labels else None,
            priority=priority,
            assignee=assignee,
        )

        if ctx.dry_run:
            ctx.show_dry_run("PUT", f"{API_PREFIX}/issue/{key}", {"fields": fields})
            return

        result = ctx.jira.update_issue(key, fields)
        ctx.logger.info("Updated issue", key=key, fields=",".join(fields))
        ctx.output.print_data(result)

    except JicoError as e:
        ctx.output.print_error(f"Failed to update issue: {e}")
        raise click.Abort()


@click.command("transition")
@click.argument("key")
@click.option("--to", "target", required=True, help="Target transition name (case-insensitive)")
@pass_context
def transition_issue(ctx: JicoContext, key: str, target: str) -> None:
    """Transition an issue to a new status.

    \b
    Examples:
        jico transition PROJ-123 --to "In Progress"
        jico transition PROJ-123 --to done
    """
    try:
        if ctx.dry_run:
            ctx.show_dry_run("POST", f"{API_PREFIX}/issue/{key}/transitions", transition=target)
            return

        result = ctx.jira.transition_issue_by_name(key, target)
        ctx.output.print_data(result)

    except JicoError as e:
        ctx.output.print_error(f"Failed to transition issue: {e}")
        raise click.Abort()


@click.command("link")
@click.argument("key")
@click.option("--to", "target", required=True, help="Target issue key")
@click.option(
    "--relation",
    type=click.Choice([r.value for r in LinkRelation]),
    default=LinkRelation.BLOCKS.value,
    show_default=True,
    help="Relation from KEY to the target issue",
)
@pass_context
def link_issues(ctx: JicoContext, key: str, target: str, relation: str) -> None:
    """Link two issues.

    "blocks" means KEY blocks the target; "blocked-by" means KEY is
    blocked by the target.

    \b
    Examples:
        jico link PROJ-1 --to PROJ-2
        jico link PROJ-1 --to PROJ-2 --relation blocked-by
    """
    try:
        payload = build_link_payload(key, target, LinkRelation(relation))

        if ctx.dry_run:
            ctx.show_dry_run("POST", f"{API_PREFIX}/issueLink", payload)
            return

        result = ctx.jira.link_issues(payload)
        ctx.logger.info("Linked issues", key=key, to=target, relation=relation)
        ctx.output.print_data(result)

    except JicoError as e:
        ctx.output.print_error(f"Failed to link issues: {e}")
        raise click.Abort()


COMMANDS = [
    create_issue,
    list_issues,
    view_issue,
    update_issue,
    transition_issue,
    link_issues,
]
