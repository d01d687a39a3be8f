"""``rpsn me`` -- the authenticated user, their tasks and projects."""

from __future__ import annotations

from typing import Optional

import typer

from rpsn.commands import (
    ACTIVITY_COLUMNS,
    PROJECT_COLUMNS,
    TASK_COLUMNS,
    data_of,
    done,
    open_client,
    show_record,
    show_records,
)
from rpsn.exceptions import InvalidUsageError
from rpsn.output import print_data

me_app = typer.Typer(no_args_is_help=True)

USER_FIELDS = [
    ("ID", "id"),
    ("Name", "name"),
    ("Full name", "fullName"),
    ("Email", "email"),
    ("Role", "role"),
]


@me_app.command("show")
def me_show(ctx: typer.Context) -> None:
    """Show the authenticated user."""
    from rpsn.api.endpoints import me

    with open_client(ctx) as client:
        data = data_of(me.get_me(client))
    if data is not None:
        show_record(data.user, USER_FIELDS)


@me_app.command("update")
def me_update(
    ctx: typer.Context,
    name: Optional[str] = typer.Option(None, "--name", help="Short user name."),
    full_name: Optional[str] = typer.Option(None, "--full-name", help="Display name."),
    doing: Optional[str] = typer.Option(
        None, "--doing", help='Status text ("what are you doing").'
    ),
) -> None:
    """Update the authenticated user's profile."""
    from rpsn.api.endpoints import me

    request = me.MeUpdateRequest(name=name, full_name=full_name, what_are_you_doing=doing)
    if not request.to_body():
        raise InvalidUsageError("Nothing to update: pass --name, --full-name or --doing")
    with open_client(ctx) as client:
        data = data_of(me.update_me(client, request))
        done(client, "Profile updated.")
    if data is not None:
        show_record(data.user, USER_FIELDS)


@me_app.command("tasks")
def me_tasks(
    ctx: typer.Context,
    which: str = typer.Option(
        "all",
        "--filter",
        help="all, responsible, ball-holding or following.",
    ),
) -> None:
    """List tasks related to the authenticated user."""
    from rpsn.api.endpoints import me

    if which not in me.TASK_FILTERS:
        raise InvalidUsageError(
            f"Unknown filter '{which}'; expected one of: {', '.join(me.TASK_FILTERS)}"
        )
    with open_client(ctx) as client:
        data = data_of(me.get_my_tasks(client, which))
    if data is not None:
        show_records(data.tasks, TASK_COLUMNS, "Tasks")


@me_app.command("task-count")
def me_task_count(ctx: typer.Context) -> None:
    """Show how many tasks the authenticated user has."""
    from rpsn.api.endpoints import me

    with open_client(ctx) as client:
        data = data_of(me.get_my_task_count(client))
    if data is not None:
        print_data(str(data.count))


@me_app.command("projects")
def me_projects(ctx: typer.Context) -> None:
    """List projects the authenticated user belongs to."""
    from rpsn.api.endpoints import me

    with open_client(ctx) as client:
        data = data_of(me.get_my_projects(client))
    if data is not None:
        show_records(data.projects, PROJECT_COLUMNS, "Projects")


@me_app.command("activity")
def me_activity(ctx: typer.Context) -> None:
    """Show the authenticated user's recent activity."""
    from rpsn.api.endpoints import me

    with open_client(ctx) as client:
        data = data_of(me.get_my_activity(client))
    if data is not None:
        show_records(data.activity, ACTIVITY_COLUMNS, "Activity")
