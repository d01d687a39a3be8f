"""``rpsn project`` -- projects, members, statuses and milestones."""

from __future__ import annotations

from typing import Optional

import typer

from rpsn.commands import (
    ACTIVITY_COLUMNS,
    PROJECT_COLUMNS,
    USER_COLUMNS,
    confirm,
    data_of,
    done,
    open_client,
    show_record,
    show_records,
)
from rpsn.exceptions import InvalidUsageError

project_app = typer.Typer(no_args_is_help=True)

PROJECT_FIELDS = [
    ("ID", "id"),
    ("Name", "name"),
    ("Full name", "fullName"),
    ("Purpose", "purpose"),
    ("Public", "isPublic"),
    ("Closed", "isClosed"),
]


@project_app.command("list")
def project_list(ctx: typer.Context) -> None:
    """List all projects in the space.

    Example::

        rpsn project list
        rpsn --json project list
    """
    from rpsn.api.endpoints import project

    with open_client(ctx) as client:
        data = data_of(project.list_projects(client))
    if data is not None:
        show_records(data.projects, PROJECT_COLUMNS, "Projects")


@project_app.command("get")
def project_get(
    ctx: typer.Context,
    project_id: int = typer.Argument(help="Project ID."),
) -> None:
    """Show one project."""
    from rpsn.api.endpoints import project

    with open_client(ctx) as client:
        data = data_of(project.get_project(client, project_id))
    if data is not None:
        show_record(data.project, PROJECT_FIELDS)


@project_app.command("create")
def project_create(
    ctx: typer.Context,
    name: str = typer.Argument(help="Project key name."),
    full_name: Optional[str] = typer.Option(None, "--full-name", help="Display name."),
    purpose: Optional[str] = typer.Option(None, "--purpose", help="Project purpose."),
) -> None:
    """Create a project."""
    from rpsn.api.endpoints import project

    request = project.CreateProjectRequest(name=name, full_name=full_name, purpose=purpose)
    with open_client(ctx) as client:
        data = data_of(project.create_project(client, request))
        done(client, f'Project "{name}" created.')
    if data is not None:
        show_record(data.project, PROJECT_FIELDS)


@project_app.command("update")
def project_update(
    ctx: typer.Context,
    project_id: int = typer.Argument(help="Project ID."),
    name: Optional[str] = typer.Option(None, "--name", help="New key name."),
    full_name: Optional[str] = typer.Option(None, "--full-name", help="New display name."),
    purpose: Optional[str] = typer.Option(None, "--purpose", help="New purpose."),
) -> None:
    """Update a project's name or purpose."""
    from rpsn.api.endpoints import project

    request = project.UpdateProjectRequest(name=name, full_name=full_name, purpose=purpose)
    if not request.to_body():
        raise InvalidUsageError("Nothing to update: pass --name, --full-name or --purpose")
    with open_client(ctx) as client:
        data = data_of(project.update_project(client, project_id, request))
        done(client, f"Project {project_id} updated.")
    if data is not None:
        show_record(data.project, PROJECT_FIELDS)


@project_app.command("members")
def project_members(
    ctx: typer.Context,
    project_id: int = typer.Argument(help="Project ID."),
) -> None:
    """List a project's members."""
    from rpsn.api.endpoints import project

    with open_client(ctx) as client:
        data = data_of(project.list_members(client, project_id))
    if data is not None:
        show_records(data.users, USER_COLUMNS, "Members")


@project_app.command("add-member")
def project_add_member(
    ctx: typer.Context,
    project_id: int = typer.Argument(help="Project ID."),
    user_id: int = typer.Argument(help="User ID to add."),
) -> None:
    """Add a user to a project."""
    from rpsn.api.endpoints import project

    with open_client(ctx) as client:
        project.add_member(client, project_id, user_id)
        done(client, f"User {user_id} added to project {project_id}.")


@project_app.command("remove-member")
def project_remove_member(
    ctx: typer.Context,
    project_id: int = typer.Argument(help="Project ID."),
    user_id: int = typer.Argument(help="User ID to remove."),
) -> None:
    """Remove a user from a project."""
    from rpsn.api.endpoints import project

    confirm(ctx, f"Remove user {user_id} from project {project_id}?")
    with open_client(ctx) as client:
        project.remove_member(client, project_id, user_id)
        done(client, f"User {user_id} removed from project {project_id}.")


@project_app.command("activity")
def project_activity(
    ctx: typer.Context,
    project_id: int = typer.Argument(help="Project ID."),
) -> None:
    """Show a project's recent activity."""
    from rpsn.api.endpoints import project

    with open_client(ctx) as client:
        data = data_of(project.get_activity(client, project_id))
    if data is not None:
        show_records(data.activity, ACTIVITY_COLUMNS, "Activity")


@project_app.command("statuses")
def project_statuses(
    ctx: typer.Context,
    project_id: int = typer.Argument(help="Project ID."),
) -> None:
    """List a project's task statuses."""
    from rpsn.api.endpoints import project

    with open_client(ctx) as client:
        data = data_of(project.list_statuses(client, project_id))
    if data is not None:
        show_records(
            data.statuses,
            [("ID", "id"), ("Name", "name"), ("Closed", "isClosed"), ("Color", "color")],
            "Statuses",
        )


@project_app.command("milestones")
def project_milestones(
    ctx: typer.Context,
    project_id: int = typer.Argument(help="Project ID."),
) -> None:
    """List a project's milestones."""
    from rpsn.api.endpoints import project

    with open_client(ctx) as client:
        data = data_of(project.list_milestones(client, project_id))
    if data is not None:
        show_records(
            data.milestones,
            [("ID", "id"), ("Name", "name"), ("Due", "dueDate"), ("Closed", "isClosed")],
            "Milestones",
        )
