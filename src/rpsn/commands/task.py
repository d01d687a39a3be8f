"""``rpsn task`` -- tasks within a project."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import typer

from rpsn.commands import (
    ACTIVITY_COLUMNS,
    COMMENT_COLUMNS,
    HISTORY_COLUMNS,
    TASK_COLUMNS,
    confirm,
    data_of,
    done,
    open_client,
    show_record,
    show_records,
    task_generator,
)
from rpsn.exceptions import ApiError, InvalidUsageError
from rpsn.exit_codes import EXIT_API_ERROR
from rpsn.output import info, success, warning

if TYPE_CHECKING:
    from rpsn.ai import GeneratedTask

task_app = typer.Typer(no_args_is_help=True)

TASK_FIELDS = [
    ("ID", "id"),
    ("Name", "name"),
    ("Status", "status.name"),
    ("Priority", "priority"),
    ("Responsible", "responsibleUser.name"),
    ("Ball holder", "ballHoldingUser.name"),
    ("Milestone", "milestone.name"),
    ("Tags", "tags"),
    ("Parent", "parent"),
    ("Description", "description"),
]

PROJECT_OPT = typer.Option(..., "--project", "-p", help="Project ID.")


@task_app.command("list")
def task_list(ctx: typer.Context, project_id: int = PROJECT_OPT) -> None:
    """List tasks in a project."""
    from rpsn.api.endpoints import task

    with open_client(ctx) as client:
        data = data_of(task.list_tasks(client, project_id))
    if data is not None:
        show_records(data.tasks, TASK_COLUMNS, "Tasks")


@task_app.command("get")
def task_get(
    ctx: typer.Context,
    task_id: int = typer.Argument(help="Task ID."),
    project_id: int = PROJECT_OPT,
) -> None:
    """Show one task."""
    from rpsn.api.endpoints import task

    with open_client(ctx) as client:
        data = data_of(task.get_task(client, project_id, task_id))
    if data is not None:
        show_record(data.task, TASK_FIELDS)


@task_app.command("create")
def task_create(
    ctx: typer.Context,
    name: str = typer.Argument(help="Task title."),
    project_id: int = PROJECT_OPT,
    description: Optional[str] = typer.Option(None, "--description", "-d"),
    status: Optional[int] = typer.Option(None, "--status", help="Status ID."),
    priority: Optional[int] = typer.Option(None, "--priority"),
    due_date: Optional[int] = typer.Option(None, "--due", help="Due date (epoch ms)."),
    start_date: Optional[int] = typer.Option(None, "--start", help="Start date (epoch ms)."),
    responsible: Optional[int] = typer.Option(None, "--responsible", help="User ID."),
    ball_holder: Optional[int] = typer.Option(None, "--ball-holder", help="User ID."),
    parent: Optional[int] = typer.Option(None, "--parent", help="Parent task ID."),
    milestone: Optional[int] = typer.Option(None, "--milestone", help="Milestone ID."),
    tags: Optional[str] = typer.Option(None, "--tags", help='Tag IDs, e.g. "1,2".'),
    bottom: bool = typer.Option(False, "--bottom", help="Add to the bottom of the list."),
) -> None:
    """Create a task.

    Example::

        rpsn task create "Write release notes" -p 12 --tags 3,7 --priority 2
    """
    from rpsn.api.endpoints import task
    from rpsn.api.endpoints.tag import parse_tags

    request = task.CreateTaskRequest(
        name=name,
        description=description,
        status=status,
        priority=priority,
        due_date=due_date,
        start_date=start_date,
        responsible_user=responsible,
        ball_holding_user=ball_holder,
        parent=parent,
        milestone=milestone,
        tags=parse_tags(tags),
        add_to_bottom=bottom or None,
    )
    with open_client(ctx) as client:
        data = data_of(task.create_task(client, project_id, request))
        done(client, "Task created.")
    if data is not None:
        show_record(data.task, TASK_FIELDS)


@task_app.command("update")
def task_update(
    ctx: typer.Context,
    task_id: int = typer.Argument(help="Task ID."),
    project_id: int = PROJECT_OPT,
    name: Optional[str] = typer.Option(None, "--name"),
    description: Optional[str] = typer.Option(None, "--description", "-d"),
    status: Optional[int] = typer.Option(None, "--status", help="Status ID."),
    priority: Optional[int] = typer.Option(None, "--priority"),
    due_date: Optional[int] = typer.Option(None, "--due", help="Due date (epoch ms)."),
    start_date: Optional[int] = typer.Option(None, "--start", help="Start date (epoch ms)."),
    responsible: Optional[int] = typer.Option(None, "--responsible", help="User ID."),
    ball_holder: Optional[int] = typer.Option(None, "--ball-holder", help="User ID."),
    parent: Optional[int] = typer.Option(None, "--parent", help="Parent task ID."),
    milestone: Optional[int] = typer.Option(None, "--milestone", help="Milestone ID."),
    tags: Optional[str] = typer.Option(None, "--tags", help='Tag IDs, e.g. "1,2".'),
) -> None:
    """Update fields of a task. Only the options given are sent."""
    from rpsn.api.endpoints import task
    from rpsn.api.endpoints.tag import parse_tags

    request = task.UpdateTaskRequest(
        name=name,
        description=description,
        status=status,
        priority=priority,
        due_date=due_date,
        start_date=start_date,
        responsible_user=responsible,
        ball_holding_user=ball_holder,
        parent=parent,
        milestone=milestone,
        tags=parse_tags(tags),
    )
    if not request.to_body():
        raise InvalidUsageError("Nothing to update: pass at least one field option")
    with open_client(ctx) as client:
        data = data_of(task.update_task(client, project_id, task_id, request))
        done(client, f"Task {task_id} updated.")
    if data is not None:
        show_record(data.task, TASK_FIELDS)


@task_app.command("delete")
def task_delete(
    ctx: typer.Context,
    task_id: int = typer.Argument(help="Task ID."),
    project_id: int = PROJECT_OPT,
) -> None:
    """Delete a task. Asks for confirmation unless ``--yes``."""
    from rpsn.api.endpoints import task

    confirm(ctx, f"Delete task {task_id}?")
    with open_client(ctx) as client:
        task.delete_task(client, project_id, task_id)
        done(client, f"Task {task_id} deleted.")


def _move_to_status(ctx: typer.Context, project_id: int, task_id: int, closed: bool) -> None:
    """Set the task to the project's first closed (or first open) status."""
    from rpsn.api.endpoints import project, task

    with open_client(ctx) as client:
        statuses = data_of(project.list_statuses(client, project_id))
        if statuses is None:
            info("Status lookup not sent; the status change depends on its result.")
            return
        target = task.pick_status(statuses.statuses, closed)
        if target is None:
            kind = "closed" if closed else "open"
            raise InvalidUsageError(f"Project {project_id} has no {kind} status")
        data = data_of(task.set_status(client, project_id, task_id, target.id))
        done(client, f'Task {task_id} moved to "{target.name}".')
    if data is not None:
        show_record(data.task, TASK_FIELDS)


@task_app.command("done")
def task_done(
    ctx: typer.Context,
    task_id: int = typer.Argument(help="Task ID."),
    project_id: int = PROJECT_OPT,
) -> None:
    """Mark a task done (first closed status of its project)."""
    _move_to_status(ctx, project_id, task_id, closed=True)


@task_app.command("reopen")
def task_reopen(
    ctx: typer.Context,
    task_id: int = typer.Argument(help="Task ID."),
    project_id: int = PROJECT_OPT,
) -> None:
    """Reopen a task (first open status of its project)."""
    _move_to_status(ctx, project_id, task_id, closed=False)


@task_app.command("children")
def task_children(
    ctx: typer.Context,
    task_id: int = typer.Argument(help="Parent task ID."),
    project_id: int = PROJECT_OPT,
) -> None:
    """List subtasks."""
    from rpsn.api.endpoints import task

    with open_client(ctx) as client:
        data = data_of(task.get_children(client, project_id, task_id))
    if data is not None:
        show_records(data.tasks, TASK_COLUMNS, "Subtasks")


@task_app.command("comments")
def task_comments(
    ctx: typer.Context,
    task_id: int = typer.Argument(help="Task ID."),
    project_id: int = PROJECT_OPT,
) -> None:
    """List comments on a task."""
    from rpsn.api.endpoints import task

    with open_client(ctx) as client:
        data = data_of(task.list_comments(client, project_id, task_id))
    if data is not None:
        show_records(data.comments, COMMENT_COLUMNS, "Comments")


@task_app.command("comment")
def task_comment(
    ctx: typer.Context,
    task_id: int = typer.Argument(help="Task ID."),
    text: str = typer.Argument(help="Comment text."),
    project_id: int = PROJECT_OPT,
    reply_to: Optional[int] = typer.Option(None, "--reply-to", help="Comment ID to reply to."),
) -> None:
    """Add a comment to a task."""
    from rpsn.api.endpoints import task

    with open_client(ctx) as client:
        data = data_of(task.add_comment(client, project_id, task_id, text, reply_to))
        done(client, "Comment added.")
    if data is not None:
        show_record(data.comment, [("ID", "id"), ("Comment", "comment")])


@task_app.command("activity")
def task_activity(
    ctx: typer.Context,
    task_id: int = typer.Argument(help="Task ID."),
    project_id: int = PROJECT_OPT,
) -> None:
    """Show a task's activity."""
    from rpsn.api.endpoints import task

    with open_client(ctx) as client:
        data = data_of(task.get_activity(client, project_id, task_id))
    if data is not None:
        show_records(data.activity, ACTIVITY_COLUMNS, "Activity")


@task_app.command("history")
def task_history(
    ctx: typer.Context,
    task_id: int = typer.Argument(help="Task ID."),
    project_id: int = PROJECT_OPT,
) -> None:
    """Show a task's change history."""
    from rpsn.api.endpoints import task

    with open_client(ctx) as client:
        data = data_of(task.get_history(client, project_id, task_id))
    if data is not None:
        show_records(data.history, HISTORY_COLUMNS, "History")


@task_app.command("generate")
def task_generate(
    ctx: typer.Context,
    project_id: int = PROJECT_OPT,
    goal: str = typer.Option(..., "--goal", "-g", help="What the tasks should achieve."),
    count: int = typer.Option(5, "--count", "-n", min=1, max=20, help="Number of tasks."),
    model: Optional[str] = typer.Option(None, "--model", help="Anthropic model ID."),
    interactive: bool = typer.Option(
        False, "--interactive", "-i", help="Confirm each generated task."
    ),
    status: Optional[int] = typer.Option(None, "--status", help="Status ID for new tasks."),
    assignee: Optional[int] = typer.Option(None, "--assignee", help="Responsible user ID."),
) -> None:
    """Generate tasks for a goal with an Anthropic model and create them.

    The tasks are previewed on stderr and created after one confirmation
    (skipped by ``--yes``), or picked one by one with ``--interactive``.
    A task the API rejects is reported and the rest are still created;
    the command then exits with the API error code.

    Example::

        rpsn task generate -p 12 --goal "Launch the beta" --count 4
    """
    from rpsn.api.endpoints import task

    generator = task_generator(ctx, model)
    with open_client(ctx) as client:
        info(f'Generating {count} tasks for goal: "{goal}"')
        generated = generator.generate(goal, count)
        if not generated:
            warning("No tasks were generated.")
            return
        _preview(generated)
        if interactive:
            generated = _pick(generated)
        else:
            confirm(ctx, f"Create these {len(generated)} tasks in project {project_id}?")

        created = []
        failed = 0
        for item in generated:
            request = task.CreateTaskRequest(
                name=item.title,
                description=item.description,
                status=status,
                priority=item.priority,
                responsible_user=assignee,
            )
            try:
                data = data_of(task.create_task(client, project_id, request))
            except ApiError as exc:
                warning(f'Failed to create "{item.title}": {exc}')
                failed += 1
                continue
            if data is not None:
                created.append(data.task)
                info(f'Created "{item.title}" (ID: {data.task.id})')

    if created:
        success(f"Created {len(created)} task(s).")
        show_records(created, TASK_COLUMNS, "Created tasks")
    if failed:
        warning(f"Failed to create {failed} task(s).")
        raise typer.Exit(code=EXIT_API_ERROR)


def _preview(tasks: list[GeneratedTask]) -> None:
    info("Preview of tasks to be created:")
    for number, item in enumerate(tasks, 1):
        priority = f" [Priority: {item.priority}]" if item.priority is not None else ""
        info(f"  {number}. {item.title}{priority}")
        lines = (item.description or "").splitlines()
        for line in lines[:2]:
            info(f"       {line}")
        if len(lines) > 2:
            info("       ...")


def _pick(tasks: list[GeneratedTask]) -> list[GeneratedTask]:
    """Ask about each task: yes (default), no/skip, or quit."""
    picked: list[GeneratedTask] = []
    for number, item in enumerate(tasks, 1):
        info(f"Generated task {number}/{len(tasks)}: {item.title}")
        if item.description:
            info(f"  Description: {item.description}")
        if item.priority is not None:
            info(f"  Priority: {item.priority}")
        answer = typer.prompt(
            "  Create this task? [Y/n/s/q]", default="y", show_default=False
        ).strip().lower()
        if answer in ("y", "yes"):
            picked.append(item)
        elif answer in ("q", "quit"):
            info("Cancelled.")
            break
        else:
            info("  Skipped.")
    return picked
