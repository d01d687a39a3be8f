"""``rpsn file`` -- upload, attach, detach and delete project files."""

from __future__ import annotations

from pathlib import Path

import typer

from rpsn.commands import confirm, data_of, done, open_client, show_records
from rpsn.exceptions import InvalidUsageError

file_app = typer.Typer(no_args_is_help=True)

PROJECT_OPT = typer.Option(..., "--project", "-p", help="Project ID.")


def _attach_model(value: str):  # noqa: ANN202
    from rpsn.api.endpoints.file import AttachModel

    try:
        return AttachModel(value)
    except ValueError:
        choices = ", ".join(m.value for m in AttachModel)
        raise InvalidUsageError(
            f"Unknown attach target '{value}'; expected one of: {choices}"
        ) from None


@file_app.command("upload")
def file_upload(
    ctx: typer.Context,
    path: Path = typer.Argument(
        help="File to upload.", exists=True, dir_okay=False, readable=True
    ),
    project_id: int = PROJECT_OPT,
) -> None:
    """Upload a file to a project (multipart/form-data)."""
    from rpsn.api.endpoints import file

    with open_client(ctx) as client:
        data = data_of(file.upload_file(client, project_id, path))
        done(client, f'Uploaded "{path.name}".')
    if data is not None:
        show_records(
            data.files,
            [("ID", "id"), ("Filename", "filename"), ("Size", "size"), ("Type", "type")],
            "Files",
        )


@file_app.command("attach")
def file_attach(
    ctx: typer.Context,
    file_id: int = typer.Argument(help="File ID."),
    target: str = typer.Argument(help="task, task_comment, note or note_comment."),
    target_id: int = typer.Argument(help="ID of the task, note or comment."),
    project_id: int = PROJECT_OPT,
) -> None:
    """Attach an uploaded file to a task, note or comment."""
    from rpsn.api.endpoints import file

    model = _attach_model(target)
    with open_client(ctx) as client:
        file.attach_file(client, project_id, model, target_id, file_id)
        done(client, f"File {file_id} attached to {model.value} {target_id}.")


@file_app.command("detach")
def file_detach(
    ctx: typer.Context,
    file_id: int = typer.Argument(help="File ID."),
    target: str = typer.Argument(help="task, task_comment, note or note_comment."),
    target_id: int = typer.Argument(help="ID of the task, note or comment."),
    project_id: int = PROJECT_OPT,
) -> None:
    """Detach a file from a task, note or comment."""
    from rpsn.api.endpoints import file

    model = _attach_model(target)
    with open_client(ctx) as client:
        file.detach_file(client, project_id, model, target_id, file_id)
        done(client, f"File {file_id} detached from {model.value} {target_id}.")


@file_app.command("delete")
def file_delete(
    ctx: typer.Context,
    file_id: int = typer.Argument(help="File ID."),
) -> None:
    """Delete a file. Asks for confirmation unless ``--yes``."""
    from rpsn.api.endpoints import file

    confirm(ctx, f"Delete file {file_id}?")
    with open_client(ctx) as client:
        file.delete_file(client, file_id)
        done(client, f"File {file_id} deleted.")
