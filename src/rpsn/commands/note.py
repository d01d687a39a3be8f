"""``rpsn note`` -- notes within a project."""

from __future__ import annotations

from typing import Optional

import typer

from rpsn.commands import (
    ACTIVITY_COLUMNS,
    COMMENT_COLUMNS,
    HISTORY_COLUMNS,
    NOTE_COLUMNS,
    confirm,
    data_of,
    done,
    open_client,
    show_record,
    show_records,
)
from rpsn.exceptions import InvalidUsageError

note_app = typer.Typer(no_args_is_help=True)

NOTE_FIELDS = [
    ("ID", "id"),
    ("Name", "name"),
    ("Parent", "parent"),
    ("Tags", "tags"),
    ("Description", "description"),
]

PROJECT_OPT = typer.Option(..., "--project", "-p", help="Project ID.")


@note_app.command("list")
def note_list(ctx: typer.Context, project_id: int = PROJECT_OPT) -> None:
    """List notes in a project."""
    from rpsn.api.endpoints import note

    with open_client(ctx) as client:
        data = data_of(note.list_notes(client, project_id))
    if data is not None:
        show_records(data.notes, NOTE_COLUMNS, "Notes")


@note_app.command("get")
def note_get(
    ctx: typer.Context,
    note_id: int = typer.Argument(help="Note ID."),
    project_id: int = PROJECT_OPT,
) -> None:
    """Show one note."""
    from rpsn.api.endpoints import note

    with open_client(ctx) as client:
        data = data_of(note.get_note(client, project_id, note_id))
    if data is not None:
        show_record(data.note, NOTE_FIELDS)


@note_app.command("create")
def note_create(
    ctx: typer.Context,
    name: str = typer.Argument(help="Note title."),
    project_id: int = PROJECT_OPT,
    description: Optional[str] = typer.Option(None, "--description", "-d"),
    parent: Optional[int] = typer.Option(None, "--parent", help="Parent note ID."),
    tags: Optional[str] = typer.Option(None, "--tags", help='Tag IDs, e.g. "1,2".'),
    bottom: bool = typer.Option(False, "--bottom", help="Add to the bottom of the list."),
) -> None:
    """Create a note."""
    from rpsn.api.endpoints import note
    from rpsn.api.endpoints.tag import parse_tags

    request = note.CreateNoteRequest(
        name=name,
        description=description,
        parent=parent,
        tags=parse_tags(tags),
        add_to_bottom=bottom or None,
    )
    with open_client(ctx) as client:
        data = data_of(note.create_note(client, project_id, request))
        done(client, "Note created.")
    if data is not None:
        show_record(data.note, NOTE_FIELDS)


@note_app.command("update")
def note_update(
    ctx: typer.Context,
    note_id: int = typer.Argument(help="Note ID."),
    project_id: int = PROJECT_OPT,
    name: Optional[str] = typer.Option(None, "--name"),
    description: Optional[str] = typer.Option(None, "--description", "-d"),
    tags: Optional[str] = typer.Option(None, "--tags", help='Tag IDs, e.g. "1,2".'),
) -> None:
    """Update a note."""
    from rpsn.api.endpoints import note
    from rpsn.api.endpoints.tag import parse_tags

    request = note.UpdateNoteRequest(name=name, description=description, tags=parse_tags(tags))
    if not request.to_body():
        raise InvalidUsageError("Nothing to update: pass --name, --description or --tags")
    with open_client(ctx) as client:
        data = data_of(note.update_note(client, project_id, note_id, request))
        done(client, f"Note {note_id} updated.")
    if data is not None:
        show_record(data.note, NOTE_FIELDS)


@note_app.command("delete")
def note_delete(
    ctx: typer.Context,
    note_id: int = typer.Argument(help="Note ID."),
    project_id: int = PROJECT_OPT,
) -> None:
    """Delete a note. Asks for confirmation unless ``--yes``."""
    from rpsn.api.endpoints import note

    confirm(ctx, f"Delete note {note_id}?")
    with open_client(ctx) as client:
        note.delete_note(client, project_id, note_id)
        done(client, f"Note {note_id} deleted.")


@note_app.command("children")
def note_children(
    ctx: typer.Context,
    note_id: int = typer.Argument(help="Parent note ID."),
    project_id: int = PROJECT_OPT,
) -> None:
    """List child notes."""
    from rpsn.api.endpoints import note

    with open_client(ctx) as client:
        data = data_of(note.get_children(client, project_id, note_id))
    if data is not None:
        show_records(data.notes, NOTE_COLUMNS, "Child notes")


@note_app.command("comments")
def note_comments(
    ctx: typer.Context,
    note_id: int = typer.Argument(help="Note ID."),
    project_id: int = PROJECT_OPT,
) -> None:
    """List comments on a note."""
    from rpsn.api.endpoints import note

    with open_client(ctx) as client:
        data = data_of(note.list_comments(client, project_id, note_id))
    if data is not None:
        show_records(data.comments, COMMENT_COLUMNS, "Comments")


@note_app.command("comment")
def note_comment(
    ctx: typer.Context,
    note_id: int = typer.Argument(help="Note ID."),
    text: str = typer.Argument(help="Comment text."),
    project_id: int = PROJECT_OPT,
) -> None:
    """Add a comment to a note."""
    from rpsn.api.endpoints import note

    with open_client(ctx) as client:
        data = data_of(note.add_comment(client, project_id, note_id, text))
        done(client, "Comment added.")
    if data is not None:
        show_record(data.comment, [("ID", "id"), ("Comment", "comment")])


@note_app.command("edit-comment")
def note_edit_comment(
    ctx: typer.Context,
    note_id: int = typer.Argument(help="Note ID."),
    comment_id: int = typer.Argument(help="Comment ID."),
    text: str = typer.Argument(help="New comment text."),
    project_id: int = PROJECT_OPT,
) -> None:
    """Replace the text of a note comment."""
    from rpsn.api.endpoints import note

    with open_client(ctx) as client:
        note.update_comment(client, project_id, note_id, comment_id, text)
        done(client, f"Comment {comment_id} updated.")


@note_app.command("delete-comment")
def note_delete_comment(
    ctx: typer.Context,
    note_id: int = typer.Argument(help="Note ID."),
    comment_id: int = typer.Argument(help="Comment ID."),
    project_id: int = PROJECT_OPT,
) -> None:
    """Delete a note comment. Asks for confirmation unless ``--yes``."""
    from rpsn.api.endpoints import note

    confirm(ctx, f"Delete comment {comment_id}?")
    with open_client(ctx) as client:
        note.delete_comment(client, project_id, note_id, comment_id)
        done(client, f"Comment {comment_id} deleted.")


@note_app.command("activity")
def note_activity(
    ctx: typer.Context,
    note_id: int = typer.Argument(help="Note ID."),
    project_id: int = PROJECT_OPT,
) -> None:
    """Show a note's activity."""
    from rpsn.api.endpoints import note

    with open_client(ctx) as client:
        data = data_of(note.get_activity(client, project_id, note_id))
    if data is not None:
        show_records(data.activity, ACTIVITY_COLUMNS, "Activity")


@note_app.command("history")
def note_history(
    ctx: typer.Context,
    note_id: int = typer.Argument(help="Note ID."),
    project_id: int = PROJECT_OPT,
) -> None:
    """Show a note's change history."""
    from rpsn.api.endpoints import note

    with open_client(ctx) as client:
        data = data_of(note.get_history(client, project_id, note_id))
    if data is not None:
        show_records(data.history, HISTORY_COLUMNS, "History")
