"""``rpsn inbox`` -- notifications."""

from __future__ import annotations

import typer

from rpsn.commands import data_of, done, open_client, show_records
from rpsn.output import print_data

inbox_app = typer.Typer(no_args_is_help=True)


@inbox_app.command("list")
def inbox_list(ctx: typer.Context) -> None:
    """List inbox notifications."""
    from rpsn.api.endpoints import inbox

    with open_client(ctx) as client:
        data = data_of(inbox.list_inbox(client))
    if data is not None:
        show_records(
            data.inbox,
            [
                ("ID", "id"),
                ("Task", "task.name"),
                ("Note", "note.name"),
                ("Comment", "comment.comment"),
                ("Read at", "readAt"),
            ],
            "Inbox",
        )


@inbox_app.command("read")
def inbox_read(
    ctx: typer.Context,
    inbox_id: int = typer.Argument(help="Notification ID."),
    unread: bool = typer.Option(False, "--unread", help="Mark as unread instead."),
) -> None:
    """Mark one notification as read (or unread)."""
    from rpsn.api.endpoints import inbox

    with open_client(ctx) as client:
        inbox.mark_read(client, inbox_id, read=not unread)
        done(client, f"Notification {inbox_id} marked {'unread' if unread else 'read'}.")


@inbox_app.command("read-all")
def inbox_read_all(ctx: typer.Context) -> None:
    """Mark every notification as read."""
    from rpsn.api.endpoints import inbox

    with open_client(ctx) as client:
        inbox.mark_all_read(client)
        done(client, "All notifications marked read.")


@inbox_app.command("unread")
def inbox_unread(ctx: typer.Context) -> None:
    """Print the number of unread notifications."""
    from rpsn.api.endpoints import inbox

    with open_client(ctx) as client:
        data = data_of(inbox.unread_count(client))
    if data is not None:
        print_data(str(data.count))
