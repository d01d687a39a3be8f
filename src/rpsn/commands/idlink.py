"""``rpsn idlink`` -- ID link patterns."""

from __future__ import annotations

import typer

from rpsn.commands import confirm, data_of, done, open_client, show_record, show_records

idlink_app = typer.Typer(no_args_is_help=True)

IDLINK_COLUMNS = [("ID", "id"), ("Name", "name"), ("URL", "url")]


@idlink_app.command("list")
def idlink_list(ctx: typer.Context) -> None:
    """List ID links."""
    from rpsn.api.endpoints import idlink

    with open_client(ctx) as client:
        data = data_of(idlink.list_idlinks(client))
    if data is not None:
        show_records(data.id_links, IDLINK_COLUMNS, "ID links")


@idlink_app.command("create")
def idlink_create(
    ctx: typer.Context,
    name: str = typer.Argument(help="Link name (the prefix matched in text)."),
    url: str = typer.Argument(help="URL template."),
) -> None:
    """Create an ID link."""
    from rpsn.api.endpoints import idlink

    with open_client(ctx) as client:
        data = data_of(
            idlink.create_idlink(client, idlink.CreateIdLinkRequest(name=name, url=url))
        )
        done(client, f'ID link "{name}" created.')
    if data is not None:
        show_record(data.id_link, IDLINK_COLUMNS)


@idlink_app.command("delete")
def idlink_delete(
    ctx: typer.Context,
    idlink_id: int = typer.Argument(help="ID link ID."),
) -> None:
    """Delete an ID link. Asks for confirmation unless ``--yes``."""
    from rpsn.api.endpoints import idlink

    confirm(ctx, f"Delete ID link {idlink_id}?")
    with open_client(ctx) as client:
        idlink.delete_idlink(client, idlink_id)
        done(client, f"ID link {idlink_id} deleted.")
