"""``rpsn tag`` -- space tags."""

from __future__ import annotations

import typer

from rpsn.commands import data_of, open_client, show_records

tag_app = typer.Typer(no_args_is_help=True)


@tag_app.command("list")
def tag_list(ctx: typer.Context) -> None:
    """List every tag in the space."""
    from rpsn.api.endpoints import tag

    with open_client(ctx) as client:
        data = data_of(tag.list_tags(client))
    if data is not None:
        show_records(data.tags, [("ID", "id"), ("Name", "name"), ("Color", "color")], "Tags")
