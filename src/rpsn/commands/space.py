"""``rpsn space`` -- the current space."""

from __future__ import annotations

import typer

from rpsn.commands import data_of, done, open_client, show_record

space_app = typer.Typer(no_args_is_help=True)


@space_app.command("show")
def space_show(ctx: typer.Context) -> None:
    """Show the current space."""
    from rpsn.api.endpoints import space

    with open_client(ctx) as client:
        data = data_of(space.get_space(client))
    if data is not None:
        show_record(
            data.space,
            [
                ("ID", "id"),
                ("Name", "name"),
                ("Full name", "fullName"),
                ("Status", "status"),
                ("Information", "information"),
            ],
        )


@space_app.command("invite")
def space_invite(
    ctx: typer.Context,
    email: str = typer.Argument(help="E-mail address to invite."),
    role: str = typer.Option("member", "--role", help="Role for the new user."),
) -> None:
    """Invite someone to the space by e-mail."""
    from rpsn.api.endpoints import space

    with open_client(ctx) as client:
        space.invite(client, space.InviteRequest(email=email, role=role))
        done(client, f"Invitation sent to {email}.")
