"""``rpsn util`` -- version and connectivity check."""

from __future__ import annotations

import typer

from rpsn import __version__
from rpsn.commands import open_client
from rpsn.output import info, print_data, success

util_app = typer.Typer(no_args_is_help=True)


@util_app.command("version")
def util_version() -> None:
    """Print the rpsn version."""
    print_data(f"rpsn {__version__}")


@util_app.command("ping")
def util_ping(ctx: typer.Context) -> None:
    """Check that the API is reachable with the current credentials."""
    info("Pinging Repsona API...")
    with open_client(ctx) as client:
        client.get("me")
        if not client.is_dry_run:
            success("API is reachable.")
