"""Config commands -- read-only view of the profile file.

rpsn never writes ``config.toml``; create it by hand (mode ``0600``)::

    current_profile = "work"

    [profiles.work]
    space_id = "acme"
    api_token = "..."

    [ai]
    anthropic_api_key = "sk-ant-..."
"""

from __future__ import annotations

import typer

from rpsn.output import info, print_document

config_app = typer.Typer(no_args_is_help=True)


@config_app.command("show")
def config_show(ctx: typer.Context) -> None:
    """Show profiles and which credential source wins.

    Tokens are masked to their first 8 characters.

    Example::

        rpsn config show
        rpsn --json config show
    """
    from rpsn.config import (
        ENV_ANTHROPIC_KEY,
        ENV_SPACE,
        ENV_TOKEN,
        get_config_path,
        load_config,
        mask_token,
    )

    obj = ctx.find_root().obj or {}
    env = obj.get("env", {})
    config = load_config()

    info(f"Config file: {get_config_path()}")
    print_document(
        {
            "current_profile": config.current_profile,
            "profiles": {
                name: {
                    "space_id": profile.space_id,
                    "api_token": mask_token(profile.api_token),
                }
                for name, profile in config.profiles.items()
            },
            "ai": {
                "anthropic_api_key": mask_token(config.ai.anthropic_api_key),
                "model": config.ai.model,
            },
            "environment": {
                ENV_SPACE: env.get(ENV_SPACE) or "(not set)",
                ENV_TOKEN: mask_token(env.get(ENV_TOKEN, "")),
                ENV_ANTHROPIC_KEY: mask_token(env.get(ENV_ANTHROPIC_KEY, "")),
            },
        }
    )


@config_app.command("whoami")
def config_whoami(ctx: typer.Context) -> None:
    """Resolve credentials and show the user they belong to."""
    from rpsn.api.endpoints import me
    from rpsn.commands import data_of, open_client, show_record
    from rpsn.commands.me import USER_FIELDS

    with open_client(ctx) as client:
        data = data_of(me.get_me(client))
    if data is not None:
        show_record(data.user, USER_FIELDS)
