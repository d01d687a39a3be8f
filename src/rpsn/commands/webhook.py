"""``rpsn webhook`` -- outgoing webhooks."""

from __future__ import annotations

from typing import Optional

import typer

from rpsn.commands import confirm, data_of, done, open_client, show_record, show_records
from rpsn.exceptions import InvalidUsageError

webhook_app = typer.Typer(no_args_is_help=True)

WEBHOOK_COLUMNS = [
    ("ID", "id"),
    ("Name", "name"),
    ("URL", "url"),
    ("Events", "events"),
    ("Active", "active"),
]


def _events(raw: Optional[str]) -> Optional[list[str]]:
    if raw is None:
        return None
    return [e.strip() for e in raw.split(",") if e.strip()]


@webhook_app.command("list")
def webhook_list(ctx: typer.Context) -> None:
    """List webhooks."""
    from rpsn.api.endpoints import webhook

    with open_client(ctx) as client:
        data = data_of(webhook.list_webhooks(client))
    if data is not None:
        show_records(data.webhooks, WEBHOOK_COLUMNS, "Webhooks")


@webhook_app.command("create")
def webhook_create(
    ctx: typer.Context,
    name: str = typer.Argument(help="Webhook name."),
    url: str = typer.Argument(help="Target URL."),
    events: str = typer.Option(..., "--events", help="Comma-separated event names."),
) -> None:
    """Create a webhook."""
    from rpsn.api.endpoints import webhook

    request = webhook.CreateWebhookRequest(name=name, url=url, events=_events(events) or [])
    with open_client(ctx) as client:
        data = data_of(webhook.create_webhook(client, request))
        done(client, f'Webhook "{name}" created.')
    if data is not None:
        show_record(data.webhook, WEBHOOK_COLUMNS)


@webhook_app.command("update")
def webhook_update(
    ctx: typer.Context,
    webhook_id: int = typer.Argument(help="Webhook ID."),
    name: Optional[str] = typer.Option(None, "--name"),
    url: Optional[str] = typer.Option(None, "--url"),
    events: Optional[str] = typer.Option(None, "--events", help="Comma-separated event names."),
) -> None:
    """Update a webhook."""
    from rpsn.api.endpoints import webhook

    request = webhook.UpdateWebhookRequest(name=name, url=url, events=_events(events))
    if not request.to_body():
        raise InvalidUsageError("Nothing to update: pass --name, --url or --events")
    with open_client(ctx) as client:
        data = data_of(webhook.update_webhook(client, webhook_id, request))
        done(client, f"Webhook {webhook_id} updated.")
    if data is not None:
        show_record(data.webhook, WEBHOOK_COLUMNS)


@webhook_app.command("delete")
def webhook_delete(
    ctx: typer.Context,
    webhook_id: int = typer.Argument(help="Webhook ID."),
) -> None:
    """Delete a webhook. Asks for confirmation unless ``--yes``."""
    from rpsn.api.endpoints import webhook

    confirm(ctx, f"Delete webhook {webhook_id}?")
    with open_client(ctx) as client:
        webhook.delete_webhook(client, webhook_id)
        done(client, f"Webhook {webhook_id} deleted.")
