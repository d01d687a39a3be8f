"""``/webhook`` -- outgoing webhooks."""

from __future__ import annotations

from typing import Optional

from rpsn.api.types import ApiRequest, ApiResponse, WebhookData, WebhooksData
from rpsn.client import RepsonaClient


class CreateWebhookRequest(ApiRequest):
    name: str
    url: str
    events: list[str]


class UpdateWebhookRequest(ApiRequest):
    name: Optional[str] = None
    url: Optional[str] = None
    events: Optional[list[str]] = None


def list_webhooks(client: RepsonaClient) -> Optional[ApiResponse[WebhooksData]]:
    return client.get("webhook", model=ApiResponse[WebhooksData])


def create_webhook(
    client: RepsonaClient, request: CreateWebhookRequest
) -> Optional[ApiResponse[WebhookData]]:
    return client.post("webhook", request.to_body(), model=ApiResponse[WebhookData])


def update_webhook(
    client: RepsonaClient, webhook_id: int, request: UpdateWebhookRequest
) -> Optional[ApiResponse[WebhookData]]:
    return client.patch(
        f"webhook/{webhook_id}", request.to_body(), model=ApiResponse[WebhookData]
    )


def delete_webhook(client: RepsonaClient, webhook_id: int) -> None:
    client.delete(f"webhook/{webhook_id}")
