"""``/idlink`` -- ID link patterns that turn ``#123``-style text into URLs."""

from __future__ import annotations

from typing import Optional

from rpsn.api.types import ApiRequest, ApiResponse, IdLinkData, IdLinksData
from rpsn.client import RepsonaClient


class CreateIdLinkRequest(ApiRequest):
    name: str
    url: str


def list_idlinks(client: RepsonaClient) -> Optional[ApiResponse[IdLinksData]]:
    return client.get("idlink", model=ApiResponse[IdLinksData])


def create_idlink(
    client: RepsonaClient, request: CreateIdLinkRequest
) -> Optional[ApiResponse[IdLinkData]]:
    return client.post("idlink", request.to_body(), model=ApiResponse[IdLinkData])


def delete_idlink(client: RepsonaClient, idlink_id: int) -> None:
    client.delete(f"idlink/{idlink_id}")
