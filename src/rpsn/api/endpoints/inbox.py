"""``/inbox`` -- notifications."""

from __future__ import annotations

from typing import Optional

from rpsn.api.types import ApiResponse, InboxData, InboxItemData, UnreadCountData
from rpsn.client import RepsonaClient


def list_inbox(client: RepsonaClient) -> Optional[ApiResponse[InboxData]]:
    return client.get("inbox", model=ApiResponse[InboxData])


def mark_read(
    client: RepsonaClient, inbox_id: int, read: bool = True
) -> Optional[ApiResponse[InboxItemData]]:
    return client.patch(f"inbox/{inbox_id}", {"read": read}, model=ApiResponse[InboxItemData])


def mark_all_read(client: RepsonaClient) -> None:
    client.patch("inbox/readAll", {})


def unread_count(client: RepsonaClient) -> Optional[ApiResponse[UnreadCountData]]:
    return client.get("inbox/unread_count", model=ApiResponse[UnreadCountData])
