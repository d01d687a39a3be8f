"""``/user`` -- space members and their roles."""

from __future__ import annotations

from typing import Optional

from rpsn.api.types import ActivityData, ApiResponse, UserData, UsersData
from rpsn.client import RepsonaClient


def list_users(client: RepsonaClient) -> Optional[ApiResponse[UsersData]]:
    return client.get("user", model=ApiResponse[UsersData])


def get_user(client: RepsonaClient, user_id: int) -> Optional[ApiResponse[UserData]]:
    return client.get(f"user/{user_id}", model=ApiResponse[UserData])


def set_role(
    client: RepsonaClient, user_id: int, role: str
) -> Optional[ApiResponse[UserData]]:
    return client.patch(f"user/{user_id}/role", {"role": role}, model=ApiResponse[UserData])


def set_payment(
    client: RepsonaClient, user_id: int, payment_type: str
) -> Optional[ApiResponse[UserData]]:
    return client.patch(
        f"user/{user_id}/payment", {"type": payment_type}, model=ApiResponse[UserData]
    )


def get_activity(client: RepsonaClient, user_id: int) -> Optional[ApiResponse[ActivityData]]:
    return client.get(f"user/{user_id}/activity", model=ApiResponse[ActivityData])
