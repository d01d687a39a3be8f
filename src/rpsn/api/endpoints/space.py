"""``/space`` -- the current space and invitations."""

from __future__ import annotations

from typing import Any, Optional

from rpsn.api.types import ApiRequest, ApiResponse, SpaceData
from rpsn.client import RepsonaClient


class InviteRequest(ApiRequest):
    email: str
    role: str = "member"


def get_space(client: RepsonaClient) -> Optional[ApiResponse[SpaceData]]:
    return client.get("space", model=ApiResponse[SpaceData])


def invite(client: RepsonaClient, request: InviteRequest) -> Any:
    """Invite a user by e-mail; the raw response JSON is returned."""
    return client.post("space/invite", request.to_body())
