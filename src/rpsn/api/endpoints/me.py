"""``/me`` -- the authenticated user."""

from __future__ import annotations

from typing import Optional

from rpsn.api.types import (
    ActivityData,
    ApiRequest,
    ApiResponse,
    ProjectsData,
    TaskCountData,
    TasksData,
    UserData,
)
from rpsn.client import RepsonaClient

# ``rpsn me tasks --filter <name>`` -> sub-path under ``me/tasks``.
TASK_FILTERS = {
    "all": "me/tasks",
    "responsible": "me/tasks/responsible",
    "ball-holding": "me/tasks/ballHolding",
    "following": "me/tasks/following",
}


class MeUpdateRequest(ApiRequest):
    name: Optional[str] = None
    full_name: Optional[str] = None
    what_are_you_doing: Optional[str] = None


def get_me(client: RepsonaClient) -> Optional[ApiResponse[UserData]]:
    return client.get("me", model=ApiResponse[UserData])


def update_me(
    client: RepsonaClient, request: MeUpdateRequest
) -> Optional[ApiResponse[UserData]]:
    return client.patch("me", request.to_body(), model=ApiResponse[UserData])


def get_my_tasks(
    client: RepsonaClient, which: str = "all"
) -> Optional[ApiResponse[TasksData]]:
    """List tasks related to the current user.

    Args:
        which: One of :data:`TASK_FILTERS` (``all``, ``responsible``,
            ``ball-holding``, ``following``).
    """
    return client.get(TASK_FILTERS[which], model=ApiResponse[TasksData])


def get_my_task_count(client: RepsonaClient) -> Optional[ApiResponse[TaskCountData]]:
    return client.get("me/tasks/count", model=ApiResponse[TaskCountData])


def get_my_projects(client: RepsonaClient) -> Optional[ApiResponse[ProjectsData]]:
    return client.get("me/projects", model=ApiResponse[ProjectsData])


def get_my_activity(client: RepsonaClient) -> Optional[ApiResponse[ActivityData]]:
    return client.get("me/activity", model=ApiResponse[ActivityData])
