"""``/project`` -- projects, their members, statuses and milestones."""

from __future__ import annotations

from typing import Optional

from rpsn.api.types import (
    ActivityData,
    ApiRequest,
    ApiResponse,
    MilestonesData,
    ProjectData,
    ProjectsData,
    StatusesData,
    UsersData,
)
from rpsn.client import RepsonaClient


class CreateProjectRequest(ApiRequest):
    name: str
    full_name: Optional[str] = None
    purpose: Optional[str] = None


class UpdateProjectRequest(ApiRequest):
    name: Optional[str] = None
    full_name: Optional[str] = None
    purpose: Optional[str] = None


def list_projects(client: RepsonaClient) -> Optional[ApiResponse[ProjectsData]]:
    return client.get("project", model=ApiResponse[ProjectsData])


def get_project(client: RepsonaClient, project_id: int) -> Optional[ApiResponse[ProjectData]]:
    return client.get(f"project/{project_id}", model=ApiResponse[ProjectData])


def create_project(
    client: RepsonaClient, request: CreateProjectRequest
) -> Optional[ApiResponse[ProjectData]]:
    return client.post("project", request.to_body(), model=ApiResponse[ProjectData])


def update_project(
    client: RepsonaClient, project_id: int, request: UpdateProjectRequest
) -> Optional[ApiResponse[ProjectData]]:
    return client.patch(
        f"project/{project_id}", request.to_body(), model=ApiResponse[ProjectData]
    )


def list_members(client: RepsonaClient, project_id: int) -> Optional[ApiResponse[UsersData]]:
    return client.get(f"project/{project_id}/users", model=ApiResponse[UsersData])


def add_member(
    client: RepsonaClient, project_id: int, user_id: int
) -> Optional[ApiResponse[ProjectData]]:
    return client.post(
        f"project/{project_id}/user", {"user": user_id}, model=ApiResponse[ProjectData]
    )


def remove_member(
    client: RepsonaClient, project_id: int, user_id: int
) -> Optional[ApiResponse[ProjectData]]:
    return client.delete(
        f"project/{project_id}/user/{user_id}", model=ApiResponse[ProjectData]
    )


def get_activity(client: RepsonaClient, project_id: int) -> Optional[ApiResponse[ActivityData]]:
    return client.get(f"project/{project_id}/activity", model=ApiResponse[ActivityData])


def list_statuses(client: RepsonaClient, project_id: int) -> Optional[ApiResponse[StatusesData]]:
    return client.get(f"project/{project_id}/status", model=ApiResponse[StatusesData])


def list_milestones(
    client: RepsonaClient, project_id: int
) -> Optional[ApiResponse[MilestonesData]]:
    return client.get(f"project/{project_id}/milestone", model=ApiResponse[MilestonesData])
