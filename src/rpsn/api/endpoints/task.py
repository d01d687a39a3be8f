"""``/project/{id}/task`` -- tasks, their comments, activity and history."""

from __future__ import annotations

from typing import Optional

from rpsn.api.types import (
    ActivityData,
    ApiRequest,
    ApiResponse,
    CommentData,
    CommentsData,
    HistoryData,
    Status,
    TaskData,
    TasksData,
)
from rpsn.client import RepsonaClient


class CreateTaskRequest(ApiRequest):
    name: str
    description: Optional[str] = None
    status: Optional[int] = None
    priority: Optional[int] = None
    due_date: Optional[int] = None
    start_date: Optional[int] = None
    responsible_user: Optional[int] = None
    ball_holding_user: Optional[int] = None
    parent: Optional[int] = None
    milestone: Optional[int] = None
    tags: Optional[list[int]] = None
    add_to_bottom: Optional[bool] = None


class UpdateTaskRequest(ApiRequest):
    name: Optional[str] = None
    description: Optional[str] = None
    status: Optional[int] = None
    priority: Optional[int] = None
    due_date: Optional[int] = None
    start_date: Optional[int] = None
    responsible_user: Optional[int] = None
    ball_holding_user: Optional[int] = None
    parent: Optional[int] = None
    milestone: Optional[int] = None
    tags: Optional[list[int]] = None


def _task_path(project_id: int, task_id: Optional[int] = None) -> str:
    path = f"project/{project_id}/task"
    return path if task_id is None else f"{path}/{task_id}"


def list_tasks(client: RepsonaClient, project_id: int) -> Optional[ApiResponse[TasksData]]:
    return client.get(_task_path(project_id), model=ApiResponse[TasksData])


def get_task(
    client: RepsonaClient, project_id: int, task_id: int
) -> Optional[ApiResponse[TaskData]]:
    return client.get(_task_path(project_id, task_id), model=ApiResponse[TaskData])


def create_task(
    client: RepsonaClient, project_id: int, request: CreateTaskRequest
) -> Optional[ApiResponse[TaskData]]:
    return client.post(
        _task_path(project_id), request.to_body(), model=ApiResponse[TaskData]
    )


def update_task(
    client: RepsonaClient, project_id: int, task_id: int, request: UpdateTaskRequest
) -> Optional[ApiResponse[TaskData]]:
    return client.patch(
        _task_path(project_id, task_id), request.to_body(), model=ApiResponse[TaskData]
    )


def delete_task(client: RepsonaClient, project_id: int, task_id: int) -> None:
    client.delete(_task_path(project_id, task_id))


def set_status(
    client: RepsonaClient, project_id: int, task_id: int, status_id: int
) -> Optional[ApiResponse[TaskData]]:
    return client.patch(
        _task_path(project_id, task_id), {"status": status_id}, model=ApiResponse[TaskData]
    )


def pick_status(statuses: list[Status], closed: bool) -> Optional[Status]:
    """Return the first status whose ``is_closed`` equals *closed*, in API order."""
    return next((s for s in statuses if s.is_closed == closed), None)


def get_children(
    client: RepsonaClient, project_id: int, task_id: int
) -> Optional[ApiResponse[TasksData]]:
    return client.get(
        f"{_task_path(project_id, task_id)}/children", model=ApiResponse[TasksData]
    )


def list_comments(
    client: RepsonaClient, project_id: int, task_id: int
) -> Optional[ApiResponse[CommentsData]]:
    return client.get(
        f"{_task_path(project_id, task_id)}/task_comment", model=ApiResponse[CommentsData]
    )


def add_comment(
    client: RepsonaClient,
    project_id: int,
    task_id: int,
    comment: str,
    reply_to: Optional[int] = None,
) -> Optional[ApiResponse[CommentData]]:
    body: dict[str, object] = {"comment": comment}
    if reply_to is not None:
        body["replyTo"] = reply_to
    return client.post(
        f"{_task_path(project_id, task_id)}/task_comment",
        body,
        model=ApiResponse[CommentData],
    )


def update_comment(
    client: RepsonaClient, project_id: int, comment_id: int, comment: str
) -> Optional[ApiResponse[CommentData]]:
    return client.patch(
        f"project/{project_id}/task_comment/{comment_id}",
        {"comment": comment},
        model=ApiResponse[CommentData],
    )


def delete_comment(client: RepsonaClient, project_id: int, comment_id: int) -> None:
    client.delete(f"project/{project_id}/task_comment/{comment_id}")


def get_activity(
    client: RepsonaClient, project_id: int, task_id: int
) -> Optional[ApiResponse[ActivityData]]:
    return client.get(
        f"{_task_path(project_id, task_id)}/activity", model=ApiResponse[ActivityData]
    )


def get_history(
    client: RepsonaClient, project_id: int, task_id: int
) -> Optional[ApiResponse[HistoryData]]:
    return client.get(
        f"{_task_path(project_id, task_id)}/history", model=ApiResponse[HistoryData]
    )
