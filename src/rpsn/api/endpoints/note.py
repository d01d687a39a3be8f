"""``/project/{id}/note`` -- notes and their comments."""

from __future__ import annotations

from typing import Optional

from rpsn.api.types import (
    ActivityData,
    ApiRequest,
    ApiResponse,
    CommentData,
    CommentsData,
    HistoryData,
    NoteData,
    NotesData,
)
from rpsn.client import RepsonaClient


class CreateNoteRequest(ApiRequest):
    name: str
    description: Optional[str] = None
    parent: Optional[int] = None
    tags: Optional[list[int]] = None
    add_to_bottom: Optional[bool] = None


class UpdateNoteRequest(ApiRequest):
    name: Optional[str] = None
    description: Optional[str] = None
    tags: Optional[list[int]] = None


def _note_path(project_id: int, note_id: Optional[int] = None) -> str:
    path = f"project/{project_id}/note"
    return path if note_id is None else f"{path}/{note_id}"


def list_notes(client: RepsonaClient, project_id: int) -> Optional[ApiResponse[NotesData]]:
    return client.get(_note_path(project_id), model=ApiResponse[NotesData])


def get_note(
    client: RepsonaClient, project_id: int, note_id: int
) -> Optional[ApiResponse[NoteData]]:
    return client.get(_note_path(project_id, note_id), model=ApiResponse[NoteData])


def create_note(
    client: RepsonaClient, project_id: int, request: CreateNoteRequest
) -> Optional[ApiResponse[NoteData]]:
    return client.post(_note_path(project_id), request.to_body(), model=ApiResponse[NoteData])


def update_note(
    client: RepsonaClient, project_id: int, note_id: int, request: UpdateNoteRequest
) -> Optional[ApiResponse[NoteData]]:
    return client.patch(
        _note_path(project_id, note_id), request.to_body(), model=ApiResponse[NoteData]
    )


def delete_note(client: RepsonaClient, project_id: int, note_id: int) -> None:
    client.delete(_note_path(project_id, note_id))


def get_children(
    client: RepsonaClient, project_id: int, note_id: int
) -> Optional[ApiResponse[NotesData]]:
    return client.get(
        f"{_note_path(project_id, note_id)}/children", model=ApiResponse[NotesData]
    )


def list_comments(
    client: RepsonaClient, project_id: int, note_id: int
) -> Optional[ApiResponse[CommentsData]]:
    return client.get(
        f"{_note_path(project_id, note_id)}/note_comment", model=ApiResponse[CommentsData]
    )


def add_comment(
    client: RepsonaClient, project_id: int, note_id: int, comment: str
) -> Optional[ApiResponse[CommentData]]:
    return client.post(
        f"{_note_path(project_id, note_id)}/note_comment",
        {"comment": comment},
        model=ApiResponse[CommentData],
    )


def update_comment(
    client: RepsonaClient, project_id: int, note_id: int, comment_id: int, comment: str
) -> Optional[ApiResponse[CommentData]]:
    return client.patch(
        f"{_note_path(project_id, note_id)}/note_comment/{comment_id}",
        {"comment": comment},
        model=ApiResponse[CommentData],
    )


def delete_comment(
    client: RepsonaClient, project_id: int, note_id: int, comment_id: int
) -> None:
    client.delete(f"{_note_path(project_id, note_id)}/note_comment/{comment_id}")


def get_activity(
    client: RepsonaClient, project_id: int, note_id: int
) -> Optional[ApiResponse[ActivityData]]:
    return client.get(
        f"{_note_path(project_id, note_id)}/activity", model=ApiResponse[ActivityData]
    )


def get_history(
    client: RepsonaClient, project_id: int, note_id: int
) -> Optional[ApiResponse[HistoryData]]:
    return client.get(
        f"{_note_path(project_id, note_id)}/history", model=ApiResponse[HistoryData]
    )
