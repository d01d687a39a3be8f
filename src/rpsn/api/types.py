"""Pydantic models for Repsona API payloads.

Every resource model accepts the API's camelCase keys (``fullName``,
``isClosed``, ...) and the snake_case attribute names alike, and keeps any
field it does not declare (``extra="allow"``) so that ``--json`` output
round-trips what the server sent.

Payload keys arrive flat beside the caller's id::

    {"requestedBy": 1, "projects": [...]}

which is modelled as ``ApiResponse[ProjectsData]``: everything except
``requestedBy`` is validated as the ``data`` model. A missing required
field anywhere in the tree fails validation and surfaces as
:class:`~rpsn.exceptions.DecodeError`.
"""

from __future__ import annotations

from typing import Any, Generic, Optional, TypeVar

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base for all payload models: camelCase aliases, unknown keys kept."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    def to_json_dict(self) -> dict[str, Any]:
        """Dump with the wire (camelCase) names, for ``--json`` output."""
        return self.model_dump(mode="json", by_alias=True)


# --- Resources ---


class User(ApiModel):
    id: int
    name: str
    email: Optional[str] = None
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    role: Optional[str] = None
    billing_status: Optional[str] = None
    created_at: Optional[int] = None
    updated_at: Optional[int] = None


class ProjectSummary(ApiModel):
    id: int
    name: str


class Project(ApiModel):
    id: int
    name: str
    full_name: Optional[str] = None
    purpose: Optional[str] = None
    avatar_url: Optional[str] = None
    is_closed: bool = False
    is_public: bool = False
    created_at: Optional[int] = None
    updated_at: Optional[int] = None


class Status(ApiModel):
    """A task status column; ``is_closed`` marks the "done" statuses."""

    id: int
    name: str
    is_closed: bool = False
    color: Optional[str] = None


class Milestone(ApiModel):
    id: int
    name: str
    due_date: Optional[int] = None
    is_closed: bool = False


class Tag(ApiModel):
    id: int
    name: str
    color: Optional[str] = None


class Task(ApiModel):
    id: int
    name: str
    description: Optional[str] = None
    status: Optional[Status] = None
    priority: Optional[int] = None
    due_date: Optional[int] = None
    start_date: Optional[int] = None
    responsible_user: Optional[User] = None
    ball_holding_user: Optional[User] = None
    tags: list[Tag] = Field(default_factory=list)
    project: Optional[ProjectSummary] = None
    milestone: Optional[Milestone] = None
    parent: Optional[int] = None
    sort_order: Optional[int] = None
    created_at: Optional[int] = None
    updated_at: Optional[int] = None


class Note(ApiModel):
    id: int
    name: str
    description: Optional[str] = None
    tags: list[Tag] = Field(default_factory=list)
    parent: Optional[int] = None
    project: Optional[ProjectSummary] = None
    sort_order: Optional[int] = None
    created_at: Optional[int] = None
    updated_at: Optional[int] = None


class Comment(ApiModel):
    """A task or note comment; both share one shape."""

    id: int
    comment: str
    user: Optional[User] = None
    created_at: Optional[int] = None


class FileInfo(ApiModel):
    id: int
    hash: Optional[str] = None
    filename: str
    size: Optional[int] = None
    file_type: Optional[str] = Field(default=None, alias="type")


class InboxItem(ApiModel):
    id: int
    task: Optional[Task] = None
    note: Optional[Note] = None
    comment: Optional[Comment] = None
    read_at: Optional[int] = None
    created_at: Optional[int] = None


class Space(ApiModel):
    id: int
    name: str
    full_name: Optional[str] = None
    information: Optional[str] = None
    avatar_url: Optional[str] = None
    status: Optional[str] = None
    created_at: Optional[int] = None
    updated_at: Optional[int] = None


class Webhook(ApiModel):
    id: int
    name: str
    url: str
    events: list[str] = Field(default_factory=list)
    active: bool = True


class IdLink(ApiModel):
    id: int
    name: str
    url: str


class Change(ApiModel):
    field: str
    from_: Optional[str] = Field(default=None, alias="from")
    to: Optional[str] = None


class Activity(ApiModel):
    id: int
    action: str
    user: Optional[User] = None
    created_at: Optional[int] = None


class History(ApiModel):
    id: int
    action: str
    user: Optional[User] = None
    changes: list[Change] = Field(default_factory=list)
    created_at: Optional[int] = None


# --- Envelope ---

T = TypeVar("T")


class ApiResponse(ApiModel, Generic[T]):
    """``{"requestedBy": <user id>, **<T>}``; the payload is exposed as ``data``."""

    requested_by: Optional[int] = None
    data: T

    @model_validator(mode="before")
    @classmethod
    def _gather_payload(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return value
        payload = {k: v for k, v in value.items() if k not in ("requestedBy", "requested_by")}
        return {
            "requestedBy": value.get("requestedBy", value.get("requested_by")),
            "data": payload,
        }


# --- Data variants ---


class ProjectsData(ApiModel):
    projects: list[Project]


class ProjectData(ApiModel):
    project: Project


class TasksData(ApiModel):
    tasks: list[Task]


class TaskData(ApiModel):
    task: Task


class NotesData(ApiModel):
    notes: list[Note]


class NoteData(ApiModel):
    note: Note


class UsersData(ApiModel):
    users: list[User]


class UserData(ApiModel):
    user: User


class TagsData(ApiModel):
    tags: list[Tag]


class CommentsData(ApiModel):
    comments: list[Comment] = Field(
        validation_alias=AliasChoices("comments", "taskComments", "noteComments"),
    )


class CommentData(ApiModel):
    comment: Comment = Field(
        validation_alias=AliasChoices("comment", "taskComment", "noteComment"),
    )


class StatusesData(ApiModel):
    statuses: list[Status]


class MilestonesData(ApiModel):
    milestones: list[Milestone]


class ActivityData(ApiModel):
    activity: list[Activity]


class HistoryData(ApiModel):
    history: list[History]


class InboxData(ApiModel):
    inbox: list[InboxItem]


class InboxItemData(ApiModel):
    inbox: InboxItem


class UnreadCountData(ApiModel):
    count: int


class TaskCountData(ApiModel):
    count: int


class SpaceData(ApiModel):
    space: Space


class WebhooksData(ApiModel):
    webhooks: list[Webhook]


class WebhookData(ApiModel):
    webhook: Webhook


class IdLinksData(ApiModel):
    id_links: list[IdLink]


class IdLinkData(ApiModel):
    id_link: IdLink


class FilesData(ApiModel):
    files: list[FileInfo]


# --- Request bodies ---


class ApiRequest(BaseModel):
    """Base for JSON request bodies; unset fields are left out of the payload."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_body(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
