"""Project files: multipart upload, attach/detach, delete."""

from __future__ import annotations

import enum
import mimetypes
from pathlib import Path
from typing import Optional

from rpsn.api.types import ApiResponse, FilesData
from rpsn.client import RepsonaClient
from rpsn.models import FilePart, MultipartForm


class AttachModel(str, enum.Enum):
    """Kinds of object a file can be attached to."""

    TASK = "task"
    TASK_COMMENT = "task_comment"
    NOTE = "note"
    NOTE_COMMENT = "note_comment"


def build_upload_form(path: Path) -> MultipartForm:
    """Read *path* into a single-file ``multipart/form-data`` form."""
    content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
    part = FilePart(
        field="file",
        filename=path.name or "file",
        content=path.read_bytes(),
        content_type=content_type,
    )
    return MultipartForm(files=[part])


def upload_file(
    client: RepsonaClient, project_id: int, path: Path
) -> Optional[ApiResponse[FilesData]]:
    return client.post_multipart(
        f"project/{project_id}/file",
        build_upload_form(path),
        model=ApiResponse[FilesData],
    )


def _attachment(model: AttachModel, model_id: int, file_id: int) -> dict[str, object]:
    return {"model": model.value, "id": model_id, "file": file_id}


def attach_file(
    client: RepsonaClient, project_id: int, model: AttachModel, model_id: int, file_id: int
) -> None:
    client.post(f"project/{project_id}/attach", _attachment(model, model_id, file_id))


def detach_file(
    client: RepsonaClient, project_id: int, model: AttachModel, model_id: int, file_id: int
) -> None:
    client.post(f"project/{project_id}/detach", _attachment(model, model_id, file_id))


def delete_file(client: RepsonaClient, file_id: int) -> None:
    client.delete(f"file/{file_id}")
