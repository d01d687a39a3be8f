"""Tests for API payload models and envelope decoding."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from rpsn.api.types import (
    ApiResponse,
    CommentData,
    CommentsData,
    FileInfo,
    History,
    IdLinksData,
    ProjectsData,
    TaskData,
)
from rpsn.api.endpoints.task import CreateTaskRequest, UpdateTaskRequest


class TestEnvelope:
    def test_projects_envelope(self):
        envelope = ApiResponse[ProjectsData].model_validate(
            {
                "requestedBy": 3,
                "projects": [{"id": 1, "name": "alpha", "fullName": "Alpha", "isClosed": True}],
            }
        )

        assert envelope.requested_by == 3
        project = envelope.data.projects[0]
        assert project.full_name == "Alpha"
        assert project.is_closed is True
        assert project.is_public is False

    def test_payload_sits_beside_requested_by(self):
        wire = (
            '{"requestedBy": 1, "projects": ['
            '{"id": 1, "name": "alpha", "fullName": "Alpha", "isClosed": false}, '
            '{"id": 2, "name": "beta", "fullName": "Beta", "isClosed": true}]}'
        )

        envelope = ApiResponse[ProjectsData].model_validate_json(wire)

        assert [p.name for p in envelope.data.projects] == ["alpha", "beta"]
        assert "requestedBy" not in envelope.data.model_dump(by_alias=True)

    def test_missing_required_field_fails(self):
        with pytest.raises(ValidationError):
            ApiResponse[TaskData].model_validate({"task": {"id": 1}})

    def test_missing_payload_fails(self):
        with pytest.raises(ValidationError):
            ApiResponse[ProjectsData].model_validate({"requestedBy": 1})

    def test_nested_task_fields(self):
        envelope = ApiResponse[TaskData].model_validate(
            {
                "task": {
                    "id": 5,
                    "name": "Fix login",
                    "status": {"id": 2, "name": "Done", "isClosed": True},
                    "responsibleUser": {"id": 9, "name": "kim"},
                    "tags": [{"id": 1, "name": "bug"}],
                    "customField": "kept",
                }
            }
        )
        task = envelope.data.task

        assert task.status.is_closed
        assert task.responsible_user.name == "kim"
        assert task.tags[0].name == "bug"
        dumped = task.to_json_dict()
        assert dumped["responsibleUser"]["name"] == "kim"
        assert dumped["customField"] == "kept"


class TestAliases:
    @pytest.mark.parametrize("key", ["comments", "taskComments", "noteComments"])
    def test_comment_lists(self, key):
        data = CommentsData.model_validate({key: [{"id": 1, "comment": "hi"}]})
        assert data.comments[0].comment == "hi"

    @pytest.mark.parametrize("key", ["comment", "taskComment", "noteComment"])
    def test_single_comment(self, key):
        data = CommentData.model_validate({key: {"id": 2, "comment": "ok"}})
        assert data.comment.id == 2

    def test_file_type_alias(self):
        info = FileInfo.model_validate({"id": 1, "filename": "a.png", "type": "image/png"})
        assert info.file_type == "image/png"
        assert info.to_json_dict()["type"] == "image/png"

    def test_history_change_from(self):
        entry = History.model_validate(
            {"id": 1, "action": "update", "changes": [{"field": "status", "from": "Todo", "to": "Done"}]}
        )
        assert entry.changes[0].from_ == "Todo"
        assert entry.to_json_dict()["changes"][0]["from"] == "Todo"

    def test_id_links_camel_case(self):
        links = [{"id": 1, "name": "JIRA", "url": "https://x/{id}"}]
        data = IdLinksData.model_validate({"idLinks": links})
        assert data.id_links[0].name == "JIRA"


class TestRequestBodies:
    def test_unset_fields_omitted(self):
        assert CreateTaskRequest(name="Write docs").to_body() == {"name": "Write docs"}

    def test_camel_case_keys(self):
        body = UpdateTaskRequest(
            responsible_user=4, ball_holding_user=5, due_date=1700000000, tags=[1, 2]
        ).to_body()
        assert body == {
            "responsibleUser": 4,
            "ballHoldingUser": 5,
            "dueDate": 1700000000,
            "tags": [1, 2],
        }

    def test_explicit_zero_and_false_kept(self):
        body = CreateTaskRequest(name="x", priority=0, add_to_bottom=False).to_body()
        assert body == {"name": "x", "priority": 0, "addToBottom": False}
