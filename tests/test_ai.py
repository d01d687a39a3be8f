"""Tests for Anthropic task generation: prompt, parsing, client errors."""

from __future__ import annotations

from types import SimpleNamespace

import anthropic
import httpx
import pytest

from rpsn.ai import (
    DEFAULT_MODEL,
    MAX_TOKENS,
    GeneratedTask,
    TaskGenerator,
    build_prompt,
    parse_generated_tasks,
    validate_api_key,
)
from rpsn.exceptions import ConfigError, DecodeError, GenerationError, NetworkError

from tests.fakes import FakeAnthropic

TWO_TASKS = (
    '{"tasks": ['
    '{"title": "Task 1", "description": "Description 1", "priority": 5}, '
    '{"title": "Task 2", "description": "Description 2", "priority": 3}]}'
)
ANTHROPIC_URL = "https://api.anthropic.com/v1/messages"


class TestParse:
    def test_fenced_block(self) -> None:
        text = f"Here are the tasks:\n```json\n{TWO_TASKS}\n```\nGood luck!"

        tasks = parse_generated_tasks(text)

        assert [t.title for t in tasks] == ["Task 1", "Task 2"]
        assert tasks[0].priority == 5

    def test_plain_json(self) -> None:
        tasks = parse_generated_tasks('{"tasks": [{"title": "Single Task"}]}')

        assert tasks == [GeneratedTask(title="Single Task")]
        assert tasks[0].description is None

    def test_json_inside_prose(self) -> None:
        tasks = parse_generated_tasks(f"Sure! {TWO_TASKS} Let me know.")
        assert len(tasks) == 2

    def test_unterminated_fence(self) -> None:
        tasks = parse_generated_tasks(f"```json\n{TWO_TASKS}")
        assert len(tasks) == 2

    @pytest.mark.parametrize(
        "text",
        [
            "I cannot help with that.",
            '{"tasks": [{"description": "no title"}]}',
            '{"items": []}',
            "{not json}",
        ],
    )
    def test_unusable_answer(self, text: str) -> None:
        with pytest.raises(DecodeError) as exc_info:
            parse_generated_tasks(text)
        assert exc_info.value.exit_code == 7


class TestApiKey:
    def test_valid(self) -> None:
        validate_api_key("sk-ant-api123-test")

    @pytest.mark.parametrize("key", ["", "invalid-key"])
    def test_rejected(self, key: str) -> None:
        with pytest.raises(ConfigError):
            validate_api_key(key)

    def test_generator_validates_before_building_client(self) -> None:
        with pytest.raises(ConfigError, match="expected sk-ant-"):
            TaskGenerator("not-a-key")


def test_prompt_mentions_goal_count_and_shape() -> None:
    prompt = build_prompt("Build a house", 5)

    assert "Goal: Build a house" in prompt
    assert "5 tasks" in prompt
    assert '"priority"' in prompt


class TestTaskGenerator:
    def test_sends_prompt_and_parses_answer(self) -> None:
        fake = FakeAnthropic(f"```json\n{TWO_TASKS}\n```")

        tasks = TaskGenerator("", client=fake).generate("Ship v2", 2)

        assert [t.title for t in tasks] == ["Task 1", "Task 2"]
        (call,) = fake.calls
        assert call["model"] == DEFAULT_MODEL
        assert call["max_tokens"] == MAX_TOKENS
        assert call["messages"][0]["role"] == "user"
        assert "Goal: Ship v2" in call["messages"][0]["content"]

    def test_custom_model(self) -> None:
        fake = FakeAnthropic(TWO_TASKS)
        TaskGenerator("", model="claude-haiku", client=fake).generate("x", 1)
        assert fake.calls[0]["model"] == "claude-haiku"

    def test_empty_answer(self) -> None:
        with pytest.raises(GenerationError, match="Empty response"):
            TaskGenerator("", client=FakeAnthropic("  ")).generate("x", 1)

    def test_skips_non_text_blocks(self) -> None:
        fake = FakeAnthropic(TWO_TASKS)
        blocks = [SimpleNamespace(type="thinking"), SimpleNamespace(type="text", text=TWO_TASKS)]
        fake.messages = SimpleNamespace(create=lambda **kw: SimpleNamespace(content=blocks))

        assert len(TaskGenerator("", client=fake).generate("x", 2)) == 2

    def test_status_error(self) -> None:
        request = httpx.Request("POST", ANTHROPIC_URL)
        error = anthropic.APIStatusError(
            "overloaded", response=httpx.Response(529, request=request), body=None
        )

        def _raise(**kwargs):
            raise error

        client = SimpleNamespace(messages=SimpleNamespace(create=_raise))
        with pytest.raises(GenerationError, match=r"Anthropic API error \(529\)") as exc_info:
            TaskGenerator("", client=client).generate("x", 1)
        assert exc_info.value.exit_code == 4

    def test_connection_error(self) -> None:
        error = anthropic.APIConnectionError(request=httpx.Request("POST", ANTHROPIC_URL))

        def _raise(**kwargs):
            raise error

        client = SimpleNamespace(messages=SimpleNamespace(create=_raise))
        with pytest.raises(NetworkError):
            TaskGenerator("", client=client).generate("x", 1)
