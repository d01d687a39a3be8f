"""Task generation with Anthropic models, behind ``rpsn task generate``.

The model is asked to break a goal into tasks and answer with::

    {"tasks": [{"title": "...", "description": "...", "priority": 1-5}]}

Models often wrap that document in a fenced ``json`` block or a sentence
of prose, so :func:`parse_generated_tasks` looks for the fence first, then
for the outermost braces, before validating.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import anthropic
from pydantic import BaseModel, ValidationError

from rpsn.exceptions import ConfigError, DecodeError, GenerationError, NetworkError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "claude-sonnet-4-5-20250929"
MAX_TOKENS = 4096
_KEY_PREFIX = "sk-ant-"
_FENCE = "```json"


class GeneratedTask(BaseModel):
    title: str
    description: Optional[str] = None
    priority: Optional[int] = None


class _GeneratedTasks(BaseModel):
    tasks: list[GeneratedTask]


def validate_api_key(api_key: str) -> None:
    """Reject an empty key or one without the ``sk-ant-`` prefix."""
    if not api_key:
        raise ConfigError("Anthropic API key is not set")
    if not api_key.startswith(_KEY_PREFIX):
        raise ConfigError(f"Invalid Anthropic API key format (expected {_KEY_PREFIX}...)")


def build_prompt(goal: str, count: int) -> str:
    return (
        "You are an experienced project manager. Break the goal below into "
        f"{count} tasks.\n\n"
        f"Goal: {goal}\n\n"
        "Requirements:\n"
        "1. Each task is concrete and actionable.\n"
        "2. List tasks so that the ones others depend on come first.\n"
        "3. Give each task a priority from 1 to 5, where 5 is the highest.\n\n"
        "Answer with JSON only, in exactly this shape:\n"
        '{"tasks": [{"title": "Task name", "description": "Details", "priority": 3}]}'
    )


def extract_json(text: str) -> str:
    """Cut the JSON document out of a model answer."""
    fence = text.find(_FENCE)
    if fence != -1:
        start = fence + len(_FENCE)
        end = text.find("```", start)
        return text[start:] if end == -1 else text[start:end]
    start, end = text.find("{"), text.rfind("}")
    if start != -1 and end > start:
        return text[start : end + 1]
    return text


def parse_generated_tasks(text: str) -> list[GeneratedTask]:
    """Parse a model answer into tasks.

    Raises:
        DecodeError: If no ``{"tasks": [...]}`` document can be read from
            *text*. The message does not echo the answer.
    """
    try:
        return _GeneratedTasks.model_validate_json(extract_json(text)).tasks
    except ValidationError as exc:
        raise DecodeError(
            f"Generated tasks are not in the expected JSON shape ({exc.error_count()} error(s))"
        ) from exc


class TaskGenerator:
    """Ask an Anthropic model for tasks that reach a goal.

    Args:
        api_key: Anthropic key; validated before the SDK client is built.
        model: Model ID, :data:`DEFAULT_MODEL` when ``None``.
        client: An existing ``anthropic.Anthropic``-compatible client. When
            given, *api_key* is not used.
    """

    def __init__(
        self,
        api_key: str,
        model: Optional[str] = None,
        client: Optional[Any] = None,
    ) -> None:
        self.model = model or DEFAULT_MODEL
        if client is None:
            validate_api_key(api_key)
            client = anthropic.Anthropic(api_key=api_key)
        self._client = client

    def generate(self, goal: str, count: int) -> list[GeneratedTask]:
        logger.debug("Requesting %d tasks from %s", count, self.model)
        try:
            message = self._client.messages.create(
                model=self.model,
                max_tokens=MAX_TOKENS,
                messages=[{"role": "user", "content": build_prompt(goal, count)}],
            )
        except anthropic.APIConnectionError as exc:
            raise NetworkError(f"Could not reach the Anthropic API: {exc}") from exc
        except anthropic.APIStatusError as exc:
            raise GenerationError(
                f"Anthropic API error ({exc.status_code}): {exc.message}"
            ) from exc

        text = next(
            (block.text for block in message.content if block.type == "text"), ""
        )
        if not text.strip():
            raise GenerationError("Empty response from the model")
        tasks = parse_generated_tasks(text)
        logger.debug("Model returned %d task(s)", len(tasks))
        return tasks
