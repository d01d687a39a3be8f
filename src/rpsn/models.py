"""Pydantic models for credentials, requests, and client settings.

These are the data shapes that flow through the request pipeline. They fall
into two groups:

**Configuration models** -- read from ``~/.config/rpsn/config.toml``:
    :class:`Profile`, :class:`AiSettings` and :class:`RpsnConfig`.

**Pipeline models** -- built once per invocation and never mutated:
    :class:`Credentials`, :class:`RequestSpec`, :class:`MultipartForm`,
    :class:`FilePart`, :class:`ClientConfig`, :class:`RetryPolicy`, and the
    per-response :class:`RateLimitState`.

Response payload shapes live in :mod:`rpsn.api.types`.
"""

from __future__ import annotations

import enum
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


# --- Configuration file ---


class Profile(BaseModel):
    """A named credential pair stored in the configuration file."""

    space_id: str = ""
    api_token: str = Field(default="", repr=False)


class AiSettings(BaseModel):
    """The ``[ai]`` table: Anthropic key and model for ``task generate``."""

    anthropic_api_key: str = Field(default="", repr=False)
    model: Optional[str] = None


class RpsnConfig(BaseModel):
    """Parsed contents of ``config.toml``.

    Example file::

        current_profile = "work"

        [profiles.work]
        space_id = "acme"
        api_token = "..."

        [ai]
        anthropic_api_key = "sk-ant-..."
    """

    current_profile: str = "default"
    profiles: dict[str, Profile] = Field(default_factory=dict)
    ai: AiSettings = Field(default_factory=AiSettings)

    def get_profile(self, name: str) -> Optional[Profile]:
        return self.profiles.get(name)


# --- Request pipeline ---


class Credentials(BaseModel):
    """The resolved ``(space_id, api_token)`` pair for one invocation.

    Immutable once resolved. The token is excluded from ``repr`` so that
    accidental logging of the model never leaks it.
    """

    model_config = ConfigDict(frozen=True)

    space_id: str
    api_token: str = Field(repr=False)


class HTTPMethod(str, enum.Enum):
    """HTTP methods used by the Repsona API."""

    GET = "GET"
    POST = "POST"
    PATCH = "PATCH"
    DELETE = "DELETE"


class FilePart(BaseModel):
    """A single file attached to a multipart form."""

    field: str = "file"
    filename: str
    content: bytes = Field(repr=False)
    content_type: str = "application/octet-stream"


class MultipartForm(BaseModel):
    """A ``multipart/form-data`` body: plain ``data`` fields plus file parts."""

    data: dict[str, str] = Field(default_factory=dict)
    files: list[FilePart] = Field(default_factory=list)


class RequestSpec(BaseModel):
    """Description of one logical API call.

    ``path`` is relative to ``https://<space>.repsona.com/api``. At most one
    of ``body`` (JSON) and ``multipart`` may be set.
    """

    model_config = ConfigDict(frozen=True)

    method: HTTPMethod
    path: str
    body: Any = None
    multipart: Optional[MultipartForm] = None

    @model_validator(mode="after")
    def _single_body_kind(self) -> RequestSpec:
        if self.body is not None and self.multipart is not None:
            raise ValueError("A request carries either a JSON body or a multipart form, not both")
        return self


class ClientConfig(BaseModel):
    """Interceptor switches, fixed for the lifetime of one client."""

    model_config = ConfigDict(frozen=True)

    dry_run: bool = False
    trace: bool = False


class RetryPolicy(BaseModel):
    """Bounded exponential backoff for HTTP 429 responses.

    The wait before retry ``n`` (0-based) is taken from the server's
    rate-limit headers when present, otherwise ``base_delay * 2**n``;
    either way it is capped at ``max_delay``. A server-requested wait above
    ``max_delay`` ends the call with :class:`~rpsn.exceptions.RateLimited`.
    """

    model_config = ConfigDict(frozen=True)

    max_retries: int = Field(default=3, ge=0)
    base_delay: float = Field(default=1.0, gt=0)
    max_delay: float = Field(default=30.0, gt=0)

    def backoff(self, retry: int) -> float:
        return min(self.base_delay * (2 ** retry), self.max_delay)


DEFAULT_RETRY_POLICY = RetryPolicy()

# RateLimit-Reset values above this are absolute epoch seconds, not deltas.
_EPOCH_THRESHOLD = 86_400


class RateLimitState(BaseModel):
    """Rate-limit window reported by a single response.

    Derived from ``RateLimit-Limit``, ``RateLimit-Remaining`` and
    ``RateLimit-Reset``; read fresh from every response and discarded.
    ``reset_after`` is the number of seconds until the window resets.
    """

    limit: Optional[int] = None
    remaining: Optional[int] = None
    reset_after: Optional[float] = None

    @classmethod
    def from_headers(cls, headers: Mapping[str, str], now: float) -> RateLimitState:
        """Parse the rate-limit headers, ignoring missing or malformed values.

        Args:
            headers: Response headers (case-insensitive mapping).
            now: Current epoch time, used when the reset value is absolute.
        """
        reset_after = _parse_float(headers.get("ratelimit-reset"))
        if reset_after is None:
            reset_after = _parse_float(headers.get("retry-after"))
        if reset_after is not None and reset_after > _EPOCH_THRESHOLD:
            reset_after = reset_after - now
        if reset_after is not None:
            reset_after = max(reset_after, 0.0)
        return cls(
            limit=_parse_int(headers.get("ratelimit-limit")),
            remaining=_parse_int(headers.get("ratelimit-remaining")),
            reset_after=reset_after,
        )

    def describe(self) -> Optional[str]:
        """Short human summary, e.g. ``"57/60, resets in 12s"``."""
        if self.limit is None or self.remaining is None:
            return None
        text = f"{self.remaining}/{self.limit}"
        if self.reset_after is not None:
            text += f", resets in {self.reset_after:g}s"
        return text


def _parse_int(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


def _parse_float(value: Optional[str]) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value.strip())
    except ValueError:
        return None
