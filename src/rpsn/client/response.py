"""Response decoding -- maps a 2xx :class:`httpx.Response` to a typed value.

The decode step is the single place where dynamic JSON meets the typed
response models in :mod:`rpsn.api.types`. Malformed JSON and shape
mismatches both surface as :class:`~rpsn.exceptions.DecodeError`.
"""

from __future__ import annotations

import json
from typing import Any, Optional

import httpx
from pydantic import TypeAdapter, ValidationError

from rpsn.exceptions import DecodeError


def extract_response_data(response: httpx.Response) -> Any:
    """Return the JSON body, the raw text if it is not JSON, or ``None`` if empty."""
    if not response.content:
        return None
    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return response.text


def decode(response: httpx.Response, model: Optional[Any] = None) -> Any:
    """Decode a successful response body.

    Args:
        response: A 2xx response.
        model: A pydantic model class or any type understood by
            :class:`pydantic.TypeAdapter` (e.g. ``list[Project]``). When
            ``None`` the parsed JSON is returned as-is.

    Returns:
        ``None`` for an empty body, otherwise the validated value.

    Raises:
        DecodeError: If the body is not JSON or fails validation.
    """
    if not response.content:
        return None
    try:
        payload = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise DecodeError(
            f"Malformed JSON in {response.status_code} response: {exc}"
        ) from exc

    if model is None:
        return payload
    try:
        return TypeAdapter(model).validate_python(payload)
    except ValidationError as exc:
        raise DecodeError(
            f"Unexpected response shape ({exc.error_count()} error(s)): "
            f"{_summarise(exc)}"
        ) from exc


def _summarise(exc: ValidationError) -> str:
    """First few validation errors as ``loc: msg``, without input values."""
    parts = []
    for err in exc.errors()[:3]:
        loc = ".".join(str(p) for p in err["loc"]) or "<root>"
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)
