"""Request builder -- turns a :class:`~rpsn.models.RequestSpec` into an HTTP request.

:func:`build_request` is a pure transformation: it performs no I/O and no
retries. It synthesises the credential-scoped base URL, injects the bearer
token (unmasked -- masking only ever happens on rendered copies), and
encodes the body as JSON or ``multipart/form-data``.
"""

from __future__ import annotations

from typing import Any

import httpx

from rpsn.models import Credentials, RequestSpec

SERVICE_HOST = "repsona.com"


def base_url(space_id: str) -> str:
    """Return ``https://<space_id>.repsona.com/api``."""
    return f"https://{space_id}.{SERVICE_HOST}/api"


def endpoint_url(space_id: str, path: str) -> str:
    """Join the space's base URL with a relative endpoint *path*."""
    return f"{base_url(space_id)}/{path.lstrip('/')}"


def build_request(spec: RequestSpec, creds: Credentials) -> httpx.Request:
    """Build a fully-addressed, authenticated :class:`httpx.Request`.

    Args:
        spec: Method, relative path, and optional JSON body or multipart form.
        creds: Resolved credentials; the space id selects the host and the
            token is sent as ``Authorization: Bearer <token>``.

    Returns:
        An unsent request. JSON bodies carry ``Content-Type:
        application/json``; multipart forms carry httpx's generated
        ``multipart/form-data; boundary=...``.
    """
    headers = {
        "Accept": "application/json",
        "Authorization": f"Bearer {creds.api_token}",
    }
    kwargs: dict[str, Any] = {}
    if spec.multipart is not None:
        kwargs["data"] = dict(spec.multipart.data)
        kwargs["files"] = [
            (part.field, (part.filename, part.content, part.content_type))
            for part in spec.multipart.files
        ]
    elif spec.body is not None:
        kwargs["json"] = spec.body

    return httpx.Request(
        spec.method.value,
        endpoint_url(creds.space_id, spec.path),
        headers=headers,
        **kwargs,
    )
