"""Trace and dry-run rendering with secrets masked.

:class:`Tracer` turns outgoing requests and incoming responses into
human-readable lines for ``--trace`` and ``--dry-run``. Every header and
JSON body passes through :mod:`rpsn.redact` first; the rendered text never
contains the bearer token or any other registered secret.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Optional

import httpx

from rpsn.client.response import extract_response_data
from rpsn.models import RateLimitState, RequestSpec
from rpsn.redact import SecretRegistry, redact_headers, redact_json


class Tracer:
    """Render redacted request/response pairs to a line sink.

    Args:
        secrets: Registry of literal values to mask.
        emit: Called once per rendered line; defaults to
            :func:`rpsn.output.trace`.
    """

    def __init__(
        self,
        secrets: SecretRegistry,
        emit: Optional[Callable[[str], None]] = None,
    ) -> None:
        if emit is None:
            from rpsn.output import trace as emit
        self._secrets = secrets
        self._emit = emit

    def dry_run(self, spec: RequestSpec, request: httpx.Request) -> None:
        """Describe the request that would have been sent."""
        self._emit(f"[dry-run] {request.method} {self._url(request)}")
        self._emit_headers("[dry-run]   Header", request.headers)
        self._emit_body("[dry-run]", spec)
        self._emit("[dry-run] Request not sent")

    def request(self, spec: RequestSpec, request: httpx.Request, attempt: int) -> None:
        """Describe an outgoing physical attempt."""
        suffix = f" (attempt {attempt})" if attempt > 1 else ""
        self._emit(f"[trace] -> {request.method} {self._url(request)}{suffix}")
        self._emit_headers("[trace]    Header", request.headers)
        self._emit_body("[trace]   ", spec)

    def response(self, response: httpx.Response, state: RateLimitState) -> None:
        """Describe an incoming response: status, headers, body."""
        self._emit(f"[trace] <- {response.status_code} {response.reason_phrase}")
        self._emit_headers("[trace]    Header", response.headers)
        rate = state.describe()
        if rate:
            self._emit(f"[trace]    Rate limit: {rate}")
        data = extract_response_data(response)
        if data is not None:
            self._emit(f"[trace]    Body: {self._render(data)}")

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _url(self, request: httpx.Request) -> str:
        return self._secrets.sanitize(str(request.url))

    def _emit_headers(self, prefix: str, headers: httpx.Headers) -> None:
        # raw keeps the casing the headers were set with
        pairs = [(k.decode("latin-1"), v.decode("latin-1")) for k, v in headers.raw]
        for name, value in redact_headers(pairs, self._secrets):
            self._emit(f"{prefix}: {name}: {value}")

    def _emit_body(self, prefix: str, spec: RequestSpec) -> None:
        if spec.multipart is not None:
            for key, value in spec.multipart.data.items():
                rendered = self._render({key: value})
                self._emit(f"{prefix} Field: {rendered}")
            for part in spec.multipart.files:
                self._emit(
                    f"{prefix} File: {part.field}={self._secrets.sanitize(part.filename)} "
                    f"({len(part.content)} bytes, {part.content_type})"
                )
        elif spec.body is not None:
            self._emit(f"{prefix} Body: {self._render(spec.body)}")

    def _render(self, data: Any) -> str:
        if isinstance(data, str):
            return self._secrets.sanitize(data)
        redacted = redact_json(data, self._secrets)
        return json.dumps(redacted, indent=2, ensure_ascii=False, default=str)
