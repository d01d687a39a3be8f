"""Repsona API client with dry-run and trace interception.

:class:`RepsonaClient` is the one object command code talks to. It wraps
:class:`httpx.Client` and layers on:

- **Request building** -- a :class:`~rpsn.models.RequestSpec` is turned into
  an authenticated request by :func:`~rpsn.client.request.build_request`.
- **Dry-run mode** -- the request is rendered to stderr (redacted) and
  ``None`` is returned without touching the network.
- **Trace mode** -- every physical attempt and response is rendered to
  stderr (redacted) while the call proceeds normally.
- **Rate-limit retry** -- delegated to :class:`~rpsn.client.transport.Transport`.
- **Decoding** -- the 2xx body is validated against an optional model.

Example::

    with RepsonaClient(creds) as client:
        envelope = client.get("project", model=ApiResponse[ProjectsData])
"""

from __future__ import annotations

import time
from typing import Any, Callable, Optional

import httpx

from rpsn.client.request import build_request
from rpsn.client.response import decode
from rpsn.client.trace import Tracer
from rpsn.client.transport import Transport
from rpsn.models import (
    DEFAULT_RETRY_POLICY,
    ClientConfig,
    Credentials,
    HTTPMethod,
    MultipartForm,
    RateLimitState,
    RequestSpec,
    RetryPolicy,
)
from rpsn.output import get_output
from rpsn.redact import SecretRegistry

DEFAULT_TIMEOUT = 30.0


class RepsonaClient:
    """Synchronous client for one space.

    Must be used as a context manager so that the underlying
    :class:`httpx.Client` is opened and closed.

    Args:
        credentials: Resolved space id and token.
        config: Dry-run / trace switches.
        policy: Retry policy for HTTP 429.
        transport: Optional httpx transport (``httpx.MockTransport`` in tests).
        sleep: Wait function used between 429 retries.
        clock: Epoch clock used for absolute ``RateLimit-Reset`` values.
        secrets: Registry used to redact trace and dry-run output. The
            credentials are always registered.
    """

    def __init__(
        self,
        credentials: Credentials,
        config: ClientConfig = ClientConfig(),
        policy: RetryPolicy = DEFAULT_RETRY_POLICY,
        transport: Optional[httpx.BaseTransport] = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.time,
        secrets: Optional[SecretRegistry] = None,
    ) -> None:
        self._credentials = credentials
        self._config = config
        self._policy = policy
        self._transport = transport
        self._sleep = sleep
        self._clock = clock
        self._secrets = secrets if secrets is not None else SecretRegistry()
        self._secrets.register(credentials.api_token)
        self._secrets.register_identifier(credentials.space_id)
        self._tracer = Tracer(self._secrets)
        self._client: Optional[httpx.Client] = None
        self._attempts = 0

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> RepsonaClient:
        self._client = httpx.Client(
            transport=self._transport,
            timeout=DEFAULT_TIMEOUT,
            follow_redirects=True,
        )
        return self

    def __exit__(self, *args: object) -> None:
        if self._client:
            self._client.close()
            self._client = None

    @property
    def is_dry_run(self) -> bool:
        return self._config.dry_run

    @property
    def attempts(self) -> int:
        """Physical attempts issued by this client so far."""
        return self._attempts

    @property
    def secrets(self) -> SecretRegistry:
        return self._secrets

    # ------------------------------------------------------------------ #
    # Core request
    # ------------------------------------------------------------------ #

    def request(self, spec: RequestSpec, model: Optional[Any] = None) -> Any:
        """Execute one logical API call.

        Args:
            spec: What to send.
            model: Type to validate the 2xx body against, or ``None`` for
                the raw JSON.

        Returns:
            The decoded body, or ``None`` in dry-run mode or for an empty
            body.

        Raises:
            NetworkError, RateLimited, ApiError, DecodeError: See
                :mod:`rpsn.exceptions`.
        """
        request = build_request(spec, self._credentials)

        if self._config.dry_run:
            self._tracer.dry_run(spec, request)
            return None

        if self._client is None:
            raise RuntimeError("RepsonaClient must be used as a context manager")

        on_request = None
        if self._config.trace:
            def on_request(req: httpx.Request, attempt: int) -> None:
                self._tracer.request(spec, req, attempt)

        transport = Transport(
            self._client,
            policy=self._policy,
            sleep=self._sleep,
            clock=self._clock,
            on_request=on_request,
            on_response=self._on_response,
        )
        try:
            response = transport.send(request)
        finally:
            self._attempts += transport.attempts
        return decode(response, model)

    def _on_response(self, response: httpx.Response, state: RateLimitState) -> None:
        if self._config.trace:
            self._tracer.response(response, state)
        rate = state.describe()
        if rate:
            get_output().debug(f"Rate limit: {rate}")

    # ------------------------------------------------------------------ #
    # Convenience verbs
    # ------------------------------------------------------------------ #

    def get(self, path: str, model: Optional[Any] = None) -> Any:
        return self.request(RequestSpec(method=HTTPMethod.GET, path=path), model)

    def post(self, path: str, body: Any = None, model: Optional[Any] = None) -> Any:
        return self.request(RequestSpec(method=HTTPMethod.POST, path=path, body=body), model)

    def patch(self, path: str, body: Any = None, model: Optional[Any] = None) -> Any:
        return self.request(RequestSpec(method=HTTPMethod.PATCH, path=path, body=body), model)

    def delete(self, path: str, model: Optional[Any] = None) -> Any:
        return self.request(RequestSpec(method=HTTPMethod.DELETE, path=path), model)

    def post_multipart(
        self, path: str, form: MultipartForm, model: Optional[Any] = None
    ) -> Any:
        return self.request(
            RequestSpec(method=HTTPMethod.POST, path=path, multipart=form), model
        )
