"""Transport/retry engine -- sends one logical request, retrying only on 429.

Each call to :meth:`Transport.send` runs a small state machine::

    Attempt --2xx-------------------------> return response
       |----transport failure-------------> NetworkError   (never retried)
       |----429, budget left, wait ok-----> sleep, Attempt
       |----429, budget spent / wait long-> RateLimited
       +----any other status (4xx, 5xx)---> ApiError       (never retried)

Server errors are not retried; callers that want 5xx
resilience must add that policy themselves. Sleep and clock are injected so
tests can drive the machine without wall-clock waits.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

import httpx

from rpsn.client.response import extract_response_data
from rpsn.exceptions import ApiError, NetworkError, RateLimited
from rpsn.models import DEFAULT_RETRY_POLICY, RateLimitState, RetryPolicy

logger = logging.getLogger(__name__)

RequestObserver = Callable[[httpx.Request, int], None]
ResponseObserver = Callable[[httpx.Response, RateLimitState], None]


class Transport:
    """Issue physical attempts for one logical request.

    Args:
        http_client: An open :class:`httpx.Client` used for every attempt.
        policy: Retry budget and backoff bounds for HTTP 429.
        sleep: Called with the wait in seconds between attempts.
        clock: Returns the current epoch time; used to turn an absolute
            ``RateLimit-Reset`` into a delay.
        on_request: Observer called before each attempt with the request
            and the 1-based attempt number.
        on_response: Observer called after each attempt with the response
            and its parsed :class:`~rpsn.models.RateLimitState`.
    """

    def __init__(
        self,
        http_client: httpx.Client,
        policy: RetryPolicy = DEFAULT_RETRY_POLICY,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.time,
        on_request: Optional[RequestObserver] = None,
        on_response: Optional[ResponseObserver] = None,
    ) -> None:
        self._http = http_client
        self._policy = policy
        self._sleep = sleep
        self._clock = clock
        self._on_request = on_request
        self._on_response = on_response
        self.attempts = 0

    def send(self, request: httpx.Request) -> httpx.Response:
        """Send *request*, retrying on 429 within the policy's budget.

        Returns:
            The first 2xx response.

        Raises:
            NetworkError: On any :class:`httpx.TransportError`.
            RateLimited: When 429 persists past ``max_retries`` or the
                server asks for a wait longer than ``max_delay``.
            ApiError: On any other non-2xx status.
        """
        retry = 0
        while True:
            self.attempts += 1
            if self._on_request is not None:
                self._on_request(request, self.attempts)

            try:
                response = self._http.send(request)
            except httpx.TransportError as exc:
                logger.debug("Attempt %d failed: %s", self.attempts, type(exc).__name__)
                raise NetworkError(f"Failed to send request: {exc}") from exc

            state = RateLimitState.from_headers(response.headers, self._clock())
            if self._on_response is not None:
                self._on_response(response, state)

            if response.status_code == 429:
                wait = self._retry_wait(state, retry)
                logger.debug(
                    "Rate limited on attempt %d (retry %d/%d, wait %.2fs)",
                    self.attempts, retry, self._policy.max_retries, wait,
                )
                self._sleep(wait)
                retry += 1
                continue

            if response.is_success:
                return response

            raise ApiError(response.status_code, extract_response_data(response))

    def _retry_wait(self, state: RateLimitState, retry: int) -> float:
        """Return how long to wait before the next attempt, or raise RateLimited."""
        requested = state.reset_after
        if retry >= self._policy.max_retries:
            raise RateLimited(
                f"Rate limited: still HTTP 429 after {self.attempts} attempts",
                retry_after=requested,
            )
        if requested is not None and requested > self._policy.max_delay:
            raise RateLimited(
                f"Rate limited: server asked to wait {requested:g}s "
                f"(limit {self._policy.max_delay:g}s)",
                retry_after=requested,
            )
        return max(requested or 0.0, self._policy.backoff(retry))
