"""Exception hierarchy for rpsn.

All exceptions inherit from :class:`RpsnError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`rpsn.exit_codes`.
The top-level error handler in :func:`rpsn.app.main` catches ``RpsnError``
and exits with the appropriate code, while unexpected exceptions produce a
crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Subclass hierarchy::

    RpsnError (exit 1)
    +-- InvalidUsageError   (exit 2)
    +-- MissingCredentials  (exit 3)
    +-- ApiError            (exit 4)
    +-- RateLimited         (exit 5)
    +-- NetworkError        (exit 6)
    +-- DecodeError         (exit 7)
    +-- ConfigError         (exit 1)
    +-- GenerationError     (exit 4)

Messages never carry the API token; the CLI boundary additionally passes
them through :class:`~rpsn.redact.SecretRegistry` before printing.
"""

from __future__ import annotations

from typing import Any, Optional

from rpsn.exit_codes import (
    EXIT_API_ERROR,
    EXIT_DECODE_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_MISSING_CREDENTIALS,
    EXIT_NETWORK_ERROR,
    EXIT_RATE_LIMITED,
)


class RpsnError(Exception):
    """Base exception for all rpsn errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`rpsn.exit_codes`.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(RpsnError):
    """Raised for invalid CLI arguments."""

    exit_code = EXIT_INVALID_USAGE


class ConfigError(RpsnError):
    """Raised for configuration problems (unreadable file, unknown profile)."""

    exit_code = EXIT_GENERIC_FAILURE


class MissingCredentials(RpsnError):
    """Raised when the space id or API token is empty after resolution."""

    exit_code = EXIT_MISSING_CREDENTIALS


class NetworkError(RpsnError):
    """Raised on transport failures: connection refused, TLS, DNS, timeout.

    Never retried -- the cause is not request-rate related.
    """

    exit_code = EXIT_NETWORK_ERROR


class RateLimited(RpsnError):
    """Raised when HTTP 429 persists past the retry budget.

    Attributes:
        retry_after: The wait (seconds) the server asked for on the final
            429, or ``None`` if it could not be determined.
    """

    exit_code = EXIT_RATE_LIMITED

    def __init__(self, message: str, retry_after: Optional[float] = None):
        super().__init__(message)
        self.retry_after = retry_after


class ApiError(RpsnError):
    """Raised for any non-2xx response other than a retried 429.

    Covers both 4xx and 5xx; neither is retried.

    Attributes:
        status: HTTP status code.
        body: Decoded JSON body when available, otherwise the raw text.
    """

    exit_code = EXIT_API_ERROR

    def __init__(self, status: int, body: Any = None):
        self.status = status
        self.body = body
        super().__init__(_api_error_message(status, body))


class DecodeError(RpsnError):
    """Raised when a 2xx body is not valid JSON or misses required fields."""

    exit_code = EXIT_DECODE_ERROR


class GenerationError(RpsnError):
    """Raised when the Anthropic API rejects or returns nothing for ``task generate``."""

    exit_code = EXIT_API_ERROR


def _api_error_message(status: int, body: Any) -> str:
    """Build ``API error (404): <server message>`` from a status and body."""
    if isinstance(body, dict):
        msg = body.get("message") or body.get("error") or body.get("detail") or ""
    elif body:
        msg = str(body)[:200]
    else:
        msg = ""
    prefix = f"API error ({status})"
    return f"{prefix}: {msg}" if msg else prefix
