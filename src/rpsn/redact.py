"""Secret registry and structural redaction for trace, dry-run, and errors.

Redaction works on structure first and text second:

1. **Headers** -- credential-bearing header names (``Authorization``,
   ``Cookie``, anything containing ``token`` or ``secret``) have their whole
   value replaced by :data:`REDACTED`.
2. **JSON bodies** -- values under credential-like keys are replaced
   recursively, wherever they nest.
3. **Text** -- every remaining string is passed through
   :meth:`SecretRegistry.sanitize`, which replaces registered secret values
   (the resolved token), the space id where it names a Repsona host or
   stands alone as a word, and well-known token shapes.

The wire request is never touched; only the rendered copies are redacted.
"""

from __future__ import annotations

import re
from typing import Any, Iterable, Mapping

REDACTED = "[REDACTED]"

_SENSITIVE_HEADERS = frozenset(
    {
        "authorization",
        "proxy-authorization",
        "cookie",
        "set-cookie",
        "x-api-key",
    }
)
_SENSITIVE_HEADER_FRAGMENTS = ("token", "secret")

_SENSITIVE_KEYS = frozenset(
    {
        "token",
        "apitoken",
        "accesstoken",
        "refreshtoken",
        "apikey",
        "password",
        "secret",
        "authorization",
    }
)

_URL_PATTERN = re.compile(r"https://[A-Za-z0-9_-]+\.repsona\.com")
_BEARER_PATTERN = re.compile(r"Bearer\s+\S+")


def _identifier_pattern(value: str) -> re.Pattern[str]:
    escaped = re.escape(value)
    host = rf"(?<![\w.-]){escaped}(?=\.repsona\.com)"
    word = rf"(?<![\w./-]){escaped}(?![\w/-])(?!\.\w)"
    return re.compile(f"{host}|{word}")


def _normalise_key(key: str) -> str:
    return key.replace("_", "").replace("-", "").lower()


class SecretRegistry:
    """Values that must never appear in output.

    Secrets (tokens) are replaced wherever they occur. Identifiers (the space
    id) are often short words like ``dev`` or ``api``, so they are replaced
    only as a Repsona host label or as a standalone word, never inside a
    path segment, a hostname or another word. Empty and whitespace-only
    values are ignored.

    Example::

        secrets = SecretRegistry()
        secrets.register(creds.api_token)
        secrets.sanitize("token was abc123")  # 'token was [REDACTED]'
    """

    def __init__(self, values: Iterable[str] = ()) -> None:
        self._secrets: set[str] = set()
        self._identifiers: dict[str, re.Pattern[str]] = {}
        for value in values:
            self.register(value)

    def register(self, value: str | None) -> None:
        if value and value.strip():
            self._secrets.add(value)

    def register_identifier(self, value: str | None) -> None:
        """Register a value redacted only as a host label or a whole word."""
        if value and value.strip():
            self._identifiers[value] = _identifier_pattern(value)

    def register_environment(self, env: Mapping[str, str]) -> None:
        """Register the credential environment variables, if set."""
        self.register(env.get("REPSONA_TOKEN"))
        self.register_identifier(env.get("REPSONA_SPACE"))
        self.register(env.get("ANTHROPIC_API_KEY"))

    def __len__(self) -> int:
        return len(self._secrets) + len(self._identifiers)

    def __contains__(self, value: object) -> bool:
        return value in self._secrets or value in self._identifiers

    def contains_secret(self, text: str) -> bool:
        if any(secret in text for secret in self._secrets):
            return True
        return any(pattern.search(text) for pattern in self._identifiers.values())

    def sanitize(self, text: str) -> str:
        """Replace registered secrets and token-shaped substrings in *text*."""
        # Longest first so a secret containing another is removed whole.
        for secret in sorted(self._secrets, key=len, reverse=True):
            text = text.replace(secret, REDACTED)
        for pattern in self._identifiers.values():
            text = pattern.sub(REDACTED, text)
        text = _BEARER_PATTERN.sub(f"Bearer {REDACTED}", text)
        text = _URL_PATTERN.sub(f"https://{REDACTED}.repsona.com", text)
        return text


def is_sensitive_header(name: str) -> bool:
    lowered = name.lower()
    if lowered in _SENSITIVE_HEADERS:
        return True
    return any(fragment in lowered for fragment in _SENSITIVE_HEADER_FRAGMENTS)


def is_sensitive_key(key: str) -> bool:
    return _normalise_key(key) in _SENSITIVE_KEYS


def redact_headers(
    headers: Mapping[str, str] | Iterable[tuple[str, str]],
    secrets: SecretRegistry,
) -> list[tuple[str, str]]:
    """Return ``(name, value)`` pairs with credential headers masked.

    Accepts either a mapping or an iterable of pairs (``httpx.Headers``
    supports ``.multi_items()`` for repeated headers).
    """
    items = headers.items() if isinstance(headers, Mapping) else headers
    redacted: list[tuple[str, str]] = []
    for name, value in items:
        if is_sensitive_header(name):
            redacted.append((name, REDACTED))
        else:
            redacted.append((name, secrets.sanitize(str(value))))
    return redacted


def redact_json(value: Any, secrets: SecretRegistry) -> Any:
    """Return a copy of a decoded JSON value with secrets masked.

    Values under sensitive keys are replaced outright; every other string
    is sanitised against the registry.
    """
    if isinstance(value, dict):
        return {
            key: REDACTED if is_sensitive_key(str(key)) else redact_json(item, secrets)
            for key, item in value.items()
        }
    if isinstance(value, list):
        return [redact_json(item, secrets) for item in value]
    if isinstance(value, str):
        return secrets.sanitize(value)
    return value
