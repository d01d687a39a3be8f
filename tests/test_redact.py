"""Tests for secret registration and structural redaction."""

from __future__ import annotations

import pytest

from rpsn.redact import (
    REDACTED,
    SecretRegistry,
    is_sensitive_header,
    is_sensitive_key,
    redact_headers,
    redact_json,
)


class TestSecretRegistry:
    def test_register_and_contains(self) -> None:
        secrets = SecretRegistry(["my-secret-token", "my-space-id"])

        assert len(secrets) == 2
        assert secrets.contains_secret("contains my-secret-token here")
        assert secrets.contains_secret("space: my-space-id")
        assert not secrets.contains_secret("no secrets here")

    def test_empty_and_whitespace_ignored(self) -> None:
        secrets = SecretRegistry()
        secrets.register("")
        secrets.register("   ")
        secrets.register(None)

        assert len(secrets) == 0
        assert secrets.sanitize("plain text") == "plain text"

    def test_register_environment(self) -> None:
        secrets = SecretRegistry()
        secrets.register_environment({"REPSONA_TOKEN": "t0k", "REPSONA_SPACE": "sp", "HOME": "/root"})

        assert "t0k" in secrets
        assert "sp" in secrets
        assert "/root" not in secrets

    def test_sanitize_replaces_all_occurrences(self) -> None:
        secrets = SecretRegistry(["secret123", "myspace"])

        out = secrets.sanitize("Error at https://myspace.repsona.com with token secret123 (secret123)")

        assert "secret123" not in out
        assert "myspace" not in out
        assert out.count(REDACTED) == 3

    def test_longer_secret_replaced_whole(self) -> None:
        secrets = SecretRegistry(["abc", "abcdef"])
        assert secrets.sanitize("x abcdef y") == f"x {REDACTED} y"

    def test_bearer_pattern(self) -> None:
        out = SecretRegistry().sanitize("Header: Bearer abc123secrettoken456")
        assert out == f"Header: Bearer {REDACTED}"

    def test_unregistered_space_host_redacted(self) -> None:
        out = SecretRegistry().sanitize("GET https://other-space.repsona.com/api/me")
        assert out == f"GET https://{REDACTED}.repsona.com/api/me"


class TestSpaceIdentifier:
    def test_short_space_id_leaves_paths_and_words_alone(self) -> None:
        secrets = SecretRegistry()
        secrets.register_identifier("api")

        url = secrets.sanitize("https://api.repsona.com/api/project/1/task")
        body = secrets.sanitize('{"name": "rapid capital"}')

        assert url == f"https://{REDACTED}.repsona.com/api/project/1/task"
        assert body == '{"name": "rapid capital"}'

    def test_host_label_without_scheme(self) -> None:
        secrets = SecretRegistry()
        secrets.register_identifier("dev")

        assert secrets.sanitize("host: dev.repsona.com") == f"host: {REDACTED}.repsona.com"
        assert secrets.sanitize("host: dev.example.com") == "host: dev.example.com"

    def test_standalone_word_redacted(self) -> None:
        secrets = SecretRegistry()
        secrets.register_identifier("acme-space")

        out = secrets.sanitize("space acme-space rejected the token.")

        assert out == f"space {REDACTED} rejected the token."
        assert secrets.contains_secret("for acme-space")
        assert not secrets.contains_secret("for acme-spaces")

    def test_environment_space_is_identifier(self) -> None:
        secrets = SecretRegistry()
        secrets.register_environment({"REPSONA_SPACE": "api"})

        assert "api" in secrets
        assert secrets.sanitize("/api/me") == "/api/me"


class TestSensitiveNames:
    @pytest.mark.parametrize(
        "name",
        [
            "Authorization",
            "cookie",
            "Set-Cookie",
            "X-API-Key",
            "Proxy-Authorization",
            "X-Csrf-Token",
            "x-client-secret",
        ],
    )
    def test_sensitive_headers(self, name: str) -> None:
        assert is_sensitive_header(name)

    @pytest.mark.parametrize("name", ["Accept", "Content-Type", "RateLimit-Remaining"])
    def test_plain_headers(self, name: str) -> None:
        assert not is_sensitive_header(name)

    @pytest.mark.parametrize(
        "key",
        [
            "token",
            "api_token",
            "apiToken",
            "password",
            "secret",
            "authorization",
            "access_token",
            "refresh_token",
            "api_key",
            "apiKey",
        ],
    )
    def test_sensitive_keys(self, key: str) -> None:
        assert is_sensitive_key(key)

    @pytest.mark.parametrize("key", ["name", "tokens_used", "description"])
    def test_plain_keys(self, key: str) -> None:
        assert not is_sensitive_key(key)


class TestStructuralRedaction:
    def test_redact_headers_masks_whole_value(self) -> None:
        secrets = SecretRegistry(["acme"])
        pairs = redact_headers(
            {"Authorization": "Bearer xyz", "Host": "acme.repsona.com", "Accept": "application/json"},
            secrets,
        )

        assert pairs == [
            ("Authorization", REDACTED),
            ("Host", f"{REDACTED}.repsona.com"),
            ("Accept", "application/json"),
        ]

    def test_redact_headers_accepts_pairs(self) -> None:
        pairs = redact_headers([("Set-Cookie", "a=1"), ("Set-Cookie", "b=2")], SecretRegistry())
        assert pairs == [("Set-Cookie", REDACTED), ("Set-Cookie", REDACTED)]

    def test_redact_json_nested(self) -> None:
        secrets = SecretRegistry(["s3cr3t"])
        value = {
            "name": "task",
            "auth": {"apiToken": "abc", "user": "me"},
            "items": [{"password": "pw"}, "mentions s3cr3t", 5, None, True],
        }

        assert redact_json(value, secrets) == {
            "name": "task",
            "auth": {"apiToken": REDACTED, "user": "me"},
            "items": [{"password": REDACTED}, f"mentions {REDACTED}", 5, None, True],
        }

    def test_redact_json_does_not_mutate_input(self) -> None:
        value = {"token": "abc"}
        redact_json(value, SecretRegistry())
        assert value == {"token": "abc"}
