"""Sanitized error reports suitable for posting to a public issue tracker.

An :class:`ErrorReport` carries only non-sensitive facts about a failure:
the rpsn version, OS and architecture, a coarse :class:`ErrorCategory`,
the HTTP status if one appears in the message, the command name with its
arguments stripped, and the error message after two sanitizing passes:

1. every value in the :class:`~rpsn.redact.SecretRegistry` is replaced;
2. token-shaped patterns are replaced (Repsona URLs including their path,
   ``Bearer`` credentials, UUIDs, and base64-like runs of 32+ characters).
"""

from __future__ import annotations

import enum
import platform
import re
from typing import Optional

from pydantic import BaseModel, Field

from rpsn import __version__
from rpsn.redact import SecretRegistry

# The host may already read [REDACTED] after the registry pass.
_URL_PATTERN = re.compile(r"https://(?:[A-Za-z0-9_-]+|\[REDACTED\])\.repsona\.com\S*")
_BEARER_PATTERN = re.compile(r"Bearer\s+\S+")
_UUID_PATTERN = re.compile(
    r"[a-fA-F0-9]{8}-[a-fA-F0-9]{4}-[a-fA-F0-9]{4}-[a-fA-F0-9]{4}-[a-fA-F0-9]{12}"
)
_BASE64_PATTERN = re.compile(r"[A-Za-z0-9+_=-]{32,}")
_NUMBER_PATTERN = re.compile(r"\d+")


class ErrorCategory(str, enum.Enum):
    NETWORK = "Network"
    AUTHENTICATION = "Authentication"
    API_ERROR = "ApiError"
    PARSE_ERROR = "ParseError"
    CONFIGURATION = "Configuration"
    FILE_SYSTEM = "FileSystem"
    UNKNOWN = "Unknown"

    @classmethod
    def from_message(cls, message: str) -> ErrorCategory:
        """Classify an error by keywords in its message.

        Checked in order; the first match wins, so ``API error (401)`` is
        an authentication problem rather than a generic API error.
        """
        msg = message.lower()
        if "failed to send request" in msg or "connection" in msg:
            return cls.NETWORK
        if "401" in msg or "403" in msg or "unauthorized" in msg:
            return cls.AUTHENTICATION
        if "api error" in msg:
            return cls.API_ERROR
        if "failed to parse" in msg or "malformed json" in msg or "response shape" in msg:
            return cls.PARSE_ERROR
        if "config" in msg or "profile" in msg or "credentials" in msg:
            return cls.CONFIGURATION
        if "file" in msg or "directory" in msg or "permission" in msg:
            return cls.FILE_SYSTEM
        return cls.UNKNOWN


def sanitize_common_patterns(text: str) -> str:
    """Replace token-shaped substrings that no registry could know about."""
    text = _URL_PATTERN.sub("https://[REDACTED].repsona.com/[PATH]", text)
    text = _BEARER_PATTERN.sub("Bearer [REDACTED]", text)
    text = _UUID_PATTERN.sub("[REDACTED-UUID]", text)
    text = _BASE64_PATTERN.sub("[REDACTED-TOKEN]", text)
    return text


def extract_http_status(message: str) -> Optional[int]:
    """Return the first number in *message* that looks like an HTTP status."""
    for match in _NUMBER_PATTERN.finditer(message):
        code = int(match.group())
        if 100 <= code <= 599:
            return code
    return None


class ErrorReport(BaseModel):
    """A report that is safe to publish. Build it with :meth:`build`."""

    version: str = __version__
    os: str = Field(default_factory=lambda: platform.system().lower())
    arch: str = Field(default_factory=platform.machine)
    category: ErrorCategory
    http_status: Optional[int] = None
    command: Optional[str] = None
    error_message: str
    context: list[str] = Field(default_factory=list)

    @classmethod
    def build(
        cls,
        message: str,
        command: Optional[str],
        secrets: SecretRegistry,
    ) -> ErrorReport:
        """Create a report from a raw error message.

        Args:
            message: The error text as printed by rpsn.
            command: The command line that failed; only its first word is
                kept.
            secrets: Values to redact before pattern sanitizing.
        """
        command_name = None
        if command and command.split():
            command_name = command.split()[0]
        return cls(
            category=ErrorCategory.from_message(message),
            http_status=extract_http_status(message),
            command=command_name,
            error_message=sanitize_common_patterns(secrets.sanitize(message)),
        )

    def add_context(self, text: str, secrets: SecretRegistry) -> None:
        self.context.append(sanitize_common_patterns(secrets.sanitize(text)))

    def to_markdown(self) -> str:
        lines = [
            "## Error Report",
            "",
            "### Environment",
            f"- **Version**: {self.version}",
            f"- **OS**: {self.os}",
            f"- **Architecture**: {self.arch}",
            "",
            "### Error Details",
            f"- **Category**: {self.category.value}",
        ]
        if self.http_status is not None:
            lines.append(f"- **HTTP Status**: {self.http_status}")
        if self.command:
            lines.append(f"- **Command**: `{self.command}`")
        lines += ["", "### Error Message", "```", self.error_message, "```"]
        if self.context:
            lines += ["", "### Additional Context"]
            lines += [f"- {item}" for item in self.context]
        return "\n".join(lines) + "\n"

    def is_safe(self, secrets: SecretRegistry) -> bool:
        """True if no registered secret survives in the rendered report."""
        return not secrets.contains_secret(self.to_markdown())
