"""rpsn -- command-line client for the Repsona task management API.

Every sub-command maps onto one Repsona REST endpoint: the CLI resolves
credentials, builds a single authenticated request, sends it through a
rate-limit-aware transport, and prints the decoded response as a table or
raw JSON.

Typical workflow::

    export REPSONA_SPACE=acme REPSONA_TOKEN=...
    rpsn project list
    rpsn task create 12 --title "Write release notes"
    rpsn --dry-run task done 12 345

Modules:
    app: Typer application and CLI entry point.
    config: Profile file loading and credential resolution.
    models: Pydantic models for credentials, requests, and client settings.
    client: Request builder, retrying transport, trace/dry-run interceptor.
    api: Typed response models and per-resource endpoint functions.
    redact: Secret registry and structural redaction of headers and bodies.
    exceptions: Exception hierarchy with exit-code mapping.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.1.0"
