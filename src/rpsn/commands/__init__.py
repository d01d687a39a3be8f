"""Built-in CLI sub-commands for rpsn.

Each module exports one :class:`typer.Typer` sub-application registered on
the root app in :mod:`rpsn.app`:

* ``me``, ``project``, ``task``, ``note``, ``file``, ``tag``, ``inbox``,
  ``space``, ``user``, ``webhook``, ``idlink`` -- thin wrappers over
  :mod:`rpsn.api.endpoints`.
* ``config`` -- read-only view of the profile file.
* ``util`` -- version and connectivity check.
* ``report`` -- sanitized Markdown error reports.

The helpers below are shared by the API command modules: opening a client
from the global options in ``ctx.obj``, confirming destructive actions, and
printing decoded records.
"""

from __future__ import annotations

import time
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Iterator, Optional, Sequence

import typer
from pydantic import BaseModel

from rpsn.models import ClientConfig
from rpsn.output import info, print_record, print_records, success
from rpsn.redact import SecretRegistry

if TYPE_CHECKING:
    from rpsn.ai import TaskGenerator
    from rpsn.client import RepsonaClient


def _options(ctx: typer.Context) -> dict[str, Any]:
    root = ctx.find_root()
    return root.obj if isinstance(root.obj, dict) else {}


@contextmanager
def open_client(ctx: typer.Context) -> Iterator[RepsonaClient]:
    """Resolve credentials from the global options and yield an open client.

    Reads the startup snapshot stored in ``ctx.obj`` by
    :func:`rpsn.app.main_callback` (flags and ``env``), loads the profile
    file, and registers the resolved credentials as secrets before any
    output is produced.

    Raises:
        MissingCredentials: If no space id or token can be resolved.
        ConfigError: If the profile file is unreadable or ``--profile`` is
            unknown.
    """
    from rpsn.client import RepsonaClient
    from rpsn.config import load_config, resolve_credentials

    opts = _options(ctx)
    creds = resolve_credentials(
        flag_space=opts.get("space"),
        flag_token=opts.get("token"),
        flag_profile=opts.get("profile"),
        env=opts.get("env", {}),
        config=load_config(),
    )
    secrets = opts.get("secrets")
    if secrets is None:
        secrets = SecretRegistry()

    config = ClientConfig(
        dry_run=opts.get("dry_run", False),
        trace=opts.get("trace", False),
    )
    with RepsonaClient(
        creds,
        config=config,
        transport=opts.get("transport"),
        sleep=opts.get("sleep", time.sleep),
        secrets=secrets,
    ) as client:
        yield client


def task_generator(ctx: typer.Context, model: Optional[str] = None) -> TaskGenerator:
    """Build a :class:`~rpsn.ai.TaskGenerator` for ``task generate``.

    The key comes from ``ANTHROPIC_API_KEY`` or the ``[ai]`` table and is
    registered as a secret. A client preset in ``ctx.obj["ai_client"]`` is
    used as-is.

    Raises:
        ConfigError: If no valid key is configured.
    """
    from rpsn.ai import TaskGenerator
    from rpsn.config import load_config, resolve_anthropic_key

    opts = _options(ctx)
    config = load_config()
    model = model or config.ai.model
    client = opts.get("ai_client")
    if client is not None:
        return TaskGenerator("", model=model, client=client)

    key = resolve_anthropic_key(opts.get("env", {}), config)
    secrets = opts.get("secrets")
    if secrets is not None:
        secrets.register(key)
    return TaskGenerator(key, model=model)


def confirm(ctx: typer.Context, prompt: str) -> None:
    """Ask before a destructive action unless ``--yes`` or ``--dry-run`` is set.

    Raises:
        typer.Exit: If the user declines.
    """
    opts = _options(ctx)
    if opts.get("yes") or opts.get("dry_run"):
        return
    if not typer.confirm(prompt):
        info("Cancelled.")
        raise typer.Exit()


def show_records(
    items: Optional[Sequence[BaseModel]],
    columns: Sequence[tuple[str, str]],
    title: Optional[str] = None,
) -> None:
    """Print decoded models as a table (or JSON). ``None`` prints nothing."""
    if items is None:
        return
    records = [item.model_dump(mode="json", by_alias=True) for item in items]
    if not records:
        info(f"No {title.lower() if title else 'results'} found.")
        return
    print_records(records, columns, title)


def show_record(item: Optional[BaseModel], fields: Sequence[tuple[str, str]]) -> None:
    """Print one decoded model as ``Label: value`` lines (or JSON)."""
    if item is None:
        return
    print_record(item.model_dump(mode="json", by_alias=True), fields)


def done(client: RepsonaClient, message: str) -> None:
    """Report a completed write, unless nothing was sent (dry-run)."""
    if not client.is_dry_run:
        success(message)


def data_of(envelope: Any) -> Any:
    """Return ``envelope.data``, or ``None`` for a dry-run/empty response."""
    return None if envelope is None else envelope.data


USER_COLUMNS = [("ID", "id"), ("Name", "name"), ("Full name", "fullName"), ("Role", "role")]
TASK_COLUMNS = [
    ("ID", "id"),
    ("Name", "name"),
    ("Status", "status.name"),
    ("Priority", "priority"),
    ("Responsible", "responsibleUser.name"),
    ("Tags", "tags"),
]
NOTE_COLUMNS = [("ID", "id"), ("Name", "name"), ("Parent", "parent"), ("Tags", "tags")]
COMMENT_COLUMNS = [("ID", "id"), ("User", "user.name"), ("Comment", "comment")]
ACTIVITY_COLUMNS = [("ID", "id"), ("Action", "action"), ("User", "user.name"), ("At", "createdAt")]
HISTORY_COLUMNS = ACTIVITY_COLUMNS + [("Changes", "changes")]
PROJECT_COLUMNS = [("ID", "id"), ("Name", "name"), ("Full name", "fullName"), ("Closed", "isClosed")]
