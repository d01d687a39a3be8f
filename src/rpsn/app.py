"""Typer application and CLI entry point for rpsn.

This module wires together the root Typer application, its global options,
and the built-in sub-command groups (``me``, ``project``, ``task``, ...).

The root callback takes a read-only snapshot of the process environment and
stores it, together with the global flags, in ``ctx.obj``; commands resolve
credentials from that snapshot via :func:`rpsn.commands.open_client`.

:func:`main` backs the ``rpsn`` console script: it handles Ctrl-C and runs
the app. An :class:`~rpsn.exceptions.RpsnError` becomes a one-line sanitized
message and the error's exit code; anything else is written to a crash log.

See Also:
    :mod:`rpsn.config`: Profile file and credential resolution.
    :mod:`rpsn.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import logging
import os
import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Optional

import typer

from rpsn import __version__
from rpsn.exit_codes import EXIT_GENERIC_FAILURE
from rpsn.redact import SecretRegistry

app = typer.Typer(
    name="rpsn",
    help="Command-line client for the Repsona task-management API.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

# ------------------------------------------------------------------ #
# Sub-commands
# ------------------------------------------------------------------ #

from rpsn.commands.config import config_app  # noqa: E402
from rpsn.commands.file import file_app  # noqa: E402
from rpsn.commands.idlink import idlink_app  # noqa: E402
from rpsn.commands.inbox import inbox_app  # noqa: E402
from rpsn.commands.me import me_app  # noqa: E402
from rpsn.commands.note import note_app  # noqa: E402
from rpsn.commands.project import project_app  # noqa: E402
from rpsn.commands.report import report_app  # noqa: E402
from rpsn.commands.space import space_app  # noqa: E402
from rpsn.commands.tag import tag_app  # noqa: E402
from rpsn.commands.task import task_app  # noqa: E402
from rpsn.commands.user import user_app  # noqa: E402
from rpsn.commands.util import util_app  # noqa: E402
from rpsn.commands.webhook import webhook_app  # noqa: E402

app.add_typer(me_app, name="me", help="The authenticated user.")
app.add_typer(project_app, name="project", help="Projects.")
app.add_typer(task_app, name="task", help="Tasks.")
app.add_typer(note_app, name="note", help="Notes.")
app.add_typer(file_app, name="file", help="Project files.")
app.add_typer(tag_app, name="tag", help="Tags.")
app.add_typer(inbox_app, name="inbox", help="Notifications.")
app.add_typer(space_app, name="space", help="The current space.")
app.add_typer(user_app, name="user", help="Space members.")
app.add_typer(webhook_app, name="webhook", help="Webhooks.")
app.add_typer(idlink_app, name="idlink", help="ID links.")
app.add_typer(config_app, name="config", help="Show configuration (read-only).")
app.add_typer(util_app, name="util", help="Utilities.")
app.add_typer(report_app, name="report", help="Sanitized error reports.")

# Secrets of the current invocation, used to sanitize messages in main().
_secrets: Optional[SecretRegistry] = None


def _version_callback(value: bool) -> None:
    """Eager ``--version`` handler."""
    if value:
        typer.echo(f"rpsn {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    space: Optional[str] = typer.Option(
        None, "--space", help="Space ID (overrides REPSONA_SPACE and the profile)."
    ),
    token: Optional[str] = typer.Option(
        None, "--token", help="API token (overrides REPSONA_TOKEN and the profile)."
    ),
    profile: Optional[str] = typer.Option(
        None, "--profile", help="Profile name from config.toml."
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output format."),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Print the request instead of sending it."
    ),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmations."),
    trace: bool = typer.Option(
        False, "--trace", help="Print every request and response (secrets redacted)."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug output."),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Only print data and errors."
    ),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
) -> None:
    """Global options, applied before any sub-command runs.

    Installs the global :class:`~rpsn.output.OutputManager` from CLI
    flags, snapshots the environment, and stores the shared options in the
    Typer context so that sub-commands can read them via ``ctx.obj``.
    Values already present in ``ctx.obj`` (a test transport, for example)
    are kept.

    Args:
        ctx: Typer invocation context.
        version: Handled eagerly by :func:`_version_callback`.
        space: Space ID override (highest precedence).
        token: API token override (highest precedence).
        profile: Profile name to read credentials from.
        json_output: Print API data as JSON.
        dry_run: Render requests to stderr without sending them.
        yes: Skip interactive confirmations.
        trace: Render every physical request and response to stderr.
        verbose: Show debug messages and retry decisions.
        quiet: Drop info and success messages.
        no_color: Plain stderr, no Rich styling.
    """
    global _secrets
    from rpsn.output import OutputFormat, OutputManager, set_output

    fmt = OutputFormat.JSON if json_output else OutputFormat.AUTO
    set_output(OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose))
    if verbose:
        _setup_logging()

    env = dict(os.environ)
    secrets = SecretRegistry()
    secrets.register_environment(env)
    secrets.register_identifier(space)
    secrets.register(token)
    _secrets = secrets

    ctx.ensure_object(dict)
    ctx.obj.update(
        space=space,
        token=token,
        profile=profile,
        dry_run=dry_run,
        yes=yes,
        trace=trace,
        verbose=verbose,
        env=env,
        secrets=secrets,
    )


def _setup_logging() -> None:
    """Send library debug records (retry decisions) to stderr via Rich."""
    from rich.console import Console
    from rich.logging import RichHandler

    handler = RichHandler(console=Console(stderr=True), show_path=False)
    logger = logging.getLogger("rpsn")
    logger.setLevel(logging.DEBUG)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(handler)


def _setup_signal_handlers() -> None:
    """Ctrl-C prints "Cancelled." and exits 130."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a sanitized crash traceback to disk and return the log file path."""
    from rpsn.config import get_data_dir

    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = get_data_dir() / f"crash-{timestamp}.log"
    log_path.write_text(sanitize(traceback.format_exc()))
    return str(log_path)


def sanitize(message: str) -> str:
    """Redact the current invocation's secrets from *message*."""
    secrets = _secrets if _secrets is not None else SecretRegistry()
    return secrets.sanitize(message)


def main() -> None:
    """CLI entry point invoked by the ``rpsn`` console script.

    Unhandled :class:`~rpsn.exceptions.RpsnError` instances cause a clean
    exit with the error's ``exit_code``. All other exceptions produce a
    crash log and a generic failure exit.

    Raises:
        SystemExit: On every path.
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from rpsn.exceptions import MissingCredentials, RpsnError
        from rpsn.output import error, suggest

        if isinstance(exc, RpsnError):
            error(sanitize(str(exc)))
            if isinstance(exc, MissingCredentials):
                suggest("Set REPSONA_SPACE and REPSONA_TOKEN, or add a profile to config.toml.")
            sys.exit(exc.exit_code)
        else:
            log_path = _write_crash_log(exc)
            error(f"Unexpected error. Crash log written to {log_path}")
            error("Run 'rpsn report generate' to build a sanitized bug report.")
            sys.exit(EXIT_GENERIC_FAILURE)
