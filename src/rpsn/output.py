"""Terminal output for rpsn: records on stdout, diagnostics on stderr.

Anything a script might parse (tables, ``--json`` documents, counts) is
written to **stdout**. Status lines, warnings, errors and the ``--trace`` /
``--dry-run`` renderings go to **stderr**, so ``rpsn --json task list -p 1 |
jq`` keeps working while tracing.

Formatting follows the terminal: Rich tables when stdout is a TTY, tab-
separated text when it is piped, and raw JSON with ``--json``. Colour is off
under ``NO_COLOR``, ``TERM=dumb`` or ``--no-color``.

:func:`~rpsn.app.main_callback` installs one :class:`OutputManager` per
invocation with :func:`set_output`; the rest of the code calls the
module-level helpers (:func:`info`, :func:`print_records`, ...).
"""

from __future__ import annotations

import json
import os
import sys
from enum import Enum
from typing import Any, Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table


class OutputFormat(str, Enum):
    """How data on stdout is rendered. ``AUTO`` picks RICH or PLAIN."""

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


class OutputManager:
    """Routes data to stdout and diagnostics to stderr.

    Args:
        format: Rendering for stdout data; ``AUTO`` becomes ``RICH`` on an
            interactive, colour-capable terminal and ``PLAIN`` otherwise.
        no_color: Print plain text on stderr and disable Rich styling.
        quiet: Drop ``info``, ``success`` and ``suggest`` messages.
        verbose: Show ``debug`` messages.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose

        if format == OutputFormat.AUTO:
            rich = _is_tty() and not self._no_color
            format = OutputFormat.RICH if rich else OutputFormat.PLAIN
        self._format = format

        self._stdout = Console(
            file=sys.stdout,
            no_color=self._no_color,
            force_terminal=(format == OutputFormat.RICH),
        )
        self._stderr = Console(file=sys.stderr, no_color=self._no_color, stderr=True)

    @property
    def format(self) -> OutputFormat:
        return self._format

    @property
    def is_quiet(self) -> bool:
        return self._quiet

    @property
    def is_verbose(self) -> bool:
        return self._verbose

    # ------------------------------------------------------------------ #
    # stdout
    # ------------------------------------------------------------------ #

    def print_data(self, text: str) -> None:
        print(text, file=sys.stdout, flush=True)

    def print_document(self, data: Any) -> None:
        """Print a free-form JSON value (``config show``).

        JSON and PLAIN formats print indented JSON; RICH highlights it.
        """
        text = json.dumps(data, indent=2, ensure_ascii=False, default=str)
        if self._format == OutputFormat.RICH:
            self._stdout.print(Syntax(text, "json", theme="monokai", word_wrap=True))
        else:
            self.print_data(text)

    def print_records(
        self,
        records: Sequence[dict[str, Any]],
        columns: Sequence[tuple[str, str]],
        title: Optional[str] = None,
    ) -> None:
        """Print API records as a table.

        ``columns`` are ``(header, dotted.key)`` pairs, e.g.
        ``("Status", "status.name")``. With ``--json`` the records are printed
        whole and ``columns`` is ignored; PLAIN output is tab-separated with
        a header line.
        """
        if self._format == OutputFormat.JSON:
            self._print_json(list(records))
            return
        headers = [header for header, _ in columns]
        rows = [[_cell(record, key) for _, key in columns] for record in records]
        if self._format == OutputFormat.PLAIN:
            for line in [headers, *rows]:
                self.print_data("\t".join(line))
            return
        table = Table(title=title, show_header=True, header_style="bold cyan")
        for header in headers:
            table.add_column(header)
        for row in rows:
            table.add_row(*(escape(cell) for cell in row))
        self._stdout.print(table)

    def print_record(self, record: dict[str, Any], fields: Sequence[tuple[str, str]]) -> None:
        """Print one record as ``Label: value`` lines, skipping empty fields."""
        if self._format == OutputFormat.JSON:
            self._print_json(record)
            return
        for label, key in fields:
            value = _cell(record, key)
            if value:
                self.print_data(f"{label}: {value}")

    def _print_json(self, data: Any) -> None:
        self.print_data(json.dumps(data, indent=2, ensure_ascii=False, default=str))

    # ------------------------------------------------------------------ #
    # stderr
    # ------------------------------------------------------------------ #

    def _diagnostic(self, plain: str, styled: str) -> None:
        if self._no_color:
            print(plain, file=sys.stderr, flush=True)
        else:
            self._stderr.print(styled)

    def info(self, message: str) -> None:
        if not self._quiet:
            self._diagnostic(message, escape(message))

    def success(self, message: str) -> None:
        if not self._quiet:
            self._diagnostic(message, f"[green]{escape(message)}[/green]")

    def suggest(self, message: str) -> None:
        """A hint about what to try next, e.g. after missing credentials."""
        if not self._quiet:
            hint = f"→ {message}"
            self._diagnostic(hint, f"[dim]{escape(hint)}[/dim]")

    def warning(self, message: str) -> None:
        """Shown even with ``--quiet``."""
        self._diagnostic(
            f"Warning: {message}", f"[yellow]Warning:[/yellow] {escape(message)}"
        )

    def error(self, message: str) -> None:
        """Shown even with ``--quiet``."""
        self._diagnostic(
            f"Error: {message}", f"[bold red]Error:[/bold red] {escape(message)}"
        )

    def debug(self, message: str) -> None:
        if self._verbose:
            self._diagnostic(f"[debug] {message}", f"[dim]\\[debug] {escape(message)}[/dim]")

    def trace(self, message: str) -> None:
        """A ``--trace`` or ``--dry-run`` line. Never suppressed.

        *message* must already be redacted; it is printed as-is.
        """
        self._diagnostic(message, f"[cyan]{escape(message)}[/cyan]")


def _cell(record: dict[str, Any], dotted_key: str) -> str:
    """Look up ``a.b.c`` in nested dicts and render it as a table cell."""
    value: Any = record
    for part in dotted_key.split("."):
        if not isinstance(value, dict):
            return ""
        value = value.get(part)
    if value is None:
        return ""
    if isinstance(value, bool):
        return "yes" if value else "no"
    if isinstance(value, list):
        return ", ".join(_list_item(item) for item in value)
    return str(value)


def _list_item(item: Any) -> str:
    if isinstance(item, dict):
        return str(item.get("name") or item.get("field") or item)
    return str(item)


def _is_tty() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _should_disable_color() -> bool:
    """``NO_COLOR`` (any value, even empty) or ``TERM=dumb`` turns colour off."""
    return os.environ.get("NO_COLOR") is not None or os.environ.get("TERM") == "dumb"


# ------------------------------------------------------------------ #
# Process-wide instance
# ------------------------------------------------------------------ #

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the installed manager, creating a default one on first use."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    """Forget the installed manager (used between tests)."""
    global _output
    _output = None


def print_data(text: str) -> None:
    get_output().print_data(text)


def print_document(data: Any) -> None:
    get_output().print_document(data)


def print_records(
    records: Sequence[dict[str, Any]],
    columns: Sequence[tuple[str, str]],
    title: Optional[str] = None,
) -> None:
    get_output().print_records(records, columns, title)


def print_record(record: dict[str, Any], fields: Sequence[tuple[str, str]]) -> None:
    get_output().print_record(record, fields)


def info(message: str) -> None:
    get_output().info(message)


def success(message: str) -> None:
    get_output().success(message)


def suggest(message: str) -> None:
    get_output().suggest(message)


def warning(message: str) -> None:
    get_output().warning(message)


def error(message: str) -> None:
    get_output().error(message)


def debug(message: str) -> None:
    get_output().debug(message)


def trace(message: str) -> None:
    get_output().trace(message)
