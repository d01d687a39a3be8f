"""Tests for the output formatting system.

Covers:
- OutputFormat resolution (auto -> rich/plain based on TTY)
- NO_COLOR / TERM=dumb color disabling
- stdout vs stderr discipline
- Quiet and verbose modes
- print_records / print_record in JSON, plain and rich modes
- Cell rendering of nested keys, booleans and lists
- Global instance management
"""

from __future__ import annotations

import json

import pytest

from rpsn import output as output_module
from rpsn.output import (
    OutputFormat,
    OutputManager,
    _cell,
    _should_disable_color,
    get_output,
    reset_output,
    set_output,
)


@pytest.fixture()
def non_tty(monkeypatch):
    """Patch stdout.isatty() to return False."""
    monkeypatch.setattr("rpsn.output._is_tty", lambda: False)


@pytest.fixture()
def tty(monkeypatch):
    """Patch stdout.isatty() to return True."""
    monkeypatch.setattr("rpsn.output._is_tty", lambda: True)


TASKS = [
    {
        "id": 7,
        "name": "Write docs",
        "status": {"id": 2, "name": "Doing"},
        "tags": [{"id": 1, "name": "docs"}, {"id": 2, "name": "urgent"}],
        "isClosed": False,
    },
    {"id": 8, "name": "Ship", "status": None, "tags": [], "isClosed": True},
]
COLUMNS = [("ID", "id"), ("Name", "name"), ("Status", "status.name"), ("Tags", "tags")]


# ------------------------------------------------------------------ #
# OutputFormat resolution
# ------------------------------------------------------------------ #


class TestOutputFormatResolution:
    def test_auto_resolves_to_plain_when_not_tty(self, non_tty):
        assert OutputManager(format=OutputFormat.AUTO).format == OutputFormat.PLAIN

    def test_auto_resolves_to_rich_when_tty(self, tty, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("TERM", raising=False)
        assert OutputManager(format=OutputFormat.AUTO).format == OutputFormat.RICH

    def test_no_color_flag_forces_plain_on_tty(self, tty, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        assert OutputManager(no_color=True).format == OutputFormat.PLAIN

    def test_explicit_json_stays_json(self, tty):
        assert OutputManager(format=OutputFormat.JSON).format == OutputFormat.JSON


class TestColorDisabling:
    def test_no_color_env_any_value(self, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "")
        assert _should_disable_color() is True

    def test_term_dumb_disables_color(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "dumb")
        assert _should_disable_color() is True

    def test_normal_term_keeps_color(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm-256color")
        assert _should_disable_color() is False


# ------------------------------------------------------------------ #
# stdout vs stderr discipline
# ------------------------------------------------------------------ #


class TestStdoutStderrDiscipline:
    """Data goes to stdout, every diagnostic to stderr."""

    @pytest.fixture()
    def mgr(self, non_tty):
        return OutputManager(format=OutputFormat.PLAIN, no_color=True, verbose=True)

    def test_print_data_goes_to_stdout(self, capfd, mgr):
        mgr.print_data("hello world")
        captured = capfd.readouterr()
        assert captured.out == "hello world\n"
        assert captured.err == ""

    @pytest.mark.parametrize(
        "method", ["info", "success", "warning", "error", "suggest", "debug", "trace"]
    )
    def test_diagnostics_go_to_stderr(self, capfd, mgr, method):
        getattr(mgr, method)("diagnostic text")
        captured = capfd.readouterr()
        assert captured.out == ""
        assert "diagnostic text" in captured.err

    def test_error_and_warning_prefixes(self, capfd, mgr):
        mgr.error("broke")
        mgr.warning("careful")
        err = capfd.readouterr().err
        assert "Error: broke" in err
        assert "Warning: careful" in err

    def test_trace_is_verbatim(self, capfd, mgr):
        mgr.trace("[trace] -> GET https://[REDACTED].repsona.com/api/me")
        assert capfd.readouterr().err == "[trace] -> GET https://[REDACTED].repsona.com/api/me\n"

    def test_rich_trace_escapes_markup(self, capfd, non_tty, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("TERM", raising=False)
        mgr = OutputManager(format=OutputFormat.PLAIN)
        mgr.trace("[dry-run] Request not sent")
        assert "[dry-run] Request not sent" in capfd.readouterr().err


class TestQuietAndVerbose:
    def test_quiet_suppresses_info_success_suggest(self, capfd, non_tty):
        mgr = OutputManager(no_color=True, quiet=True)
        assert mgr.is_quiet
        mgr.info("a")
        mgr.success("b")
        mgr.suggest("c")
        assert capfd.readouterr().err == ""

    def test_quiet_keeps_errors_warnings_and_trace(self, capfd, non_tty):
        mgr = OutputManager(no_color=True, quiet=True)
        mgr.warning("w")
        mgr.error("e")
        mgr.trace("[trace] t")
        err = capfd.readouterr().err
        assert "Warning: w" in err
        assert "Error: e" in err
        assert "[trace] t" in err

    def test_debug_hidden_by_default(self, capfd, non_tty):
        OutputManager(no_color=True).debug("hidden")
        assert capfd.readouterr().err == ""

    def test_debug_prefix_when_verbose(self, capfd, non_tty):
        mgr = OutputManager(no_color=True, verbose=True)
        assert mgr.is_verbose
        mgr.debug("Rate limit: 57/60")
        assert capfd.readouterr().err == "[debug] Rate limit: 57/60\n"


# ------------------------------------------------------------------ #
# Records
# ------------------------------------------------------------------ #


class TestPrintRecords:
    def test_json_mode_emits_full_records(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.JSON, no_color=True)
        mgr.print_records(TASKS, COLUMNS)
        captured = capfd.readouterr()
        assert json.loads(captured.out) == TASKS
        assert captured.err == ""

    def test_plain_mode_is_tab_separated(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True)
        mgr.print_records(TASKS, COLUMNS, title="Tasks")
        lines = capfd.readouterr().out.splitlines()
        assert lines == [
            "ID\tName\tStatus\tTags",
            "7\tWrite docs\tDoing\tdocs, urgent",
            "8\tShip\t\t",
        ]

    def test_rich_mode_renders_table(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.RICH, no_color=True)
        mgr.print_records(TASKS, COLUMNS, title="Tasks")
        out = capfd.readouterr().out
        assert "Tasks" in out
        assert "Write docs" in out
        assert "docs, urgent" in out

    def test_rich_mode_escapes_markup_in_cells(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.RICH, no_color=True)
        mgr.print_records([{"id": 1, "name": "[bold]literal[/bold]"}], [("Name", "name")])
        assert "[bold]literal[/bold]" in capfd.readouterr().out

    def test_print_record_skips_empty_fields(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True)
        mgr.print_record(TASKS[1], [("ID", "id"), ("Status", "status.name"), ("Closed", "isClosed")])
        assert capfd.readouterr().out.splitlines() == ["ID: 8", "Closed: yes"]

    def test_print_record_json(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.JSON, no_color=True)
        mgr.print_record(TASKS[0], [("ID", "id")])
        assert json.loads(capfd.readouterr().out) == TASKS[0]


class TestCell:
    def test_nested_key(self):
        assert _cell(TASKS[0], "status.name") == "Doing"

    def test_missing_and_null(self):
        assert _cell(TASKS[1], "status.name") == ""
        assert _cell(TASKS[0], "nope") == ""
        assert _cell(TASKS[0], "name.deeper") == ""

    def test_booleans(self):
        assert _cell(TASKS[0], "isClosed") == "no"
        assert _cell(TASKS[1], "isClosed") == "yes"

    def test_list_of_changes_uses_field(self):
        record = {"changes": [{"field": "status", "from": 1, "to": 2}, "plain"]}
        assert _cell(record, "changes") == "status, plain"

    def test_zero_is_rendered(self):
        assert _cell({"priority": 0}, "priority") == "0"


# ------------------------------------------------------------------ #
# Global instance
# ------------------------------------------------------------------ #


class TestGlobalInstance:
    def test_get_output_creates_default(self):
        reset_output()
        assert isinstance(get_output(), OutputManager)
        assert get_output() is get_output()

    def test_set_output_is_used_by_helpers(self, capfd, non_tty):
        set_output(OutputManager(format=OutputFormat.PLAIN, no_color=True))
        output_module.print_data("via helper")
        output_module.info("note")
        captured = capfd.readouterr()
        assert captured.out == "via helper\n"
        assert captured.err == "note\n"

    def test_reset_output(self):
        set_output(OutputManager(no_color=True))
        reset_output()
        assert output_module._output is None
