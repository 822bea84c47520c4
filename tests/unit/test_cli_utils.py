"""
Unit tests for CLI utility functions.

Tests for spinner_progress, QuietConsole, property_table and print_error.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console

from geophylo.cli.utils import QuietConsole, print_error, property_table, spinner_progress


def capture_console() -> tuple[Console, StringIO]:
    buffer = StringIO()
    return Console(file=buffer, force_terminal=False, width=80), buffer


class TestQuietConsole:
    """Tests for QuietConsole."""

    def test_prints_when_not_quiet(self) -> None:
        console, buffer = capture_console()
        QuietConsole(console).print("hello")
        assert "hello" in buffer.getvalue()

    def test_suppressed_when_quiet(self) -> None:
        console, buffer = capture_console()
        QuietConsole(console, quiet=True).print("hello")
        assert buffer.getvalue() == ""

    def test_underlying_console_still_prints(self) -> None:
        console, buffer = capture_console()
        quiet = QuietConsole(console, quiet=True)
        quiet.console.print("error")
        assert "error" in buffer.getvalue()

    def test_delegates_other_attributes(self) -> None:
        console, _ = capture_console()
        assert QuietConsole(console).width == 80


class TestSpinnerProgress:
    """Tests for spinner_progress."""

    def test_yields_progress_with_task(self) -> None:
        console, _ = capture_console()
        with spinner_progress("Working...", console) as progress:
            assert len(progress.tasks) == 1
            assert progress.tasks[0].description == "Working..."

    def test_quiet_progress_is_disabled(self) -> None:
        console, buffer = capture_console()
        with spinner_progress("Working...", console, quiet=True) as progress:
            assert progress.disable
        assert "Working" not in buffer.getvalue()


class TestPropertyTable:
    """Tests for property_table."""

    def test_rows_and_columns(self) -> None:
        table = property_table("Tree t.nwk", [("Leaves", "3"), ("Format", "Newick")])
        assert table.row_count == 2
        assert [column.header for column in table.columns] == ["Property", "Value"]

    def test_bracketed_values_are_shown(self) -> None:
        console, buffer = capture_console()
        console.print(property_table("Sites", [("Taxon", "Latvian [latv1249]")]))
        assert "[latv1249]" in buffer.getvalue()


class TestPrintError:
    """Tests for print_error."""

    def test_prefix_and_message(self) -> None:
        console, buffer = capture_console()
        print_error(console, "All taxa were pruned")
        assert "Error: All taxa were pruned" in buffer.getvalue()

    def test_markup_in_message_is_escaped(self) -> None:
        console, buffer = capture_console()
        print_error(console, "first [bracketed] annotation", prefix="Hint")
        assert "Hint: first [bracketed] annotation" in buffer.getvalue()
