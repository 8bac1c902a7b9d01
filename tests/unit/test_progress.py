from __future__ import annotations

import io

from rich.console import Console

from variant_builder.progress import TerminalProgress


def _console(terminal: bool) -> tuple[Console, io.StringIO]:
    buf = io.StringIO()
    return Console(file=buf, force_terminal=terminal, width=80), buf


def test_writes_while_below_threshold() -> None:
    console, buf = _console(terminal=True)
    sink = TerminalProgress(console)

    sink(0.3, "building modules")

    assert "📦   building modules" in buf.getvalue()


def test_silent_near_completion() -> None:
    console, buf = _console(terminal=True)
    sink = TerminalProgress(console)

    sink(0.71, "emitting")
    sink(0.95, "done")

    assert buf.getvalue() == ""


def test_noop_when_not_a_terminal() -> None:
    console, buf = _console(terminal=False)
    TerminalProgress(console)(0.1, "building")
    assert buf.getvalue() == ""
