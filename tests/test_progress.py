"""Tests for the CLI step spinner."""

from __future__ import annotations

import io

from rich.console import Console

from restyle.shared.progress import StepProgress


def _quiet_console() -> Console:
    return Console(file=io.StringIO(), force_terminal=False)


class TestStepProgress:
    def test_update_is_an_on_progress_callback(self) -> None:
        with StepProgress("Website Analyzer", console=_quiet_console()) as progress:
            progress.update("Contacting openai")
            assert progress.description == "[cyan]Website Analyzer[/] — Contacting openai"

    def test_finish_marks_step_done(self) -> None:
        with StepProgress("Website Redesigner", console=_quiet_console()) as progress:
            progress.finish()
            assert progress.description == "[green]✓ Website Redesigner[/]"

    def test_fail_shows_error(self) -> None:
        with StepProgress("Website Analyzer", console=_quiet_console()) as progress:
            progress.fail("no API key")
            assert "no API key" in progress.description
