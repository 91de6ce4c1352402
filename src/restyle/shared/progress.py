"""Rich progress display for CLI runs."""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn

console = Console()


class StepProgress:
    """A phase banner and one spinner for a single analyze or redesign run.

    ``update`` has the ``on_progress`` signature, so it can be handed
    straight to the orchestrators.
    """

    def __init__(self, step: str, *, console: Console = console) -> None:
        self.step = step
        self._progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            TimeElapsedColumn(),
            console=console,
            transient=False,
        )
        self._task_id = self._progress.add_task(f"[cyan]{step}[/]", total=None)

    def __enter__(self) -> "StepProgress":
        self._progress.__enter__()
        return self

    def __exit__(self, *args: object) -> None:
        self._progress.__exit__(*args)

    @property
    def description(self) -> str:
        return self._progress.tasks[0].description

    def update(self, message: str) -> None:
        self._progress.update(self._task_id, description=f"[cyan]{self.step}[/] — {message}")

    def finish(self) -> None:
        self._progress.update(self._task_id, description=f"[green]✓ {self.step}[/]", completed=True)

    def fail(self, error: str) -> None:
        self._progress.update(self._task_id, description=f"[red]✗ {self.step}: {error}[/]", completed=True)

    def print_phase(self, label: str) -> None:
        self._progress.console.print(Panel(f"[bold]{label}[/bold]", style="blue"))
