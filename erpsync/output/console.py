# erpsync Console Output
# Rich-based console output for entity lists, job progress and results

from typing import Optional

from rich.console import Console as RichConsole
from rich.markup import escape
from rich.panel import Panel
from rich.progress import BarColumn, MofNCompleteColumn, Progress, SpinnerColumn, TextColumn
from rich.table import Table

from erpsync.sync.catalog import EntityCatalog
from erpsync.sync.history import RunRecord
from erpsync.sync.job import JobMode, ProgressEvent
from erpsync.sync.result import Classification, ResultStatus, SyncResult, extract_item_issues, summarize

_CLASSIFICATION_STYLES = {
    Classification.SUCCESS: "green",
    Classification.PARTIAL: "yellow",
    Classification.ERROR: "red",
}


class Console:
    """
    Console output manager using Rich.

    Provides formatted output for import and delete jobs.
    """

    def __init__(self, *, verbose: bool = False, colored: bool = True):
        """
        Initialize console.

        Args:
            verbose: Enable verbose output.
            colored: Enable colored output.
        """
        self.verbose = verbose
        self._console = RichConsole(force_terminal=colored, no_color=not colored)

    def print(self, *args, **kwargs) -> None:
        """Print to console."""
        self._console.print(*args, **kwargs)

    def print_error(self, message: str) -> None:
        """Print error message."""
        self._console.print(f"[red]Error:[/red] {message}")

    def print_warning(self, message: str) -> None:
        """Print warning message."""
        self._console.print(f"[yellow]Warning:[/yellow] {message}")

    def print_success(self, message: str) -> None:
        """Print success message."""
        self._console.print(f"[green]{message}[/green]")

    def print_info(self, message: str) -> None:
        """Print info message."""
        self._console.print(f"[blue]{message}[/blue]")

    def print_entities(self, catalog: EntityCatalog, *, show_all: bool = False) -> None:
        """
        Print the entity catalog in import order.

        Args:
            catalog: Entity catalog.
            show_all: Include disabled entities.
        """
        table = Table(show_header=True, header_style="bold")
        table.add_column("#", justify="right")
        table.add_column("Entity")
        table.add_column("Label")
        table.add_column("Status")
        table.add_column("Depends on", style="dim")

        for descriptor in sorted(catalog, key=lambda d: d.import_rank):
            if not show_all and not descriptor.enabled:
                continue

            status = "[green]enabled[/green]" if descriptor.enabled else "[dim]disabled[/dim]"
            depends = ", ".join(descriptor.depends_on) or "-"
            table.add_row(str(descriptor.import_rank), descriptor.key, escape(descriptor.label), status, depends)

        self._console.print(table)

    def print_plan(self, catalog: EntityCatalog, order: list[str], mode: JobMode) -> None:
        """Print the entities a job will process, in execution order."""
        title = "Import order" if mode == JobMode.IMPORT else "Delete order"
        self._console.print(f"[bold]{title}:[/bold]")
        for index, key in enumerate(order, start=1):
            self._console.print(f"  {index:>2}. {escape(catalog.label_for(key))} [dim]({key})[/dim]")

    def print_results(self, results: list[SyncResult], *, mode: JobMode = JobMode.IMPORT) -> None:
        """
        Print per-entity results with nested item issues.

        Args:
            results: Results in execution order.
            mode: Job mode (changes the heading).
        """
        self._console.print()
        heading = "Import results" if mode == JobMode.IMPORT else "Delete results"
        self._console.print(f"[bold]{heading}[/bold]")

        for result in results:
            self._print_result(result)

    def _print_result(self, result: SyncResult) -> None:
        """Print one entity result and its failed/skipped items."""
        # Messages and item fields come from the backend, never markup
        label = escape(result.label)
        message = escape(result.message)
        if result.status == ResultStatus.SUCCESS:
            self._console.print(f"[green]✓[/green] [bold]{label}[/bold] - {message}")
        else:
            self._console.print(f"[red]✗[/red] [bold]{label}[/bold] - [red]{message}[/red]")

        failed, skipped = extract_item_issues(result)

        if failed:
            self._console.print(f"    [red]Failed ({len(failed)}):[/red]")
            for item in failed:
                self._console.print(f"      [red]✗[/red] {self._format_item(item.id, item.name, item.reason)}")

        if skipped:
            self._console.print(f"    [yellow]Skipped ({len(skipped)}):[/yellow]")
            for item in skipped:
                self._console.print(f"      [yellow]○[/yellow] {self._format_item(item.id, item.name, item.reason)}")

        if result.detail is not None and result.detail.skipped_log:
            self._console.print(f"    [yellow]Skipped orders ({len(result.detail.skipped_log)}):[/yellow]")
            lines = result.detail.skipped_log if self.verbose else result.detail.skipped_log[:10]
            for line in lines:
                self._console.print(f"      [dim]{escape(line)}[/dim]")
            hidden = len(result.detail.skipped_log) - len(lines)
            if hidden > 0:
                self._console.print(f"      [dim]... {hidden} more (use --verbose)[/dim]")

    @staticmethod
    def _format_item(item_id, name: Optional[str], reason: Optional[str]) -> str:
        text = f"ID: {escape(str(item_id))}"
        if name:
            text += f" - {escape(name)}"
        if reason:
            text += f" [dim]({escape(reason)})[/dim]"
        return text

    def print_summary(self, results: list[SyncResult], *, mode: JobMode = JobMode.IMPORT, dry_run: bool = False) -> None:
        """
        Print the job summary panel.

        Args:
            results: Results of the job.
            mode: Job mode (changes wording).
            dry_run: Whether this was a dry run.
        """
        summary = summarize(results)
        classification = summary.classification
        style = _CLASSIFICATION_STYLES[classification]

        noun = "import" if mode == JobMode.IMPORT else "delete"
        if dry_run:
            noun = f"{noun} (dry run)"

        if classification == Classification.SUCCESS:
            headline = f"All {summary.success_count} entities completed"
        elif classification == Classification.ERROR:
            headline = f"All {summary.error_count} entities failed"
        else:
            headline = f"{summary.success_count} entities completed, {summary.error_count} failed"

        self._console.print()
        self._console.print(
            Panel(
                f"[{style}]{headline}[/{style}]\n"
                f"Entities: {summary.success_count} succeeded, {summary.error_count} failed, {summary.total} total",
                title=f"Summary: {noun} {classification.value}",
                border_style=style,
            )
        )

    def print_history(self, runs: list[RunRecord]) -> None:
        """Print recorded runs, newest first."""
        if not runs:
            self._console.print("[dim]No runs recorded[/dim]")
            return

        table = Table(show_header=True, header_style="bold")
        table.add_column("Started")
        table.add_column("Job")
        table.add_column("Result")
        table.add_column("Entities", justify="right")
        table.add_column("Failed", style="dim")

        for run in runs:
            summary = summarize(run.results)
            style = _CLASSIFICATION_STYLES[summary.classification]
            job = escape(run.mode)
            if run.import_mode:
                job += f" ({escape(run.import_mode)})"
            if run.dry_run:
                job += " [dim]dry run[/dim]"
            failed = escape(", ".join(r.entity_key for r in run.results if r.status == ResultStatus.ERROR) or "-")
            table.add_row(
                escape(run.started_at),
                job,
                f"[{style}]{summary.classification.value}[/{style}]",
                f"{summary.success_count}/{summary.total}",
                failed,
            )

        self._console.print(table)

    def confirm(self, message: str, default: bool = False) -> bool:
        """
        Ask for confirmation.

        Args:
            message: Confirmation message.
            default: Default value if user just presses enter.

        Returns:
            True if confirmed.
        """
        suffix = " [Y/n]" if default else " [y/N]"
        response = self._console.input(f"{message}{escape(suffix)}: ").strip().lower()

        if not response:
            return default

        return response in ("y", "yes")

    def progress(self, total: int, *, description: str = "Working") -> "ProgressDisplay":
        """Create a progress display bound to this console."""
        return ProgressDisplay(self._console, total, description=description)


class ProgressDisplay:
    """
    Progress bar fed by executor progress events.

    Use as a context manager and pass the instance as on_progress.
    """

    def __init__(self, console: RichConsole, total: int, *, description: str = "Working"):
        self._description = description
        self._progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            console=console,
            transient=True,
        )
        self._task_id = self._progress.add_task(description, total=total)

    def __enter__(self) -> "ProgressDisplay":
        self._progress.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self._progress.update(self._task_id, completed=self._progress.tasks[0].total)
        self._progress.stop()

    def __call__(self, event: ProgressEvent) -> None:
        # Completed count is the number of entities finished before this one
        self._progress.update(
            self._task_id,
            total=event.total,
            completed=event.current_index - 1,
            description=f"{self._description}: {escape(event.current_entity_label)}",
        )


def create_console(*, verbose: bool = False, colored: bool = True) -> Console:
    """
    Create a console instance.

    Args:
        verbose: Enable verbose output.
        colored: Enable colored output.

    Returns:
        Console instance.
    """
    return Console(verbose=verbose, colored=colored)
