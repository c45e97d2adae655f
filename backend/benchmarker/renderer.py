"""Console rendering of status blocks and the downtime report."""
from typing import Optional, Sequence

from rich.console import Console
from rich.markup import escape

from .schemas import DowntimeReport, Target, TickStatus

TIME_FORMAT = "%H:%M:%S"


class ConsoleRenderer:
    """Formats structured results for a terminal."""

    def __init__(self, console: Optional[Console] = None, err_console: Optional[Console] = None):
        self.console = console or Console(highlight=False)
        self.err_console = err_console or Console(stderr=True, highlight=False)

    def error(self, message: str):
        self.err_console.print(f"[red]Error: {escape(message)}[/red]")

    def loaded(self, count: int, path: str):
        self.console.print(f"[bold]Loaded {count} target(s) from '{escape(path)}'[/bold]")

    def initial_check_started(self):
        self.console.print()
        self.console.print("[yellow]Running initial health check...[/yellow]")

    def initial_results(self, targets: Sequence[Target], status: TickStatus):
        """Print one line per target with its kind and result."""
        for target, result in zip(targets, status.results):
            if result.healthy:
                verdict = "[green]✓ healthy[/green]"
            else:
                verdict = "[red]✗ FAILED[/red]"
            self.console.print(f"  {target.icon} \\[{target.kind}] {escape(target.name)} {verdict}")

    def monitoring_started(self, check_interval: float, timeout: float):
        self.console.print()
        self.console.print(
            f"[bold green]✅ All targets healthy. Starting monitoring "
            f"(interval: {check_interval:g}s, timeout: {timeout:g}s)[/bold green]"
        )
        self.console.print()

    def tick(self, targets: Sequence[Target], status: TickStatus):
        """Print the status block for one monitoring tick."""
        self.console.print(f"─── [{status.checked_at.strftime(TIME_FORMAT)}] ───", markup=False)
        for target, result in zip(targets, status.results):
            mark = "[green]✓[/green]" if result.healthy else "[red]✗[/red]"
            self.console.print(f"  {mark} {target.icon} {escape(target.name)}")
        self.console.print("[yellow]⏳ Monitoring... Press Ctrl+C to stop and see results.[/yellow]")

    def report(self, report: DowntimeReport):
        """Print the final downtime report."""
        c = self.console
        c.print()
        c.print("[bold]📊 Downtime Benchmarking Results[/bold]")
        c.print("═══════════════════════════════")
        c.print()

        if not report.downtime_detected:
            c.print("[bold green]✅ No downtime detected! All targets remained healthy.[/bold green]")
            c.print()
            return

        c.print(f"[red]🔴 Failures started at: {report.failures_began_at.strftime(TIME_FORMAT)}[/red]")
        c.print()
        c.print("[bold]📋 Details (sorted by time of first failure):[/bold]")
        c.print()

        for target in report.targets:
            c.print(f"  {target.icon} [bold]{escape(target.name)}[/bold]")
            c.print(
                f"     [red]Total downtime: {target.total_downtime_seconds}s | "
                f"{target.failure_count} failure(s)[/red]"
            )
            for i, window in enumerate(target.windows):
                connector = "└──" if i == target.failure_count - 1 else "├──"
                duration = f"{window.duration_seconds}s".ljust(4)
                c.print(
                    f"     {connector} [red]{duration} @ {window.start.strftime(TIME_FORMAT)}[/red]"
                )
            c.print()

        c.print("───────────────────────────────")
        c.print(f"[bold red]⏱️  Total downtime: {report.total_downtime_seconds}s[/bold red]")
        c.print()
