"""
UI components module for the treepack CLI.

Provides styled terminal output using Rich for run banners and summaries.
None of this output goes into the aggregated artifact.
"""

from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from treepack.core.file_list import AggregationResult
from treepack.core.tree_walker import ScanStats


def render_scan_banner(
    console: Console,
    root: Path,
    rules_path: Path,
    output_path: Path,
    include_sensitive_config: bool,
) -> None:
    """Show what a directory scan is about to do."""
    grid = Table.grid(padding=(0, 1))
    grid.add_column(style="bold")
    grid.add_column()
    grid.add_row("Directory:", str(root))
    grid.add_row("Rules file:", str(rules_path))
    grid.add_row("Output:", str(output_path))
    grid.add_row(
        ".env files:",
        "[yellow]included[/yellow]" if include_sensitive_config else "withheld",
    )
    console.print(Panel(grid, title="[bold blue]Scanning[/bold blue]", border_style="blue", expand=False))


def render_scan_summary(
    console: Console,
    stats: ScanStats,
    output_path: Path,
    include_sensitive_config: bool,
) -> None:
    """Show the counters of a finished directory scan."""
    summary = Table.grid(padding=1)
    summary.add_column(style="bold")
    summary.add_column()
    summary.add_row("Directories:", str(stats.directories))
    summary.add_row("Files:", str(stats.files))
    summary.add_row("Skipped:", str(stats.skipped))
    env_state = "included" if include_sensitive_config else "withheld"
    summary.add_row(".env files:", f"{stats.sensitive_files} ({env_state})")
    summary.add_row("Duration:", f"{stats.duration_seconds:.2f}s")
    summary.add_row("Output:", str(output_path))

    console.print(
        Panel(
            summary,
            title="[bold green]Scan Complete[/bold green]",
            border_style="green",
            expand=False,
        )
    )


def render_bundle_summary(
    console: Console,
    result: AggregationResult,
    output_path: Path,
    root_folder: str | None = None,
) -> None:
    """Show the counters of a finished file-list bundle."""
    summary = Table.grid(padding=1)
    summary.add_column(style="bold")
    summary.add_column()
    summary.add_row("Added:", str(result.processed))
    summary.add_row("Skipped:", str(result.skipped))
    if result.not_found:
        summary.add_row("Not found:", f"[red]{result.not_found}[/red]")
    summary.add_row("Output:", str(output_path))

    console.print(
        Panel(
            summary,
            title="[bold green]Bundle Complete[/bold green]",
            border_style="green",
            expand=False,
        )
    )

    if result.not_found > 5 and root_folder:
        console.print(
            f"\n[yellow]Tip:[/yellow] many files were not found. Check that '{root_folder}' "
            "is the right root folder and that it contains the listed files."
        )
        console.print("You can pass the absolute project path with --root-folder=/full/path/to/project")
