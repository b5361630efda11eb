"""
CLI for kushn.

Provides command-line interface for writing hash manifests and inspecting
ignore rules.
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from kushn.core.config import KushnConfig, load_config
from kushn.core.errors import KushnError
from kushn.core.path_utils import validate_scan_root
from kushn.services import ManifestService

# Initialize Rich Console
console = Console()

app = typer.Typer(
    name="kushn",
    help="kushn - SHA-256 manifests for directory trees",
    add_completion=False,
)

# Number of failed files listed before the rest are summarized
_MAX_LISTED_FAILURES = 5


def _configure_logging(config: KushnConfig, verbose: bool) -> None:
    """Route log records through Rich so they share the CLI console."""
    level = "DEBUG" if verbose else config.logging.level.upper()
    logging.basicConfig(
        level=level,
        format=config.logging.format,
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def get_service(
    config_path: Optional[Path] = None,
    verbose: bool = False,
) -> ManifestService:
    """
    Initialize the manifest service from .env, config file and defaults.

    Args:
        config_path: Optional YAML or JSON config file
        verbose: Force DEBUG logging

    Returns:
        Configured ManifestService
    """
    load_dotenv()
    config = load_config(config_path)
    _configure_logging(config, verbose)
    return ManifestService(config)


def _check_root(root: Path) -> None:
    validation = validate_scan_root(root)
    if not validation.valid:
        console.print(f"[bold red]Error:[/bold red] {validation.error_message}")
        raise typer.Exit(1)


@app.command()
def scan(
    root: Optional[Path] = typer.Option(
        None, "--root", "-r", help="Directory to scan (default: current directory)"
    ),
    name: Optional[str] = typer.Option(
        None, "--name", "-n", help="Output file name for the generated hashes manifest"
    ),
    workers: Optional[int] = typer.Option(
        None, "--workers", "-w", help="Number of hashing threads"
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to a YAML or JSON config file"
    ),
    self_hash: Optional[bool] = typer.Option(
        None, "--self-hash/--no-self-hash", help="Append a record for the manifest file itself"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """Hash every file under a directory and write the manifest."""
    root = root if root is not None else Path.cwd()
    _check_root(root)

    try:
        service = get_service(config_path, verbose)
        cfg = service.config

        # Use config values if not overridden by CLI
        if name is not None:
            cfg.output.file_name = name
        if workers is not None:
            cfg.scan.max_workers = workers
        if self_hash is not None:
            cfg.output.include_self_hash = self_hash

        with console.status(f"[bold blue]Scanning[/bold blue] {root}..."):
            result = service.run(root)

    except (KushnError, OSError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    # Summary Panel
    summary = Table.grid(padding=1)
    summary.add_column(style="bold")
    summary.add_column()
    summary.add_row("Files Hashed:", str(result.total_files))
    summary.add_row("Output:", str(result.output_path))
    summary.add_row("Duration:", f"{result.duration_seconds:.2f}s")

    if result.failed_files:
        summary.add_row("Skipped Files:", f"[red]{len(result.failed_files)}[/red]")

    console.print(
        Panel(
            summary,
            title="[bold green]Manifest Complete[/bold green]",
            border_style="green",
            expand=False,
        )
    )

    if result.failed_files:
        console.print("\n[bold red]Skipped Files:[/bold red]")
        for f in result.failed_files[:_MAX_LISTED_FAILURES]:
            console.print(f"  - {f}")
        if len(result.failed_files) > _MAX_LISTED_FAILURES:
            console.print(f"  ... and {len(result.failed_files) - _MAX_LISTED_FAILURES} more")

    console.print(f"File hashes generated and saved to {result.output_path.name}.")


@app.command("hash")
def hash_file(
    file: Path = typer.Argument(..., help="File to hash"),
    root: Optional[Path] = typer.Option(
        None, "--root", "-r", help="Scan root for relative paths and ignore rules"
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to a YAML or JSON config file"
    ),
):
    """Print the SHA-256 of a single file unless it is ignored."""
    root = root if root is not None else Path.cwd()
    _check_root(root)

    try:
        service = get_service(config_path)
        record = service.hash_single_file(root, file)
    except KushnError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    if record is None:
        console.print(f"[yellow]Ignored:[/yellow] {file}")
        return

    console.print(f"{record.hash}  {record.path}", highlight=False)


@app.command("check-ignore")
def check_ignore(
    paths: list[str] = typer.Argument(..., help="Paths relative to the scan root"),
    root: Optional[Path] = typer.Option(
        None, "--root", "-r", help="Scan root holding the ignore file"
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to a YAML or JSON config file"
    ),
):
    """Report whether each path is excluded by the ignore rules."""
    root = root if root is not None else Path.cwd()
    _check_root(root)

    try:
        service = get_service(config_path)
    except KushnError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    ignore_set = service.load_ignore_set(root)

    table = Table(title=f"Ignore rules: {len(ignore_set)}")
    table.add_column("Path")
    table.add_column("Status")

    for rel_path in paths:
        is_dir = (root / rel_path).is_dir()
        if ignore_set.is_excluded(rel_path, is_dir=is_dir):
            table.add_row(rel_path, "[red]ignored[/red]")
        else:
            table.add_row(rel_path, "[green]included[/green]")

    console.print(table)


def main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()
