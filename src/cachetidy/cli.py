"""CLI interface for cachetidy."""

import logging
import signal
from contextlib import contextmanager
from typing import Iterator, Optional

import typer
from rich.logging import RichHandler

from cachetidy import __version__
from cachetidy.cancellation import CancellationToken, Canceled
from cachetidy.cleaner import CacheCleaner
from cachetidy.config import CacheTidyConfig, load_config
from cachetidy.display import (
    confirm_action,
    console,
    prompt_each_target,
    select_targets,
    show_clean_summary,
    show_dry_run,
    show_scan_tips,
    show_scanning_progress,
    show_targets,
)
from cachetidy.errors import CacheTidyError
from cachetidy.filters import filter_targets, parse_size, top_targets
from cachetidy.models import CacheScanOptions, CacheTarget
from cachetidy.scanner import CacheScanner, containers_root, user_caches_root
from cachetidy.system import MacUserPaths, OsFileSystem
from cachetidy.trash import FinderTrashService

log = logging.getLogger(__name__)

EXIT_FAILED = 1
EXIT_USAGE = 2
EXIT_CANCELED = 130

app = typer.Typer(
    name="cachetidy",
    help="Find disposable macOS caches and move them to the Trash",
    add_completion=False,
)


def make_scanner() -> CacheScanner:
    return CacheScanner(OsFileSystem(), MacUserPaths())


def make_cleaner() -> CacheCleaner:
    return CacheCleaner(FinderTrashService(), OsFileSystem())


def setup_logging(verbose: bool) -> None:
    """Send log records through rich; DEBUG when verbose, WARNING otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@contextmanager
def cancel_on_interrupt() -> Iterator[CancellationToken]:
    """Turn Ctrl+C into a cancellation request for the duration of the block."""
    token = CancellationToken()

    def _handler(signum, frame):
        log.debug("Interrupt received, cancelling")
        token.cancel()

    previous = signal.signal(signal.SIGINT, _handler)
    try:
        yield token
    finally:
        signal.signal(signal.SIGINT, previous)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"cachetidy version {__version__}")
        raise typer.Exit()


def _load_config_or_exit() -> CacheTidyConfig:
    try:
        return load_config()
    except CacheTidyError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(EXIT_USAGE)


def _min_bytes_or_exit(min_size: Optional[str], config: CacheTidyConfig) -> int:
    try:
        return parse_size(min_size) if min_size else config.min_size_bytes
    except CacheTidyError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(EXIT_USAGE)


def _run_scan(options: CacheScanOptions, verbose: bool) -> list[CacheTarget]:
    scanner = make_scanner()
    if verbose:
        home = scanner.home_provider.home_directory()
        console.print(f"[dim]Home:[/dim] {home}")
        console.print(f"[dim]Checking:[/dim] {user_caches_root(home)}")
        if options.include_containers:
            console.print(f"[dim]Checking:[/dim] {containers_root(home)}")

    with cancel_on_interrupt() as token, show_scanning_progress() as progress:
        progress.add_task("Scanning caches...", total=None)
        outcome = scanner.scan(options, token)

    if isinstance(outcome, Canceled):
        console.print("[yellow]Canceled.[/yellow]")
        raise typer.Exit(EXIT_CANCELED)
    return outcome.value


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """cachetidy - trash-first macOS cache cleanup."""


@app.command()
def scan(
    fast: bool = typer.Option(False, "--fast", help="Do not calculate folder sizes (faster)."),
    include_containers: bool = typer.Option(
        False,
        "--include-containers",
        help="Include sandbox container caches under ~/Library/Containers (advanced).",
    ),
    include_apple: bool = typer.Option(
        False, "--include-apple", help="Include Apple user caches (com.apple.*)."
    ),
    min_size: Optional[str] = typer.Option(
        None, "--min-size", help="Minimum size to display (e.g. 1MB, 500KB, 2GB). Default: 1MB."
    ),
    show_zero: bool = typer.Option(False, "--show-zero", help="Include zero-byte targets."),
    top: Optional[int] = typer.Option(None, "--top", help="Show only the top N targets by size."),
    verbose: bool = typer.Option(False, "--verbose", help="Print diagnostic info."),
) -> None:
    """Scan user cache locations and list what could be cleaned."""
    setup_logging(verbose)
    config = _load_config_or_exit()
    min_bytes = _min_bytes_or_exit(min_size, config)
    include_containers = include_containers or config.include_containers
    include_apple = include_apple or config.include_apple

    console.print("[bold]Scanning caches...[/bold]")
    targets = _run_scan(
        CacheScanOptions(fast=fast, include_containers=include_containers), verbose
    )

    if not targets:
        console.print("[yellow]No cache targets found (or access denied).[/yellow]")
        return

    shown = filter_targets(
        targets,
        min_bytes=0 if fast else min_bytes,
        show_zero=show_zero or fast,
        include_apple=include_apple,
        exclude=config.exclude,
    )
    if top is not None and top > 0:
        shown = top_targets(shown, top)

    show_targets(shown, fast=fast)
    console.print(f"\nFound [green]{len(shown)}[/green] targets.")
    show_scan_tips(include_containers, include_apple)


@app.command()
def clean(
    fast: bool = typer.Option(False, "--fast", help="Do not calculate folder sizes (faster)."),
    include_containers: bool = typer.Option(
        False,
        "--include-containers",
        help="Include sandbox container caches under ~/Library/Containers (advanced).",
    ),
    include_apple: bool = typer.Option(
        False, "--include-apple", help="Include Apple user caches (com.apple.*)."
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Simulate actions without moving anything to Trash."
    ),
    mode: Optional[str] = typer.Option(
        None, "--mode", help="Selection mode: 'select' (numbered list) or 'prompt' (yes/no per item)."
    ),
    min_size: Optional[str] = typer.Option(
        None, "--min-size", help="Only include targets at or above this size. Default: 1MB."
    ),
    show_zero: bool = typer.Option(False, "--show-zero", help="Include zero-byte targets."),
    filter_text: Optional[str] = typer.Option(
        None, "--filter", help="Only targets whose name/path contains this text."
    ),
    yes: bool = typer.Option(False, "-y", "--yes", help="Select every match and skip confirmation."),
    verbose: bool = typer.Option(False, "--verbose", help="Print diagnostic info."),
) -> None:
    """Choose cache targets and move them to the Trash."""
    setup_logging(verbose)
    config = _load_config_or_exit()

    mode = (mode or config.mode).strip().lower()
    if mode not in ("select", "prompt"):
        console.print("[red]Invalid --mode.[/red] Use 'select' or 'prompt'.")
        raise typer.Exit(EXIT_USAGE)

    min_bytes = _min_bytes_or_exit(min_size, config)
    include_containers = include_containers or config.include_containers
    include_apple = include_apple or config.include_apple

    targets = _run_scan(
        CacheScanOptions(fast=fast, include_containers=include_containers), verbose
    )
    candidates = filter_targets(
        targets,
        min_bytes=0 if fast else min_bytes,
        show_zero=show_zero or fast,
        include_apple=include_apple,
        text=filter_text,
        exclude=config.exclude,
    )

    if not candidates:
        console.print("[yellow]No cache targets matched your filters.[/yellow]")
        return

    if yes:
        selected = candidates
    elif mode == "prompt":
        selected = prompt_each_target(candidates, fast=fast)
    else:
        selected = select_targets(candidates, fast=fast)

    if not selected:
        console.print("[dim]No selections. Nothing to do.[/dim]")
        return

    if dry_run:
        show_dry_run(selected, fast=fast)
    elif not yes and not confirm_action(f"Move {len(selected)} targets to Trash?"):
        console.print("[dim]Canceled.[/dim]")
        return

    cleaner = make_cleaner()
    with cancel_on_interrupt() as token, show_scanning_progress() as progress:
        task = progress.add_task("Moving selected caches to Trash...", total=None)

        def update_progress(target: CacheTarget, current: int, total: int) -> None:
            progress.update(task, description=f"Trashing {target.display_name} ({current}/{total})")

        outcome = cleaner.move_to_trash(
            selected, dry_run=dry_run, token=token, progress_callback=update_progress
        )

    if isinstance(outcome, Canceled):
        console.print("[yellow]Canceled.[/yellow]")
        raise typer.Exit(EXIT_CANCELED)

    result = outcome.value
    show_clean_summary(result)
    if not result.success:
        raise typer.Exit(EXIT_FAILED)


if __name__ == "__main__":
    app()
