"""Rich terminal display for cachetidy."""

from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

from cachetidy.models import CacheCleanResult, CacheTarget, format_size

console = Console()

MAX_FAILED_SHOWN = 10


def target_size_label(target: CacheTarget, fast: bool = False) -> str:
    """Size column text: '-' in fast mode, 'n/a' when sizing failed."""
    if target.size_bytes is not None:
        return format_size(target.size_bytes)
    return "-" if fast else "n/a"


def show_targets(targets: list[CacheTarget], fast: bool = False, numbered: bool = False) -> None:
    """Display cache targets as a table."""
    table = Table(show_header=True, header_style="bold")
    if numbered:
        table.add_column("#", justify="right", style="dim", no_wrap=True)
    table.add_column("Target", no_wrap=True)
    table.add_column("Kind", no_wrap=True)
    table.add_column("Size", justify="right", no_wrap=True)
    table.add_column("Path", style="dim", overflow="fold")

    for i, target in enumerate(targets, 1):
        row = [
            escape(target.display_name),
            target.kind_label,
            target_size_label(target, fast),
            escape(target.path),
        ]
        if numbered:
            row.insert(0, str(i))
        table.add_row(*row)

    console.print(table)


def show_scan_tips(include_containers: bool, include_apple: bool) -> None:
    if not include_containers:
        console.print(
            "[dim]Tip: use --include-containers to see sandbox container caches (advanced).[/dim]"
        )
    if not include_apple:
        console.print(
            "[dim]Tip: use --include-apple to include Apple user caches (com.apple.*).[/dim]"
        )


def show_dry_run(targets: list[CacheTarget], fast: bool = False) -> None:
    """List what a real run would move to the Trash."""
    total = "unknown" if fast else format_size(sum(t.size_bytes or 0 for t in targets))
    console.print(
        f"[yellow]DRY RUN[/yellow]: would move [green]{len(targets)}[/green] "
        f"targets (~{total}) to Trash."
    )
    for target in targets:
        console.print(f"  [dim]-[/dim] {escape(target.path)}")


def show_clean_summary(result: CacheCleanResult) -> None:
    """Display the Requested/Trashed/Failed summary."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("Requested", justify="right")
    table.add_column("Trashed", justify="right")
    table.add_column("Failed", justify="right")
    failed = f"[red]{result.failed}[/red]" if result.failed else "0"
    table.add_row(str(result.requested), f"[green]{result.trashed}[/green]", failed)
    console.print(table)

    if result.failed:
        console.print(
            "[yellow]Some items could not be moved to Trash "
            "(in use, permission issue, or locked).[/yellow]"
        )
        for path in result.failed_paths[:MAX_FAILED_SHOWN]:
            console.print(f"  [red]-[/red] {escape(path)}")
        if len(result.failed_paths) > MAX_FAILED_SHOWN:
            console.print(
                f"  [dim]...and {len(result.failed_paths) - MAX_FAILED_SHOWN} more[/dim]"
            )


def show_scanning_progress() -> Progress:
    """Create spinner for scanning and cleaning."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )


def parse_selection(text: str, count: int) -> list[int]:
    """
    Parse a selection like '1,3,5-7' or 'all' into zero-based indexes.

    Args:
        text: User input
        count: Number of items on offer

    Returns:
        Sorted, de-duplicated indexes

    Raises:
        ValueError: If a number or range is malformed or out of bounds
    """
    text = text.strip().lower()
    if not text:
        return []
    if text == "all":
        return list(range(count))

    chosen: set[int] = set()
    for part in text.replace(" ", "").split(","):
        if not part:
            continue
        if "-" in part:
            start_s, _, end_s = part.partition("-")
            start, end = int(start_s), int(end_s)
            if start > end:
                raise ValueError(f"Invalid range: {part}")
        else:
            start = end = int(part)
        if start < 1 or end > count:
            raise ValueError(f"Out of range: {part} (1-{count})")
        chosen.update(range(start - 1, end))
    return sorted(chosen)


def select_targets(targets: list[CacheTarget], fast: bool = False) -> list[CacheTarget]:
    """Show a numbered list and let the user pick targets."""
    show_targets(targets, fast=fast, numbered=True)
    console.print("[dim]Enter numbers (e.g. 1,3,5-7), 'all', or nothing to skip.[/dim]")

    while True:
        user_input = console.input("\n[bold cyan]Select:[/bold cyan] ")
        try:
            indexes = parse_selection(user_input, len(targets))
        except ValueError as e:
            console.print(f"[yellow]{e}[/yellow]")
            continue
        return [targets[i] for i in indexes]


def prompt_each_target(targets: list[CacheTarget], fast: bool = False) -> list[CacheTarget]:
    """Ask yes/no for every target."""
    from rich.prompt import Confirm

    console.print("[dim]Answer yes/no for each cache. Tip: use Ctrl+C to cancel.[/dim]\n")
    selected = []
    for target in targets:
        adv = " [yellow](adv)[/yellow]" if target.is_advanced else ""
        question = (
            f"Move [bold]{escape(target.display_name)}[/bold] "
            f"[dim]{target_size_label(target, fast)}[/dim]{adv} to Trash?"
        )
        if Confirm.ask(question, default=False, console=console):
            selected.append(target)
    return selected


def confirm_action(message: str) -> bool:
    """Ask for confirmation."""
    from rich.prompt import Confirm

    return Confirm.ask(message, default=False, console=console)
