"""Command-line interface for biblechallenge.

Built with Typer for commands and Rich for beautiful output.
"""

from datetime import date, datetime
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .canon import BIBLE_BOOKS, TOTAL_CHAPTERS, chapter_count, find_book, korean_name
from .config import get_config
from .db import get_db
from .db.models import Profile
from .errors import ChallengeError
from .groups import GroupManager
from .leaderboard import LeaderboardManager, MonthWindow, member_counts
from .logger import setup_logging
from .progress import ProgressManager

# Create the main app
app = typer.Typer(
    name="biblechallenge",
    help="Track group Bible reading and monthly leaderboards.",
    no_args_is_help=True,
)

# Rich console for pretty output
console = Console()

DATE_FORMATS = ["%Y-%m-%d"]


# ============================================================================
# Helper Functions
# ============================================================================


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {message}")


def _resolve_member(login_id: str) -> Profile:
    """Look up a member or exit with an error."""
    try:
        return GroupManager().get_member(login_id)
    except ChallengeError as e:
        print_error(str(e))
        raise typer.Exit(1)


def _resolve_book(name: str) -> str:
    """Resolve a book name or exit with an error."""
    try:
        return find_book(name)
    except ChallengeError as e:
        print_error(str(e))
        raise typer.Exit(1)


def _resolve_window(year: Optional[int], month: Optional[int]) -> MonthWindow:
    """Build a month window, defaulting missing parts to the current month."""
    current = MonthWindow.current()
    try:
        window = MonthWindow(
            year if year is not None else current.year,
            month if month is not None else current.month,
        )
        # Raises for years outside what datetime.date supports
        window.last_day
        return window
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(1)


def _as_date(value: Optional[datetime]) -> Optional[date]:
    return value.date() if value else None


def _book_label(book: str) -> str:
    return f"{korean_name(book)} ({book})"


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Track group Bible reading and monthly leaderboards."""
    config = get_config()
    setup_logging("DEBUG" if verbose else config.log_level, config.log_file)


# ============================================================================
# Setup and Group Commands
# ============================================================================


@app.command()
def init() -> None:
    """Create the database and the predefined groups."""
    config = get_config()
    errors = config.validate()
    if errors:
        for error in errors:
            print_error(error)
        raise typer.Exit(1)

    try:
        groups = GroupManager().ensure_default_groups(config.group_names)
    except ChallengeError as e:
        print_error(str(e))
        raise typer.Exit(1)

    print_success(f"Database ready at {config.db_path}")
    console.print(f"[dim]Groups: {', '.join(g.group_name for g in groups)}[/dim]")


@app.command("groups")
def list_groups() -> None:
    """List groups and their member counts."""
    db = get_db()
    try:
        groups = db.query_groups()
        counts = member_counts(db.query_memberships(), groups)
    except ChallengeError as e:
        print_error(str(e))
        raise typer.Exit(1)

    if not groups:
        console.print("[dim]No groups yet. Run 'biblechallenge init' first.[/dim]")
        return

    table = Table(title="Groups", show_header=True, header_style="bold magenta")
    table.add_column("Group", style="cyan")
    table.add_column("Members", justify="right")
    for group in groups:
        table.add_row(group.group_name, str(counts[group.id]))
    console.print(table)


@app.command()
def join(
    login_id: str = typer.Argument(..., help="Login ID for the new member"),
    nickname: str = typer.Option(..., "--nickname", "-n", prompt="Nickname"),
    group: str = typer.Option(..., "--group", "-g", prompt="Group name"),
) -> None:
    """Register a member in a group."""
    try:
        member = GroupManager().register_member(login_id, nickname, group)
    except ChallengeError as e:
        print_error(str(e))
        raise typer.Exit(1)

    print_success(f"{member.nickname} joined {group.strip()}")


# ============================================================================
# Reading Commands
# ============================================================================


@app.command("log")
def log_reading(
    login_id: str = typer.Argument(..., help="Member login ID"),
    book: str = typer.Argument(..., help="Book name (English or Korean)"),
    start: int = typer.Argument(..., help="First chapter read"),
    chapters: int = typer.Option(1, "--chapters", "-n", help="Number of chapters read"),
    on: Optional[datetime] = typer.Option(
        None, "--date", "-d", formats=DATE_FORMATS, help="Reading date (default: today)"
    ),
) -> None:
    """Log consecutive chapters read starting at a chapter."""
    member = _resolve_member(login_id)
    book_name = _resolve_book(book)

    try:
        reading = ProgressManager().log_reading(
            member.id, book_name, start, chapters, _as_date(on)
        )
    except ChallengeError as e:
        print_error(str(e))
        raise typer.Exit(1)

    if reading is None:
        print_warning(f"{_book_label(book_name)} {start} already logged for that day")
        return

    print_success(
        f"Logged {_book_label(book_name)} {reading.start_chapter}-{reading.end_chapter} "
        f"({reading.chapters_read} chapters) on {reading.reading_date.isoformat()}"
    )


@app.command()
def mark(
    login_id: str = typer.Argument(..., help="Member login ID"),
    book: str = typer.Argument(..., help="Book name (English or Korean)"),
    chapter: int = typer.Argument(..., help="Chapter read"),
    on: Optional[datetime] = typer.Option(
        None, "--date", "-d", formats=DATE_FORMATS, help="Reading date (default: today)"
    ),
) -> None:
    """Mark a single chapter as read."""
    member = _resolve_member(login_id)
    book_name = _resolve_book(book)

    try:
        created = ProgressManager().mark_chapter(member.id, book_name, chapter, _as_date(on))
    except ChallengeError as e:
        print_error(str(e))
        raise typer.Exit(1)

    if created:
        print_success(f"Marked {_book_label(book_name)} {chapter}")
    else:
        console.print(f"[dim]{_book_label(book_name)} {chapter} already marked for that day.[/dim]")


@app.command()
def recent(
    login_id: str = typer.Argument(..., help="Member login ID"),
    limit: int = typer.Option(7, "--limit", "-l", help="Max readings to show"),
) -> None:
    """Show a member's most recent readings."""
    member = _resolve_member(login_id)

    try:
        readings = ProgressManager().get_recent_readings(member.id, limit=limit)
    except ChallengeError as e:
        print_error(str(e))
        raise typer.Exit(1)

    if not readings:
        console.print("[dim]No readings logged yet.[/dim]")
        return

    table = Table(title=f"Recent Readings - {member.nickname}", header_style="bold")
    table.add_column("Date", style="cyan")
    table.add_column("Book")
    table.add_column("Chapters", justify="right")
    table.add_column("Count", justify="right", style="green")
    for r in readings:
        table.add_row(
            r.reading_date.isoformat(),
            _book_label(r.book),
            f"{r.start_chapter}-{r.end_chapter}" if r.chapters_read > 1 else str(r.start_chapter),
            str(r.chapters_read),
        )
    console.print(table)


# ============================================================================
# Progress Commands
# ============================================================================


@app.command()
def progress(
    login_id: str = typer.Argument(..., help="Member login ID"),
    book: Optional[str] = typer.Option(None, "--book", "-b", help="Show the chapter grid of one book"),
) -> None:
    """Show a member's totals and chapter progress."""
    member = _resolve_member(login_id)
    book_name = _resolve_book(book) if book else None

    manager = ProgressManager()
    try:
        summary = manager.compute_chapter_read_map(member.id)
        latest = manager.get_latest_reading(member.id)
    except ChallengeError as e:
        print_error(str(e))
        raise typer.Exit(1)

    lines = [
        f"[bold]{member.nickname}[/bold]",
        f"This month: [bold]{summary.month_total}[/bold] chapters",
        f"This week: [bold]{summary.week_total}[/bold] chapters",
        f"Completed: {summary.chapters_completed}/{TOTAL_CHAPTERS} "
        f"({summary.completion_percent:.1f}%)",
    ]
    if latest:
        lines.append(
            f"Last read: {_book_label(latest.book)} "
            f"{latest.start_chapter}-{latest.end_chapter}"
        )
    console.print(Panel("\n".join(lines), title="Reading Progress"))

    if book_name:
        grid = Table(title=_book_label(book_name), show_header=False, box=None)
        cells = []
        for chapter in range(1, chapter_count(book_name) + 1):
            count = summary.count(book_name, chapter)
            if count:
                cells.append(f"[bold green]{chapter:>3}[/bold green][dim]x{count}[/dim]")
            else:
                cells.append(f"[dim]{chapter:>3}[/dim]")
        for row_start in range(0, len(cells), 10):
            grid.add_row(*cells[row_start:row_start + 10])
        console.print(grid)
        return

    table = Table(title="Books", header_style="bold magenta")
    table.add_column("Book", style="cyan")
    table.add_column("Read", justify="right")
    table.add_column("%", justify="right")
    for entry in summary.book_progress():
        if entry.chapters_read == 0:
            continue
        style = "green" if entry.is_complete else None
        table.add_row(
            _book_label(entry.book),
            f"{entry.chapters_read}/{entry.chapters_total}",
            f"{entry.percent:.0f}",
            style=style,
        )
    if table.row_count:
        console.print(table)
    else:
        console.print("[dim]No chapters read yet.[/dim]")


@app.command()
def books() -> None:
    """List the 66 books and their chapter counts."""
    table = Table(title=f"Books ({TOTAL_CHAPTERS} chapters)", header_style="bold magenta")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Book", style="cyan")
    table.add_column("Korean")
    table.add_column("Chapters", justify="right")
    for i, (book, chapters) in enumerate(BIBLE_BOOKS, 1):
        table.add_row(str(i), book, korean_name(book), str(chapters))
    console.print(table)


# ============================================================================
# Leaderboard Commands
# ============================================================================


@app.command()
def leaderboard(
    year: Optional[int] = typer.Option(None, "--year", "-y", help="Year (default: this year)"),
    month: Optional[int] = typer.Option(None, "--month", "-m", help="Month 1-12 (default: this month)"),
    login_id: Optional[str] = typer.Option(None, "--login", "-u", help="Highlight this member's group"),
) -> None:
    """Show the monthly group leaderboard."""
    window = _resolve_window(year, month)
    caller_group_id = _resolve_member(login_id).group_id if login_id else None

    try:
        ranked = LeaderboardManager().get_monthly_leaderboard(window, caller_group_id)
    except ChallengeError as e:
        print_error(f"Could not load leaderboard: {e}")
        raise typer.Exit(1)

    if not ranked:
        console.print("[dim]No groups yet. Run 'biblechallenge init' first.[/dim]")
        return

    table = Table(title=f"{window.label} Leaderboard", header_style="bold magenta")
    table.add_column("Rank", justify="right")
    table.add_column("Group", style="cyan")
    table.add_column("Members", justify="right")
    table.add_column("Chapters", justify="right", style="bold yellow")
    for row in ranked:
        name = row.group_name + (" (my group)" if row.is_caller_group else "")
        table.add_row(
            str(row.rank),
            name,
            str(row.progress.member_count),
            str(row.total_chapters),
            style="bold" if row.is_caller_group else None,
        )
    console.print(table)

    if all(row.total_chapters == 0 for row in ranked):
        console.print("[dim]No readings logged this month yet.[/dim]")


@app.command()
def members(
    login_id: str = typer.Argument(..., help="Member login ID"),
    year: Optional[int] = typer.Option(None, "--year", "-y", help="Year (default: this year)"),
    month: Optional[int] = typer.Option(None, "--month", "-m", help="Month 1-12 (default: this month)"),
) -> None:
    """Rank the members of your group for a month."""
    member = _resolve_member(login_id)
    if not member.group_id:
        print_warning(f"{member.nickname} is not in a group")
        raise typer.Exit(1)

    window = _resolve_window(year, month)
    db = get_db()
    try:
        group = db.get_group(member.group_id)
        standings = LeaderboardManager(db).get_group_member_standings(member.group_id, window)
    except ChallengeError as e:
        print_error(str(e))
        raise typer.Exit(1)

    group_name = group.group_name if group else member.group_id
    table = Table(title=f"{group_name} - {window.label}", header_style="bold magenta")
    table.add_column("Rank", justify="right")
    table.add_column("Member", style="cyan")
    table.add_column("Chapters", justify="right", style="bold yellow")
    for rank, entry in enumerate(standings, 1):
        table.add_row(
            str(rank),
            entry.nickname,
            str(entry.total_chapters),
            style="bold" if entry.user_id == member.id else None,
        )
    console.print(table)


# ============================================================================
# Misc Commands
# ============================================================================


@app.command()
def version() -> None:
    """Show version information."""
    from . import __version__

    console.print(f"biblechallenge version {__version__}")


# ============================================================================
# Main Entry Point
# ============================================================================


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
