"""CLI UI components (Rich).

Why separate components:
- Keeps command logic apart from visual details.
- Tables/panels can be reused by several commands.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Sequence

from rich.align import Align
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.services.deployment_pipeline import PullResult


def print_banner(console: Console) -> None:
    title = Text("vercel-pull", style="bold cyan")
    subtitle = Text("Download the files of a Vercel deployment", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_choices_table(title: str, rows: Sequence[tuple[str, str]]) -> Table:
    table = Table(title=title)
    table.add_column("#", style="cyan", no_wrap=True, justify="right")
    table.add_column("Name", style="white")
    table.add_column("Details", style="dim")
    for index, (name, details) in enumerate(rows, start=1):
        table.add_row(str(index), escape(name), escape(details))
    return table


def build_summary_table(result: PullResult) -> Table:
    """Summary of a pull run."""

    materialized = result.materialized
    table = Table(title=f"Deployment {escape(result.deployment.url)}")
    table.add_column("Result", style="bright_green", no_wrap=True)
    table.add_column("Count", style="white", justify="right")
    table.add_row("Expected", str(result.total))
    table.add_row("Downloaded", str(len(materialized.downloaded)))
    table.add_row("Skipped", str(len(materialized.skipped)))
    table.add_row("Failed", Text(str(len(materialized.failed)), style="red" if materialized.failed else ""))
    table.add_row("Directories created", str(len(materialized.directories_created)))
    table.caption = f"Output: {escape(str(result.output_dir))}"
    return table


def format_relative_time(timestamp_ms: int | None, *, now: datetime | None = None) -> str:
    """Human readable distance to `timestamp_ms` ("3 hours ago", "in 2 days")."""

    if timestamp_ms is None:
        return "unknown age"
    now = now or datetime.now(timezone.utc)
    then = datetime.fromtimestamp(timestamp_ms / 1000, tz=timezone.utc)
    delta = (then - now).total_seconds()

    seconds = abs(delta)
    minutes = round(seconds / 60)
    hours = round(seconds / 3600)
    days = round(seconds / 86400)

    if seconds < 45:
        text = "a few seconds"
    elif seconds < 90:
        text = "a minute"
    elif minutes < 45:
        text = f"{minutes} minutes"
    elif minutes < 90:
        text = "an hour"
    elif hours < 22:
        text = f"{hours} hours"
    elif hours < 36:
        text = "a day"
    elif days < 26:
        text = f"{days} days"
    elif days < 46:
        text = "a month"
    elif days < 320:
        text = f"{round(days / 30.4)} months"
    elif days < 548:
        text = "a year"
    else:
        text = f"{round(days / 365)} years"

    return f"in {text}" if delta > 0 else f"{text} ago"
