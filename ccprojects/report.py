"""Ranked per-project report: rich terminal table or JSON."""

from __future__ import annotations

import json
import math
from collections.abc import Iterable

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from ccprojects.aggregate import DateWindow, ProjectAggregate

MIN_TOTAL_HOURS = 0.01
BAR_WIDTH = 14
NAME_WIDTH = 22

MAIN_STYLE = "cyan"
SUB_STYLE = "yellow"

console = Console(soft_wrap=True)


def rank_projects(buckets: Iterable[ProjectAggregate]) -> list[ProjectAggregate]:
    """Sort projects by total hours, dropping those at or below MIN_TOTAL_HOURS."""
    kept = [p for p in buckets if p.total > MIN_TOTAL_HOURS]
    return sorted(kept, key=lambda p: p.total, reverse=True)


def period_label(window: DateWindow, sep: str = " ") -> str:
    """'last 7 days' or 'all time'; JSON output joins with sep='-'."""
    words = ["all", "time"] if window.all_time else ["last", str(window.days), "days"]
    return sep.join(words)


def _round_half_up(x: float) -> int:
    return math.floor(x + 0.5)


def fmt_hours(h: float) -> str:
    return f"{_round_half_up(h * 10) / 10:.1f}h"


def fmt_pct(part: float, whole: float) -> str:
    return f"{_round_half_up(part / whole * 100)}%"


def bar(main_hours: float, sub_hours: float, max_total: float, width: int = BAR_WIDTH) -> Text:
    """Two-colour bar scaled against *max_total*.

    Each colour is rounded on its own and the filled length is clamped to
    *width*, so the two segments may drift by a cell from the exact total.
    """
    main_filled = _round_half_up(main_hours / max_total * width) if max_total > 0 else 0
    sub_filled = _round_half_up(sub_hours / max_total * width) if max_total > 0 else 0
    filled = min(main_filled + sub_filled, width)

    text = Text()
    text.append("█" * main_filled, style=MAIN_STYLE)
    text.append("█" * max(0, filled - main_filled), style=SUB_STYLE)
    text.append("░" * (width - filled), style="dim")
    return text


def top_summary(projects: list[ProjectAggregate]) -> Text | None:
    """One-line verdict on the busiest project."""
    if not projects:
        return None
    grand_total = sum(p.total for p in projects)
    top = projects[0]

    line = Text()
    line.append("Top: ", style="dim")
    line.append(top.name, style="bold")
    line.append(f", {fmt_pct(top.total, grand_total)} of total, ")
    if top.sub_hours > top.main_hours:
        line.append("AI-led", style=SUB_STYLE)
        line.append(f" ({fmt_pct(top.sub_hours, top.total)} autonomous)")
    else:
        line.append("human-led", style=MAIN_STYLE)
        line.append(f" ({fmt_pct(top.main_hours, top.total)} interactive)")
    return line


def render_table(projects: list[ProjectAggregate], window: DateWindow, out: Console | None = None) -> None:
    """Print the ranked table with per-project bars and totals."""
    out = out or console

    out.print()
    out.print(Text.assemble(("cc-project-stats", "bold"), f"  {period_label(window)}"))
    if window.cutoff is not None:
        out.print(f"{window.cutoff.isoformat()} → {window.today.isoformat()}", style="dim")

    if not projects:
        out.print()
        out.print("No project activity found.", style="bright_black")
        out.print()
        return

    max_total = max(max(p.total for p in projects), 1)

    table = Table(box=box.ROUNDED, expand=False, show_lines=False)
    table.add_column("#", justify="right", style="dim", no_wrap=True)
    table.add_column("Project", style="bold", no_wrap=True, max_width=NAME_WIDTH, overflow="ellipsis")
    table.add_column("", no_wrap=True, width=BAR_WIDTH)
    table.add_column("You", justify="right", style=MAIN_STYLE, no_wrap=True)
    table.add_column("AI", justify="right", style=SUB_STYLE, no_wrap=True)
    table.add_column("Total", justify="right", style="bold", no_wrap=True)
    table.add_column("Sessions", justify="right", style="dim", no_wrap=True)

    for rank, proj in enumerate(projects, start=1):
        table.add_row(
            str(rank),
            Text(proj.name),
            bar(proj.main_hours, proj.sub_hours, max_total),
            fmt_hours(proj.main_hours),
            fmt_hours(proj.sub_hours),
            fmt_hours(proj.total),
            str(proj.sessions),
        )

    total_main = sum(p.main_hours for p in projects)
    total_sub = sum(p.sub_hours for p in projects)
    table.add_section()
    table.add_row(
        "",
        Text("TOTAL", style="bold"),
        "",
        fmt_hours(total_main),
        fmt_hours(total_sub),
        fmt_hours(total_main + total_sub),
        str(sum(p.sessions for p in projects)),
        style="bold",
    )

    out.print(table)
    summary = top_summary(projects)
    if summary is not None:
        out.print(summary)
    out.print()


def report_dict(projects: list[ProjectAggregate], window: DateWindow) -> dict:
    return {
        "period": period_label(window, sep="-"),
        "cutoff": window.cutoff.isoformat() if window.cutoff else None,
        "today": window.today.isoformat(),
        "projects": [
            {
                "name": p.name,
                "mainHours": p.main_hours,
                "subHours": p.sub_hours,
                "total": p.total,
                "sessions": p.sessions,
            }
            for p in projects
        ],
    }


def render_json(projects: list[ProjectAggregate], window: DateWindow) -> None:
    """Output the ranked projects as JSON for programmatic use."""
    print(json.dumps(report_dict(projects, window), indent=2))
