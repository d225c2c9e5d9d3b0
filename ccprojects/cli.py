"""Command-line entry point for cc-project-stats."""

import argparse
import re
import sys
from pathlib import Path

from ccprojects.aggregate import DEFAULT_DAYS, build_window, scan
from ccprojects.discover import DirectoryUnreadable, default_projects_dir
from ccprojects.report import rank_projects, render_json, render_table


def parse_days(value: str) -> int:
    """Parse the leading integer of --days ('30d' is 30), else the default."""
    m = re.match(r"\s*([+-]?\d+)", value)
    return int(m.group(1)) if m else DEFAULT_DAYS


class CliParser(argparse.ArgumentParser):
    """Reports bad usage as a one-line error with exit status 1."""

    def error(self, message: str) -> None:
        print(f"Error: {message}", file=sys.stderr)
        sys.exit(1)


def build_parser() -> argparse.ArgumentParser:
    parser = CliParser(
        prog="cc-project-stats",
        description="Time spent per project in Claude Code: hours by you vs AI sub-agents.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="Examples:\n"
               "  cc-project-stats             # last 7 days\n"
               "  cc-project-stats --days=30   # last 30 days\n"
               "  cc-project-stats --all       # all time\n",
    )
    parser.add_argument("--days", type=parse_days, nargs="?", default=DEFAULT_DAYS, const=DEFAULT_DAYS, metavar="N",
                        help=f"Look back N days (default: {DEFAULT_DAYS})")
    parser.add_argument("--all", action="store_true", dest="all_time", help="Show all-time stats (no date filter)")
    parser.add_argument("--json", "-j", action="store_true", help="Print raw JSON")
    parser.add_argument("--dir", type=Path, help="Sessions directory (default: ~/.claude/projects)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Print a scan summary to stderr")
    return parser


def run(args: argparse.Namespace) -> None:
    root = args.dir if args.dir is not None else default_projects_dir()
    window = build_window(args.days, all_time=args.all_time)

    agg = scan(root, window)
    projects = rank_projects(agg.buckets.values())

    if args.verbose:
        stats = agg.stats
        print(
            f"Scanned {stats.files} session files in {stats.projects} projects under {root} "
            f"({stats.counted} counted, {stats.skipped} skipped)",
            file=sys.stderr,
        )

    if args.json:
        render_json(projects, window)
    else:
        render_table(projects, window)


def main(argv: list[str] | None = None) -> None:
    # Unrecognised arguments are ignored
    args, _ = build_parser().parse_known_args(argv)
    try:
        run(args)
    except DirectoryUnreadable as exc:
        print(f"Error: Cannot read {exc.path}", file=sys.stderr)
        sys.exit(1)
    except Exception as exc:  # noqa: BLE001
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
