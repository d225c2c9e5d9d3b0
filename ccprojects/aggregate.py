"""Filter sessions by size, date and duration and sum hours per project."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from pathlib import Path

from ccprojects.discover import SessionFile, discover_sessions
from ccprojects.reader import parse_timestamp, read_first_last_line

MIN_FILE_BYTES = 50
MAX_DURATION = timedelta(days=7)
MIN_HOURS = 0.001
DEFAULT_DAYS = 7


@dataclass(frozen=True)
class DateWindow:
    today: date
    cutoff: date | None = None  # None means all time
    days: int = DEFAULT_DAYS

    @property
    def all_time(self) -> bool:
        return self.cutoff is None

    def contains(self, day: date) -> bool:
        if self.cutoff is None:
            return True
        return self.cutoff <= day <= self.today


@dataclass
class ProjectAggregate:
    name: str
    main_hours: float = 0.0
    sub_hours: float = 0.0
    main_sessions: int = 0
    sub_sessions: int = 0

    @property
    def total(self) -> float:
        return self.main_hours + self.sub_hours

    @property
    def sessions(self) -> int:
        return self.main_sessions + self.sub_sessions

    def add(self, hours: float, autonomous: bool) -> None:
        if autonomous:
            self.sub_hours += hours
            self.sub_sessions += 1
        else:
            self.main_hours += hours
            self.main_sessions += 1


@dataclass
class ScanStats:
    projects: int = 0
    files: int = 0
    counted: int = 0

    @property
    def skipped(self) -> int:
        return self.files - self.counted


@dataclass
class Aggregator:
    """Per-project buckets for one run, keyed by display name."""

    window: DateWindow
    buckets: dict[str, ProjectAggregate] = field(default_factory=dict)
    stats: ScanStats = field(default_factory=ScanStats)

    def add(self, project: str, hours: float, autonomous: bool) -> None:
        bucket = self.buckets.get(project)
        if bucket is None:
            bucket = self.buckets[project] = ProjectAggregate(project)
        bucket.add(hours, autonomous)

    def add_file(self, session: SessionFile) -> bool:
        """Apply every filter to one session file; return True if it was counted."""
        self.stats.files += 1
        try:
            st = session.path.stat()
        except OSError:
            return False
        if not large_enough(st.st_size):
            return False
        if not modified_since(st.st_mtime, self.window):
            return False

        lines = read_first_last_line(session.path)
        if lines is None:
            return False
        start = parse_timestamp(lines.first)
        end = parse_timestamp(lines.last)
        if start is None or end is None:
            return False

        hours = session_hours(start, end, self.window)
        if hours is None:
            return False
        self.add(session.project, hours, session.autonomous)
        self.stats.counted += 1
        return True


def build_window(days: int = DEFAULT_DAYS, all_time: bool = False, today: date | None = None) -> DateWindow:
    """Resolve the [cutoff, today] window in local time."""
    if today is None:
        today = datetime.now().astimezone().date()
    cutoff = None if all_time else today - timedelta(days=days)
    return DateWindow(today=today, cutoff=cutoff, days=days)


def large_enough(size: int) -> bool:
    return size >= MIN_FILE_BYTES


def modified_since(mtime: float, window: DateWindow) -> bool:
    """Cheap pre-filter: a file untouched since the cutoff cannot hold a session in range."""
    if window.cutoff is None:
        return True
    midnight = datetime.combine(window.cutoff, datetime.min.time()).astimezone()
    return mtime >= midnight.timestamp()


def session_date(start: datetime) -> date:
    """The local calendar date a session started on."""
    return start.astimezone().date()


def session_hours(start: datetime, end: datetime, window: DateWindow) -> float | None:
    """Return the session length in hours, or None if it must not count.

    Sessions outside the window, running backwards, lasting a week or more
    (clock skew, placeholder timestamps) or shorter than MIN_HOURS are
    rejected.
    """
    if not window.contains(session_date(start)):
        return None
    duration = end - start
    if duration < timedelta(0) or duration >= MAX_DURATION:
        return None
    hours = duration.total_seconds() / 3600
    if hours < MIN_HOURS:
        return None
    return hours


def scan(root: Path, window: DateWindow) -> Aggregator:
    """Walk *root* and aggregate every qualifying session.

    Raises:
        DirectoryUnreadable: If *root* cannot be listed.
    """
    agg = Aggregator(window)
    projects = set()
    for session in discover_sessions(root):
        projects.add(session.project)
        agg.add_file(session)
    agg.stats.projects = len(projects)
    return agg
