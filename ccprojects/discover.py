"""Locate project directories and their JSONL session logs."""

from __future__ import annotations

import os
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

SESSION_SUFFIX = ".jsonl"
SUBAGENT_DIR = "subagents"
TMP_PREFIX = "-tmp"
TMP_NAME = "/tmp"
HOME_NAME = "~"


class DirectoryUnreadable(Exception):
    """The sessions root could not be listed."""

    def __init__(self, path: Path, reason: str = "") -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read {path}")


@dataclass(frozen=True)
class SessionFile:
    path: Path
    project: str
    autonomous: bool = False


def default_projects_dir() -> Path:
    """Return the sessions root.

    Honors CLAUDE_CONFIG_DIR, then falls back to ~/.claude/projects or
    ~/.config/claude/projects, whichever exists.
    """
    env = os.environ.get("CLAUDE_CONFIG_DIR")
    if env:
        return Path(env).expanduser() / "projects"

    candidates = [
        Path.home() / ".claude" / "projects",
        Path.home() / ".config" / "claude" / "projects",
    ]
    for candidate in candidates:
        if candidate.is_dir():
            return candidate
    return candidates[0]


def clean_project_name(dir_name: str) -> str:
    """Convert a directory name like '-home-ove-projects-foo' to 'foo'."""
    if dir_name.startswith(TMP_PREFIX):
        return TMP_NAME

    parts = [p for p in dir_name.split("-") if p]
    if parts and parts[0] == "home" and len(parts) >= 2:
        rest = parts[2:]
        if not rest:
            return HOME_NAME
        if rest[0] == "projects":
            rest = rest[1:]
        return "-".join(rest) or HOME_NAME
    return dir_name


def _list_dir(path: Path) -> list[Path]:
    try:
        return sorted(path.iterdir())
    except OSError:
        return []


def _is_dir(path: Path) -> bool:
    try:
        return path.is_dir()
    except OSError:
        return False


def _is_session(path: Path) -> bool:
    try:
        return path.suffix == SESSION_SUFFIX and path.is_file()
    except OSError:
        return False


def list_project_dirs(root: Path) -> list[Path]:
    """Return project directories directly under *root*, sorted by name.

    Raises:
        DirectoryUnreadable: If *root* is missing or cannot be listed.
    """
    try:
        entries = list(root.iterdir())
    except OSError as exc:
        raise DirectoryUnreadable(root, exc.strerror or str(exc)) from exc

    return sorted((e for e in entries if _is_dir(e)), key=lambda p: p.name)


def iter_session_files(project_dir: Path, project: str) -> Iterator[SessionFile]:
    """Yield main sessions first, then sub-agent sessions, for one project.

    An unreadable project or subagents directory simply yields nothing.
    """
    entries = _list_dir(project_dir)

    # Main sessions: <project>/*.jsonl
    for entry in entries:
        if _is_session(entry):
            yield SessionFile(entry, project, autonomous=False)

    # Sub sessions: <project>/<uuid>/subagents/*.jsonl
    for entry in entries:
        sub_dir = entry / SUBAGENT_DIR
        if not _is_dir(sub_dir):
            continue
        for sub in _list_dir(sub_dir):
            if _is_session(sub):
                yield SessionFile(sub, project, autonomous=True)


def discover_sessions(root: Path) -> Iterator[SessionFile]:
    """Return every session file under *root*, tagged with its display name.

    The root is listed before returning, so DirectoryUnreadable is raised
    here rather than on first iteration.
    """
    project_dirs = list_project_dirs(root)
    return (
        session
        for project_dir in project_dirs
        for session in iter_session_files(project_dir, clean_project_name(project_dir.name))
    )
