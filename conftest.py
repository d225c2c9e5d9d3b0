"""Shared fixtures: build fake ~/.claude/projects trees."""

import json
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

T0 = datetime(2026, 3, 10, 9, 0, tzinfo=timezone.utc)


def iso(ts: datetime) -> str:
    return ts.isoformat().replace("+00:00", "Z")


def write_session(path: Path, start: datetime, hours: float, key: str = "timestamp") -> Path:
    """Write a two-record JSONL session spanning *hours*."""
    path.parent.mkdir(parents=True, exist_ok=True)
    end = start + timedelta(hours=hours)
    lines = [
        {"type": "user", key: iso(start), "sessionId": path.stem, "message": {"role": "user"}},
        {"type": "assistant", key: iso(end), "sessionId": path.stem, "message": {"role": "assistant"}},
    ]
    path.write_text("".join(json.dumps(rec) + "\n" for rec in lines), encoding="utf-8")
    return path


@pytest.fixture
def projects_root(tmp_path):
    """alpha: 2.0h of main sessions, beta: 3.0h of sub-agent sessions."""
    root = tmp_path / "projects"
    alpha = root / "-home-alice-projects-alpha"
    write_session(alpha / "s1.jsonl", T0, 1.5)
    write_session(alpha / "s2.jsonl", T0 + timedelta(days=1), 0.5)

    beta = root / "-home-alice-projects-beta"
    sub = beta / "0b6c3a7e-1f2d-4c5b-9a8e-7d6c5b4a3f2e" / "subagents"
    write_session(sub / "agent-a.jsonl", T0, 2.0)
    write_session(sub / "agent-b.jsonl", T0, 1.0)
    return root
