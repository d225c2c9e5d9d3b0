"""Cheap timestamp extraction from append-only JSONL session logs.

Session files grow without bound, so only a fixed-size head and tail are
read: the first line carries the session start and the last non-empty
line carries the most recent activity.
"""

import os
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

import orjson

HEAD_BYTES = 8192
TAIL_BYTES = 65536
TIMESTAMP_KEYS = ("timestamp", "ts")


@dataclass(frozen=True)
class FirstLastLines:
    first: str
    last: str


def read_first_last_line(path: Path) -> FirstLastLines | None:
    """Return the first and last non-empty lines of *path*.

    The first line may be truncated at HEAD_BYTES; only its leading fields
    need to parse. Returns None for empty or unreadable files.
    """
    try:
        with open(path, "rb") as f:
            head = f.read(HEAD_BYTES)
            if not head:
                return None
            chunk = head.decode("utf-8", errors="replace")
            nl = chunk.find("\n")
            first = chunk[:nl] if nl >= 0 else chunk

            size = os.fstat(f.fileno()).st_size
            if size < 2:
                return FirstLastLines(first, first)

            read_size = min(TAIL_BYTES, size)
            f.seek(size - read_size)
            tail = f.read(read_size).decode("utf-8", errors="replace")
    except OSError:
        return None

    lines = [line for line in tail.split("\n") if line.strip()]
    last = lines[-1] if lines else first
    return FirstLastLines(first, last)


def _to_datetime(value) -> datetime | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        # Epoch milliseconds
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str):
        try:
            ts = datetime.fromisoformat(value)
        except ValueError:
            return None
        if ts.tzinfo is None:
            ts = ts.replace(tzinfo=timezone.utc)
        return ts
    return None


def parse_timestamp(line: str) -> datetime | None:
    """Extract the record timestamp from one JSONL line, or None."""
    try:
        rec = orjson.loads(line)
    except orjson.JSONDecodeError:
        return None
    if not isinstance(rec, dict):
        return None

    for key in TIMESTAMP_KEYS:
        value = rec.get(key)
        if value:
            return _to_datetime(value)
    return None
