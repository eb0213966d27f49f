"""Read task lists from CSV files."""

from __future__ import annotations

import csv
import io
from datetime import date
from pathlib import Path

from workplan.errors import TaskParseError
from workplan.models import RawTask

REQUIRED_COLUMNS = ("title", "startDate", "duration")


def parse_csv(text: str) -> list[RawTask]:
    """Parse CSV text into raw tasks, keeping row order.

    The header must name ``title``, ``startDate`` and ``duration``;
    ``id``, ``dependencies`` (semicolon separated ids) and ``resource`` are
    optional. A missing id falls back to the title.
    """
    lines = text.splitlines()
    # Leading blank lines are dropped but still count towards line numbers.
    skipped = 0
    while skipped < len(lines) and not lines[skipped].strip():
        skipped += 1
    header_line = skipped + 1

    reader = csv.DictReader(io.StringIO("\n".join(lines[skipped:])))
    if not reader.fieldnames:
        raise TaskParseError(header_line, "CSV is empty or has no header.")
    reader.fieldnames = [h.strip() for h in reader.fieldnames]
    missing = [c for c in REQUIRED_COLUMNS if c not in reader.fieldnames]
    if missing:
        raise TaskParseError(header_line, f"Invalid header, missing column(s): {', '.join(missing)}")

    tasks: list[RawTask] = []
    for row in reader:
        line = reader.line_num + skipped
        values = {k: (v or "").strip() for k, v in row.items() if k is not None}
        if not any(values.values()):
            continue

        title = values.get("title", "")
        start_str = values.get("startDate", "")
        duration_str = values.get("duration", "")
        if not title or not start_str or not duration_str:
            raise TaskParseError(line, "Each task must have a title, startDate, and duration.")

        try:
            start = date.fromisoformat(start_str)
        except ValueError:
            raise TaskParseError(line, f"Invalid date {start_str!r}. Use YYYY-MM-DD.") from None

        try:
            duration = int(duration_str)
        except ValueError:
            raise TaskParseError(line, f"Invalid duration {duration_str!r}. Must be a positive whole number.") from None
        if duration <= 0:
            raise TaskParseError(line, f"Invalid duration {duration}. Must be a positive whole number.")

        deps = [d.strip() for d in values.get("dependencies", "").split(";") if d.strip()]
        tasks.append(
            RawTask(
                id=values.get("id") or title,
                title=title,
                start_date=start,
                working_duration=duration,
                dependencies=tuple(deps),
                resource=values.get("resource") or None,
            )
        )
    return tasks


def load_csv(path: str | Path) -> list[RawTask]:
    return parse_csv(Path(path).read_text(encoding="utf-8-sig"))


def project_name_from_path(path: str | Path) -> str:
    """Turn ``website-relaunch_q3.csv`` into ``Website Relaunch Q3``."""
    stem = Path(path).stem.replace("-", " ").replace("_", " ")
    return " ".join(word[:1].upper() + word[1:].lower() for word in stem.split())
