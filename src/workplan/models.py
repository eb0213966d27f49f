"""Task records before and after scheduling."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date


@dataclass(frozen=True)
class RawTask:
    """A task as supplied by the caller, before any dates are resolved."""

    id: str
    title: str
    start_date: date  # earliest day the task may begin
    working_duration: int  # Mon-Fri days, first day included
    dependencies: tuple[str, ...] = field(default_factory=tuple)
    resource: str | None = None

    def __post_init__(self) -> None:
        # Keep first occurrence order; drop repeats.
        deps = tuple(dict.fromkeys(self.dependencies))
        object.__setattr__(self, "dependencies", deps)
        if not self.resource:
            object.__setattr__(self, "resource", None)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "start_date": self.start_date.isoformat(),
            "working_duration": self.working_duration,
            "dependencies": list(self.dependencies),
            "resource": self.resource,
        }

    @classmethod
    def from_dict(cls, d: dict) -> RawTask:
        """Build a task from a JSON-style dict.

        ``id`` falls back to ``title`` when absent or empty.
        """
        start = d["start_date"]
        if isinstance(start, str):
            start = date.fromisoformat(start)
        duration = d["working_duration"]
        if isinstance(duration, float) and not duration.is_integer():
            raise ValueError(f"Working duration must be a whole number of days, got {duration}")
        return cls(
            id=d.get("id") or d["title"],
            title=d["title"],
            start_date=start,
            working_duration=int(duration),
            dependencies=tuple(d.get("dependencies", ())),
            resource=d.get("resource"),
        )


@dataclass(frozen=True)
class ResolvedTask:
    """A task with its computed dates."""

    task: RawTask
    effective_start: date
    end_date: date
    calendar_duration: int

    @property
    def id(self) -> str:
        return self.task.id

    @property
    def title(self) -> str:
        return self.task.title

    @property
    def start_date(self) -> date:
        return self.task.start_date

    @property
    def working_duration(self) -> int:
        return self.task.working_duration

    @property
    def dependencies(self) -> tuple[str, ...]:
        return self.task.dependencies

    @property
    def resource(self) -> str | None:
        return self.task.resource

    def to_dict(self) -> dict:
        d = self.task.to_dict()
        d["effective_start"] = self.effective_start.isoformat()
        d["end_date"] = self.end_date.isoformat()
        d["calendar_duration"] = self.calendar_duration
        return d
