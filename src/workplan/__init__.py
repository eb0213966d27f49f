"""workplan: resolve task lists into working-day schedules."""

from workplan.errors import (
    CyclicDependency,
    DuplicateTaskId,
    InvalidDuration,
    ScheduleError,
    UnknownDependency,
)
from workplan.models import RawTask, ResolvedTask
from workplan.scheduler import resolve_schedule

__all__ = [
    "CyclicDependency",
    "DuplicateTaskId",
    "InvalidDuration",
    "RawTask",
    "ResolvedTask",
    "ScheduleError",
    "UnknownDependency",
    "resolve_schedule",
]
