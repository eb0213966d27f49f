"""Resolve raw tasks into dated schedules on a working-day calendar."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date

from workplan.errors import InvalidDuration
from workplan.ledger import ResourceLedger
from workplan.logger import get_logger
from workplan.models import RawTask, ResolvedTask
from workplan.resolver import resolve_order
from workplan.workdays import (
    add_working_days,
    calendar_span,
    count_working_days,
    day_after,
    next_working_day,
)

log = get_logger("scheduler")

PROJECT_TOTAL = "Project Total"


def _presentation_key(resolved: ResolvedTask) -> tuple[bool, str, date]:
    # Unassigned tasks sort after every named resource.
    return (resolved.resource is None, resolved.resource or "", resolved.effective_start)


def _effective_start(
    task: RawTask,
    dep_ends: list[date],
    ledger: ResourceLedger,
) -> date:
    start = task.start_date

    if dep_ends:
        start = max(start, day_after(max(dep_ends)))

    if task.resource:
        freed = ledger.earliest_available(task.resource)
        if freed is not None:
            start = max(start, day_after(freed))

    # Weekend snap goes last so a constraint-pushed date is still corrected.
    return next_working_day(start)


def validate_durations(tasks: Sequence[RawTask]) -> None:
    """Raise InvalidDuration for the first task shorter than one working day."""
    for task in tasks:
        if task.working_duration < 1:
            raise InvalidDuration(task.id, task.working_duration)


def resolve_schedule(tasks: Sequence[RawTask]) -> list[ResolvedTask]:
    """Compute effective start and end dates for every task.

    Tasks are processed in dependency order (see ``resolve_order``). Each
    task starts no earlier than its own start date, the day after its
    latest dependency ends, and the day after the previous task on its
    resource ends, snapped forward off weekends.

    The result is sorted for display: by resource name, unassigned tasks
    last, then by effective start.

    Raises a ScheduleError subclass on the first problem found; no partial
    schedule is ever returned.
    """
    validate_durations(tasks)
    order = resolve_order(tasks)
    index = {task.id: i for i, task in enumerate(tasks)}
    ends: list[date | None] = [None] * len(tasks)
    ledger = ResourceLedger()
    results: list[ResolvedTask] = []

    for i in order:
        task = tasks[i]
        dep_ends = [ends[index[dep]] for dep in task.dependencies]
        start = _effective_start(task, dep_ends, ledger)
        end = add_working_days(start, task.working_duration, task.id)

        ends[i] = end
        if task.resource:
            ledger.commit(task.resource, end)

        log.debug(
            "%s: requested %s, start %s, end %s%s",
            task.id,
            task.start_date.isoformat(),
            start.isoformat(),
            end.isoformat(),
            f" on {task.resource}" if task.resource else "",
        )
        results.append(
            ResolvedTask(
                task=task,
                effective_start=start,
                end_date=end,
                calendar_duration=calendar_span(start, end),
            )
        )

    results.sort(key=_presentation_key)
    log.info("Scheduled %d task(s) across %d resource(s)", len(results), len(ledger))
    return results


def build_tasks(records: Iterable[dict]) -> list[RawTask]:
    """Build tasks from JSON-style dicts, reporting a missing field as ValueError."""
    try:
        return [RawTask.from_dict(r) for r in records]
    except KeyError as e:
        raise ValueError(f"task is missing field {e.args[0]!r}") from None


def resolve_records(records: Iterable[dict]) -> list[ResolvedTask]:
    """Build tasks from JSON-style dicts and resolve them."""
    return resolve_schedule(build_tasks(records))


def project_span(resolved: Sequence[ResolvedTask]) -> tuple[date, date] | None:
    """Return (first start, last end) over a schedule, or None if empty."""
    if not resolved:
        return None
    return (
        min(r.effective_start for r in resolved),
        max(r.end_date for r in resolved),
    )


@dataclass(frozen=True)
class ResourceSummary:
    """Workload of one resource, or of the whole project."""

    name: str
    first_start: date
    last_end: date
    working_days: int  # sum of task durations
    span_working_days: int  # Mon-Fri days between first_start and last_end

    @property
    def utilization(self) -> float:
        return self.working_days / self.span_working_days if self.span_working_days else 0.0

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "first_start": self.first_start.isoformat(),
            "last_end": self.last_end.isoformat(),
            "working_days": self.working_days,
            "span_working_days": self.span_working_days,
        }


def resource_summary(resolved: Sequence[ResolvedTask]) -> list[ResourceSummary]:
    """Summarise each resource's schedule, sorted by name, plus a project row.

    The final ``PROJECT_TOTAL`` row spans every task but only counts the
    working days of tasks assigned to a resource. Returns an empty list for
    an empty schedule.
    """
    if not resolved:
        return []

    by_resource: dict[str, list[ResolvedTask]] = {}
    for r in resolved:
        if r.resource:
            by_resource.setdefault(r.resource, []).append(r)

    rows = []
    for name in sorted(by_resource):
        tasks = by_resource[name]
        first = min(t.effective_start for t in tasks)
        last = max(t.end_date for t in tasks)
        rows.append(
            ResourceSummary(
                name=name,
                first_start=first,
                last_end=last,
                working_days=sum(t.working_duration for t in tasks),
                span_working_days=count_working_days(first, last),
            )
        )

    first, last = project_span(resolved)
    rows.append(
        ResourceSummary(
            name=PROJECT_TOTAL,
            first_start=first,
            last_end=last,
            working_days=sum(row.working_days for row in rows),
            span_working_days=count_working_days(first, last),
        )
    )
    return rows
