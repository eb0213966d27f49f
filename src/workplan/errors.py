"""Errors raised while resolving a schedule."""

from __future__ import annotations


class ScheduleError(ValueError):
    """Base class for every failure that aborts a scheduling run."""


class InvalidDuration(ScheduleError):
    """A task asks for fewer than one working day."""

    def __init__(self, task_id: str | None, duration: int):
        self.task_id = task_id
        self.duration = duration
        if task_id is None:
            msg = f"Duration must be at least 1 working day, got {duration}"
        else:
            msg = f"Task {task_id} has invalid duration {duration} (must be at least 1 working day)"
        super().__init__(msg)


class UnknownDependency(ScheduleError):
    """A task depends on an id that is not in the task set."""

    def __init__(self, task_id: str, missing_id: str):
        self.task_id = task_id
        self.missing_id = missing_id
        super().__init__(f"Task {task_id} depends on non-existent task {missing_id}")


class DuplicateTaskId(ScheduleError):
    """Two tasks share the same id."""

    def __init__(self, task_id: str):
        self.task_id = task_id
        super().__init__(f"Task id {task_id} is used more than once")


class CyclicDependency(ScheduleError):
    """Some tasks can never become ready.

    ``task_ids`` lists every blocked task in input order. ``cycle`` is one
    concrete loop among them when one could be identified.
    """

    def __init__(self, task_ids: list[str], cycle: list[str] | None = None):
        self.task_ids = list(task_ids)
        self.cycle = list(cycle) if cycle else None
        msg = f"Circular dependency detected. Could not schedule tasks: {', '.join(self.task_ids)}"
        if self.cycle:
            msg += f" (cycle: {' -> '.join(self.cycle + self.cycle[:1])})"
        super().__init__(msg)


class TaskParseError(ValueError):
    """A task file row could not be turned into a task."""

    def __init__(self, line: int, message: str):
        self.line = line
        super().__init__(f"Line {line}: {message}")
