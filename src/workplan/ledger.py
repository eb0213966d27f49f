"""Per-resource record of when each exclusive executor becomes free."""

from __future__ import annotations

from datetime import date


class ResourceLedger:
    """Remembers the end date of the last task committed to each resource.

    The ledger is consulted in processing order, so the recorded date always
    reflects everything scheduled on that resource so far.
    """

    def __init__(self) -> None:
        self._last_end: dict[str, date] = {}

    def earliest_available(self, resource: str) -> date | None:
        """End date of the most recent task on *resource*, or None if unused."""
        return self._last_end.get(resource)

    def commit(self, resource: str, end_date: date) -> None:
        self._last_end[resource] = end_date

    def __contains__(self, resource: object) -> bool:
        return resource in self._last_end

    def __len__(self) -> int:
        return len(self._last_end)
