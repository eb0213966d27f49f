"""MCP server for workplan — exposes the schedule engine to AI assistants."""

from __future__ import annotations

import json

from mcp.server.fastmcp import FastMCP

from workplan.resolver import resolve_order
from workplan.scheduler import (
    build_tasks,
    project_span,
    resolve_records,
    resource_summary,
    validate_durations,
)

mcp = FastMCP(
    "workplan",
    instructions="""\
workplan resolves a list of tasks into a dated schedule on a Monday-Friday \
working calendar. Nothing is stored: every call takes the complete task list \
and returns a complete schedule.

Each task is a dict with:
- **id**: unique identifier (defaults to the title when omitted)
- **title**: display name
- **start_date**: earliest start, YYYY-MM-DD
- **working_duration**: whole working days, first day included
- **dependencies**: list of task ids that must finish first
- **resource**: optional name of an exclusive executor

A task starts no earlier than its start_date, the day after its latest \
dependency ends, and the day after the previous task on the same resource \
ends. Starts that land on a weekend move to the following Monday.

Use check_tasks to validate a list and see the processing order. Use \
schedule_tasks to get effective start and end dates for every task. When the \
user changes one task, send the whole list again.\
""",
)


# ---------------------------------------------------------------------------
# Read-only tools
# ---------------------------------------------------------------------------


@mcp.tool()
def schedule_tasks(tasks: list[dict]) -> str:
    """Resolve a task list into a schedule.

    Args:
        tasks: Task dicts with id, title, start_date (YYYY-MM-DD),
            working_duration, dependencies and resource

    Returns the resolved tasks as JSON, sorted by resource then start date,
    or an "Error: ..." message.
    """
    try:
        resolved = resolve_records(tasks)
    except ValueError as e:
        return f"Error: {e}"

    result: dict = {"tasks": [r.to_dict() for r in resolved]}
    span = project_span(resolved)
    if span:
        result["project_start"] = span[0].isoformat()
        result["project_end"] = span[1].isoformat()
        result["resources"] = [row.to_dict() for row in resource_summary(resolved)]
    return json.dumps(result, indent=2)


@mcp.tool()
def check_tasks(tasks: list[dict]) -> str:
    """Validate a task list without computing dates.

    Args:
        tasks: Task dicts in the same shape schedule_tasks accepts

    Returns the processing order (task ids) as JSON, or an "Error: ..."
    message naming the offending task.
    """
    try:
        raw = build_tasks(tasks)
        validate_durations(raw)
        order = resolve_order(raw)
    except ValueError as e:
        return f"Error: {e}"
    return json.dumps({"order": [raw[i].id for i in order]})


def main():
    """Entry point for the MCP server."""
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
