"""Dependency checks and processing order for a task list."""

from __future__ import annotations

from collections.abc import Sequence

import networkx as nx

from workplan.errors import CyclicDependency, DuplicateTaskId, UnknownDependency
from workplan.logger import get_logger
from workplan.models import RawTask

log = get_logger("resolver")


def index_by_id(tasks: Sequence[RawTask]) -> dict[str, int]:
    """Map each task id to its position. Raises DuplicateTaskId on repeats."""
    index: dict[str, int] = {}
    for i, task in enumerate(tasks):
        if task.id in index:
            raise DuplicateTaskId(task.id)
        index[task.id] = i
    return index


def check_references(tasks: Sequence[RawTask]) -> dict[str, int]:
    """Verify that every dependency points at a task in *tasks*.

    Returns the id -> index map so callers need not build it twice.
    """
    index = index_by_id(tasks)
    for task in tasks:
        for dep in task.dependencies:
            if dep not in index:
                raise UnknownDependency(task.id, dep)
    return index


def build_dag(tasks: Sequence[RawTask]) -> nx.DiGraph:
    """Construct the dependency graph, with an edge from each dependency to
    its dependant. References are checked first."""
    check_references(tasks)
    G = nx.DiGraph()
    for task in tasks:
        G.add_node(task.id, task=task)
    for task in tasks:
        for dep in task.dependencies:
            G.add_edge(dep, task.id)
    return G


def find_cycle(tasks: Sequence[RawTask], among: Sequence[str] | None = None) -> list[str] | None:
    """Return the ids along one dependency loop, in dependency order.

    With *among*, only those tasks are searched. Returns None for an
    acyclic graph.
    """
    G = build_dag(tasks)
    if among is not None:
        G = G.subgraph(among)
    try:
        edges = nx.find_cycle(G)
    except nx.NetworkXNoCycle:
        return None
    return [u for u, _ in edges]


def resolve_order(tasks: Sequence[RawTask]) -> list[int]:
    """Return a processing order as indices into *tasks*.

    Every task appears after all of its dependencies. Passes run over the
    input in order until one makes no progress; a task may become ready
    from a dependency resolved earlier in the same pass. Tie-breaks
    therefore follow input order only.
    """
    index = check_references(tasks)
    dep_indices = [[index[dep] for dep in task.dependencies] for task in tasks]

    resolved = [False] * len(tasks)
    order: list[int] = []
    passes = 0
    progress = True
    while progress and len(order) < len(tasks):
        progress = False
        passes += 1
        for i in range(len(tasks)):
            if resolved[i]:
                continue
            if all(resolved[d] for d in dep_indices[i]):
                resolved[i] = True
                order.append(i)
                progress = True

    if len(order) < len(tasks):
        remaining = [tasks[i].id for i in range(len(tasks)) if not resolved[i]]
        cycle = find_cycle(tasks, among=remaining)
        log.debug("Unresolvable tasks after %d passes: %s", passes, ", ".join(remaining))
        raise CyclicDependency(remaining, cycle=cycle)

    log.debug("Processing order resolved in %d pass(es): %s", passes, ", ".join(tasks[i].id for i in order))
    return order
