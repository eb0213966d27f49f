from datetime import date

import pytest

from workplan.errors import CyclicDependency, DuplicateTaskId, UnknownDependency
from workplan.models import RawTask
from workplan.resolver import build_dag, check_references, find_cycle, resolve_order

START = date(2024, 8, 1)


def task(tid, *deps, resource=None):
    return RawTask(tid, f"Task {tid}", START, 1, dependencies=deps, resource=resource)


def test_order_follows_input_when_ready():
    tasks = [task("A"), task("B", "A"), task("C", "B")]
    assert resolve_order(tasks) == [0, 1, 2]


def test_dependency_later_in_input_waits_for_next_pass():
    # P is checked before Q within the first pass, so R overtakes it.
    tasks = [task("P", "Q"), task("Q"), task("R")]
    assert resolve_order(tasks) == [1, 2, 0]


def test_unknown_dependency_reported_before_relaxation():
    tasks = [task("A", "B"), task("B", "A"), task("C", "Z")]
    with pytest.raises(UnknownDependency) as exc:
        resolve_order(tasks)
    assert exc.value.task_id == "C"
    assert exc.value.missing_id == "Z"


def test_duplicate_ids_rejected():
    with pytest.raises(DuplicateTaskId) as exc:
        check_references([task("A"), task("A")])
    assert exc.value.task_id == "A"


def test_two_task_cycle():
    with pytest.raises(CyclicDependency) as exc:
        resolve_order([task("A", "B"), task("B", "A")])
    assert exc.value.task_ids == ["A", "B"]
    assert set(exc.value.cycle) == {"A", "B"}
    assert "Circular dependency" in str(exc.value)


def test_cycle_reports_blocked_dependants_too():
    tasks = [task("X"), task("A", "C"), task("B", "A"), task("C", "B"), task("D", "A")]
    with pytest.raises(CyclicDependency) as exc:
        resolve_order(tasks)
    assert exc.value.task_ids == ["A", "B", "C", "D"]
    assert set(exc.value.cycle) == {"A", "B", "C"}


def test_self_dependency_is_a_cycle():
    with pytest.raises(CyclicDependency) as exc:
        resolve_order([task("A", "A")])
    assert exc.value.task_ids == ["A"]


def test_build_dag_edges_point_at_dependants():
    G = build_dag([task("A"), task("B", "A"), task("C", "A", "B")])
    assert set(G.successors("A")) == {"B", "C"}
    assert set(G.predecessors("C")) == {"A", "B"}
    assert find_cycle([task("A"), task("B", "A")]) is None
