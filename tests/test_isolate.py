import time

import pytest

import progress
from models import AlphabetOverflowError, Position
from solver.isolate import run_assignments_isolated
from solver.layout import Layout
from solver.orchestrator import solve_stones


def _singles(size):
    return Layout(size, [
        Position(row=r, col=c, horizontal=True, length=1)
        for r in range(size)
        for c in range(size)
    ])


@pytest.fixture(autouse=True)
def _fresh_progress():
    progress.reset()
    yield
    progress.reset()


def test_overflow_in_worker_is_reraised():
    with pytest.raises(AlphabetOverflowError) as info:
        solve_stones(["é", "A", "B", "C"], workers=2, unify_layouts=False)
    assert info.value.exit_code == 5
    assert info.value.symbol == "é"


def test_slow_layouts_hit_the_timebox():
    # 25 distinct single cells: every permutation is a coloring, far too many
    # to collect within the timeout.
    layout = _singles(5)
    stones = [chr(ord("A") + i) for i in range(25)]
    t0 = time.time()
    outcomes = run_assignments_isolated([layout, layout], stones, workers=2, timeout=0.5)
    assert time.time() - t0 < 30
    assert [reason for _, _, reason in outcomes] == ["Stopped before solution (timebox)"] * 2
    assert all(solutions == [] for _, solutions, _ in outcomes)


def test_worker_exception_becomes_layout_reason():
    layout = Layout(2, [
        Position(row=0, col=0, horizontal=True, length=2),
        Position(row=1, col=0, horizontal=True, length=2),
    ])
    outcomes = run_assignments_isolated([layout], ["RGB"], workers=1)
    assert len(outcomes) == 1
    returned, solutions, reason = outcomes[0]
    assert returned == layout
    assert solutions == []
    assert "do not match" in reason


def test_no_layouts_no_pool():
    assert run_assignments_isolated([], ["RG"], workers=2) == []
