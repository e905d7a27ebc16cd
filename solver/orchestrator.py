# Orchestrator: stones -> layouts -> unique layouts -> colorings
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Union

from config import CFG
from models import AlphabetOverflowError, Solution, Stone
from progress import (
    set_phase, set_phase_total, set_attempt, set_board, set_progress_pct,
    set_layouts_found, set_unique_layouts, set_solution_count, set_stone_count,
    set_status, set_message, log_event, log_warning,
)
from solver.assignment import AssignmentSolver
from solver.isolate import run_assignments_isolated
from solver.layout import Layout, unify
from solver.layout_generator import check_lengths, iter_layouts


# ---------- helpers ----------

@dataclass
class LayoutResult:
    layout: Layout
    solutions: List[Solution] = field(default_factory=list)
    reason: Optional[str] = None  # set only when this layout's worker failed


SolutionCallback = Callable[[Layout, Solution], None]


def _coerce_stones(stones: Iterable[Union[Stone, str]]) -> List[Stone]:
    return [s if isinstance(s, Stone) else Stone(str(s)) for s in stones]


def _resolve_cap(max_solutions: Optional[int]) -> Optional[int]:
    value = CFG.MAX_SOLUTIONS if max_solutions is None else max_solutions
    try:
        value = int(value)
    except (TypeError, ValueError):
        return None
    return value if value >= 0 else None


def _meta(board_size: int, layouts_found: int, unique_layouts: int,
          solution_count: int, t0: float, **extra: Any) -> Dict[str, Any]:
    meta: Dict[str, Any] = {
        "board_size": board_size,
        "layouts_found": layouts_found,
        "unique_layouts": unique_layouts,
        "solution_count": solution_count,
        "elapsed_sec": round(time.time() - t0, 3),
    }
    meta.update(extra)
    return meta


def _assign_sequential(
    layouts: List[Layout],
    stones: List[Stone],
    cap: Optional[int],
    on_solution: Optional[SolutionCallback],
) -> List[LayoutResult]:
    results: List[LayoutResult] = []
    total = 0
    for idx, layout in enumerate(layouts, start=1):
        if cap is not None and total >= cap:
            break
        set_attempt(f"layout {idx}/{len(layouts)}")
        result = LayoutResult(layout)
        results.append(result)
        for solution in AssignmentSolver(layout, stones).iter_assignments():
            result.solutions.append(solution)
            total += 1
            set_solution_count(total)
            if on_solution is not None:
                on_solution(layout, solution)
            if cap is not None and total >= cap:
                break
        set_progress_pct(100.0 * idx / len(layouts))
    set_progress_pct(100.0)
    return results


def _assign_parallel(
    layouts: List[Layout],
    stones: List[Stone],
    workers: int,
    cap: Optional[int],
    on_solution: Optional[SolutionCallback],
) -> List[LayoutResult]:
    set_attempt(f"{len(layouts)} layouts on {workers} workers")
    results: List[LayoutResult] = []
    total = 0
    for layout, solutions, reason in run_assignments_isolated(layouts, stones, workers, limit=cap):
        if cap is not None:
            solutions = solutions[: max(0, cap - total)]
        result = LayoutResult(layout, list(solutions), reason)
        results.append(result)
        if reason:
            log_warning("Layout worker failed", layout=repr(layout), reason=reason.splitlines()[0])
        for solution in result.solutions:
            total += 1
            if on_solution is not None:
                on_solution(layout, solution)
        set_solution_count(total)
        set_progress_pct(100.0 * len(results) / len(layouts))
    return results


# ---------- public entrypoint ----------

def solve_stones(
    stones: Iterable[Union[Stone, str]],
    *,
    workers: Optional[int] = None,
    max_solutions: Optional[int] = None,
    unify_layouts: Optional[bool] = None,
    on_solution: Optional[SolutionCallback] = None,
) -> Tuple[bool, List[LayoutResult], Optional[str], Dict[str, Any]]:
    """
    Returns: (ok, results, reason, meta)
    ``ok`` is False only when the stones cannot form a square board; finding
    no layouts or no colorings is a valid, empty result.
    AlphabetOverflowError is logged and re-raised so the caller decides
    whether to abort.
    """
    t0 = time.time()
    stone_list = _coerce_stones(stones)
    lengths = [len(s) for s in stone_list]
    workers = int(CFG.WORKERS if workers is None else workers)
    unify_layouts = CFG.UNIFY_LAYOUTS if unify_layouts is None else bool(unify_layouts)
    cap = _resolve_cap(max_solutions)

    set_status("Solving")
    set_stone_count(len(stone_list))
    set_phase("layouts")

    board_size, err = check_lengths(lengths)
    if err:
        log_warning("Input rejected", reason=err, stones=len(stone_list))
        set_message(err)
        return False, [], err, _meta(board_size, 0, 0, 0, t0, error="input_shape")

    set_board(board_size)
    all_layouts = list(iter_layouts(lengths))
    set_layouts_found(len(all_layouts))
    log_event("Layouts found", board=board_size, count=len(all_layouts))

    if unify_layouts:
        set_phase("unify")
        layouts = unify(all_layouts)
    else:
        layouts = all_layouts
    set_unique_layouts(len(layouts))

    set_phase("assign")
    set_phase_total(len(layouts))
    try:
        if workers > 1 and len(layouts) > 1:
            results = _assign_parallel(layouts, stone_list, workers, cap, on_solution)
        else:
            results = _assign_sequential(layouts, stone_list, cap, on_solution)
    except AlphabetOverflowError as exc:
        log_warning("Alphabet overflow", symbol=repr(exc.symbol), exit_code=exc.exit_code)
        set_message(str(exc))
        raise

    solution_count = sum(len(r.solutions) for r in results)
    set_solution_count(solution_count)
    meta = _meta(board_size, len(all_layouts), len(layouts), solution_count, t0)
    log_event("Assignments finished", **meta)
    return True, results, None, meta
