# solver/isolate.py
import multiprocessing as mp
from typing import List, Optional, Sequence, Tuple
import traceback

from config import CFG
from models import AlphabetOverflowError, Solution, Stone
from solver.layout import Layout

LayoutOutcome = Tuple[Layout, List[Solution], Optional[str]]

# Worker must be top-level (picklable on Windows spawn)
def _solve_worker(task):
    layout, stones, limit = task
    try:
        from solver.assignment import AssignmentSolver  # import inside child
        solutions = AssignmentSolver(layout, stones).find_assignment(limit)
        return ("ok", solutions, None)
    except AlphabetOverflowError as e:
        return ("overflow", [], e)
    except MemoryError:
        return ("err", [], "Child ran out of memory")
    except Exception as e:
        return ("exc", [], f"{e}\n{traceback.format_exc()}")

def run_assignments_isolated(
    layouts: Sequence[Layout],
    stones: Sequence[Stone],
    workers: int,
    limit: Optional[int] = None,
    timeout: Optional[float] = None,
) -> List[LayoutOutcome]:
    """
    Solve every layout on a spawn-context process pool.
    Returns one (layout, solutions, reason) per layout, in layout order;
    reason is non-empty only if that layout's worker failed.
    An AlphabetOverflowError raised in a child is re-raised here.
    """
    if not layouts:
        return []
    timeout = float(CFG.WORKER_TIMEOUT if timeout is None else timeout)
    ctx = mp.get_context("spawn")  # safest on Windows
    tasks = [(layout, list(stones), limit) for layout in layouts]
    outcomes: List[LayoutOutcome] = []

    with ctx.Pool(processes=max(1, int(workers))) as pool:
        pending = [pool.apply_async(_solve_worker, (task,)) for task in tasks]
        for layout, handle in zip(layouts, pending):
            try:
                tag, solutions, reason = handle.get(timeout=timeout)
            except mp.TimeoutError:
                outcomes.append((layout, [], "Stopped before solution (timebox)"))
                continue

            if tag == "ok":
                outcomes.append((layout, solutions, None))
            elif tag == "overflow":
                pool.terminate()
                raise reason
            else:  # "err" / "exc"
                outcomes.append((layout, [], reason))

    return outcomes
