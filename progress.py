from __future__ import annotations

import logging
import time
import threading
from pathlib import Path
from typing import Any, Dict, Optional

from config import CFG

# ------------------------------
# Thread-safe global progress state
# ------------------------------

PROGRESS_LOCK = threading.Lock()


def _log_file_path() -> Path:
    configured = Path(CFG.LOG_FILE)
    if configured.is_absolute():
        return configured
    return Path(__file__).resolve().parent / configured


def _init_logger() -> logging.Logger:
    logger = logging.getLogger("solver.run_log")
    if logger.handlers:
        return logger

    log_path = _log_file_path()
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_path, encoding="utf-8")
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
        logger.propagate = False
    except Exception:
        # If the logger cannot be initialised we silently continue; progress
        # tracking should not break the solver.
        logger.handlers.clear()
    return logger


RUN_LOGGER = _init_logger()


def _log_enabled() -> bool:
    return bool(RUN_LOGGER.handlers)


def _fmt_seconds(seconds: Optional[float]) -> Optional[str]:
    if seconds is None:
        return None
    return f"{seconds:.2f}s"


def _emit_log(event: str, level: int = logging.INFO, **fields: Any) -> None:
    if not _log_enabled():
        return
    extras = [
        f"{key}={value}"
        for key, value in fields.items()
        if value is not None and value != ""
    ]
    try:
        if extras:
            RUN_LOGGER.log(level, "%s | %s", event, " ".join(extras))
        else:
            RUN_LOGGER.log(level, "%s", event)
    except Exception:
        # Logging failures must never bubble back to callers.
        pass


def log_event(event: str, **fields: Any) -> None:
    _emit_log(event, **fields)


def log_warning(event: str, **fields: Any) -> None:
    _emit_log(event, logging.WARNING, **fields)


LOG_STATE: Dict[str, Any] = {
    "run_start": None,
    "phase": "",
    "phase_start": None,
}


def _log_phase_transition_locked(new_phase: str) -> None:
    prev_phase = LOG_STATE.get("phase") or ""
    if new_phase == prev_phase:
        return
    now = _now()
    if prev_phase and LOG_STATE.get("phase_start"):
        duration = max(0.0, now - float(LOG_STATE["phase_start"]))
        _emit_log(
            "Phase finished",
            phase=prev_phase,
            duration=_fmt_seconds(duration),
        )
    LOG_STATE["phase"] = new_phase
    LOG_STATE["phase_start"] = now
    if new_phase:
        _emit_log("Phase started", phase=new_phase)

# Single source of truth for progress consumers (CLI, /progress3)
PROGRESS: Dict[str, Any] = {
    "status": "Idle",          # Idle | Solving | Solved | Error
    "phase": "",               # layouts | unify | assign
    "phase_total": "",         # total items for the phase
    "attempt": "",             # e.g. "layout 3/12"
    "board": "",               # e.g. "4 × 4"
    "percent": 0.0,            # 0..100 float
    "layouts_found": 0,
    "unique_layouts": 0,
    "solution_count": 0,
    "elapsed_start": None,     # t0 (float) when solving started
    "elapsed": 0.0,            # seconds snapshot
    "message": "",             # optional note
    "done": False,             # run completed
    "ok": None,                # success flag if known
    "run_id": 0,               # monotonically increasing identifier
    "stone_count": 0,
}

# ------------------------------
# Helpers
# ------------------------------

def _now() -> float:
    return time.time()

def fmt_elapsed(seconds: float) -> str:
    m, s = divmod(max(0, int(seconds)), 60)
    if m == 0:
        return f"{s}s"
    h, m = divmod(m, 60)
    if h == 0:
        return f"{m}m {s}s"
    return f"{h}h {m}m {s}s"

def reset() -> None:
    with PROGRESS_LOCK:
        current_run_id = PROGRESS["run_id"]
        PROGRESS.update({
            "status": "Idle",
            "phase": "",
            "phase_total": "",
            "attempt": "",
            "board": "",
            "percent": 0.0,
            "layouts_found": 0,
            "unique_layouts": 0,
            "solution_count": 0,
            "elapsed_start": None,
            "elapsed": 0.0,
            "message": "",
            "done": False,
            "ok": None,
            "run_id": current_run_id + 1,
            "stone_count": 0,
        })
        LOG_STATE.update({
            "phase": "",
            "phase_start": None,
            "run_start": None,
        })
        _emit_log("Progress reset", run_id=PROGRESS["run_id"])

def start_timer() -> None:
    with PROGRESS_LOCK:
        now = _now()
        PROGRESS["elapsed_start"] = now
        PROGRESS["elapsed"] = 0.0
        LOG_STATE["run_start"] = now
        _emit_log("Run timer started")

def _touch_elapsed_locked() -> None:
    t0 = PROGRESS.get("elapsed_start")
    if t0 is not None:
        PROGRESS["elapsed"] = _now() - float(t0)

# ------------------------------
# Setters
# ------------------------------

def set_status(v: Any) -> None:
    with PROGRESS_LOCK:
        PROGRESS["status"] = str(v)

def set_phase(v: Any) -> None:
    with PROGRESS_LOCK:
        phase_str = "" if v is None else str(v)
        PROGRESS["phase"] = phase_str
        _log_phase_transition_locked(phase_str)

def set_phase_total(v: Any) -> None:
    with PROGRESS_LOCK:
        PROGRESS["phase_total"] = "" if v is None else str(v)

def set_attempt(v: Any) -> None:
    with PROGRESS_LOCK:
        PROGRESS["attempt"] = "" if v is None else str(v)

def set_board(size: int) -> None:
    s = f"{size} × {size}" if size > 0 else ""
    with PROGRESS_LOCK:
        PROGRESS["board"] = s
        if s:
            _emit_log("Board sized", phase=LOG_STATE.get("phase") or "", board=s)

def set_progress_pct(pct: float) -> None:
    f = max(0.0, min(100.0, float(pct)))
    with PROGRESS_LOCK:
        PROGRESS["percent"] = f
        _touch_elapsed_locked()

def _set_count(key: str, n: int) -> None:
    with PROGRESS_LOCK:
        PROGRESS[key] = max(0, int(n))

def set_layouts_found(n: int) -> None:
    _set_count("layouts_found", n)

def set_unique_layouts(n: int) -> None:
    _set_count("unique_layouts", n)

def set_solution_count(n: int) -> None:
    _set_count("solution_count", n)

def set_stone_count(n: int) -> None:
    _set_count("stone_count", n)

def set_message(msg: Any) -> None:
    with PROGRESS_LOCK:
        PROGRESS["message"] = "" if msg is None else str(msg)

def set_done(ok: Any = None, *, reason: Any = None) -> None:
    """Mark the run complete.

    ``ok`` controls the final status when given (``Solved``/``Error``);
    otherwise an idle status becomes ``Solved``.  ``reason`` is surfaced via
    the ``message`` field.
    """

    final_status: Optional[str] = None
    ok_flag: Optional[bool] = None
    if ok is not None:
        ok_flag = bool(ok)
        final_status = "Solved" if ok_flag else "Error"

    with PROGRESS_LOCK:
        _touch_elapsed_locked()
        now = _now()
        if final_status is not None:
            PROGRESS["status"] = final_status
        elif PROGRESS.get("status") in ("", "Idle", "Solving", None):
            PROGRESS["status"] = "Solved"
            ok_flag = True
        PROGRESS["percent"] = 100.0
        if reason is not None:
            PROGRESS["message"] = str(reason)
        PROGRESS["done"] = True
        if ok_flag is not None:
            PROGRESS["ok"] = ok_flag
        run_start = LOG_STATE.get("run_start")
        if isinstance(run_start, (int, float)):
            total = max(0.0, now - float(run_start))
        else:
            total = None
        LOG_STATE.update({
            "run_start": None,
            "phase_start": None,
        })
        _emit_log(
            "Run finished",
            logging.INFO if PROGRESS.get("ok") is not False else logging.WARNING,
            status=PROGRESS.get("status"),
            ok=PROGRESS.get("ok"),
            duration=_fmt_seconds(total),
            layouts=PROGRESS.get("layouts_found"),
            unique=PROGRESS.get("unique_layouts"),
            solutions=PROGRESS.get("solution_count"),
            message=PROGRESS.get("message"),
        )

# ------------------------------
# Snapshots for the UI
# ------------------------------

def snapshot() -> Dict[str, Any]:
    with PROGRESS_LOCK:
        _touch_elapsed_locked()
        snap = {k: v for k, v in PROGRESS.items() if k != "elapsed_start"}
        snap["elapsed_str"] = fmt_elapsed(PROGRESS["elapsed"])
        return snap

def as_json() -> Dict[str, Any]:
    # Alias used by /progress3
    return snapshot()
