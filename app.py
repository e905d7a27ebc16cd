# app.py: JSON front end for the stone square solver
from __future__ import annotations
import time
from typing import Any, Dict, List

from flask import Flask, request, jsonify

from solver.orchestrator import solve_stones
from solver.puzzle_generator import generate_puzzles
from solver.board import Board
from stones import parse_stones, parse_lengths
from models import AlphabetOverflowError
from render import render_layout, render_svg, solution_to_dicts

from progress import (
    reset as progress_reset,
    as_json as progress_json,
    start_timer as progress_start,
    fmt_elapsed, set_status, set_done,
)

LAST_RESULT: Dict[str, Any] = {
    "ok": False,
    "reason": "",
    "board_size": 0,
    "layouts_found": 0,
    "unique_layouts": 0,
    "solution_count": 0,
    "stones": [],
    "elapsed_str": "0s",
    "layouts": [],
}

app = Flask(__name__)


@app.after_request
def _no_cache_progress(resp):
    if request.path == "/progress3":
        resp.headers["Cache-Control"] = "no-store, max-age=0"
        resp.headers["Pragma"] = "no-cache"
        resp.headers["Expires"] = "0"
    return resp


def _merge_like_mapping() -> Dict[str, Any]:
    merged: Dict[str, Any] = {}
    payload = request.get_json(silent=True)
    if isinstance(payload, dict):
        merged.update(payload)

    for k, v in request.form.to_dict(flat=False).items():
        merged.setdefault(k, v)
    for k, v in request.args.to_dict(flat=False).items():
        merged.setdefault(k, v)
    return merged


def _error(reason: str, status: int, t0: float, stones: List[str]):
    set_done(False, reason=reason)
    LAST_RESULT.update({
        "ok": False,
        "reason": reason,
        "board_size": 0,
        "layouts_found": 0,
        "unique_layouts": 0,
        "solution_count": 0,
        "stones": stones,
        "elapsed_str": fmt_elapsed(time.time() - t0),
        "layouts": [],
    })
    return jsonify(LAST_RESULT), status


@app.route("/solve", methods=["POST"])
def solve():
    progress_reset()
    progress_start()
    set_status("Solving")
    t0 = time.time()

    like = _merge_like_mapping()
    stones, decoded, err = parse_stones(like)
    if err or not stones:
        seen_keys = ", ".join(list(like.keys())[:8]) or "none"
        return _error(f"Bad stones: {err} (saw keys: {seen_keys})", 400, t0, decoded)

    max_solutions = like.get("max_solutions")
    if isinstance(max_solutions, list):
        max_solutions = max_solutions[0] if max_solutions else None
    try:
        cap = None if max_solutions in (None, "") else int(max_solutions)
    except (TypeError, ValueError):
        return _error(f"Bad max_solutions: {max_solutions!r}", 400, t0, decoded)

    try:
        ok, results, reason, meta = solve_stones(stones, max_solutions=cap)
    except AlphabetOverflowError as e:
        return _error(str(e), 500, t0, decoded)

    if not ok:
        return _error(reason or "No solution (unspecified).", 400, t0, decoded)

    board_size = meta["board_size"]
    layouts_out = []
    for result in results:
        colorings = []
        for solution in result.solutions:
            svg, legend = render_svg(Board.from_solution(board_size, solution))
            colorings.append({
                "placements": solution_to_dicts(solution),
                "svg": svg,
                "legend": legend,
            })
        layouts_out.append({
            "layout": render_layout(result.layout),
            "colorings": colorings,
            "reason": result.reason,
        })

    summary = (
        f"Found {meta['layouts_found']} layouts of which {meta['unique_layouts']} are unique; "
        f"{meta['solution_count']} solution(s) in total."
    )
    set_done(True, reason=summary)
    LAST_RESULT.update({
        "ok": True,
        "reason": summary,
        "board_size": board_size,
        "layouts_found": meta["layouts_found"],
        "unique_layouts": meta["unique_layouts"],
        "solution_count": meta["solution_count"],
        "stones": decoded,
        "elapsed_str": fmt_elapsed(time.time() - t0),
        "layouts": layouts_out,
    })
    return jsonify(LAST_RESULT)


@app.route("/generate", methods=["POST"])
def generate():
    like = _merge_like_mapping()
    lengths, err = parse_lengths(like)
    if err:
        return jsonify({"ok": False, "reason": f"Bad lengths: {err}", "puzzles": []}), 400

    puzzles, reason = generate_puzzles(lengths)
    out = [
        {
            "stones": [s.value for s in p.stones],
            "solution_count": p.solution_count,
            "placements": solution_to_dicts(p.solution),
            "board": ["".join(r) for r in p.board.rows()],
        }
        for p in puzzles
    ]
    status = 400 if reason else 200
    return jsonify({"ok": reason is None, "reason": reason or "", "puzzles": out}), status


@app.route("/result/latest")
def result_latest():
    return jsonify(LAST_RESULT)


@app.route("/progress3")
def progress3():
    return jsonify(progress_json())


if __name__ == "__main__":
    app.run(debug=False)
