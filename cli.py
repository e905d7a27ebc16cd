"""
Command line front end.

    stone-square solve GRB BGR RBG
    stone-square generate 3 3 3
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from models import AlphabetOverflowError
from progress import reset, start_timer, set_done
from render import render_board, render_layout, render_solution
from solver.board import Board
from solver.orchestrator import solve_stones
from solver.puzzle_generator import generate_puzzles
from stones import parse_lengths, parse_stones

EXIT_INPUT_ERROR = 1

USAGE_EPILOG = """
A STONE is a string where each character represents a certain color, e.g. GRB
for green red blue.  Pass e.g. GRB BGR RBG for a 3x3 board.
"""


def _cmd_solve(args: argparse.Namespace) -> int:
    stones, _decoded, err = parse_stones(args.stones)
    if err:
        print(f"Error: {err}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    def _print_solution(layout, solution):
        if args.quiet:
            return
        print(render_solution(solution))
        print(render_board(Board.from_solution(layout.board_size, solution)))

    reset()
    start_timer()
    try:
        ok, _results, reason, meta = solve_stones(
            stones,
            workers=args.workers,
            max_solutions=args.max_solutions,
            unify_layouts=not args.no_unify,
            on_solution=_print_solution,
        )
    except AlphabetOverflowError as e:
        set_done(False, reason=str(e))
        print(str(e), file=sys.stderr)
        return e.exit_code

    if not ok:
        set_done(False, reason=reason)
        print(reason, file=sys.stderr)
        return EXIT_INPUT_ERROR

    print(f"Found {meta['layouts_found']} layouts of which {meta['unique_layouts']} are unique layouts.")
    print(f"Found {meta['solution_count']} solution(s) in total.")
    set_done(True)
    return 0


def _cmd_generate(args: argparse.Namespace) -> int:
    lengths, err = parse_lengths(args.lengths)
    if err:
        print(f"Error: {err}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    try:
        puzzles, reason = generate_puzzles(lengths, seed=args.seed)
    except AlphabetOverflowError as e:
        print(str(e), file=sys.stderr)
        return e.exit_code

    for puzzle in puzzles:
        print(f"Found {puzzle.solution_count} solutions, among them this one:")
        if args.show_layout:
            print(render_layout(puzzle.layout))
        print(render_solution(puzzle.solution))
        print("The board looks like this:")
        print(render_board(puzzle.board))
    if reason:
        print(reason, file=sys.stderr)
        return EXIT_INPUT_ERROR
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stone-square",
        description="Tile a square board with colored stones so no row or column repeats a color",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=USAGE_EPILOG,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    solve = sub.add_parser("solve", help="Find all colorings for the given stones")
    solve.add_argument("stones", nargs="+", help="Stones, e.g. GRB BGR RBG")
    solve.add_argument("--workers", "-w", type=int, default=None,
                       help="Process pool size for the coloring phase (default: SQ_WORKERS)")
    solve.add_argument("--max-solutions", "-n", type=int, default=None,
                       help="Stop after this many solutions (default: SQ_MAX_SOLUTIONS)")
    solve.add_argument("--no-unify", action="store_true",
                       help="Search every layout, not one per rotation/reflection class")
    solve.add_argument("--quiet", "-q", action="store_true", help="Only print the totals")
    solve.set_defaults(func=_cmd_solve)

    gen = sub.add_parser("generate", help="Generate puzzles for the given stone lengths")
    gen.add_argument("lengths", nargs="+", help="Stone lengths, e.g. 3 3 3")
    gen.add_argument("--seed", type=int, default=None, help="Shuffle seed (default: SQ_PUZZLE_SEED)")
    gen.add_argument("--show-layout", action="store_true", help="Print the layout of each puzzle")
    gen.set_defaults(func=_cmd_generate)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
