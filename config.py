import os

# ======= Validity predicate / symbol alphabet =======
# The duplicate detector keeps one presence slot per symbol in
# [ALPHABET_MIN, ALPHABET_MIN + ALPHABET_SIZE).  Symbols outside that window
# raise AlphabetOverflowError.
ALPHABET_MIN  = os.getenv("SQ_ALPHABET_MIN", "0")[:1] or "0"
ALPHABET_SIZE = int(os.getenv("SQ_ALPHABET_SIZE", "80"))

# ======= Worker / search caps =======
WORKERS        = int(os.getenv("SQ_WORKERS", "1"))
MAX_SOLUTIONS  = int(os.getenv("SQ_MAX_SOLUTIONS", "-1"))   # negative = unlimited
WORKER_TIMEOUT = float(os.getenv("SQ_WORKER_TIMEOUT", "600"))

# ======= Layout reduction =======
UNIFY_LAYOUTS = int(os.getenv("SQ_UNIFY_LAYOUTS", "1")) != 0

# ======= Puzzle generator knobs =======
PUZZLE_PALETTE  = os.getenv("SQ_PUZZLE_PALETTE", "BDGYRVOMPSTWCFIKL")
PUZZLE_SHUFFLES = int(os.getenv("SQ_PUZZLE_SHUFFLES", "10"))
PUZZLE_SEED     = int(os.getenv("SQ_PUZZLE_SEED", "0"))

# ======= Output names =======
LOG_FILE = os.getenv("SQ_LOG_FILE", os.path.join("logs", "solver_runs.log"))

class CFG:
    ALPHABET_MIN  = ALPHABET_MIN
    ALPHABET_SIZE = ALPHABET_SIZE

    WORKERS        = WORKERS
    MAX_SOLUTIONS  = MAX_SOLUTIONS
    WORKER_TIMEOUT = WORKER_TIMEOUT

    UNIFY_LAYOUTS = UNIFY_LAYOUTS

    PUZZLE_PALETTE  = PUZZLE_PALETTE
    PUZZLE_SHUFFLES = PUZZLE_SHUFFLES
    PUZZLE_SEED     = PUZZLE_SEED

    LOG_FILE = LOG_FILE

__all__ = ["CFG"]
