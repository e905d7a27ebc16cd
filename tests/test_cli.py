from cli import main


def test_solve_prints_solutions_and_totals(capsys):
    assert main(["solve", "RG", "GR", "--no-unify", "-n", "-1"]) == 0
    out = capsys.readouterr().out
    assert out.count("Solution:") == 8
    assert "Board is valid and full." in out
    assert "Found 2 layouts of which 2 are unique layouts." in out
    assert "Found 8 solution(s) in total." in out


def test_solve_quiet_prints_totals_only(capsys):
    assert main(["solve", "GBD", "RGB", "DRG", "RDB", "GB", "DR", "-q", "-n", "-1"]) == 0
    out = capsys.readouterr().out
    assert "Solution:" not in out
    assert "solution(s) in total." in out


def test_solve_non_square_exits_with_input_error(capsys):
    assert main(["solve", "RGB", "GBR", "RGBY"]) == 1
    assert "squared board" in capsys.readouterr().err


def test_solve_alphabet_overflow_exit_codes(capsys):
    assert main(["solve", "é"]) == 5
    assert "too large" in capsys.readouterr().err
    assert main(["solve", "!"]) == 3
    assert "too small" in capsys.readouterr().err


def test_generate_prints_puzzles(capsys):
    assert main(["generate", "3", "3", "3", "--seed", "1", "--show-layout"]) == 0
    out = capsys.readouterr().out
    assert out.count("The board looks like this:") == 2
    assert "At (0,0):" in out


def test_generate_bad_length(capsys):
    assert main(["generate", "3", "x"]) == 1
    assert "bad length" in capsys.readouterr().err
