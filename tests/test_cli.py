from __future__ import annotations

from ll1lab.cli import main

SCENARIO = "S -> A a | A b\nA -> c | d\n"


def _write(tmp_path, text, name="grammar.txt"):
	path = tmp_path / name
	path.write_text(text, encoding="utf-8")
	return path


def test_writes_report(tmp_path, capsys):
	src = _write(tmp_path, SCENARIO)
	out = tmp_path / "output.txt"
	assert main([str(src), "-o", str(out)]) == 0
	report = out.read_text(encoding="utf-8")
	assert report.startswith("Grammar after Left Factoring:\nS -> A S'\n")
	assert "LL(1) Parsing Table:" in report
	assert "Processing complete" in capsys.readouterr().out


def test_stdout_and_parse(tmp_path, capsys):
	src = _write(tmp_path, SCENARIO)
	assert main([str(src), "-o", "-", "--parse", "c b"]) == 0
	printed = capsys.readouterr().out
	assert "FOLLOW(A) = { a, b }" in printed
	assert "accepted: True" in printed


def test_rejected_sentence_exit_code(tmp_path, capsys):
	src = _write(tmp_path, SCENARIO)
	assert main([str(src), "-o", "-", "--parse", "c c"]) == 2
	assert "error:" in capsys.readouterr().out


def test_missing_file(tmp_path, capsys):
	assert main([str(tmp_path / "nope.txt")]) == 1
	assert "Unable to open grammar file" in capsys.readouterr().err


def test_invalid_grammar(tmp_path, capsys):
	src = _write(tmp_path, "S a b\n")
	assert main([str(src), "-o", "-"]) == 1
	assert "Invalid grammar" in capsys.readouterr().err


def test_strict_conflict(tmp_path, capsys):
	src = _write(tmp_path, "S -> A | B\nA -> a\nB -> a\n")
	assert main([str(src), "-o", "-", "--strict"]) == 1
	assert "M[S, a]" in capsys.readouterr().err


def test_export_and_trace(tmp_path, capsys):
	src = _write(tmp_path, "E -> E + T | T\nT -> id\n")
	export_dir = tmp_path / "csv"
	assert main([str(src), "-o", str(tmp_path / "out.txt"), "--export-dir", str(export_dir), "--trace"]) == 0
	assert (export_dir / "LL1_ParseTable.csv").exists()
	printed = capsys.readouterr().out
	assert "FIRST pass 1:" in printed
	assert "FOLLOW pass 1:" in printed


def test_bad_environment_setting(tmp_path, capsys, monkeypatch):
	src = _write(tmp_path, SCENARIO)
	monkeypatch.setenv("LL1LAB_COLUMN_WIDTH", "wide")
	assert main([str(src), "-o", "-"]) == 1
	assert "Invalid LL1LAB_* setting" in capsys.readouterr().err


def test_parse_warns_about_conflicted_cell(tmp_path, capsys):
	src = _write(tmp_path, "S -> A | B\nA -> a\nB -> a\n")
	assert main([str(src), "-o", "-", "--parse", "a"]) == 0
	out = capsys.readouterr().out
	assert "accepted: True" in out
	assert "warning: M[S, a] had more than one candidate" in out
