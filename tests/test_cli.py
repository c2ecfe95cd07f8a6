import io
import sys

import pytest

from regex2nfa.cli import TABLE_HEADER, main, render_expression, run_interactive
from regex2nfa.config import Settings


@pytest.fixture(autouse=True)
def _no_local_config(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)


def test_compile_arguments(capsys):
    assert main(["ab"]) == 0
    out = capsys.readouterr().out
    assert TABLE_HEADER in out
    assert "State: q0 (Start)\n  Transition: a -> q1\n" in out
    assert "State: q2 (Accepting)" in out


def test_invalid_expression_reports_and_continues(capsys):
    assert main(["a1", "b"]) == 1
    captured = capsys.readouterr()
    assert "Error: Input contains invalid character '1' (pos 1)" in captured.err
    assert "Transition: b -> q1" in captured.out


def test_table_flag(capsys):
    assert main(["--table", "ab"]) == 0
    assert "State | Markers   | Symbol | Dest" in capsys.readouterr().out


def test_reduce_flag(capsys):
    assert main(["--reduce", "a*", "a|b"]) == 0
    out = capsys.readouterr().out
    assert "State q1 has a self-referential transition." in out
    assert "Contains epsilon transitions; self-loop check skipped." in out


def test_config_error(tmp_path, capsys):
    assert main(["--config", str(tmp_path / "missing.toml"), "a"]) == 2
    assert "CONFIG ERROR" in capsys.readouterr().err


def test_config_file_is_used(tmp_path, capsys):
    path = tmp_path / "cfg.toml"
    path.write_text('[regex2nfa]\nlabel_prefix = "s"\nepsilon_symbol = "E"\n', encoding="utf-8")
    assert main(["--config", str(path), "a|b"]) == 0
    assert "Transition: E -> s1" in capsys.readouterr().out


def test_interactive_loop_stops_on_empty_line(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("ab\nA\n\nnever\n"))
    assert main([]) == 1
    captured = capsys.readouterr()
    assert captured.out.startswith("Enter a regular expression: ")
    assert captured.out.count(TABLE_HEADER) == 1
    assert "Enter another regular expression (or press Enter to exit): " in captured.out
    assert "Error: Input contains invalid character 'A' (pos 0)" in captured.err


def test_interactive_loop_stops_at_end_of_input(capsys):
    assert run_interactive(Settings(), io.StringIO("a*\n")) == 0
    assert capsys.readouterr().out.count(TABLE_HEADER) == 1


def test_render_expression_propagates_parse_errors():
    with pytest.raises(ValueError):
        render_expression("(a", Settings())
