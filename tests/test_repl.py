import io

import pytest

from octools.environment import Environment
from octools.evaluator import Evaluator
from octools.expr import Int, JellRuntimeError, JellSyntaxError, Nil
from octools.repl import exec_file, main, repl, run


def _run_repl(text):
    stdin = io.StringIO(text)
    stdout = io.StringIO()
    stderr = io.StringIO()
    repl(stdin, stdout, stderr)
    return stdout.getvalue(), stderr.getvalue()


def test_run_evaluates_expression():
    assert run("(+ 0 32 48)", Evaluator(), Environment()) == Int(80)


def test_run_keeps_definitions_in_evaluator():
    evaluator = Evaluator()
    env = Environment()
    assert run("(def x 1)", evaluator, env) == Nil()
    assert run("x", evaluator, env) == Int(1)


def test_run_raises_runtime_error_for_unknown_symbol():
    with pytest.raises(JellRuntimeError):
        run("undefined-name", Evaluator(), Environment())


def test_exec_file_writes_printed_output(tmp_path):
    source = tmp_path / "prog.jell"
    source.write_text('(print "hello")', encoding="utf-8")
    out = io.StringIO()
    assert exec_file(source, out) == Nil()
    assert out.getvalue() == "hello\n"


def test_exec_file_runs_all_expressions_in_order(tmp_path):
    source = tmp_path / "prog.jell"
    source.write_text('(def x "hello")\n(print x)\n(print x)', encoding="utf-8")
    out = io.StringIO()
    exec_file(source, out)
    assert out.getvalue() == "hellohello\n"


def test_exec_file_propagates_errors(tmp_path):
    source = tmp_path / "prog.jell"
    source.write_text("(if 1 2 3)", encoding="utf-8")
    with pytest.raises(JellRuntimeError):
        exec_file(source, io.StringIO())


def test_repl_prints_result():
    out, err = _run_repl("(+ 0 32 48)\n")
    assert out.startswith("user=> ")
    assert "80\n\n" in out
    assert err == ""


def test_repl_continues_unfinished_expression_with_indent():
    out, _ = _run_repl("(+ 0\n32 48)\n")
    assert "user=>   " in out
    assert "80\n" in out


def test_repl_reports_errors_on_stderr():
    out, err = _run_repl("missing\n")
    assert err.startswith("error:")
    assert "missing" in err
    assert out.count("user=> ") == 2


def test_repl_keeps_global_definitions_between_lines():
    out, err = _run_repl("(def x 48)\nx\n")
    assert err == ""
    assert "nil\n" in out
    assert "48\n" in out


def test_repl_rejects_unbalanced_closer():
    with pytest.raises(JellSyntaxError):
        _run_repl(")\n")


def test_main_runs_file(tmp_path, capsys):
    source = tmp_path / "prog.jell"
    source.write_text('(print "hello")', encoding="utf-8")
    assert main([str(source)]) == 0
    assert capsys.readouterr().out == "hello\n"


def test_main_reports_failure(tmp_path, capsys):
    source = tmp_path / "prog.jell"
    source.write_text("(not 1)", encoding="utf-8")
    assert main([str(source)]) == 1
    assert capsys.readouterr().err.startswith("error:")