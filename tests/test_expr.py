import pytest

from octools.expr import (
    Bool,
    Float,
    Int,
    JellError,
    JellRuntimeError,
    JellSyntaxError,
    Keyword,
    Lambda,
    LexicalError,
    List,
    Nil,
    Set,
    Str,
    Symbol,
    Vector,
)


@pytest.mark.parametrize(
    "expr, text",
    [
        (Symbol("abc"), "abc"),
        (Keyword("abc"), ":abc"),
        (Str("hello, world"), "hello, world"),
        (Int(-123), "-123"),
        (Bool(True), "true"),
        (Bool(False), "false"),
        (Nil(), "nil"),
        (Lambda(("x",), (Symbol("x"),), None), "<lambda>"),
        (List([Int(1), Int(2)]), "(1 2)"),
        (Vector([Int(1), Symbol("x")]), "[1 x]"),
        (Set([Symbol("a")]), "#{a}"),
        (List([]), "()"),
        (Set([]), "#{}"),
    ],
)
def test_display(expr, text):
    assert str(expr) == text


@pytest.mark.parametrize(
    "value, text",
    [
        (1.0, "1"),
        (0.5, "0.5"),
        (45.6, "45.6"),
        (-1.0, "-1"),
        (1e-7, "0.0000001"),
        (1e20, "100000000000000000000"),
        (float("inf"), "inf"),
        (float("nan"), "NaN"),
    ],
)
def test_float_display(value, text):
    assert str(Float(value)) == text


def test_nested_display():
    expr = List([Symbol("fn"), Vector([Symbol("x")]), List([Symbol("+"), Symbol("x"), Int(1)])])
    assert str(expr) == "(fn [x] (+ x 1))"


def test_equality_by_variant():
    assert Int(1) == Int(1)
    assert Int(1) != Float(1.0)
    assert Str("a") != Symbol("a")
    assert Keyword("a") != Symbol("a")
    assert Nil() == Nil()


def test_collection_equality():
    assert List([Int(1), Int(2)]) == List((Int(1), Int(2)))
    assert List([Int(1)]) != Vector([Int(1)])
    assert List([Int(1), Int(2), Int(3)]) != List([Int(1), Int(2)])


def test_lambda_never_equal():
    fn = Lambda(("x",), (), None)
    assert not fn == fn
    assert not fn == Lambda(("x",), (), None)


@pytest.mark.parametrize("cls", [JellRuntimeError, LexicalError, JellSyntaxError])
def test_error_hierarchy(cls):
    err = cls("boom")
    assert isinstance(err, JellError)
    assert err.message == "boom"