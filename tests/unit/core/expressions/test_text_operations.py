"""Unit tests for string operations."""

from exprkit.core.expressions import Field, Literal, Operation, UNDEFINED, evaluate
from exprkit.core.expressions.operations.text import STRING_OPERATIONS


def call(name, *args):
    return STRING_OPERATIONS[name](list(args), None)


def test_concat_with_fields(context):
    expr = Operation("concat", [Field("title"), Literal(" - "), Field("globalsMissing")])
    assert evaluate(expr, context) == "Hello World - "


def test_concat_stringifies_values():
    assert call("concat", "Total: ", 8.0, " ", True) == "Total: 8 true"


def test_case_operations():
    assert call("upper", "hello") == "HELLO"
    assert call("lower", "HELLO") == "hello"
    assert call("capitalize", "hello wORLD") == "Hello wORLD"
    assert call("capitalize", "") == ""


def test_trim():
    assert call("trim", "  hello  ") == "hello"


def test_substring():
    assert call("substring", "hello", 1, 4) == "ell"
    assert call("substring", "hello", 1) == "ello"
    assert call("substring", "hello", 4, 1) == "ell"
    assert call("substring", "hello", -3, 100) == "hello"


def test_replace_every_occurrence():
    assert call("replace", "hello world", "world", "there") == "hello there"
    assert call("replace", "a-b-c", "-", "+") == "a+b+c"


def test_split_and_join():
    assert call("split", "a,b,c", ",") == ["a", "b", "c"]
    assert call("split", "abc", "") == ["a", "b", "c"]
    assert call("join", ["a", "b", "c"], ", ") == "a, b, c"
    assert call("join", ["a", "b"]) == "a,b"


def test_contains_starts_ends():
    assert call("contains", "hello world", "world") is True
    assert call("contains", "hello world", "goodbye") is False
    assert call("startsWith", "hello", "hel") is True
    assert call("endsWith", "hello", "lo") is True


def test_length():
    assert call("length", "hello") == 5
    assert call("length", [1, 2, 3]) == 3


def test_missing_values_become_empty_string():
    assert call("upper", None) == ""
    assert call("length", UNDEFINED) == 0
    assert call("concat", None, "a", UNDEFINED) == "a"
