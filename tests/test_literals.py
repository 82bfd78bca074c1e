import pytest

from babel_julia.errors import InvalidVariableError
from babel_julia.literals import assignment, is_julia_identifier, julia_literal, julia_string


def test_julia_string_escapes_quotes_backslashes_and_interpolation() -> None:
    assert julia_string('say "hi"') == '"say \\"hi\\""'
    assert julia_string("C:\\tmp") == '"C:\\\\tmp"'
    assert julia_string("cost $x") == '"cost \\$x"'


def test_julia_string_keeps_newlines_literal() -> None:
    assert julia_string("a\nb") == '"a\nb"'


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, "nothing"),
        (True, "true"),
        (False, "false"),
        (42, "42"),
        (2.5, "2.5"),
        (float("inf"), "Inf"),
        (float("-inf"), "-Inf"),
        (float("nan"), "NaN"),
        ("text", '"text"'),
        ([1, "a"], '[1, "a"]'),
        ([], "[]"),
        ([[1, 2], [3, 4]], "[1 2; 3 4]"),
        ([[1, 2], [3]], "[[1, 2], [3]]"),
        ({"a": 1}, 'Dict("a" => 1)'),
    ],
)
def test_julia_literal(value: object, expected: str) -> None:
    assert julia_literal(value) == expected


def test_identifier_rules() -> None:
    assert is_julia_identifier("x")
    assert is_julia_identifier("_tmp2")
    assert is_julia_identifier("push!")
    assert not is_julia_identifier("2x")
    assert not is_julia_identifier("end")
    assert not is_julia_identifier("a-b")


def test_assignment_rejects_invalid_names() -> None:
    assert assignment("x", 1) == "x = 1"
    with pytest.raises(InvalidVariableError):
        assignment("let", 1)
