import pytest

from babel_julia.request import ResultKind
from babel_julia.wrap import RESULT_VAR, TEMPLATES, build_trampoline, debug_trace, template_for, wrap_body


def test_value_ephemeral_uses_let_block() -> None:
    assert wrap_body("1+1", ResultKind.VALUE, persistent=False) == "_babel_julia_result = let\n1+1\nend"


def test_value_persistent_uses_begin_block() -> None:
    assert wrap_body("x = 2", ResultKind.VALUE, persistent=True) == "_babel_julia_result = begin\nx = 2\nend"


def test_output_ephemeral_captures_directly() -> None:
    wrapped = wrap_body('println("hi")', ResultKind.OUTPUT, persistent=False)

    assert wrapped == '_babel_julia_result = @capture_out begin\nprintln("hi")\nend'


def test_output_persistent_parses_capture_form_from_string() -> None:
    wrapped = wrap_body('println("hi")', ResultKind.OUTPUT, persistent=True)

    assert wrapped == (
        '_babel_julia_result = begin eval(Meta.parse("@capture_out begin\nprintln(\\"hi\\")\nend")) end'
    )


def test_output_persistent_escapes_interpolation() -> None:
    wrapped = wrap_body('println("$x")', ResultKind.OUTPUT, persistent=True)

    assert '\\"\\$x\\"' in wrapped


@pytest.mark.parametrize("kind", list(ResultKind))
def test_persistent_and_ephemeral_differ(kind: ResultKind) -> None:
    assert wrap_body("b", kind, True) != wrap_body("b", kind, False)


def test_every_template_assigns_result_var() -> None:
    assert len(TEMPLATES) == 4
    for template in TEMPLATES.values():
        assert template.render("b").startswith(f"{RESULT_VAR} = ")
    assert template_for(ResultKind.OUTPUT, True).inner is not None


def test_trampoline_for_value() -> None:
    line = build_trampoline("/tmp/src.jl", "/tmp/out", ResultKind.VALUE)

    assert line == 'include("/tmp/src.jl"); open("/tmp/out", "w") do io; print(io, _babel_julia_result); end'
    assert "\n" not in line


def test_trampoline_for_output_loads_capture_package() -> None:
    line = build_trampoline("/tmp/src.jl", "/tmp/out", ResultKind.OUTPUT)

    assert line.startswith("using Suppressor; include(")


def test_debug_trace_is_commented() -> None:
    trace = debug_trace({"session": "main"}, "_babel_julia_result = begin\n1\nend")

    lines = trace.split("\n")
    assert all(line.startswith("#") for line in lines)
    assert "#   session = 'main'" in lines
    assert "#   _babel_julia_result = begin" in lines
