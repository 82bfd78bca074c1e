from babel_julia.expand import expand_body, graphics_lines, variable_assignments
from babel_julia.request import build_request


def test_body_only_has_no_stray_lines() -> None:
    request = build_request("x + 1")

    assert expand_body(request.body, request) == "x + 1"


def test_segments_in_order() -> None:
    request = build_request(
        "x + y",
        {"prologue": "using Statistics", "epilogue": "GC.gc()", "var": {"x": 1, "y": "a"}},
    )

    assert expand_body(request.body, request).split("\n") == [
        "using Statistics",
        "x = 1",
        'y = "a"',
        "x + y",
        "GC.gc()",
    ]


def test_precomputed_var_lines_are_used_verbatim() -> None:
    request = build_request("z", {"var": {"ignored": 1}})

    assert expand_body(request.body, request, ["z = 9"]) == "z = 9\nz"


def test_graphics_appends_resize_and_save() -> None:
    request = build_request("plot(rand(3))", {"result-params": ["graphics"], "width": 320, "height": 200})

    expanded = expand_body(request.body, request, graphics_file="/tmp/fig.png")

    assert expanded == 'plot(rand(3))\nplot!(size = (320, 200))\nsavefig("/tmp/fig.png")'


def test_graphics_without_target_is_skipped() -> None:
    request = build_request("plot(rand(3))", {"result-params": ["graphics"]})

    assert expand_body(request.body, request) == "plot(rand(3))"


def test_graphics_uses_request_file_and_defaults() -> None:
    request = build_request("p", {"result-params": "graphics", "file": "fig.svg", "epilogue": "done"})

    assert expand_body(request.body, request).split("\n")[-3:] == [
        "plot!(size = (600, 400))",
        'savefig("fig.svg")',
        "done",
    ]


def test_helpers() -> None:
    assert variable_assignments([("a", True), ("b", None)]) == ["a = true", "b = nothing"]
    assert graphics_lines("a.png", 1, 2) == ["plot!(size = (1, 2))", 'savefig("a.png")']
