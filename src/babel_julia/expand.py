"""Assemble the final snippet evaluated for one source block."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from babel_julia.literals import assignment, julia_string
from babel_julia.request import EvaluationRequest


def variable_assignments(variables: Iterable[tuple[str, Any]]) -> list[str]:
    return [assignment(name, value) for name, value in variables]


def graphics_lines(graphics_file: str, width: int, height: int) -> list[str]:
    """Resize the current plot and save it to ``graphics_file``."""

    return [
        f"plot!(size = ({width}, {height}))",
        f"savefig({julia_string(graphics_file)})",
    ]


def expand_body(
    body: str,
    request: EvaluationRequest,
    var_lines: list[str] | None = None,
    graphics_file: str | None = None,
) -> str:
    """Join prologue, variable assignments, body, plot directives and epilogue.

    Absent segments are skipped entirely. ``graphics_file`` overrides the
    request's own target; plot directives are only appended when the request
    asks for graphics and some target is known.
    """

    if var_lines is None:
        var_lines = variable_assignments(request.variables)
    lines: list[str] = []
    if request.prologue:
        lines.append(request.prologue)
    lines.extend(var_lines)
    lines.append(body)
    target = graphics_file or request.graphics_file
    if request.wants_graphics and target:
        lines.extend(graphics_lines(target, request.width, request.height))
    if request.epilogue:
        lines.append(request.epilogue)
    return "\n".join(lines)
