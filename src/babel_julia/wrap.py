"""Julia wrappers that route a snippet's result into a side file.

The wrapped source is written to a file and only a short trampoline line is
sent to the session, so arbitrarily complex bodies never have to survive the
session's line input.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from babel_julia.literals import julia_string
from babel_julia.request import ResultKind

RESULT_VAR = "_babel_julia_result"
CAPTURE_PACKAGE = "Suppressor"


@dataclass(frozen=True)
class WrapTemplate:
    """Preamble and postamble around a body slot.

    With ``inner`` set, the body is first rendered through ``inner`` and the
    result is placed in the slot as a quoted string literal.
    """

    preamble: str
    postamble: str
    inner: WrapTemplate | None = None

    def render(self, body: str) -> str:
        if self.inner is not None:
            body = julia_string(self.inner.render(body))
        return f"{self.preamble}{body}{self.postamble}"


CAPTURE_BLOCK = WrapTemplate("@capture_out begin\n", "\nend")

# @capture_out has to see source text in a persistent session, so the capture
# form is parsed and evaluated from a string there.
TEMPLATES: dict[tuple[ResultKind, bool], WrapTemplate] = {
    (ResultKind.OUTPUT, True): WrapTemplate(f"{RESULT_VAR} = begin eval(Meta.parse(", ")) end", inner=CAPTURE_BLOCK),
    (ResultKind.OUTPUT, False): WrapTemplate(f"{RESULT_VAR} = @capture_out begin\n", "\nend"),
    (ResultKind.VALUE, True): WrapTemplate(f"{RESULT_VAR} = begin\n", "\nend"),
    (ResultKind.VALUE, False): WrapTemplate(f"{RESULT_VAR} = let\n", "\nend"),
}


def template_for(result_kind: ResultKind, persistent: bool) -> WrapTemplate:
    return TEMPLATES[(ResultKind(result_kind), persistent)]


def wrap_body(body: str, result_kind: ResultKind, persistent: bool) -> str:
    return template_for(result_kind, persistent).render(body)


def build_trampoline(source_file: str, output_file: str, result_kind: ResultKind) -> str:
    """One line that includes ``source_file`` and prints the result into ``output_file``."""

    parts: list[str] = []
    if ResultKind(result_kind) is ResultKind.OUTPUT:
        parts.append(f"using {CAPTURE_PACKAGE}")
    parts.append(f"include({julia_string(source_file)})")
    parts.append(f"open({julia_string(output_file)}, \"w\") do io; print(io, {RESULT_VAR}); end")
    return "; ".join(parts)


def debug_trace(params: Mapping[str, Any], wrapped: str) -> str:
    """Commented block shown in the session transcript before the trampoline."""

    lines = ["# babel-julia debug", "# params:"]
    lines.extend(f"#   {key} = {value!r}" for key, value in params.items())
    lines.append("# source:")
    lines.extend(f"#   {line}" for line in wrapped.splitlines())
    return "\n".join(lines)
