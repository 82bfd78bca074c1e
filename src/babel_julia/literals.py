"""Rendering Python values as Julia source literals.

All escaping used by generated code goes through :func:`julia_string` so the
quoting rules live in one place.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping, Sequence
from typing import Any

from babel_julia.errors import InvalidVariableError

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_!]*$")
_RESERVED = frozenset(
    {
        "baremodule",
        "begin",
        "break",
        "catch",
        "const",
        "continue",
        "do",
        "else",
        "elseif",
        "end",
        "export",
        "false",
        "finally",
        "for",
        "function",
        "global",
        "if",
        "import",
        "let",
        "local",
        "macro",
        "module",
        "quote",
        "return",
        "struct",
        "true",
        "try",
        "using",
        "while",
    }
)
_ESCAPES = {"\\": "\\\\", '"': '\\"', "$": "\\$"}


def julia_string(text: str) -> str:
    """Quote ``text`` as a double-quoted Julia string literal.

    Backslashes, double quotes and ``$`` (interpolation) are escaped; newlines
    stay literal, which Julia accepts inside ``"..."``.
    """

    return '"' + "".join(_ESCAPES.get(char, char) for char in text) + '"'


def is_julia_identifier(name: str) -> bool:
    return bool(_IDENTIFIER.match(name)) and name not in _RESERVED


def julia_literal(value: Any) -> str:
    """Render ``value`` as Julia source."""

    if value is None:
        return "nothing"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _float_literal(value)
    if isinstance(value, str):
        return julia_string(value)
    if isinstance(value, Mapping):
        pairs = ", ".join(f"{julia_literal(key)} => {julia_literal(item)}" for key, item in value.items())
        return f"Dict({pairs})"
    if isinstance(value, Sequence):
        if _is_table(value):
            rows = "; ".join(" ".join(julia_literal(cell) for cell in row) for row in value)
            return f"[{rows}]"
        return "[" + ", ".join(julia_literal(item) for item in value) + "]"
    return julia_string(str(value))


def assignment(name: str, value: Any) -> str:
    """Render ``name = literal``; raises InvalidVariableError for unusable names."""

    if not is_julia_identifier(name):
        raise InvalidVariableError(f"not a Julia identifier: {name!r}")
    return f"{name} = {julia_literal(value)}"


def _float_literal(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Inf" if value > 0 else "-Inf"
    return repr(value)


def _is_table(value: Sequence[Any]) -> bool:
    # A non-empty list of equal-length, non-empty scalar rows becomes a matrix.
    if not value or isinstance(value, str):
        return False
    rows = list(value)
    if not all(isinstance(row, (list, tuple)) and row for row in rows):
        return False
    width = len(rows[0])
    if any(len(row) != width for row in rows):
        return False
    return all(not isinstance(cell, (list, tuple, Mapping)) for row in rows for cell in row)
