"""Evaluation requests built from source block header arguments."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import Any

DEFAULT_WIDTH = 600
DEFAULT_HEIGHT = 400
GRAPHICS = "graphics"
_INTEGER = re.compile(r"^[+-]?[0-9]+$")
_DECIMAL = re.compile(r"^[+-]?([0-9]+\.[0-9]*|\.[0-9]+|[0-9]+)([eE][+-]?[0-9]+)?$")


class ResultKind(StrEnum):
    """What an evaluation reports back to the document."""

    VALUE = "value"
    OUTPUT = "output"


@dataclass(frozen=True)
class EvaluationRequest:
    """One source block evaluation."""

    body: str
    result_kind: ResultKind = ResultKind.VALUE
    session_key: str | None = None
    prologue: str | None = None
    epilogue: str | None = None
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    result_params: frozenset[str] = frozenset()
    graphics_file: str | None = None
    variables: tuple[tuple[str, Any], ...] = ()
    params: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def wants_graphics(self) -> bool:
        return GRAPHICS in self.result_params


def build_request(body: str, params: Mapping[str, Any] | None = None) -> EvaluationRequest:
    """Build a request from header arguments.

    Recognized keys: ``session``, ``result-type``, ``var``, ``prologue``,
    ``epilogue``, ``width``, ``height``, ``result-params`` and ``file``.
    Unrecognized or malformed values are ignored rather than rejected.
    """

    params = dict(params or {})
    session = params.get("session")
    return EvaluationRequest(
        body=body,
        result_kind=_result_kind(params.get("result-type")),
        session_key=str(session) if session is not None else None,
        prologue=_optional_text(params.get("prologue")),
        epilogue=_optional_text(params.get("epilogue")),
        width=_dimension(params.get("width"), DEFAULT_WIDTH),
        height=_dimension(params.get("height"), DEFAULT_HEIGHT),
        result_params=_result_params(params.get("result-params")),
        graphics_file=_optional_text(params.get("file")),
        variables=tuple(parse_variables(params.get("var"))),
        params=MappingProxyType(params),
    )


def parse_variables(raw: Any) -> list[tuple[str, Any]]:
    """Normalize ``var`` header values into ordered ``(name, value)`` pairs.

    Accepts a mapping, an iterable of pairs, or ``name=value`` strings whose
    values are coerced to numbers where they look like numbers.
    """

    if raw is None:
        return []
    if isinstance(raw, Mapping):
        return [(str(name), value) for name, value in raw.items()]
    if isinstance(raw, str):
        raw = [raw]
    pairs: list[tuple[str, Any]] = []
    for item in raw:
        if isinstance(item, str):
            name, sep, value = item.partition("=")
            if not sep:
                continue
            pairs.append((name.strip(), coerce_scalar(value.strip())))
        elif isinstance(item, Iterable):
            pair = tuple(item)
            if len(pair) != 2:
                continue
            pairs.append((str(pair[0]), pair[1]))
    return pairs


def coerce_scalar(text: str) -> Any:
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "\"'":
        return text[1:-1]
    if _INTEGER.match(text):
        return int(text)
    if _DECIMAL.match(text):
        return float(text)
    return text


def _result_kind(raw: Any) -> ResultKind:
    try:
        return ResultKind(str(raw).strip().lower())
    except ValueError:
        return ResultKind.VALUE


def _optional_text(raw: Any) -> str | None:
    if raw is None:
        return None
    text = str(raw)
    return text if text.strip() else None


def _dimension(raw: Any, default: int) -> int:
    if raw is None:
        return default
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return default
    return value if value > 0 else default


def _result_params(raw: Any) -> frozenset[str]:
    if raw is None:
        return frozenset()
    if isinstance(raw, str):
        return frozenset(raw.split())
    return frozenset(str(item) for item in raw)
