"""Pluggy hook namespace and hook specifications."""

from __future__ import annotations

from typing import Any

import pluggy

from babel_julia.config import Settings
from babel_julia.request import EvaluationRequest

HOOK_NAMESPACE = "babel_julia"
hookspec = pluggy.HookspecMarker(HOOK_NAMESPACE)
hookimpl = pluggy.HookimplMarker(HOOK_NAMESPACE)


class BabelJuliaHookSpecs:
    """Hook contract for babel-julia extensions."""

    @hookspec(firstresult=True)
    def provide_session_sink(self, settings: Settings) -> Any:
        """Provide the sink that carries text into Julia sessions."""

    @hookspec
    def on_result(self, request: EvaluationRequest, result: str) -> None:
        """Observe the result of one finished evaluation."""

    @hookspec
    def on_error(self, stage: str, error: Exception) -> None:
        """Observe failures from any stage."""
