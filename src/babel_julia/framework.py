"""Plugin-aware entry point tying settings, sinks and the transport together."""

from __future__ import annotations

from typing import Any

import pluggy
from loguru import logger

from babel_julia.config import Settings, get_settings
from babel_julia.hook_runtime import HookRuntime
from babel_julia.hookspecs import HOOK_NAMESPACE, BabelJuliaHookSpecs
from babel_julia.request import EvaluationRequest
from babel_julia.session import JuliaProcessPool, SessionSink
from babel_julia.transport import Transport

ENTRY_POINT_GROUP = "babel_julia"


class BabelFramework:
    """Evaluate requests through plugin-provided (or default) session sinks."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()
        self._plugin_manager = pluggy.PluginManager(HOOK_NAMESPACE)
        self._plugin_manager.add_hookspecs(BabelJuliaHookSpecs)
        self._hook_runtime = HookRuntime(self._plugin_manager)
        self._sink: SessionSink | None = None
        self._transport: Transport | None = None

    def load_plugins(self) -> int:
        """Register plugins advertised under the ``babel_julia`` entry point group."""

        try:
            count = self._plugin_manager.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        except Exception:  # pragma: no cover - depends on installed distributions
            logger.opt(exception=True).warning("plugin.load_failed group={}", ENTRY_POINT_GROUP)
            return 0
        logger.debug("plugin.loaded group={} count={}", ENTRY_POINT_GROUP, count)
        return count

    def register(self, plugin: Any, name: str | None = None) -> None:
        self._plugin_manager.register(plugin, name=name)

    @property
    def sink(self) -> SessionSink:
        if self._sink is None:
            provided = self._hook_runtime.call_first("provide_session_sink", settings=self.settings)
            if self._is_sink_like(provided):
                self._sink = provided
            else:
                self._sink = JuliaProcessPool(self.settings.julia_command, self.settings.julia_args)
        return self._sink

    @property
    def transport(self) -> Transport:
        if self._transport is None:
            self._transport = Transport(self.sink, self.settings, on_result=self._notify_result)
        return self._transport

    def evaluate(self, request: EvaluationRequest) -> str:
        try:
            return self.transport.evaluate(request)
        except Exception as exc:
            self._hook_runtime.notify_error(stage="evaluate", error=exc)
            raise

    def prep_session(self, session_key: str | None, variables: list[tuple[str, object]]) -> str:
        try:
            return self.transport.prep_session(session_key, variables).name
        except Exception as exc:
            self._hook_runtime.notify_error(stage="prep_session", error=exc)
            raise

    def load_session(self, request: EvaluationRequest) -> str:
        try:
            return self.transport.load_session(request).name
        except Exception as exc:
            self._hook_runtime.notify_error(stage="load_session", error=exc)
            raise

    def hook_report(self) -> dict[str, list[str]]:
        return self._hook_runtime.hook_report()

    def close(self) -> None:
        close = getattr(self._sink, "close", None)
        if callable(close):
            close()

    def _notify_result(self, request: EvaluationRequest, result: str) -> None:
        self._hook_runtime.call_many("on_result", request=request, result=result)

    @staticmethod
    def _is_sink_like(candidate: Any) -> bool:
        return candidate is not None and callable(getattr(candidate, "send", None))
